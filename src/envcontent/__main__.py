import sys

from envcontent.cli import main

sys.exit(main())
