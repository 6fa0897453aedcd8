"""Line tokenizer for .env style text.

Each non-blank line that does not start with ``#`` must hold exactly one
separator. ``=`` is tried first; ``:`` is only used when the line contains
no ``=`` at all::

    key1 = value1      -> ("key1", "value1")
    key2: value2       -> ("key2", "value2")
    url=http://host    -> ("url", "http://host")
    a=b=c              -> WrongFormatError
"""

from typing import Iterator, NamedTuple, Optional, Tuple

from envcontent.exceptions import WrongFormatError

COMMENT_PREFIX = "#"


class Entry(NamedTuple):
    """One key/value pair and the 1-based line it came from."""

    lineno: int
    key: str
    value: str


def split_line(line: str) -> Optional[Tuple[str, str]]:
    """Split a single line into a trimmed ``(key, value)`` pair.

    Returns None for blank lines and comments.

    Raises:
        WrongFormatError: If the line has no separator, or the chosen
            separator occurs more than once
    """
    line = line.strip()
    if not line or line.startswith(COMMENT_PREFIX):
        return None

    parts = line.split("=")
    if len(parts) == 1:
        parts = line.split(":")

    if len(parts) != 2:
        raise WrongFormatError(details={"separators": len(parts) - 1})

    key, value = parts
    return key.strip(), value.strip()


def iter_entries(text: str) -> Iterator[Entry]:
    """Yield an Entry for every declaration in ``text``, in order.

    Entries are produced lazily, so a caller that stores them as they come
    keeps everything before a malformed line.

    Raises:
        WrongFormatError: On the first malformed line; details hold ``line``
    """
    for lineno, raw in enumerate(text.split("\n"), start=1):
        try:
            pair = split_line(raw)
        except WrongFormatError as e:
            e.details["line"] = lineno
            raise
        if pair is not None:
            yield Entry(lineno, *pair)
