"""
Byte size values such as "64MB" or "1.5GB"
"""

import re
from typing import Optional

KB = 1024
MB = 1024 * KB
GB = 1024 * MB
TB = 1024 * GB

_UNITS = {
    "": 1,
    "B": 1,
    "K": KB, "KB": KB, "KIB": KB,
    "M": MB, "MB": MB, "MIB": MB,
    "G": GB, "GB": GB, "GIB": GB,
    "T": TB, "TB": TB, "TIB": TB,
}

_SIZE_RE = re.compile(r'^\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*$')


def try_parse_size(text) -> Optional[int]:
    """ Parse a size with an optional unit suffix into a byte count.

    Integers are taken as byte counts. Returns None when the text cannot be
    parsed.
    """
    if isinstance(text, bool) or text is None:
        return None
    if isinstance(text, int):
        return text if text >= 0 else None

    match = _SIZE_RE.match(str(text))
    if not match:
        return None

    multiplier = _UNITS.get(match.group(2).upper())
    if multiplier is None:
        return None
    return int(float(match.group(1)) * multiplier)


def format_size(count: int) -> str:
    """ Render a byte count with the largest unit that divides it evenly """
    for suffix, multiplier in (("TB", TB), ("GB", GB), ("MB", MB), ("KB", KB)):
        if count and count % multiplier == 0:
            return f"{count // multiplier}{suffix}"
    return str(count)
