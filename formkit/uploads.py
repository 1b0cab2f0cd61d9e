"""File upload widget: accepted types, size and count limits."""

from __future__ import annotations

import mimetypes
import os
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*([A-Za-z]*)\s*$")
_UNITS = {
    "": 1,
    "B": 1,
    "K": 1024,
    "KB": 1024,
    "M": 1024**2,
    "MB": 1024**2,
    "G": 1024**3,
    "GB": 1024**3,
    "T": 1024**4,
    "TB": 1024**4,
}


def parse_size(text: str) -> int:
    """Turn a size such as "2MB", "1.5GB" or "2097152" into a number of bytes.

    Units are binary (1KB is 1024 bytes) and case-insensitive. Raises
    ValueError for anything that is not a size.
    """
    match = _SIZE_PATTERN.match(text)
    if match is None:
        raise ValueError(f"{text!r} is not a size")
    number, unit = match.groups()
    try:
        factor = _UNITS[unit.upper()]
    except KeyError:
        raise ValueError(f"unknown size unit {unit!r} in {text!r}") from None
    return int(float(number) * factor)


@dataclass
class FileWidget:
    """An upload field limited by file type, size and number of files."""

    accept: str = ""  # extensions and MIME types, comma separated; "" or "*" accepts all
    max_size: str = ""  # "" means no size limit
    max_count: int = 1
    preview: bool = False
    drag_drop: bool = False
    upload_text: str = ""

    def __post_init__(self) -> None:
        if self.max_count < 1:
            raise ValueError("max_count must be at least 1")
        if self.max_size:
            parse_size(self.max_size)

    @property
    def multiple(self) -> bool:
        return self.max_count > 1

    def _patterns(self) -> list[str]:
        return [part.strip().lower() for part in self.accept.split(",") if part.strip()]

    def max_bytes(self) -> int | None:
        """Return the size limit of one file in bytes, or None when unlimited."""
        if not self.max_size:
            return None
        return parse_size(self.max_size)

    def accepts(self, filename: str, mime_type: str | None = None) -> bool:
        """True if a file of this name and type may be uploaded.

        Without mime_type the type is guessed from the file name.
        """
        patterns = self._patterns()
        if not patterns or "*" in patterns:
            return True
        extension = os.path.splitext(filename)[1].lower()
        kind = (mime_type or mimetypes.guess_type(filename)[0] or "").lower()
        for pattern in patterns:
            if pattern.startswith("."):
                if extension == pattern:
                    return True
            elif pattern.endswith("/*"):
                if kind.startswith(pattern[:-1]):
                    return True
            elif kind and kind == pattern:
                return True
        return False

    def validate(self, files: Iterable[Sequence]) -> list[tuple]:
        """Check uploads given as (filename, size) or (filename, size, mime_type).

        Returns the files as tuples; raises ValueError if there are too many,
        one is of a type not accepted, or one is larger than max_size.
        """
        checked = [tuple(item) for item in files]
        if len(checked) > self.max_count:
            raise ValueError(f"{len(checked)} files given, at most {self.max_count} allowed")
        limit = self.max_bytes()
        for item in checked:
            if len(item) not in (2, 3):
                raise ValueError(f"{item!r} is not (filename, size[, mime_type])")
            filename, size = item[0], item[1]
            mime_type = item[2] if len(item) == 3 else None
            if size < 0:
                raise ValueError(f"{filename!r} has a negative size")
            if not self.accepts(filename, mime_type):
                raise ValueError(f"{filename!r} is not an accepted file type: {self.accept}")
            if limit is not None and size > limit:
                raise ValueError(f"{filename!r} is larger than {self.max_size}")
        return checked