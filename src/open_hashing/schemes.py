"""Scheme selectors and their single-character codes."""

from enum import Enum
from typing import Union

from open_hashing.errors import InvalidArgumentError


class CollisionScheme(str, Enum):
    """Probe sequence families, keyed by their single-character code."""

    DOUBLE = "D"  # raw + i * secondary(raw)
    QUADRATIC = "Q"  # raw + c1 * i + c2 * i**2


class EmptyMarkerScheme(str, Enum):
    """How a removed entry is marked so probe sequences stay intact."""

    AVAILABLE = "A"  # slot becomes a tombstone
    NEGATIVE = "N"  # key is rewritten with a leading "-"
    REPLACE = "R"  # slot is cleared and later entries are pulled back


def parse_collision_scheme(code: Union[str, CollisionScheme]) -> CollisionScheme:
    return _parse(CollisionScheme, code, "collision scheme")


def parse_empty_marker_scheme(code: Union[str, EmptyMarkerScheme]) -> EmptyMarkerScheme:
    return _parse(EmptyMarkerScheme, code, "empty marker scheme")


def _parse(enum_cls, code, label: str):
    if isinstance(code, enum_cls):
        return code
    if isinstance(code, str):
        text = code.strip().upper()
        # Full member names ("DOUBLE") are accepted alongside the codes.
        if text in enum_cls.__members__:
            return enum_cls[text]
        for member in enum_cls:
            if member.value == text:
                return member
    choices = ", ".join(f"'{member.value}'" for member in enum_cls)
    raise InvalidArgumentError(f"unrecognized {label} {code!r}; expected one of {choices}")
