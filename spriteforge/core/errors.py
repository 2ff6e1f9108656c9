from __future__ import annotations

from typing import Iterable


class SpriteForgeError(Exception):
    """Base class for every error raised by spriteforge."""


class UnknownAxisValue(SpriteForgeError):
    """A configuration selected a value that has no template on that axis."""

    def __init__(self, axis: str, value: object, known: Iterable[str] = ()) -> None:
        self.axis = axis
        self.value = value
        self.known = tuple(known)
        msg = f"unknown {axis}: {value!r}"
        if self.known:
            msg += f" (expected one of: {', '.join(self.known)})"
        super().__init__(msg)


class InvalidGeometry(SpriteForgeError, ValueError):
    pass


class InvalidConfig(SpriteForgeError, ValueError):
    pass


class EncodingFailure(SpriteForgeError):
    """Raised at the export boundary when an image or record cannot be written."""


class GenerationCancelled(SpriteForgeError):
    pass
