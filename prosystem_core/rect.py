"""Inclusive rectangles measured in unsigned 32-bit units."""

from dataclasses import dataclass

_U32 = 0xFFFFFFFF


@dataclass(frozen=True)
class Rect:
    """A rectangle whose right and bottom edges are inclusive."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def length(self) -> int:
        """Width in pixels, counting both edges."""
        return (self.right - self.left + 1) & _U32

    @property
    def height(self) -> int:
        """Height in pixels, counting both edges."""
        return (self.bottom - self.top + 1) & _U32

    @property
    def area(self) -> int:
        """Number of pixels covered."""
        return (self.length * self.height) & _U32