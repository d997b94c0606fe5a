"""
Annotation session state for one loaded image.

Tracks include/exclude clicks in creation order, the last computed mask,
and a generation counter that lets callers recognise stale segmentation
results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..common.image_utils import ImageBuffer, Mask


class ClickKind(Enum):
    """Polarity of a point annotation."""
    INCLUDE = "include"
    EXCLUDE = "exclude"


@dataclass(frozen=True)
class Click:
    """
    A point annotation in source-image pixel space.

    Coordinates are floats and are not bounds-checked.
    """

    x: float
    y: float
    kind: ClickKind = ClickKind.INCLUDE

    @property
    def is_include(self) -> bool:
        return self.kind is ClickKind.INCLUDE


@dataclass(eq=False)
class AnnotationSession:
    """
    Manages the click sequence for one image.

    Attributes:
        image: Source image, shared and never mutated
        generation: Advances on every change to the click sequence
    """

    image: ImageBuffer
    _clicks: List[Click] = field(default_factory=list)
    _mask: Optional[Mask] = None
    generation: int = 0

    def add_click(self, x: float, y: float, kind: ClickKind = ClickKind.INCLUDE) -> Click:
        """Append a click and invalidate the cached mask."""
        click = Click(float(x), float(y), kind)
        self._clicks.append(click)
        self._invalidate()
        return click

    def remove_last_click(self) -> Optional[Click]:
        """
        Pop the most recent click.

        Returns:
            The removed click, or None if there were no clicks
        """
        if not self._clicks:
            return None
        click = self._clicks.pop()
        self._invalidate()
        return click

    def reset(self) -> None:
        """Clear all clicks and the cached mask."""
        self._clicks.clear()
        self._invalidate()

    def store_mask(self, mask: Optional[Mask], generation: int) -> bool:
        """
        Cache a segmentation result computed for ``generation``.

        Returns:
            False (and leaves the cache alone) if clicks changed since
            the result was requested
        """
        if generation != self.generation:
            return False
        self._mask = mask
        return True

    def _invalidate(self) -> None:
        self._mask = None
        self.generation += 1

    @property
    def mask(self) -> Optional[Mask]:
        return self._mask

    @property
    def clicks(self) -> Tuple[Click, ...]:
        return tuple(self._clicks)

    @property
    def click_count(self) -> int:
        return len(self._clicks)

    def has_clicks(self) -> bool:
        return bool(self._clicks)

    def include_clicks(self) -> List[Click]:
        return [c for c in self._clicks if c.kind is ClickKind.INCLUDE]

    def exclude_clicks(self) -> List[Click]:
        return [c for c in self._clicks if c.kind is ClickKind.EXCLUDE]

    def get_click_counts(self) -> Tuple[int, int]:
        """Get counts of include and exclude clicks."""
        return len(self.include_clicks()), len(self.exclude_clicks())
