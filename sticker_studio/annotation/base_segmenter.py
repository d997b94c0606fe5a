"""
Base Segmenter

Abstract base class for segmentation providers. The orchestrator is written
against this interface only; the flood-fill reference and the SAM2 adapter
are interchangeable behind it.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..common.image_utils import ImageBuffer, Mask
from .session import Click


class BaseSegmenter(ABC):
    """
    Abstract base class for segmentation providers.

    Provides the capability set:
    - initialize(): one-time backend setup, reports success
    - precompute(): optional per-image acceleration hint
    - segment(): click list to mask (abstract, must be implemented)

    Masks may come back at any resolution and in either single-channel
    or RGBA encoding; callers must not assume they match the image.
    """

    name: str = "base"

    async def initialize(self) -> bool:
        """
        Prepare the backend.

        Returns:
            True if the provider is ready to segment
        """
        return True

    async def precompute(self, image: ImageBuffer) -> str:
        """
        Compute a per-image cache hint.

        Callers treat failure here as non-fatal.

        Returns:
            Opaque token identifying the precomputed state
        """
        return f"{self.name}-{id(image)}"

    @abstractmethod
    async def segment(
        self,
        image: ImageBuffer,
        clicks: Sequence[Click],
    ) -> Optional[Mask]:
        """
        Produce a mask for the given clicks.

        Args:
            image: Source image
            clicks: Full ordered click list

        Returns:
            Mask, or None when there is nothing to segment

        Raises:
            SegmentationError: if the backend fails
        """
        pass
