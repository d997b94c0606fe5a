"""
SAM2 Segmenter

Adapter exposing the SAM2 image predictor through the segmenter interface.
Include clicks become foreground points (label 1) and exclude clicks
background points (label 0). The ``sam2`` package is optional and imported
lazily on initialize().
"""

import asyncio
import threading
from typing import Callable, Optional, Sequence

import numpy as np

from ..common.config_utils import get_sam2_model_config
from ..common.constants import (
    SAM2_DEFAULT_CHECKPOINT,
    SAM2_DEFAULT_DEVICE,
    SAM2_EXCLUDE_LABEL,
    SAM2_INCLUDE_LABEL,
)
from ..common.exceptions import ProviderInitError, SegmentationError
from ..common.image_utils import ImageBuffer, Mask
from ..common.logger import get_logger
from .base_segmenter import BaseSegmenter
from .session import Click, ClickKind

logger = get_logger(__name__)


def build_sam2_predictor(checkpoint: str, device: str):
    """
    Build a SAM2ImagePredictor for a checkpoint.

    Raises:
        ProviderInitError: if sam2 is not installed
    """
    try:
        from sam2.build_sam import build_sam2
        from sam2.sam2_image_predictor import SAM2ImagePredictor
    except ImportError as exc:
        raise ProviderInitError(
            "SAM2 not installed. Install with:\n"
            "pip install git+https://github.com/facebookresearch/sam2.git",
            provider="sam2",
        ) from exc

    model_cfg = get_sam2_model_config(checkpoint)
    logger.info(f"Loading SAM2 model: {checkpoint} ({model_cfg}) on {device}")
    model = build_sam2(model_cfg, checkpoint, device=device)
    return SAM2ImagePredictor(model)


class SAM2Segmenter(BaseSegmenter):
    """
    Point-prompted segmentation with Segment Anything 2.

    The predictor runs in a worker thread; a lock keeps set_image() and
    predict() calls from interleaving across images.
    """

    name = "sam2"

    def __init__(
        self,
        checkpoint: str = SAM2_DEFAULT_CHECKPOINT,
        device: str = SAM2_DEFAULT_DEVICE,
        predictor_factory: Optional[Callable[[str, str], object]] = None,
    ):
        """
        Initialize SAM2 segmenter.

        Args:
            checkpoint: Path to SAM2 model checkpoint
            device: Device to run model on ("cuda" or "cpu")
            predictor_factory: Builds the predictor; defaults to SAM2ImagePredictor
        """
        self.checkpoint = checkpoint
        self.device = device
        self._predictor_factory = predictor_factory or build_sam2_predictor
        self.predictor = None
        self._current_image_id: Optional[int] = None
        self._lock = threading.Lock()

    async def initialize(self) -> bool:
        """Load the model; returns False instead of raising on failure."""
        if self.predictor is not None:
            return True
        try:
            self.predictor = await asyncio.to_thread(
                self._predictor_factory, self.checkpoint, self.device
            )
        except Exception as e:
            logger.error(f"SAM2 initialization failed: {e}", exc_info=True)
            return False
        logger.info("SAM2 model loaded successfully")
        return True

    async def precompute(self, image: ImageBuffer) -> str:
        """Compute the image embedding ahead of the first click."""
        await asyncio.to_thread(self._set_image, image)
        return f"{self.name}-{id(image)}"

    async def segment(
        self,
        image: ImageBuffer,
        clicks: Sequence[Click],
    ) -> Optional[Mask]:
        if not clicks:
            return None
        if self.predictor is None:
            raise SegmentationError(
                "Model not loaded. Call initialize() first.", provider=self.name
            )
        return await asyncio.to_thread(self._predict, image, list(clicks))

    def _set_image(self, image: ImageBuffer) -> None:
        if self.predictor is None:
            raise SegmentationError(
                "Model not loaded. Call initialize() first.", provider=self.name
            )
        with self._lock:
            if self._current_image_id == id(image):
                return
            self.predictor.set_image(np.ascontiguousarray(image.rgb))
            self._current_image_id = id(image)

    def _predict(self, image: ImageBuffer, clicks: Sequence[Click]) -> Mask:
        self._set_image(image)

        point_coords = np.array([[c.x, c.y] for c in clicks], dtype=np.float32)
        point_labels = np.array(
            [SAM2_INCLUDE_LABEL if c.kind is ClickKind.INCLUDE else SAM2_EXCLUDE_LABEL for c in clicks],
            dtype=np.int32,
        )

        try:
            with self._lock:
                masks, iou_predictions, _ = self.predictor.predict(
                    point_coords=point_coords,
                    point_labels=point_labels,
                    multimask_output=True,
                )
        except Exception as e:
            raise SegmentationError(
                f"SAM2 prediction failed: {e}",
                provider=self.name,
                click_count=len(clicks),
            ) from e

        # Select best mask (highest IoU)
        best_idx = int(np.argmax(iou_predictions))
        best_mask = np.asarray(masks[best_idx]) > 0
        logger.debug(f"SAM2 mask selected: idx={best_idx}, iou={float(iou_predictions[best_idx]):.3f}")
        return Mask.from_array(best_mask)
