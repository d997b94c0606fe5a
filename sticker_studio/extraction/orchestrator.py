"""
Extraction Orchestrator

Drives the interactive workflow for one workspace:

    EMPTY -> LOADED -> ANNOTATED -> MASKED -> (extract) -> LOADED

Every failure is caught here, reported through the notifier, and leaves the
workspace in a usable state. Segmentation results are only applied if the
session and its click generation are unchanged when they arrive.
"""

import asyncio
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from ..annotation.base_segmenter import BaseSegmenter
from ..annotation.segmenter_factory import create_segmenter
from ..annotation.session import AnnotationSession, Click, ClickKind
from ..annotation.visualization import render_preview
from ..collection.sticker import Sticker
from ..collection.sticker_store import JsonStickerStore, StickerStore
from ..common.config_utils import ExtractionConfig, StudioConfig
from ..common.constants import DEFAULT_SEGMENT_TIMEOUT
from ..common.exceptions import ExtractionError, ImageDecodeError, SegmentationError
from ..common.image_utils import ImageBuffer, Mask, decode_image
from ..common.logger import get_logger
from ..common.notifier import LoggingNotifier, NotificationKind, Notifier
from .bounds_trimmer import BoundsTrimmer
from .mask_compositor import MaskCompositor

logger = get_logger(__name__)


class StudioState(Enum):
    """Workspace state, derived from the current session."""
    EMPTY = "empty"
    LOADED = "loaded"
    ANNOTATED = "annotated"
    MASKED = "masked"


class ExtractionOrchestrator:
    """
    Coordinates session, segmenter, compositor, trimmer, and store.

    Usage:
        orchestrator = ExtractionOrchestrator(FloodFillSegmenter(), InMemoryStickerStore())
        await orchestrator.initialize()
        await orchestrator.load_image(png_bytes)
        await orchestrator.add_click(120, 80)
        sticker = orchestrator.extract()
    """

    def __init__(
        self,
        segmenter: BaseSegmenter,
        store: StickerStore,
        notifier: Optional[Notifier] = None,
        extraction_config: Optional[ExtractionConfig] = None,
        segment_timeout: float = DEFAULT_SEGMENT_TIMEOUT,
    ):
        """
        Initialize orchestrator.

        Args:
            segmenter: Segmentation provider
            store: Collection receiving extracted stickers
            notifier: Notification sink (default: log only)
            extraction_config: Compositing/trimming parameters
            segment_timeout: Seconds allowed per segmentation call (0 disables)
        """
        config = extraction_config or ExtractionConfig()
        self.segmenter = segmenter
        self.store = store
        self.notifier = notifier or LoggingNotifier()
        self.compositor = MaskCompositor(
            threshold=config.threshold,
            grayscale_probe_pixels=config.grayscale_probe_pixels,
        )
        self.trimmer = BoundsTrimmer(padding=config.padding)
        self.segment_timeout = segment_timeout

        self.click_mode = ClickKind.INCLUDE
        self._ready = False
        self._session: Optional[AnnotationSession] = None
        self._image_token: Optional[str] = None
        self._pending = 0

    @classmethod
    def from_config(
        cls,
        config: StudioConfig,
        store: Optional[StickerStore] = None,
        notifier: Optional[Notifier] = None,
    ) -> "ExtractionOrchestrator":
        """Build an orchestrator with the configured segmenter and a JSON store."""
        return cls(
            segmenter=create_segmenter(config.segmenter),
            store=store if store is not None else JsonStickerStore(config.store_dir),
            notifier=notifier,
            extraction_config=config.extraction,
            segment_timeout=config.segment_timeout,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def session(self) -> Optional[AnnotationSession]:
        return self._session

    @property
    def image(self) -> Optional[ImageBuffer]:
        return self._session.image if self._session else None

    @property
    def mask(self) -> Optional[Mask]:
        return self._session.mask if self._session else None

    @property
    def clicks(self) -> Tuple[Click, ...]:
        return self._session.clicks if self._session else ()

    @property
    def is_segmenting(self) -> bool:
        return self._pending > 0

    @property
    def state(self) -> StudioState:
        if self._session is None:
            return StudioState.EMPTY
        if self._session.mask is not None:
            return StudioState.MASKED
        if self._session.has_clicks():
            return StudioState.ANNOTATED
        return StudioState.LOADED

    @property
    def can_extract(self) -> bool:
        return self.mask is not None and not self.is_segmenting

    def _notify(self, kind: NotificationKind, title: str, message: str) -> None:
        try:
            self.notifier.notify(kind, title, message)
        except Exception as e:
            logger.warning(f"Notifier failed for '{title}': {e}")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def initialize(self) -> bool:
        """
        Initialize the segmentation provider.

        Safe to call again after a failure.

        Returns:
            True if the workspace accepts uploads
        """
        if self._ready:
            return True

        try:
            ok = await self.segmenter.initialize()
        except Exception as e:
            logger.error(f"Segmenter '{self.segmenter.name}' raised during initialize: {e}", exc_info=True)
            ok = False

        if not ok:
            self._notify(
                NotificationKind.ERROR,
                "Initialization failed",
                "Could not load segmentation models",
            )
            return False

        self._ready = True
        logger.info(f"Segmenter '{self.segmenter.name}' ready")
        self._notify(
            NotificationKind.INFO,
            "Segmenter initialized",
            "Ready to extract stickers!",
        )
        return True

    async def load_image(self, data: bytes, source_name: Optional[str] = None) -> bool:
        """
        Decode an upload and start a fresh session on it.

        On failure the current session (if any) is kept.

        Returns:
            True if the image was loaded
        """
        if not self._ready:
            self._notify(
                NotificationKind.ERROR,
                "Not ready",
                "The segmentation model is not initialized",
            )
            return False

        try:
            image = await asyncio.to_thread(decode_image, data, source_name)
        except ImageDecodeError as e:
            logger.error(f"Image decode failed: {e}")
            self._notify(NotificationKind.ERROR, "Error", "Failed to process the image")
            return False

        self._session = AnnotationSession(image=image)
        self.click_mode = ClickKind.INCLUDE
        self._image_token = None
        logger.info(f"Loaded image {source_name or '<bytes>'} ({image.width}x{image.height})")

        try:
            self._image_token = await self.segmenter.precompute(image)
        except Exception as e:
            logger.warning(f"Precompute failed (continuing without it): {e}")
        return True

    async def add_click(
        self,
        x: float,
        y: float,
        kind: Optional[ClickKind] = None,
    ) -> Optional[Mask]:
        """
        Record a click and re-segment.

        Args:
            x: Image-space x coordinate
            y: Image-space y coordinate
            kind: Click polarity (default: current click_mode)

        Returns:
            The new mask if it was applied, else None
        """
        if self._session is None:
            logger.debug("Click ignored: no image loaded")
            return None

        click = self._session.add_click(x, y, kind or self.click_mode)
        logger.debug(f"Added {click.kind.value} click at ({click.x:.1f}, {click.y:.1f})")
        return await self._segment()

    async def remove_last_click(self) -> Optional[Mask]:
        """
        Undo the most recent click.

        Re-segments with the remaining clicks; with none left the mask is
        cleared without calling the provider.
        """
        session = self._session
        if session is None or session.remove_last_click() is None:
            return None
        if not session.has_clicks():
            return None
        return await self._segment()

    def reset(self) -> None:
        """Clear clicks and mask, keeping the image."""
        if self._session is not None:
            self._session.reset()

    def cut_out(self, image: ImageBuffer, mask: Mask) -> Sticker:
        """
        Composite and trim a masked image into a sticker.

        Raises:
            ExtractionError: if compositing, trimming or PNG encoding fails
        """
        try:
            composited = self.compositor.composite(image, mask)
            trimmed = self.trimmer.trim(composited)
            return Sticker.create(trimmed)
        except Exception as e:
            raise ExtractionError(
                f"Cannot build sticker: {e}",
                image_size=(image.width, image.height),
            ) from e

    def extract(self) -> Optional[Sticker]:
        """
        Cut out the masked region and add it to the collection.

        Returns:
            The stored sticker, or None if there was no mask or extraction failed
        """
        session = self._session
        if session is None or session.mask is None:
            return None

        try:
            sticker = self.cut_out(session.image, session.mask)
            self.store.add_artifact(sticker)
        except Exception as e:
            logger.error(f"Extraction failed: {e}", exc_info=True)
            self._notify(NotificationKind.ERROR, "Extraction failed", "Could not extract the sticker")
            return None

        logger.info(f"Extracted {sticker.id} ({sticker.width}x{sticker.height})")
        self._notify(
            NotificationKind.INFO,
            "Sticker extracted!",
            "Your sticker has been added to the collection",
        )
        self.reset()
        return sticker

    def preview(self) -> Optional[np.ndarray]:
        """
        Render the image with mask overlay and click markers.

        Returns:
            (H, W, 3) RGB array, or None with no image loaded
        """
        session = self._session
        if session is None:
            return None
        foreground = None
        if session.mask is not None:
            foreground = self.compositor.foreground_mask(
                session.mask, session.image.width, session.image.height
            )
        return render_preview(session.image, session.clicks, foreground)

    # ------------------------------------------------------------------
    # Segmentation
    # ------------------------------------------------------------------

    async def _segment(self) -> Optional[Mask]:
        session = self._session
        generation = session.generation
        clicks = session.clicks

        self._pending += 1
        try:
            mask = await self._run_segmenter(session.image, clicks)
            if mask is not None:
                # channels raises MaskFormatError for undecodable buffers
                mask.channels
        except Exception as e:
            if self._is_current(session, generation):
                logger.error(f"Segmentation failed: {e}", exc_info=True)
                self._notify(NotificationKind.ERROR, "Segmentation failed", "Could not generate mask")
            else:
                logger.debug(f"Stale segmentation request failed (generation {generation}): {e}")
            return None
        finally:
            self._pending -= 1

        if not self._is_current(session, generation) or not session.store_mask(mask, generation):
            logger.debug(
                f"Discarding stale segmentation result for generation {generation}"
            )
            return None
        return mask

    async def _run_segmenter(self, image: ImageBuffer, clicks: Tuple[Click, ...]) -> Optional[Mask]:
        call = self.segmenter.segment(image, clicks)
        if not self.segment_timeout:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self.segment_timeout)
        except asyncio.TimeoutError as e:
            raise SegmentationError(
                f"Segmentation timed out after {self.segment_timeout:g}s",
                provider=self.segmenter.name,
                click_count=len(clicks),
            ) from e

    def _is_current(self, session: AnnotationSession, generation: int) -> bool:
        return session is self._session and session.generation == generation
