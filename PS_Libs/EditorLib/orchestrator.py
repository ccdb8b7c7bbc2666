"""
Packshot editor orchestrator.

Turns user commands into geometry / AI calls and commits exactly one history
entry per successful command. Every command is wrapped on its own: a failure
leaves the history untouched and posts an error status instead.

Commands are coroutines. While one is pending the editor is busy and any
other mutating command raises EditorBusyError; callers (the UI) are expected
to disable their controls instead of relying on that.

Classes:
    PackshotEditor: One editing session over a single uploaded image
"""

import inspect
import logging
from contextlib import contextmanager
from functools import partial
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, Tuple, Union

from PS_Libs.AiLib.ai_collaborator import IMAGE_KINDS, AiCollaborator
from PS_Libs.constants import (
    DEFAULT_BLUR_INTENSITY,
    IMAGE_KIND_LOGO,
    IMAGE_KIND_PACKSHOT,
    LABEL_ADD_MARGINS,
    LABEL_AUTO_CROP,
    LABEL_BLUR,
    LABEL_COLOR_CORRECTION,
    LABEL_CROP,
    LABEL_ORIGINAL,
    LABEL_REMOVE_BACKGROUND,
    LABEL_REMOVE_LOGO_BACKGROUND,
    LABEL_RESIZE,
    LABEL_ROTATE,
    LABEL_SQUARE_FIT,
    MAX_BLUR_INTENSITY,
    MIN_BLUR_INTENSITY,
    STEP_AI_PROCESSING,
    STEP_FINALIZATION,
    STEP_PREPARATION,
)
from PS_Libs.EditorLib.history_timeline import HistoryEntry, HistoryTimeline
from PS_Libs.EditorLib.status import StatusNotifier
from PS_Libs.errors import (
    AiProcessingError,
    EditorBusyError,
    ObjectNotFoundError,
    PackshotError,
    QuotaExceededError,
    UploadError,
)
from PS_Libs.ImageEditingLib.frame_codec import (
    SaveCounter,
    decode_ai_result,
    decode_upload,
    download_filename,
    encode_frame,
)
from PS_Libs.ImageEditingLib.geometry_ops import (
    adjust_color,
    blur_with_mask,
    composite_with_margin,
    crop_rect,
    crop_to_object_bounds,
    detect_object_bounds,
    fit_in_square,
    object_margin_info,
    resize_to_square,
    rotate90,
)
from PS_Libs.ImageEditingLib.image_models import Frame, MarginInfo
from PS_Libs.ProjStoreLib.action_counter import ActionCounter
from PS_Libs.ProjStoreLib.persistence import JsonFileStore
from PS_Libs.ProjStoreLib.quota_governor import QuotaGovernor
from PS_Libs.SelectionLib.selection_controller import SelectionController
from PS_Libs.SelectionLib.selection_models import CropMode
from PS_Libs.settings import EditorSettings

logger = logging.getLogger(__name__)

Transform = Callable[[Frame], Any]


class PackshotEditor:
    """
    One interactive editing session.

    Example:
        >>> editor = PackshotEditor(ai, QuotaGovernor(InMemoryStore()))
        >>> await editor.upload(Path("bottle.jpg"))
        >>> await editor.resize_preset(500, 25)
        >>> [entry.label for entry in editor.history.entries]
        ['Original', 'Resize & Margins']
    """

    def __init__(
        self,
        ai: AiCollaborator,
        quota: QuotaGovernor,
        counter: Optional[ActionCounter] = None,
        notifier: Optional[StatusNotifier] = None,
    ):
        self.ai = ai
        self.quota = quota
        self.counter = counter
        self.notifier = notifier or StatusNotifier()
        self.history = HistoryTimeline()
        self.selection = SelectionController()
        self.save_counter = SaveCounter()
        self.workflow_step = STEP_PREPARATION
        self._busy = False
        self._rendered_size_known = False

    @classmethod
    def from_settings(
        cls,
        settings: EditorSettings,
        ai: Optional[AiCollaborator] = None,
    ) -> "PackshotEditor":
        """Wire a session with file-backed state and, by default, Gemini."""
        if ai is None:
            from PS_Libs.AiLib.gemini_client import GeminiCollaborator
            ai = GeminiCollaborator(api_key=settings.gemini_api_key)

        store = JsonFileStore(settings.state_file)
        return cls(
            ai=ai,
            quota=QuotaGovernor(
                store,
                daily_limit=settings.daily_limit,
                minute_limit=settings.minute_limit,
            ),
            counter=ActionCounter(store),
            notifier=StatusNotifier(duration=settings.status_seconds),
        )

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def current_frame(self) -> Optional[Frame]:
        entry = self.history.current()
        return entry.frame if entry else None

    @property
    def margin_info(self) -> Optional[MarginInfo]:
        """Margins around the detected object in the current frame."""
        frame = self.current_frame
        if frame is None:
            return None
        try:
            return object_margin_info(detect_object_bounds(frame))
        except PackshotError as exc:
            logger.error(f"Could not calculate object bounds: {exc}")
            return None

    @property
    def action_count(self) -> int:
        return self.counter.count if self.counter else 0

    def set_rendered_size(self, width: int, height: int) -> None:
        """Record the on-screen size of the image that selections are drawn on."""
        self._rendered_size_known = True
        self.selection.set_rendered_size(width, height)

    def _sync_rendered_size(self) -> None:
        # Until the UI reports a layout, selections are in natural pixels
        frame = self.current_frame
        if frame is not None and not self._rendered_size_known:
            self.selection.set_rendered_size(frame.width, frame.height)

    # ------------------------------------------------------------------
    # Command plumbing
    # ------------------------------------------------------------------

    def _ensure_idle(self) -> None:
        if self._busy:
            raise EditorBusyError("Another editing operation is still running")

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        self._ensure_idle()
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _report_failure(self, exc: Exception, error_key: str) -> None:
        key = getattr(exc, "error_key", PackshotError.error_key)
        if key == PackshotError.error_key:
            key = error_key
        self.notifier.error(key)

    async def _attempt(self, transform: Transform, frame: Frame, error_key: str) -> Optional[Any]:
        try:
            result = transform(frame)
            if inspect.isawaitable(result):
                result = await result
            return result
        except PackshotError as exc:
            logger.error(f"{error_key}: {exc}")
            self._report_failure(exc, error_key)
        except (OSError, ValueError) as exc:
            logger.exception(f"{error_key}: unexpected image failure")
            self._report_failure(exc, error_key)
        return None

    def _finish(self, label: str, frame: Frame, success_key: str, step: Optional[int], **params) -> HistoryEntry:
        entry = self.history.commit(label, frame)
        self._sync_rendered_size()
        if self.counter:
            self.counter.increment()
        if step is not None:
            self.workflow_step = max(self.workflow_step, step)
        self.notifier.success(success_key, **params)
        logger.info(f"Committed '{label}' ({frame.width}x{frame.height})")
        return entry

    async def _apply(
        self,
        label: str,
        transform: Transform,
        success_key: str,
        error_key: str,
        step: Optional[int] = None,
        **params,
    ) -> Optional[HistoryEntry]:
        frame = self.current_frame
        if frame is None:
            return None

        with self._exclusive():
            result = await self._attempt(transform, frame, error_key)
        if result is None:
            return None
        return self._finish(label, result, success_key, step, **params)

    # ------------------------------------------------------------------
    # Image lifecycle
    # ------------------------------------------------------------------

    async def upload(self, source: Union[bytes, Path], filename: Optional[str] = None) -> Optional[HistoryEntry]:
        """Start a new timeline from an uploaded file."""
        with self._exclusive():
            try:
                frame = decode_upload(source, filename)
            except UploadError as exc:
                logger.error(f"Upload failed: {exc}")
                self.notifier.error(exc.error_key)
                return None

        self.history.load(LABEL_ORIGINAL, frame)
        self._rendered_size_known = False
        self._sync_rendered_size()
        self.selection.cancel()
        self.save_counter.reset()
        self.workflow_step = STEP_PREPARATION
        return self.history.current()

    def new_image(self) -> None:
        """Drop the current image and its history."""
        self._ensure_idle()
        self.history.clear()
        self._rendered_size_known = False
        self.selection.cancel()
        self.save_counter.reset()
        self.workflow_step = STEP_PREPARATION
        self.notifier.success("newImageReady")

    def save(self) -> Optional[Tuple[str, bytes]]:
        """Encode the current frame for download as (filename, bytes)."""
        frame = self.current_frame
        if frame is None:
            return None
        filename = download_filename(frame, self.save_counter.next())
        data = encode_frame(frame)
        self.notifier.success("saveSuccess")
        return filename, data

    # ------------------------------------------------------------------
    # Geometry commands
    # ------------------------------------------------------------------

    async def resize_preset(self, size: int, margin: int) -> Optional[HistoryEntry]:
        """Resize to size x size, then re-center the object inside margin."""
        def transform(frame: Frame) -> Frame:
            return composite_with_margin(resize_to_square(frame, size), margin)

        return await self._apply(
            LABEL_RESIZE, transform, "resizeSuccess", "resizeError", size=size,
        )

    async def add_margins(self, margin: int) -> Optional[HistoryEntry]:
        return await self._apply(
            LABEL_ADD_MARGINS.format(margin=margin),
            partial(composite_with_margin, margin=margin),
            "addMarginsSuccess",
            "addMarginsError",
        )

    async def rotate(self) -> Optional[HistoryEntry]:
        return await self._apply(
            LABEL_ROTATE, rotate90, "rotateSuccess", "rotateError", step=STEP_AI_PROCESSING,
        )

    async def square_fit(self) -> Optional[HistoryEntry]:
        return await self._apply(LABEL_SQUARE_FIT, fit_in_square, "makeSquareSuccess", "resizeError")

    async def auto_crop(self) -> Optional[HistoryEntry]:
        def transform(frame: Frame) -> Frame:
            if detect_object_bounds(frame).empty:
                raise ObjectNotFoundError("No foreground pixels to crop to")
            return crop_to_object_bounds(frame)

        return await self._apply(LABEL_AUTO_CROP, transform, "autoCropSuccess", "autoCropError")

    async def color_correction(self, brightness: float, contrast: float) -> Optional[HistoryEntry]:
        return await self._apply(
            LABEL_COLOR_CORRECTION,
            partial(adjust_color, brightness=brightness, contrast=contrast),
            "colorCorrectionSuccess",
            "colorCorrectionError",
        )

    # ------------------------------------------------------------------
    # Interactive crop / blur
    # ------------------------------------------------------------------

    def start_crop(self, mode: CropMode = CropMode.FREE) -> None:
        if self.current_frame is None:
            return
        self.selection.start_crop(mode)

    def start_blur(self) -> None:
        if self.current_frame is None:
            return
        self.selection.start_lasso()

    def cancel_selection(self) -> None:
        self.selection.cancel()

    def _take_selection(self, take: Callable[[Tuple[int, int]], Any], frame: Frame, error_key: str) -> Optional[Any]:
        """Hand over the selection in natural pixels; None means cancelled or failed."""
        try:
            return take(frame.size)
        except ValueError as exc:
            logger.error(f"{error_key}: {exc}")
            self.notifier.error(error_key)
            return None

    async def apply_crop(self) -> Optional[HistoryEntry]:
        """Crop to the drawn rectangle; an empty selection just cancels."""
        frame = self.current_frame
        if frame is None:
            self.selection.cancel()
            return None

        self._ensure_idle()
        rect = self._take_selection(self.selection.take_crop, frame, "cropError")
        if rect is None:
            return None
        return await self._apply(
            LABEL_CROP,
            partial(crop_rect, rect=rect),
            "cropSuccess",
            "cropError",
            step=STEP_AI_PROCESSING,
        )

    async def apply_blur(self, intensity: float = DEFAULT_BLUR_INTENSITY) -> Optional[HistoryEntry]:
        """
        Blur inside the drawn lasso; fewer than 3 points just cancels.

        The intensity is clamped to the slider range 1..50.
        """
        frame = self.current_frame
        if frame is None:
            self.selection.cancel()
            return None

        self._ensure_idle()
        points = self._take_selection(self.selection.take_lasso, frame, "blurError")
        if points is None:
            return None
        intensity = max(MIN_BLUR_INTENSITY, min(intensity, MAX_BLUR_INTENSITY))
        return await self._apply(
            LABEL_BLUR,
            partial(blur_with_mask, polygon=points, intensity=intensity),
            "blurSuccess",
            "blurError",
            step=STEP_FINALIZATION,
        )

    # ------------------------------------------------------------------
    # AI commands
    # ------------------------------------------------------------------

    async def _classify(self, payload: bytes, mime: str) -> str:
        try:
            kind = await self.ai.classify(payload, mime)
        except Exception as exc:
            logger.warning(f"Classification failed, treating image as packshot: {exc}")
            return IMAGE_KIND_PACKSHOT
        return kind if kind in IMAGE_KINDS else IMAGE_KIND_PACKSHOT

    async def _background_pipeline(self, frame: Frame, instruction: Optional[str]) -> Tuple[str, Frame]:
        payload = encode_frame(frame)
        kind = await self._classify(payload, frame.mime)
        removed = decode_ai_result(
            await self.ai.remove_background(payload, frame.mime, instruction)
        )
        if kind == IMAGE_KIND_LOGO:
            return LABEL_REMOVE_LOGO_BACKGROUND, removed

        squared = fit_in_square(crop_to_object_bounds(removed))
        balanced = decode_ai_result(
            await self.ai.auto_white_balance(encode_frame(squared), squared.mime)
        )
        if balanced.size != squared.size:
            raise AiProcessingError(
                f"White balance changed dimensions {squared.size} -> {balanced.size}"
            )
        return LABEL_REMOVE_BACKGROUND, balanced

    async def remove_background(self, instruction: Optional[str] = None) -> Optional[HistoryEntry]:
        """
        Remove the background with the AI collaborator.

        Logos only get their background removed. Everything else is also
        cropped to the object, squared and white balanced. The quota is
        checked before any AI call; a rejection spends nothing.
        """
        frame = self.current_frame
        if frame is None:
            return None

        with self._exclusive():
            try:
                self.quota.acquire()
            except QuotaExceededError as exc:
                self.notifier.error(exc.error_key)
                return None
            outcome = await self._attempt(
                partial(self._background_pipeline, instruction=instruction),
                frame,
                "aiProcessingError",
            )

        if outcome is None:
            return None
        label, result = outcome
        return self._finish(label, result, "removeBackgroundSuccess", STEP_FINALIZATION)

    # ------------------------------------------------------------------
    # History navigation
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        self._ensure_idle()
        if not self.history.undo():
            return False
        self._sync_rendered_size()
        self.notifier.success("undoSuccess")
        return True

    def redo(self) -> bool:
        self._ensure_idle()
        if not self.history.redo():
            return False
        self._sync_rendered_size()
        self.notifier.success("redoSuccess")
        return True

    def go_to(self, index: int) -> HistoryEntry:
        self._ensure_idle()
        entry = self.history.go_to(index)
        self._sync_rendered_size()
        self.notifier.success("historyRestored", action=entry.label)
        return entry

    def reset(self) -> bool:
        """Return to the original upload; ignored while cropping."""
        self._ensure_idle()
        if self.history.is_empty or self.selection.is_cropping:
            return False
        self.history.reset_to_original()
        self._sync_rendered_size()
        self.workflow_step = STEP_PREPARATION
        self.notifier.success("resetSuccess")
        return True

    def reset_action_counter(self) -> None:
        if self.counter:
            self.counter.reset()
        self.notifier.success("counterReset")
