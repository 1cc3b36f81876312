"""Headless presentation shell: the state one user's chart screen renders from.

A session owns the uploaded image, the analysis, the optional continuation
image and the viewer. User actions map to methods; the two inference calls
are the only suspension points.

Late responses: `_epoch` advances on upload/reset and `_viewer_epoch` on
viewer close, which each new analysis also performs. A call captures both
before awaiting and drops its outcome if either moved in the meantime. The
in-flight request itself is not cancelled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tradescope.config import Settings
from tradescope.errors import MissingAnalysisError, MissingImageError, SessionBusyError
from tradescope.inference.client import InferenceClient
from tradescope.inference.errors import AnalysisFailedError, GenerationFailedError
from tradescope.models.analysis import AnalysisResult
from tradescope.models.image import GeneratedContinuationImage, UploadedImage
from tradescope.viewer.overlay import render_overlay_svg
from tradescope.viewer.viewport import Viewport

logger = logging.getLogger(__name__)

INPUT_REQUIRED_LABEL = "Input Required"


@dataclass
class SessionError:
    label: str
    message: str


class ChartSession:
    def __init__(self, session_id: str, settings: Settings) -> None:
        self.id = session_id
        self.viewport = Viewport.from_settings(settings)
        self.image: UploadedImage | None = None
        self.analysis: AnalysisResult | None = None
        self.continuation: GeneratedContinuationImage | None = None
        self.error: SessionError | None = None
        self.generation_error: SessionError | None = None
        self.analyzing = False
        self.generating = False
        self.viewer_open = False
        self.viewing_original = True
        self._epoch = 0
        self._viewer_epoch = 0

    # -- upload / reset -----------------------------------------------------

    def upload(self, data: bytes, mime_type: str | None, filename: str = "") -> UploadedImage:
        """Replace the session wholesale with a new image."""
        image = UploadedImage.from_upload(data, mime_type, filename)
        self.reset()
        self.image = image
        logger.info("Session %s: uploaded %s (%d bytes)", self.id, image.mime_type, image.size)
        return image

    def reset(self) -> None:
        self._epoch += 1
        self._viewer_epoch += 1
        self.image = None
        self.analysis = None
        self.continuation = None
        self.error = None
        self.generation_error = None
        self.analyzing = False
        self.generating = False
        self.viewer_open = False
        self.viewing_original = True
        self.viewport.reset()

    # -- inference ----------------------------------------------------------

    async def analyze(self, client: InferenceClient) -> AnalysisResult | None:
        if self.image is None:
            self.error = SessionError(INPUT_REQUIRED_LABEL, str(MissingImageError()))
            return None
        if self.analyzing:
            raise SessionBusyError("An analysis is already in progress.")

        # A continuation belongs to the result it was generated from
        self.close_viewer()

        image = self.image
        epoch = self._epoch
        self.analyzing = True
        self.error = None
        self.analysis = None

        try:
            result = await client.analyze(image.data, image.mime_type)
        except AnalysisFailedError as e:
            if epoch == self._epoch:
                self.error = SessionError(e.label, str(e))
            return None
        finally:
            if epoch == self._epoch:
                self.analyzing = False

        if epoch != self._epoch:
            logger.info("Session %s: discarding late analysis result", self.id)
            return None

        self.analysis = result
        return result

    async def generate_continuation(self, client: InferenceClient) -> GeneratedContinuationImage | None:
        if self.image is None or self.analysis is None:
            raise MissingAnalysisError()
        if self.generating:
            raise SessionBusyError("A continuation is already being generated.")

        image, prior = self.image, self.analysis
        token = (self._epoch, self._viewer_epoch)
        self.generating = True
        self.generation_error = None

        try:
            generated = await client.generate_continuation(image.data, image.mime_type, prior)
        except GenerationFailedError as e:
            if token == (self._epoch, self._viewer_epoch):
                self.generation_error = SessionError(e.label, str(e))
            return None
        finally:
            if token == (self._epoch, self._viewer_epoch):
                self.generating = False

        if token != (self._epoch, self._viewer_epoch):
            logger.info("Session %s: discarding late continuation image", self.id)
            return None

        self.continuation = generated
        self.viewing_original = False
        self.viewport.reset()
        return generated

    # -- viewer -------------------------------------------------------------

    def open_viewer(self) -> None:
        if self.analysis is None:
            raise MissingAnalysisError("Analyze the chart before expanding it.")
        self.viewport.reset()
        self.viewer_open = True

    def close_viewer(self) -> None:
        self._viewer_epoch += 1
        self.viewer_open = False
        self.viewport.reset()
        self.continuation = None
        self.viewing_original = True
        self.generating = False
        self.generation_error = None

    def view_original(self) -> bool:
        if self.viewing_original:
            return False
        self.viewing_original = True
        self.viewport.reset()
        return True

    def view_generated(self) -> bool:
        if not self.viewing_original or self.continuation is None:
            return False
        self.viewing_original = False
        self.viewport.reset()
        return True

    # -- render state -------------------------------------------------------

    @property
    def showing_generated(self) -> bool:
        return not self.viewing_original and self.continuation is not None

    def overlay_svg(self) -> str | None:
        """Overlay only applies to the original chart."""
        if self.analysis is None or self.showing_generated:
            return None
        return render_overlay_svg(self.analysis, self.viewport.stroke_width)
