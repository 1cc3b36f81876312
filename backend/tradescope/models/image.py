"""Session-scoped image holders. Never persisted."""

from __future__ import annotations

from base64 import b64encode
from dataclasses import dataclass

from tradescope.errors import UnsupportedImageError

SUPPORTED_MIME_TYPES = ("image/png", "image/jpeg", "image/webp")
DEFAULT_GENERATED_MIME = "image/png"


@dataclass(frozen=True)
class UploadedImage:
    """Raw bytes of the user's chart. Read-only once captured."""

    data: bytes
    mime_type: str
    filename: str = ""

    @classmethod
    def from_upload(cls, data: bytes, mime_type: str | None, filename: str = "") -> UploadedImage:
        """Accept png/jpeg/webp only. Size and dimensions are left to the service."""
        mime = (mime_type or "").split(";")[0].strip().lower()
        if mime not in SUPPORTED_MIME_TYPES:
            raise UnsupportedImageError(
                f"Unsupported image type {mime_type!r}; expected PNG, JPG, or WEBP."
            )
        return cls(data=data, mime_type=mime, filename=filename)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def base64(self) -> str:
        return b64encode(self.data).decode("ascii")


@dataclass(frozen=True)
class GeneratedContinuationImage:
    """Continuation chart returned by the image model."""

    data: bytes
    mime_type: str = DEFAULT_GENERATED_MIME

    @property
    def base64(self) -> str:
        return b64encode(self.data).decode("ascii")
