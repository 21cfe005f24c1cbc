# ============================================================================
# src/blood_report_analysis/core/document.py
# ============================================================================
"""
Per-run data carried through the pipeline.

SourceDocument: uploaded bytes + declared media type (immutable)
AnalysisRequest: rendered prompt + provider options (credentials redacted in repr)
"""

import asyncio
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..utils.logging import redact_options


PDF_MEDIA_TYPE = "application/pdf"

# Media types accepted at the upload boundary
SUPPORTED_MEDIA_TYPES = (PDF_MEDIA_TYPE, "image/png", "image/jpeg")


def normalize_media_type(media_type: str) -> str:
    """Lower-case media type without parameters ('image/PNG; q=1' -> 'image/png')."""
    return (media_type or "").split(";", 1)[0].strip().lower()


@dataclass(frozen=True)
class SourceDocument:
    """An uploaded document: opaque bytes plus the media type it was declared as."""
    data: bytes = field(repr=False)
    media_type: str
    filename: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "media_type", normalize_media_type(self.media_type))

    @property
    def is_pdf(self) -> bool:
        return self.media_type == PDF_MEDIA_TYPE

    @property
    def is_image(self) -> bool:
        return self.media_type.startswith("image/")

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def suffix(self) -> str:
        """File suffix matching the declared media type (used for temp files)."""
        if self.filename and Path(self.filename).suffix:
            return Path(self.filename).suffix.lower()
        return mimetypes.guess_extension(self.media_type) or ""

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        media_type: Optional[str] = None
    ) -> "SourceDocument":
        """
        Build a document from a file on disk.

        The media type is guessed from the extension when not given.
        """
        path = Path(path)
        if media_type is None:
            media_type, _ = mimetypes.guess_type(path.name)
        return cls(
            data=path.read_bytes(),
            media_type=media_type or "application/octet-stream",
            filename=path.name
        )

    @classmethod
    async def read(
        cls,
        path: Union[str, Path],
        media_type: Optional[str] = None
    ) -> "SourceDocument":
        """Same as from_path(), reading the bytes off the event loop."""
        return await asyncio.to_thread(cls.from_path, path, media_type)


@dataclass
class AnalysisRequest:
    """Prompt and provider options for a single provider call. Never persisted."""
    prompt: str
    options: Dict[str, Any] = field(default_factory=dict)

    def redacted_options(self) -> Dict[str, Any]:
        return redact_options(self.options)

    def __repr__(self) -> str:
        return (
            f"AnalysisRequest(prompt=<{len(self.prompt)} chars>, "
            f"options={self.redacted_options()!r})"
        )
