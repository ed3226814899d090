"""Retinal image intake: media-type and size checks, decoding, data-URL encoding."""

import base64
import binascii
import io
import logging
import mimetypes
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from core.errors import (
    EmptyFile,
    FileNotFound,
    FileTooLarge,
    UnreadableImage,
    UnsupportedMediaType,
)
from core.utils import (
    JPEG,
    MAX_UPLOAD_BYTES,
    MEDIA_TYPE_ALIASES,
    PNG,
    SUPPORTED_MEDIA_TYPES,
    UploadedImage,
)

logger = logging.getLogger(__name__)

# Multi-picture JPEGs from cameras and phones open as MPO.
_PIL_FORMATS = {JPEG: {"JPEG", "MPO"}, PNG: {"PNG"}}


def normalize_media_type(media_type: Optional[str]) -> str:
    """Lower-case a declared media type, strip parameters, and resolve aliases."""
    if not media_type:
        return ""
    base = media_type.split(";", 1)[0].strip().lower()
    return MEDIA_TYPE_ALIASES.get(base, base)


def guess_media_type(file_name: str) -> str:
    media_type, _ = mimetypes.guess_type(file_name)
    return normalize_media_type(media_type)


def encode_data_url(data: bytes, media_type: str) -> str:
    """Encode bytes as a self-describing base64 data URL."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


def decode_data_url(data_url: str) -> Tuple[str, bytes]:
    """Split a base64 data URL back into (media_type, bytes)."""
    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("Not a data URL")
    header, payload = data_url[5:].split(",", 1)
    media_type, _, encoding = header.partition(";")
    if encoding != "base64":
        raise ValueError("Only base64 data URLs are supported")
    try:
        return media_type, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


class ImageIntake:
    """Validates user-selected files and turns them into UploadedImage values.

    Intake has no side effects: it never touches workflow state. The caller
    decides what a rejection or acceptance means.
    """

    def __init__(self, max_bytes: int = MAX_UPLOAD_BYTES):
        self._max_bytes = max_bytes

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def validate(self, file_path: str, media_type: Optional[str] = None) -> UploadedImage:
        """Validate a file on disk.

        The declared media type defaults to the one implied by the extension,
        the same way a browser file picker reports it.
        """
        path = Path(file_path) if file_path else None
        if path is None or not path.is_file():
            raise FileNotFound()

        declared = normalize_media_type(media_type) or guess_media_type(path.name)
        # Emptiness, type and size are checked before reading so huge files are never loaded.
        size = path.stat().st_size
        if size == 0:
            raise EmptyFile()
        self._check_media_type(declared, path.name)
        self._check_size(size, path.name)

        return self.validate_bytes(path.read_bytes(), path.name, declared)

    def validate_bytes(self, data: bytes, file_name: str, media_type: str) -> UploadedImage:
        """Validate an in-memory payload with an explicitly declared media type."""
        declared = normalize_media_type(media_type)
        if not data:
            raise EmptyFile()
        self._check_media_type(declared, file_name)
        self._check_size(len(data), file_name)

        width, height = self._verify_image(data, declared, file_name)
        return UploadedImage(
            file_name=file_name,
            media_type=declared,
            size_bytes=len(data),
            data_url=encode_data_url(data, declared),
            width=width,
            height=height,
        )

    def _check_media_type(self, media_type: str, file_name: str):
        if media_type not in SUPPORTED_MEDIA_TYPES:
            logger.info("Rejected %s: unsupported media type %r", file_name, media_type)
            raise UnsupportedMediaType()

    def _check_size(self, size: int, file_name: str):
        if size > self._max_bytes:
            logger.info("Rejected %s: %d bytes exceeds limit of %d", file_name, size, self._max_bytes)
            raise FileTooLarge()

    @staticmethod
    def _verify_image(data: bytes, media_type: str, file_name: str) -> Tuple[int, int]:
        """Confirm the payload decodes as the declared format and return its size."""
        try:
            with Image.open(io.BytesIO(data)) as img:
                if img.format not in _PIL_FORMATS[media_type]:
                    raise UnreadableImage(
                        f"The file content does not match its declared type ({media_type})."
                    )
                img.verify()
                return img.size
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            logger.info("Rejected %s: cannot decode image (%s)", file_name, type(e).__name__)
            raise UnreadableImage() from e


def create_thumbnail(image: UploadedImage, size: Tuple[int, int] = (128, 128)) -> bytes:
    """Create a JPEG thumbnail of an uploaded image and return it as bytes."""
    _, data = decode_data_url(image.data_url)
    with Image.open(io.BytesIO(data)) as img:
        img.thumbnail(size, Image.Resampling.LANCZOS)
        if img.mode != "RGB":
            img = img.convert("RGB")
        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=80)
    return buffer.getvalue()
