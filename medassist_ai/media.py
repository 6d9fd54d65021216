"""
Reading staged image and audio files for multimodal requests.

Files belong to the caller: they are read here, never moved or deleted.
"""
import asyncio
import base64
import io
import logging
import mimetypes
import os
from dataclasses import dataclass
from typing import Iterable, Optional

from PIL import Image, UnidentifiedImageError

from .input_sanitization import MAX_UPLOAD_BYTES, is_supported_image_type

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME = "image/jpeg"
DEFAULT_AUDIO_MIME = "audio/webm"


@dataclass(frozen=True)
class EncodedImage:
    path: str
    mime_type: str
    data: bytes

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"


@dataclass(frozen=True)
class AudioClip:
    path: str
    mime_type: str
    data: bytes

    @property
    def filename(self) -> str:
        return os.path.basename(self.path)

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


def detect_image_mime(data: bytes) -> str:
    """Identify the image format with Pillow; JPEG when it cannot tell."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            fmt = image.format
    except (UnidentifiedImageError, OSError):
        logger.warning("Could not identify image format, assuming JPEG")
        return DEFAULT_IMAGE_MIME
    mime = Image.MIME.get(fmt or "", DEFAULT_IMAGE_MIME)
    if not is_supported_image_type(mime):
        logger.warning(f"Image format {fmt} is not JPEG/PNG; sending as {mime}")
    return mime


def read_image(path: str) -> Optional[EncodedImage]:
    if not os.path.isfile(path):
        logger.warning(f"Image not found, skipping: {path}")
        return None
    if os.path.getsize(path) > MAX_UPLOAD_BYTES:
        logger.warning(f"Image exceeds {MAX_UPLOAD_BYTES} bytes, skipping: {path}")
        return None
    with open(path, "rb") as fh:
        data = fh.read()
    return EncodedImage(path=path, mime_type=detect_image_mime(data), data=data)


def read_audio(path: Optional[str]) -> Optional[AudioClip]:
    if not path:
        return None
    if not os.path.isfile(path):
        logger.warning(f"Audio file not found, ignoring: {path}")
        return None
    with open(path, "rb") as fh:
        data = fh.read()
    mime, _ = mimetypes.guess_type(path)
    if mime and mime.startswith("video/"):
        # .webm/.mp4 recordings from the browser are audio-only
        mime = "audio/" + mime.split("/", 1)[1]
    return AudioClip(path=path, mime_type=mime or DEFAULT_AUDIO_MIME, data=data)


async def load_images(paths: Iterable[str]) -> list[EncodedImage]:
    """Read every image off the event loop, preserving order."""
    images = []
    for path in paths:
        image = await asyncio.to_thread(read_image, path)
        if image is not None:
            images.append(image)
    return images


async def load_audio(path: Optional[str]) -> Optional[AudioClip]:
    if not path:
        return None
    return await asyncio.to_thread(read_audio, path)
