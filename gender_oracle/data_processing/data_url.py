import base64
import io
import mimetypes
import re
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from gender_oracle.apis.errors import InvalidInputFormat

DATA_URL_RE = re.compile(r"^data:([^;]+);base64,(.+)$", re.DOTALL)

DEFAULT_MIME_TYPE = "application/octet-stream"


def parse_data_url(data_url: str) -> Tuple[str, str]:
    """
    Split `data:<mime>;base64,<payload>` into (mime_type, payload).

    The payload is returned exactly as it appears after the first comma;
    it is not decoded or re-encoded.
    """
    if not isinstance(data_url, str):
        raise InvalidInputFormat("Invalid image data format.")
    m = DATA_URL_RE.match(data_url)
    if not m:
        raise InvalidInputFormat("Invalid image data format.")
    return m.group(1), m.group(2)


def bytes_to_data_url(data: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def sniff_mime_type(data: bytes, filename: str = None) -> str:
    """
    Best-effort MIME type for raw image bytes.

    Pillow identifies the format from the header; the file extension is
    the fallback for anything Pillow cannot open.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            mime = Image.MIME.get(img.format or "")
        if mime:
            return mime
    except (UnidentifiedImageError, OSError):
        pass

    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return DEFAULT_MIME_TYPE


def file_to_data_url(path: str) -> str:
    with open(path, "rb") as f:
        data = f.read()
    return bytes_to_data_url(data, sniff_mime_type(data, filename=path))


def image_to_data_url(img: Image.Image, fmt: str = "JPEG") -> str:
    """Encode a PIL image (converted to RGB for JPEG) as a data URL."""
    if fmt.upper() == "JPEG":
        img = img.convert("RGB")
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    mime = Image.MIME.get(fmt.upper(), DEFAULT_MIME_TYPE)
    return bytes_to_data_url(buf.getvalue(), mime)


__all__ = [
    "parse_data_url",
    "bytes_to_data_url",
    "sniff_mime_type",
    "file_to_data_url",
    "image_to_data_url",
]
