# cinema_brew/lib/imaging.py
from __future__ import annotations
import base64
import re
from io import BytesIO
from typing import Optional

from PIL import Image

_DATAURL_RE = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<b64>.+)$", re.DOTALL)

def to_data_uri(b64: str, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{b64}"

def decode_data_uri(data_uri: str) -> tuple[bytes, str]:
    """Return (bytes, mime) for a data:*;base64 URI. Raises ValueError otherwise."""
    m = _DATAURL_RE.match(data_uri.strip())
    if not m:
        raise ValueError("not a base64 data URI")
    return base64.b64decode(m.group("b64")), m.group("mime").lower()

def open_data_uri_image(data_uri: str) -> Optional[Image.Image]:
    """Decode a storyboard frame into a PIL image; None if it is empty or unreadable."""
    if not data_uri:
        return None
    try:
        data, _ = decode_data_uri(data_uri)
        img = Image.open(BytesIO(data))
        img.load()
    except (ValueError, OSError):
        return None
    # reportlab can't draw palette/alpha PNGs reliably
    return img.convert("RGB")
