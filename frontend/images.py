# frontend/images.py
import base64
import io

from PIL import Image, ImageOps

MAX_SIDE = 1024


def image_to_data_url(raw: bytes, max_side: int = MAX_SIDE, quality: int = 85) -> str:
    """
    Downscale a selfie and return it as a JPEG data URL.
    Keeps uploads well under the backend's ~5MB limit.
    """
    img = Image.open(io.BytesIO(raw))
    img = ImageOps.exif_transpose(img)
    img.thumbnail((max_side, max_side))
    img = img.convert("RGB")

    buffered = io.BytesIO()
    img.save(buffered, format="JPEG", quality=quality)
    b64 = base64.b64encode(buffered.getvalue()).decode("utf-8")
    return f"data:image/jpeg;base64,{b64}"


def bytes_to_data_url(raw: bytes, mime_type: str) -> str:
    b64 = base64.b64encode(raw).decode("utf-8")
    return f"data:{mime_type or 'application/octet-stream'};base64,{b64}"
