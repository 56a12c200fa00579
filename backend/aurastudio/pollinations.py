# backend/aurastudio/pollinations.py
"""
Pollinations renders an image straight from a URL, so "generating" a portrait
here only means building that URL. The browser (or st.image) fetches it.
"""

from typing import Optional
from urllib.parse import quote, urlencode

from .errors import ValidationError

POLLINATIONS_BASE = "https://pollinations.ai/p/"


def build_image_url(
    prompt: str,
    width: int = 768,
    height: int = 1024,
    seed: Optional[int] = None,
    nologo: bool = True,
    model: Optional[str] = None,
) -> str:
    prompt = (prompt or "").strip()
    if not prompt:
        raise ValidationError("Prompt is required")
    if width <= 0 or height <= 0:
        raise ValidationError("Width and height must be positive")

    params = {"width": width, "height": height}
    if seed is not None:
        params["seed"] = seed
    if nologo:
        params["nologo"] = "true"
    if model:
        params["model"] = model

    return f"{POLLINATIONS_BASE}{quote(prompt, safe='')}?{urlencode(params)}"
