# backend/aurastudio/agents/image_agent.py

import asyncio
import uuid
from typing import Any, List, Optional

from ..errors import GenerationError, NoImageReturnedError, ValidationError
from ..logging_config import log, measure
from ..models import GenerationResult, ImagenImage, ImagenResult
from ..utils import to_base64

DEFAULT_MIME_TYPE = "image/png"
MAX_IMAGEN_IMAGES = 4


def require_prompt(prompt: Any) -> str:
    prompt = prompt.strip() if isinstance(prompt, str) else ""
    if not prompt:
        raise ValidationError("Prompt is required")
    return prompt


def _parts(candidate: Any) -> List[Any]:
    content = getattr(candidate, "content", None)
    return list(getattr(content, "parts", None) or [])


def extract_inline_image(candidates: List[Any]) -> Optional[GenerationResult]:
    """First candidate part carrying inline image data, in order."""
    for candidate in candidates:
        for part in _parts(candidate):
            inline = getattr(part, "inline_data", None)
            data = getattr(inline, "data", None)
            if data:
                return GenerationResult(
                    image=to_base64(data),
                    mime_type=getattr(inline, "mime_type", None) or DEFAULT_MIME_TYPE,
                    id=str(uuid.uuid4()),
                )
    return None


def collect_text(candidates: List[Any]) -> str:
    texts = []
    for candidate in candidates:
        for part in _parts(candidate):
            text = getattr(part, "text", None)
            if isinstance(text, str) and text:
                texts.append(text)
    return "\n".join(texts)


async def run_image_agent(client: Any, model: str, prompt: Any) -> GenerationResult:
    """
    Generate one image with Gemini.

    The id is minted locally, so two identical prompts give two artefacts.
    """
    prompt = require_prompt(prompt)
    log.info("🎨 Image Agent started (model=%s)", model)

    try:
        with measure("gemini"):
            response = await asyncio.to_thread(
                client.models.generate_content,
                model=model,
                contents=[{"role": "user", "parts": [{"text": prompt}]}],
            )
    except Exception as e:
        log.error("❌ Gemini image generation error: %s", e)
        raise GenerationError(str(e) or "Image generation failed") from e

    candidates = list(getattr(response, "candidates", None) or [])
    result = extract_inline_image(candidates)
    if result is None:
        details = collect_text(candidates)
        log.warning("⚠️ Gemini returned no image data (%d candidates)", len(candidates))
        raise NoImageReturnedError("No image data returned from Gemini", details=details)

    log.info("✅ Image Agent complete (mime=%s)", result.mime_type)
    return result


def _number_of_images(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("numberOfImages must be an integer between 1 and 4")
    if not 1 <= value <= MAX_IMAGEN_IMAGES:
        raise ValidationError("numberOfImages must be an integer between 1 and 4")
    return value


async def run_imagen_agent(client: Any, model: str, prompt: Any, number_of_images: Any = 4) -> ImagenResult:
    """Batch generation with Imagen; images without bytes are skipped."""
    prompt = require_prompt(prompt)
    count = _number_of_images(number_of_images)

    try:
        with measure("imagen"):
            response = await asyncio.to_thread(
                client.models.generate_images,
                model=model,
                prompt=prompt,
                config={"number_of_images": count},
            )
    except Exception as e:
        log.error("❌ Error generating images: %s", e)
        raise GenerationError("Failed to generate images", details=str(e)) from e

    images: List[ImagenImage] = []
    for generated in getattr(response, "generated_images", None) or []:
        image = getattr(generated, "image", None)
        image_bytes = getattr(image, "image_bytes", None)
        if image_bytes:
            images.append(ImagenImage(image_bytes=to_base64(image_bytes), index=len(images) + 1))

    log.info("✅ Imagen returned %d/%d images", len(images), count)
    return ImagenResult(images=images, prompt=prompt, number_of_images=count)
