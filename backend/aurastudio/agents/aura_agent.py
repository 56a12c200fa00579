# backend/aurastudio/agents/aura_agent.py

import asyncio
import json
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..errors import (
    MalformedOutputError,
    MissingGenerationPromptError,
    PayloadTooLarge,
    UnexpectedResponseError,
    UpstreamError,
    ValidationError,
)
from ..logging_config import log, measure
from ..models import AuraResult
from ..utils import DataUrl, parse_data_url

# Roughly 5 MB of image once the base64 overhead is taken off
MAX_PHOTO_CHARS = 7 * 1024 * 1024

AURA_SYSTEM = """
You are an empathetic "AI Partner Aura Analyst". Review the person's selfie and short self-description.

Return a JSON object ONLY, using this exact schema:

{
  "rating": number (1-10, integer),
  "aura_summary": string (2-3 sentences explaining the vibe you see),
  "partner_persona": string (a playful one-sentence description of their ideal AI partner),
  "pollinations_prompt": string (rich, single prompt for generating a stylised AI partner portrait matching the person),
  "color_palette": string[] (3-5 evocative color words),
  "guidance": string (one friendly suggestion for connecting with the AI partner)
}

Ensure the prompt references aesthetic cues that align with the photo + description,
avoids explicit mention of the user or real names, and stays positive.
"""

# Accepted keys per field, highest precedence first.
RATING_KEYS = ("rating", "score", "aura_score")
SUMMARY_KEYS = ("aura_summary", "summary")
PERSONA_KEYS = ("partner_persona", "persona")
PROMPT_KEYS = ("pollinations_prompt", "generated_prompt")
GUIDANCE_KEYS = ("guidance", "tip")
PALETTE_KEY = "color_palette"


# ---------------------------
# Request validation
# ---------------------------

def validate_aura_request(photo: Any, description: Any) -> Tuple[str, DataUrl, str]:
    """
    Check the selfie and description and return (data_url, parsed, description).
    Every failure here is a client error; nothing has been sent upstream yet.
    """
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("Description is required")

    if not isinstance(photo, str) or not photo:
        raise ValidationError("Photo is required")

    data_url = photo.strip()
    if not data_url.startswith("data:"):
        raise ValidationError("Photo must be a base64 data URL")

    if len(data_url) > MAX_PHOTO_CHARS:
        raise PayloadTooLarge("Photo is too large. Please upload an image under ~5MB.")

    return data_url, parse_data_url(data_url), description.strip()


def build_messages(description: str, data_url: str, mime_type: str) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": AURA_SYSTEM.strip()},
        {
            "role": "user",
            "content": [
                {
                    "type": "text",
                    "text": (
                        f"User description: {description}\n\n"
                        "Respond strictly with JSON following the provided schema."
                    ),
                },
                {
                    "type": "image_url",
                    "image_url": {"url": data_url, "mime_type": mime_type},
                },
            ],
        },
    ]


# ---------------------------
# Output normalisation
# ---------------------------

def _first(raw: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def coerce_rating(value: Any) -> Optional[int]:
    """Round half up, then clamp to 1-10. Anything non-numeric gives None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None

    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(number):
        return None

    return int(min(max(math.floor(number + 0.5), 1), 10))


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return json.dumps(value, ensure_ascii=False)


def normalize_aura_output(raw: Mapping[str, Any]) -> AuraResult:
    palette = raw.get(PALETTE_KEY)
    color_palette = [item if isinstance(item, str) else json.dumps(item, ensure_ascii=False)
                     for item in palette] if isinstance(palette, list) else []

    prompt = _text(_first(raw, PROMPT_KEYS))
    if not prompt:
        raise MissingGenerationPromptError("Analysis did not return a generation prompt")

    return AuraResult(
        rating=coerce_rating(_first(raw, RATING_KEYS)),
        aura_summary=_text(_first(raw, SUMMARY_KEYS)),
        partner_persona=_text(_first(raw, PERSONA_KEYS)),
        pollinations_prompt=prompt,
        color_palette=color_palette,
        guidance=_text(_first(raw, GUIDANCE_KEYS)),
    )


def parse_model_content(content: Any) -> Dict[str, Any]:
    if not isinstance(content, str):
        log.error("Unexpected response content: %r", content)
        raise UnexpectedResponseError("Unexpected response from analysis model")

    try:
        parsed = json.loads(content)
    except (ValueError, RecursionError) as e:
        # ValueError also covers integers past the int-to-str digit limit
        log.error("Failed to parse analysis JSON: %s (%s)", content[:300], e)
        raise MalformedOutputError("Failed to parse analysis output") from e

    if not isinstance(parsed, dict):
        log.error("Analysis JSON is not an object: %s", content[:300])
        raise MalformedOutputError("Failed to parse analysis output")

    return parsed


def _message_content(completion: Any) -> Any:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None)


# ---------------------------
# Pipeline
# ---------------------------

async def run_aura_agent(client: Any, model: str, photo: Any, description: Any) -> AuraResult:
    """
    Aura agent:
    - Validates the selfie data URL and the description.
    - Sends both to the vision model with a strict JSON schema.
    - Normalises whatever JSON comes back into an AuraResult.

    Single attempt only; a failed call is reported, never retried.
    """
    data_url, parsed_url, description = validate_aura_request(photo, description)
    messages = build_messages(description, data_url, parsed_url.mime_type)

    log.info("🔮 Aura Agent started (mime=%s, %d chars)", parsed_url.mime_type, len(data_url))

    try:
        with measure("groq"):
            # Run the sync SDK in a worker thread so the event loop stays free
            completion = await asyncio.to_thread(
                client.chat.completions.create,
                model=model,
                temperature=0.65,
                max_completion_tokens=800,
                response_format={"type": "json_object"},
                messages=messages,
            )
    except Exception as e:
        log.error("❌ Groq API error: %s", e)
        raise UpstreamError("Aura analysis failed", details=str(e)) from e

    raw = parse_model_content(_message_content(completion))
    result = normalize_aura_output(raw)

    log.info("✅ Aura Agent complete (rating=%s)", result.rating)
    return result
