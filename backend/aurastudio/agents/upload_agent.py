# backend/aurastudio/agents/upload_agent.py

import asyncio
from typing import Any, Dict

from imagekitio.models.UploadFileRequestOptions import UploadFileRequestOptions

from ..errors import AuraStudioError, UploadError, ValidationError
from ..logging_config import log, measure
from ..models import UploadAuthParams, UploadResult, VariantsResult

UPLOAD_HINT = "Please check your ImageKit credentials and configuration"

# Preset transformation chains shown next to an uploaded image.
VARIANTS: Dict[str, list] = {
    "optimized": [
        {"width": "300", "height": "300", "crop": "maintain_ratio"},
        {"quality": "80", "format": "webp"},
    ],
    "background_removed": [
        {"width": "200", "height": "200"},
        {"e-bgremove": "-"},
    ],
    "grayscale": [
        {"width": "200", "height": "200"},
        {"effect_gray": "-"},
    ],
    "border": [
        {"width": "200", "height": "200"},
        {"border": "5_FF0000"},
    ],
}


def _raw_response(result: Any) -> Dict[str, Any]:
    metadata = getattr(result, "response_metadata", None)
    raw = getattr(metadata, "raw", None)
    if isinstance(raw, dict):
        return raw
    return {
        "fileId": getattr(result, "file_id", None),
        "name": getattr(result, "name", None),
        "url": getattr(result, "url", None),
    }


async def run_upload(client: Any, file: Any, file_name: Any, folder: str) -> UploadResult:
    if not file or not file_name:
        raise ValidationError("File and fileName are required")

    log.info("📤 Attempting to upload file: %s", file_name)

    try:
        with measure("imagekit"):
            result = await asyncio.to_thread(
                client.upload_file,
                file=file,
                file_name=str(file_name),
                options=UploadFileRequestOptions(folder=folder),
            )
    except Exception as e:
        log.error("❌ ImageKit upload error: %s", e)
        raise UploadError(str(e) or "Upload failed", details=UPLOAD_HINT) from e

    raw = _raw_response(result)
    url = getattr(result, "url", None) or raw.get("url") or ""
    file_id = getattr(result, "file_id", None) or raw.get("fileId") or ""

    log.info("✅ Upload successful: %s", file_id)
    return UploadResult(data=raw, url=url, file_id=file_id)


def get_upload_auth(client: Any, public_key: str) -> UploadAuthParams:
    """Short-lived signed credentials so the browser can upload directly."""
    try:
        params = client.get_authentication_parameters()
        return UploadAuthParams(
            token=params["token"],
            expire=int(params["expire"]),
            signature=params["signature"],
            public_key=public_key,
        )
    except Exception as e:
        log.error("Error generating upload auth params: %s", e)
        raise AuraStudioError("Failed to generate upload authentication parameters") from e


def build_variants(client: Any, src: Any) -> VariantsResult:
    src = src.strip() if isinstance(src, str) else ""
    if not src:
        raise ValidationError("src is required")

    variants = {
        name: client.url({"src": src, "transformation": chain})
        for name, chain in VARIANTS.items()
    }
    return VariantsResult(original=src, variants=variants)
