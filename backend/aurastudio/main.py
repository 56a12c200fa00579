# backend/aurastudio/main.py
from typing import Any, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .agents.aura_agent import run_aura_agent
from .agents.image_agent import run_image_agent, run_imagen_agent
from .agents.upload_agent import build_variants, get_upload_auth, run_upload
from .clients import get_genai_client, get_groq_client, get_imagekit_client
from .config import Settings, get_settings
from .errors import AuraStudioError
from .logging_config import get_metrics_snapshot, log, record_error, record_request
from .models import (
    AuraRequest,
    AuraResponse,
    GenerationRequest,
    GenerationResult,
    ImagenRequest,
    ImagenResult,
    PollinationsResult,
    UploadAuthParams,
    UploadRequest,
    UploadResult,
    VariantsResult,
)
from .pollinations import build_image_url


app = FastAPI(title="Aura Partner Studio", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==========================================================
#                      ERROR HANDLING
# ==========================================================


@app.exception_handler(AuraStudioError)
async def aura_studio_error_handler(request: Request, exc: AuraStudioError):
    record_error(exc.status_code)
    if exc.status_code >= 500:
        log.error(f"💥 {request.url.path} -> {exc.status_code}: {exc.message} ({exc.details})")
    else:
        log.warning(f"⚠️ {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # Body or query did not parse; field-level checks happen in the agents
    record_error(400)
    log.warning(f"⚠️ {request.url.path} -> 400: invalid request")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    record_error(500)
    log.exception(f"💥 Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc) or "Unknown error"})


# ==========================================================
#                      AURA ANALYSIS
# ==========================================================


@app.post("/api/aura-analysis", response_model=AuraResponse, response_model_by_alias=True)
@app.post("/api/aipartner", response_model=AuraResponse, response_model_by_alias=True)
async def aura_analysis(
    body: AuraRequest,
    client: Any = Depends(get_groq_client),
    settings: Settings = Depends(get_settings),
):
    """
    Rate the aura of a selfie + self-description and return a portrait prompt.
    """
    record_request("aura")
    result = await run_aura_agent(client, settings.groq_model, body.photo, body.description)

    return AuraResponse(
        **result.model_dump(),
        pollinations_url=build_image_url(result.pollinations_prompt),
    )


# ==========================================================
#                     IMAGE GENERATION
# ==========================================================


@app.post("/api/image-generation", response_model=GenerationResult, response_model_by_alias=True)
@app.post("/api/generate", response_model=GenerationResult, response_model_by_alias=True)
async def image_generation(
    body: GenerationRequest,
    client: Any = Depends(get_genai_client),
    settings: Settings = Depends(get_settings),
):
    record_request("image_generation")
    return await run_image_agent(client, settings.gemini_image_model, body.prompt)


@app.post("/api/imagen", response_model=ImagenResult, response_model_by_alias=True)
async def imagen_generation(
    body: ImagenRequest,
    client: Any = Depends(get_genai_client),
    settings: Settings = Depends(get_settings),
):
    record_request("imagen")
    return await run_imagen_agent(client, settings.imagen_model, body.prompt, body.number_of_images)


@app.get("/api/pollinations", response_model=PollinationsResult)
async def pollinations_url(
    prompt: str = Query(""),
    width: int = Query(768),
    height: int = Query(1024),
    seed: Optional[int] = Query(None),
):
    """Build the client-side generation URL; no call is made from here."""
    record_request("pollinations")
    url = build_image_url(prompt, width=width, height=height, seed=seed)
    return PollinationsResult(url=url, prompt=prompt.strip())


# ==========================================================
#                          UPLOADS
# ==========================================================


@app.post("/api/upload", response_model=UploadResult, response_model_by_alias=True)
async def upload(
    body: UploadRequest,
    client: Any = Depends(get_imagekit_client),
    settings: Settings = Depends(get_settings),
):
    record_request("upload")
    return await run_upload(client, body.file, body.file_name, settings.imagekit_upload_folder)


@app.get("/api/upload", response_model=UploadAuthParams, response_model_by_alias=True)
@app.get("/api/upload-auth", response_model=UploadAuthParams, response_model_by_alias=True)
@app.post("/api/upload-auth", response_model=UploadAuthParams, response_model_by_alias=True)
async def upload_auth(
    client: Any = Depends(get_imagekit_client),
    settings: Settings = Depends(get_settings),
):
    record_request("upload_auth")
    return get_upload_auth(client, settings.imagekit_public_key)


@app.get("/api/upload/variants", response_model=VariantsResult)
async def upload_variants(
    src: str = Query(""),
    client: Any = Depends(get_imagekit_client),
):
    record_request("variants")
    return build_variants(client, src)


# ==========================================================
#                     METRICS + HEALTH
# ==========================================================


@app.get("/metrics")
async def metrics():
    return get_metrics_snapshot()


@app.get("/health")
async def health(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "providers": {
            "groq": bool(settings.groq_api_key),
            "gemini": bool(settings.gemini_api_key),
            "imagekit": not settings.missing_imagekit(),
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.aurastudio.main:app", host="127.0.0.1", port=8000, reload=True)
