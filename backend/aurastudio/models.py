# backend/aurastudio/models.py

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------- Requests ----------------
# Fields are loosely typed on purpose: the routes produce their own 400s
# ("Description is required", ...) instead of FastAPI's 422.


class AuraRequest(BaseModel):
    photo: Any = None
    description: Any = None


class GenerationRequest(BaseModel):
    prompt: Any = None


class ImagenRequest(CamelModel):
    prompt: Any = None
    number_of_images: Any = 4


class UploadRequest(CamelModel):
    file: Any = None
    file_name: Any = None


# ---------------- Results ----------------


class AuraResult(CamelModel):
    rating: Optional[int] = None
    aura_summary: str = ""
    partner_persona: str = ""
    pollinations_prompt: str
    color_palette: List[str] = []
    guidance: str = ""


class AuraResponse(AuraResult):
    success: bool = True
    pollinations_url: Optional[str] = None


class GenerationResult(CamelModel):
    success: bool = True
    image: str
    mime_type: str
    id: str


class ImagenImage(CamelModel):
    image_bytes: str
    index: int


class ImagenResult(CamelModel):
    success: bool = True
    images: List[ImagenImage]
    prompt: str
    number_of_images: int


class UploadResult(CamelModel):
    success: bool = True
    data: Dict[str, Any]
    url: str
    file_id: str


class UploadAuthParams(CamelModel):
    token: str
    expire: int
    signature: str
    public_key: str


class VariantsResult(BaseModel):
    original: str
    variants: Dict[str, str]


class PollinationsResult(BaseModel):
    url: str
    prompt: str
