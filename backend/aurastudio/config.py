# backend/aurastudio/config.py
from functools import lru_cache
from typing import Annotated, Any, List, Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

load_dotenv()  # Loads .env automatically

DEFAULT_GROQ_MODEL = "meta-llama/llama-4-maverick-17b-128e-instruct"
DEFAULT_GEMINI_IMAGE_MODEL = "gemini-2.5-flash-image-preview"
DEFAULT_IMAGEN_MODEL = "imagen-4.0-generate-001"


class Settings(BaseSettings):
    """
    Provider credentials and model names, read from the environment.

    Field names map to upper-case variables (``groq_api_key`` <- ``GROQ_API_KEY``);
    the Gemini key and the ImageKit public key also accept older names.
    """

    model_config = SettingsConfigDict(frozen=True, extra="ignore", env_ignore_empty=True)

    groq_api_key: Optional[str] = None
    groq_model: str = DEFAULT_GROQ_MODEL

    gemini_api_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("GOOGLE_GEMINI_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )
    gemini_image_model: str = DEFAULT_GEMINI_IMAGE_MODEL
    imagen_model: str = DEFAULT_IMAGEN_MODEL

    imagekit_public_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("IMAGEKIT_PUBLIC_KEY", "NEXT_PUBLIC_IMAGEKIT_PUBLIC_KEY"),
    )
    imagekit_private_key: Optional[str] = None
    imagekit_url_endpoint: Optional[str] = None
    imagekit_upload_folder: str = "/uploads"

    # Comma separated in the environment, not JSON
    cors_origins: Annotated[List[str], NoDecode] = ["*"]

    @field_validator(
        "groq_api_key",
        "gemini_api_key",
        "imagekit_public_key",
        "imagekit_private_key",
        "imagekit_url_endpoint",
        mode="before",
    )
    @classmethod
    def _blank_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [o.strip() for o in value.split(",") if o.strip()] or ["*"]
        return value

    def missing_imagekit(self) -> List[str]:
        missing = []
        if not self.imagekit_public_key:
            missing.append("IMAGEKIT_PUBLIC_KEY")
        if not self.imagekit_private_key:
            missing.append("IMAGEKIT_PRIVATE_KEY")
        if not self.imagekit_url_endpoint:
            missing.append("IMAGEKIT_URL_ENDPOINT")
        return missing


def load_settings() -> Settings:
    return Settings()


@lru_cache
def get_settings() -> Settings:
    return load_settings()
