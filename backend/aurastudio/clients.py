# backend/aurastudio/clients.py
"""
Provider clients.

One accessor per provider. Each checks its credentials first and raises
ConfigurationError before anything touches the network, then hands out a
client built once per process. Routes receive these through Depends(), so
tests replace them with app.dependency_overrides.
"""

import threading
from functools import lru_cache

from google import genai
from groq import Groq
from imagekitio import ImageKit

from .config import get_settings
from .errors import ConfigurationError
from .logging_config import log

_lock = threading.Lock()


@lru_cache
def _groq(api_key: str) -> Groq:
    log.info("Initialising Groq client")
    return Groq(api_key=api_key)


@lru_cache
def _genai(api_key: str) -> genai.Client:
    log.info("Initialising Gemini client")
    return genai.Client(api_key=api_key)


@lru_cache
def _imagekit(public_key: str, private_key: str, url_endpoint: str) -> ImageKit:
    log.info("Initialising ImageKit client")
    return ImageKit(
        public_key=public_key,
        private_key=private_key,
        url_endpoint=url_endpoint,
    )


def get_groq_client() -> Groq:
    settings = get_settings()
    if not settings.groq_api_key:
        raise ConfigurationError("GROQ_API_KEY environment variable is required")
    with _lock:
        return _groq(settings.groq_api_key)


def get_genai_client() -> genai.Client:
    settings = get_settings()
    if not settings.gemini_api_key:
        raise ConfigurationError("Missing GOOGLE_GEMINI_API_KEY environment variable")
    with _lock:
        return _genai(settings.gemini_api_key)


def get_imagekit_client() -> ImageKit:
    settings = get_settings()
    missing = settings.missing_imagekit()
    if missing:
        log.error(
            "Missing ImageKit environment variables: hasPublicKey=%s hasPrivateKey=%s hasUrlEndpoint=%s",
            "IMAGEKIT_PUBLIC_KEY" not in missing,
            "IMAGEKIT_PRIVATE_KEY" not in missing,
            "IMAGEKIT_URL_ENDPOINT" not in missing,
        )
        raise ConfigurationError("ImageKit configuration is missing", details=missing)
    with _lock:
        return _imagekit(
            settings.imagekit_public_key,
            settings.imagekit_private_key,
            settings.imagekit_url_endpoint,
        )


def reset_clients() -> None:
    """Forget cached settings and clients, e.g. after rotating credentials."""
    with _lock:
        get_settings.cache_clear()
        _groq.cache_clear()
        _genai.cache_clear()
        _imagekit.cache_clear()
