# frontend/api_client.py
"""
Thin requests wrapper around the backend so the Streamlit page stays
presentational.
"""

import os
from typing import Any, Dict, Optional

import requests

API_BASE = os.getenv("AURA_API_BASE", "http://127.0.0.1:8000").rstrip("/")


class ApiError(Exception):
    def __init__(self, status: int, message: str, details: Any = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.details = details


def _handle(r: requests.Response) -> Dict[str, Any]:
    try:
        payload = r.json()
    except ValueError:
        payload = {"error": r.text}

    if not r.ok:
        raise ApiError(r.status_code, payload.get("error") or f"HTTP {r.status_code}", payload.get("details"))
    return payload


def _post(path: str, body: Dict[str, Any], timeout: int) -> Dict[str, Any]:
    try:
        r = requests.post(f"{API_BASE}{path}", json=body, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise ApiError(0, f"Could not reach backend: {e}") from e
    return _handle(r)


def _get(path: str, params: Optional[Dict[str, Any]] = None, timeout: int = 15) -> Dict[str, Any]:
    try:
        r = requests.get(f"{API_BASE}{path}", params=params, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise ApiError(0, f"Could not reach backend: {e}") from e
    return _handle(r)


def analyze_aura(photo_data_url: str, description: str) -> Dict[str, Any]:
    return _post("/api/aura-analysis", {"photo": photo_data_url, "description": description}, timeout=90)


def generate_image(prompt: str) -> Dict[str, Any]:
    return _post("/api/image-generation", {"prompt": prompt}, timeout=120)


def upload_file(file_data_url: str, file_name: str) -> Dict[str, Any]:
    return _post("/api/upload", {"file": file_data_url, "fileName": file_name}, timeout=60)


def upload_variants(src: str) -> Dict[str, Any]:
    return _get("/api/upload/variants", {"src": src})


def health() -> Dict[str, Any]:
    return _get("/health", timeout=5)
