# backend/aurastudio/utils.py
import base64
import re
from typing import NamedTuple, Union

from .errors import ValidationError

_HEADER_RE = re.compile(r"^data:([^;]+);base64$")


class DataUrl(NamedTuple):
    mime_type: str
    data: str


def parse_data_url(data_url: str) -> DataUrl:
    """
    Split a `data:<mime>;base64,<payload>` string into its mime type and payload.
    The payload is not decoded.
    """
    header, sep, payload = data_url.partition(",")
    if not sep:
        raise ValidationError("Invalid data URL supplied for photo")

    match = _HEADER_RE.match(header)
    if not match or not payload:
        raise ValidationError("Invalid data URL supplied for photo")

    return DataUrl(mime_type=match.group(1), data=payload)


def to_base64(data: Union[bytes, str]) -> str:
    # The genai SDK hands back raw bytes; fakes and older payloads are already base64
    if isinstance(data, (bytes, bytearray)):
        return base64.b64encode(bytes(data)).decode("utf-8")
    return data
