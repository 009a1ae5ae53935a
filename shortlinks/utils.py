import math
import secrets
import string
from typing import Any, Optional

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits

_http_url = TypeAdapter(AnyHttpUrl)

def generate_random_code(length: int = 7) -> str:
    # byte % 62 leaves a slight bias towards the first 8 symbols; kept as is
    return "".join(ALPHABET[b % len(ALPHABET)] for b in secrets.token_bytes(length))

def is_valid_http_url(value: Any) -> bool:
    """Absolute http/https URL with a host."""
    if not isinstance(value, str) or not value:
        return False
    try:
        _http_url.validate_python(value)
    except ValidationError:
        return False
    return True

def parse_number(raw: Optional[str], default: int) -> int:
    """Lenient query-string number: unusable or zero values fall back to ``default``."""
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if not math.isfinite(value) or value == 0:
        return default
    return int(value)
