"""
License key format.

Keys look like ``APP-XXXX-XXXX-XXXX``. Generated segments draw from a
32-character alphabet without the look-alike characters 0, O, 1 and I.
Keys supplied by callers are trimmed and uppercased before being
checked against the format.
"""

import re
import secrets
from typing import Optional

from core.domain.exceptions import InvalidInputError, InvalidLicenseKeyError

KEY_PREFIX = "APP"
ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
SEGMENT_LENGTH = 4
SEGMENT_COUNT = 3
KEY_PATTERN = re.compile(r"^APP-[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}$")


def generate_license_key(rng=None) -> str:
    """
    Generate a candidate license key.

    Uniqueness is not checked here; see ``allocate_license``.

    Args:
        rng: Optional random source with a ``choice`` method, such as a
            seeded ``random.Random``. Defaults to the ``secrets`` CSPRNG.

    Returns:
        Key string in APP-XXXX-XXXX-XXXX format
    """
    choose = rng.choice if rng is not None else secrets.choice
    segments = [
        "".join(choose(ALPHABET) for _ in range(SEGMENT_LENGTH)) for _ in range(SEGMENT_COUNT)
    ]
    return f"{KEY_PREFIX}-{'-'.join(segments)}"


def normalize_license_key(raw_key: Optional[str]) -> str:
    """
    Trim, uppercase and validate a caller-supplied key.

    Args:
        raw_key: Key as received

    Returns:
        Normalized key

    Raises:
        InvalidInputError: If the key is missing
        InvalidLicenseKeyError: If the key does not match the format
    """
    if raw_key is None or not str(raw_key).strip():
        raise InvalidInputError("License key is required", code="LICENSE_KEY_REQUIRED")
    key = str(raw_key).strip().upper()
    if not is_well_formed(key):
        raise InvalidLicenseKeyError()
    return key


def is_well_formed(key: str) -> bool:
    return bool(KEY_PATTERN.match(key or ""))
