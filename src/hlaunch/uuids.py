"""Profile identifier normalization and formatting."""

import hashlib

HEX_DIGITS = frozenset("0123456789abcdef")
NORMALIZED_LENGTH = 32


def normalize_uuid(value: str | None) -> str | None:
    """Strip hyphens and lower-case; return None unless 32 hex digits remain."""
    if value is None:
        return None
    normalized = value.replace("-", "").lower()
    if len(normalized) != NORMALIZED_LENGTH:
        return None
    if not set(normalized) <= HEX_DIGITS:
        return None
    return normalized


def format_uuid(value: str) -> str:
    """Return ``value`` as 8-4-4-4-12 groups, or unchanged if it is not a UUID."""
    normalized = normalize_uuid(value)
    if normalized is None:
        return value
    return "-".join(
        [
            normalized[:8],
            normalized[8:12],
            normalized[12:16],
            normalized[16:20],
            normalized[20:],
        ]
    )


def uuids_match(left: str | None, right: str | None) -> bool:
    """Compare two identifiers ignoring case and hyphens. Invalid ids never match."""
    normalized = normalize_uuid(left)
    return normalized is not None and normalized == normalize_uuid(right)


def offline_uuid(name: str) -> str:
    """Derive the name-based (version 3) UUID used for offline players."""
    seed = f"OfflinePlayer:{name}".encode()
    digest = bytearray(hashlib.md5(seed, usedforsecurity=False).digest())
    digest[6] = (digest[6] & 0x0F) | 0x30
    digest[8] = (digest[8] & 0x3F) | 0x80
    return format_uuid(digest.hex())
