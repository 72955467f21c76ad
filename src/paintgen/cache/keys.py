"""Cache key generation: canonical, order-independent fingerprints."""

from __future__ import annotations

import hashlib
import json
from typing import Any

from pydantic import BaseModel

_SCALARS = (str, int, float, bool, type(None))


def fingerprint_key(prefix: str, params: Any) -> str:
    """Derive a cache key from a category prefix and a parameter value.

    Equal values produce equal keys regardless of how they were built:
    dict keys are sorted, sets are sorted, tuples become lists, pydantic
    models are dumped and raw bytes are replaced by their SHA256.

    Raises TypeError for values with no unambiguous JSON form (non-string
    dict keys, arbitrary objects), since stringifying them would let
    unequal params share a key.
    """
    return f"{prefix}:{_hash_canonical(params)}"


def hash_image(image_bytes: bytes) -> str:
    """Hash image bytes for cache key use."""
    return hashlib.sha256(image_bytes).hexdigest()


def canonical_json(value: Any) -> str:
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def _hash_canonical(value: Any) -> str:
    """Deterministic hash of any JSON-like value via sorted JSON."""
    serialized = canonical_json(_normalize(value))
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()


def _normalize(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return _normalize(value.model_dump(mode="json"))
    if isinstance(value, dict):
        for key in value:
            if not isinstance(key, str):
                raise TypeError(
                    f"Cache params need string dict keys, got {type(key).__name__}: {key!r}"
                )
        return {k: _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_normalize(v) for v in value), key=canonical_json)
    if isinstance(value, (bytes, bytearray)):
        return {"sha256": hash_image(bytes(value))}
    if isinstance(value, _SCALARS):
        return value
    raise TypeError(f"Cannot fingerprint value of type {type(value).__name__}")
