"""
Canonical JSON Serialization

Deterministic JSON with sorted keys, used to fingerprint case splits,
proof lemmas and queries so that identical objects hash identically
across processes and search branches.
"""

import json
import hashlib
from enum import Enum
from typing import Any

import numpy as np


def _encode_default(obj: Any) -> Any:
    """Fallback encoder for enums and numpy scalars/arrays."""
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    return str(obj)


def canonical_dumps(obj: Any, indent: int = None) -> str:
    """
    Canonical JSON serialization with sorted keys.

    Args:
        obj: Object to serialize
        indent: Indentation level (None for compact)

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(',', ':') if indent is None else None,
        indent=indent,
        default=_encode_default
    )


def canonical_hash(obj: Any) -> str:
    """SHA-256 hex digest of the canonical JSON form of obj."""
    return hashlib.sha256(canonical_dumps(obj).encode()).hexdigest()
