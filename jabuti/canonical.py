"""
jabuti/canonical.py - Canonical serialization of the Contract model
"""
import hashlib
import json
from typing import Any

from .models import Contract


def canonical_json(obj: Any) -> str:
    """
    Canonical JSON serialization:
        - sorted keys
        - no whitespace separation
        - ASCII-only output (non-ASCII escaped)
        - reject NaN/Infinity (allow_nan=False)
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True, allow_nan=False)


def contract_json(contract: Contract) -> str:
    """Canonical JSON of a Contract's plain structured form."""
    return canonical_json(contract.to_dict())


def contract_digest(contract: Contract) -> str:
    """
    SHA-256 of the canonical JSON bytes.

    Two canonicalizations of the same source must produce the same digest;
    generators use it to tell whether a contract changed.
    """
    return hashlib.sha256(contract_json(contract).encode("utf-8")).hexdigest()
