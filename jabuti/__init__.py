"""
Jabuti Canonicalizer - semantic-analysis stage of the Jabuti smart-contract compiler.

Public API:
- compile_contract: source text -> canonical Contract (parse + canonicalize)
- parse_contract: source text -> SyntaxNode tree
- canonicalize: contract SyntaxNode -> Contract
- contract_json / contract_digest: canonical serialization of a Contract
"""

from .canonical import contract_digest, contract_json
from .canonicalizer import canonicalize, compile_contract
from .errors import CanonicalizationError, JabutiError, MalformedTreeError, ParseError
from .frontend import parse_contract

# Derive version from package metadata
try:
    from importlib.metadata import version
    __version__ = version("jabuti-canonical")
except Exception:
    __version__ = "1.0.0"

__all__ = [
    "compile_contract",
    "parse_contract",
    "canonicalize",
    "contract_json",
    "contract_digest",
    "JabutiError",
    "ParseError",
    "CanonicalizationError",
    "MalformedTreeError",
]
