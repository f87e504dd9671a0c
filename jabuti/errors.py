"""
jabuti/errors.py - Exception hierarchy

Two families, reported differently:
    - ParseError: the contract document is not valid Jabuti (user-facing).
    - CanonicalizationError: the syntax tree does not have the shape the
      canonicalizer expects (compiler-internal, grammar/canonicalizer mismatch).
"""

from typing import Optional


class JabutiError(Exception):
    """Base class for all errors raised by this package."""


class ParseError(JabutiError):
    """Raised when the front end rejects the contract source text."""

    def __init__(self, message: str, line: Optional[int] = None, col: Optional[int] = None):
        self.line = line
        self.col = col
        super().__init__(message)


class CanonicalizationError(JabutiError):
    """Raised when a syntax tree cannot be lowered into the canonical model."""


class MalformedTreeError(CanonicalizationError):
    """
    Raised when a node lacks a child the canonicalizer reads by position.

    A missing slot would otherwise produce a corrupt synthesized identifier
    and silently invalid generated code, so it aborts the whole call.
    """

    def __init__(self, kind, slot, detail: Optional[str] = None):
        self.kind = kind
        self.slot = slot
        label = getattr(kind, "value", kind)
        message = f"internal compiler error: {label} node has no child at slot {slot!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
