"""
jabuti/models.py - Canonical Contract Model

Language-agnostic representation consumed by the code generators. Every value
is created fresh by one canonicalization call and never mutated afterwards.
to_dict() renders the plain structured form the templates read (camelCase
keys, terms tagged by "type").
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from .lexicon import TERM_TYPE_MESSAGE_CONTENT, TERM_TYPE_TIMEOUT


@dataclass(frozen=True)
class IdentifierName:
    """One logical symbol rendered in the three casing conventions."""
    pascal: str
    camel: str
    snake: str

    def to_dict(self) -> Dict[str, str]:
        return {"pascal": self.pascal, "camel": self.camel, "snake": self.snake}


@dataclass(frozen=True)
class Variable:
    """A typed input of a clause. Identity (for dedup) is name.camel."""
    name: IdentifierName
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name.to_dict(), "type": self.type}


@dataclass(frozen=True)
class Literal:
    """A numeric operand carried through as raw source text."""
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"literal": self.value}


Operand = Union[Variable, Literal]


@dataclass(frozen=True)
class TimeoutTerm:
    name: IdentifierName
    value: str
    type: str = field(default=TERM_TYPE_TIMEOUT, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name.to_dict(), "type": self.type, "value": self.value}


@dataclass(frozen=True)
class MessageContentTerm:
    """
    A message condition.

    Presence check: one boolean variable, no comparator, no operands.
    Binary comparison: comparator set, operands = (left, right), variables =
    the operands that are Variables (numeric literals introduce none).
    """
    name: IdentifierName
    variables: Tuple[Variable, ...]
    comparator: Optional[str] = None
    operands: Tuple[Operand, ...] = ()
    type: str = field(default=TERM_TYPE_MESSAGE_CONTENT, init=False)

    @property
    def is_presence_check(self) -> bool:
        return self.comparator is None

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "name": self.name.to_dict(),
            "type": self.type,
            "variables": [v.to_dict() for v in self.variables],
        }
        if self.comparator is not None:
            out["comparator"] = self.comparator
            out["operands"] = [o.to_dict() for o in self.operands]
        return out


Term = Union[TimeoutTerm, MessageContentTerm]


@dataclass(frozen=True)
class Messages:
    error: str = ""
    success: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.error, "success": self.success}


@dataclass(frozen=True)
class Clause:
    name: IdentifierName
    type: str
    role_player: str
    operation: str
    variables: Tuple[Variable, ...]
    terms: Tuple[Term, ...]
    messages: Messages

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name.to_dict(),
            "type": self.type,
            "rolePlayer": self.role_player,
            "operation": self.operation,
            "variables": [v.to_dict() for v in self.variables],
            "terms": [t.to_dict() for t in self.terms],
            "messages": self.messages.to_dict(),
        }


@dataclass(frozen=True)
class Contract:
    """Root of the canonical model. Clause order is declaration order."""
    name: str
    begin_date: str
    due_date: str
    application: str
    process: str
    clauses: Tuple[Clause, ...]
    variables: Tuple[Variable, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "beginDate": self.begin_date,
            "dueDate": self.due_date,
            "application": self.application,
            "process": self.process,
            "variables": [v.to_dict() for v in self.variables],
            "clauses": [c.to_dict() for c in self.clauses],
        }
