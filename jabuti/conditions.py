"""
jabuti/conditions.py - Message-Condition Analyzer

A MessageContent(...) term is either a bare presence check or a binary
comparison. Operand text is loosely typed in the source language; this module
decides, per operand, between a numeric literal, a variable reference and an
anonymous quoted value.

Type inference for comparisons is comparator-driven:
    ==, !=      -> TEXT
    otherwise   -> NUMBER
and applies to every variable the term introduces.
"""

import re
from dataclasses import dataclass
from typing import Tuple

from .lexicon import NUMBER_PATTERN, QUOTES, TEXT_COMPARATORS, VARIABLE_BOOLEAN, VARIABLE_NUMBER, VARIABLE_TEXT
from .models import Literal, Operand, Variable
from .naming import synthesize
from .syntax import SyntaxNode

# Base name of variables that do not come from a source identifier
ANONYMOUS_BASE = "messageContent"

LEFT = 1
RIGHT = 2

_NUMERIC = re.compile(NUMBER_PATTERN)


@dataclass(frozen=True)
class PresenceCheck:
    variable: Variable

    @property
    def variables(self) -> Tuple[Variable, ...]:
        return (self.variable,)


@dataclass(frozen=True)
class BinaryCondition:
    left: Operand
    comparator: str
    right: Operand

    @property
    def operands(self) -> Tuple[Operand, Operand]:
        return (self.left, self.right)

    @property
    def variables(self) -> Tuple[Variable, ...]:
        return tuple(o for o in self.operands if isinstance(o, Variable))


def is_numeric_literal(text: str) -> bool:
    return _NUMERIC.fullmatch(text) is not None


def infer_type(comparator: str) -> str:
    return VARIABLE_TEXT if comparator in TEXT_COMPARATORS else VARIABLE_NUMBER


def classify_operand(text: str, index: int, slot: int, var_type: str) -> Operand:
    """
    Numeric text stays a raw Literal (never coerced to var_type).
    Unquoted text is a variable reference named after itself.
    Quoted text becomes an anonymous variable named from the term index and slot.
    """
    if is_numeric_literal(text):
        return Literal(text)
    if not text.startswith(QUOTES):
        return Variable(synthesize(text), var_type)
    return Variable(synthesize(ANONYMOUS_BASE, [index, slot]), var_type)


def analyze(node: SyntaxNode, index: int):
    """Classify a message-content node; index is the enclosing clause's term index."""
    if node.is_presence_check():
        return PresenceCheck(Variable(synthesize(ANONYMOUS_BASE, [index]), VARIABLE_BOOLEAN))

    comparator = node.comparator()
    var_type = infer_type(comparator)
    left = classify_operand(node.operand_at(LEFT).text, index, LEFT, var_type)
    right = classify_operand(node.operand_at(RIGHT).text, index, RIGHT, var_type)
    return BinaryCondition(left, comparator, right)
