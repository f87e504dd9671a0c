"""
jabuti/clauses.py - Clause Lowering Engine

Lowers one clause node into a Clause:

    <kind> <name> {
        rolePlayer = <role>
        terms { Timeout(...) and MessageContent(...) ... }
        onBreach(log("<message>"))
    }

Term names carry a per-clause index so every generated symbol is unique
within its clause. The index advances for every emitted Timeout and for every
MessageContent (even one that introduces no variable); a Timeout whose operand
is not numeric is dropped without advancing it.
"""

import os
import sys
from collections import OrderedDict
from typing import List, Tuple

from .conditions import BinaryCondition, analyze, is_numeric_literal
from .lexicon import TERM_TYPE_MESSAGE_CONTENT, TERM_TYPE_TIMEOUT
from .models import Clause, MessageContentTerm, Messages, Term, TimeoutTerm, Variable
from .naming import clause_name, derive
from .syntax import (
    CLAUSE_LEVEL_KINDS,
    CONTRACT_LEVEL_KINDS,
    LEAF_KINDS,
    TERM_LEVEL_KINDS,
    KindDispatch,
    NodeKind,
    SyntaxNode,
)

_DEBUG_ENABLED = os.getenv("JABUTI_DEBUG", "0") == "1"


def _debug_print(*args, **kwargs):
    if _DEBUG_ENABLED:
        print("[jabuti.clauses]", *args, file=sys.stderr, **kwargs)


class VariableRegistry:
    """
    Ordered set of clause variables keyed by camel-case name.

    Policy on a duplicate key: the later Variable replaces the stored one and
    the key keeps the position of its first discovery.
    """

    def __init__(self):
        self._by_camel = OrderedDict()

    def add(self, variable: Variable) -> None:
        key = variable.name.camel
        if key in self._by_camel and self._by_camel[key] != variable:
            _debug_print(f"variable {key!r} redefined: {self._by_camel[key].type} -> {variable.type}")
        self._by_camel[key] = variable

    def merge(self, variables) -> None:
        for variable in variables:
            self.add(variable)

    def __contains__(self, camel: str) -> bool:
        return camel in self._by_camel

    def __len__(self) -> int:
        return len(self._by_camel)

    def values(self) -> Tuple[Variable, ...]:
        return tuple(self._by_camel.values())


class _ClauseLowering:
    """Per-call accumulator; never shared between clauses."""

    def __init__(self, node: SyntaxNode):
        self.kind = node.clause_kind()
        self.name = clause_name(self.kind, node.clause_local_name())
        # operation has no production of its own yet; it aliases the role operand.
        role = node.role_player().role_identifier()
        self.role_player = role
        self.operation = role
        self.term_index = 0
        self.terms: List[Term] = []
        self.variables = VariableRegistry()
        self.error_message = ""

    # --- clause children ---

    def on_breach(self, node: SyntaxNode) -> None:
        self.error_message = node.breach_message()

    def terms_block(self, node: SyntaxNode) -> None:
        for term_or_when in node.children_of(NodeKind.TERM_OR_WHEN):
            for term in term_or_when.children_of(NodeKind.TERM):
                for operation in term.children:
                    handler = _TERM_DISPATCH.handler_for(operation)
                    if handler is not None:
                        handler(self, operation)

    # --- term operations ---

    def timeout(self, node: SyntaxNode) -> None:
        operand = node.timeout_operand().text
        if not is_numeric_literal(operand):
            _debug_print(f"{self.name.camel}: non-numeric timeout {operand!r} skipped")
            return
        name = derive(self.name, [TERM_TYPE_TIMEOUT, self.term_index])
        self.terms.append(TimeoutTerm(name=name, value=operand))
        self.term_index += 1

    def message_content(self, node: SyntaxNode) -> None:
        result = analyze(node, self.term_index)
        name = derive(self.name, [TERM_TYPE_MESSAGE_CONTENT, self.term_index])
        self.variables.merge(result.variables)
        if isinstance(result, BinaryCondition):
            term = MessageContentTerm(
                name=name,
                variables=result.variables,
                comparator=result.comparator,
                operands=result.operands,
            )
        else:
            term = MessageContentTerm(name=name, variables=result.variables)
        self.terms.append(term)
        self.term_index += 1

    def build(self) -> Clause:
        return Clause(
            name=self.name,
            type=self.kind,
            role_player=self.role_player,
            operation=self.operation,
            variables=self.variables.values(),
            terms=tuple(self.terms),
            messages=Messages(error=self.error_message),
        )


_CLAUSE_DISPATCH = KindDispatch(
    "clause",
    handlers={
        NodeKind.ON_BREACH: _ClauseLowering.on_breach,
        NodeKind.TERMS: _ClauseLowering.terms_block,
    },
    ignored=(CLAUSE_LEVEL_KINDS - {NodeKind.ON_BREACH, NodeKind.TERMS})
    | CONTRACT_LEVEL_KINDS | TERM_LEVEL_KINDS | LEAF_KINDS,
)

_TERM_DISPATCH = KindDispatch(
    "term",
    handlers={
        NodeKind.TIMEOUT: _ClauseLowering.timeout,
        NodeKind.MESSAGE_CONTENT: _ClauseLowering.message_content,
    },
    ignored=(TERM_LEVEL_KINDS - {NodeKind.TIMEOUT, NodeKind.MESSAGE_CONTENT})
    | CONTRACT_LEVEL_KINDS | CLAUSE_LEVEL_KINDS | LEAF_KINDS,
)


def lower_clause(node: SyntaxNode) -> Clause:
    """Lower one clause node; children are visited in source order."""
    lowering = _ClauseLowering(node)
    for child in node.children:
        handler = _CLAUSE_DISPATCH.handler_for(child)
        if handler is not None:
            handler(lowering, child)
    clause = lowering.build()
    _debug_print(f"{clause.name.camel}: {len(clause.terms)} terms, {len(clause.variables)} variables")
    return clause
