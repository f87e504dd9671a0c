"""
jabuti/canonicalizer.py - Contract Canonicalizer

Entry point of the semantic-analysis stage:

    source text --parse_contract--> SyntaxNode --canonicalize--> Contract

canonicalize() walks the contract's direct children once, in source order,
and dispatches by node kind:
    - dates      -> beginDate / dueDate (raw literal text, last match wins)
    - parties    -> application / process (raw operand text)
    - clauses    -> one Clause per clause node, declaration order kept
    - variables  -> traversed, nothing recorded (reserved)
Any other kind is skipped without looking at its children.

No state survives a call; the same tree always yields an equal Contract.
"""

import os
import sys

from .clauses import lower_clause
from .errors import CanonicalizationError
from .frontend import parse_contract
from .models import Contract
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
        print("[jabuti.canonicalizer]", *args, file=sys.stderr, **kwargs)


class _ContractCanonicalization:

    def __init__(self, node: SyntaxNode):
        self.name = node.contract_name()
        self.begin_date = ""
        self.due_date = ""
        self.application = ""
        self.process = ""
        self.clauses = []

    def variables_block(self, node: SyntaxNode) -> None:
        # Contract-level variables are reserved for a later pass.
        for statement in node.children_of(NodeKind.VARIABLE_STATEMENT):
            _debug_print(f"contract variable {statement.text!r} not recorded")

    def dates_block(self, node: SyntaxNode) -> None:
        for entry in node.children:
            if entry.kind is NodeKind.BEGIN_DATE:
                for literal in entry.date_literals():
                    self.begin_date = literal.text
            elif entry.kind is NodeKind.DUE_DATE:
                for literal in entry.date_literals():
                    self.due_date = literal.text

    def parties_block(self, node: SyntaxNode) -> None:
        for party in node.children:
            if party.kind is NodeKind.APPLICATION:
                self.application = party.party_identifier()
            elif party.kind is NodeKind.PROCESS:
                self.process = party.party_identifier()

    def clauses_block(self, node: SyntaxNode) -> None:
        for clause in node.children_of(NodeKind.CLAUSE):
            self.clauses.append(lower_clause(clause))

    def build(self) -> Contract:
        return Contract(
            name=self.name,
            begin_date=self.begin_date,
            due_date=self.due_date,
            application=self.application,
            process=self.process,
            clauses=tuple(self.clauses),
        )


_HANDLED = {
    NodeKind.VARIABLES: _ContractCanonicalization.variables_block,
    NodeKind.DATES: _ContractCanonicalization.dates_block,
    NodeKind.PARTIES: _ContractCanonicalization.parties_block,
    NodeKind.CLAUSES: _ContractCanonicalization.clauses_block,
}

_CONTRACT_DISPATCH = KindDispatch(
    "contract",
    handlers=_HANDLED,
    ignored=(CONTRACT_LEVEL_KINDS - set(_HANDLED)) | CLAUSE_LEVEL_KINDS | TERM_LEVEL_KINDS | LEAF_KINDS,
)


def canonicalize(node: SyntaxNode) -> Contract:
    """Lower a contract syntax tree into the canonical Contract model."""
    if node.kind is not NodeKind.CONTRACT:
        raise CanonicalizationError(
            f"internal compiler error: canonicalize() expects a contract node, got {node.kind.value}"
        )
    state = _ContractCanonicalization(node)
    for child in node.children:
        handler = _CONTRACT_DISPATCH.handler_for(child)
        if handler is not None:
            handler(state, child)
        elif child.kind not in LEAF_KINDS:
            _debug_print(f"skipping {child.kind.value} node")
    return state.build()


def compile_contract(text: str) -> Contract:
    """Parse Jabuti source text and canonicalize it."""
    return canonicalize(parse_contract(text))
