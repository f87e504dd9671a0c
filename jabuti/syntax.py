"""
jabuti/syntax.py - Syntax Tree Adapter

The canonicalizer never indexes raw parse-tree children itself. It reads a
closed set of node kinds (NodeKind) through the named accessors of
SyntaxNode, so the mapping "position -> meaning" of every grammar production
lives in this module only.

Node text follows concrete-syntax-tree conventions: a leaf carries its token
text, an inner node renders as the concatenation of its children's text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .errors import CanonicalizationError, MalformedTreeError


class NodeKind(Enum):
    # Contract level
    CONTRACT = "contract"
    VARIABLES = "variables"
    VARIABLE_STATEMENT = "variable-statement"
    DATES = "dates"
    BEGIN_DATE = "begin-date"
    DUE_DATE = "due-date"
    PARTIES = "parties"
    APPLICATION = "application"
    PROCESS = "process"
    CLAUSES = "clauses"
    # Clause level
    CLAUSE = "clause"
    CLAUSE_TYPE = "clause-type"
    ROLE_PLAYER = "role-player"
    OPERATION = "operation"
    TERMS = "terms"
    ON_BREACH = "on-breach"
    # Term level
    TERM_OR_WHEN = "term-or-when"
    TERM = "term"
    TIMEOUT = "timeout"
    MESSAGE_CONTENT = "message-content"
    # Leaves
    DATE = "date"
    DATETIME = "datetime"
    IDENTIFIER = "identifier"
    NUMBER = "number"
    STRING = "string"
    COMPARATOR = "comparator"
    TOKEN = "token"


CONTRACT_LEVEL_KINDS = frozenset({
    NodeKind.CONTRACT, NodeKind.VARIABLES, NodeKind.VARIABLE_STATEMENT,
    NodeKind.DATES, NodeKind.BEGIN_DATE, NodeKind.DUE_DATE,
    NodeKind.PARTIES, NodeKind.APPLICATION, NodeKind.PROCESS, NodeKind.CLAUSES,
})

CLAUSE_LEVEL_KINDS = frozenset({
    NodeKind.CLAUSE, NodeKind.CLAUSE_TYPE, NodeKind.ROLE_PLAYER,
    NodeKind.OPERATION, NodeKind.TERMS, NodeKind.ON_BREACH,
})

TERM_LEVEL_KINDS = frozenset({
    NodeKind.TERM_OR_WHEN, NodeKind.TERM, NodeKind.TIMEOUT, NodeKind.MESSAGE_CONTENT,
})

LEAF_KINDS = frozenset({
    NodeKind.DATE, NodeKind.DATETIME, NodeKind.IDENTIFIER, NodeKind.NUMBER,
    NodeKind.STRING, NodeKind.COMPARATOR, NodeKind.TOKEN,
})

DATE_KINDS = frozenset({NodeKind.DATE, NodeKind.DATETIME})

_LEVELS = (CONTRACT_LEVEL_KINDS, CLAUSE_LEVEL_KINDS, TERM_LEVEL_KINDS, LEAF_KINDS)

if sum(len(level) for level in _LEVELS) != len(NodeKind) or frozenset().union(*_LEVELS) != frozenset(NodeKind):
    raise RuntimeError("NodeKind levels must partition NodeKind")


# Positional slots of the concrete productions:
#   rolePlayer = application            -> operand at 2
#   application = "Customer"            -> operand at 2
#   onBreach ( log ( "message" ) )      -> message at 4
#   Timeout ( 86400 )                   -> operand at 2
#   MessageContent ( a == b )           -> operands at 2 and 4, comparator at 3
#   MessageContent ( a ) / ( )          -> presence check
_ROLE_OPERAND_SLOT = 2
_PARTY_OPERAND_SLOT = 2
_BREACH_MESSAGE_SLOT = 4
_TIMEOUT_OPERAND_SLOT = 2
_OPERAND_SLOTS = {1: 2, 2: 4}
_COMPARATOR_SLOT = 3
_PRESENCE_CHECK_ARITIES = (3, 4)
_BINARY_ARITY = 6


@dataclass(frozen=True)
class SyntaxNode:
    """A node of the concrete syntax tree handed over by the front end."""
    kind: NodeKind
    children: Tuple["SyntaxNode", ...] = ()
    value: Optional[str] = None

    @classmethod
    def leaf(cls, kind: NodeKind, value: str) -> "SyntaxNode":
        return cls(kind, (), value)

    @classmethod
    def token(cls, value: str) -> "SyntaxNode":
        return cls(NodeKind.TOKEN, (), value)

    @property
    def text(self) -> str:
        if self.value is not None:
            return self.value
        return "".join(child.text for child in self.children)

    @property
    def child_count(self) -> int:
        return len(self.children)

    # --- Generic navigation ---

    def child(self, index: int) -> "SyntaxNode":
        """Positional access; a missing slot is a front-end contract violation."""
        if index < 0 or index >= len(self.children):
            raise MalformedTreeError(self.kind, index)
        return self.children[index]

    def first(self, kind: NodeKind) -> Optional["SyntaxNode"]:
        for child in self.children:
            if child.kind is kind:
                return child
        return None

    def children_of(self, *kinds: NodeKind) -> Tuple["SyntaxNode", ...]:
        return tuple(child for child in self.children if child.kind in kinds)

    def descendants(self, *kinds: NodeKind) -> Iterator["SyntaxNode"]:
        """Pre-order walk below this node, optionally filtered by kind."""
        for child in self.children:
            if not kinds or child.kind in kinds:
                yield child
            yield from child.descendants(*kinds)

    def _expect(self, *kinds: NodeKind) -> None:
        if self.kind not in kinds:
            expected = ", ".join(k.value for k in kinds)
            raise CanonicalizationError(
                f"internal compiler error: expected a {expected} node, got {self.kind.value}"
            )

    # --- Contract ---

    def contract_name(self) -> str:
        self._expect(NodeKind.CONTRACT)
        name = self.first(NodeKind.IDENTIFIER)
        return name.text if name is not None else ""

    def party_identifier(self) -> str:
        self._expect(NodeKind.APPLICATION, NodeKind.PROCESS)
        if len(self.children) <= _PARTY_OPERAND_SLOT:
            return ""
        return self.children[_PARTY_OPERAND_SLOT].text

    def date_literals(self) -> Tuple["SyntaxNode", ...]:
        self._expect(NodeKind.BEGIN_DATE, NodeKind.DUE_DATE)
        return tuple(self.descendants(*DATE_KINDS))

    # --- Clause ---

    def clause_kind(self) -> str:
        self._expect(NodeKind.CLAUSE)
        return self.child(0).text

    def clause_local_name(self) -> str:
        self._expect(NodeKind.CLAUSE)
        name = self.first(NodeKind.IDENTIFIER)
        if name is None:
            raise MalformedTreeError(self.kind, "name")
        return name.text

    def role_player(self) -> "SyntaxNode":
        self._expect(NodeKind.CLAUSE)
        node = self.first(NodeKind.ROLE_PLAYER)
        if node is None:
            raise MalformedTreeError(self.kind, "rolePlayer")
        return node

    def role_identifier(self) -> str:
        self._expect(NodeKind.ROLE_PLAYER)
        return self.child(_ROLE_OPERAND_SLOT).text

    def breach_message(self) -> str:
        self._expect(NodeKind.ON_BREACH)
        if len(self.children) <= _BREACH_MESSAGE_SLOT:
            return ""
        return self.children[_BREACH_MESSAGE_SLOT].text

    # --- Terms ---

    def timeout_operand(self) -> "SyntaxNode":
        self._expect(NodeKind.TIMEOUT)
        return self.child(_TIMEOUT_OPERAND_SLOT)

    def is_presence_check(self) -> bool:
        self._expect(NodeKind.MESSAGE_CONTENT)
        arity = len(self.children)
        if arity in _PRESENCE_CHECK_ARITIES:
            return True
        if arity == _BINARY_ARITY:
            return False
        raise MalformedTreeError(self.kind, arity, "unexpected message-content shape")

    def operand_at(self, slot: int) -> "SyntaxNode":
        """Operand of a binary message condition: slot 1 is the left side, 2 the right."""
        self._expect(NodeKind.MESSAGE_CONTENT)
        if slot not in _OPERAND_SLOTS:
            raise ValueError(f"operand slot must be 1 or 2, got {slot!r}")
        return self.child(_OPERAND_SLOTS[slot])

    def comparator(self) -> str:
        self._expect(NodeKind.MESSAGE_CONTENT)
        return self.child(_COMPARATOR_SLOT).text


class KindDispatch:
    """
    Exhaustive dispatch over NodeKind.

    Every kind is either handled or explicitly ignored; a table that leaves a
    kind unaccounted for fails at import time. Ignored kinds are skipped
    without inspecting their children.
    """

    def __init__(self, name: str, handlers: Mapping[NodeKind, Callable], ignored: Iterable[NodeKind]):
        handled = frozenset(handlers)
        ignored = frozenset(ignored)
        overlap = handled & ignored
        missing = frozenset(NodeKind) - handled - ignored
        if overlap:
            raise RuntimeError(f"{name}: kinds both handled and ignored: {sorted(k.value for k in overlap)}")
        if missing:
            raise RuntimeError(f"{name}: kinds not dispatched: {sorted(k.value for k in missing)}")
        self.name = name
        self.handlers: Dict[NodeKind, Callable] = dict(handlers)
        self.ignored = ignored

    def handler_for(self, node: SyntaxNode) -> Optional[Callable]:
        return self.handlers.get(node.kind)
