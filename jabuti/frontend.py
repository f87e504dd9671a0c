"""
jabuti/frontend.py - Front end adapter

Parses Jabuti source with the Arpeggio grammar and converts the Arpeggio
parse tree into the SyntaxNode tree the canonicalizer reads.

Conversion rules:
    - named grammar rules map to NodeKind; inline groupings (Optional,
      ZeroOrMore, anonymous sequences) are lifted into their parent so
      positional slots match the concrete production;
    - every terminal is kept, keywords and punctuation included (TOKEN);
    - EOF is dropped.
"""

import os
import sys
import threading
import time

from arpeggio import NoMatch, ParserPython, PTNodeVisitor, Terminal, visit_parse_tree

from . import grammar
from .errors import ParseError
from .syntax import NodeKind, SyntaxNode

# Increment when the grammar transcription changes
GRAMMAR_VERSION = "1.0.0"

_DEBUG_ENABLED = os.getenv("JABUTI_DEBUG", "0") == "1"


def _debug_print(*args, **kwargs):
    if _DEBUG_ENABLED:
        print("[jabuti.frontend]", *args, file=sys.stderr, **kwargs)


_RULE_KINDS = {
    "contract": NodeKind.CONTRACT,
    "variables": NodeKind.VARIABLES,
    "variable_statement": NodeKind.VARIABLE_STATEMENT,
    "dates": NodeKind.DATES,
    "begin_date": NodeKind.BEGIN_DATE,
    "due_date": NodeKind.DUE_DATE,
    "parties": NodeKind.PARTIES,
    "application": NodeKind.APPLICATION,
    "process": NodeKind.PROCESS,
    "clauses": NodeKind.CLAUSES,
    "clause": NodeKind.CLAUSE,
    "role_player": NodeKind.ROLE_PLAYER,
    "operation": NodeKind.OPERATION,
    "terms": NodeKind.TERMS,
    "on_breach": NodeKind.ON_BREACH,
    "term_or_when": NodeKind.TERM_OR_WHEN,
    "term": NodeKind.TERM,
    "timeout": NodeKind.TIMEOUT,
    "message_content": NodeKind.MESSAGE_CONTENT,
}

_TERMINAL_KINDS = {
    "clause_type": NodeKind.CLAUSE_TYPE,
    "variable_name": NodeKind.IDENTIFIER,
    "party_role": NodeKind.IDENTIFIER,
    "number": NodeKind.NUMBER,
    "string": NodeKind.STRING,
    "comparator": NodeKind.COMPARATOR,
    "date": NodeKind.DATE,
    "datetime": NodeKind.DATETIME,
}


def _flatten(children):
    flat = []
    for child in children:
        if isinstance(child, list):
            flat.extend(_flatten(child))
        else:
            flat.append(child)
    return flat


class SyntaxTreeBuilder(PTNodeVisitor):
    """Arpeggio parse tree -> SyntaxNode tree."""

    def visit__default__(self, node, children):
        if isinstance(node, Terminal):
            if node.rule_name == "EOF" or not node.value:
                return None
            return SyntaxNode.leaf(_TERMINAL_KINDS.get(node.rule_name, NodeKind.TOKEN), node.value)

        flat = _flatten(children)
        kind = _RULE_KINDS.get(node.rule_name)
        if kind is None:
            # Inline grouping: hand the children to the enclosing rule.
            return flat
        return SyntaxNode(kind, tuple(flat))


class JabutiParser:
    """
    Arpeggio parser for one contract document.

    A parser instance keeps per-parse state and must not be used from two
    threads at once; parse_contract() serializes access to a shared instance.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.parser = ParserPython(
            grammar.contract,
            comment_def=grammar.comment,
            reduce_tree=False,
            debug=debug,
        )

    def parse_tree(self, text: str):
        if not isinstance(text, str):
            raise TypeError(f"Contract source must be str, got {type(text).__name__}")
        try:
            return self.parser.parse(text)
        except NoMatch as e:
            raise ParseError(str(e), line=getattr(e, "line", None), col=getattr(e, "col", None)) from e

    def parse(self, text: str) -> SyntaxNode:
        tree = self.parse_tree(text)
        return visit_parse_tree(tree, SyntaxTreeBuilder(debug=self.debug))


_PARSER = None
_PARSER_LOCK = threading.Lock()
_PARSE_LOCK = threading.Lock()


def _get_or_create_parser() -> JabutiParser:
    """Get the shared parser instance, creating it if needed."""
    global _PARSER
    with _PARSER_LOCK:
        if _PARSER is None:
            _PARSER = JabutiParser()
            _debug_print(f"parser created (grammar {GRAMMAR_VERSION})")
    return _PARSER


def parse_contract(text: str) -> SyntaxNode:
    """Parse contract source into a SyntaxNode tree rooted at a contract node."""
    parser = _get_or_create_parser()
    started = time.perf_counter()
    with _PARSE_LOCK:
        tree = parser.parse(text)
    _debug_print(f"parsed {len(text)} chars in {(time.perf_counter() - started) * 1000:.2f} ms")
    return tree
