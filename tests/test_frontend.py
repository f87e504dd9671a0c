import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../')))

from jabuti.conditions import is_numeric_literal
from jabuti.errors import ParseError
from jabuti.frontend import GRAMMAR_VERSION, JabutiParser, parse_contract
from jabuti.lexicon import COMPARATORS, TERM_MESSAGE_CONTENT, TERM_TIMEOUT
from jabuti.syntax import NodeKind

MINIMAL = """
contract Minimal {
    clauses {
        right ping {
            rolePlayer = process
            terms { MessageContent(a == "b") and Timeout(30) or MessageContent(flag) and MessageContent() }
            onBreach(log("no pong"))
        }
    }
}
"""


def first_clause(tree):
    return tree.first(NodeKind.CLAUSES).first(NodeKind.CLAUSE)


class TestTreeShape(unittest.TestCase):

    def setUp(self):
        self.tree = parse_contract(MINIMAL)

    def test_root(self):
        self.assertEqual(self.tree.kind, NodeKind.CONTRACT)
        self.assertEqual(self.tree.contract_name(), "Minimal")

    def test_clause_slots(self):
        clause = first_clause(self.tree)
        self.assertEqual(clause.child(0).kind, NodeKind.CLAUSE_TYPE)
        self.assertEqual(clause.clause_kind(), "right")
        self.assertEqual(clause.clause_local_name(), "ping")
        self.assertEqual(clause.role_player().role_identifier(), "process")
        self.assertEqual(clause.first(NodeKind.ON_BREACH).breach_message(), '"no pong"')

    def test_terms_are_wrapped(self):
        block = first_clause(self.tree).first(NodeKind.TERMS)
        entries = block.children_of(NodeKind.TERM_OR_WHEN)
        self.assertEqual(len(entries), 4)
        operations = [entry.first(NodeKind.TERM).child(0).kind for entry in entries]
        self.assertEqual(
            operations,
            [NodeKind.MESSAGE_CONTENT, NodeKind.TIMEOUT, NodeKind.MESSAGE_CONTENT, NodeKind.MESSAGE_CONTENT],
        )

    def test_message_content_arities(self):
        block = first_clause(self.tree).first(NodeKind.TERMS)
        contents = list(block.descendants(NodeKind.MESSAGE_CONTENT))
        self.assertEqual([c.child_count for c in contents], [6, 4, 3])
        binary = contents[0]
        self.assertEqual(binary.operand_at(1).kind, NodeKind.IDENTIFIER)
        self.assertEqual(binary.comparator(), "==")
        self.assertEqual(binary.operand_at(2).kind, NodeKind.STRING)
        self.assertEqual(binary.operand_at(2).text, '"b"')

    def test_timeout_operand(self):
        timeout = next(first_clause(self.tree).descendants(NodeKind.TIMEOUT))
        self.assertEqual(timeout.timeout_operand().kind, NodeKind.NUMBER)
        self.assertEqual(timeout.timeout_operand().text, "30")

    def test_text_has_no_whitespace(self):
        timeout = next(first_clause(self.tree).descendants(NodeKind.TIMEOUT))
        self.assertEqual(timeout.text, "Timeout(30)")


class TestParseErrors(unittest.TestCase):

    def test_missing_brace(self):
        with self.assertRaises(ParseError) as ctx:
            parse_contract("contract Broken {")
        self.assertIsNotNone(ctx.exception.line)

    def test_reserved_word_as_name(self):
        with self.assertRaises(ParseError):
            parse_contract("contract terms { }")

    def test_unknown_clause_type(self):
        source = "contract C { clauses { maybe x { rolePlayer = process terms { Timeout(1) } } } }"
        with self.assertRaises(ParseError):
            parse_contract(source)

    def test_role_player_must_be_a_party(self):
        source = "contract C { clauses { right x { rolePlayer = somebody terms { Timeout(1) } } } }"
        with self.assertRaises(ParseError):
            parse_contract(source)

    def test_non_string_source(self):
        with self.assertRaises(TypeError):
            parse_contract(None)


class TestParser(unittest.TestCase):

    def test_comments_are_skipped(self):
        source = "// header\ncontract C { // trailing\n }\n"
        self.assertEqual(parse_contract(source).contract_name(), "C")

    def test_private_parser_instance(self):
        parser = JabutiParser()
        tree = parser.parse("contract Alone { }")
        self.assertEqual(tree.contract_name(), "Alone")

    def test_datetime_with_t_separator(self):
        tree = parse_contract("contract C { dates { beginDate = 2023-01-01T08:00:00 dueDate = 2023-02-01 } }")
        begin = next(tree.descendants(NodeKind.BEGIN_DATE))
        due = next(tree.descendants(NodeKind.DUE_DATE))
        self.assertEqual([d.kind for d in begin.date_literals()], [NodeKind.DATETIME])
        self.assertEqual([d.kind for d in due.date_literals()], [NodeKind.DATE])

    def test_every_comparator_parses(self):
        for op in sorted(COMPARATORS):
            source = "contract C { clauses { right x { rolePlayer = process terms { %s(a %s b) } } } }" % (TERM_MESSAGE_CONTENT, op)
            content = next(parse_contract(source).descendants(NodeKind.MESSAGE_CONTENT))
            self.assertEqual(content.comparator(), op)

    def test_number_leaves_match_the_analyzer(self):
        for text in ("86400", "0.5", "-3", "1e6"):
            source = "contract C { clauses { right x { rolePlayer = process terms { %s(%s) } } } }" % (TERM_TIMEOUT, text)
            operand = next(parse_contract(source).descendants(NodeKind.TIMEOUT)).timeout_operand()
            self.assertEqual(operand.kind, NodeKind.NUMBER)
            self.assertTrue(is_numeric_literal(operand.text))

    def test_grammar_version(self):
        self.assertRegex(GRAMMAR_VERSION, r'^\d+\.\d+\.\d+$')


if __name__ == "__main__":
    unittest.main()
