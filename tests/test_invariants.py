#!/usr/bin/env python3
"""
test_invariants.py

Seeded random contracts, generated as source text and pushed through the full
pipeline, checked against the canonical model's invariants:

  1. Term count = emitted timeouts + attempted message conditions
     (non-numeric timeouts never count, message conditions always do).
  2. Variable types follow the comparator: ==/!= -> TEXT, others -> NUMBER,
     presence checks -> boolean.
  3. No two clause variables share a camel name, and the clause variables are
     exactly the union of the term variables.
  4. Term names are unique within a clause and indexes run 0..n-1.
  5. Canonicalization is idempotent.
"""

import random
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../')))

from jabuti import compile_contract, contract_json
from jabuti.models import MessageContentTerm, TimeoutTerm

ITERATIONS = 60
SEED = 20231

NAMES = ["amount", "weight", "status", "productValue", "code", "delayInHours"]
NUMBERS = ["0", "1", "48", "100", "2.5", "-3"]
QUOTED = ['"OK"', "'USED'", '"DELIVERED"']
COMPARATORS = ["==", "!=", "<", "<=", ">", ">="]


def random_operand(rng):
    return rng.choice([rng.choice(NAMES), rng.choice(NUMBERS), rng.choice(QUOTED)])


def random_term(rng):
    """Returns (source, expectation) where expectation describes the lowering."""
    choice = rng.random()
    if choice < 0.25:
        value = rng.choice(NUMBERS[:4] + ["deadline", "later"])
        return f"Timeout({value})", ("timeout", value.isdigit())
    if choice < 0.4:
        arg = rng.choice(["", rng.choice(NAMES), rng.choice(NUMBERS)])
        return f"MessageContent({arg})", ("presence", None)
    op = rng.choice(COMPARATORS)
    return f"MessageContent({random_operand(rng)} {op} {random_operand(rng)})", ("binary", op)


def random_contract(rng):
    kinds = ["right", "obligation", "prohibition"]
    clause_sources = []
    expectations = []
    for i in range(rng.randint(0, 4)):
        terms = [random_term(rng) for _ in range(rng.randint(1, 6))]
        connectives = [rng.choice(["and", "or"]) for _ in terms[1:]]
        body = terms[0][0] + "".join(f" {c} {t[0]}" for c, t in zip(connectives, terms[1:]))
        role = rng.choice(["application", "process"])
        clause_sources.append(
            f"{rng.choice(kinds)} clause{i} {{ rolePlayer = {role} terms {{ {body} }} }}"
        )
        expectations.append([t[1] for t in terms])
    source = (
        "contract Generated { "
        "dates { beginDate = 2023-01-01 dueDate = 2023-12-31 } "
        'parties { application = "A" process = "B" } '
        f"clauses {{ {' '.join(clause_sources)} }} }}"
    )
    return source, expectations


class TestCanonicalInvariants(unittest.TestCase):

    def setUp(self):
        rng = random.Random(SEED)
        self.cases = [random_contract(rng) for _ in range(ITERATIONS)]

    def test_term_count(self):
        for source, expectations in self.cases:
            contract = compile_contract(source)
            self.assertEqual(len(contract.clauses), len(expectations))
            for clause, expected in zip(contract.clauses, expectations):
                emitted = sum(1 for kind, numeric in expected if kind == "timeout" and numeric)
                attempted = sum(1 for kind, _ in expected if kind != "timeout")
                self.assertEqual(len(clause.terms), emitted + attempted, source)

    def test_types_follow_comparator(self):
        for source, _ in self.cases:
            for clause in compile_contract(source).clauses:
                for term in clause.terms:
                    if not isinstance(term, MessageContentTerm):
                        continue
                    if term.comparator is None:
                        self.assertEqual([v.type for v in term.variables], ["boolean"])
                    elif term.comparator in ("==", "!="):
                        self.assertTrue(all(v.type == "TEXT" for v in term.variables), source)
                    else:
                        self.assertTrue(all(v.type == "NUMBER" for v in term.variables), source)

    def test_variable_dedup(self):
        for source, _ in self.cases:
            for clause in compile_contract(source).clauses:
                camels = [v.name.camel for v in clause.variables]
                self.assertEqual(len(camels), len(set(camels)))
                discovered = {
                    v.name.camel
                    for term in clause.terms if isinstance(term, MessageContentTerm)
                    for v in term.variables
                }
                self.assertEqual(set(camels), discovered)

    def test_term_indexes(self):
        for source, _ in self.cases:
            for clause in compile_contract(source).clauses:
                names = [t.name.camel for t in clause.terms]
                self.assertEqual(len(names), len(set(names)))
                for index, term in enumerate(clause.terms):
                    self.assertTrue(term.name.camel.endswith(str(index)))
                    self.assertTrue(term.name.snake.endswith(f"_{term.type}_{index}"))
                    if isinstance(term, TimeoutTerm):
                        self.assertTrue(term.value.isdigit())

    def test_idempotent(self):
        for source, _ in self.cases[:10]:
            self.assertEqual(contract_json(compile_contract(source)), contract_json(compile_contract(source)))


if __name__ == "__main__":
    unittest.main()
