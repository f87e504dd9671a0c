"""
Jabuti Lexicon (Single Source of Truth)

This module defines the keyword and operator sets of the Jabuti contract
language. Both the grammar transcription and the canonicalizer MUST import
from this module to keep token recognition aligned.
"""

# Block keywords (from contract rule)
BLOCK_KEYWORDS = {"contract", "variables", "dates", "parties", "clauses", "terms"}

# Statement keywords
STATEMENT_KEYWORDS = {
    "beginDate", "dueDate",        # dates block
    "rolePlayer", "operation",     # clause header
    "onBreach", "log",             # breach reporting
}

# Clause categories (from clause_type rule)
CLAUSE_TYPES = {"right", "obligation", "prohibition"}

# Contracting roles (parties block / rolePlayer operand)
PARTY_ROLES = {"application", "process"}

# Term constructors (from term rule)
TERM_TIMEOUT = "Timeout"
TERM_MESSAGE_CONTENT = "MessageContent"
TERM_CONSTRUCTORS = {TERM_TIMEOUT, TERM_MESSAGE_CONTENT}

# Logical connectives between terms
LOGICAL_OPS = {"and", "or"}

# Comparators (the grammar orders them longest first)
TEXT_COMPARATORS = {"==", "!="}
NUMERIC_COMPARATORS = {"<=", ">=", "<", ">"}
COMPARATORS = TEXT_COMPARATORS | NUMERIC_COMPARATORS

# Inferred variable types. Comparison types are uppercase, the presence-check
# type is lowercase; generators depend on the exact spelling.
VARIABLE_BOOLEAN = "boolean"
VARIABLE_TEXT = "TEXT"
VARIABLE_NUMBER = "NUMBER"

# Term tags carried into the canonical model
TERM_TYPE_TIMEOUT = "timeout"
TERM_TYPE_MESSAGE_CONTENT = "messageContent"

# Numeric literal text: 86400, 0.5, -3, 1e6
NUMBER_PATTERN = r"[+-]?\d+(\.\d+)?([eE][+-]?\d+)?"

# Quote characters that open a string literal operand
QUOTES = ('"', "'")

# Words that can never be identifiers
RESERVED_WORDS = (
    BLOCK_KEYWORDS | STATEMENT_KEYWORDS | CLAUSE_TYPES | PARTY_ROLES
    | TERM_CONSTRUCTORS | LOGICAL_OPS
)
