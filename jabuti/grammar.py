"""
jabuti/grammar.py - PEG transcription of the Jabuti contract language

Arpeggio rule functions for the productions the canonicalizer consumes.
Token sets come from jabuti.lexicon so the grammar and the canonicalizer
agree on keywords and comparators.

    contract DeliveryHiring {
        dates { beginDate = 2023-01-28 17:00:00  dueDate = 2023-12-31 23:59:59 }
        parties { application = "Customer"  process = "Delivery Company" }
        clauses {
            right requestDelivery {
                rolePlayer = application
                operation = request
                terms { MessageContent(weight <= 100) and Timeout(3600) }
                onBreach(log("Request denied"))
            }
        }
    }
"""

from arpeggio import EOF, OneOrMore, Optional, ZeroOrMore
from arpeggio import RegExMatch as _

from .lexicon import (
    CLAUSE_TYPES,
    COMPARATORS,
    LOGICAL_OPS,
    NUMBER_PATTERN,
    PARTY_ROLES,
    RESERVED_WORDS,
    TERM_MESSAGE_CONTENT,
    TERM_TIMEOUT,
)


def _alternation(words):
    # Longest first so that no word is shadowed by one of its prefixes.
    return "|".join(sorted(words, key=lambda w: (-len(w), w)))


_RESERVED = _alternation(RESERVED_WORDS)


# ==========================================
# LEXICAL RULES
# ==========================================

def comment():
    return _(r'//.*')


def variable_name():
    # Identifiers; reserved words are excluded so they are never consumed as names.
    return _(r'(?!({})\b)[A-Za-z_][A-Za-z0-9_]*'.format(_RESERVED))


def number():
    return _(NUMBER_PATTERN)


def string():
    return _(r'"[^"]*"|\'[^\']*\'')


def datetime():
    return _(r'\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}:\d{2}')


def date():
    return _(r'\d{4}-\d{2}-\d{2}')


def comparator():
    # Two-character operators first.
    return _(_alternation(COMPARATORS))


def clause_type():
    return _(r'({})\b'.format(_alternation(CLAUSE_TYPES)))


def party_role():
    return _(r'({})\b'.format(_alternation(PARTY_ROLES)))


def connective():
    return _(r'({})\b'.format(_alternation(LOGICAL_OPS)))


# ==========================================
# TERMS
# ==========================================

def value():
    # number before variable_name; quoted text is kept with its quotes
    return [number, string, variable_name]


def timeout():
    # Timeout(<seconds>); a name operand parses but is not lowered
    return TERM_TIMEOUT, "(", [number, variable_name], ")"


def message_content():
    # MessageContent()            presence check
    # MessageContent(x)           presence check
    # MessageContent(a <op> b)    binary comparison
    return TERM_MESSAGE_CONTENT, "(", Optional([(value, comparator, value), value]), ")"


def term():
    return [timeout, message_content]


def term_or_when():
    # A term, preceded by its connective unless it is the first one
    return Optional(connective), term


def terms():
    return "terms", "{", OneOrMore(term_or_when), "}"


# ==========================================
# CLAUSES
# ==========================================

def role_player():
    return "rolePlayer", "=", party_role


def operation():
    return "operation", "=", variable_name


def on_breach():
    # onBreach ( log ( "message" ) )
    return "onBreach", "(", "log", "(", string, ")", ")"


def clause():
    return clause_type, variable_name, "{", role_player, Optional(operation), terms, Optional(on_breach), "}"


def clauses():
    return "clauses", "{", ZeroOrMore(clause), "}"


# ==========================================
# CONTRACT
# ==========================================

def variable_statement():
    return variable_name, "=", term


def variables():
    return "variables", "{", ZeroOrMore(variable_statement), "}"


def begin_date():
    return "beginDate", "=", [datetime, date]


def due_date():
    return "dueDate", "=", [datetime, date]


def dates():
    return "dates", "{", begin_date, due_date, "}"


def application():
    return "application", "=", [string, variable_name]


def process():
    return "process", "=", [string, variable_name]


def parties():
    return "parties", "{", application, process, "}"


def contract():
    return "contract", variable_name, "{", ZeroOrMore([variables, dates, parties, clauses]), "}", EOF
