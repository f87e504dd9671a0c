"""
jabuti/naming.py - Identifier Naming Service

Generated code needs every symbol in three casings at once (field names,
method names, storage keys differ per target template). All three renderings
are built from the same ordered tokens; only casing and separators differ.

Pure functions, no state.
"""

from typing import Iterable

from .models import IdentifierName


def _upper_first(token: str) -> str:
    return token[:1].upper() + token[1:]


def _lower_first(token: str) -> str:
    return token[:1].lower() + token[1:]


def _tokens(parts: Iterable) -> list:
    # Term indexes arrive as ints.
    return [str(p) for p in parts]


def synthesize(base: str, parts: Iterable = ()) -> IdentifierName:
    """
    Build the identifier triple for base + suffix parts.

    pascal: Base + Part1 + Part2 ...
    camel:  base + Part1 + Part2 ...
    snake:  base_part1_part2 ... (case preserved)

    >>> synthesize("messageContent", [0, 2]).camel
    'messageContent02'
    """
    tokens = _tokens(parts)
    tail = "".join(_upper_first(t) for t in tokens)
    return IdentifierName(
        pascal=_upper_first(base) + tail,
        camel=_lower_first(base) + tail,
        snake="_".join([base] + tokens),
    )


def derive(name: IdentifierName, parts: Iterable = ()) -> IdentifierName:
    """Extend an existing triple; each rendering keeps its leading segment as built."""
    tokens = _tokens(parts)
    tail = "".join(_upper_first(t) for t in tokens)
    return IdentifierName(
        pascal=name.pascal + tail,
        camel=name.camel + tail,
        snake="_".join([name.snake] + tokens),
    )


def clause_name(kind: str, local_name: str) -> IdentifierName:
    """
    Name of a clause: its category keyword followed by its declared name.

    The keyword is a single word, so it is title-cased for pascal and fully
    lower-cased for camel; snake keeps both tokens verbatim.
    """
    return IdentifierName(
        pascal=kind.capitalize() + _upper_first(local_name),
        camel=kind.lower() + _upper_first(local_name),
        snake=f"{kind}_{local_name}",
    )
