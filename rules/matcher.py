"""
Decomposition Matcher - Structural matching of patterns against tokens
======================================================================

Patterns are anchored at both ends: ``"i am *"`` only matches inputs that
start with "i am", while ``"* i am *"`` matches it anywhere. Each ``*``
captures a possibly empty run of tokens. When several splits are possible
the leftmost wildcard takes the longest span that still lets the rest of
the pattern match.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from .script import GROUP_PREFIX, WILDCARD, DecompositionPattern, Rule, Script


@dataclass(frozen=True)
class Decomposition:
    """
    A successful match of one of a rule's patterns.

    Attributes:
        rule (Rule): Rule the pattern belongs to
        index (int): Position of the pattern in ``rule.decompositions``
        captures (tuple): One string per wildcard, tokens joined by spaces
    """
    rule: Rule
    index: int
    captures: Tuple[str, ...]

    @property
    def pattern(self) -> DecompositionPattern:
        return self.rule.decompositions[self.index]


def match_pattern(
    pattern: Sequence[str],
    tokens: Sequence[str],
    script: Optional[Script] = None,
) -> Optional[List[str]]:
    """
    Match a tokenized pattern against input tokens.

    Args:
        pattern: Pattern tokens (literals, ``*`` and ``@group``)
        tokens: Normalized input tokens
        script: Needed only to resolve ``@group`` references

    Returns:
        Captured fragments in wildcard order, or ``None`` if no match
    """
    pattern = tuple(pattern)
    tokens = tuple(tokens)

    # Memoized on (pattern position, token position)
    @lru_cache(maxsize=None)
    def match_from(p: int, t: int) -> Optional[Tuple[Tuple[str, ...], ...]]:
        if p == len(pattern):
            return () if t == len(tokens) else None

        token = pattern[p]
        if token == WILDCARD:
            # Longest span first
            for end in range(len(tokens), t - 1, -1):
                rest = match_from(p + 1, end)
                if rest is not None:
                    return (tokens[t:end],) + rest
            return None

        if t < len(tokens) and _token_matches(token, tokens[t], script):
            return match_from(p + 1, t + 1)
        return None

    spans = match_from(0, 0)
    if spans is None:
        return None
    return [" ".join(span) for span in spans]


def _token_matches(pattern_token: str, word: str, script: Optional[Script]) -> bool:
    if pattern_token.startswith(GROUP_PREFIX) and len(pattern_token) > 1:
        if script is None:
            return False
        group = script.get_group(pattern_token[1:])
        return group is not None and word in group.words()
    return pattern_token == word


class DecompositionMatcher:
    """Tries a rule's patterns in order; the first structural match wins."""

    def __init__(self, script: Script):
        self.script = script

    def match(self, rule: Rule, tokens: Sequence[str]) -> Optional[Decomposition]:
        for index, decomposition in enumerate(rule.decompositions):
            captures = match_pattern(decomposition.pattern, tokens, self.script)
            if captures is not None:
                return Decomposition(rule=rule, index=index, captures=tuple(captures))
        return None
