"""
Keyword Selector - Ranks the keywords present in a normalized input
===================================================================
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .script import Rule, Script


@dataclass(frozen=True)
class KeywordCandidate:
    """
    A rule whose keyword occurs in the input.

    Attributes:
        rule (Rule): The rule for the keyword
        position (int): Token index of the keyword's first occurrence
        surface (str): The word as typed, before synonym resolution
    """
    rule: Rule
    position: int
    surface: str

    @property
    def keyword(self) -> str:
        return self.rule.keyword


class KeywordSelector:
    """
    Finds and orders keyword candidates for a token sequence.

    Ordering is highest rank first; equal ranks keep the keyword that
    occurs earliest in the input first. Selection is a pure function of
    the tokens and the script.
    """

    def __init__(self, script: Script):
        self.script = script

    def candidates(self, tokens: Sequence[str]) -> List[KeywordCandidate]:
        """Return every matching rule, best first. Empty means no match."""
        found = {}
        for position, token in enumerate(tokens):
            keyword = self.script.resolve(token)
            if keyword in found:
                continue
            rule = self.script.get_rule(keyword)
            if rule is not None:
                found[keyword] = KeywordCandidate(rule=rule, position=position, surface=token)

        return sorted(found.values(), key=lambda c: (-c.rule.rank, c.position))

    def select(self, tokens: Sequence[str]) -> Optional[KeywordCandidate]:
        """Return the best candidate, or ``None`` when no keyword is present."""
        ranked = self.candidates(tokens)
        return ranked[0] if ranked else None
