"""
Input Normalizer - Turns raw user text into a token sequence
============================================================

Steps, in order:
1. Case-fold
2. Split on anything that is not a word character or apostrophe
3. Expand contractions ("don't" -> "do not")
4. Drop possessive "'s" and leftover apostrophes
5. Apply word substitutions (spelling and synonym normalization)
"""

import re
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional


TOKEN_RE = re.compile(r"[\w']+")

DEFAULT_CONTRACTIONS: Dict[str, str] = {
    "i'm": "i am",
    "i've": "i have",
    "i'll": "i will",
    "i'd": "i would",
    "you're": "you are",
    "you've": "you have",
    "you'll": "you will",
    "you'd": "you would",
    "he's": "he is",
    "she's": "she is",
    "it's": "it is",
    "we're": "we are",
    "they're": "they are",
    "that's": "that is",
    "what's": "what is",
    "there's": "there is",
    "let's": "let us",
    "don't": "do not",
    "doesn't": "does not",
    "didn't": "did not",
    "can't": "can not",
    "cannot": "can not",
    "won't": "will not",
    "wouldn't": "would not",
    "couldn't": "could not",
    "shouldn't": "should not",
    "isn't": "is not",
    "aren't": "are not",
    "wasn't": "was not",
    "weren't": "were not",
    "haven't": "have not",
    "hasn't": "has not",
}


class Normalizer:
    """
    Converts raw text into lowercase tokens ready for keyword lookup.

    Never raises; empty or punctuation-only input yields an empty list.
    """

    def __init__(
        self,
        substitutions: Optional[Mapping[str, str]] = None,
        contractions: Optional[Mapping[str, str]] = None,
    ):
        self.substitutions = MappingProxyType(
            {k.lower(): v.lower() for k, v in (substitutions or {}).items()}
        )
        source = DEFAULT_CONTRACTIONS if contractions is None else contractions
        self.contractions = MappingProxyType({k.lower(): v.lower() for k, v in source.items()})

    def tokenize(self, text: str) -> List[str]:
        """Normalize ``text`` into a list of tokens."""
        if not text:
            return []

        folded = text.casefold().replace("’", "'").replace("‘", "'")
        tokens: List[str] = []

        for raw in TOKEN_RE.findall(folded):
            word = raw.strip("'")
            if not word:
                continue

            expanded = self.contractions.get(word)
            if expanded is not None:
                words = expanded.split()
            elif word.endswith("'s"):
                # possessive
                words = [word[:-2].replace("'", "")]
            else:
                words = [word.replace("'", "")]

            for w in words:
                tokens.extend(self.substitutions.get(w, w).split())

        return tokens

    def normalize(self, text: str) -> str:
        """Normalize ``text`` and join the tokens with single spaces."""
        return " ".join(self.tokenize(text))
