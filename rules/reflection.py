"""
Pronoun Reflection - First/second person inversion for captured fragments
=========================================================================

Captured fragments are echoed back to the user, so "my job" has to become
"your job" before it is placed in a reassembly template. The substitution
table is plain data; multi-word entries ("i am") take precedence over the
single words they contain so that "I am" becomes "you are", not "you am".

"you" is both a subject and an object. It becomes "I" at the start of a
clause or after a question auxiliary, and "me" elsewhere: "you hate my
boss" -> "I hate your boss", but "my boss hates you" -> "your boss hates me".
"""

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional


DEFAULT_REFLECTIONS: Dict[str, str] = {
    "i am": "you are",
    "you are": "I am",
    "i was": "you were",
    "you were": "I was",
    "i": "you",
    "me": "you",
    "my": "your",
    "your": "my",
    "mine": "yours",
    "yours": "mine",
    "myself": "yourself",
    "yourself": "myself",
    "am": "are",
    "you": "I",
}

# Replacements used when the word is not in subject position
DEFAULT_OBJECT_FORMS: Dict[str, str] = {
    "you": "me",
}

# Words after which "you" is still a subject: clause openers and the
# auxiliaries of an inverted question ("do you", "can you")
SUBJECT_MARKERS: FrozenSet[str] = frozenset({
    "and", "but", "or", "so", "that", "because", "if", "when",
    "since", "while", "though", "although", "then",
    "do", "does", "did", "can", "could", "will", "would", "shall",
    "should", "may", "might", "must", "have", "has", "had",
})


class PronounTransformer:
    """
    Word-by-word pronoun swapper driven by a substitution table.

    Example:
        transformer = PronounTransformer()
        transformer.transform("my dog and me")  # "your dog and you"

    A custom ``table`` replaces the defaults entirely; object forms then
    apply only when ``object_forms`` is passed as well.
    """

    def __init__(
        self,
        table: Optional[Mapping[str, str]] = None,
        object_forms: Optional[Mapping[str, str]] = None,
        subject_markers: Optional[Iterable[str]] = None,
    ):
        source = DEFAULT_REFLECTIONS if table is None else table
        if object_forms is None:
            object_forms = DEFAULT_OBJECT_FORMS if table is None else {}

        self.table = MappingProxyType({k.lower(): v for k, v in source.items()})
        self.object_forms = MappingProxyType({k.lower(): v for k, v in object_forms.items()})
        self.subject_markers = frozenset(
            w.lower() for w in (SUBJECT_MARKERS if subject_markers is None else subject_markers)
        )
        self._longest = max((len(k.split()) for k in self.table), default=1)

    def transform(self, fragment: str) -> str:
        """
        Rewrite pronouns in ``fragment``.

        Words are consumed left to right in a single pass; each position
        tries the longest table phrase first. Replaced words are never
        looked up again, so swaps cannot undo each other.
        """
        words = fragment.split()
        result = []
        i = 0
        while i < len(words):
            for size in range(min(self._longest, len(words) - i), 0, -1):
                phrase = " ".join(words[i:i + size]).lower()
                if phrase in self.table:
                    result.append(self._replacement(phrase, words, i))
                    i += size
                    break
            else:
                result.append(words[i])
                i += 1
        return " ".join(result)

    def _replacement(self, phrase: str, words, i: int) -> str:
        if phrase in self.object_forms and i > 0:
            if words[i - 1].lower() not in self.subject_markers:
                return self.object_forms[phrase]
        return self.table[phrase]
