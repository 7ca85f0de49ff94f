"""
Reassembly Templates - Placeholder substitution and template rotation
=====================================================================

Reassembly templates are response strings with 0-based positional
placeholders referencing the wildcard captures of a decomposition:

    "Why do you say you are {1}?"

A template written as ``=keyword`` is a redirect: the engine answers the
turn with the named keyword's rule instead of filling any text.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from core.exceptions import ConfigurationError
from .reflection import PronounTransformer


PLACEHOLDER_RE = re.compile(r"\{(\d+)\}")
REDIRECT_PREFIX = "="


@dataclass(frozen=True)
class ReassemblyTemplate:
    """
    A single response template.

    Attributes:
        content (str): Template text with ``{n}`` placeholders, or ``=keyword``
    """
    content: str

    @property
    def is_redirect(self) -> bool:
        return self.content.startswith(REDIRECT_PREFIX)

    @property
    def redirect_target(self) -> Optional[str]:
        """Keyword a redirect template points at, ``None`` for text templates."""
        if not self.is_redirect:
            return None
        return self.content[len(REDIRECT_PREFIX):].strip().lower()

    def placeholders(self) -> List[int]:
        """Return capture indexes referenced by the template, in order."""
        return [int(m.group(1)) for m in PLACEHOLDER_RE.finditer(self.content)]

    def render(self, captures: Sequence[str]) -> str:
        """
        Substitute captures into the template.

        Args:
            captures: Already-transformed capture fragments

        Returns:
            Filled response text

        Raises:
            IndexError: If a placeholder has no corresponding capture
        """
        def replace(match):
            return captures[int(match.group(1))]

        result = PLACEHOLDER_RE.sub(replace, self.content)
        return _tidy(result)


def _tidy(text: str) -> str:
    """Collapse whitespace left by empty captures."""
    text = re.sub(r"\s+", " ", text).strip()
    return re.sub(r"\s+([?.!,;:])", r"\1", text)


class ReassemblyGenerator:
    """
    Picks templates round-robin per (keyword, pattern) and fills them.

    Rotation state lives in the caller's SessionState, so one generator
    serves any number of sessions.
    """

    def __init__(self, transformer: PronounTransformer):
        self.transformer = transformer

    def next_template(
        self,
        keyword: str,
        pattern_index: int,
        templates: Sequence[ReassemblyTemplate],
        session,
    ) -> ReassemblyTemplate:
        """Select ``templates[counter % len]`` and advance the session counter."""
        key = (keyword, pattern_index)
        counter = session.usage_counters.get(key, 0)
        template = templates[counter % len(templates)]
        session.usage_counters[key] = counter + 1
        return template

    def fill(
        self,
        template: ReassemblyTemplate,
        captures: Sequence[str],
        keyword: str,
        pattern_index: int,
    ) -> str:
        """
        Pronoun-transform captures and substitute them into ``template``.

        Raises:
            ConfigurationError: If a placeholder is out of range
        """
        transformed = [self.transformer.transform(c) for c in captures]
        try:
            return template.render(transformed)
        except IndexError:
            raise ConfigurationError(
                "Reassembly placeholder out of range",
                {
                    "keyword": keyword,
                    "pattern_index": pattern_index,
                    "template": template.content,
                    "captures": len(captures),
                },
            )

    def generate(
        self,
        keyword: str,
        pattern_index: int,
        templates: Sequence[ReassemblyTemplate],
        captures: Sequence[str],
        session,
    ) -> Tuple[ReassemblyTemplate, Optional[str]]:
        """
        Rotate to the next template and fill it.

        Returns:
            ``(template, text)``; text is ``None`` when the template is a redirect
        """
        template = self.next_template(keyword, pattern_index, templates, session)
        if template.is_redirect:
            return template, None
        return template, self.fill(template, captures, keyword, pattern_index)
