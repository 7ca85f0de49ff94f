"""
Rule Script - Immutable rule table, synonym groups and load-time validation
===========================================================================

A script is loaded once and never mutated. Loading validates everything a
turn could later trip over, so an engine is never built from a broken
script.

Script files are YAML (or JSON) documents shaped like:

    rules:
      - keyword: remember
        rank: 5
        decompositions:
          - pattern: "* i remember *"
            memory: true
            reassemblies:
              - "Do you often think of {1}?"
              - "=what"
    synonyms:
      - canonical: family
        members: [mother, father, sister]
    fallbacks:
      - "Please go on."
    memory_templates:
      - "Earlier you said {1}."

Pattern tokens are literal words, ``*`` (captures any run of words,
possibly empty) or ``@group`` (matches one member of a synonym group).
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

import yaml

from core.exceptions import ScriptError
from core.logging import get_logger
from .templates import ReassemblyTemplate

logger = get_logger("rules.script", component="script")

WILDCARD = "*"
GROUP_PREFIX = "@"


@dataclass(frozen=True)
class DecompositionPattern:
    """
    One decomposition of a rule.

    Attributes:
        pattern (tuple): Literal tokens, ``*`` wildcards and ``@group`` references
        reassemblies (tuple): Templates rotated through on successive uses
        memory (bool): Whether a match also stores a statement for later turns
    """
    pattern: Tuple[str, ...]
    reassemblies: Tuple[ReassemblyTemplate, ...]
    memory: bool = False

    @property
    def wildcard_count(self) -> int:
        return sum(1 for token in self.pattern if token == WILDCARD)

    def __str__(self) -> str:
        return " ".join(self.pattern)


@dataclass(frozen=True)
class Rule:
    """
    A keyword and its ordered decompositions.

    Attributes:
        keyword (str): Trigger token, unique within a script
        rank (int): Higher rank wins when several keywords appear
        decompositions (tuple): Patterns tried in order
    """
    keyword: str
    rank: int
    decompositions: Tuple[DecompositionPattern, ...]


@dataclass(frozen=True)
class SynonymGroup:
    """Surface words that all resolve to ``canonical`` before lookup."""
    canonical: str
    members: FrozenSet[str]

    def words(self) -> FrozenSet[str]:
        return self.members | {self.canonical}


@dataclass(frozen=True)
class Script:
    """
    Complete, validated rule table.

    Use ``load_script`` or ``load_script_file`` rather than building one
    directly; the constructor does not validate.
    """
    rules: Tuple[Rule, ...]
    fallbacks: Tuple[str, ...]
    synonyms: Tuple[SynonymGroup, ...] = ()
    memory_templates: Tuple[ReassemblyTemplate, ...] = ()
    substitutions: Mapping[str, str] = field(default_factory=dict)
    contractions: Optional[Mapping[str, str]] = None
    reflections: Optional[Mapping[str, str]] = None
    greetings: Tuple[str, ...] = ()
    goodbyes: Tuple[str, ...] = ()
    quit_words: FrozenSet[str] = frozenset()

    def __post_init__(self):
        index = {rule.keyword: rule for rule in self.rules}
        synonym_map = {}
        for group in self.synonyms:
            for word in group.words():
                synonym_map[word] = group.canonical

        object.__setattr__(self, "_index", MappingProxyType(index))
        object.__setattr__(self, "_synonym_map", MappingProxyType(synonym_map))
        object.__setattr__(
            self, "_groups", MappingProxyType({g.canonical: g for g in self.synonyms})
        )

    @property
    def index(self) -> Mapping[str, Rule]:
        """Keyword -> Rule lookup."""
        return self._index

    @property
    def synonym_map(self) -> Mapping[str, str]:
        """Surface word -> canonical keyword lookup."""
        return self._synonym_map

    def get_rule(self, keyword: str) -> Optional[Rule]:
        return self._index.get(keyword)

    def get_group(self, canonical: str) -> Optional[SynonymGroup]:
        return self._groups.get(canonical)

    def resolve(self, word: str) -> str:
        """Map a surface word onto its canonical keyword (or itself)."""
        return self._synonym_map.get(word, word)


def parse_pattern(pattern: Union[str, List[str]]) -> Tuple[str, ...]:
    """
    Split a pattern into tokens.

    ``"*i am*"`` and ``"* i am *"`` are equivalent; wildcards always stand
    alone as tokens.
    """
    if isinstance(pattern, str):
        pattern = pattern.replace(WILDCARD, f" {WILDCARD} ").split()
    return tuple(str(token).strip().lower() for token in pattern if str(token).strip())


def load_script(data: Mapping[str, Any]) -> Script:
    """
    Build and validate a Script from plain data.

    Args:
        data: Mapping with ``rules``, ``fallbacks`` and optional extras

    Returns:
        Validated Script

    Raises:
        ScriptError: If the data describes an invalid rule table
    """
    if not isinstance(data, Mapping):
        raise ScriptError("Script must be a mapping", {"type": type(data).__name__})

    synonyms = _parse_synonyms(data.get("synonyms") or [])
    group_names = {group.canonical for group in synonyms}

    rules: List[Rule] = []
    seen = set()
    for position, rule_data in enumerate(_require_list(data, "rules")):
        rule = _parse_rule(rule_data, position, group_names)
        if rule.keyword in seen:
            raise ScriptError("Duplicate keyword", {"keyword": rule.keyword})
        seen.add(rule.keyword)
        rules.append(rule)

    _check_redirects(rules, seen)

    fallbacks = tuple(_string_list(data, "fallbacks"))
    if not fallbacks:
        raise ScriptError("Script needs at least one fallback response")

    memory_templates = tuple(
        ReassemblyTemplate(t) for t in _string_list(data, "memory_templates")
    )
    _check_memory_templates(rules, memory_templates)

    script = Script(
        rules=tuple(rules),
        fallbacks=fallbacks,
        synonyms=synonyms,
        memory_templates=memory_templates,
        substitutions=MappingProxyType(_string_map(data, "substitutions") or {}),
        contractions=_frozen_map(_string_map(data, "contractions")),
        reflections=_frozen_map(_string_map(data, "reflections")),
        greetings=tuple(_string_list(data, "greetings")),
        goodbyes=tuple(_string_list(data, "goodbyes")),
        quit_words=frozenset(w.lower() for w in _string_list(data, "quit_words")),
    )

    logger.info(
        f"Loaded script with {len(script.rules)} rules, "
        f"{len(script.synonyms)} synonym groups, {len(script.fallbacks)} fallbacks"
    )
    return script


def load_script_file(path: Union[str, Path]) -> Script:
    """
    Load a script from a YAML or JSON file.

    Raises:
        ScriptError: If the file cannot be read or parsed, or is invalid
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ScriptError(f"Failed to load script: {e}", {"path": str(path)})

    return load_script(data)


def _parse_rule(data: Any, position: int, group_names) -> Rule:
    if not isinstance(data, Mapping):
        raise ScriptError("Rule must be a mapping", {"position": position})

    keyword = str(data.get("keyword") or "").strip().lower()
    if not keyword or len(keyword.split()) != 1:
        raise ScriptError(
            "Rule keyword must be a single word",
            {"position": position, "keyword": data.get("keyword")},
        )

    rank = data.get("rank", 0)
    if isinstance(rank, bool) or not isinstance(rank, int):
        raise ScriptError("Rule rank must be an integer", {"keyword": keyword, "rank": rank})

    decomposition_data = data.get("decompositions") or []
    if not decomposition_data:
        raise ScriptError("Rule has no decompositions", {"keyword": keyword})

    decompositions = tuple(
        _parse_decomposition(item, keyword, index, group_names)
        for index, item in enumerate(decomposition_data)
    )
    return Rule(keyword=keyword, rank=rank, decompositions=decompositions)


def _parse_decomposition(data: Any, keyword: str, index: int, group_names) -> DecompositionPattern:
    where = {"keyword": keyword, "pattern_index": index}
    if not isinstance(data, Mapping):
        raise ScriptError("Decomposition must be a mapping", where)

    tokens = parse_pattern(data.get("pattern") or "")
    if not tokens:
        raise ScriptError("Decomposition pattern is empty", where)

    for token in tokens:
        if token.startswith(GROUP_PREFIX) and token[1:] not in group_names:
            raise ScriptError("Unknown synonym group in pattern", {**where, "group": token})

    templates = data.get("reassemblies") or []
    if isinstance(templates, str) or not templates:
        raise ScriptError("Decomposition has no reassembly templates", where)

    reassemblies = tuple(ReassemblyTemplate(str(t)) for t in templates)
    pattern = DecompositionPattern(
        pattern=tokens,
        reassemblies=reassemblies,
        memory=bool(data.get("memory", False)),
    )

    for template in reassemblies:
        _check_placeholders(template, pattern, where)

    return pattern


def _check_placeholders(template: ReassemblyTemplate, pattern: DecompositionPattern, where: dict) -> None:
    for index in template.placeholders():
        if index >= pattern.wildcard_count:
            raise ScriptError(
                "Reassembly placeholder has no matching wildcard",
                {
                    **where,
                    "template": template.content,
                    "placeholder": index,
                    "wildcards": pattern.wildcard_count,
                },
            )


def _check_redirects(rules: List[Rule], keywords) -> None:
    for rule in rules:
        for index, decomposition in enumerate(rule.decompositions):
            for template in decomposition.reassemblies:
                target = template.redirect_target
                if target is None:
                    continue
                if target not in keywords or target == rule.keyword:
                    raise ScriptError(
                        "Invalid redirect target",
                        {"keyword": rule.keyword, "pattern_index": index, "target": target},
                    )


def _check_memory_templates(rules: List[Rule], templates: Tuple[ReassemblyTemplate, ...]) -> None:
    for template in templates:
        if template.is_redirect:
            raise ScriptError("Memory templates cannot redirect", {"template": template.content})

    for rule in rules:
        for index, decomposition in enumerate(rule.decompositions):
            if not decomposition.memory:
                continue
            where = {"keyword": rule.keyword, "pattern_index": index}
            if not templates:
                raise ScriptError("Memory pattern defined but no memory templates", where)
            for template in templates:
                _check_placeholders(template, decomposition, where)


def _parse_synonyms(data: Any) -> Tuple[SynonymGroup, ...]:
    if not isinstance(data, list):
        raise ScriptError("synonyms must be a list")

    groups = []
    owner: Dict[str, str] = {}
    for item in data:
        if not isinstance(item, Mapping) or not item.get("canonical"):
            raise ScriptError("Synonym group needs a canonical keyword", {"group": item})

        canonical = str(item["canonical"]).strip().lower()
        members = frozenset(str(m).strip().lower() for m in item.get("members") or [])
        group = SynonymGroup(canonical=canonical, members=members)

        for word in group.words():
            if word in owner and owner[word] != canonical:
                raise ScriptError(
                    "Word belongs to more than one synonym group",
                    {"word": word, "groups": [owner[word], canonical]},
                )
            owner[word] = canonical
        groups.append(group)

    return tuple(groups)


def _require_list(data: Mapping, key: str) -> list:
    value = data.get(key)
    if not isinstance(value, list):
        raise ScriptError(f"Script '{key}' must be a list")
    return value


def _string_list(data: Mapping, key: str) -> List[str]:
    value = data.get(key) or []
    if isinstance(value, str) or not isinstance(value, list):
        raise ScriptError(f"Script '{key}' must be a list of strings")
    return [str(item) for item in value]


def _string_map(data: Mapping, key: str) -> Optional[Dict[str, str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ScriptError(f"Script '{key}' must be a mapping")
    return {str(k).lower(): str(v) for k, v in value.items()}


def _frozen_map(value: Optional[Dict[str, str]]) -> Optional[Mapping[str, str]]:
    return None if value is None else MappingProxyType(value)
