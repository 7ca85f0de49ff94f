"""
Rules Module - Scripted keyword/decomposition/reassembly responder
==================================================================

This module provides the local, offline dialogue engine:
- Immutable rule scripts with load-time validation
- Input normalization and keyword ranking
- Wildcard decomposition and pronoun reflection
- Round-robin reassembly, memory recall and fallback rotation
"""

from .engine import ElizaEngine
from .matcher import Decomposition, DecompositionMatcher, match_pattern
from .normalizer import Normalizer
from .reflection import PronounTransformer
from .script import (
    DecompositionPattern,
    Rule,
    Script,
    SynonymGroup,
    load_script,
    load_script_file,
)
from .selector import KeywordCandidate, KeywordSelector
from .session import SessionState
from .templates import ReassemblyGenerator, ReassemblyTemplate

__all__ = [
    "ElizaEngine",
    "Decomposition",
    "DecompositionMatcher",
    "match_pattern",
    "Normalizer",
    "PronounTransformer",
    "DecompositionPattern",
    "Rule",
    "Script",
    "SynonymGroup",
    "load_script",
    "load_script_file",
    "KeywordCandidate",
    "KeywordSelector",
    "SessionState",
    "ReassemblyGenerator",
    "ReassemblyTemplate",
]
