"""
Eliza Engine - Keyword / decomposition / reassembly responder
=============================================================

This module implements the turn loop:

    raw text -> Normalizer -> KeywordSelector -> DecompositionMatcher
             -> PronounTransformer -> ReassemblyGenerator -> response

A turn with no usable keyword is answered from the session's memory
queue, then from the fallback rotation. The engine holds only immutable
script data; all per-conversation state is passed in as a SessionState.
"""

from typing import List, Optional, Sequence

from core.config import Config
from core.exceptions import ConfigurationError, ScriptError
from core.logging import get_logger
from .default_script import DEFAULT_SCRIPT
from .matcher import Decomposition, DecompositionMatcher
from .normalizer import Normalizer
from .reflection import PronounTransformer
from .script import Script, load_script, load_script_file
from .selector import KeywordSelector
from .session import DEFAULT_MEMORY_SIZE, SessionState
from .templates import ReassemblyGenerator

logger = get_logger("rules.engine", component="engine")

DEFAULT_MAX_REDIRECTS = 5


class ElizaEngine:
    """
    Deterministic scripted responder.

    Example:
        engine = ElizaEngine()
        session = engine.create_session()

        print(engine.greeting(session))
        print(engine.respond("I am unhappy about my job", session))

    One engine may serve any number of sessions; it never mutates the
    script and keeps no per-conversation state of its own.
    """

    name = "Eliza (Local)"

    def __init__(
        self,
        script: Optional[Script] = None,
        memory_size: int = DEFAULT_MEMORY_SIZE,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
    ):
        """
        Initialize the engine.

        Args:
            script: Validated script; the built-in script when omitted
            memory_size: Memory queue capacity for new sessions
            max_redirects: Longest ``=keyword`` chain followed in one turn
        """
        self.script = script if script is not None else load_script(DEFAULT_SCRIPT)
        self.memory_size = memory_size
        self.max_redirects = max_redirects

        self.normalizer = Normalizer(self.script.substitutions, self.script.contractions)
        self.selector = KeywordSelector(self.script)
        self.matcher = DecompositionMatcher(self.script)
        self.transformer = PronounTransformer(self.script.reflections)
        self.generator = ReassemblyGenerator(self.transformer)

    @classmethod
    def from_config(cls, config: Config) -> "ElizaEngine":
        """
        Build an engine from settings.

        Raises:
            ScriptError: If the configured script file is invalid
        """
        engine_cfg = config.engine
        try:
            if engine_cfg.script_path:
                logger.info(f"Loading script from {engine_cfg.script_path}")
                script = load_script_file(engine_cfg.script_path)
            else:
                script = load_script(DEFAULT_SCRIPT)
        except ScriptError as e:
            logger.error(f"Invalid script: {e}")
            raise

        return cls(
            script=script,
            memory_size=engine_cfg.memory_size,
            max_redirects=engine_cfg.max_redirects,
        )

    def create_session(self) -> SessionState:
        """Return a fresh, empty session."""
        return SessionState(memory_size=self.memory_size)

    def greeting(self, session: Optional[SessionState] = None) -> str:
        """
        Opening line for a conversation.

        Rotates through the script's greetings when a session is given;
        otherwise always returns the first one.
        """
        greetings = self.script.greetings or self.script.fallbacks
        if session is None:
            return greetings[0]
        text = greetings[session.greeting_counter % len(greetings)]
        session.greeting_counter += 1
        return text

    def respond(self, text: str, session: SessionState) -> str:
        """
        Produce the response for one user turn.

        Args:
            text: Raw user text
            session: State of the conversation this turn belongs to

        Returns:
            Response text; never empty for a valid script

        Raises:
            ConfigurationError: If the script holds a defect validation missed
        """
        session.turns += 1
        tokens = self.normalizer.tokenize(text or "")
        extra = {"session": session.session_id}

        if not tokens:
            logger.debug("Empty input, using fallback", extra=extra)
            return self._fallback(session)

        if self._is_goodbye(tokens):
            session.finished = True
            return self._goodbye(session)

        # Memories from this turn are queued only after any recall, so a
        # statement never comes back in the turn that produced it.
        pending: List[str] = []

        for candidate in self.selector.candidates(tokens):
            decomposition = self.matcher.match(candidate.rule, tokens)
            if decomposition is None:
                logger.debug(
                    f"Keyword '{candidate.keyword}' present but no pattern matched",
                    extra=extra,
                )
                continue

            response = self._reassemble(decomposition, tokens, session, pending)
            if response is not None:
                self._store_memories(pending, session)
                return response

        recalled = session.recall()
        self._store_memories(pending, session)
        if recalled is not None:
            logger.debug(f"No keyword matched, recalling memory ({len(session.memory)} left)", extra=extra)
            return recalled

        logger.debug("No keyword matched, using fallback", extra=extra)
        return self._fallback(session)

    def _reassemble(
        self,
        decomposition: Decomposition,
        tokens: Sequence[str],
        session: SessionState,
        pending: List[str],
    ) -> Optional[str]:
        """
        Fill the next template of a matched decomposition, following redirects.

        Statements from memory-flagged patterns are appended to ``pending``.
        Returns ``None`` if a redirect lands on a rule that does not match.
        """
        extra = {"session": session.session_id}
        redirects = 0

        while True:
            rule = decomposition.rule
            logger.debug(
                f"Rule '{rule.keyword}' pattern {decomposition.index} "
                f"({decomposition.pattern}) matched",
                extra=extra,
            )

            if decomposition.pattern.memory:
                statement = self._memorize(decomposition, session)
                if statement is not None:
                    pending.append(statement)

            try:
                template, text = self.generator.generate(
                    rule.keyword,
                    decomposition.index,
                    decomposition.pattern.reassemblies,
                    decomposition.captures,
                    session,
                )
            except ConfigurationError as e:
                logger.error(f"Script defect while answering: {e}", extra=extra)
                raise

            if text is not None:
                return text

            redirects += 1
            if redirects > self.max_redirects:
                logger.error(f"Redirect chain exceeded {self.max_redirects} hops", extra=extra)
                raise ConfigurationError(
                    "Too many redirects",
                    {
                        "keyword": rule.keyword,
                        "pattern_index": decomposition.index,
                        "max_redirects": self.max_redirects,
                    },
                )

            target = self.script.get_rule(template.redirect_target)
            if target is None:
                raise ConfigurationError(
                    "Redirect to unknown keyword",
                    {
                        "keyword": rule.keyword,
                        "pattern_index": decomposition.index,
                        "target": template.redirect_target,
                    },
                )

            decomposition = self.matcher.match(target, tokens)
            if decomposition is None:
                logger.debug(f"Redirect target '{target.keyword}' did not match", extra=extra)
                return None

    def _memorize(self, decomposition: Decomposition, session: SessionState) -> Optional[str]:
        """Fill the next memory template for a memory-flagged match."""
        templates = self.script.memory_templates
        if not templates:
            return None

        template = templates[session.memory_counter % len(templates)]
        session.memory_counter += 1
        return self.generator.fill(
            template,
            decomposition.captures,
            decomposition.rule.keyword,
            decomposition.index,
        )

    def _store_memories(self, statements: List[str], session: SessionState) -> None:
        for statement in statements:
            session.remember(statement)
        if statements:
            logger.debug(
                f"Stored {len(statements)} memories ({len(session.memory)} queued)",
                extra={"session": session.session_id},
            )

    def _fallback(self, session: SessionState) -> str:
        fallbacks = self.script.fallbacks
        text = fallbacks[session.fallback_counter % len(fallbacks)]
        session.fallback_counter += 1
        return text

    def _is_goodbye(self, tokens: Sequence[str]) -> bool:
        quit_words = self.script.quit_words
        return bool(quit_words) and bool(self.script.goodbyes) and all(
            token in quit_words for token in tokens
        )

    def _goodbye(self, session: SessionState) -> str:
        goodbyes = self.script.goodbyes
        text = goodbyes[session.goodbye_counter % len(goodbyes)]
        session.goodbye_counter += 1
        return text
