"""
Test Engine Module
==================

Unit tests for ElizaEngine turn handling: keyword selection, rotation,
memory recall, fallbacks, redirects and session isolation.
"""

import pytest
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import Config
from core.exceptions import ConfigurationError, ScriptError
from rules.engine import ElizaEngine
from rules.script import DecompositionPattern, Rule, Script, load_script
from rules.templates import ReassemblyTemplate


FALLBACKS = ["Please go on.", "Tell me more.", "I see."]


def build_engine(**overrides) -> ElizaEngine:
    """Engine over a small, predictable script."""
    data = {
        "fallbacks": FALLBACKS,
        "memory_templates": ["Earlier you said your {1}.", "But your {1}."],
        "synonyms": [{"canonical": "family", "members": ["mother", "father"]}],
        "quit_words": ["bye"],
        "goodbyes": ["Goodbye."],
        "greetings": ["Hello.", "Hi again."],
        "rules": [
            {"keyword": "alpha", "rank": 0, "decompositions": [
                {"pattern": "*", "reassemblies": ["alpha 0", "alpha 1", "alpha 2"]},
            ]},
            {"keyword": "beta", "rank": 0, "decompositions": [
                {"pattern": "*", "reassemblies": ["beta"]},
            ]},
            {"keyword": "high", "rank": 9, "decompositions": [
                {"pattern": "*", "reassemblies": ["high"]},
            ]},
            {"keyword": "my", "rank": 2, "decompositions": [
                {"pattern": "* my *", "memory": True, "reassemblies": ["Your {1}?"]},
            ]},
            {"keyword": "family", "rank": 3, "decompositions": [
                {"pattern": "* my @family *", "reassemblies": ["Who else in your family {1}?"]},
            ]},
            {"keyword": "strict", "rank": 8, "decompositions": [
                {"pattern": "strict only", "reassemblies": ["strict"]},
            ]},
            {"keyword": "why", "rank": 0, "decompositions": [
                {"pattern": "*", "reassemblies": ["=alpha"]},
            ]},
        ],
    }
    data.update(overrides)
    return ElizaEngine(load_script(data))


class TestRespond:
    """Tests for keyword-driven responses."""

    def test_single_keyword(self):
        """Test a lone keyword is answered by its rule."""
        engine = build_engine()
        session = engine.create_session()
        assert engine.respond("Tell me about beta please", session) == "beta"

    def test_rank_beats_order(self):
        """Test the higher-ranked keyword wins in either order."""
        engine = build_engine()
        assert engine.respond("alpha then high", engine.create_session()) == "high"
        assert engine.respond("high then alpha", engine.create_session()) == "high"

    def test_equal_rank_earliest(self):
        """Test equal ranks go to the earliest keyword."""
        engine = build_engine()
        assert engine.respond("beta and alpha", engine.create_session()) == "beta"
        assert engine.respond("alpha and beta", engine.create_session()) == "alpha 0"

    def test_rotation(self):
        """Test N=5 uses of a 3-template pattern cycle 0,1,2,0,1."""
        engine = build_engine()
        session = engine.create_session()
        responses = [engine.respond("alpha", session) for _ in range(5)]
        assert responses == ["alpha 0", "alpha 1", "alpha 2", "alpha 0", "alpha 1"]

    def test_capture_reflection(self):
        """Test captures are pronoun-transformed in the response."""
        engine = build_engine()
        session = engine.create_session()
        assert engine.respond("My dog and me", session) == "Your dog and you?"

    def test_synonym_keyword(self):
        """Test synonym words trigger the canonical rule."""
        engine = build_engine()
        session = engine.create_session()
        assert engine.respond("My mother hates me.", session) == "Who else in your family hates you?"

    def test_unmatched_pattern_falls_to_next_keyword(self):
        """Test a keyword whose patterns fail gives way to the next candidate."""
        engine = build_engine()
        session = engine.create_session()
        assert engine.respond("strict alpha", session) == "alpha 0"

    def test_redirect(self):
        """Test =keyword templates answer with the target rule."""
        engine = build_engine()
        session = engine.create_session()
        assert engine.respond("why", session) == "alpha 0"
        assert engine.respond("alpha", session) == "alpha 1"


class TestMemory:
    """Tests for the memory mechanism."""

    def test_memory_round_trip(self):
        """Test a memory-flagged turn is recalled on the next unmatched turn."""
        engine = build_engine()
        session = engine.create_session()

        engine.respond("my dog and me", session)
        assert engine.respond("zzz", session) == "Earlier you said your dog and you."
        assert engine.respond("zzz", session) == FALLBACKS[0]

    def test_memory_fifo(self):
        """Test memories come back oldest first."""
        engine = build_engine()
        session = engine.create_session()

        engine.respond("my cat", session)
        engine.respond("my job", session)
        assert engine.respond("nothing", session) == "Earlier you said your cat."
        assert engine.respond("nothing", session) == "But your job."

    def test_memory_bounded(self):
        """Test the oldest memory is evicted when the queue is full."""
        engine = ElizaEngine(build_engine().script, memory_size=2)
        session = engine.create_session()

        for thing in ("cat", "dog", "fish"):
            engine.respond(f"my {thing}", session)

        assert len(session.memory) == 2
        assert engine.respond("nothing", session) == "But your dog."
        assert engine.respond("nothing", session) == "Earlier you said your fish."

    def test_memory_not_used_when_keyword_matches(self):
        """Test memories wait while keywords keep matching."""
        engine = build_engine()
        session = engine.create_session()

        engine.respond("my cat", session)
        assert engine.respond("beta", session) == "beta"
        assert session.has_memories

    def test_memory_not_recalled_in_same_turn(self):
        """Test a memory stored by a dead-end redirect waits for a later turn."""
        engine = build_engine(
            memory_templates=["Earlier: {1}."],
            rules=[
                {"keyword": "my", "rank": 2, "decompositions": [
                    {"pattern": "* my *", "memory": True, "reassemblies": ["=strict"]},
                ]},
                {"keyword": "strict", "rank": 0, "decompositions": [
                    {"pattern": "strict only", "reassemblies": ["strict"]},
                ]},
            ],
        )
        session = engine.create_session()

        assert engine.respond("my cat", session) == FALLBACKS[0]
        assert len(session.memory) == 1
        assert engine.respond("nothing", session) == "Earlier: cat."
        assert engine.respond("nothing", session) == FALLBACKS[1]

    def test_memory_queue_not_drained_by_own_turn(self):
        """Test an older memory is recalled before the current turn's statement."""
        engine = build_engine(
            memory_templates=["Earlier: {1}."],
            rules=[
                {"keyword": "my", "rank": 2, "decompositions": [
                    {"pattern": "* my *", "memory": True, "reassemblies": ["=strict"]},
                ]},
                {"keyword": "strict", "rank": 0, "decompositions": [
                    {"pattern": "strict only", "reassemblies": ["strict"]},
                ]},
            ],
        )
        session = engine.create_session()

        engine.respond("my cat", session)
        assert engine.respond("my dog", session) == "Earlier: cat."
        assert engine.respond("nothing", session) == "Earlier: dog."


class TestFallback:
    """Tests for fallback rotation and edge inputs."""

    def test_fallback_never_repeats_consecutively(self):
        """Test unmatched turns rotate through distinct fallbacks."""
        engine = build_engine()
        session = engine.create_session()
        responses = [engine.respond(f"unknown {i}", session) for i in range(7)]

        assert responses[:3] == FALLBACKS
        for previous, current in zip(responses, responses[1:]):
            assert previous != current

    def test_empty_input(self):
        """Test empty or punctuation-only input gets a fallback."""
        engine = build_engine()
        session = engine.create_session()
        assert engine.respond("", session) == FALLBACKS[0]
        assert engine.respond("?!", session) == FALLBACKS[1]
        assert engine.respond(None, session) == FALLBACKS[2]

    def test_goodbye(self):
        """Test quit words end the conversation."""
        engine = build_engine()
        session = engine.create_session()
        assert engine.respond("Bye!", session) == "Goodbye."
        assert session.finished

    def test_greeting_rotation(self):
        """Test greetings rotate per session."""
        engine = build_engine()
        session = engine.create_session()
        assert engine.greeting() == "Hello."
        assert engine.greeting(session) == "Hello."
        assert engine.greeting(session) == "Hi again."


class TestSessions:
    """Tests for session isolation."""

    def test_isolation(self):
        """Test sessions never share counters or memories."""
        engine = build_engine()
        first = engine.create_session()
        second = engine.create_session()

        engine.respond("alpha", first)
        engine.respond("alpha", first)
        engine.respond("my secret", first)

        assert engine.respond("alpha", second) == "alpha 0"
        assert engine.respond("nothing", second) == FALLBACKS[0]
        assert engine.respond("nothing", first) == "Earlier you said your secret."

    def test_reset(self):
        """Test reset clears rotation and memory."""
        engine = build_engine()
        session = engine.create_session()
        engine.respond("alpha", session)
        engine.respond("my cat", session)

        session.reset()
        assert engine.respond("alpha", session) == "alpha 0"
        assert not session.has_memories


class TestConfigurationErrors:
    """Tests for script defects found while answering."""

    def test_placeholder_out_of_range(self):
        """Test an unvalidated bad placeholder raises ConfigurationError."""
        script = Script(
            rules=(Rule("alpha", 0, (
                DecompositionPattern(("*",), (ReassemblyTemplate("{3}"),)),
            )),),
            fallbacks=("Go on.",),
        )
        engine = ElizaEngine(script)
        with pytest.raises(ConfigurationError) as exc:
            engine.respond("alpha", engine.create_session())
        assert exc.value.details["keyword"] == "alpha"
        assert exc.value.details["pattern_index"] == 0

    def test_redirect_loop(self):
        """Test redirect cycles stop at max_redirects."""
        script = Script(
            rules=(
                Rule("ping", 0, (DecompositionPattern(("*",), (ReassemblyTemplate("=pong"),)),)),
                Rule("pong", 0, (DecompositionPattern(("*",), (ReassemblyTemplate("=ping"),)),)),
            ),
            fallbacks=("Go on.",),
        )
        engine = ElizaEngine(script, max_redirects=3)
        with pytest.raises(ConfigurationError):
            engine.respond("ping", engine.create_session())


class TestDefaultScript:
    """Tests for the built-in script."""

    def setup_method(self):
        self.engine = ElizaEngine()
        self.session = self.engine.create_session()

    def test_name(self):
        """Test display name."""
        assert self.engine.name == "Eliza (Local)"

    def test_desire(self):
        """Test the desire group inside a pattern."""
        response = self.engine.respond("I need a vacation", self.session)
        assert response == "What would it mean to you if you got a vacation?"

    def test_sad(self):
        """Test the sad group inside a pattern."""
        response = self.engine.respond("I am depressed", self.session)
        assert response == "I am sorry to hear that you are feeling this way."

    def test_computer_outranks(self):
        """Test the highest-ranked keyword dominates."""
        response = self.engine.respond("I think my computer hates me", self.session)
        assert response == "Do computers worry you?"

    def test_why_dont_you(self):
        """Test contraction expansion feeds the pattern."""
        response = self.engine.respond("Why don't you help me?", self.session)
        assert response == "Do you believe I don't help you?"

    def test_why_redirects_to_what(self):
        """Test the catch-all why pattern redirects."""
        assert self.engine.respond("Why is the sky blue", self.session) == "Why do you ask?"

    def test_memory_round_trip(self):
        """Test memory with the built-in templates."""
        self.engine.respond("My dog and me", self.session)
        response = self.engine.respond("xyzzy", self.session)
        assert response == "Let us discuss further why your dog and you."

    def test_goodbye(self):
        """Test quitting."""
        assert self.engine.respond("goodbye", self.session).startswith("Goodbye")
        assert self.session.finished


class TestFromConfig:
    """Tests for building engines from settings."""

    def test_default_script(self):
        """Test the built-in script is used without a script path."""
        config = Config()
        config.engine.memory_size = 3
        engine = ElizaEngine.from_config(config)
        assert engine.script.get_rule("computer") is not None
        assert engine.create_session().memory.maxlen == 3

    def test_script_file(self, tmp_path):
        """Test a configured script file is loaded."""
        path = tmp_path / "script.yaml"
        path.write_text(
            "rules:\n"
            "  - keyword: hello\n"
            "    decompositions:\n"
            "      - pattern: '*'\n"
            "        reassemblies: ['Hi.']\n"
            "fallbacks: ['Go on.']\n"
        )
        config = Config()
        config.engine.script_path = str(path)
        engine = ElizaEngine.from_config(config)
        assert engine.respond("hello", engine.create_session()) == "Hi."

    def test_invalid_script_file(self, tmp_path):
        """Test invalid scripts stop engine construction."""
        path = tmp_path / "script.yaml"
        path.write_text("rules: []\nfallbacks: []\n")
        config = Config()
        config.engine.script_path = str(path)
        with pytest.raises(ScriptError):
            ElizaEngine.from_config(config)


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
