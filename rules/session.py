"""
Session State - Per-conversation rotation counters and memory queue
===================================================================

Everything that changes from turn to turn lives here rather than in the
engine, so one engine can serve many conversations without them seeing
each other's state. Discarding a SessionState ends the conversation.
"""

import uuid
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Optional, Tuple


DEFAULT_MEMORY_SIZE = 5


@dataclass
class SessionState:
    """
    Mutable state for one conversation.

    Attributes:
        usage_counters (dict): ``(keyword, pattern_index)`` -> next template index
        memory (deque): Stored statements, oldest first, bounded
        fallback_counter (int): Next fallback index
        memory_counter (int): Next memory template index
        greeting_counter (int): Next greeting index
        goodbye_counter (int): Next goodbye index
        turns (int): Turns answered so far
        finished (bool): Set once the user says goodbye
        session_id (str): Short identifier used in log records
    """
    memory_size: int = DEFAULT_MEMORY_SIZE
    usage_counters: Dict[Tuple[str, int], int] = field(default_factory=dict)
    memory: Deque[str] = field(init=False)
    fallback_counter: int = 0
    memory_counter: int = 0
    greeting_counter: int = 0
    goodbye_counter: int = 0
    turns: int = 0
    finished: bool = False
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])

    def __post_init__(self):
        if self.memory_size < 1:
            raise ValueError(f"memory_size must be at least 1, got {self.memory_size}")
        self.memory = deque(maxlen=self.memory_size)

    def remember(self, statement: str) -> None:
        """Queue a statement; the oldest one is dropped when the queue is full."""
        self.memory.append(statement)

    def recall(self) -> Optional[str]:
        """Pop the oldest stored statement, or ``None`` if memory is empty."""
        if not self.memory:
            return None
        return self.memory.popleft()

    @property
    def has_memories(self) -> bool:
        return bool(self.memory)

    def reset(self) -> None:
        """Clear all rotation and memory state, keeping the session id."""
        self.usage_counters.clear()
        self.memory.clear()
        self.fallback_counter = 0
        self.memory_counter = 0
        self.greeting_counter = 0
        self.goodbye_counter = 0
        self.turns = 0
        self.finished = False
