"""Per-session collections: verbs already asked and questions to retry."""

from collections import deque

from .models import QuizQuestion


class AskedVerbsTracker:
    """Grow-only set of verbs presented during a session."""

    def __init__(self):
        self._verbs = set()

    def record(self, verb: str) -> None:
        self._verbs.add(verb)

    def snapshot(self) -> frozenset[str]:
        """Current verbs, for use as a generator exclusion list."""
        return frozenset(self._verbs)

    def __contains__(self, verb: str) -> bool:
        return verb in self._verbs

    def __len__(self) -> int:
        return len(self._verbs)


class RetryQueue:
    """FIFO of failed questions; at most one entry per (verb, mood, tense)."""

    def __init__(self):
        self._items = deque()

    def enqueue(self, question: QuizQuestion) -> bool:
        """Append a question. Returns False if its identity is already queued."""
        identity = question.identity
        if any(q.identity == identity for q in self._items):
            return False
        self._items.append(question)
        return True

    def dequeue(self) -> QuizQuestion | None:
        """Remove and return the oldest question, or None when empty."""
        if not self._items:
            return None
        return self._items.popleft()

    def peek_count(self) -> int:
        return len(self._items)

    def to_list(self) -> list[QuizQuestion]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))
