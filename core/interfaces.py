"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod

from .models import QuizConstraints, QuizQuestion, VerbData


class QuestionGenerator(ABC):
    """Abstract source of quiz questions."""

    @abstractmethod
    def generate_question(self, constraints: QuizConstraints) -> QuizQuestion:
        """Generate a question honouring constraints where possible.

        Raises GenerationFailure when no valid question can be produced.
        """
        pass


class ConjugationProvider(ABC):
    """Abstract source of full conjugation tables."""

    @abstractmethod
    def fetch_conjugation(self, verb: str) -> VerbData:
        """Get the conjugation table of a verb. Raises GenerationFailure."""
        pass
