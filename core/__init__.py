from .models import (
    ConjugationPair, QuizQuestion, AnswerFeedback,
    TenseData, MoodData, VerbData,
    QuizFilters, QuizConstraints, QuestionRequest
)
from .errors import QuizError, GenerationFailure, QuestionParseError, InvalidRequest
from .interfaces import QuestionGenerator, ConjugationProvider
from .tracking import AskedVerbsTracker, RetryQueue
from .session import SessionController, SessionStatus
from .utils import evaluate_answer, normalize_answer

__all__ = [
    'ConjugationPair', 'QuizQuestion', 'AnswerFeedback',
    'TenseData', 'MoodData', 'VerbData',
    'QuizFilters', 'QuizConstraints', 'QuestionRequest',
    'QuizError', 'GenerationFailure', 'QuestionParseError', 'InvalidRequest',
    'QuestionGenerator', 'ConjugationProvider',
    'AskedVerbsTracker', 'RetryQueue',
    'SessionController', 'SessionStatus',
    'evaluate_answer', 'normalize_answer'
]
