"""Quiz session controller.

A SessionController owns all state of one quiz session: the question on
screen, the answers typed so far, the feedback of the last submission, the
score, the retry queue and the verbs already asked. Callers drive it only
through its transition methods.

Question acquisition is split in two so that it can run asynchronously:
``begin_request``/``begin_specific``/``begin_advance`` hand out a
``QuestionRequest`` tagged with a sequence number, and ``complete_request``
or ``fail_request`` apply the outcome. Only the most recent request may
change state; anything older is discarded. ``fulfil`` and the
``request_question``/``request_specific``/``advance`` helpers do both steps
synchronously.
"""

import logging
from enum import Enum

from .config import (
    MSG_EMPTY_VERB, MSG_GENERATION_FAILED, MSG_NO_RETRIES, MSG_NOTHING_TO_SUBMIT,
    MSG_SPECIFIC_FAILED, MSG_SUBMIT_FIRST
)
from .errors import GenerationFailure, InvalidRequest
from .interfaces import QuestionGenerator
from .models import AnswerFeedback, QuestionRequest, QuizConstraints, QuizFilters, QuizQuestion
from .tracking import AskedVerbsTracker, RetryQueue
from .utils import evaluate_answer
from .verbs import normalize_filters, resolve_specific_tense

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    LOADING = 'loading'
    READY = 'ready'
    SUBMITTED = 'submitted'
    ERROR = 'error'


def failure_message(request: QuestionRequest) -> str:
    """User-facing message for a failed acquisition."""
    if request.constraints.is_specific:
        return MSG_SPECIFIC_FAILED
    return MSG_GENERATION_FAILED


class SessionController:
    """State machine of a single quiz session."""

    def __init__(self, generator: QuestionGenerator, filters: QuizFilters | None = None):
        self._generator = generator
        self._filters = normalize_filters(filters or QuizFilters())
        self._status = SessionStatus.LOADING
        self._question = None
        self._answers = {}
        self._feedback = None
        self._score = 0
        self._attempted = 0
        self._review_mode = False
        self._retry_queue = RetryQueue()
        self._asked_verbs = AskedVerbsTracker()
        self._error = None
        self._sequence = 0

    # -- read-only view ------------------------------------------------------

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def current_question(self) -> QuizQuestion | None:
        return self._question

    @property
    def user_answers(self) -> dict[str, str]:
        return dict(self._answers)

    @property
    def feedback(self) -> list[AnswerFeedback] | None:
        return list(self._feedback) if self._feedback is not None else None

    @property
    def score(self) -> int:
        return self._score

    @property
    def attempted(self) -> int:
        return self._attempted

    @property
    def review_mode(self) -> bool:
        return self._review_mode

    @property
    def retry_count(self) -> int:
        return self._retry_queue.peek_count()

    @property
    def retry_questions(self) -> list[QuizQuestion]:
        return self._retry_queue.to_list()

    @property
    def asked_verbs(self) -> frozenset[str]:
        return self._asked_verbs.snapshot()

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def filters(self) -> QuizFilters:
        return self._filters

    @property
    def review_finished(self) -> bool:
        """True once the last retry of a review has been answered."""
        return (self._review_mode
                and self._status is SessionStatus.SUBMITTED
                and self._retry_queue.peek_count() == 0)

    # -- acquisition -----------------------------------------------------------

    def _begin(self, constraints: QuizConstraints) -> QuestionRequest:
        self._sequence += 1
        self._status = SessionStatus.LOADING
        self._error = None
        return QuestionRequest(sequence=self._sequence, constraints=constraints)

    def _is_stale(self, request: QuestionRequest) -> bool:
        return request.sequence != self._sequence or self._status is not SessionStatus.LOADING

    def begin_request(self, filters: QuizFilters | None = None) -> QuestionRequest:
        """Start acquiring a random question. Omitted filters reuse the last ones."""
        if filters is not None:
            self._filters = normalize_filters(filters)
        constraints = QuizConstraints(
            category=self._filters.category,
            mood=self._filters.mood,
            tense=self._filters.tense,
            exclude=tuple(sorted(self._asked_verbs.snapshot())),
        )
        self._review_mode = False
        return self._begin(constraints)

    def begin_specific(self, verb: str, mood: str | None, tense: str | None) -> QuestionRequest:
        """Start acquiring a question for one verb. Blank verbs are rejected untouched."""
        verb = (verb or '').strip()
        if not verb:
            raise InvalidRequest(MSG_EMPTY_VERB)
        if mood:
            tense = resolve_specific_tense(mood, tense)
        constraints = QuizConstraints(mood=mood or None, tense=tense or None, verb=verb)
        self._review_mode = False
        return self._begin(constraints)

    def complete_request(self, request: QuestionRequest, question: QuizQuestion) -> bool:
        """Install the generated question. Returns False if the request is stale."""
        if self._is_stale(request):
            logger.info(f"Discarding stale question '{question.verb}' "
                        f"(request {request.sequence}, latest {self._sequence})")
            return False
        self._asked_verbs.record(question.verb)
        self._install(question)
        logger.info(f"Question ready: {question.verb} {question.mood} {question.tense}")
        return True

    def fail_request(self, request: QuestionRequest, message: str) -> bool:
        """Enter the error state, keeping the previous question. False if stale."""
        if self._is_stale(request):
            logger.info(f"Discarding stale failure (request {request.sequence}, latest {self._sequence})")
            return False
        self._status = SessionStatus.ERROR
        self._error = message
        return True

    def fulfil(self, request: QuestionRequest) -> bool:
        """Call the generator for a request and apply the outcome.

        Returns True only when the generated question was installed.
        """
        try:
            question = self._generator.generate_question(request.constraints)
        except GenerationFailure as e:
            logger.error(f"Question generation failed: {e}")
            self.fail_request(request, failure_message(request))
            return False
        return self.complete_request(request, question)

    def request_question(self, filters: QuizFilters | None = None) -> bool:
        return self.fulfil(self.begin_request(filters))

    def request_specific(self, verb: str, mood: str | None, tense: str | None) -> bool:
        return self.fulfil(self.begin_specific(verb, mood, tense))

    def _install(self, question: QuizQuestion) -> None:
        self._question = question
        self._answers = {person: '' for person in question.persons}
        self._feedback = None
        self._error = None
        self._status = SessionStatus.READY

    # -- answering -------------------------------------------------------------

    def update_answer(self, person: str, text: str) -> bool:
        """Set one answer. Ignored unless a question is awaiting submission."""
        if self._status is not SessionStatus.READY or self._feedback is not None:
            return False
        if person not in self._answers:
            return False
        self._answers[person] = text
        return True

    def submit(self) -> list[AnswerFeedback]:
        """Check every answer and update the score (outside review mode)."""
        if self._status is not SessionStatus.READY or self._question is None:
            raise InvalidRequest(MSG_NOTHING_TO_SUBMIT)

        results = []
        for pair in self._question.conjugations:
            answer = self._answers.get(pair.person, '').strip()
            results.append(AnswerFeedback(
                person=pair.person,
                user_answer=answer,
                correct_answer=pair.verb,
                is_correct=evaluate_answer(answer, pair.verb)
            ))
        self._feedback = tuple(results)
        self._status = SessionStatus.SUBMITTED

        if not self._review_mode:
            self._attempted += 1
            if all(r.is_correct for r in results):
                self._score += 1
            elif self._retry_queue.enqueue(self._question):
                logger.info(f"Queued for retry: {self._question.identity} "
                            f"({self._retry_queue.peek_count()} pending)")
        return list(results)

    # -- navigation ------------------------------------------------------------

    def begin_advance(self) -> QuestionRequest | None:
        """Move past a submitted question.

        In review mode the next retry is installed directly and None is
        returned. Otherwise a fresh request is started and returned.
        """
        if self._status is not SessionStatus.SUBMITTED:
            raise InvalidRequest(MSG_SUBMIT_FIRST)
        if self._review_mode:
            question = self._retry_queue.dequeue()
            if question is not None:
                self._replay(question)
                return None
            self._review_mode = False
            logger.info("Review finished")
        return self.begin_request()

    def advance(self) -> bool:
        request = self.begin_advance()
        if request is None:
            return True
        return self.fulfil(request)

    def start_review(self) -> QuizQuestion:
        """Enter review mode with the oldest failed question."""
        question = self._retry_queue.dequeue()
        if question is None:
            raise InvalidRequest(MSG_NO_RETRIES)
        self._review_mode = True
        logger.info(f"Review started ({self._retry_queue.peek_count() + 1} questions)")
        self._replay(question)
        return question

    def _replay(self, question: QuizQuestion) -> None:
        # Any request still in flight must not replace the retry
        self._sequence += 1
        self._install(question)

    def to_dict(self) -> dict:
        return {
            'status': self._status.value,
            'question': self._question.to_dict() if self._question else None,
            'user_answers': dict(self._answers),
            'feedback': [f.to_dict() for f in self._feedback] if self._feedback is not None else None,
            'score': self._score,
            'attempted': self._attempted,
            'review_mode': self._review_mode,
            'review_finished': self.review_finished,
            'retry_count': self._retry_queue.peek_count(),
            'asked_verbs': sorted(self._asked_verbs.snapshot()),
            'error': self._error,
            'filters': self._filters.to_dict()
        }
