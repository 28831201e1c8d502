"""FastAPI server for coniuga application."""

import asyncio
import json
import logging
import os
import uuid

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

logger = logging.getLogger(__name__)

from core.config import (
    CONFIG_FILE, GEMINI_MODEL, MSG_CONJUGATION_FAILED, MSG_EMPTY_VERB, MSG_SESSION_NOT_FOUND
)
from core.errors import GenerationFailure, InvalidRequest
from core.interfaces import ConjugationProvider, QuestionGenerator
from core.models import QuestionRequest, QuizFilters
from core.session import SessionController, failure_message
from core.verbs import MOODS, TENSES, TENSES_BY_MOOD, VERB_CATEGORIES, LEARN_VERBS

from server.gemini_provider import GeminiProvider


# Pydantic models for API
class FiltersRequest(BaseModel):
    category: Optional[str] = None
    mood: Optional[str] = None
    tense: Optional[str] = None

    def to_filters(self) -> QuizFilters:
        return QuizFilters(
            category=self.category or None,
            mood=self.mood or None,
            tense=self.tense or None
        )


class SpecificRequest(BaseModel):
    verb: str
    mood: Optional[str] = None
    tense: Optional[str] = None


class AnswerRequest(BaseModel):
    person: str
    text: str


class SubmitRequest(BaseModel):
    answers: dict[str, str] = {}


class ConjugationPairModel(BaseModel):
    person: str
    verb: str


class QuestionModel(BaseModel):
    verb: str
    mood: str
    tense: str
    translation: str
    icon_suggestion: str
    conjugations: list[ConjugationPairModel]


class FeedbackModel(BaseModel):
    person: str
    user_answer: str
    correct_answer: str
    is_correct: bool


class SessionResponse(BaseModel):
    session_id: str
    status: str
    question: Optional[QuestionModel]
    user_answers: dict[str, str]
    feedback: Optional[list[FeedbackModel]]
    score: int
    attempted: int
    review_mode: bool
    review_finished: bool
    retry_count: int
    asked_verbs: list[str]
    error: Optional[str]
    filters: dict


class ReferenceResponse(BaseModel):
    categories: dict[str, list[str]]
    moods: list[str]
    tenses_by_mood: dict[str, list[str]]
    tenses: list[str]
    learn_verbs: list[str]


# Global state (in production, use proper DI)
question_generator: QuestionGenerator = None
conjugation_provider: ConjugationProvider = None
sessions: dict[str, SessionController] = {}


def load_api_key(config_file: str = CONFIG_FILE) -> str | None:
    """Get API key from env, falling back to the config file."""
    api_key = os.environ.get('GEMINI_API_KEY')
    if api_key:
        return api_key
    if os.path.exists(config_file):
        with open(config_file, 'r') as f:
            return json.load(f).get('gemini_api_key')
    return None


def get_session(session_id: str) -> SessionController:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=MSG_SESSION_NOT_FOUND)
    return session


def session_response(session_id: str, session: SessionController) -> SessionResponse:
    return SessionResponse(session_id=session_id, **session.to_dict())


async def fulfil_request(session: SessionController, request: QuestionRequest) -> None:
    """Run the generator off the event loop, then apply the result if still current."""
    loop = asyncio.get_event_loop()
    try:
        question = await loop.run_in_executor(
            None,
            lambda: question_generator.generate_question(request.constraints)
        )
    except GenerationFailure as e:
        logger.error(f"Question generation failed: {e}")
        session.fail_request(request, failure_message(request))
        return
    session.complete_request(request, question)


app = FastAPI(title="Coniuga API", description="Italian verb conjugation quiz API")


@app.on_event("startup")
async def startup():
    """Initialize the AI provider on startup."""
    global question_generator, conjugation_provider

    api_key = load_api_key()
    if not api_key:
        raise RuntimeError(
            "GEMINI_API_KEY environment variable not set and config file not found. "
            f"Set GEMINI_API_KEY or create {CONFIG_FILE}"
        )

    provider = GeminiProvider(api_key, model_name=GEMINI_MODEL)
    question_generator = provider
    conjugation_provider = provider
    logger.info(f"AI provider initialized: {GEMINI_MODEL}")


@app.get("/")
async def root():
    """Health check."""
    return {"service": "coniuga", "status": "ok"}


@app.get("/api/reference", response_model=ReferenceResponse)
async def get_reference():
    """Verb categories, moods and tenses for building filters."""
    return ReferenceResponse(
        categories=VERB_CATEGORIES,
        moods=MOODS,
        tenses_by_mood=TENSES_BY_MOOD,
        tenses=TENSES,
        learn_verbs=LEARN_VERBS
    )


@app.get("/api/conjugation/{verb}")
async def get_conjugation(verb: str):
    """Full conjugation table of a verb (learn view)."""
    verb = verb.strip()
    if not verb:
        raise HTTPException(status_code=400, detail=MSG_EMPTY_VERB)
    loop = asyncio.get_event_loop()
    try:
        data = await loop.run_in_executor(None, lambda: conjugation_provider.fetch_conjugation(verb))
    except GenerationFailure as e:
        logger.error(f"Conjugation lookup failed for '{verb}': {e}")
        raise HTTPException(status_code=502, detail=MSG_CONJUGATION_FAILED)
    return data.to_dict()


@app.post("/api/sessions", response_model=SessionResponse)
async def create_session(filters: Optional[FiltersRequest] = None):
    """Create a quiz session and load its first question."""
    session_id = str(uuid.uuid4())[:8]
    session = SessionController(question_generator)
    sessions[session_id] = session
    logger.info(f"Session {session_id} created")
    await fulfil_request(session, session.begin_request(filters.to_filters() if filters else None))
    return session_response(session_id, session)


@app.get("/api/sessions/{session_id}", response_model=SessionResponse)
async def get_session_state(session_id: str):
    return session_response(session_id, get_session(session_id))


@app.delete("/api/sessions/{session_id}")
async def delete_session(session_id: str):
    get_session(session_id)
    del sessions[session_id]
    return {"success": True}


@app.post("/api/sessions/{session_id}/question", response_model=SessionResponse)
async def new_question(session_id: str, filters: FiltersRequest):
    """Request a fresh random question with the given filters."""
    session = get_session(session_id)
    await fulfil_request(session, session.begin_request(filters.to_filters()))
    return session_response(session_id, session)


@app.post("/api/sessions/{session_id}/specific", response_model=SessionResponse)
async def specific_question(session_id: str, request: SpecificRequest):
    """Request a question for a specific verb, mood and tense."""
    session = get_session(session_id)
    try:
        question_request = session.begin_specific(request.verb, request.mood, request.tense)
    except InvalidRequest as e:
        raise HTTPException(status_code=400, detail=str(e))
    await fulfil_request(session, question_request)
    return session_response(session_id, session)


@app.post("/api/sessions/{session_id}/answers", response_model=SessionResponse)
async def update_answer(session_id: str, request: AnswerRequest):
    session = get_session(session_id)
    session.update_answer(request.person, request.text)
    return session_response(session_id, session)


@app.post("/api/sessions/{session_id}/submit", response_model=SessionResponse)
async def submit_answers(session_id: str, request: SubmitRequest):
    """Apply any answers in the body, then check them."""
    session = get_session(session_id)
    for person, text in request.answers.items():
        session.update_answer(person, text)
    try:
        session.submit()
    except InvalidRequest as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session_response(session_id, session)


@app.post("/api/sessions/{session_id}/next", response_model=SessionResponse)
async def next_question(session_id: str):
    """Move on: next retry in review mode, otherwise a fresh question."""
    session = get_session(session_id)
    try:
        question_request = session.begin_advance()
    except InvalidRequest as e:
        raise HTTPException(status_code=400, detail=str(e))
    if question_request is not None:
        await fulfil_request(session, question_request)
    return session_response(session_id, session)


@app.post("/api/sessions/{session_id}/review", response_model=SessionResponse)
async def start_review(session_id: str):
    """Replay the failed questions without affecting the score."""
    session = get_session(session_id)
    try:
        session.start_review()
    except InvalidRequest as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session_response(session_id, session)
