"""Gemini AI provider implementation."""

import json
import logging
import time
import google.generativeai as genai

from core.config import GEMINI_MODEL, LANGUAGE, PERSONS, TRANSLATION_LANGUAGE
from core.errors import GenerationFailure, QuestionParseError
from core.interfaces import ConjugationProvider, QuestionGenerator
from core.models import QuizConstraints, QuizQuestion, VerbData
from core.utils import clean_json_text
from core.verbs import MOODS, get_category_verbs

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CONJUGATION_PAIR_SCHEMA = {
    'type': 'OBJECT',
    'properties': {
        'person': {'type': 'STRING'},
        'verb': {'type': 'STRING'}
    },
    'required': ['person', 'verb']
}

QUIZ_QUESTION_SCHEMA = {
    'type': 'OBJECT',
    'properties': {
        'verb': {'type': 'STRING'},
        'mood': {'type': 'STRING'},
        'tense': {'type': 'STRING'},
        'translation': {'type': 'STRING'},
        'icon_suggestion': {'type': 'STRING'},
        'conjugations': {'type': 'ARRAY', 'items': CONJUGATION_PAIR_SCHEMA}
    },
    'required': ['verb', 'mood', 'tense', 'translation', 'icon_suggestion', 'conjugations']
}

# verb -> moods -> tenses -> person/verb pairs
CONJUGATION_SCHEMA = {
    'type': 'OBJECT',
    'properties': {
        'verb': {'type': 'STRING'},
        'translation': {'type': 'STRING'},
        'icon_suggestion': {'type': 'STRING'},
        'conjugations': {
            'type': 'ARRAY',
            'items': {
                'type': 'OBJECT',
                'properties': {
                    'mood': {'type': 'STRING'},
                    'tenses': {
                        'type': 'ARRAY',
                        'items': {
                            'type': 'OBJECT',
                            'properties': {
                                'tense': {'type': 'STRING'},
                                'conjugations': {'type': 'ARRAY', 'items': CONJUGATION_PAIR_SCHEMA}
                            },
                            'required': ['tense', 'conjugations']
                        }
                    }
                },
                'required': ['mood', 'tenses']
            }
        }
    },
    'required': ['verb', 'translation', 'icon_suggestion', 'conjugations']
}

ICON_INSTRUCTION = (
    f"Also give the {TRANSLATION_LANGUAGE} translation of the infinitive and a single, simple, "
    "lowercase English keyword for an icon representing the action (e.g. 'eat', 'speak', 'go')."
)


def build_question_prompt(constraints: QuizConstraints) -> str:
    """Build the generation prompt for a quiz question."""
    if constraints.verb:
        prompt = f"Generate a quiz question for the {LANGUAGE} verb '{constraints.verb}'. "
    else:
        prompt = f"Generate a quiz question about the conjugation of an {LANGUAGE} verb. "
        verbs = get_category_verbs(constraints.category)
        if verbs:
            prompt += (f"Pick a verb from this list of '{constraints.category}' verbs: "
                       f"{', '.join(verbs)}. ")
        else:
            prompt += "Pick a common verb (auxiliaries, regular verbs or common irregular verbs). "

    if constraints.mood:
        prompt += f"The mood must be '{constraints.mood}'. "
    else:
        prompt += f"Pick a mood at random among {', '.join(MOODS)}. "

    if constraints.tense:
        prompt += f"The tense must be '{constraints.tense}'. "
    else:
        prompt += "Pick a tense at random that is valid for the chosen mood. "

    if constraints.exclude and not constraints.verb:
        prompt += f"Do not use any of these already asked verbs: {', '.join(constraints.exclude)}. "

    prompt += (
        f"Give the full conjugation for every person ({', '.join(PERSONS)}) in the chosen mood "
        f"and tense. {ICON_INSTRUCTION} "
        "Respond with a JSON object with the keys 'verb' (infinitive), 'mood', 'tense', "
        "'translation', 'icon_suggestion' and 'conjugations' (a list of objects with "
        "'person' and 'verb')."
    )
    return prompt


def build_conjugation_prompt(verb: str) -> str:
    """Build the prompt for a full conjugation table."""
    return (
        f"Give the complete conjugation of the {LANGUAGE} verb '{verb}', including every mood "
        f"and tense. {ICON_INSTRUCTION} "
        "Respond with a JSON object with the keys 'verb', 'translation', 'icon_suggestion' and "
        "'conjugations': a list of objects with 'mood' and 'tenses', each tense an object with "
        "'tense' and 'conjugations' (a list of objects with 'person' and 'verb')."
    )


class GeminiProvider(QuestionGenerator, ConjugationProvider):
    """Gemini AI provider implementation."""

    def __init__(self, api_key: str, model_name: str = GEMINI_MODEL):
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)
        self.model_name = model_name

    def _execute(self, prompt: str, schema: dict) -> tuple[str, int]:
        start_time = time.time()
        try:
            response = self.model.generate_content(
                prompt,
                generation_config={
                    'response_mime_type': 'application/json',
                    'response_schema': schema
                }
            )
            text = response.text
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise GenerationFailure(f"Gemini request failed: {e}") from e
        ms = int((time.time() - start_time) * 1000)
        return (text, ms)

    def _parse_json(self, response: str) -> dict:
        cleaned = clean_json_text(response)
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError:
            pass
        # Fall back to the outermost object if the model added prose around it
        s = cleaned[cleaned.find('{'):cleaned.rfind('}') + 1]
        try:
            return json.loads(s)
        except json.JSONDecodeError as e:
            if '{' not in response:
                logger.error("Diagnosis: No opening brace '{' found in response")
            elif '}' not in response:
                logger.error("Diagnosis: No closing brace '}' found in response")
            raise QuestionParseError(f"Response is not valid JSON: {e}") from e

    def generate_question(self, constraints: QuizConstraints) -> QuizQuestion:
        prompt = build_question_prompt(constraints)
        response, ms = self._execute(prompt, QUIZ_QUESTION_SCHEMA)
        try:
            question = QuizQuestion.from_dict(self._parse_json(response))
        except QuestionParseError as e:
            logger.error(f"Failed to parse quiz question: {e}")
            logger.error(f"Prompt that caused error:\n{prompt}")
            logger.error(f"Raw response:\n{response}")
            raise
        logger.info(f"Generated question {question.identity} in {ms}ms")
        return question

    def fetch_conjugation(self, verb: str) -> VerbData:
        response, ms = self._execute(build_conjugation_prompt(verb), CONJUGATION_SCHEMA)
        try:
            data = VerbData.from_dict(self._parse_json(response))
        except QuestionParseError as e:
            logger.error(f"Failed to parse conjugation of '{verb}': {e}")
            logger.error(f"Raw response:\n{response}")
            raise
        logger.info(f"Fetched conjugation of '{verb}' in {ms}ms")
        return data
