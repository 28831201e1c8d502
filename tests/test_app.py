"""Tests for the HTTP API."""

import unittest

from fastapi.testclient import TestClient

from core.config import MSG_NO_RETRIES, MSG_SESSION_NOT_FOUND
from core.errors import GenerationFailure
from core.interfaces import ConjugationProvider
from core.models import ConjugationPair, MoodData, TenseData, VerbData

import server.app as app_module
from test_session import MockQuestionGenerator, make_question


class MockConjugationProvider(ConjugationProvider):

    def __init__(self):
        self.fail = False

    def fetch_conjugation(self, verb: str) -> VerbData:
        if self.fail:
            raise GenerationFailure('boom')
        return VerbData(
            verb=verb, translation='être', icon_hint='be',
            moods=(MoodData('Indicativo', (TenseData('Presente', (ConjugationPair('io', 'sono'),)),)),)
        )


class TestAPI(unittest.TestCase):

    def setUp(self):
        self.generator = MockQuestionGenerator()
        self.provider = MockConjugationProvider()
        app_module.question_generator = self.generator
        app_module.conjugation_provider = self.provider
        app_module.sessions.clear()
        # No context manager: the startup hook needs a real API key
        self.client = TestClient(app_module.app)

    def create_session(self) -> dict:
        self.generator.add_question(make_question())
        response = self.client.post('/api/sessions')
        self.assertEqual(response.status_code, 200)
        return response.json()

    def test_health(self):
        self.assertEqual(self.client.get('/').json()['service'], 'coniuga')

    def test_reference(self):
        data = self.client.get('/api/reference').json()
        self.assertIn('Indicativo', data['moods'])
        self.assertEqual(data['tenses_by_mood']['Imperativo'], ['Presente'])
        self.assertIn('essere', data['learn_verbs'])

    def test_create_session_loads_question(self):
        state = self.create_session()
        self.assertEqual(state['status'], 'ready')
        self.assertEqual(state['question']['verb'], 'parlare')
        self.assertEqual(state['user_answers'], {'io': '', 'tu': ''})

    def test_submit_and_score(self):
        session_id = self.create_session()['session_id']
        state = self.client.post(f'/api/sessions/{session_id}/submit',
                                 json={'answers': {'io': 'Parlo', 'tu': 'parli'}}).json()
        self.assertEqual(state['status'], 'submitted')
        self.assertEqual(state['score'], 1)
        self.assertEqual(state['attempted'], 1)
        self.assertTrue(all(f['is_correct'] for f in state['feedback']))

    def test_submit_twice_rejected(self):
        session_id = self.create_session()['session_id']
        self.client.post(f'/api/sessions/{session_id}/submit', json={'answers': {}})
        response = self.client.post(f'/api/sessions/{session_id}/submit', json={'answers': {}})
        self.assertEqual(response.status_code, 400)

    def test_update_answer(self):
        session_id = self.create_session()['session_id']
        state = self.client.post(f'/api/sessions/{session_id}/answers',
                                 json={'person': 'io', 'text': 'parlo'}).json()
        self.assertEqual(state['user_answers']['io'], 'parlo')

    def test_review_flow(self):
        session_id = self.create_session()['session_id']
        self.client.post(f'/api/sessions/{session_id}/submit', json={'answers': {}})

        state = self.client.post(f'/api/sessions/{session_id}/review').json()
        self.assertTrue(state['review_mode'])
        self.assertEqual(state['retry_count'], 0)

        state = self.client.post(f'/api/sessions/{session_id}/submit',
                                 json={'answers': {'io': 'parlo', 'tu': 'parli'}}).json()
        self.assertEqual(state['score'], 0)
        self.assertTrue(state['review_finished'])

        state = self.client.post(f'/api/sessions/{session_id}/next').json()
        self.assertFalse(state['review_mode'])
        self.assertEqual(state['status'], 'ready')

    def test_review_without_retries(self):
        session_id = self.create_session()['session_id']
        response = self.client.post(f'/api/sessions/{session_id}/review')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], MSG_NO_RETRIES)

    def test_next_before_submit_rejected(self):
        session_id = self.create_session()['session_id']
        self.assertEqual(self.client.post(f'/api/sessions/{session_id}/next').status_code, 400)

    def test_new_question_with_filters(self):
        session_id = self.create_session()['session_id']
        state = self.client.post(f'/api/sessions/{session_id}/question',
                                 json={'mood': 'Condizionale', 'tense': 'Passato'}).json()
        self.assertEqual(state['filters']['mood'], 'Condizionale')
        self.assertEqual(self.generator.calls[-1].exclude, ('parlare',))

    def test_specific_blank_verb(self):
        session_id = self.create_session()['session_id']
        response = self.client.post(f'/api/sessions/{session_id}/specific',
                                    json={'verb': ' ', 'mood': 'Indicativo', 'tense': 'Presente'})
        self.assertEqual(response.status_code, 400)
        state = self.client.get(f'/api/sessions/{session_id}').json()
        self.assertEqual(state['status'], 'ready')

    def test_generation_failure_reported(self):
        session_id = self.create_session()['session_id']
        self.generator.add_failure()
        state = self.client.post(f'/api/sessions/{session_id}/specific',
                                 json={'verb': 'xyz', 'mood': 'Indicativo', 'tense': 'Presente'}).json()
        self.assertEqual(state['status'], 'error')
        self.assertIsNotNone(state['error'])
        self.assertEqual(state['question']['verb'], 'parlare')

    def test_unknown_session(self):
        response = self.client.get('/api/sessions/nope')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['detail'], MSG_SESSION_NOT_FOUND)

    def test_delete_session(self):
        session_id = self.create_session()['session_id']
        self.assertEqual(self.client.delete(f'/api/sessions/{session_id}').status_code, 200)
        self.assertEqual(self.client.get(f'/api/sessions/{session_id}').status_code, 404)

    def test_conjugation(self):
        data = self.client.get('/api/conjugation/essere').json()
        self.assertEqual(data['verb'], 'essere')
        self.assertEqual(data['conjugations'][0]['tenses'][0]['conjugations'][0]['verb'], 'sono')

    def test_conjugation_failure(self):
        self.provider.fail = True
        self.assertEqual(self.client.get('/api/conjugation/essere').status_code, 502)


if __name__ == '__main__':
    unittest.main()
