"""REST API client for coniuga server."""

import requests


class ConiugaAPIClient:
    """Client for communicating with the coniuga REST API."""

    def __init__(self, base_url: str = "http://localhost:8000"):
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()
        self.session_id = None

    def _get(self, endpoint: str) -> dict:
        """Make a GET request."""
        response = self.session.get(f"{self.base_url}{endpoint}")
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def _session_endpoint(self, action: str = '') -> str:
        if not self.session_id:
            raise RuntimeError("No quiz session started")
        return f"/api/sessions/{self.session_id}{action}"

    def health_check(self) -> dict:
        """Check if the server is running."""
        return self._get("/")

    def get_reference(self) -> dict:
        """Get verb categories, moods and tenses."""
        return self._get("/api/reference")

    def get_conjugation(self, verb: str) -> dict:
        """Get the full conjugation table of a verb."""
        return self._get(f"/api/conjugation/{verb}")

    def start_session(self, filters: dict = None) -> dict:
        """Create a session and remember its id."""
        state = self._post("/api/sessions", filters)
        self.session_id = state['session_id']
        return state

    def get_state(self) -> dict:
        return self._get(self._session_endpoint())

    def new_question(self, category: str = None, mood: str = None, tense: str = None) -> dict:
        return self._post(self._session_endpoint("/question"), {
            'category': category,
            'mood': mood,
            'tense': tense
        })

    def specific_question(self, verb: str, mood: str, tense: str) -> dict:
        return self._post(self._session_endpoint("/specific"), {
            'verb': verb,
            'mood': mood,
            'tense': tense
        })

    def submit(self, answers: dict) -> dict:
        """Submit answers keyed by person."""
        return self._post(self._session_endpoint("/submit"), {'answers': answers})

    def next_question(self) -> dict:
        return self._post(self._session_endpoint("/next"))

    def start_review(self) -> dict:
        return self._post(self._session_endpoint("/review"))
