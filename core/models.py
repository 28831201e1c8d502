"""Domain models for coniuga application."""

from dataclasses import dataclass, field, replace

from .errors import QuestionParseError


def _require_str(data: dict, key: str, what: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise QuestionParseError(f"{what}: missing or empty '{key}'")
    return value.strip()


def _require_list(data: dict, key: str, what: str) -> list:
    value = data.get(key)
    if not isinstance(value, list) or not value:
        raise QuestionParseError(f"{what}: '{key}' must be a non-empty list")
    return value


@dataclass(frozen=True)
class ConjugationPair:
    """One grammatical person and its conjugated form."""

    person: str
    verb: str

    def to_dict(self) -> dict:
        return {'person': self.person, 'verb': self.verb}

    @classmethod
    def from_dict(cls, data: dict) -> 'ConjugationPair':
        if not isinstance(data, dict):
            raise QuestionParseError(f"Conjugation entry must be an object, got {type(data).__name__}")
        return cls(
            person=_require_str(data, 'person', 'Conjugation'),
            verb=_require_str(data, 'verb', 'Conjugation'),
        )


def _parse_pairs(items: list, what: str) -> tuple[ConjugationPair, ...]:
    pairs = tuple(ConjugationPair.from_dict(item) for item in items)
    persons = [p.person for p in pairs]
    if len(set(persons)) != len(persons):
        raise QuestionParseError(f"{what}: duplicate persons in {persons}")
    return pairs


@dataclass(frozen=True)
class QuizQuestion:
    """A generated question: conjugate `verb` in `mood`/`tense` for every person."""

    verb: str
    mood: str
    tense: str
    translation: str
    icon_hint: str
    conjugations: tuple[ConjugationPair, ...]

    @property
    def identity(self) -> tuple[str, str, str]:
        """Key used to deduplicate retries."""
        return (self.verb, self.mood, self.tense)

    @property
    def persons(self) -> list[str]:
        return [pair.person for pair in self.conjugations]

    def to_dict(self) -> dict:
        return {
            'verb': self.verb,
            'mood': self.mood,
            'tense': self.tense,
            'translation': self.translation,
            'icon_suggestion': self.icon_hint,
            'conjugations': [pair.to_dict() for pair in self.conjugations]
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'QuizQuestion':
        """Build a question from a generator payload, rejecting anything malformed."""
        if not isinstance(data, dict):
            raise QuestionParseError(f"Question must be an object, got {type(data).__name__}")
        conjugations = _require_list(data, 'conjugations', 'Question')
        icon_hint = data.get('icon_suggestion', '')
        return cls(
            verb=_require_str(data, 'verb', 'Question'),
            mood=_require_str(data, 'mood', 'Question'),
            tense=_require_str(data, 'tense', 'Question'),
            translation=_require_str(data, 'translation', 'Question'),
            icon_hint=icon_hint.strip() if isinstance(icon_hint, str) else '',
            conjugations=_parse_pairs(conjugations, 'Question'),
        )


@dataclass(frozen=True)
class AnswerFeedback:
    """Result of checking one person's answer."""

    person: str
    user_answer: str
    correct_answer: str
    is_correct: bool

    def to_dict(self) -> dict:
        return {
            'person': self.person,
            'user_answer': self.user_answer,
            'correct_answer': self.correct_answer,
            'is_correct': self.is_correct
        }


@dataclass(frozen=True)
class TenseData:
    tense: str
    conjugations: tuple[ConjugationPair, ...]

    def to_dict(self) -> dict:
        return {
            'tense': self.tense,
            'conjugations': [pair.to_dict() for pair in self.conjugations]
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'TenseData':
        if not isinstance(data, dict):
            raise QuestionParseError("Tense entry must be an object")
        return cls(
            tense=_require_str(data, 'tense', 'Tense'),
            conjugations=_parse_pairs(_require_list(data, 'conjugations', 'Tense'), 'Tense'),
        )


@dataclass(frozen=True)
class MoodData:
    mood: str
    tenses: tuple[TenseData, ...]

    def to_dict(self) -> dict:
        return {'mood': self.mood, 'tenses': [t.to_dict() for t in self.tenses]}

    @classmethod
    def from_dict(cls, data: dict) -> 'MoodData':
        if not isinstance(data, dict):
            raise QuestionParseError("Mood entry must be an object")
        return cls(
            mood=_require_str(data, 'mood', 'Mood'),
            tenses=tuple(TenseData.from_dict(t) for t in _require_list(data, 'tenses', 'Mood')),
        )


@dataclass(frozen=True)
class VerbData:
    """Full conjugation table of a verb, shown by the learn view."""

    verb: str
    translation: str
    icon_hint: str
    moods: tuple[MoodData, ...]

    def to_dict(self) -> dict:
        return {
            'verb': self.verb,
            'translation': self.translation,
            'icon_suggestion': self.icon_hint,
            'conjugations': [m.to_dict() for m in self.moods]
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'VerbData':
        if not isinstance(data, dict):
            raise QuestionParseError(f"Verb data must be an object, got {type(data).__name__}")
        icon_hint = data.get('icon_suggestion', '')
        return cls(
            verb=_require_str(data, 'verb', 'Verb data'),
            translation=_require_str(data, 'translation', 'Verb data'),
            icon_hint=icon_hint.strip() if isinstance(icon_hint, str) else '',
            moods=tuple(MoodData.from_dict(m) for m in _require_list(data, 'conjugations', 'Verb data')),
        )


@dataclass(frozen=True)
class QuizFilters:
    """Random-quiz filters. None means no filter on that field."""

    category: str | None = None
    mood: str | None = None
    tense: str | None = None

    def replace(self, **changes) -> 'QuizFilters':
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {'category': self.category, 'mood': self.mood, 'tense': self.tense}


@dataclass(frozen=True)
class QuizConstraints:
    """Input handed to a question generator."""

    category: str | None = None
    mood: str | None = None
    tense: str | None = None
    exclude: tuple[str, ...] = ()
    verb: str | None = None

    @property
    def is_specific(self) -> bool:
        return self.verb is not None


@dataclass(frozen=True)
class QuestionRequest:
    """An acquisition in flight, tagged so late responses can be recognised."""

    sequence: int
    constraints: QuizConstraints = field(default_factory=QuizConstraints)
