"""Exception types raised by the quiz engine and its collaborators."""


class QuizError(Exception):
    """Base class for quiz errors. The message is safe to show to users."""


class GenerationFailure(QuizError):
    """The generator was unreachable or returned an unusable response."""


class QuestionParseError(GenerationFailure):
    """A generated payload did not match the expected schema."""


class InvalidRequest(QuizError):
    """An operation was requested that the session cannot honour."""
