"""Utility functions for coniuga application."""


def normalize_answer(text: str) -> str:
    """Strip surrounding whitespace and lowercase; accented letters stay significant."""
    return (text or '').strip().lower()


def evaluate_answer(user_answer: str, correct_answer: str) -> bool:
    """Check a submitted form against the expected one.

    Exact match after normalization; a blank answer is never correct.
    """
    answer = normalize_answer(user_answer)
    if not answer:
        return False
    return answer == normalize_answer(correct_answer)


def clean_json_text(raw_text: str) -> str:
    """Remove a surrounding Markdown code fence from a model response."""
    text = (raw_text or '').strip()
    if text.startswith('```'):
        text = text[3:]
        if text.lower().startswith('json'):
            text = text[4:]
        if text.rstrip().endswith('```'):
            text = text.rstrip()[:-3]
    return text.strip()
