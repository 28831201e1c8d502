"""Static reference data: verb categories, moods and tenses."""

# Category name -> verbs the generator may pick from
VERB_CATEGORIES = {
    'Verbes auxiliaires': ['essere', 'avere'],
    'Verbes réguliers en -are': ['parlare', 'mangiare', 'guardare', 'trovare'],
    'Verbes réguliers en -ere': ['credere', 'vedere', 'leggere', 'scrivere'],
    'Verbes réguliers en -ire': ['dormire', 'sentire', 'partire', 'finire'],
    'Verbes irréguliers': [
        'andare', 'fare', 'dire', 'potere', 'volere',
        'sapere', 'stare', 'dare', 'venire', 'uscire'
    ],
}

MOODS = [
    'Indicativo',
    'Congiuntivo',
    'Condizionale',
    'Imperativo',
]

TENSES_BY_MOOD = {
    'Indicativo': [
        'Presente',
        'Passato prossimo',
        'Imperfetto',
        'Trapassato prossimo',
        'Passato remoto',
        'Trapassato remoto',
        'Futuro semplice',
        'Futuro anteriore',
    ],
    'Congiuntivo': [
        'Presente',
        'Passato',
        'Imperfetto',
        'Trapassato',
    ],
    'Condizionale': [
        'Presente',
        'Passato',
    ],
    'Imperativo': [
        'Presente',
    ],
}

# Unique tenses across all moods, in first-seen order
TENSES = list(dict.fromkeys(t for tenses in TENSES_BY_MOOD.values() for t in tenses))

# Verbs listed in the learn view selector
LEARN_VERBS = [verb for verbs in VERB_CATEGORIES.values() for verb in verbs]


def get_category_verbs(category: str | None) -> list[str]:
    """Get the verbs of a category. Unknown or missing category gives []."""
    if not category:
        return []
    return list(VERB_CATEGORIES.get(category, []))


def get_tenses_for_mood(mood: str) -> list[str]:
    """Get the valid tenses of a mood, in display order."""
    return list(TENSES_BY_MOOD.get(mood, []))


def get_available_tenses(mood: str | None) -> list[str]:
    """Tenses offered by the random-quiz filter for the selected mood."""
    if mood is None:
        return list(TENSES)
    return get_tenses_for_mood(mood)


def resolve_specific_tense(mood: str, tense: str | None) -> str:
    """Keep tense if valid for mood, else fall back to the mood's first tense."""
    tenses = get_tenses_for_mood(mood)
    if tense in tenses:
        return tense
    return tenses[0] if tenses else ''


def normalize_filters(filters):
    """Drop a tense filter that the selected mood does not have."""
    if filters.mood is not None and filters.tense is not None:
        if filters.tense not in get_tenses_for_mood(filters.mood):
            return filters.replace(tense=None)
    return filters
