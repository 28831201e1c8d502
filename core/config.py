"""Configuration constants for coniuga application."""

import os

LANGUAGE = 'Italian'
TRANSLATION_LANGUAGE = 'French'
GEMINI_MODEL = 'gemini-2.5-flash'
CONFIG_FILE = os.path.expanduser('~/.config/coniuga/config.json')

# Grammatical persons requested for every quiz question
PERSONS = ['io', 'tu', 'lui/lei', 'noi', 'voi', 'loro']

# Learn view
DEFAULT_LEARN_VERB = 'essere'

# Targeted quiz defaults
DEFAULT_SPECIFIC_MOOD = 'Indicativo'
DEFAULT_SPECIFIC_TENSE = 'Presente'

# User-facing messages
MSG_GENERATION_FAILED = 'Échec du chargement d\'une nouvelle question. Veuillez réessayer.'
MSG_SPECIFIC_FAILED = (
    'Impossible de générer un quiz pour cette combinaison. '
    'Vérifiez que le verbe, le mode et le temps sont valides.'
)
MSG_EMPTY_VERB = 'Veuillez entrer un verbe.'
MSG_CONJUGATION_FAILED = 'Impossible de charger les données du verbe. Veuillez réessayer plus tard.'
MSG_NOTHING_TO_SUBMIT = 'Aucune question n\'attend de réponse.'
MSG_SUBMIT_FIRST = 'Validez la question en cours avant de continuer.'
MSG_NO_RETRIES = 'Aucune question à revoir.'
MSG_SESSION_NOT_FOUND = 'Session introuvable.'
