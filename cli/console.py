"""Console UI for coniuga application."""

import requests

from core.config import DEFAULT_LEARN_VERB, DEFAULT_SPECIFIC_MOOD, DEFAULT_SPECIFIC_TENSE
from core.verbs import get_available_tenses, get_tenses_for_mood
from cli.api_client import ConiugaAPIClient


def error_detail(error: Exception) -> str:
    """Best human-readable message for a failed request."""
    if isinstance(error, requests.HTTPError) and error.response is not None:
        try:
            return error.response.json().get('detail', str(error))
        except ValueError:
            pass
    return str(error)


class ConsoleUI:
    """Console user interface for coniuga application."""

    def __init__(self, client: ConiugaAPIClient):
        self.client = client
        self.reference = {}

    def print_question(self, question: dict, review_mode: bool):
        print('\n' + '=' * 50)
        if review_mode:
            print('MODE RÉVISION : nouvel essai d\'une question ratée')
        print(f"Conjuguez : {question['verb'].upper()} ({question['translation']})")
        print(f"{question['mood']} - {question['tense']}")
        print('=' * 50)

    def print_feedback(self, state: dict):
        """Print results of the last submission."""
        print('-' * 40)
        for res in state['feedback']:
            mark = 'OK ' if res['is_correct'] else 'X  '
            line = f"{mark}{res['person']:>8}  {res['user_answer'] or '...'}"
            if not res['is_correct']:
                line += f"  ->  {res['correct_answer']}"
            print(line)
        print('-' * 40)
        self.print_score(state)
        if state['review_finished']:
            print('Vous avez terminé la révision !')

    def print_score(self, state: dict):
        print(f"Score : {state['score']} / {state['attempted']}")
        if state['retry_count']:
            print(f"Questions à revoir : {state['retry_count']}")

    def print_table(self, data: dict):
        """Print a full conjugation table."""
        print('\n' + '=' * 50)
        print(f"{data['verb'].upper()} ({data['translation']})")
        for mood in data['conjugations']:
            print(f"\n{mood['mood']}")
            for tense in mood['tenses']:
                forms = ', '.join(f"{p['person']} {p['verb']}" for p in tense['conjugations'])
                print(f"  {tense['tense']}: {forms}")
        print('=' * 50)

    def print_status(self, state: dict):
        print('\n' + '=' * 50)
        print('BILAN')
        print('=' * 50)
        self.print_score(state)
        filters = state['filters']
        print(f"Filtres : catégorie={filters['category'] or 'tous'}, "
              f"mode={filters['mood'] or 'tous'}, temps={filters['tense'] or 'tous'}")
        if state['asked_verbs']:
            print(f"Verbes déjà demandés : {', '.join(state['asked_verbs'])}")
        print('=' * 50 + '\n')

    def choose(self, label: str, options: list[str], allow_all: bool = True) -> str | None:
        """Pick from a numbered list. Empty input means no filter when allowed."""
        if allow_all:
            print(f"{label} (Entrée pour tous) :")
        else:
            print(f"{label} :")
        for i, option in enumerate(options, 1):
            print(f"  {i}. {option}")
        while True:
            choice = input('==> ').strip()
            if not choice and allow_all:
                return None
            if choice.isdigit() and 1 <= int(choice) <= len(options):
                return options[int(choice) - 1]
            if choice in options:
                return choice
            print('Choix invalide.')

    def read_filters(self) -> dict:
        category = self.choose('Catégorie', list(self.reference['categories']))
        mood = self.choose('Mode', self.reference['moods'])
        tenses = get_available_tenses(mood)
        tense = self.choose('Temps', tenses)
        return {'category': category, 'mood': mood, 'tense': tense}

    def read_specific(self) -> tuple[str, str, str]:
        verb = input('Verbe (ex. andare) : ').strip()
        mood = self.choose('Mode', self.reference['moods'], allow_all=False) if verb else DEFAULT_SPECIFIC_MOOD
        tenses = get_tenses_for_mood(mood)
        tense = self.choose('Temps', tenses, allow_all=False) if verb else DEFAULT_SPECIFIC_TENSE
        return verb, mood, tense

    def read_answers(self, question: dict) -> dict | None:
        """Ask for every person. Returns None if the user wants to quit."""
        answers = {}
        for pair in question['conjugations']:
            answer = input(f"{pair['person']:>8} ==> ").strip()
            if answer.lower() == 'exit':
                return None
            answers[pair['person']] = answer
        return answers

    def print_commands(self, state: dict):
        commands = ['Entrée = question suivante']
        if state['retry_count'] and not state['review_mode']:
            commands.append(f"review = revoir {state['retry_count']} questions ratées")
        commands += ['filter', 'specific', 'table <verb>', 'status', 'exit']
        print('Commandes : ' + ' | '.join(commands))

    def handle_command(self, command: str, state: dict) -> dict | None:
        """Run a menu command. Returns the new state, or None to quit."""
        keyword = command.lower()
        if keyword == 'exit':
            return None
        if keyword == '':
            if state['status'] == 'submitted':
                return self.client.next_question()
            return self.client.new_question(**state['filters'])
        if keyword == 'review':
            return self.client.start_review()
        if keyword == 'filter':
            return self.client.new_question(**self.read_filters())
        if keyword == 'specific':
            return self.client.specific_question(*self.read_specific())
        if keyword.startswith('table'):
            verb = (command[5:].strip()
                    or input(f'Verbe (Entrée pour {DEFAULT_LEARN_VERB}) : ').strip()
                    or DEFAULT_LEARN_VERB)
            print('Chargement de la conjugaison...')
            self.print_table(self.client.get_conjugation(verb))
            return state
        if keyword == 'status':
            state = self.client.get_state()
            self.print_status(state)
            return state
        print('Commande inconnue.')
        return state

    def run(self):
        """Run the main application loop."""
        # Check server connection
        try:
            health = self.client.health_check()
            print(f"Connecté au serveur coniuga ({health['service']})")
        except Exception:
            print(f"Erreur : impossible de joindre le serveur {self.client.base_url}")
            print("Vérifiez que le serveur tourne : python run_server.py")
            return

        self.reference = self.client.get_reference()
        print('\nQuiz de conjugaison italienne')
        print('Chargement de la question...')
        state = self.client.start_session()

        while True:
            if state['status'] == 'error':
                print(f"\n!!! {state['error']}")
            elif state['status'] == 'ready':
                self.print_question(state['question'], state['review_mode'])
                answers = self.read_answers(state['question'])
                if answers is None:
                    print('Au revoir !')
                    return
                try:
                    state = self.client.submit(answers)
                except requests.RequestException as e:
                    print(f"Erreur lors de l'envoi des réponses : {error_detail(e)}")
                    continue
                self.print_feedback(state)

            self.print_commands(state)
            command = input('==> ').strip()
            try:
                new_state = self.handle_command(command, state)
            except requests.RequestException as e:
                print(f"Erreur : {error_detail(e)}")
                continue
            if new_state is None:
                print('Au revoir !')
                return
            state = new_state
