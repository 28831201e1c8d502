"""Entry point for coniuga CLI client."""

import argparse
import sys

from cli.api_client import ConiugaAPIClient
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description=(
        'Coniuga - Italian verb conjugation quiz. Answer every person of a '
        'generated question, replay mistakes in review mode, or look up full tables.'
    ))
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    args = parser.parse_args()

    client = ConiugaAPIClient(base_url=args.server)
    ui = ConsoleUI(client)

    try:
        ui.run()
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
