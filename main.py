import sys
import logging
from pathlib import Path

import argparse
from twig.commands import Session
from twig.errors import TwigError
from twig.settings import get_settings

def main():
    parser = argparse.ArgumentParser(description="Twig CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # run command
    run_parser = subparsers.add_parser("run", help="Run a script of twig commands against in-memory repositories")
    run_parser.add_argument("script", type=Path, help="Script file, one command per line")
    run_parser.add_argument("-v", "--verbose", action="store_true", help="Log repository operations")

    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    session = Session(settings)
    try:
        session.run_script(args.script.read_text().splitlines())
    except TwigError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
