import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from core.config import settings
from core.logging import get_module_logger
from infrastructure.i18n import I18nError, parse_languages
from modules.translations import commands

logger = get_module_logger()

HELP_TEXT = """
Tradux - Translation Tool

Usage:
  tradux                    Shows this help message
  tradux init               Initialize Tradux in your project
  tradux -t es,pt,lang...   Translate to other languages based on default language
  tradux -u                 Update all languages based on default language
  tradux -u es,pt,lang...   Update specific languages based on default language
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tradux",
        description="A CLI tool for automated translation",
        add_help=False,
    )
    parser.add_argument("command", nargs="?", choices=["init"])
    actions = parser.add_mutually_exclusive_group()
    actions.add_argument("-t", "--translate", "--languages", dest="translate", nargs="*")
    actions.add_argument("-u", "--update", dest="update", nargs="*")
    parser.add_argument("-h", "--help", action="store_true")
    return parser


def show_help(root: Path) -> None:
    print(HELP_TEXT)
    if commands.is_configured(root, settings):
        print("Tradux is configured and ready to use!")
    else:
        print("   Configuration file not found.")
        print('   Run "tradux init" to initialize Tradux in this project.')


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the tradux command."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    root = Path.cwd()

    try:
        if args.command == "init":
            return commands.run_init(root, settings)
        if args.update is not None:
            return commands.run_update(root, settings, parse_languages(args.update))
        if args.translate is not None:
            return commands.run_translate(root, settings, parse_languages(args.translate))
    except I18nError as e:
        logger.error("command_failed", error=str(e))
        print(f"Error: {e}")
        return 1

    show_help(root)
    return 0


if __name__ == "__main__":
    sys.exit(main())
