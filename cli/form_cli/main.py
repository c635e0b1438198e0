"""Main entry point for the Form CLI."""
from __future__ import annotations

import sys

from form_cli import __version__
from form_cli.config import DEFAULT_API_URL, Config
from form_cli.repl import Repl


def print_help():
    """Print help message."""
    print(f"""
Form CLI v{__version__}

Usage:
  form [options]

Options:
  --api-url URL     Override API endpoint (default: {DEFAULT_API_URL})
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  FORM_API_URL      API endpoint when --api-url is not given

REPL Commands:
  /new              Enter a new record
  /list             Show all records
  /edit <n>         Update record number <n>
  /delete <n>       Delete record number <n>
  /health           Check the dispatch API and receiver
  /help             Show REPL help
  /quit             Exit REPL
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        api_url: str | None
        show_help: bool
        show_version: bool
    """
    result = {
        "api_url": None,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "--api-url":
            if i + 1 < len(args):
                result["api_url"] = args[i + 1]
                i += 1
            else:
                print("Error: --api-url requires a URL")
                sys.exit(1)
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'form --help' for usage.")
            sys.exit(1)
        else:
            print(f"Unknown command: {arg}")
            print("Run 'form --help' for usage.")
            sys.exit(1)

        i += 1

    return result


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"form-cli {__version__}")
        return

    config = Config(api_url_override=args["api_url"])
    Repl(config).start()


if __name__ == "__main__":
    main()
