"""Translate one text from the command line.

Loads transgate.ini, runs a single translation through the gateway and prints the result as JSON
on stdout.

Exit status:
    0: The translation succeeded.
    1: The translation failed (cooldown, every provider failed, empty input).
    2: The configuration or the command line is invalid.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Final, NoReturn

from config.loader import Config, ConfigLoader, ConfigLoaderError
from core.gateway import TranslationGateway
from core.version import VERSION
from models.translation_models import TranslationResult
from utils.logger_utils import LoggerUtils

CFG_FILE: Final[str] = "transgate.ini"

EXIT_SUCCESS: Final[int] = 0
EXIT_TRANSLATION_FAILED: Final[int] = 1
EXIT_CONFIG_ERROR: Final[int] = 2


def check_python_version() -> None:
    """Check if Python version is 3.12 or later.

    Raises:
        RuntimeError: If Python version is below 3.12.
    """
    if sys.version_info < (3, 12):
        msg = "Python 3.12 or later is required"
        raise RuntimeError(msg)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(EXIT_CONFIG_ERROR)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = _ArgumentParser(
        description="Translate text through the resilient translation gateway",
        epilog="Example: python translate_text.py --to ru 'Hello, world'",
    )
    parser.add_argument("text", help="Text to translate")
    parser.add_argument("--from", dest="source", default="auto", metavar="LANG", help="Source language (default: auto)")
    parser.add_argument("--to", dest="target", metavar="LANG", help="Target language (default: from the config file)")
    parser.add_argument("--config", dest="config", default=CFG_FILE, metavar="FILE", help="Configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load configuration file and apply CLI overrides.

    Raises:
        ConfigLoaderError: If configuration file cannot be loaded.
    """
    script_name: str = Path(sys.argv[0]).name
    return ConfigLoader(
        config_filename=args.config, script_name=script_name, target=args.target, debug=args.debug
    ).config


def setup_logging(config: Config) -> None:
    LoggerUtils.configure_from(config.GENERAL)


async def run(config: Config, args: argparse.Namespace) -> TranslationResult:
    async with TranslationGateway(config) as gateway:
        return await gateway.translate(args.text, args.source, args.target)


def main(argv: list[str] | None = None) -> int:
    check_python_version()
    args: argparse.Namespace = parse_arguments(argv)
    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(config)
    result: TranslationResult = asyncio.run(run(config, args))
    print(json.dumps(result.to_wire(), ensure_ascii=False))
    return EXIT_SUCCESS if result.success else EXIT_TRANSLATION_FAILED


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nTranslation cancelled by user.", file=sys.stderr)
        sys.exit(EXIT_TRANSLATION_FAILED)
