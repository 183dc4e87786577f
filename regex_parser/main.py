"""Regex parser command-line entry point."""
import sys
from argparse import Namespace
from typing import List, Sequence, Tuple

from dependency_injector import providers
from dependency_injector.wiring import inject, Provide
from verboselogs import VerboseLogger

from regex_parser.config import Settings
from regex_parser.containers import AppContainer
from regex_parser.errors import DefinitionError, OptionError, UnknownPluginError
from regex_parser.helpers import dump_to_file, parse_options, verbosity_to_level
from regex_parser.models import ParserDefinition
from regex_parser.parsing.definition_store import DefinitionStore
from regex_parser.parsing.parsers.regex_parser import LOGGEN_EXPR, REGEX_OPTION
from regex_parser.parsing.registry import PluginRegistry
from regex_parser.services.line_processor import LineProcessor, ParseResult


def build_definition(
    args: Namespace, store: DefinitionStore, settings: Settings
) -> ParserDefinition:
    """Turn the command-line options into the definition to instantiate.

    Raises
    ------
    regex_parser.errors.DefinitionError
        If ``--definition`` names a definition that can't be found.
    """
    extra: List[Tuple[str, str]] = [tuple(pair.split("=", 1)) for pair in args.option]

    if args.definition:
        definition = store.get(args.definition)
        options = list(definition.options) + extra
        return definition.model_copy(
            update={"options": options, "plugin": args.plugin or definition.plugin}
        )

    options = []
    if args.regex is not None:
        options.append((REGEX_OPTION, args.regex))
    elif not any(name == REGEX_OPTION for name, _ in extra):
        options.append((REGEX_OPTION, LOGGEN_EXPR))

    return ParserDefinition(
        name="command-line",
        plugin=args.plugin or settings.default_plugin,
        options=options + extra,
    )


def read_lines(filename: str) -> List[str]:
    """Read every line of ``filename``, or of standard input for '-'.

    Raises
    ------
    FileNotFoundError, OSError, PermissionError
        If the file is not found or can't be read.
    """
    if filename == "-":
        return sys.stdin.buffer.read().decode("utf-8", errors="replace").splitlines()
    with open(filename, "r", encoding="utf-8", errors="replace") as file_handle:
        return file_handle.read().splitlines()


def to_output(results: Sequence[ParseResult], only_matched: bool) -> list[dict]:
    return [
        {"line": r.line, "matched": r.matched, "fields": r.message.fields}
        for r in results
        if r.matched or not only_matched
    ]


@inject
def main(
    args: Namespace,
    logger: VerboseLogger = Provide[AppContainer.logger],
    registry: PluginRegistry = Provide[AppContainer.plugin_registry],
    store: DefinitionStore = Provide[AppContainer.definition_store],
    line_processor: LineProcessor = Provide[AppContainer.line_processor],
    settings: Settings = Provide[AppContainer.config],
) -> int:
    """Program's entrypoint. Returns the process exit status."""
    try:
        definition = build_definition(args, store, settings)
        parser = registry.instantiate(definition)
    except (DefinitionError, OptionError, UnknownPluginError) as err:
        logger.error(f"Invalid parser configuration: {err}")
        return 1

    try:
        lines = read_lines(args.filename)
    except (FileNotFoundError, OSError, PermissionError) as err:
        logger.error(f"Failed reading {args.filename}: {err}")
        return 1

    results = line_processor.process_lines(parser, lines, workers=args.workers)
    for result in results:
        if result.matched:
            logger.verbose(f"{result.message.fields}")
        else:
            logger.spam(f"No match: {result.line}")

    if args.dump_json:
        if not dump_to_file(logger, args.dump_json, to_output(results, args.only_matched)):
            return 1
    return 0


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_options("Extract named regex groups from log lines.", argv)

    app_container = AppContainer()
    if args.verbose:
        app_container.config.override(
            providers.Singleton(Settings, log_level=verbosity_to_level(args.verbose))
        )
    app_container.wire(modules=[__name__])
    try:
        return main(args)
    finally:
        app_container.unwire()


if __name__ == "__main__":
    sys.exit(run())
