"""Helper functions."""
from argparse import ArgumentParser, Namespace
from json import dumps
from pathlib import Path
from typing import Any, Sequence

import coloredlogs
from verboselogs import VerboseLogger

VERBOSITY_LEVELS: list[str] = ["INFO", "VERBOSE", "DEBUG", "SPAM"]


def dump_to_file(
    logger: VerboseLogger, filename: str, content: str | Any
) -> bool:
    """Save data to local file.

    Parameters
    ----------
    logger : verboselogs.VerboseLogger
        The program's logger.
    filename : str
        The file to write to.
    content : str or Any
        The data to write.

    Returns
    -------
    bool
        Whether the file was written.

    """
    filepath = Path(filename)

    try:
        if not filepath.parent.exists():
            filepath.parent.mkdir(parents=True)

        if not isinstance(content, str):
            filepath.write_text(
                dumps(
                    content,
                    ensure_ascii=False,
                    indent=4,
                ),
                encoding="utf-8",
            )
        else:
            filepath.write_text(content, encoding="utf-8")

    except (FileNotFoundError, OSError, PermissionError, ValueError) as err:
        logger.error(f"Failed to write file to '{str(filepath)}': {err}")
        return False

    logger.info(f"Successfully wrote '{str(filepath)}'.")
    return True


def parse_options(description: str, argv: Sequence[str] | None = None) -> Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    description : str
        The program's description.
    argv : sequence of str, optional
        Arguments to parse instead of ``sys.argv``.

    Returns
    -------
    argparse.Namespace
        Parsed command-line arguments as an object.

    """
    parser = ArgumentParser(description=description)

    parser.add_argument(
        "filename",
        type=str,
        help="the file of log lines to parse ('-' for standard input)",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-r",
        "--regex",
        metavar="PATTERN",
        type=str,
        default=None,
        help="pattern with (?P<name>...) groups, same as -o regex=PATTERN",
    )
    source.add_argument(
        "-d",
        "--definition",
        metavar="NAME",
        type=str,
        default=None,
        help="use the named parser definition from the definitions directories",
    )
    parser.add_argument(
        "-o",
        "--option",
        metavar="NAME=VALUE",
        action="append",
        default=[],
        help="pass an option to the parser builder (repeatable, applied in order)",
    )
    parser.add_argument(
        "--plugin",
        metavar="NAME",
        type=str,
        default=None,
        help="the parser plugin to build (default: from settings)",
    )
    parser.add_argument(
        "--workers",
        metavar="N",
        type=int,
        default=None,
        help="number of threads parsing lines (default: from settings)",
    )
    parser.add_argument(
        "--only-matched",
        action="store_true",
        help="leave lines the parser did not match out of the output",
    )
    parser.add_argument(
        "--dump-json",
        metavar="FILENAME.json",
        type=str,
        default=None,
        help="also write parsed output to a JSON file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase logs output verbosity (default: info, -v: verbose, "
        "-vv: debug, -vvv: spam)",
    )

    args: Namespace = parser.parse_args(argv)

    for pair in args.option:
        if "=" not in pair:
            parser.error(f"option '{pair}' is not of the form NAME=VALUE")

    return args


def verbosity_to_level(count: int, default: str = "INFO") -> str:
    """Map a ``-v`` count onto a verboselogs level name."""
    if count <= 0:
        return default
    return VERBOSITY_LEVELS[min(count, len(VERBOSITY_LEVELS) - 1)]


def init_logger(
    name: str,
    verbosity_level: str,
    formatting: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> VerboseLogger:
    """Initialize the program's logger.

    Parameters
    ----------
    name : str
        The logger's name.
    verbosity_level : str
        Verbosity log level name (INFO, VERBOSE, DEBUG, SPAM...).
    formatting : str, optional
        The log format.

    Returns
    -------
    verboselogs.VerboseLogger
        The logger.

    """
    logger = VerboseLogger(name)

    coloredlogs.install(
        logger=logger,
        level=verbosity_level,
        fmt=formatting,
        isatty=True,
    )

    return logger
