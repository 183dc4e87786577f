"""Line processing component."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List

from verboselogs import VerboseLogger

from regex_parser.config import Settings
from regex_parser.models import LogMessage
from regex_parser.parsing.parser import Parser


@dataclass
class ParseResult:
    """Outcome of parsing one line.

    Attributes
    ----------
    line : str
        The input line, without its trailing newline.
    matched : bool
        Whether the parser matched the line.
    message : regex_parser.models.LogMessage
        The message the parser wrote into.
    """

    line: str
    matched: bool
    message: LogMessage


class LineProcessor:
    """Runs a built parser over a stream of input lines."""

    def __init__(self, logger: VerboseLogger, settings: Settings | None = None):
        self.logger = logger
        self.settings = settings or Settings()

    def process_line(self, parser: Parser, line: str) -> ParseResult:
        line = line.rstrip("\r\n")
        message = LogMessage.from_line(line)
        matched = parser.parse(message, line)
        return ParseResult(line=line, matched=matched, message=message)

    def process_lines(
        self, parser: Parser, lines: Iterable[str], workers: int | None = None
    ) -> List[ParseResult]:
        """
        Parse every line into its own message; results keep the input order.
        """
        workers = workers or self.settings.workers
        if workers > 1:
            self.logger.verbose(f"Parsing with {workers} worker threads")
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(lambda ln: self.process_line(parser, ln), lines))
        else:
            results = [self.process_line(parser, ln) for ln in lines]

        matched = sum(1 for r in results if r.matched)
        self.logger.info(f"Parsed {len(results)} lines, {matched} matched.")
        return results
