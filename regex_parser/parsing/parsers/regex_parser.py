"""Parser extracting named capture groups of a regular expression."""
from regex_parser.errors import MissingRequiredOption, PatternCompileFailure
from regex_parser.models import Record
from regex_parser.parsing.parser import Parser, ParserBuilder
from regex_parser.parsing.pattern import CompiledPattern
from regex_parser.parsing.registry import ModuleInfo, PluginInfo

# Example: "seq: 0000000000, thread: 0000, runid: 1456947132, stamp: 2016-03-02T20:32:12 PAD"
LOGGEN_EXPR = r"seq: (?P<seq>\d+), thread: (?P<thread>\d+), runid: (?P<runid>\d+), stamp: (?P<stamp>[^ ]+) (?P<padding>.*$)"
REGEX_OPTION = "regex"


class RegexParser(Parser):
    """Writes every participating named group of a match into the record."""

    def __init__(self, pattern: CompiledPattern):
        self._pattern = pattern

    @property
    def pattern(self) -> CompiledPattern:
        return self._pattern

    def parse(self, record: Record, input: str) -> bool:
        match = self._pattern.search(input)
        if match is None:
            return False

        for name in self._pattern.group_names:
            value = match.group(name)
            # Groups outside the matching alternation branch capture nothing.
            if value is not None:
                record.insert(name, value)
        return True


class RegexParserBuilder(ParserBuilder):
    """Collects the ``regex`` option and builds a RegexParser from it."""

    def __init__(self, logger=None):
        super().__init__(logger=logger)
        self._pattern: CompiledPattern | None = None

    def option(self, name: str, value: str) -> None:
        if name != REGEX_OPTION:
            self._logger.spam(f"Ignoring unknown option '{name}'")
            return

        self._logger.debug(f"Trying to compile regular expression: '{value}'")
        try:
            self._pattern = CompiledPattern.compile(value, option_name=name)
        except PatternCompileFailure as err:
            self._logger.error(f"{err}")

    def _build(self) -> RegexParser:
        self._logger.debug("Building Regex parser")
        if self._pattern is None:
            raise MissingRequiredOption.missing_required_option(REGEX_OPTION)
        return RegexParser(self._pattern)


module_info = ModuleInfo(
    canonical_name="regex-parser",
    version="3.8.0alpha0",
    description="regex parser for syslog-ng",
    core_revision="3.8",
    plugins=(PluginInfo(name="regex-rs", builder_factory=RegexParserBuilder),),
)
