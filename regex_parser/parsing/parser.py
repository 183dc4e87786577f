"""Base classes for option-configured parsers and their builders."""
from abc import ABC, abstractmethod

from verboselogs import VerboseLogger

from regex_parser.models import Record


class Parser(ABC):
    """
    Abstract base class for a built, immutable parser.

    Subclasses must not keep state between ``parse`` calls so that one
    instance can serve many threads.
    """

    @abstractmethod
    def parse(self, record: Record, input: str) -> bool:
        """Parse ``input`` into ``record``; return whether it matched."""
        raise NotImplementedError


class ParserBuilder(ABC):
    """
    Abstract base class collecting string options before building a Parser.

    A builder is single use: ``build`` may be called once.
    """

    def __init__(self, logger: VerboseLogger | None = None):
        self._logger = logger or VerboseLogger(self.__class__.__module__)
        self._built = False

    @abstractmethod
    def option(self, name: str, value: str) -> None:
        """Accept one configuration pair. Unknown names are ignored."""
        raise NotImplementedError

    def build(self) -> Parser:
        """Validate the collected options and return the Parser."""
        if self._built:
            raise RuntimeError("Builder already used. Create a new one.")
        self._built = True
        return self._build()

    @abstractmethod
    def _build(self) -> Parser:
        raise NotImplementedError
