"""Data model for the message a parser writes its fields into."""
from dataclasses import dataclass, field
from typing import Iterator, Protocol


class Record(Protocol):
    """Anything a parser can write named fields into."""

    def insert(self, name: str, value: str) -> None: ...


@dataclass
class LogMessage:
    """Class defining one processed log line as a string-keyed field store.

    Attributes
    ----------
    fields : dict[str, str]
        The message's fields. Writing an existing name overwrites it.
    """

    fields: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_line(cls, line: str) -> "LogMessage":
        """Create a message holding the raw line under ``MESSAGE``."""
        return cls(fields={"MESSAGE": line})

    def insert(self, name: str, value: str) -> None:
        self.fields[name] = value

    def __getitem__(self, name: str) -> str:
        return self.fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)
