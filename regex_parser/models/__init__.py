"""Module that contains data models."""
from .definition import ParserDefinition
from .record import LogMessage, Record

__all__ = [
    "LogMessage",
    "ParserDefinition",
    "Record",
]
