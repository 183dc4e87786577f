"""Regex parser: extract the named groups of a regular expression into log message fields."""
