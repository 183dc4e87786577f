"""
This module provides the option-configured parsers and their plugin registry.
A builder collects string options, then builds an immutable parser that is
invoked once per input line.
"""
