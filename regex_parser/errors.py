"""Exception hierarchy for parser configuration and plugin lookup."""
from pathlib import Path


class OptionError(ValueError):
    """Base class for errors caused by parser options.

    Attributes
    ----------
    option_name : str
        The option the error is about.
    """

    def __init__(self, option_name: str, message: str):
        super().__init__(message)
        self.option_name = option_name
        self.message = message


class MissingRequiredOption(OptionError):
    """A required option was never successfully set before build()."""

    def __init__(self, option_name: str):
        super().__init__(
            option_name, f"Missing required option: '{option_name}'"
        )

    @classmethod
    def missing_required_option(cls, option_name: str) -> "MissingRequiredOption":
        return cls(option_name)


class PatternCompileFailure(OptionError):
    """A pattern supplied through an option could not be compiled.

    Only reported through the logger by the builder; the stored pattern stays
    whatever it was before the failed attempt.
    """

    def __init__(self, option_name: str, source: str, original_error: Exception):
        super().__init__(option_name, str(original_error))
        self.source = source
        self.original_error = original_error


class UnknownPluginError(LookupError):
    """No parser plugin is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"No parser plugin registered as '{name}'")
        self.name = name


class DefinitionError(ValueError):
    """A parser definition could not be loaded or found."""

    def __init__(self, message: str, path: Path | None = None):
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path
