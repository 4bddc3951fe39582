from __future__ import annotations


class TgFakeError(Exception):
    """Base class for harness errors."""


class TemplateNotSetError(TgFakeError, RuntimeError):
    """A builder operation needs a scenario template that was never set."""


class UnknownFragmentError(TgFakeError, ValueError):
    pass


class PlaceholderError(TgFakeError):
    """A placeholder could not be turned into a value."""


class UnknownGeneratorError(PlaceholderError, LookupError):
    pass


class GeneratorArgumentError(PlaceholderError, ValueError):
    pass


class NoFakeResponsesLeft(TgFakeError):
    def __init__(self, message: str = "No fake responses left.") -> None:
        super().__init__(message)
