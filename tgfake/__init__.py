from tgfake.exceptions import (
    GeneratorArgumentError,
    NoFakeResponsesLeft,
    PlaceholderError,
    TemplateNotSetError,
    TgFakeError,
    UnknownFragmentError,
    UnknownGeneratorError,
)
from tgfake.fakes import CallAssertions, CallRecorder, CommandRecorder, FakeBot, FakeSession
from tgfake.log import setup_logging
from tgfake.payloads import FakeDataProvider, TelegramProvider, TelegramUpdate, command_entities, literal
from tgfake.utils.merge import deep_merge

__all__ = (
    "CallAssertions",
    "CallRecorder",
    "CommandRecorder",
    "FakeBot",
    "FakeDataProvider",
    "FakeSession",
    "GeneratorArgumentError",
    "NoFakeResponsesLeft",
    "PlaceholderError",
    "TelegramProvider",
    "TelegramUpdate",
    "TemplateNotSetError",
    "TgFakeError",
    "UnknownFragmentError",
    "UnknownGeneratorError",
    "command_entities",
    "deep_merge",
    "literal",
    "setup_logging",
)
