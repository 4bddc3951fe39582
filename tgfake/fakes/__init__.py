from tgfake.fakes.assertions import (
    CallAssertions,
    CallAssertionsMixin,
    CommandAssertionsMixin,
)
from tgfake.fakes.bot import FakeBot
from tgfake.fakes.commands import CommandRecord, CommandRecorder, CommandRecorderMiddleware
from tgfake.fakes.recorder import DEFAULT_RESPONSE, CallRecorder, RecordedCall
from tgfake.fakes.session import FakeSession

__all__ = (
    "DEFAULT_RESPONSE",
    "CallAssertions",
    "CallAssertionsMixin",
    "CallRecorder",
    "CommandAssertionsMixin",
    "CommandRecord",
    "CommandRecorder",
    "CommandRecorderMiddleware",
    "FakeBot",
    "FakeSession",
    "RecordedCall",
)
