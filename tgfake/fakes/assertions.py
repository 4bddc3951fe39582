"""Queries and assertions over recorded API calls and processed commands."""
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

import msgspec

from tgfake.fakes.commands import CommandRecord, CommandRecorder
from tgfake.fakes.recorder import CallRecorder, RecordedCall

Constraint = Mapping[str, Any] | Callable[[dict[str, Any]], bool]
CommandPredicate = Callable[[dict[str, Any]], bool]

_MISSING = object()


def _to_json(value: Any) -> str:
    encoded = msgspec.json.encode(value, enc_hook=repr)
    return msgspec.json.format(encoded, indent=4).decode()


def format_requests(requests: Iterable[RecordedCall]) -> str:
    lines = [
        f"--- Request {position} ---\n{_to_json(request.arguments)}"
        for position, request in enumerate(requests, start=1)
    ]
    return "\n".join(lines)


def _method_names(requests: Iterable[RecordedCall]) -> str:
    return ", ".join(dict.fromkeys(request.method for request in requests))


def matches(arguments: Mapping[str, Any], constraint: Constraint | None) -> bool:
    if constraint is None:
        return True
    if callable(constraint):
        return bool(constraint(dict(arguments)))
    return all(
        arguments.get(key, _MISSING) == value for key, value in constraint.items()
    )


class CallAssertionsMixin:
    """Needs a ``recorder`` attribute holding a :class:`CallRecorder`."""

    recorder: CallRecorder

    def sent_by_method(self, method: str) -> list[RecordedCall]:
        return [call for call in self.recorder.requests if call.method == method]

    def sent(self, method: str, constraint: Constraint | None = None) -> list[RecordedCall]:
        return [
            call
            for call in self.sent_by_method(method)
            if matches(call.arguments, constraint)
        ]

    def was_sent(self, method: str, constraint: Constraint | None = None) -> bool:
        return bool(self.sent(method, constraint))

    def assert_sent(self, method: str, constraint: Constraint | None = None) -> None:
        all_requests = self.recorder.requests
        for_method = self.sent_by_method(method)

        if not for_method:
            message = f"The expected [{method}] request was not sent."
            if all_requests:
                message += f"\nMethods sent instead: {_method_names(all_requests)}"
            raise AssertionError(message)

        if constraint is not None and not self.sent(method, constraint):
            expected = (
                "A custom callable constraint."
                if callable(constraint)
                else _to_json(dict(constraint))
            )
            raise AssertionError(
                f"The [{method}] request was sent, but no calls matched the "
                f"provided constraint.\n\nRequests received for '{method}':\n"
                f"{format_requests(for_method)}\n\nExpected constraint:\n{expected}"
            )

    def assert_not_sent(self, method: str, constraint: Constraint | None = None) -> None:
        matching = self.sent(method, constraint)
        if matching:
            label = "Matching requests" if constraint is not None else "Requests sent"
            raise AssertionError(
                f"The unexpected [{method}] request was sent.\n\n"
                f"{label} for '{method}':\n{format_requests(matching)}"
            )

    def assert_sent_times(self, method: str, times: int = 1) -> None:
        count = len(self.sent_by_method(method))
        if count == times:
            return
        message = f"The expected [{method}] method was sent {count} times instead of {times} times."
        all_requests = self.recorder.requests
        if all_requests:
            message += f"\nMethods sent instead: {_method_names(all_requests)}"
        raise AssertionError(message)

    def assert_nothing_sent(self) -> None:
        all_requests = self.recorder.requests
        if all_requests:
            raise AssertionError(
                "Expected no requests to be sent, but the following were sent:\n"
                f"Methods sent: {_method_names(all_requests)}\n\n"
                f"{format_requests(all_requests)}"
            )

    def assert_message_sent(self, text: str, chat_id: int | str | None = None) -> None:
        def constraint(params: dict[str, Any]) -> bool:
            return params.get("text", "") == text and _same_chat(params, chat_id)

        self.assert_sent("sendMessage", constraint)

    def assert_message_contains(self, text: str, chat_id: int | str | None = None) -> None:
        def constraint(params: dict[str, Any]) -> bool:
            return text in str(params.get("text", "")) and _same_chat(params, chat_id)

        self.assert_sent("sendMessage", constraint)

    def assert_message_sent_count(self, count: int) -> None:
        actual = len(self.sent_by_method("sendMessage"))
        if actual != count:
            raise AssertionError(
                f"The sendMessage method was called {actual} times instead of {count} times."
            )


def _same_chat(params: Mapping[str, Any], chat_id: int | str | None) -> bool:
    if chat_id is None:
        return True
    return str(params.get("chat_id", "")) == str(chat_id)


class CommandAssertionsMixin:
    """Needs a ``command_recorder`` attribute holding a :class:`CommandRecorder`."""

    command_recorder: CommandRecorder

    def record_command_handled(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> CommandRecord:
        return self.command_recorder.record(name, arguments)

    def get_processed_commands(
        self, names: str | Iterable[str] | None = None
    ) -> list[CommandRecord]:
        return self.command_recorder.filter(names)

    def processed_commands(
        self, name: str, predicate: CommandPredicate | None = None
    ) -> list[CommandRecord]:
        return [
            record
            for record in self.command_recorder.filter(name)
            if predicate is None or predicate(record.arguments)
        ]

    def was_command_processed(
        self, name: str, predicate: CommandPredicate | None = None
    ) -> bool:
        return bool(self.processed_commands(name, predicate))

    def assert_command_processed(
        self, name: str, predicate: CommandPredicate | None = None
    ) -> None:
        if not self.processed_commands(name, predicate):
            processed = ", ".join(
                dict.fromkeys(record.name for record in self.command_recorder.records)
            )
            message = f"The expected [{name}] command was not handled."
            if processed:
                message += f"\nCommands handled instead: {processed}"
            raise AssertionError(message)

    def assert_command_not_processed(
        self, name: str, predicate: CommandPredicate | None = None
    ) -> None:
        if self.processed_commands(name, predicate):
            raise AssertionError(f"The unexpected [{name}] command was handled.")

    def assert_command_processed_times(self, name: str, times: int = 1) -> None:
        count = len(self.command_recorder.filter(name))
        if count != times:
            raise AssertionError(
                f"The [{name}] command was handled {count} times instead of {times} times."
            )

    def assert_no_commands_processed(self) -> None:
        count = len(self.command_recorder)
        if count:
            raise AssertionError(
                f"Expected no commands to be handled, but {count} command(s) were processed."
            )


class CallAssertions(CallAssertionsMixin, CommandAssertionsMixin):
    """Assertions over a recorder pair that is not attached to a bot."""

    def __init__(
        self,
        recorder: CallRecorder,
        command_recorder: CommandRecorder | None = None,
    ) -> None:
        self.recorder = recorder
        self.command_recorder = command_recorder or CommandRecorder()
