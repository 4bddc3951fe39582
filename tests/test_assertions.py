from __future__ import annotations

import pytest

from tgfake.fakes import CallAssertions, CallRecorder


def test_sent_filters_by_method_and_constraint(recorder: CallRecorder, calls: CallAssertions) -> None:
    recorder.invoke("sendMessage", {"chat_id": 1, "text": "a"})
    recorder.invoke("sendMessage", {"chat_id": 2, "text": "b"})
    recorder.invoke("sendPhoto", {"chat_id": 1})

    assert len(calls.sent("sendMessage")) == 2
    assert [c.arguments["text"] for c in calls.sent("sendMessage", {"chat_id": 2})] == ["b"]
    assert len(calls.sent("sendMessage", lambda args: args["text"] in {"a", "b"})) == 2
    assert calls.sent("sendMessage", {"missing": None}) == []


def test_subset_constraint_requires_key(recorder: CallRecorder, calls: CallAssertions) -> None:
    recorder.invoke("sendMessage", {"text": "x", "reply_markup": None})

    assert calls.was_sent("sendMessage", {"reply_markup": None})
    assert not calls.was_sent("sendMessage", {"parse_mode": None})


def test_assert_sent_lists_other_methods(recorder: CallRecorder, calls: CallAssertions) -> None:
    recorder.invoke("sendMessage", {"text": "hello"})

    with pytest.raises(AssertionError) as exc_info:
        calls.assert_sent("sendPhoto")

    message = str(exc_info.value)
    assert "The expected [sendPhoto] request was not sent." in message
    assert "Methods sent instead: sendMessage" in message


def test_assert_sent_renders_unmet_constraint(recorder: CallRecorder, calls: CallAssertions) -> None:
    recorder.invoke("sendMessage", {"chat_id": 1, "text": "hello"})

    with pytest.raises(AssertionError) as exc_info:
        calls.assert_sent("sendMessage", {"text": "bye"})

    message = str(exc_info.value)
    assert "no calls matched the provided constraint" in message
    assert "--- Request 1 ---" in message
    assert '"hello"' in message
    assert '"bye"' in message


def test_assert_sent_with_callable_constraint(recorder: CallRecorder, calls: CallAssertions) -> None:
    recorder.invoke("answerCallbackQuery", {"callback_query_id": "id", "text": "Button clicked!"})

    calls.assert_sent("answerCallbackQuery")
    calls.assert_sent("answerCallbackQuery", {"text": "Button clicked!"})
    with pytest.raises(AssertionError, match="A custom callable constraint."):
        calls.assert_sent("answerCallbackQuery", lambda args: False)


def test_assert_not_sent(recorder: CallRecorder, calls: CallAssertions) -> None:
    recorder.invoke("sendMessage", {"text": "hello"})

    calls.assert_not_sent("sendPhoto")
    calls.assert_not_sent("sendMessage", {"text": "other"})
    with pytest.raises(AssertionError, match=r"The unexpected \[sendMessage\] request was sent"):
        calls.assert_not_sent("sendMessage")


def test_assert_sent_times_ignores_other_methods(recorder: CallRecorder, calls: CallAssertions) -> None:
    recorder.invoke("sendMessage", {})
    recorder.invoke("sendPhoto", {})
    recorder.invoke("sendMessage", {})

    calls.assert_sent_times("sendMessage", 2)
    calls.assert_sent_times("sendPhoto")
    with pytest.raises(AssertionError, match="was sent 2 times instead of 3 times"):
        calls.assert_sent_times("sendMessage", 3)


def test_assert_nothing_sent(recorder: CallRecorder, calls: CallAssertions) -> None:
    calls.assert_nothing_sent()

    recorder.invoke("sendMessage", {"text": "oops"})

    with pytest.raises(AssertionError, match="Methods sent: sendMessage"):
        calls.assert_nothing_sent()


def test_message_assertions(recorder: CallRecorder, calls: CallAssertions) -> None:
    recorder.invoke("sendMessage", {"chat_id": 42, "text": "Welcome! Use /help"})

    calls.assert_message_sent("Welcome! Use /help")
    calls.assert_message_sent("Welcome! Use /help", chat_id="42")
    calls.assert_message_contains("Welcome", chat_id=42)
    calls.assert_message_sent_count(1)
    with pytest.raises(AssertionError):
        calls.assert_message_sent("Welcome!")
    with pytest.raises(AssertionError):
        calls.assert_message_contains("Welcome", chat_id=7)
    with pytest.raises(AssertionError, match="called 1 times instead of 2 times"):
        calls.assert_message_sent_count(2)


def test_assertions_do_not_touch_the_log(recorder: CallRecorder, calls: CallAssertions) -> None:
    recorder.invoke("sendMessage", {"text": "a"})

    calls.sent("sendMessage", {"text": "a"})
    calls.assert_sent("sendMessage")

    assert len(recorder) == 1


def test_command_assertions(calls: CallAssertions) -> None:
    calls.assert_no_commands_processed()

    calls.record_command_handled("Start")
    calls.record_command_handled("echo", {"args": "hello world"})
    calls.record_command_handled("start")

    calls.assert_command_processed("start")
    calls.assert_command_processed("ECHO", lambda args: "hello" in args["args"])
    calls.assert_command_not_processed("help")
    calls.assert_command_not_processed("echo", lambda args: args["args"] == "bye")
    calls.assert_command_processed_times("start", 2)
    assert len(calls.get_processed_commands()) == 3
    assert len(calls.get_processed_commands("start")) == 2
    assert len(calls.get_processed_commands(["start", "echo"])) == 3
    assert calls.was_command_processed("echo")

    with pytest.raises(AssertionError, match=r"The expected \[help\] command was not handled"):
        calls.assert_command_processed("help")
    with pytest.raises(AssertionError, match="3 command"):
        calls.assert_no_commands_processed()
