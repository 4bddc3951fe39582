from __future__ import annotations

import pytest
from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message

from tgfake.fakes import FakeBot
from tgfake.payloads import TelegramUpdate

pytestmark = pytest.mark.asyncio

WELCOME = "Welcome! Use /help to see available commands."
HELP = "Available commands:\n/start - Get started\n/help - Show this help"


async def start_handler(message: Message) -> None:
    await message.answer(WELCOME)


async def help_handler(message: Message) -> None:
    await message.answer(HELP)


async def echo_handler(message: Message, command: CommandObject) -> None:
    await message.answer(f"You said: {command.args}")


async def photo_handler(message: Message) -> None:
    await message.answer_photo(
        photo="https://example.com/photo.jpg",
        caption="Here is your requested photo!",
    )


@pytest.fixture
def bot() -> FakeBot:
    return (
        FakeBot()
        .register_command("start", start_handler)
        .register_command("help", help_handler)
        .register_command("echo", echo_handler)
        .register_command("photo", photo_handler)
    )


async def test_registered_commands_are_listed(bot: FakeBot) -> None:
    commands = bot.get_commands()

    assert set(commands) == {"start", "help", "echo", "photo"}
    assert commands["start"] is start_handler


async def test_start_replies_to_the_update_chat(bot: FakeBot) -> None:
    update = TelegramUpdate.create().command_message("start").get()

    await bot.process_update(update)

    bot.assert_sent_times("sendMessage", 1)
    bot.assert_sent("sendMessage", {"chat_id": update.message.chat.id, "text": WELCOME})
    assert [call.method for call in bot.recorder.requests] == ["sendMessage"]
    bot.assert_command_processed("start")


async def test_command_arguments_reach_the_handler(bot: FakeBot) -> None:
    await bot.process_update(TelegramUpdate.create().command_message("echo", "hello world").get())

    bot.assert_message_contains("You said: hello world")
    bot.assert_command_processed("echo", lambda args: args["args"] == "hello world")


async def test_several_commands_in_sequence(bot: FakeBot) -> None:
    for name in ("start", "help", "start"):
        await bot.process_update(TelegramUpdate.create().command_message(name).get())

    bot.assert_message_sent(WELCOME)
    bot.assert_message_contains("Available commands:")
    bot.assert_message_sent_count(3)
    bot.assert_sent_times("sendMessage", 3)
    bot.assert_command_processed_times("start", 2)
    assert len(bot.get_processed_commands("help")) == 1


async def test_overridden_chat_is_used(bot: FakeBot) -> None:
    update = (
        TelegramUpdate.create()
        .command_message("start")
        .with_message({"chat": {"id": 987654321}, "from": {"id": 999888777, "first_name": "TestUser"}})
        .get()
    )

    await bot.process_update(update)

    bot.assert_message_sent(WELCOME, chat_id="987654321")
    bot.assert_sent("sendMessage", {"chat_id": 987654321, "text": WELCOME})


async def test_mention_of_this_bot_is_handled_without_api_calls(bot: FakeBot) -> None:
    await bot.process_update(TelegramUpdate.create().command_message("start@TestBot").get())

    bot.assert_message_sent(WELCOME)
    bot.assert_not_sent("getMe")


async def test_other_api_methods(bot: FakeBot) -> None:
    await bot.process_update(TelegramUpdate.create().command_message("photo").get())

    bot.assert_sent("sendPhoto")
    bot.assert_sent(
        "sendPhoto",
        lambda params: params["photo"] == "https://example.com/photo.jpg"
        and "requested photo" in params["caption"],
    )
    bot.assert_not_sent("sendMessage")
    bot.assert_not_sent("sendDocument")


async def test_unknown_command_sends_nothing(bot: FakeBot) -> None:
    await bot.process_update(TelegramUpdate.create().command_message("unknown").get())

    bot.assert_nothing_sent()
    bot.assert_no_commands_processed()


async def test_plain_text_sends_nothing(bot: FakeBot) -> None:
    await bot.process_update(TelegramUpdate.create().text_message("Just a regular message").get())

    bot.assert_nothing_sent()
    bot.assert_command_not_processed("start")


async def test_raw_payloads_are_accepted(bot: FakeBot) -> None:
    payload = TelegramUpdate.create().command_message("help").to_dict()

    await bot.process_update(payload)

    bot.assert_message_sent(HELP, chat_id=payload["message"]["chat"]["id"])


async def test_builder_can_be_invoked(bot: FakeBot) -> None:
    factory = TelegramUpdate.create().command_message("start")

    await bot.process_update(factory())

    bot.assert_message_sent(WELCOME)


async def test_included_routers_are_dispatched_and_watched() -> None:
    router = Router()

    @router.callback_query(F.data == "go")
    async def on_go(query: CallbackQuery) -> None:
        await query.answer("Button clicked!")

    bot = FakeBot().include_router(router)

    await bot.process_update(TelegramUpdate.create().callback_query("go").get())
    await bot.process_update(TelegramUpdate.create().callback_query("stay").get())

    bot.assert_sent_times("answerCallbackQuery", 1)
    bot.assert_sent("answerCallbackQuery", {"text": "Button clicked!"})


async def test_commands_in_nested_routers_are_recorded_once() -> None:
    parent = Router(name="handlers")
    child = Router(name="start")
    child.message.register(start_handler, Command("start"))
    parent.include_router(child)
    bot = FakeBot().include_router(parent)

    await bot.process_update(TelegramUpdate.create().command_message("start").get())

    bot.assert_command_processed_times("start", 1)
    assert len(bot.command_recorder.records) == 1
    bot.assert_sent_times("sendMessage", 1)


async def test_decorator_registration() -> None:
    bot = FakeBot()

    @bot.command("ping")
    async def ping(message: Message) -> None:
        await message.answer("pong")

    await bot.process_update(TelegramUpdate.create().command_message("ping").get())

    bot.assert_message_sent("pong")
    assert bot.get_commands() == {"ping": ping}


async def test_drip_fed_responses_reach_handlers(bot: FakeBot) -> None:
    bot.fail_when_empty()
    bot.add_responses([TelegramUpdate.create().message().as_result()])

    await bot.process_update(TelegramUpdate.create().command_message("start").get())

    bot.assert_sent_times("sendMessage", 1)
    assert bot.recorder.pending == 0
