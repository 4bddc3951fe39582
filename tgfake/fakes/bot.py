from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Self

from aiogram import Bot, Dispatcher, Router
from aiogram.filters import Command
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import Update

from tgfake.fakes.assertions import CallAssertionsMixin, CommandAssertionsMixin
from tgfake.fakes.commands import CommandRecorder, CommandRecorderMiddleware
from tgfake.fakes.recorder import CallRecorder
from tgfake.fakes.session import FakeSession
from tgfake.settings import se

logger = logging.getLogger(__name__)


class FakeBot(CallAssertionsMixin, CommandAssertionsMixin, Bot):
    """A ``Bot`` whose API calls never leave the process.

    Register handlers, feed it updates built with ``TelegramUpdate`` and
    assert on what the handlers sent::

        bot = FakeBot().register_command("start", start_handler)
        await bot.process_update(TelegramUpdate.create().command_message("start").get())
        bot.assert_message_sent("Welcome!")
    """

    def __init__(
        self,
        responses: Iterable[Any] | None = None,
        *,
        token: str = se.bot.token,
        username: str = se.bot.username,
        fail_when_empty: bool = se.bot.fail_when_empty,
    ) -> None:
        self.recorder = CallRecorder(responses, fail_when_empty=fail_when_empty)
        self.command_recorder = CommandRecorder()
        super().__init__(token=token, session=FakeSession(self.recorder, username=username))
        # Command filters look up the bot username; answer it without an API call.
        self._me = self.session.bot_user(self)

        self.dispatcher = Dispatcher(storage=MemoryStorage())
        self.router = Router(name="tgfake")
        self._commands: dict[str, Callable[..., Any]] = {}
        # Inner middlewares of a parent apply to handlers of every nested router.
        self.dispatcher.message.middleware(CommandRecorderMiddleware(self.command_recorder))
        self.dispatcher.include_router(self.router)

    def register_command(self, name: str, handler: Callable[..., Any]) -> Self:
        self.router.message.register(handler, Command(name))
        self._commands[name.lower()] = handler
        return self

    def command(self, name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(handler: Callable[..., Any]) -> Callable[..., Any]:
            self.register_command(name, handler)
            return handler

        return decorator

    def include_router(self, router: Router) -> Self:
        self.dispatcher.include_router(router)
        return self

    def get_commands(self) -> dict[str, Callable[..., Any]]:
        return dict(self._commands)

    async def process_update(self, update: Update | Mapping[str, Any], **kwargs: Any) -> Self:
        if not isinstance(update, Update):
            update = Update.model_validate(update, context={"bot": self})
        logger.debug("Feeding update %s", update.update_id)
        await self.dispatcher.feed_update(self, update, **kwargs)
        return self

    def invoke(self, method: str, arguments: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.recorder.invoke(method, arguments)

    def add_responses(self, responses: Iterable[Any]) -> None:
        self.recorder.add_responses(responses)

    def fail_when_empty(self) -> Self:
        self.recorder.fail_when_empty()
        return self
