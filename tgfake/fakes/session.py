from __future__ import annotations

import datetime
import logging
import re
import secrets
from collections.abc import AsyncGenerator
from enum import Enum
from typing import TYPE_CHECKING, Any

import msgspec
from aiogram.client.default import Default
from aiogram.client.session.base import BaseSession
from aiogram.methods import GetMe, TelegramMethod
from aiogram.types import Chat, InputFile, Message, TelegramObject, User

from tgfake.fakes.recorder import DEFAULT_RESPONSE, CallRecorder
from tgfake.settings import se

if TYPE_CHECKING:
    from aiogram import Bot

logger = logging.getLogger(__name__)

_CHAT_ID = re.compile(r"-?\d+")


def json_dumps(obj: Any) -> str:
    return msgspec.json.encode(obj).decode()


class FakeSession(BaseSession):
    """aiogram session that hands every API method to a :class:`CallRecorder`.

    Methods are recorded under their Bot API name (``sendMessage``) with
    their arguments flattened to plain data: defaults resolved against the
    bot, ``None`` dropped, nested objects dumped to dicts and files replaced
    with ``attach://<name>`` references.
    """

    def __init__(
        self,
        recorder: CallRecorder | None = None,
        *,
        username: str = se.bot.username,
    ) -> None:
        super().__init__(json_loads=msgspec.json.decode, json_dumps=json_dumps)
        self.recorder = recorder if recorder is not None else CallRecorder()
        self.username = username
        self._counter = 0

    async def close(self) -> None:
        return None

    async def stream_content(
        self,
        url: str,
        headers: dict[str, Any] | None = None,
        timeout: int = 30,
        chunk_size: int = 65536,
        raise_for_status: bool = True,
    ) -> AsyncGenerator[bytes, None]:
        if False:
            yield b""
        return

    async def make_request(
        self,
        bot: Bot,
        method: TelegramMethod[Any],
        timeout: int | None = None,
    ) -> Any:
        arguments = self.build_arguments(bot, method)
        response = self.recorder.invoke(method.__api_method__, arguments)
        if response == DEFAULT_RESPONSE and method.__returning__ is not bool:
            return self._default_result(bot, method, arguments)
        checked = self.check_response(
            bot=bot,
            method=method,
            status_code=response.get("error_code") or 200,
            content=self.json_dumps(response),
        )
        return checked.result

    def build_arguments(self, bot: Bot, method: TelegramMethod[Any]) -> dict[str, Any]:
        arguments = {}
        for key, value in method.model_dump(warnings=False).items():
            prepared = self._prepare(value, bot)
            if prepared is not None:
                arguments[key] = prepared
        return arguments

    def _prepare(self, value: Any, bot: Bot) -> Any:
        if value is None:
            return None
        if isinstance(value, Default):
            return self._prepare(bot.default[value.name], bot)
        if isinstance(value, InputFile):
            return f"attach://{value.filename or secrets.token_urlsafe(10)}"
        if isinstance(value, TelegramObject):
            return self._prepare(value.model_dump(warnings=False), bot)
        if isinstance(value, dict):
            return {
                key: prepared
                for key, item in value.items()
                if (prepared := self._prepare(item, bot)) is not None
            }
        if isinstance(value, (list, tuple)):
            return [
                prepared
                for item in value
                if (prepared := self._prepare(item, bot)) is not None
            ]
        if isinstance(value, datetime.timedelta):
            value = datetime.datetime.now() + value
        if isinstance(value, datetime.datetime):
            return round(value.timestamp())
        if isinstance(value, Enum):
            return self._prepare(value.value, bot)
        return value

    def bot_user(self, bot: Bot) -> User:
        return User(id=bot.id, is_bot=True, first_name="Bot", username=self.username)

    def _default_result(
        self, bot: Bot, method: TelegramMethod[Any], arguments: dict[str, Any]
    ) -> Any:
        if isinstance(method, GetMe):
            return self.bot_user(bot)
        if method.__returning__ is Message:
            return self._make_message(bot, arguments)
        return True

    def _make_message(self, bot: Bot, arguments: dict[str, Any]) -> Message:
        self._counter += 1
        chat_id = arguments.get("chat_id")
        if not _CHAT_ID.fullmatch(str(chat_id)):
            chat_id = bot.id
        message = Message(
            message_id=self._counter,
            date=datetime.datetime.now(),
            chat=Chat(id=int(chat_id), type="private"),
            from_user=self.bot_user(bot),
            text=arguments.get("text"),
            caption=arguments.get("caption"),
        )
        return message.as_(bot)
