from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from aiogram import BaseMiddleware

if TYPE_CHECKING:
    from aiogram.filters import CommandObject
    from aiogram.types import TelegramObject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandRecord:
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


class CommandRecorder:
    def __init__(self) -> None:
        self._records: list[CommandRecord] = []

    @property
    def records(self) -> list[CommandRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def record(self, name: str, arguments: dict[str, Any] | None = None) -> CommandRecord:
        record = CommandRecord(name=name.lower(), arguments=dict(arguments or {}))
        self._records.append(record)
        logger.debug("Command %s processed with %r", record.name, record.arguments)
        return record

    def filter(self, names: str | Iterable[str] | None = None) -> list[CommandRecord]:
        if names is None:
            return self.records
        if isinstance(names, str):
            names = [names]
        wanted = {name.lower() for name in names}
        return [record for record in self._records if record.name in wanted]

    def clear(self) -> None:
        self._records.clear()


class CommandRecorderMiddleware(BaseMiddleware):
    """Inner message middleware noting every command a handler accepted."""

    def __init__(self, recorder: CommandRecorder) -> None:
        self.recorder = recorder

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        command: CommandObject | None = data.get("command")
        if command is not None:
            self.recorder.record(
                command.command,
                {"args": command.args, "mention": command.mention},
            )
        return await handler(event, data)
