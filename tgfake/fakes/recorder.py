from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Self

from aiogram.types import TelegramObject

from tgfake.exceptions import NoFakeResponsesLeft

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE: Mapping[str, Any] = {"ok": True, "result": True}


@dataclass(frozen=True)
class RecordedCall:
    method: str
    arguments: dict[str, Any] = field(default_factory=dict)
    sequence_index: int = 0


class CallRecorder:
    """Stand-in for the Bot API transport.

    Every call is logged before anything else happens. Answers come from a
    FIFO queue shared by all methods; an exception in the queue is raised to
    the caller. With an empty queue the call succeeds with
    ``DEFAULT_RESPONSE`` unless ``fail_when_empty`` is set.

    Meant for one test and one thread; there is no locking.
    """

    def __init__(
        self,
        responses: Iterable[Any] | None = None,
        *,
        fail_when_empty: bool = False,
    ) -> None:
        self._calls: list[RecordedCall] = []
        self._responses: deque[Any] = deque(responses or ())
        self._fail_when_empty = fail_when_empty

    @property
    def requests(self) -> list[RecordedCall]:
        return list(self._calls)

    @property
    def pending(self) -> int:
        return len(self._responses)

    @property
    def fails_when_empty(self) -> bool:
        return self._fail_when_empty

    def __len__(self) -> int:
        return len(self._calls)

    def add_responses(self, responses: Iterable[Any]) -> None:
        self._responses.extend(responses)

    def fail_when_empty(self, enabled: bool = True) -> Self:
        self._fail_when_empty = enabled
        return self

    def clear(self) -> None:
        self._calls.clear()

    def invoke(self, method: str, arguments: Mapping[str, Any] | None = None) -> dict[str, Any]:
        call = RecordedCall(
            method=method,
            arguments=dict(arguments or {}),
            sequence_index=len(self._calls),
        )
        self._calls.append(call)
        logger.debug("Recorded %s call #%d", method, call.sequence_index)

        if not self._responses:
            if self._fail_when_empty:
                raise NoFakeResponsesLeft()
            return dict(DEFAULT_RESPONSE)

        response = self._responses.popleft()
        logger.debug("Answering %s with queued response, %d left", method, len(self._responses))
        if isinstance(response, BaseException):
            raise response
        return normalize_response(response)


def dump_objects(value: Any) -> Any:
    """Turn aiogram objects anywhere inside ``value`` into plain data."""
    if isinstance(value, TelegramObject):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, Mapping):
        return {key: dump_objects(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [dump_objects(item) for item in value]
    return value


def normalize_response(response: Any) -> dict[str, Any]:
    response = dump_objects(response)
    if isinstance(response, Mapping) and "ok" in response:
        return dict(response)
    return {"ok": True, "result": response}
