from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Self

import msgspec
from aiogram.types import (
    CallbackQuery,
    Chat,
    Document,
    Message,
    PhotoSize,
    TelegramObject,
    Update,
    User,
)

from tgfake.exceptions import TemplateNotSetError
from tgfake.payloads.definitions import fragment as load_fragment
from tgfake.payloads.provider import command_entities, make_faker
from tgfake.payloads.resolver import Resolver, literal
from tgfake.settings import se
from tgfake.utils.merge import deep_merge

logger = logging.getLogger(__name__)

STRUCTURES: dict[str, type[TelegramObject]] = {
    "update": Update,
    "user": User,
    "sender": User,
    "bot_user": User,
    "chat": Chat,
    "message": Message,
    "callback_query": CallbackQuery,
    "photo": PhotoSize,
    "document": Document,
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


@dataclass
class BuilderState:
    base_template: dict[str, Any] | None = None
    structure: type[TelegramObject] | None = None
    repeat_count: int = 1
    seed: int | None = None

    def reset(self) -> None:
        """Forget the scenario and count after a terminal call; keep the seed."""
        self.base_template = None
        self.structure = None
        self.repeat_count = 1


class TelegramUpdate:
    """Fluent builder for fake Telegram payloads.

    Pick a scenario, optionally tweak fields, then call a terminal method::

        update = TelegramUpdate.create().command_message("start").get()
        payloads = TelegramUpdate.create().times(3).text_message("hi").to_dict()

    Terminal methods consume the scenario: the builder can be reused for an
    unrelated one afterwards.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.state = BuilderState(seed=seed if seed is not None else se.payloads.seed)

    @classmethod
    def create(cls, seed: int | None = None) -> Self:
        return cls(seed)

    def __call__(self) -> TelegramObject | list[TelegramObject]:
        return self.get()

    # configuration

    def times(self, count: int) -> Self:
        if count < 1:
            raise ValueError("count must be at least 1")
        self.state.repeat_count = count
        return self

    def seed(self, seed: int) -> Self:
        self.state.seed = seed
        return self

    # scenarios

    def command_message(
        self,
        command: str,
        args: str | None = None,
        merge: Mapping[str, Any] | None = None,
    ) -> Self:
        text = f"/{command} {args}" if args else f"/{command}"
        return self._message_scenario(
            {"text": literal(text), "entities": literal(command_entities(text))},
            merge,
        )

    def text_message(self, text: str, merge: Mapping[str, Any] | None = None) -> Self:
        return self._message_scenario({"text": literal(text), "entities": []}, merge)

    def photo_message(self, merge: Mapping[str, Any] | None = None) -> Self:
        return self._message_scenario({"photo": [load_fragment("photo")]}, merge)

    def document_message(self, merge: Mapping[str, Any] | None = None) -> Self:
        return self._message_scenario({"document": load_fragment("document")}, merge)

    def callback_query(self, data: str, merge: Mapping[str, Any] | None = None) -> Self:
        query = deep_merge(load_fragment("callback_query"), {"data": literal(data)})
        template = load_fragment("update")
        template["callback_query"] = query
        return self._set_template(template, Update, merge)

    def fragment(self, name: str, merge: Mapping[str, Any] | None = None) -> Self:
        template = load_fragment(name)
        return self._set_template(template, STRUCTURES.get(name), merge)

    def user(self, merge: Mapping[str, Any] | None = None) -> Self:
        return self.fragment("user", merge)

    def chat(self, merge: Mapping[str, Any] | None = None) -> Self:
        return self.fragment("chat", merge)

    def message(self, merge: Mapping[str, Any] | None = None) -> Self:
        return self.fragment("message", merge)

    def photo(self, merge: Mapping[str, Any] | None = None) -> Self:
        return self.fragment("photo", merge)

    def document(self, merge: Mapping[str, Any] | None = None) -> Self:
        return self.fragment("document", merge)

    # overrides

    def with_field(self, field: str, value: Any) -> Self:
        """Deep-merge ``{field: value}`` into the scenario.

        ``field`` may be camelCase (``callbackQuery``); it is stored as
        snake_case. Nested mappings only replace the keys they name.
        """
        if self.state.base_template is None:
            raise TemplateNotSetError(
                "No base payload template set. Call a scenario method first."
            )
        self.state.base_template = deep_merge(
            self.state.base_template, {to_snake_case(field): value}
        )
        return self

    def with_message(self, value: Mapping[str, Any]) -> Self:
        return self.with_field("message", value)

    def with_callback_query(self, value: Mapping[str, Any]) -> Self:
        return self.with_field("callback_query", value)

    def with_update_id(self, value: int) -> Self:
        return self.with_field("update_id", value)

    # terminals

    def get(self) -> TelegramObject | list[TelegramObject]:
        structure = self.state.structure
        objects = [self._make(structure, payload) for payload in self._generate()]
        return objects[0] if len(objects) == 1 else objects

    def as_list(self) -> list[TelegramObject]:
        structure = self.state.structure
        return [self._make(structure, payload) for payload in self._generate()]

    def as_result(self) -> dict[str, Any]:
        payloads = self._generate()
        return {"ok": True, "result": payloads[0] if len(payloads) == 1 else payloads}

    def as_json(self) -> str:
        payloads = self._generate()
        data = payloads[0] if len(payloads) == 1 else payloads
        return msgspec.json.encode(data).decode()

    def to_dict(self) -> dict[str, Any] | list[dict[str, Any]]:
        payloads = self._generate()
        return payloads[0] if len(payloads) == 1 else payloads

    # internals

    def _message_scenario(
        self, specifics: dict[str, Any], merge: Mapping[str, Any] | None
    ) -> Self:
        template = load_fragment("update")
        template["message"] = deep_merge(load_fragment("message"), specifics)
        return self._set_template(template, Update, merge)

    def _set_template(
        self,
        template: dict[str, Any],
        structure: type[TelegramObject] | None,
        merge: Mapping[str, Any] | None,
    ) -> Self:
        self.state.base_template = deep_merge(template, merge) if merge else template
        self.state.structure = structure
        return self

    def _generate(self) -> list[Any]:
        state = self.state
        if state.base_template is None:
            raise TemplateNotSetError(
                "No base payload template set. Call a scenario method like "
                "command_message(), text_message() or user() first."
            )
        resolver = Resolver(make_faker(state.seed))
        payloads = [resolver.resolve(state.base_template) for _ in range(state.repeat_count)]
        logger.debug("Generated %d payload(s), seed=%s", len(payloads), state.seed)
        state.reset()
        return payloads

    @staticmethod
    def _make(structure: type[TelegramObject] | None, payload: Any) -> Any:
        if structure is None:
            return payload
        return structure.model_validate(payload)
