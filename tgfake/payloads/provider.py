"""Telegram specific generators and a direct-use provider."""
from __future__ import annotations

import logging
import string
from typing import Any

from faker import Faker
from faker.providers import BaseProvider

from tgfake.exceptions import PlaceholderError
from tgfake.payloads.registry import GeneratorRegistry, generators

logger = logging.getLogger(__name__)

TOKEN_ALPHABET = string.ascii_letters + string.digits
FAKER_ARG_PREFIX = "faker-"


class TelegramProvider(BaseProvider):
    """Faker formatters for Telegram ids, users, chats and commands."""

    def id(self, digits: int = 9) -> int:
        """Numeric id with exactly ``digits`` digits; the leading digit is always 1."""
        digits = int(digits)
        if digits < 1:
            raise ValueError("digits must be positive")
        return int("1" + self.numerify("#" * (digits - 1)))

    def string_id(self, digits: int = 9) -> str:
        return str(self.id(digits))

    def file_id(self, length: int = 36) -> str:
        length = int(length)
        if length < 1:
            raise ValueError("length must be positive")
        return self.lexify("?" * length, letters=TOKEN_ALPHABET)

    def timestamp(self) -> int:
        return int(self.generator.unix_time())

    def bot_name(self) -> str:
        return f"{self.generator.first_name()} Bot"

    def bot_user_name(self) -> str:
        return f"{self.generator.first_name()}Bot"

    def from_user(self) -> dict[str, Any]:
        return {
            "id": self.id(),
            "is_bot": False,
            "first_name": self.generator.first_name(),
            "last_name": self.generator.last_name(),
            "username": self.generator.user_name(),
            "language_code": self.language_code(),
        }

    def chat(self) -> dict[str, Any]:
        return {
            "id": self.id(),
            "first_name": self.generator.first_name(),
            "last_name": self.generator.last_name(),
            "username": self.generator.user_name(),
            "type": "private",
        }

    def bot_from(self) -> dict[str, Any]:
        return {
            "id": self.id(),
            "is_bot": True,
            "first_name": self.bot_name(),
            "username": self.bot_user_name(),
        }

    def command(self, name: Any = None) -> str:
        if name is None or name == "":
            return "/" + self.generator.word()
        name = str(name)
        if "?" in name or "#" in name:
            return "/" + self.bothify(name, letters=string.ascii_lowercase)
        return "/" + name

    def command_with_args(self, name: Any = None, *args: Any) -> str:
        arguments = " ".join(self._command_argument(str(arg)) for arg in args)
        return f"{self.command(name)} {arguments}".strip()

    def _command_argument(self, arg: str) -> str:
        if not arg.startswith(FAKER_ARG_PREFIX):
            return arg
        name = arg[len(FAKER_ARG_PREFIX):]
        formatter, _, param = name.partition("-")
        params = (param,) if param else ()
        try:
            return str(generators.invoke(self.generator, formatter, params))
        except PlaceholderError:
            logger.debug("Command argument %r left as is", name)
            return name

    def command_entities(self, text: Any = None) -> list[dict[str, Any]]:
        return command_entities(None if text is None else str(text))


def command_entities(text: str | None) -> list[dict[str, Any]]:
    """Return the ``bot_command`` entity for ``text``.

    ``/help arg`` spans ``/help``; ``/cmd@bot arg`` spans ``/cmd@bot``; text
    not starting with a slash has no entities.
    """
    if not text or not text.startswith("/"):
        return []

    length = len(text)
    first_space = text.find(" ")
    at_sign = text.find("@")

    if at_sign != -1:
        if first_space == -1 or at_sign < first_space:
            length = len(text) if first_space == -1 else first_space
        else:
            length = first_space
    elif first_space != -1:
        length = first_space

    return [{"offset": 0, "length": length, "type": "bot_command"}]


def make_faker(seed: int | None = None) -> Faker:
    """A fresh ``Faker`` with ``TelegramProvider`` and its own random source.

    ``seed=None`` seeds from OS entropy.
    """
    faker = Faker()
    faker.add_provider(TelegramProvider)
    faker.seed_instance(seed)
    return faker


class FakeDataProvider:
    """Generate single values outside of a skeleton."""

    def __init__(
        self,
        seed: int | None = None,
        *,
        registry: GeneratorRegistry = generators,
    ) -> None:
        self.faker = make_faker(seed)
        self.registry = registry

    def seed(self, seed: int) -> None:
        self.faker.seed_instance(seed)

    def generate(self, name: str, *args: Any) -> Any:
        return self.registry.invoke(self.faker, name, args)

    def command_entities(self, text: str | None) -> list[dict[str, Any]]:
        return command_entities(text)
