from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

from faker import Faker

from tgfake.exceptions import PlaceholderError
from tgfake.payloads.definitions import FRAGMENTS, Skeleton
from tgfake.payloads.registry import GeneratorRegistry, generators

logger = logging.getLogger(__name__)

SEPARATOR = ":"


@dataclass(frozen=True, slots=True)
class LiteralValue:
    value: Any


def literal(value: Any) -> LiteralValue:
    """Mark ``value`` so the resolver keeps it exactly as given."""
    return LiteralValue(value)


class Placeholder(NamedTuple):
    name: str
    args: tuple[str, ...]

    @classmethod
    def parse(cls, text: str) -> Placeholder:
        name, *args = text.split(SEPARATOR)
        return cls(name, tuple(args))


class Resolver:
    """Turns a skeleton into concrete data.

    A string leaf is parsed as a placeholder. Faker formatters win; a
    bare fragment name expands to that fragment; anything else is kept as
    literal text. Mappings and lists are walked recursively and keep their
    order. All generators share one ``Faker`` instance, so seeding it
    reproduces a whole pass.
    """

    def __init__(
        self,
        faker: Faker,
        *,
        registry: GeneratorRegistry = generators,
        fragments: Mapping[str, Callable[[], Skeleton]] = FRAGMENTS,
    ) -> None:
        self.faker = faker
        self.registry = registry
        self.fragments = fragments

    def resolve(self, value: Any) -> Any:
        if isinstance(value, LiteralValue):
            return value.value
        if isinstance(value, str):
            return self._resolve_placeholder(value)
        if isinstance(value, Mapping):
            return {key: self.resolve(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.resolve(item) for item in value]
        return value

    def _resolve_placeholder(self, text: str) -> Any:
        placeholder = Placeholder.parse(text)
        try:
            result = self.registry.invoke(self.faker, placeholder.name, placeholder.args)
        except PlaceholderError as err:
            if not placeholder.args and placeholder.name in self.fragments:
                return self.resolve(self.fragments[placeholder.name]())
            logger.debug("Keeping %r as literal text: %s", text, err)
            return text
        if isinstance(result, (Mapping, list)):
            return self.resolve(result)
        return result
