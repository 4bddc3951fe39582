from tgfake.payloads.definitions import FRAGMENTS, fragment
from tgfake.payloads.factory import BuilderState, TelegramUpdate
from tgfake.payloads.provider import FakeDataProvider, TelegramProvider, command_entities, make_faker
from tgfake.payloads.registry import GeneratorRegistry
from tgfake.payloads.resolver import LiteralValue, Placeholder, Resolver, literal

__all__ = (
    "FRAGMENTS",
    "BuilderState",
    "FakeDataProvider",
    "GeneratorRegistry",
    "LiteralValue",
    "Placeholder",
    "Resolver",
    "TelegramProvider",
    "TelegramUpdate",
    "command_entities",
    "fragment",
    "literal",
    "make_faker",
)
