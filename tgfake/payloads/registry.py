from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from faker import Faker
from faker.generator import Generator

from tgfake.exceptions import GeneratorArgumentError, UnknownGeneratorError

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"-?\d+")


def coerce_argument(arg: Any) -> Any:
    """Placeholder arguments arrive as text; whole numbers become ``int``."""
    if isinstance(arg, str) and _INTEGER.fullmatch(arg):
        return int(arg)
    return arg


class GeneratorRegistry:
    """Looks up placeholder names as formatters of a ``Faker`` instance.

    Every formatter of the instance is a generator: Faker's own (``word``,
    ``first_name``, ``numerify``...) and the ones added by
    ``TelegramProvider``. ``aliases`` maps placeholder names that are not
    valid method names (``from``) to the formatter serving them.
    """

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        self.aliases = dict(aliases or {})

    def get(self, faker: Faker | Generator, name: str) -> Callable[..., Any]:
        attr = self.aliases.get(name, name)
        # Proxy and generator plumbing (seed, add_provider, parse...) is not a formatter.
        if not attr or attr.startswith("_") or hasattr(Faker, attr) or hasattr(Generator, attr):
            raise UnknownGeneratorError(f"Unknown generator {name!r}")
        try:
            func = getattr(faker, attr)
        except AttributeError:
            raise UnknownGeneratorError(f"Unknown generator {name!r}") from None
        if not callable(func):
            raise UnknownGeneratorError(f"Unknown generator {name!r}")
        return func

    def invoke(self, faker: Faker | Generator, name: str, args: Sequence[Any] = ()) -> Any:
        func = self.get(faker, name)
        args = [coerce_argument(arg) for arg in args]
        try:
            inspect.signature(func).bind(*args)
        except TypeError as err:
            raise GeneratorArgumentError(
                f"Generator {name!r} does not accept {len(args)} argument(s)"
            ) from err
        try:
            return func(*args)
        except (TypeError, ValueError, IndexError, KeyError) as err:
            raise GeneratorArgumentError(
                f"Generator {name!r} rejected arguments {args!r}: {err}"
            ) from err


generators = GeneratorRegistry(aliases={"from": "from_user"})
