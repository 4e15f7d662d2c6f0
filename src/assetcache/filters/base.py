"""Filter interface and typed option setters."""

from __future__ import annotations

import inspect
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import ClassVar, TypeAlias

from assetcache.exceptions import FilterError

_KIND_PATTERN: re.Pattern[str] = re.compile(r"^[a-z][a-z0-9_]+$")

OptionSetter: TypeAlias = Callable[["AssetFilter", object], None]


def bool_option(attr: str) -> OptionSetter:
    """Return a setter that accepts only booleans."""

    def setter(target: AssetFilter, value: object) -> None:
        if not isinstance(value, bool):
            raise TypeError(f"expected a boolean, got {type(value).__name__}")
        setattr(target, attr, value)

    return setter


def str_option(attr: str, *, choices: frozenset[str] | None = None) -> OptionSetter:
    """Return a setter that accepts strings, optionally from a fixed set."""

    def setter(target: AssetFilter, value: object) -> None:
        if not isinstance(value, str):
            raise TypeError(f"expected a string, got {type(value).__name__}")
        if choices is not None and value not in choices:
            raise ValueError(f"expected one of {sorted(choices)}")
        setattr(target, attr, value)

    return setter


def pattern_option(attr: str) -> OptionSetter:
    """Return a setter that compiles a regular expression."""

    def setter(target: AssetFilter, value: object) -> None:
        if not isinstance(value, str):
            raise TypeError(f"expected a string, got {type(value).__name__}")
        setattr(target, attr, re.compile(value))

    return setter


class AssetFilter(ABC):
    """Content transformation applied to one input or a whole bundle."""

    kind: ClassVar[str]
    option_setters: ClassVar[dict[str, OptionSetter]] = {}
    required_options: ClassVar[frozenset[str]] = frozenset()

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Validate filter subclasses define a snake_case `kind`."""
        super().__init_subclass__(**kwargs)
        if inspect.isabstract(cls):
            return

        kind = getattr(cls, "kind", None)
        if not isinstance(kind, str) or not _KIND_PATTERN.match(kind):
            raise TypeError(f"{cls.__name__}.kind must be a snake_case string (got {kind!r})")
        unknown_required = cls.required_options - set(cls.option_setters)
        if unknown_required:
            raise TypeError(f"{cls.__name__} requires options without setters: {sorted(unknown_required)}")

    def __init__(self, name: str, apply_to: str | None = None) -> None:
        self.name = name
        self.apply_to = re.compile(apply_to, re.IGNORECASE) if apply_to else None

    def matches(self, file_name: str) -> bool:
        """Return True when this filter applies automatically to *file_name*."""
        return self.apply_to is not None and self.apply_to.search(file_name) is not None

    def set_option(self, key: str, value: object) -> None:
        """Apply one configured option through its typed setter."""
        setter = self.option_setters.get(key)
        if setter is None:
            raise FilterError(f'Filter "{self.name}" ({self.kind}) does not accept the option "{key}"')
        try:
            setter(self, value)
        except (TypeError, ValueError, re.error) as exc:
            raise FilterError(f'Could not set the option "{key}" to {value!r} on filter "{self.name}" ({exc})') from exc

    @abstractmethod
    def apply(self, content: str, *, source: Path | None = None) -> str:
        """Return transformed *content*; *source* names the originating file if any."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
