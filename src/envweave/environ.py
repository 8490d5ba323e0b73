"""Environment store adapters.

The loader never touches ``os.environ`` directly; it reads and writes through
an :class:`EnvironmentStore`. Any mutable mapping can back a store.
"""

from __future__ import annotations

from collections.abc import MutableMapping
import os
from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class EnvironmentStore(Protocol):
    def get(self, name: str) -> str | None: ...

    def set(self, name: str, value: str) -> None: ...


class MappingEnvironment:
    def __init__(self, mapping: MutableMapping[str, str] | None = None) -> None:
        self._mapping = {} if mapping is None else mapping

    def get(self, name: str) -> str | None:
        return self._mapping.get(name)

    def set(self, name: str, value: str) -> None:
        self._mapping[name] = value

    def snapshot(self) -> dict[str, str]:
        return dict(self._mapping)

    def __repr__(self) -> str:
        return f"MappingEnvironment(keys={len(self._mapping)})"


EnvironmentLike = Union[EnvironmentStore, MutableMapping[str, str], None]


def process_environment() -> MappingEnvironment:
    return MappingEnvironment(os.environ)


def resolve_store(environ: EnvironmentLike) -> EnvironmentStore:
    """Return a store for ``environ``; ``None`` means the process environment."""
    if environ is None:
        return process_environment()
    if isinstance(environ, MappingEnvironment):
        return environ
    if isinstance(environ, MutableMapping):
        return MappingEnvironment(environ)
    return environ
