"""Registries shared between class emission and marshalling generation"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .errors import RegistryFrozenError
from .types import Type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationSnapshot:
    """Read-only view of the registries once every class has been emitted"""
    enums: Mapping[str, tuple[tuple[str, str], ...]]
    records: Mapping[str, tuple[tuple[str, Type], ...]]
    types: tuple[Type, ...]


class GenerationContext:
    """Collects enums, record layouts and encountered types during phase 1.

    Writers go through the register_* methods. Once freeze() has handed out
    a snapshot the context rejects further registrations, so marshalling
    generation can never observe a partially populated registry.
    """

    def __init__(self):
        self._enums: dict[str, tuple[tuple[str, str], ...]] = {}
        self._records: dict[str, tuple[tuple[str, Type], ...]] = {}
        # dict keys as an insertion-ordered set
        self._types: dict[Type, None] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_writable(self, what: str):
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {what}: context is frozen")

    def register_type(self, ty: Type):
        self._check_writable(f"type {ty!r}")
        self._types.setdefault(ty, None)

    def register_enum(self, name: str, values):
        self._check_writable(f"enum '{name}'")
        # One definition per name in the schema, so last write wins safely
        self._enums[name] = tuple(values)

    def register_record(self, cls: str, fields):
        self._check_writable(f"record '{cls}'")
        self._records[cls] = tuple(fields)
        logger.debug("Registered record %s with %d fields", cls, len(self._records[cls]))

    def has_record(self, cls: str) -> bool:
        return cls in self._records

    def freeze(self) -> GenerationSnapshot:
        self._frozen = True
        logger.debug(
            "Froze context: %d types, %d enums, %d records",
            len(self._types), len(self._enums), len(self._records),
        )
        return GenerationSnapshot(
            enums=MappingProxyType(dict(self._enums)),
            records=MappingProxyType(dict(self._records)),
            types=tuple(self._types),
        )
