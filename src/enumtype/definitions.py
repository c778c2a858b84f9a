"""Declarative enum definitions and the process-wide enum registry.

Definitions can be written in YAML::

    enums:
      ToastStatus: [bread, toasting, toast, burnt]
      BitField:
        READ: 1
        WRITE: 2
        EXECUTE: 4
      Priority:
        description: Ticket priority
        values: [low, normal, high]

Each entry is validated through ``EnumDefinition`` and built into an
``EnumType``. The registry is what ``enum_class`` names in column info are
resolved against.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, StrictInt, StrictStr, ValidationError

from enumtype.config import get_settings
from enumtype.core import EnumType
from enumtype.errors import DefinitionError
from enumtype.logging import get_logger

log = get_logger("definitions")


class EnumDefinition(BaseModel):
    """A single enum: symbols in order, or symbols with explicit ordinals."""
    name: StrictStr
    values: list[StrictStr] | dict[StrictStr, StrictInt]
    description: str = ""

    def build(self) -> EnumType:
        return EnumType(self.name, self.values, description=self.description)


# ── Loading & parsing ───────────────────────────────────

def load_enum_definitions(path: str | Path) -> dict[str, EnumType]:
    """Load enum definitions from a YAML file.

    Raises ``DefinitionError`` if the file is missing or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise DefinitionError(f"Enum definitions file not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise DefinitionError(f"Enum definitions file is not valid YAML: {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise DefinitionError("Enum definitions must be a YAML mapping at the top level")

    enums = parse_enum_dict(raw)
    log.info("enum_definitions_loaded", path=str(path), count=len(enums))
    return enums


def parse_enum_dict(raw: dict[str, Any]) -> dict[str, EnumType]:
    """Build enum types from a plain dict shaped like the YAML file."""
    if not isinstance(raw, dict):
        raise DefinitionError("Definitions input must be a mapping (dict), got " + type(raw).__name__)

    raw_enums = raw.get("enums", {})
    if not isinstance(raw_enums, dict):
        raise DefinitionError("'enums' must be a mapping of enum name to values")

    errors: list[str] = []
    enums: dict[str, EnumType] = {}
    for name, body in raw_enums.items():
        # Long form carries a description next to its values.
        if isinstance(body, dict) and isinstance(body.get("values"), (list, dict)):
            payload = {"name": name, **body}
        else:
            payload = {"name": name, "values": body}

        try:
            enums[name] = EnumDefinition.model_validate(payload).build()
        except ValidationError as exc:
            problems = "; ".join(err["msg"] for err in exc.errors())
            errors.append(f"enum '{name}': {problems}")
        except DefinitionError as exc:
            errors.append(f"enum '{name}': {exc}")

    if errors:
        raise DefinitionError("Invalid enum definitions:\n  - " + "\n  - ".join(errors))
    return enums


# ── Registry ────────────────────────────────────────────

_registry: dict[str, EnumType] | None = None


def get_registry() -> dict[str, EnumType]:
    """Return a copy of the registered enums, loading them on first call.

    The initial set comes from ``Settings.definitions_path`` when that file
    exists, and is empty otherwise.
    """
    return dict(_load_registry())


def _load_registry() -> dict[str, EnumType]:
    global _registry
    if _registry is None:
        path = get_settings().definitions_path
        if path.exists():
            _registry = load_enum_definitions(path)
        else:
            log.debug("enum_definitions_missing", path=str(path))
            _registry = {}
    return _registry


def get_enum(name: str) -> EnumType | None:
    return _load_registry().get(name)


def register_enum(enum: EnumType) -> EnumType:
    """Add ``enum`` to the registry under its name, replacing any previous one."""
    registry = _load_registry()
    if enum.name in registry and registry[enum.name] is not enum:
        log.warning("enum_replaced", enum=enum.name)
    registry[enum.name] = enum
    return enum


def set_registry(enums: Mapping[str, EnumType] | Iterable[EnumType]) -> None:
    """Replace the registry wholesale (useful for tests)."""
    global _registry
    if isinstance(enums, Mapping):
        _registry = dict(enums)
    else:
        _registry = {enum.name: enum for enum in enums}


def reset_registry() -> None:
    """Clear the registry so it gets reloaded on next access."""
    global _registry
    _registry = None
