"""Manifest types.

All manifests are frozen and use tuples so the loaded configuration is
read-only for the lifetime of a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ManifestSource = Literal["custom", "default"]

LAYER_ORDER: tuple[str, ...] = ("ui", "application", "domain", "infrastructure")


@dataclass(frozen=True)
class LayerRule:
    """Import rules for one architectural layer."""

    allowed_imports: tuple[str, ...]
    forbidden_imports: tuple[str, ...]
    description: str

    @classmethod
    def from_dict(cls, data: dict) -> "LayerRule":
        if not isinstance(data, dict):
            raise TypeError(f"layer rule must be a mapping, got {type(data).__name__}")
        return cls(
            allowed_imports=_str_tuple(data.get("allowed_imports", [])),
            forbidden_imports=_str_tuple(data.get("forbidden_imports", [])),
            description=str(data["description"]),
        )


@dataclass(frozen=True)
class SoCManifest:
    """Separation-of-concerns manifest: layer name -> rule."""

    layers: dict[str, LayerRule]

    @classmethod
    def from_dict(cls, data: dict) -> "SoCManifest":
        raw_layers = data["layers"]
        if not isinstance(raw_layers, dict):
            raise TypeError("'layers' must be a mapping")
        return cls(layers={str(name): LayerRule.from_dict(rule) for name, rule in raw_layers.items()})


@dataclass(frozen=True)
class RequiredFilter:
    """Filter field that must accompany access to the listed tables."""

    tables: tuple[str, ...]
    description: str


@dataclass(frozen=True)
class RLSManifest:
    """Tenant-isolation (row level security) manifest."""

    required_filters: dict[str, RequiredFilter]
    protected_entities: tuple[str, ...]
    exempt_markers: tuple[str, ...]

    @classmethod
    def from_dict(cls, data: dict) -> "RLSManifest":
        raw_filters = data["required_filters"]
        if not isinstance(raw_filters, dict):
            raise TypeError("'required_filters' must be a mapping")
        if not all(isinstance(rule, dict) for rule in raw_filters.values()):
            raise TypeError("each required filter must be a mapping")
        required_filters = {
            str(name): RequiredFilter(
                tables=_str_tuple(rule["tables"]),
                description=str(rule.get("description", "")),
            )
            for name, rule in raw_filters.items()
        }
        return cls(
            required_filters=required_filters,
            protected_entities=_flatten_groups(data["clinical_entities"]),
            exempt_markers=_flatten_groups(data.get("exempt_operations", [])),
        )

    def filters_for(self, entity: str) -> list[str]:
        """Required filter fields whose tables include ``entity``."""
        return [name for name, rule in self.required_filters.items() if entity in rule.tables]


@dataclass(frozen=True)
class TokenAllowlist:
    """Semantic design tokens allowed in component markup."""

    colors: tuple[str, ...]
    spacing: tuple[str, ...]
    allowed_numeric: tuple[int, ...]

    @classmethod
    def from_dict(cls, data: dict) -> "TokenAllowlist":
        return cls(
            colors=_str_tuple(data["colors"]),
            spacing=_str_tuple(data["spacing"]),
            allowed_numeric=tuple(int(value) for value in data["allowed_numeric"]),
        )


@dataclass(frozen=True)
class ManifestBundle:
    """The three manifests loaded for one run, with their provenance."""

    soc: SoCManifest
    rls: RLSManifest
    tokens: TokenAllowlist
    sources: dict[str, ManifestSource] = field(default_factory=dict)

    def is_custom(self, kind: str) -> bool:
        return self.sources.get(kind) == "custom"


def _str_tuple(values: object) -> tuple[str, ...]:
    if isinstance(values, str) or not isinstance(values, list | tuple):
        raise TypeError(f"expected a list of strings, got {type(values).__name__}")
    return tuple(str(value) for value in values)


def _flatten_groups(values: object) -> tuple[str, ...]:
    """Accept a flat list, or a mapping of group name -> list flattened in order."""
    if isinstance(values, dict):
        flattened: list[str] = []
        for group in values.values():
            flattened.extend(_str_tuple(group))
        return tuple(flattened)
    return _str_tuple(values)
