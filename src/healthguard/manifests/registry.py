"""Manifest registry: custom files under the manifest directory, or defaults.

Supports <name>.json or <name>.yaml files. Loading is fail-open: a missing
or malformed file yields the built-in default unchanged, never a merge.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

import yaml
from rich.console import Console

from healthguard.manifests.defaults import DEFAULT_RLS_MANIFEST, DEFAULT_SOC_MANIFEST, DEFAULT_TOKEN_ALLOWLIST
from healthguard.manifests.types import (
    ManifestBundle,
    ManifestSource,
    RLSManifest,
    SoCManifest,
    TokenAllowlist,
)

ManifestKind = Literal["soc", "rls", "tokens"]
Manifest = SoCManifest | RLSManifest | TokenAllowlist

MANIFEST_KINDS: tuple[ManifestKind, ...] = ("soc", "rls", "tokens")

MANIFEST_FILENAMES: dict[str, str] = {
    "soc": "soc-manifest",
    "rls": "rls-manifest",
    "tokens": "tailwind-allowlist",
}

MANIFEST_LABELS: dict[str, str] = {
    "soc": "SoC Manifest",
    "rls": "RLS Manifest",
    "tokens": "Tailwind Allowlist",
}

_DEFAULTS: dict[str, Manifest] = {
    "soc": DEFAULT_SOC_MANIFEST,
    "rls": DEFAULT_RLS_MANIFEST,
    "tokens": DEFAULT_TOKEN_ALLOWLIST,
}

_PARSERS = {
    "soc": SoCManifest.from_dict,
    "rls": RLSManifest.from_dict,
    "tokens": TokenAllowlist.from_dict,
}

console = Console()


def manifest_path(kind: str, manifest_dir: Path) -> Path | None:
    """Return the custom manifest file for ``kind`` if one exists.

    Priority order:
    1. <name>.json (preferred)
    2. <name>.yaml / <name>.yml (fallback)
    """
    stem = MANIFEST_FILENAMES[kind]
    for suffix in (".json", ".yaml", ".yml"):
        candidate = manifest_dir / f"{stem}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def load_manifest(kind: str, manifest_dir: Path) -> tuple[Manifest, ManifestSource]:
    """
    Load one manifest kind.

    Args:
        kind: "soc", "rls" or "tokens"
        manifest_dir: Directory holding custom manifest files

    Returns:
        (manifest, source) where source is "custom" when the file parsed,
        "default" otherwise

    Raises:
        ValueError: If kind is unknown
    """
    if kind not in _DEFAULTS:
        raise ValueError(f"Unknown manifest kind: {kind!r}. Expected one of: {', '.join(MANIFEST_KINDS)}")

    path = manifest_path(kind, manifest_dir)
    if path is None:
        return _DEFAULTS[kind], "default"

    try:
        data = _read_structured(path)
        if not isinstance(data, dict):
            raise TypeError("top-level value must be a mapping")
        return _PARSERS[kind](data), "custom"
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        console.print(f"[yellow]Warning: Failed to load manifest {path}: {e}; using defaults[/yellow]")
    except (KeyError, TypeError, ValueError) as e:
        console.print(f"[yellow]Warning: Invalid manifest structure in {path}: {e}; using defaults[/yellow]")

    return _DEFAULTS[kind], "default"


def load_manifests(manifest_dir: Path) -> ManifestBundle:
    """Load all three manifests once for a run."""
    soc, soc_source = load_manifest("soc", manifest_dir)
    rls, rls_source = load_manifest("rls", manifest_dir)
    tokens, tokens_source = load_manifest("tokens", manifest_dir)

    return ManifestBundle(
        soc=soc,  # type: ignore[arg-type]
        rls=rls,  # type: ignore[arg-type]
        tokens=tokens,  # type: ignore[arg-type]
        sources={"soc": soc_source, "rls": rls_source, "tokens": tokens_source},
    )


def manifest_to_dict(manifest: Manifest) -> dict:
    """Serialize a manifest back into its on-disk file shape."""
    if isinstance(manifest, SoCManifest):
        return {
            "layers": {
                name: {
                    "allowed_imports": list(rule.allowed_imports),
                    "forbidden_imports": list(rule.forbidden_imports),
                    "description": rule.description,
                }
                for name, rule in manifest.layers.items()
            }
        }
    if isinstance(manifest, RLSManifest):
        return {
            "required_filters": {
                name: {"tables": list(rule.tables), "description": rule.description}
                for name, rule in manifest.required_filters.items()
            },
            "clinical_entities": list(manifest.protected_entities),
            "exempt_operations": list(manifest.exempt_markers),
        }
    return {
        "colors": list(manifest.colors),
        "spacing": list(manifest.spacing),
        "allowed_numeric": list(manifest.allowed_numeric),
    }


def write_default_manifests(manifest_dir: Path, *, force: bool = False) -> list[Path]:
    """Write the built-in manifests as JSON files; existing files are kept unless ``force``."""
    manifest_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for kind in MANIFEST_KINDS:
        path = manifest_dir / f"{MANIFEST_FILENAMES[kind]}.json"
        if path.exists() and not force:
            continue
        with open(path, "w", encoding="utf-8") as f:
            json.dump(manifest_to_dict(_DEFAULTS[kind]), f, indent=2, ensure_ascii=False)
            f.write("\n")
        written.append(path)
    return written


def _read_structured(path: Path) -> object:
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        return json.loads(text)
    return yaml.safe_load(text)
