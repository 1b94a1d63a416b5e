"""Declarative rule manifests (layer rules, tenant isolation, design tokens)."""

from healthguard.manifests.defaults import DEFAULT_RLS_MANIFEST, DEFAULT_SOC_MANIFEST, DEFAULT_TOKEN_ALLOWLIST
from healthguard.manifests.registry import (
    MANIFEST_KINDS,
    MANIFEST_LABELS,
    MANIFEST_FILENAMES,
    ManifestKind,
    load_manifest,
    load_manifests,
    manifest_to_dict,
    write_default_manifests,
)
from healthguard.manifests.types import (
    LayerRule,
    ManifestBundle,
    RequiredFilter,
    RLSManifest,
    SoCManifest,
    TokenAllowlist,
)

__all__ = [
    "DEFAULT_RLS_MANIFEST",
    "DEFAULT_SOC_MANIFEST",
    "DEFAULT_TOKEN_ALLOWLIST",
    "MANIFEST_FILENAMES",
    "MANIFEST_KINDS",
    "MANIFEST_LABELS",
    "LayerRule",
    "ManifestBundle",
    "ManifestKind",
    "RLSManifest",
    "RequiredFilter",
    "SoCManifest",
    "TokenAllowlist",
    "load_manifest",
    "load_manifests",
    "manifest_to_dict",
    "write_default_manifests",
]
