"""Built-in manifests used when no custom file is present."""

from healthguard.manifests.types import LayerRule, RequiredFilter, RLSManifest, SoCManifest, TokenAllowlist

DEFAULT_SOC_MANIFEST = SoCManifest(
    layers={
        "ui": LayerRule(
            allowed_imports=("@/modules/*/application", "@/shared/ui", "@/lib/ui"),
            forbidden_imports=("@/modules/*/domain", "@/modules/*/infrastructure"),
            description="UI components can only import from Application layer and shared UI",
        ),
        "application": LayerRule(
            allowed_imports=("@/modules/*/domain", "@/shared/application", "@/lib/validation"),
            forbidden_imports=("@/modules/*/infrastructure", "@/modules/*/ui"),
            description="Application layer coordinates between UI and Domain",
        ),
        "domain": LayerRule(
            allowed_imports=("@/shared/domain", "@/lib/types"),
            forbidden_imports=(
                "@/modules/*/infrastructure",
                "@/modules/*/application",
                "@/modules/*/ui",
            ),
            description="Domain layer contains pure business logic",
        ),
        "infrastructure": LayerRule(
            allowed_imports=("@/modules/*/domain", "@/shared/infrastructure", "@/lib/database"),
            forbidden_imports=("@/modules/*/ui", "@/modules/*/application"),
            description="Infrastructure implements domain contracts",
        ),
    }
)

DEFAULT_RLS_MANIFEST = RLSManifest(
    required_filters={
        "organization_id": RequiredFilter(
            tables=("patients", "appointments", "notes", "assessments", "treatments"),
            description="All clinical data must be filtered by organization",
        ),
        "provider_id": RequiredFilter(
            tables=("notes", "assessments", "treatments"),
            description="Provider-specific data requires provider filtering",
        ),
    },
    protected_entities=(
        "patients",
        "appointments",
        "notes",
        "assessments",
        "treatments",
        "medications",
        "allergies",
        "diagnoses",
        "vitals",
        "documents",
    ),
    exempt_markers=("system_audit", "migration", "backup", "analytics_aggregation"),
)

DEFAULT_TOKEN_ALLOWLIST = TokenAllowlist(
    colors=(
        "primary", "secondary", "tertiary",
        "success", "warning", "critical", "info",
        "surface", "background", "foreground",
        "muted", "accent", "destructive",
        "clinical-primary", "clinical-secondary",
        "patient-data", "provider-action",
        "emergency", "routine", "urgent",
    ),
    spacing=(
        "xs", "sm", "md", "lg", "xl", "2xl", "3xl",
        "clinical-touch", "form-spacing", "card-padding",
    ),
    allowed_numeric=(1, 2, 3, 4, 6, 8, 12, 16, 20, 24, 32, 44, 48, 64),
)
