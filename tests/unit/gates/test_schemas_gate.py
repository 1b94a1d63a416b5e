"""Tests for the schema-validation gate."""

from healthguard.gates.schemas import check_schema_validation
from healthguard.reasons import ReasonCode


def test_form_without_schema(make_context):
    ctx = make_context({"src/ui/IntakeForm.tsx": "const form = useForm({})\n"})

    violations = check_schema_validation(ctx)

    assert len(violations) == 1
    assert violations[0].code == ReasonCode.NO_ZOD_SCHEMA
    assert "Form validation" in violations[0].message


def test_form_with_zod_resolver(make_context):
    ctx = make_context({"src/ui/IntakeForm.tsx": "const form = useForm({ resolver: zodResolver(Intake) })\n"})

    assert check_schema_validation(ctx) == []


def test_mutating_handler_without_parse(make_context):
    ctx = make_context({
        "src/app/api/intake/route.ts": "export async function POST(req) {\n  const body = await req.json()\n}\n",
    })

    violations = check_schema_validation(ctx)

    assert len(violations) == 1
    assert "API endpoint" in violations[0].message


def test_mutating_handler_with_parse(make_context):
    ctx = make_context({
        "src/app/api/intake/route.ts": (
            "export async function PUT(req) {\n  const body = IntakeSchema.parse(await req.json())\n}\n"
        ),
    })

    assert check_schema_validation(ctx) == []
