"""Tests for the accessibility gate."""

from healthguard.gates.a11y import check_accessibility
from healthguard.reasons import ReasonCode


def test_interactive_element_without_label_or_focus(make_context):
    ctx = make_context({"src/ui/Save.tsx": "<button onClick={save}>Save</button>\n"})

    messages = [v.message for v in check_accessibility(ctx)]

    assert len(messages) == 2
    assert "missing ARIA labels" in messages[0]
    assert "missing focus styles" in messages[1]


def test_labelled_focusable_element_passes(make_context):
    ctx = make_context({
        "src/ui/Save.tsx": '<button aria-label="Save" className="focus-visible:ring-2">Save</button>\n',
    })

    assert check_accessibility(ctx) == []


def test_touch_targets_below_44px(make_context):
    ctx = make_context({"src/ui/Row.tsx": '<div className="min-h-[32px]" /><div className="min-h-[44px]" />\n'})

    violations = check_accessibility(ctx)

    assert len(violations) == 1
    assert violations[0].code == ReasonCode.A11Y_FAIL
    assert "min-h-[32px]" in violations[0].message
    assert "min-h-[44px]" not in violations[0].message
