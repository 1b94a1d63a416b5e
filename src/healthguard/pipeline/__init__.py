"""Gate pipeline: violation model, collection, and the ordered runner.

The runner lives in ``healthguard.pipeline.runner``; it is not re-exported
here because it imports every gate, and the gates import these types.
"""

from healthguard.pipeline.collector import ViolationCollector, group_by_code
from healthguard.pipeline.types import GateContext, GateOutcome, GateSpec, ValidationRun, Violation, make_violation

__all__ = [
    "GateContext",
    "GateOutcome",
    "GateSpec",
    "ValidationRun",
    "Violation",
    "ViolationCollector",
    "group_by_code",
    "make_violation",
]
