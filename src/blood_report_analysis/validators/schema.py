# ============================================================================
# src/blood_report_analysis/validators/schema.py
# ============================================================================
"""
AnalysisResult schema.

The shape the provider is asked to return (see providers/prompts.py).
Both files must change together.

Strings are strict (no number-to-string coercion), enumerations are
closed, unknown extra keys are ignored.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator


Priority = Literal["high", "medium", "low"]
HealthStatus = Literal["good", "attention", "concern"]

PRIORITIES = ("high", "medium", "low")
HEALTH_STATUSES = ("good", "attention", "concern")


def reject_explicit_null(value: Any) -> Any:
    # Optional fields may be omitted, but a present value must be a string
    if value is None:
        raise ValueError("Input should be a valid string")
    return value


class Supplement(BaseModel):
    """A supplement recommendation."""
    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    reason: StrictStr
    dosage: Optional[StrictStr] = None
    priority: Priority

    @field_validator("dosage", mode="before")
    @classmethod
    def dosage_not_null(cls, value: Any) -> Any:
        return reject_explicit_null(value)


class AnalysisResult(BaseModel):
    """Validated structured summary of a blood report."""
    model_config = ConfigDict(extra="ignore")

    bloodType: Optional[StrictStr] = None
    keyFindings: List[StrictStr]
    supplements: List[Supplement]
    healthStatus: HealthStatus
    summary: StrictStr

    @field_validator("bloodType", mode="before")
    @classmethod
    def blood_type_not_null(cls, value: Any) -> Any:
        return reject_explicit_null(value)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with exactly the fields that were supplied."""
        return self.model_dump(exclude_unset=True)
