"""
Rule-based medication suggestions for a submitted health record.

The mapping depends only on the diabetes type and, for Type 2, on the
blood sugar reading. Age and the self-reported medication list do not
affect the outcome.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from models.health_record_model import DiabetesType, HealthRecord

# mg/dL; both bounds are exclusive, so readings of exactly 70 or 130 are normal
HIGH_BLOOD_SUGAR = 130
LOW_BLOOD_SUGAR = 70


@dataclass
class Recommendation:
    diabetes_type: Optional[str]
    blood_sugar: float
    medications: List[str] = field(default_factory=list)
    advisory: str = ""


def suggest_treatment(diabetes_type: DiabetesType, blood_sugar: float):
    """Return (medications, advisory) for a classification and reading."""
    if diabetes_type is DiabetesType.TYPE_1:
        return ["Insulin therapy", "Glucose monitoring devices"], ""

    if diabetes_type is DiabetesType.TYPE_2:
        if blood_sugar > HIGH_BLOOD_SUGAR:
            return (
                ["Metformin", "SGLT2 inhibitors", "GLP-1 receptor agonists"],
                "Your blood sugar is high, consider reducing carbs and increasing physical activity.",
            )
        if blood_sugar < LOW_BLOOD_SUGAR:
            return (
                ["Glucose tablets", "Juice or fast-acting carbs"],
                "Your blood sugar is low, make sure to consume fast-acting carbohydrates.",
            )
        return (
            ["Continue with your prescribed medications"],
            "Your blood sugar is within normal range. Keep up the good work!",
        )

    if diabetes_type is DiabetesType.GESTATIONAL:
        return (
            ["Insulin therapy (if needed)", "Blood glucose monitoring"],
            "Maintain a balanced diet, monitor blood sugar closely, and consult your doctor regularly.",
        )

    # DiabetesType.OTHER
    return [], ""


def derive_recommendation(record: HealthRecord) -> Recommendation:
    medications, advisory = suggest_treatment(record.classification, record.blood_sugar)
    return Recommendation(
        diabetes_type=record.diabetes_type,
        blood_sugar=record.blood_sugar,
        medications=medications,
        advisory=advisory,
    )
