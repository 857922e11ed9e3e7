import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from exceptions import HealthDataError

HEALTH_RECORDS_TABLE = "health_records"


class DiabetesType(Enum):
    TYPE_1 = "Type 1"
    TYPE_2 = "Type 2"
    GESTATIONAL = "Gestational"
    OTHER = "Other"

    @classmethod
    def parse(cls, label: Optional[str]) -> "DiabetesType":
        """Map a raw form label to a known type; anything unrecognised is OTHER."""
        for member in (cls.TYPE_1, cls.TYPE_2, cls.GESTATIONAL):
            if label == member.value:
                return member
        return cls.OTHER


@dataclass(frozen=True)
class HealthRecord:
    diabetes_type: Optional[str]
    blood_sugar: float
    age: int
    medications: List[str] = field(default_factory=list)
    person_id: Optional[str] = None
    id: Optional[str] = None

    @property
    def classification(self) -> DiabetesType:
        return DiabetesType.parse(self.diabetes_type)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "HealthRecord":
        person_id = row.get("person_id")
        return cls(
            id=str(row["id"]),
            person_id=str(person_id) if person_id is not None else None,
            diabetes_type=row.get("diabetes_type"),
            blood_sugar=float(row["blood_sugar"]),
            age=int(row["age"]),
            medications=list(row.get("medications") or []),
        )

    def to_row(self) -> Dict[str, Any]:
        return {
            "person_id": self.person_id,
            "diabetes_type": self.diabetes_type,
            "blood_sugar": self.blood_sugar,
            "age": self.age,
            "medications": list(self.medications),
        }


def split_medications(raw: Optional[str]) -> List[str]:
    """Split a comma-separated medication list, dropping blank entries."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _to_number(value, name, cast):
    try:
        number = cast(str(value).strip())
    except (TypeError, ValueError):
        raise HealthDataError(f"{name} must be a number, got {value!r}", field=name)
    if not math.isfinite(number):
        raise HealthDataError(f"{name} must be a finite number, got {value!r}", field=name)
    return number


def parse_health_form(form: Mapping[str, Any], person_id: Optional[str]) -> HealthRecord:
    """
    Build a HealthRecord from the dashboard form fields.

    Expects `diabetesType`, `bloodSugar`, `age` and a comma-separated
    `medications` string. Raises HealthDataError when a numeric field
    cannot be parsed.
    """
    blood_sugar = _to_number(form.get("bloodSugar"), "bloodSugar", float)
    age_value = _to_number(form.get("age"), "age", float)
    if not age_value.is_integer():
        raise HealthDataError(f"age must be a whole number, got {form.get('age')!r}", field="age")

    return HealthRecord(
        person_id=person_id or None,
        diabetes_type=form.get("diabetesType"),
        blood_sugar=blood_sugar,
        age=int(age_value),
        medications=split_medications(form.get("medications")),
    )
