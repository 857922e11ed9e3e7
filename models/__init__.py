from .person_model import Person, PERSONS_TABLE
from .health_record_model import (
    DiabetesType,
    HealthRecord,
    HEALTH_RECORDS_TABLE,
    parse_health_form,
    split_medications,
)

__all__ = [
    "Person",
    "PERSONS_TABLE",
    "DiabetesType",
    "HealthRecord",
    "HEALTH_RECORDS_TABLE",
    "parse_health_form",
    "split_medications",
]
