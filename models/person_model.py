from dataclasses import dataclass
from typing import Any, Dict

PERSONS_TABLE = "persons"


@dataclass(frozen=True)
class Person:
    id: str
    name: str
    phone: str

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Person":
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            phone=row["phone"],
        )
