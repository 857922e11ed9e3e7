"""
Pytest Configuration and Fixtures

Shared fixtures for the portal tests: an in-memory record store with the
same interface as SupabaseRecordStore, and a Flask app wired to it.
"""
import itertools
import sys
from dataclasses import replace
from pathlib import Path
from typing import Dict, Optional

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app import create_app
from config import TestConfig
from exceptions import StoreError
from models.health_record_model import HealthRecord
from models.person_model import Person


class InMemoryRecordStore:
    """Dictionary-backed stand-in for SupabaseRecordStore."""

    def __init__(self):
        self.persons: Dict[str, Person] = {}
        self.health_records: Dict[str, HealthRecord] = {}
        self._ids = itertools.count(1)
        self.fail_with: Optional[StoreError] = None

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def find_person_by_phone(self, phone: str) -> Optional[Person]:
        self._check()
        return next((p for p in self.persons.values() if p.phone == phone), None)

    def get_person(self, person_id: str) -> Optional[Person]:
        self._check()
        return self.persons.get(person_id)

    def create_person(self, name: str, phone: str) -> Person:
        self._check()
        if self.find_person_by_phone(phone):
            raise StoreError("duplicate key value violates unique constraint", table="persons")
        person = Person(id=str(next(self._ids)), name=name, phone=phone)
        self.persons[person.id] = person
        return person

    def create_health_record(self, record: HealthRecord) -> HealthRecord:
        self._check()
        saved = replace(record, id=str(next(self._ids)))
        self.health_records[saved.id] = saved
        return saved

    def get_health_record(self, record_id: str) -> Optional[HealthRecord]:
        self._check()
        return self.health_records.get(record_id)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def app(store):
    return create_app(TestConfig, store=store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registered_person(store) -> Person:
    return store.create_person("Alice", "555-0100")
