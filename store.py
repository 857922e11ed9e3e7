import httpx
from postgrest.exceptions import APIError
from supabase import create_client, Client
from typing import Optional

from exceptions import ConfigurationError, StoreError
from logging_config import get_logger
from models.person_model import Person, PERSONS_TABLE
from models.health_record_model import HealthRecord, HEALTH_RECORDS_TABLE

logger = get_logger(__name__)


class SupabaseRecordStore:
    """Persons and health records kept in two Supabase tables."""

    def __init__(self, client: Client):
        self.client = client

    def _execute(self, table, query):
        try:
            return query.execute()
        except (APIError, httpx.HTTPError) as e:
            raise StoreError(f"Supabase request on '{table}' failed: {e}", table=table) from e

    def _first(self, table, query) -> Optional[dict]:
        rows = self._execute(table, query).data
        return rows[0] if rows else None

    def find_person_by_phone(self, phone: str) -> Optional[Person]:
        row = self._first(
            PERSONS_TABLE,
            self.client.table(PERSONS_TABLE).select("*").eq("phone", phone).limit(1),
        )
        return Person.from_row(row) if row else None

    def get_person(self, person_id: str) -> Optional[Person]:
        row = self._first(
            PERSONS_TABLE,
            self.client.table(PERSONS_TABLE).select("*").eq("id", person_id).limit(1),
        )
        return Person.from_row(row) if row else None

    def create_person(self, name: str, phone: str) -> Person:
        row = self._first(
            PERSONS_TABLE,
            self.client.table(PERSONS_TABLE).insert({"name": name, "phone": phone}),
        )
        if row is None:
            raise StoreError("Insert returned no row", table=PERSONS_TABLE)
        return Person.from_row(row)

    def create_health_record(self, record: HealthRecord) -> HealthRecord:
        row = self._first(
            HEALTH_RECORDS_TABLE,
            self.client.table(HEALTH_RECORDS_TABLE).insert(record.to_row()),
        )
        if row is None:
            raise StoreError("Insert returned no row", table=HEALTH_RECORDS_TABLE)
        return HealthRecord.from_row(row)

    def get_health_record(self, record_id: str) -> Optional[HealthRecord]:
        row = self._first(
            HEALTH_RECORDS_TABLE,
            self.client.table(HEALTH_RECORDS_TABLE).select("*").eq("id", record_id).limit(1),
        )
        return HealthRecord.from_row(row) if row else None


def create_store(url: Optional[str], key: Optional[str]) -> SupabaseRecordStore:
    """Build the Supabase-backed store from the project URL and API key."""
    if not url:
        raise ConfigurationError("SUPABASE_URL is not set", setting="SUPABASE_URL")
    if not key:
        raise ConfigurationError("SUPABASE_KEY is not set", setting="SUPABASE_KEY")

    client = create_client(url, key)
    logger.info("Supabase client initialized for %s", url)
    return SupabaseRecordStore(client)
