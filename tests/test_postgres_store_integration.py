import os
import uuid

import psycopg
import pytest

from config.postgres import PostgresConfig
from persistence.postgres_store import PostgresRegistrationStore

pytestmark = pytest.mark.skipif(not os.getenv("PG_HOST"), reason="PG_HOST not set")

TABLE = "registration_requests_pytest"


@pytest.fixture()
def pg():
    pg = PostgresConfig.from_env()

    conn = psycopg.connect(**pg.connect_kwargs())
    conn.autocommit = True
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {TABLE} (
            id BIGSERIAL PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            phone TEXT NOT NULL,
            organization TEXT NOT NULL,
            country TEXT NOT NULL,
            city TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """
    )
    yield pg
    conn.execute(f"DROP TABLE IF EXISTS {TABLE}")
    conn.close()


@pytest.mark.asyncio
async def test_insert_returns_row_and_duplicate_returns_sqlstate(pg, payload):
    store = PostgresRegistrationStore(pg, table=TABLE)
    record = dict(payload.to_record(), email=f"{uuid.uuid4().hex}@example.com")

    first = await store.insert(record)
    assert first.ok
    assert first.rows[0]["email"] == record["email"]
    assert first.rows[0]["id"] > 0

    second = await store.insert(record)
    assert not second.ok
    assert second.error.code == "23505"
    assert "duplicate" in second.error.message
