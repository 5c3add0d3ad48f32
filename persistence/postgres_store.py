import logging
from typing import Dict, Optional

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from config.postgres import PostgresConfig
from persistence.store import InsertResult, RegistrationStore, StoreError

logger = logging.getLogger(__name__)


class PostgresRegistrationStore(RegistrationStore):
    """Inserts rows straight into Postgres, for deployments without the REST layer."""

    def __init__(self, pg: PostgresConfig, table: str = "registration_requests"):
        self.pg = pg
        self.table = table

    def _insert_query(self, columns) -> sql.Composed:
        return sql.SQL("INSERT INTO {table} ({cols}) VALUES ({vals}) RETURNING *").format(
            table=sql.Identifier(self.table),
            cols=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            vals=sql.SQL(", ").join(sql.Placeholder() for _ in columns),
        )

    async def insert(self, record: Dict[str, str]) -> InsertResult:
        columns = list(record.keys())
        query = self._insert_query(columns)

        conn = await psycopg.AsyncConnection.connect(**self.pg.connect_kwargs(), autocommit=True)
        try:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(query, [record[c] for c in columns])
                rows = await cur.fetchall()
        except psycopg.OperationalError:
            raise
        except psycopg.Error as e:
            error = self._to_store_error(e)
            logger.error("Insert into %s rejected: %s", self.table, error)
            return InsertResult(error=error)
        finally:
            await conn.close()

        return InsertResult(rows=[dict(r) for r in rows])

    @staticmethod
    def _to_store_error(e: psycopg.Error) -> StoreError:
        diag = e.diag
        message: Optional[str] = diag.message_primary if diag else None
        return StoreError(
            message=message or str(e),
            code=e.sqlstate,
            details=diag.message_detail if diag else None,
            hint=diag.message_hint if diag else None,
        )
