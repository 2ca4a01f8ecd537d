"""
People persistence (raw SQL).

Deletes are soft: `deleted_at` is set and every other query filters on
`deleted_at IS NULL`, so a uuid is never handed out or matched again.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable
from uuid import UUID

from core import db
from core.db import QueryResult

from .schemas import PERSON_FIELDS

RunQuery = Callable[..., Awaitable[QueryResult]]

RETURNING_COLUMNS = "uuid::text AS uuid, " + ", ".join(PERSON_FIELDS)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS people (
    uuid uuid PRIMARY KEY DEFAULT gen_random_uuid(),
    survived integer NOT NULL,
    pclass integer NOT NULL,
    name text NOT NULL,
    sex text NOT NULL,
    age double precision NOT NULL,
    siblings_spouses_abroad integer NOT NULL,
    parents_children_abroad integer NOT NULL,
    fare double precision NOT NULL,
    created_at timestamptz NOT NULL DEFAULT now(),
    updated_at timestamptz NOT NULL DEFAULT now(),
    deleted_at timestamptz
);

CREATE INDEX IF NOT EXISTS people_present_created_at_idx
    ON people (created_at)
    WHERE deleted_at IS NULL;
"""


async def ensure_schema() -> None:
    await db.execute(SCHEMA_SQL)


def _column_values(fields: dict[str, Any]) -> tuple[list[str], list[Any]]:
    # Column names only ever come from PERSON_FIELDS, never from the request.
    columns = [name for name in PERSON_FIELDS if name in fields]
    return columns, [fields[name] for name in columns]


class PostgresPeopleRepository:
    def __init__(self, run_query: RunQuery | None = None) -> None:
        self._query = run_query or db.query

    async def list_people(self) -> QueryResult:
        return await self._query(
            f"""
            SELECT {RETURNING_COLUMNS}
            FROM people
            WHERE deleted_at IS NULL
            ORDER BY created_at ASC, uuid ASC
            """
        )

    async def create_person(self, fields: dict[str, Any]) -> QueryResult:
        columns, values = _column_values(fields)
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        return await self._query(
            f"""
            INSERT INTO people ({", ".join(columns)})
            VALUES ({placeholders})
            RETURNING {RETURNING_COLUMNS}
            """,
            *values,
        )

    async def get_person(self, person_uuid: UUID) -> QueryResult:
        return await self._query(
            f"""
            SELECT {RETURNING_COLUMNS}
            FROM people
            WHERE uuid = $1
              AND deleted_at IS NULL
            """,
            person_uuid,
        )

    async def update_person(self, person_uuid: UUID, fields: dict[str, Any]) -> QueryResult:
        columns, values = _column_values(fields)
        if not columns:
            return QueryResult(command="UPDATE")
        assignments = ", ".join(f"{name} = ${i}" for i, name in enumerate(columns, start=2))
        return await self._query(
            f"""
            UPDATE people
            SET {assignments},
                updated_at = now()
            WHERE uuid = $1
              AND deleted_at IS NULL
            RETURNING {RETURNING_COLUMNS}
            """,
            person_uuid,
            *values,
        )

    async def delete_person(self, person_uuid: UUID) -> QueryResult:
        return await self._query(
            f"""
            UPDATE people
            SET deleted_at = now()
            WHERE uuid = $1
              AND deleted_at IS NULL
            RETURNING {RETURNING_COLUMNS}
            """,
            person_uuid,
        )
