"""Memory-backed people repository.

Used for local development (`PEOPLE_STORE=memory`) and the test suite. Same
semantics as the SQL repository: soft deletes, server-assigned uuids and
insertion-ordered listing.
"""

from __future__ import annotations

import asyncio
import uuid
from typing import Any, Callable
from uuid import UUID

from core.db import QueryResult, StoreError

from .schemas import PERSON_FIELDS


class InMemoryPeopleRepository:
    def __init__(self, id_factory: Callable[[], UUID] = uuid.uuid4) -> None:
        self._lock = asyncio.Lock()
        self._records: dict[UUID, dict[str, Any]] = {}
        self._deleted: set[UUID] = set()
        self._new_id = id_factory

    def _row(self, person_uuid: UUID) -> dict[str, Any]:
        return {"uuid": str(person_uuid), **self._records[person_uuid]}

    def _is_present(self, person_uuid: UUID) -> bool:
        return person_uuid in self._records and person_uuid not in self._deleted

    async def list_people(self) -> QueryResult:
        async with self._lock:
            rows = [self._row(key) for key in self._records if key not in self._deleted]
        return QueryResult(rows=rows, row_count=len(rows), command="SELECT")

    async def create_person(self, fields: dict[str, Any]) -> QueryResult:
        async with self._lock:
            person_uuid = self._new_id()
            if person_uuid in self._records:
                raise StoreError(f"Duplicate person uuid generated: {person_uuid}")
            self._records[person_uuid] = {name: fields.get(name) for name in PERSON_FIELDS}
            row = self._row(person_uuid)
        return QueryResult(rows=[row], row_count=1, command="INSERT")

    async def get_person(self, person_uuid: UUID) -> QueryResult:
        async with self._lock:
            rows = [self._row(person_uuid)] if self._is_present(person_uuid) else []
        return QueryResult(rows=rows, row_count=len(rows), command="SELECT")

    async def update_person(self, person_uuid: UUID, fields: dict[str, Any]) -> QueryResult:
        async with self._lock:
            if not self._is_present(person_uuid):
                return QueryResult(command="UPDATE")
            record = self._records[person_uuid]
            for name in PERSON_FIELDS:
                if name in fields:
                    record[name] = fields[name]
            row = self._row(person_uuid)
        return QueryResult(rows=[row], row_count=1, command="UPDATE")

    async def delete_person(self, person_uuid: UUID) -> QueryResult:
        async with self._lock:
            if not self._is_present(person_uuid):
                return QueryResult(command="UPDATE")
            self._deleted.add(person_uuid)
            row = self._row(person_uuid)
        return QueryResult(rows=[row], row_count=1, command="UPDATE")
