from __future__ import annotations

from typing import Any, Protocol
from uuid import UUID

from core.db import QueryResult


class PeopleRepository(Protocol):
    """Data access for person records.

    Every method returns a `QueryResult`; an empty `rows` list means no
    present record matched. Implementations assign the uuid on create and
    never return soft-deleted records.
    """

    async def list_people(self) -> QueryResult:
        ...

    async def create_person(self, fields: dict[str, Any]) -> QueryResult:
        ...

    async def get_person(self, person_uuid: UUID) -> QueryResult:
        ...

    async def update_person(self, person_uuid: UUID, fields: dict[str, Any]) -> QueryResult:
        ...

    async def delete_person(self, person_uuid: UUID) -> QueryResult:
        ...
