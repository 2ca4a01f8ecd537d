"""
People business logic.

Turns repository results into response envelopes and maps missing records
to HTTP errors. Policy:
- read/update of an unknown, deleted or unparseable uuid -> 404
- delete of such a uuid -> 200 with an empty envelope (idempotent)
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status

from core.db import QueryResult, StoreError

from . import schemas
from .interfaces import PeopleRepository

logger = logging.getLogger(__name__)

NOT_FOUND_DETAIL = "Person not found."


def parse_person_uuid(raw: str) -> UUID | None:
    try:
        return UUID((raw or "").strip())
    except ValueError:
        return None


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)


async def list_people(repository: PeopleRepository) -> dict:
    result = await repository.list_people()
    return result.as_envelope()


async def create_person(repository: PeopleRepository, payload: schemas.PersonCreate) -> dict:
    result = await repository.create_person(payload.model_dump())
    if not result.rows:
        raise StoreError("Insert returned no row.")
    logger.info("person_created uuid=%s", result.rows[0]["uuid"])
    return result.as_envelope()


async def get_person(repository: PeopleRepository, raw_uuid: str) -> dict:
    person_uuid = parse_person_uuid(raw_uuid)
    if person_uuid is None:
        raise _not_found()

    result = await repository.get_person(person_uuid)
    if not result.rows:
        raise _not_found()
    return result.as_envelope()


async def update_person(
    repository: PeopleRepository,
    raw_uuid: str,
    payload: schemas.PersonUpdate,
) -> dict:
    person_uuid = parse_person_uuid(raw_uuid)
    if person_uuid is None:
        raise _not_found()

    changes = payload.changes()
    result = await repository.update_person(person_uuid, changes)
    if not result.rows:
        raise _not_found()
    logger.info("person_updated uuid=%s fields=%s", person_uuid, ",".join(sorted(changes)))
    return result.as_envelope()


async def delete_person(repository: PeopleRepository, raw_uuid: str) -> dict:
    person_uuid = parse_person_uuid(raw_uuid)
    if person_uuid is None:
        logger.debug("person_delete_skipped raw_uuid=%r", raw_uuid)
        return QueryResult(command="UPDATE").as_envelope()

    result = await repository.delete_person(person_uuid)
    if result.rows:
        logger.info("person_deleted uuid=%s", person_uuid)
    return result.as_envelope()
