"""
People API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from . import schemas, service
from .interfaces import PeopleRepository

router = APIRouter()


def get_repository(request: Request) -> PeopleRepository:
    return request.app.state.people_repository


@router.get("/people")
async def list_people(
    repository: PeopleRepository = Depends(get_repository),
) -> dict:
    return await service.list_people(repository)


@router.post("/people", status_code=status.HTTP_201_CREATED)
async def create_person(
    payload: schemas.PersonCreate,
    repository: PeopleRepository = Depends(get_repository),
) -> dict:
    return await service.create_person(repository, payload)


@router.get("/people/{person_uuid}")
async def get_person(
    person_uuid: str,
    repository: PeopleRepository = Depends(get_repository),
) -> dict:
    return await service.get_person(repository, person_uuid)


@router.put("/people/{person_uuid}")
async def update_person(
    person_uuid: str,
    payload: schemas.PersonUpdate,
    repository: PeopleRepository = Depends(get_repository),
) -> dict:
    return await service.update_person(repository, person_uuid, payload)


@router.delete("/people/{person_uuid}")
async def delete_person(
    person_uuid: str,
    repository: PeopleRepository = Depends(get_repository),
) -> dict:
    """
    Soft-delete a person. Unknown or already deleted uuids return an empty
    envelope with status 200.
    """
    return await service.delete_person(repository, person_uuid)
