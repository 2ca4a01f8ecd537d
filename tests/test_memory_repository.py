import asyncio
import uuid

import pytest

from core.db import StoreError
from people.memory import InMemoryPeopleRepository

FIELDS = {
    'survived': 0,
    'pclass': 1,
    'name': 'Cumings, Mrs. John Bradley',
    'sex': 'female',
    'age': 38,
    'siblings_spouses_abroad': 1,
    'parents_children_abroad': 0,
    'fare': 71.2833,
}


def test_memory_repository_lifecycle():
    async def scenario():
        repo = InMemoryPeopleRepository()
        created = await repo.create_person(FIELDS)
        assert created.row_count == 1
        person_uuid = uuid.UUID(created.rows[0]['uuid'])

        fetched = await repo.get_person(person_uuid)
        assert fetched.rows == created.rows

        updated = await repo.update_person(person_uuid, {'name': 'renamed'})
        assert updated.rows[0]['name'] == 'renamed'
        assert updated.rows[0]['uuid'] == str(person_uuid)

        deleted = await repo.delete_person(person_uuid)
        assert deleted.row_count == 1

        assert (await repo.get_person(person_uuid)).rows == []
        assert (await repo.update_person(person_uuid, {'name': 'x'})).rows == []
        again = await repo.delete_person(person_uuid)
        assert again.row_count == 0
        assert (await repo.list_people()).rows == []

    asyncio.run(scenario())


def test_memory_repository_returns_copies():
    async def scenario():
        repo = InMemoryPeopleRepository()
        created = await repo.create_person(FIELDS)
        created.rows[0]['name'] = 'mutated'
        listed = await repo.list_people()
        assert listed.rows[0]['name'] == FIELDS['name']

    asyncio.run(scenario())


def test_memory_repository_never_reuses_uuid():
    fixed = uuid.UUID('12345678-1234-5678-1234-567812345678')

    async def scenario():
        repo = InMemoryPeopleRepository(id_factory=lambda: fixed)
        await repo.create_person(FIELDS)
        await repo.delete_person(fixed)
        with pytest.raises(StoreError):
            await repo.create_person(FIELDS)

    asyncio.run(scenario())


def test_memory_repository_concurrent_creates():
    async def scenario():
        repo = InMemoryPeopleRepository()
        results = await asyncio.gather(*(repo.create_person(FIELDS) for _ in range(20)))
        assert len({r.rows[0]['uuid'] for r in results}) == 20
        assert (await repo.list_people()).row_count == 20

    asyncio.run(scenario())
