import asyncio
import uuid

from core.db import QueryResult
from people.repository import PostgresPeopleRepository


class RecordingQuery:
    def __init__(self, result=None):
        self.calls = []
        self.result = result or QueryResult(command='SELECT')

    async def __call__(self, sql, *args):
        self.calls.append((' '.join(sql.split()), args))
        return self.result


PERSON_UUID = uuid.UUID('6f1c1a52-0a3f-4c8e-9a4b-2b8f0f4b3c11')


def test_list_filters_deleted_rows():
    q = RecordingQuery()
    asyncio.run(PostgresPeopleRepository(q).list_people())
    sql, args = q.calls[0]
    assert sql.startswith('SELECT uuid::text AS uuid, survived, pclass, name')
    assert 'WHERE deleted_at IS NULL' in sql
    assert args == ()


def test_create_uses_positional_placeholders_in_column_order():
    q = RecordingQuery()
    fields = {
        'fare': 7.25,
        'name': 'Braund, Mr. Owen Harris',
        'survived': 0,
        'pclass': 3,
        'sex': 'male',
        'age': 22,
        'siblings_spouses_abroad': 1,
        'parents_children_abroad': 0,
    }
    asyncio.run(PostgresPeopleRepository(q).create_person(fields))
    sql, args = q.calls[0]
    assert 'INSERT INTO people (survived, pclass, name, sex, age, siblings_spouses_abroad, parents_children_abroad, fare)' in sql
    assert 'VALUES ($1, $2, $3, $4, $5, $6, $7, $8)' in sql
    assert 'RETURNING uuid::text AS uuid' in sql
    assert args == (0, 3, 'Braund, Mr. Owen Harris', 'male', 22, 1, 0, 7.25)


def test_update_sets_only_supplied_columns():
    q = RecordingQuery()
    asyncio.run(PostgresPeopleRepository(q).update_person(PERSON_UUID, {'name': 'x', 'age': 3}))
    sql, args = q.calls[0]
    assert 'SET name = $2, age = $3, updated_at = now()' in sql
    assert 'WHERE uuid = $1 AND deleted_at IS NULL' in sql
    assert args == (PERSON_UUID, 'x', 3)


def test_update_ignores_unknown_columns():
    q = RecordingQuery()
    result = asyncio.run(PostgresPeopleRepository(q).update_person(PERSON_UUID, {'uuid': 'evil'}))
    assert q.calls == []
    assert result.rows == []


def test_delete_is_a_soft_delete_of_present_rows():
    q = RecordingQuery()
    asyncio.run(PostgresPeopleRepository(q).delete_person(PERSON_UUID))
    sql, args = q.calls[0]
    assert sql.startswith('UPDATE people SET deleted_at = now()')
    assert 'AND deleted_at IS NULL' in sql
    assert args == (PERSON_UUID,)


def test_get_passes_uuid_parameter():
    row = {'uuid': str(PERSON_UUID), 'name': 'x'}
    q = RecordingQuery(QueryResult(rows=[row], row_count=1, command='SELECT'))
    result = asyncio.run(PostgresPeopleRepository(q).get_person(PERSON_UUID))
    assert result.rows == [row]
    assert q.calls[0][1] == (PERSON_UUID,)
