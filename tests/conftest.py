"""Shared fixtures: an app wired to a fresh in-memory repository per test."""
import pytest
from fastapi.testclient import TestClient

from main import create_app
from people.memory import InMemoryPeopleRepository


@pytest.fixture
def repository():
    return InMemoryPeopleRepository()


@pytest.fixture
def client(repository):
    app = create_app(repository=repository)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_person():
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        payload = {
            'survived': 1,
            'pclass': 3,
            'name': f"person-{counter['n']}",
            'sex': 'male',
            'age': 30,
            'siblings_spouses_abroad': 0,
            'parents_children_abroad': 0,
            'fare': 7.25,
        }
        payload.update(overrides)
        return payload

    return _make
