"""Gemeinsame Fixtures: In-Memory-Ersatz für eine MongoDB-Collection."""

import copy
import re
from types import SimpleNamespace

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from data.repository import StudentRepository
from data.sample_data import sample_students


class FakeDatabase:
    def __init__(self):
        self.collections: set[str] = set()
        self.fail = False

    def list_collection_names(self):
        if self.fail:
            raise ServerSelectionTimeoutError("localhost:27017: timed out")
        return sorted(self.collections)

    def create_collection(self, name):
        self.collections.add(name)


class FakeCollection:
    """Unterstützt genau die Abfragen, die das Repository stellt."""

    def __init__(self, name: str = "students"):
        self.name = name
        self.database = FakeDatabase()
        self.documents: list = []
        self.fail = False

    def _check(self):
        if self.fail:
            raise ServerSelectionTimeoutError("localhost:27017: timed out")

    @staticmethod
    def _matches(doc, query: dict) -> bool:
        for key, cond in query.items():
            if not isinstance(doc, dict) or key not in doc:
                return False
            if isinstance(cond, dict) and "$regex" in cond:
                flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
                if not isinstance(doc[key], str):
                    return False
                if re.search(cond["$regex"], doc[key], flags) is None:
                    return False
            elif doc[key] != cond:
                return False
        return True

    def find(self, query=None):
        self._check()
        return iter([
            copy.deepcopy(d) for d in self.documents if self._matches(d, query or {})
        ])

    def find_one(self, query=None):
        return next(self.find(query), None)

    def insert_one(self, doc):
        self._check()
        self.documents.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=len(self.documents))

    def replace_one(self, query, doc):
        self._check()
        for i, existing in enumerate(self.documents):
            if self._matches(existing, query):
                self.documents[i] = copy.deepcopy(doc)
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def delete_one(self, query):
        self._check()
        for i, existing in enumerate(self.documents):
            if self._matches(existing, query):
                del self.documents[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


@pytest.fixture
def collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def repository(collection) -> StudentRepository:
    return StudentRepository(collection)


@pytest.fixture
def seeded_repository(repository) -> StudentRepository:
    for student in sample_students():
        repository.create_student(student)
    return repository
