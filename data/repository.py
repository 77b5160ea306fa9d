"""MongoDB-Repository für Schülerdatensätze (pymongo).

Alle Lesewege laufen über ``document_to_student``, alle Schreibwege über
``student_to_document``. Fehler des Treibers (Verbindung, Timeout) werden als
``StoreUnavailableError`` gemeldet und nicht automatisch wiederholt.
"""

import logging
import re
from typing import Any, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from config.schema import DatabaseConfig
from data.document_mapper import (
    DocumentDecodeError,
    document_to_student,
    student_to_document,
)
from models.student import Student

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Basisklasse aller Repository-Fehler."""


class DuplicateStudentError(RepositoryError):
    """Ein Datensatz mit dieser ID existiert bereits."""

    def __init__(self, student_id: str):
        super().__init__(f"A student with ID {student_id} already exists")
        self.student_id = student_id


class StudentNotFoundError(RepositoryError):
    """Kein Datensatz mit dieser ID vorhanden."""

    def __init__(self, student_id: str):
        super().__init__(f"No student found with ID {student_id}")
        self.student_id = student_id


class StoreUnavailableError(RepositoryError):
    """Datenbank nicht erreichbar, Timeout oder sonstiger Treiberfehler."""


class StudentRepository:
    """CRUD-Operationen auf der Schüler-Collection.

    Die Collection wird injiziert; ``from_config`` baut sie aus der
    Konfiguration inklusive Timeouts auf.
    """

    def __init__(self, collection: Collection, client: Optional[MongoClient] = None):
        self.collection = collection
        self._client = client

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> "StudentRepository":
        """Erzeugt Client und Collection. Der Timeout gilt pro Anfrage."""
        client = MongoClient(
            config.connection_string,
            serverSelectionTimeoutMS=config.timeout_ms,
            connectTimeoutMS=config.timeout_ms,
            socketTimeoutMS=config.timeout_ms,
        )
        collection = client[config.database_name][config.collection_name]
        return cls(collection, client=client)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "StudentRepository":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ─── Hilfen ───

    def _run(self, action: str, operation, *args, **kwargs) -> Any:
        """Führt eine Treiber-Operation aus und übersetzt Treiberfehler."""
        try:
            return operation(*args, **kwargs)
        except PyMongoError as e:
            logger.error(f"MongoDB-Operation fehlgeschlagen ({action}): {e}")
            raise StoreUnavailableError(f"{action} failed: {e}") from e

    def _decode_all(self, documents) -> list[Student]:
        """Dekodiert eine Ergebnisliste; strukturell kaputte Dokumente entfallen."""
        students = []
        for doc in documents:
            try:
                students.append(document_to_student(doc))
            except DocumentDecodeError as e:
                logger.warning(f"Dokument übersprungen: {e}")
        return students

    def _find(self, action: str, query: dict) -> list:
        return self._run(action, lambda: list(self.collection.find(query)))

    def _exists(self, student_id: str) -> bool:
        doc = self._run(
            f"check student {student_id}", self.collection.find_one, {"id": student_id}
        )
        return doc is not None

    # ─── Verwaltung ───

    def ensure_collection(self) -> bool:
        """Legt die Collection an, falls sie fehlt. True wenn neu angelegt."""
        db = self.collection.database
        names = self._run("list collections", db.list_collection_names)
        if self.collection.name in names:
            return False
        self._run("create collection", db.create_collection, self.collection.name)
        logger.info(f"Collection angelegt: {self.collection.name}")
        return True

    # ─── CRUD ───

    def create_student(self, student: Student) -> None:
        """Legt einen neuen Datensatz an.

        Raises:
            DuplicateStudentError: wenn die ID bereits vergeben ist.
            StoreUnavailableError: bei Treiberfehlern.
        """
        if self._exists(student.id):
            raise DuplicateStudentError(student.id)
        self._run(
            "insert student", self.collection.insert_one, student_to_document(student)
        )
        logger.info(f"Datensatz angelegt: {student.id}")

    def get_student_by_id(self, student_id: str) -> Optional[Student]:
        """Datensatz zur ID oder None."""
        docs = self._find(f"get student {student_id}", {"id": student_id})
        if not docs:
            return None
        try:
            return document_to_student(docs[0])
        except DocumentDecodeError as e:
            logger.warning(f"Datensatz {student_id} nicht lesbar: {e}")
            return None

    def search_by_name(
        self,
        text: str,
        case_insensitive: bool = True,
        prefix_only: bool = False,
    ) -> list[Student]:
        """Sucht nach Namen, die ``text`` enthalten (oder damit beginnen).

        Der Suchtext wird als Literal behandelt, nicht als regulärer Ausdruck.
        """
        pattern = re.escape(text)
        if prefix_only:
            pattern = "^" + pattern
        query: dict = {"name": {"$regex": pattern}}
        if case_insensitive:
            query["name"]["$options"] = "i"
        return self._decode_all(self._find(f"search students '{text}'", query))

    def get_all(self) -> list[Student]:
        return self._decode_all(self._find("get all students", {}))

    def update_student(self, student_id: str, student: Student) -> None:
        """Ersetzt den Datensatz mit ``student_id`` vollständig.

        Ändert sich dabei die ID, darf die neue ID noch nicht vergeben sein.

        Raises:
            StudentNotFoundError: wenn kein Datensatz mit der ID existiert.
            DuplicateStudentError: wenn die neue ID einem anderen Datensatz gehört.
        """
        if not self._exists(student_id):
            raise StudentNotFoundError(student_id)
        if student.id != student_id and self._exists(student.id):
            raise DuplicateStudentError(student.id)
        result = self._run(
            f"update student {student_id}",
            self.collection.replace_one,
            {"id": student_id},
            student_to_document(student),
        )
        if result.matched_count == 0:
            raise StudentNotFoundError(student_id)
        logger.info(f"Datensatz aktualisiert: {student_id}")

    def delete_student(self, student_id: str) -> None:
        """Löscht den Datensatz mit ``student_id``.

        Raises:
            StudentNotFoundError: wenn kein Datensatz mit der ID existiert.
        """
        if not self._exists(student_id):
            raise StudentNotFoundError(student_id)
        result = self._run(
            f"delete student {student_id}",
            self.collection.delete_one,
            {"id": student_id},
        )
        if result.deleted_count == 0:
            raise StudentNotFoundError(student_id)
        logger.info(f"Datensatz gelöscht: {student_id}")
