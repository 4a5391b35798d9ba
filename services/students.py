# services/students.py
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
import logging
import uuid

from errors import NotFoundError, StorageError, ValidationError
from models.student import EDITABLE_FIELDS, validate_student

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {"firstName", "lastName", "course", "yearLevel", "dateOfBirth", "createdAt", "updatedAt"}


def utcnow() -> datetime:
    # BSON dates keep millisecond precision
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class StudentGateway:
    """Storage of student records, with every write checked against the schema.

    Documents carry their own ``id`` (a UUID string); Mongo's ``_id`` never
    leaves this class.
    """
    collection_name = "students"

    def __init__(self, db):
        self.collection = db[self.collection_name]

    async def list_all(self, sort_by: Optional[str] = None, descending: bool = False) -> List[dict]:
        if sort_by is not None and sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                [{"field": "sortBy", "message": f"Must be one of {', '.join(sorted(SORTABLE_FIELDS))}"}]
            )
        direction = -1 if descending else 1
        sort = [(sort_by, direction), ("_id", 1)] if sort_by else [("_id", 1)]
        try:
            students = []
            for student in await self.collection.find({}, sort=sort).to_list(None):
                student.pop("_id", None)
                students.append(student)
            return students
        except PyMongoError as e:
            logger.error(f"Failed to list students: {str(e)}")
            raise StorageError(f"Failed to list students: {str(e)}")

    async def get(self, id: str) -> dict:
        student = await self._find(id)
        if student is None:
            raise NotFoundError(f"Student not found: {id}")
        return student

    async def create(self, data) -> dict:
        student = validate_student(data).model_dump()
        now = utcnow()
        student["id"] = str(uuid.uuid4())
        student["createdAt"] = now
        student["updatedAt"] = now
        try:
            await self.collection.insert_one(dict(student))
        except PyMongoError as e:
            logger.error(f"Failed to create student: {str(e)}")
            raise StorageError(f"Failed to create student: {str(e)}")
        logger.info(f"Created student {student['id']}")
        return student

    async def update(self, id: str, data) -> dict:
        if not isinstance(data, dict):
            raise ValidationError([{"field": "body", "message": "Input should be an object"}])
        existing = await self._find(id)
        if existing is None:
            raise NotFoundError(f"Student not found: {id}")

        merged = {field: existing.get(field) for field in EDITABLE_FIELDS}
        merged.update({k: v for k, v in data.items() if k in EDITABLE_FIELDS})
        changes = validate_student(merged).model_dump()
        # updatedAt must move forward even within the same millisecond
        changes["updatedAt"] = max(utcnow(), existing["updatedAt"] + timedelta(milliseconds=1))

        try:
            student = await self.collection.find_one_and_update(
                {"id": id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to update student {id}: {str(e)}")
            raise StorageError(f"Failed to update student: {str(e)}")
        if student is None:
            raise NotFoundError(f"Student not found: {id}")
        student.pop("_id", None)
        logger.info(f"Updated student {id}")
        return student

    async def delete(self, id: str) -> None:
        try:
            result = await self.collection.delete_one({"id": id})
        except PyMongoError as e:
            logger.error(f"Failed to delete student {id}: {str(e)}")
            raise StorageError(f"Failed to delete student: {str(e)}")
        if result.deleted_count == 0:
            raise NotFoundError(f"Student not found: {id}")
        logger.info(f"Deleted student {id}")

    async def _find(self, id: str) -> Optional[dict]:
        try:
            student = await self.collection.find_one({"id": id})
        except PyMongoError as e:
            logger.error(f"Failed to read student {id}: {str(e)}")
            raise StorageError(f"Failed to read student: {str(e)}")
        if student is not None:
            student.pop("_id", None)
        return student
