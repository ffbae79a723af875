"""
Users API - User Service (CRUD over the users collection)
=========================================================

What:  One method per CRUD operation, each issuing exactly one driver call.
Why:   Keeps MongoDB query construction and error translation out of routes.
How:   Receives the users collection for each call, builds the query,
       awaits the driver, and converts the outcome into schemas or
       application exceptions.
Who:   Called by route handlers in routes/users.py.

Operation → driver call:
    list_users   → find({}).to_list()
    create_user  → insert_one(document)
    update_user  → find_one_and_update({_id}, {$set}, AFTER)
    delete_user  → find_one_and_delete({_id})

Design Decision:
    UserService is stateless: the collection is passed in by the caller
    (injected into routes via FastAPI's Depends). Tests hand it a fake.
    No operation touches more than one document, so there is no
    transactional wrapping and no compensation on failure.
"""

import logging
from typing import Any, Dict, List

from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from users_api.exceptions import DatabaseError, NotFoundError, ValidationError
from users_api.models.user import UserDocument
from users_api.schemas.user import (
    InsertResult,
    UserCreate,
    UserResponse,
    UserUpdate,
)

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "record deleted"


def parse_object_id(user_id: str) -> ObjectId:
    """
    Convert a path identifier into a bson ObjectId.

    Runs before any driver call, so a malformed id never reaches MongoDB.

    Raises:
        ValidationError: `user_id` is not a 24-character hex string.
    """
    if not ObjectId.is_valid(user_id):
        raise ValidationError(
            message=f"'{user_id}' is not a valid user ID (expected 24 hex characters)",
            field="id",
        )
    return ObjectId(user_id)


def _decode(document: Dict[str, Any]) -> UserResponse:
    """Stored document → API shape; an undecodable record is a DatabaseError."""
    try:
        return UserDocument.from_document(document).to_response()
    except PydanticValidationError as e:
        logger.error("Failed to decode stored user %s: %s", document.get("_id"), str(e))
        raise DatabaseError(context={"operation": "decode", "error": str(e)}) from e


class UserService:
    """
    Business logic layer for user operations.

    Error Handling Strategy:
        Driver failures (PyMongoError) are wrapped in DatabaseError, which
        the global handler turns into a 500. A missing document becomes
        NotFoundError (404). Every failure is recoverable; nothing here
        terminates the process.
    """

    async def list_users(self, collection: AsyncCollection) -> List[UserResponse]:
        """
        Return every user in the collection.

        No pagination and no filtering: the whole collection is materialized
        in memory. An empty collection yields an empty list.
        """
        try:
            cursor = collection.find({})
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("Failed to list users: %s", str(e))
            raise DatabaseError(context={"operation": "find", "error": str(e)}) from e

        return [_decode(doc) for doc in documents]

    async def create_user(self, collection: AsyncCollection, payload: UserCreate) -> InsertResult:
        """
        Insert a new user and return the identifier MongoDB assigned.

        Never idempotent: identical bodies create distinct records.
        """
        document = UserDocument(
            first_name=payload.first_name,
            last_name=payload.last_name,
        ).to_document()

        try:
            result = await collection.insert_one(document)
        except PyMongoError as e:
            logger.error("Failed to insert user: %s", str(e))
            raise DatabaseError(context={"operation": "insert_one", "error": str(e)}) from e

        inserted_id = str(result.inserted_id)
        logger.info("User created: %s", inserted_id)
        return InsertResult(inserted_id=inserted_id)

    async def update_user(
        self,
        collection: AsyncCollection,
        user_id: str,
        payload: UserUpdate,
    ) -> UserResponse:
        """
        Apply a partial update to one user and return the updated record.

        Only `firstName` and `lastName` are ever written; `_id` is untouched.
        A body with no updatable field returns the current record as is.

        Raises:
            ValidationError: Malformed identifier
            NotFoundError:   No user has this identifier
            DatabaseError:   The driver call failed or the stored record
                             could not be decoded
        """
        oid = parse_object_id(user_id)
        fields = payload.to_set_fields()

        try:
            if fields:
                document = await collection.find_one_and_update(
                    {"_id": oid},
                    {"$set": fields},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                document = await collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Failed to update user %s: %s", user_id, str(e))
            raise DatabaseError(
                context={"operation": "find_one_and_update", "error": str(e)}
            ) from e

        if document is None:
            raise NotFoundError(resource="user", resource_id=user_id)

        logger.info("User updated: %s (fields=%s)", user_id, sorted(fields))
        return _decode(document)

    async def delete_user(self, collection: AsyncCollection, user_id: str) -> str:
        """
        Permanently remove one user.

        Not idempotent: deleting the same id twice raises NotFoundError.
        """
        oid = parse_object_id(user_id)

        try:
            document = await collection.find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            logger.error("Failed to delete user %s: %s", user_id, str(e))
            raise DatabaseError(
                context={"operation": "find_one_and_delete", "error": str(e)}
            ) from e

        if document is None:
            raise NotFoundError(resource="user", resource_id=user_id)

        logger.info("User deleted: %s", user_id)
        return DELETED_MESSAGE


# Singleton: the service holds no state, so one instance serves every request
user_service = UserService()
