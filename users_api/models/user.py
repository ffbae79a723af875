"""
Users API - User Document Model
===============================

What:  The stored shape of a user record in the `users` collection.
How:   A Pydantic model mapping `id` to MongoDB's native `_id` primary key.
Who:   Used by UserService to build insert documents and to decode results.

Stored document:
    {
        "_id": ObjectId("65a4f0c2e4b0a1b2c3d4e5f6"),   # assigned by MongoDB
        "firstName": "Ada",
        "lastName": "Lovelace"
    }

Design Decision:
    The document model is separate from the API schemas because the
    identifier has two representations: a bson ObjectId in storage and a hex
    string on the wire. The conversion happens in one place, to_response().
"""

from typing import Any, Dict, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

from users_api.schemas.user import UserResponse


class UserDocument(BaseModel):
    """
    A user as stored in MongoDB.

    Fields missing from a stored document decode to empty strings, the same
    zero values a freshly decoded request body would carry.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    # Records written by other tools may carry a plain string _id
    id: Optional[Union[ObjectId, str]] = Field(default=None, alias="_id")
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "UserDocument":
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        """Serialize for insert; `_id` is omitted until MongoDB assigns one."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_response(self) -> UserResponse:
        return UserResponse(
            id=str(self.id) if self.id is not None else "",
            first_name=self.first_name,
            last_name=self.last_name,
        )
