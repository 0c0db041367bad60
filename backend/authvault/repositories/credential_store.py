"""
MongoDB persistence for identity records.

CredentialStore is the only code that touches the users collection.
Documents hold UTC datetimes; Mongo hands them back naive, so every
datetime is normalised at this boundary (aware UTC in the models, naive
UTC in queries and documents).
"""
import functools
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from authvault.core.errors import DuplicateEmailError, ServiceUnavailableError
from authvault.database.databases import auth_db
from authvault.models.identity import Identity

logger = logging.getLogger("authvault.store")


def _to_storage(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _from_storage(value: Any) -> Any:
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_document(identity: Identity) -> dict:
    """Map an Identity to a users document. Cleared recovery fields are omitted."""
    doc = identity.model_dump(exclude={"id"}, exclude_none=True)
    return {
        key: _to_storage(value) if isinstance(value, datetime) else value
        for key, value in doc.items()
    }


def _from_document(doc: dict) -> Identity:
    data = {key: _from_storage(value) for key, value in doc.items()}
    data["_id"] = str(data["_id"])
    return Identity(**data)


def _driver_errors(func):
    """Convert MongoDB driver faults into ServiceUnavailableError."""
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except PyMongoError as exc:
            logger.error("MongoDB operation %s failed: %s", func.__name__, type(exc).__name__)
            raise ServiceUnavailableError(detail=str(exc)) from exc
    return wrapper


class CredentialStore:
    """Repository for identity records in auth_db.users."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with auth database."""
        self.db = db
        self.users_collection = db[auth_db.Collections.USERS]

    @_driver_errors
    async def ensure_indexes(self) -> None:
        """Create the unique email index backing email uniqueness."""
        await self.users_collection.create_index("email", unique=True)

    @_driver_errors
    async def find_by_email(self, email: str) -> Optional[Identity]:
        doc = await self.users_collection.find_one({"email": email})
        return _from_document(doc) if doc else None

    @_driver_errors
    async def find_by_id(self, identity_id: str) -> Optional[Identity]:
        try:
            object_id = ObjectId(identity_id)
        except (InvalidId, TypeError):
            return None
        doc = await self.users_collection.find_one({"_id": object_id})
        return _from_document(doc) if doc else None

    @_driver_errors
    async def find_by_email_and_code(
        self,
        email: str,
        code: str,
        now: datetime,
    ) -> Optional[Identity]:
        """
        Find the identity holding ``code`` as its pending one-time code.

        Matches only while ``recovery_code_expires_at`` is strictly after ``now``.
        """
        doc = await self.users_collection.find_one({
            "email": email,
            "recovery_code": code,
            "recovery_code_expires_at": {"$gt": _to_storage(now)},
        })
        return _from_document(doc) if doc else None

    @_driver_errors
    async def find_by_email_and_token(
        self,
        email: str,
        token: str,
        now: datetime,
    ) -> Optional[Identity]:
        """
        Find the identity holding ``token`` as its reset token.

        Matches only while ``recovery_token_expires_at`` is strictly after ``now``.
        """
        doc = await self.users_collection.find_one({
            "email": email,
            "recovery_token": token,
            "recovery_token_expires_at": {"$gt": _to_storage(now)},
        })
        return _from_document(doc) if doc else None

    @_driver_errors
    async def create(self, identity: Identity) -> Identity:
        """
        Insert a new identity and return it with its assigned ID.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        try:
            result = await self.users_collection.insert_one(_to_document(identity))
        except DuplicateKeyError as exc:
            raise DuplicateEmailError() from exc
        return identity.model_copy(update={"id": str(result.inserted_id)})

    @_driver_errors
    async def save(self, identity: Identity) -> None:
        """
        Persist the full current state of an existing identity.

        The document is replaced in one write, so cleared recovery fields
        disappear and concurrent saves never interleave fields.
        """
        if identity.id is None:
            raise ValueError("Cannot save an identity without an id")
        await self.users_collection.replace_one(
            {"_id": ObjectId(identity.id)},
            _to_document(identity),
        )

    @_driver_errors
    async def redeem_token(
        self,
        email: str,
        token: str,
        now: datetime,
        hashed_password: str,
    ) -> Optional[Identity]:
        """
        Set a new password hash and consume the reset token in one write.

        The filter repeats the token lookup, so of two concurrent redemptions
        of the same token only one matches. Pending codes are dropped too.

        Returns:
            The updated identity, or None if the token no longer matches
        """
        doc = await self.users_collection.find_one_and_update(
            {
                "email": email,
                "recovery_token": token,
                "recovery_token_expires_at": {"$gt": _to_storage(now)},
            },
            {
                "$set": {"hashed_password": hashed_password},
                "$unset": {
                    "recovery_token": "",
                    "recovery_token_expires_at": "",
                    "recovery_code": "",
                    "recovery_code_expires_at": "",
                },
            },
            return_document=ReturnDocument.AFTER,
        )
        return _from_document(doc) if doc else None
