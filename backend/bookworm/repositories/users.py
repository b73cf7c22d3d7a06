"""
Bookworm Backend - User Repository
===================================

What:  Registration and login against the `users` collection.

Registration:
    1. Hash the password in place on the payload
    2. Look up an existing user by exact email
    3. Abort with AlreadyExistsError if one is found, else insert

    Steps 2 and 3 are not atomic. Two concurrent registrations for the same
    email can both pass the lookup and both insert; no unique index backs the
    check.

Login:
    Look up by exact email, verify the password, and return the stored
    document as-is (hashed password included).
"""

import logging
from typing import Any, Dict, List

from bookworm.database import USERS, Document
from bookworm.exceptions import (
    AlreadyExistsError,
    InvalidPasswordError,
    UserNotFoundError,
)
from bookworm.repositories.base import CollectionRepository, require
from bookworm.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserRepository(CollectionRepository):
    collection_name = USERS

    async def list_users(self) -> List[Document]:
        return await self.list()

    async def register(self, payload: Dict[str, Any]) -> Document:
        """
        Insert a new user with a hashed password.

        Raises:
            MissingFieldError: email or password absent
            AlreadyExistsError: a user with this exact email is stored
        """
        require(payload, "email", "password")
        payload["password"] = await hash_password(payload["password"])

        existing = await self.collection.find_one({"email": payload["email"]})
        if existing:
            logger.info("Registration rejected, email already in use")
            raise AlreadyExistsError("User", context={"email": payload["email"]})

        result = await self.create(payload)
        logger.info("Registered user %s", result["insertedId"])
        return result

    async def login(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Authenticate by email and password.

        Returns:
            {"message": "Login successful", "existingUser": <stored document>}

        Raises:
            MissingFieldError: email or password absent
            UserNotFoundError: no user with this exact email
            InvalidPasswordError: password does not match the stored hash
        """
        require(payload, "email", "password")
        logger.debug("Login attempt for %s", payload["email"])

        existing_user = await self.collection.find_one({"email": payload["email"]})
        if not existing_user:
            raise UserNotFoundError(context={"email": payload["email"]})

        if not await verify_password(payload["password"], existing_user.get("password")):
            raise InvalidPasswordError(context={"email": payload["email"]})

        return {"message": "Login successful", "existingUser": existing_user}
