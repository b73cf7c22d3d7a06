"""
Bookworm Backend - Credential Verifier
=======================================

What:  One-way password hashing for registration and verification for login.
How:   passlib CryptContext with the bcrypt scheme. Hashes are salted, so two
       hashes of the same password differ; compare with verify_password(),
       never with string equality.
       bcrypt is CPU-bound, so both coroutines run the work in a worker thread
       and the event loop keeps serving other requests.
"""

import asyncio
import logging

from passlib.context import CryptContext

from bookworm.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


async def hash_password(plaintext: str) -> str:
    return await asyncio.to_thread(pwd_context.hash, plaintext)


async def verify_password(plaintext: str, hashed: str) -> bool:
    """
    Check a plaintext password against a stored hash.

    Returns False on a mismatch. A stored value passlib does not recognise as
    a hash also yields False rather than an error.
    """
    try:
        return await asyncio.to_thread(pwd_context.verify, plaintext, hashed)
    except (ValueError, TypeError) as e:
        logger.warning("Stored password is not a recognised hash: %s", e)
        return False
