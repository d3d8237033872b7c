from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple
import os
import hashlib
import binascii
from jose import jwt, JWTError
from app.core.config import settings

# PBKDF2 configuration
PBKDF2_ITERATIONS = 100000
SALT_LENGTH = 32
HASH_LENGTH = 64

def create_access_token(subject: str, claims: Optional[Dict[str, Any]] = None,
                        expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
    to_encode = dict(claims or {})
    to_encode.update({
        "exp": int(expire.timestamp()),
        "sub": str(subject),
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def generate_salt() -> bytes:
    """Generate a random salt."""
    return os.urandom(SALT_LENGTH)

def hash_password(password: str, salt: Optional[bytes] = None) -> Tuple[bytes, bytes]:
    """
    Hash a password using PBKDF2 with SHA-256.
    Returns a tuple of (hash, salt).
    """
    if salt is None:
        salt = generate_salt()

    dk = hashlib.pbkdf2_hmac(
        'sha256',
        password.encode('utf-8'),
        salt,
        PBKDF2_ITERATIONS,
        dklen=HASH_LENGTH
    )
    return dk, salt

def verify_password(plain_password: str, stored_hash: str) -> bool:
    """
    Verify a password against a stored hash.
    The stored hash should be in the format: salt:hash (both hex-encoded)
    """
    try:
        salt_hex, hash_hex = stored_hash.split(':')
        salt = binascii.unhexlify(salt_hex)
        stored_hash_bytes = binascii.unhexlify(hash_hex)

        new_hash, _ = hash_password(plain_password, salt)
        return new_hash == stored_hash_bytes
    except (ValueError, binascii.Error):
        return False

def get_password_hash(password: str) -> str:
    """
    Hash a password and return a string in the format "salt:hash"
    where both salt and hash are hex-encoded.
    """
    hashed, salt = hash_password(password)
    return f"{salt.hex()}:{hashed.hex()}"

def create_user_token(user) -> str:
    """Token carrying the user's id, email, name and role."""
    return create_access_token(
        user.email,
        claims={"id": user.id, "email": user.email, "name": user.name, "role": user.role},
    )

def verify_token(token: str) -> Optional[dict]:
    """
    Verify and decode a JWT token.
    Returns the decoded token payload if valid, None otherwise.
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": True}
        )
    except JWTError:
        # Expired, bad signature or malformed
        return None
