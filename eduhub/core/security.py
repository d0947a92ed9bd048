import math
from datetime import datetime, timezone
from typing import Any, Optional, Dict

from jose import JWTError, jwt

# Use bcrypt directly to avoid passlib/bcrypt version conflicts
import bcrypt

# =====================================================
# Application Settings
# =====================================================
from eduhub.core.config import settings


# =====================================================
# Password Hashing Context
# =====================================================
class PasswordContext:
    """
    Simple password hashing and verification utility.
    """

    def __init__(self, rounds: int):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a plain-text password using bcrypt.
        """
        return bcrypt.hashpw(
            password.encode("utf-8"),
            bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    @staticmethod
    def verify(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain-text password against a bcrypt hash.
        """
        try:
            return bcrypt.checkpw(
                plain_password.encode("utf-8"),
                hashed_password.encode("utf-8")
            )
        except ValueError:
            # Stored value is not a bcrypt hash
            return False


# Password context instance
pwd_context = PasswordContext(rounds=settings.BCRYPT_ROUNDS)


# =====================================================
# Token Type Constants
# =====================================================
TOKEN_TYPE_ACCESS = "access"


# =====================================================
# JWT Creation Functions
# =====================================================
def create_access_token(
    subject: Any,
    session_id: str,
    expires_at: datetime,
    is_demo: bool = False,
) -> str:
    """
    Create a JWT access token bound to a server-side session.

    The token expiry is the session deadline rounded up to a whole second:
    JWT timestamps are integers, and a token must not die before its
    session does. The session manager decides the exact moment.
    """
    now = datetime.now(timezone.utc)

    to_encode = {
        "exp": math.ceil(expires_at.timestamp()),  # Expiration time
        "sub": str(subject),               # Subject (user ID)
        "sid": session_id,                 # Session ID (used for revocation)
        "demo": is_demo,
        "type": TOKEN_TYPE_ACCESS,
        "iat": now,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


# =====================================================
# Token Verification Functions
# =====================================================
def verify_token(
    token: str,
    token_type: str = TOKEN_TYPE_ACCESS,
    allow_expired: bool = False
) -> Optional[Dict[str, Any]]:
    """
    Verify a JWT token and return its payload if valid.

    With allow_expired the signature and claims are still checked, only
    the `exp` check is skipped.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": not allow_expired}
        )
    except JWTError:
        return None

    if payload.get("type") != token_type:
        return None

    if not payload.get("sub") or not payload.get("sid"):
        return None

    return payload


# =====================================================
# Password Utility Functions
# =====================================================
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hashed value.
    """
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password.
    """
    if not password:
        raise ValueError("Password cannot be empty")
    return pwd_context.hash(password)
