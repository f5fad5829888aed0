import os

from passlib.context import CryptContext

# Token signing
SECRET_KEY = os.getenv("SECRET_KEY", "super_secret_random_key_CHANGE_THIS")
ALGORITHM = "HS256"
# Default lifetime is 30 days
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 30))

# Stored hashes are argon2; older schemes would be flagged for rehash
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def check_password(password: str, hashed: str) -> bool:
    """True when ``password`` matches the stored argon2 ``hashed`` value."""
    return pwd_context.verify(password, hashed)
