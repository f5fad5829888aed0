import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from jobboard.database import get_db
from jobboard.errors import Forbidden, Unauthenticated
from jobboard.models import Role
from jobboard.repositories import users
from jobboard.utils.security import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

logger = logging.getLogger(__name__)

# auto_error is off so a missing header is reported as 401 like any other bad token
security = HTTPBearer(auto_error=False)


def create_access_token(user_id, expires_delta: Optional[timedelta] = None):
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


async def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)):
    """Resolve the bearer token to the stored user document."""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Not authorized, no token")

    try:
        payload = jwt.decode(credentials.credentials, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        logger.warning("Rejected bearer token: bad signature or expired")
        raise Unauthenticated()

    user_id = payload.get("sub")
    user = await users.get_by_id(get_db(), user_id)
    if user is None:
        logger.warning("Rejected bearer token: no user %s", user_id)
        raise Unauthenticated()

    return user


def _role_denied_message(role: Role) -> str:
    if role is Role.EMPLOYER:
        return "Not authorized as an employer"
    if role is Role.EMPLOYEE:
        return "Not authorized as an employee"
    raise ValueError(f"Unknown role: {role!r}")


def require_role(role: Role):
    """Dependency factory: the authenticated caller must hold exactly ``role``."""
    message = _role_denied_message(role)

    async def role_gate(current_user: dict = Depends(get_current_user)):
        if current_user.get("role") != role.value:
            raise Forbidden(message)
        return current_user

    return role_gate


require_employer = require_role(Role.EMPLOYER)
require_employee = require_role(Role.EMPLOYEE)
