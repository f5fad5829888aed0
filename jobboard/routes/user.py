# ========================================
# jobboard/routes/user.py - registration, login, profile
# ========================================

from fastapi import APIRouter, Depends, status

from jobboard.database import get_db
from jobboard.repositories import users
from jobboard.schemas.user import AuthResponse, UserCreate, UserLogin, UserProfileUpdate, UserResponse
from jobboard.utils.auth import create_access_token, get_current_user

router = APIRouter(prefix="/users", tags=["Users"])


def _with_token(user: dict) -> dict:
    data = users.public_user(user)
    data["token"] = create_access_token(user["_id"])
    return data


# ===========================
# PUBLIC ENDPOINTS
# ===========================

# 1. REGISTER
@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate):
    """Register a new employee or employer and return a token."""
    db = get_db()
    new_user = await users.create_user(db, user.model_dump(mode="json"))
    return _with_token(new_user)


# 2. LOGIN
@router.post("/login", response_model=AuthResponse)
async def login(user_credentials: UserLogin):
    db = get_db()
    user = await users.authenticate(db, user_credentials.email, user_credentials.password)
    return _with_token(user)


# ===========================
# AUTHENTICATED USER ENDPOINTS
# ===========================

# 3. GET MY PROFILE
@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: dict = Depends(get_current_user)):
    return users.public_user(current_user)


# 4. UPDATE MY PROFILE
@router.put("/profile", response_model=AuthResponse)
async def update_profile(
    profile_data: UserProfileUpdate,
    current_user: dict = Depends(get_current_user)
):
    """Update the current user's profile. A password change rotates the stored hash."""
    db = get_db()
    updated = await users.update_profile(db, current_user, profile_data.model_dump(exclude_unset=True))
    return _with_token(updated)
