import logging
from datetime import datetime

from pymongo.errors import DuplicateKeyError

from jobboard.errors import Unauthenticated, ValidationError
from jobboard.models import Role
from jobboard.utils.ids import parse_object_id
from jobboard.utils.security import check_password, hash_password

logger = logging.getLogger(__name__)

PUBLIC_FIELDS = ("name", "email", "role", "company", "location", "bio", "created_at")


def public_user(user: dict) -> dict:
    """User document without the password hash, with a string id."""
    data = {field: user.get(field) for field in PUBLIC_FIELDS}
    data["id"] = str(user["_id"])
    return data


def _email_taken():
    return ValidationError.for_field("email", "User already exists")


async def get_by_id(db, user_id):
    object_id = parse_object_id(user_id)
    if object_id is None:
        return None
    return await db.users.find_one({"_id": object_id})


async def create_user(db, fields: dict) -> dict:
    email = fields["email"].lower()
    if await db.users.find_one({"email": email}):
        raise _email_taken()

    user = {
        "name": fields["name"],
        "email": email,
        "password": hash_password(fields["password"]),
        "role": Role(fields["role"]).value,
        "company": fields.get("company") or None,
        "location": fields.get("location"),
        "bio": fields.get("bio"),
        "created_at": datetime.utcnow(),
    }

    try:
        result = await db.users.insert_one(user)
    except DuplicateKeyError:
        # Lost a race with a concurrent registration for the same email
        raise _email_taken()

    user["_id"] = result.inserted_id
    logger.info("Registered %s %s", user["role"], user["_id"])
    return user


async def authenticate(db, email: str, password: str) -> dict:
    user = await db.users.find_one({"email": email.lower()})
    if not user or not check_password(password, user["password"]):
        raise Unauthenticated("Invalid email or password")
    return user


async def update_profile(db, user: dict, fields: dict) -> dict:
    """Apply a partial profile update. Role is never touched."""
    update_data = {}

    if fields.get("name"):
        update_data["name"] = fields["name"]

    for field in ("location", "bio"):
        if field in fields:
            update_data[field] = fields[field]

    if "company" in fields:
        if user["role"] == Role.EMPLOYER.value and not fields["company"]:
            raise ValidationError.for_field("company", "Company name is required for employers")
        update_data["company"] = fields["company"] or None

    if fields.get("email"):
        email = fields["email"].lower()
        if email != user["email"]:
            if await db.users.find_one({"email": email, "_id": {"$ne": user["_id"]}}):
                raise _email_taken()
            update_data["email"] = email

    if fields.get("password"):
        update_data["password"] = hash_password(fields["password"])

    if not update_data:
        return user

    update_data["updated_at"] = datetime.utcnow()

    try:
        await db.users.update_one({"_id": user["_id"]}, {"$set": update_data})
    except DuplicateKeyError:
        raise _email_taken()

    return await db.users.find_one({"_id": user["_id"]})
