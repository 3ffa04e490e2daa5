"""Shared dependencies: bearer-token verification, subscription gating, id parsing."""
import logging
from typing import Annotated, Optional

from beanie import PydanticObjectId
from bson.errors import InvalidId
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from app.config import settings
from app.models.school_class import SchoolClass
from app.models.subject import Subject
from app.models.timetable import TimetableSlot
from app.models.user import User
from app.rbac import ACTION_BY_METHOD, has_access

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> User:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = credentials.credentials
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        user_id: str = payload.get("sub")
        if not user_id:
            raise HTTPException(status_code=401, detail="Invalid token")
        if payload.get("type", "access") != "access":
            raise HTTPException(status_code=401, detail="Invalid token type")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    try:
        user = await User.get(PydanticObjectId(user_id))
    except InvalidId:
        raise HTTPException(status_code=401, detail="Invalid token")
    if not user or not user.is_active or user.deleted_at is not None:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return user


def _status_value(user) -> Optional[str]:
    value = getattr(user, "subscription_status", None)
    return getattr(value, "value", value)


def require_module_access(module: str):
    async def checker(
        request: Request,
        user: Annotated[User, Depends(get_current_user)],
    ):
        if not settings.subscription_gating_enabled:
            return user
        method = request.method.upper()
        action = ACTION_BY_METHOD.get(method)
        if not action:
            raise HTTPException(status_code=405, detail=f"Unsupported method for access check: {method}")
        if not has_access(_status_value(user), module, action):
            logger.warning("Blocked %s %s for user %s (subscription %s)", method, module, user.id, _status_value(user))
            raise HTTPException(status_code=403, detail=f"An active subscription is required to {action} {module}")
        return user

    return checker


def parse_object_id(value: str, what: str = "Record") -> PydanticObjectId:
    """Parse a path id; malformed ids are reported like missing records."""
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError, ValueError):
        raise HTTPException(status_code=404, detail=f"{what} not found")


def owner_id(user: User) -> str:
    return str(user.id)


# Reference fields shared by lessons and timetable entries
REFERENCE_MODELS = {
    "class_id": (SchoolClass, "Class"),
    "subject_id": (Subject, "Subject"),
    "timetable_slot_id": (TimetableSlot, "Timetable slot"),
}


async def check_references(user_id: str, refs: dict) -> None:
    """Referenced classes, subjects and slots must exist and belong to ``user_id``.

    Keys missing from ``refs`` or set to None are not checked.
    """
    for field, (model, what) in REFERENCE_MODELS.items():
        ref = refs.get(field)
        if ref is None:
            continue
        if not PydanticObjectId.is_valid(ref):
            raise HTTPException(status_code=400, detail=f"{what} not found")
        found = await model.find_one({"_id": PydanticObjectId(ref), "user_id": user_id})
        if not found:
            logger.warning("Rejected %s reference %s for user %s", what.lower(), ref, user_id)
            raise HTTPException(status_code=400, detail=f"{what} not found")


# Type aliases for route injection
CurrentUser = Annotated[User, Depends(get_current_user)]
