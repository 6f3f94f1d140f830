# app/utils/update_fields.py
# Field-by-field applier used by the account update endpoint.

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from app.repositories.user_repository import UserRepository
from app.utils.logger import get_logger

logger = get_logger(__name__)

# request field -> users column
PERSISTED_FIELDS = {
    "name": "name",
    "email": "email",
    "password": "password_hash",
}

# drive the password rotation, never written themselves
CONTROL_FIELDS = {"old_password", "new_password"}


@dataclass
class UpdateResult:
    status_code: int
    message: str
    updated: List[str] = field(default_factory=list)
    rejected: Dict[str, str] = field(default_factory=dict)


async def update_by_fields(
    users: UserRepository,
    user_id: int,
    fields: Iterable[str],
    values: dict,
) -> UpdateResult:
    """Write only ``fields`` of ``values`` onto user ``user_id``.

    Rejected fields abort the whole update (409). Fields that would not change
    anything are skipped; when nothing is left the call is a 200 no-op.
    """
    user = await users.get(user_id)
    if user is None:
        return UpdateResult(204, "There is no user")

    changes: dict = {}
    updated: List[str] = []
    rejected: Dict[str, str] = {}

    for name in fields:
        if name in CONTROL_FIELDS:
            continue

        column = PERSISTED_FIELDS.get(name)
        if column is None:
            rejected[name] = "not an updatable field"
            continue

        value = values.get(name)
        if value is None:
            rejected[name] = "missing value"
            continue

        if getattr(user, column) == value:
            continue

        if name == "email":
            owner = await users.get_by_email(value)
            if owner is not None and owner.id != user_id:
                rejected[name] = "already in use"
                continue

        changes[column] = value
        updated.append(name)

    if rejected:
        logger.warning(
            "User update rejected",
            extra={"user_id": user_id, "rejected": sorted(rejected)},
        )
        summary = ", ".join(f"{k} ({v})" for k, v in rejected.items())
        return UpdateResult(409, f"Could not update: {summary}", rejected=rejected)

    if not changes:
        return UpdateResult(200, "Nothing to update")

    await users.update_fields(user_id, changes)

    logger.info("User fields updated", extra={"user_id": user_id, "fields": updated})
    return UpdateResult(200, "User updated successfully", updated=updated)
