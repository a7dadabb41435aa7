# This project was developed with assistance from AI tools.
"""Guardian-facing ward lookup."""

import logging
from typing import Annotated

from db.enums import UserRole
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..core.auth import STAFF_ROLES, is_staff
from ..middleware.auth import CurrentUser, require_roles
from ..repositories import Collection, HostelRepository, get_repository
from ..schemas.guardian import WardListResponse
from ..services.errors import HostelError
from ..services.guardian import get_guardian_wards
from ..services.identity import normalize_phone
from ._errors import to_http_error

logger = logging.getLogger(__name__)

router = APIRouter()

Repo = Annotated[HostelRepository, Depends(get_repository)]


async def _check_own_contact(repo: HostelRepository, user_id: str, contact: str) -> None:
    """Parents may only look up the number on their own account."""
    account = await repo.get(Collection.USERS, user_id)
    if account is None or normalize_phone(account.mobile) != normalize_phone(contact):
        logger.warning("Parent %s requested wards for a different contact", user_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Parents can only view wards linked to their own contact number",
        )


@router.get(
    "/wards",
    response_model=WardListResponse,
    dependencies=[Depends(require_roles(UserRole.PARENT, *STAFF_ROLES))],
)
async def list_wards(
    user: CurrentUser,
    repo: Repo,
    contact: str = Query(default=""),
) -> WardListResponse:
    """Merged ward list for a guardian's phone number."""
    if not is_staff(user.role):
        await _check_own_contact(repo, user.user_id, contact)
    try:
        wards = await get_guardian_wards(repo, contact)
    except HostelError as e:
        raise to_http_error(e) from e
    return WardListResponse(data=wards, count=len(wards))
