"""
api/routes/v1/directory.py -- Professional directory listing.

Routes:
  GET /api/user/list?search=&category=  -- filtered profile list (requires token)

This is where a stored session token is actually checked: the router-level
dependency verifies signature and expiry, so an expired or tampered token
that still opened the directory view on the client is rejected here with 401.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.models import DirectoryResponse, ProfileRow
from auth.dependencies import get_current_user
from directory.listing import list_profiles

# Router-level dependency enforces auth; the handler does not repeat it.
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/user/list", response_model=DirectoryResponse)
def get_user_list(
    search: Optional[str] = Query(default=None, max_length=100),
    category: Optional[str] = Query(default=None, max_length=50),
) -> DirectoryResponse:
    """Return directory profiles filtered by free-text search and role category."""
    rows = [
        ProfileRow(id=p.id, username=p.username, role=p.role, company=p.company)
        for p in list_profiles(search=search, category=category)
    ]
    return DirectoryResponse(users=rows)
