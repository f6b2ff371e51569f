"""
Member endpoints for API v1.

Members are listed and created on the collection path ``/members``
and read, replaced or deleted on ``/member``, with the identifier in
the query string (GET) or in the JSON body (PUT, DELETE).  Every
member is returned together with the borrows that reference it.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from library_api.app.api.deps import get_member_service
from library_api.app.core.errors import LibraryError
from library_api.app.schemas.common import MessageRead, RecordIdPayload
from library_api.app.schemas.member import MemberCreate, MemberRead, MemberUpdate
from library_api.app.services.member_service import MemberService


router = APIRouter()


@router.get("/members", response_model=List[MemberRead])
async def list_members(
    name: str | None = Query(None, description="Only members with exactly this name"),
    service: MemberService = Depends(get_member_service),
) -> List[MemberRead]:
    """List members, optionally filtered by name."""
    return await service.list_members(name)


@router.get("/member", response_model=MemberRead)
async def get_member(
    id: str | None = Query(None, description="ID of the member"),
    service: MemberService = Depends(get_member_service),
) -> MemberRead:
    try:
        return await service.get_member(id)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/members", response_model=MemberRead, status_code=status.HTTP_201_CREATED)
async def create_member(
    member: MemberCreate | None = None,
    service: MemberService = Depends(get_member_service),
) -> MemberRead:
    """Register a member.

    The phone number and email are checked with the external
    validation service and must not belong to another member.
    """
    try:
        return await service.create_member(member)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/member", response_model=MemberRead)
async def update_member(
    member: MemberUpdate | None = None,
    service: MemberService = Depends(get_member_service),
) -> MemberRead:
    """Replace every field of an existing member."""
    try:
        return await service.update_member(member)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/member", response_model=MessageRead)
async def delete_member(
    payload: RecordIdPayload | None = None,
    service: MemberService = Depends(get_member_service),
) -> MessageRead:
    """Delete a member together with all of its borrows."""
    try:
        return await service.delete_member(payload.id if payload else None)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
