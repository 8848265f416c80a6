from typing import Optional

from anthropic_api.models.admin import (
    Invite,
    InviteCreate,
    InviteDeleted,
    InviteList,
    OrganizationRole,
)
from anthropic_api.models.common import ListParams
from anthropic_api.resources.base import Resource, path_segment

INVITES_ROUTE = "organizations/invites"


class Invites(Resource):
    """Pending and past invitations to join the organization."""

    async def list(
        self,
        *,
        before_id: Optional[str] = None,
        after_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> InviteList:
        params = ListParams(before_id=before_id, after_id=after_id, limit=limit)
        return await self._get(INVITES_ROUTE, InviteList, params.to_query())

    async def retrieve(self, invite_id: str) -> Invite:
        return await self._get(f"{INVITES_ROUTE}/{path_segment(invite_id)}", Invite)

    async def create(self, email: str, role: OrganizationRole) -> Invite:
        return await self._post(INVITES_ROUTE, Invite, InviteCreate(email=email, role=role))

    async def delete(self, invite_id: str) -> InviteDeleted:
        return await self._delete(f"{INVITES_ROUTE}/{path_segment(invite_id)}", InviteDeleted)
