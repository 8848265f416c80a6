from typing import Optional

from anthropic_api.models.admin import (
    OrganizationRole,
    User,
    UserDeleted,
    UserList,
    UserListParams,
    UserUpdate,
)
from anthropic_api.resources.base import Resource, path_segment

USERS_ROUTE = "organizations/users"


class Users(Resource):
    """Members of the organization."""

    async def list(
        self,
        *,
        before_id: Optional[str] = None,
        after_id: Optional[str] = None,
        limit: Optional[int] = None,
        email: Optional[str] = None,
    ) -> UserList:
        """List users, optionally filtered to one email address."""
        params = UserListParams(before_id=before_id, after_id=after_id, limit=limit, email=email)
        return await self._get(USERS_ROUTE, UserList, params.to_query())

    async def retrieve(self, user_id: str) -> User:
        return await self._get(f"{USERS_ROUTE}/{path_segment(user_id)}", User)

    async def update(self, user_id: str, role: OrganizationRole) -> User:
        return await self._post(f"{USERS_ROUTE}/{path_segment(user_id)}", User, UserUpdate(role=role))

    async def remove(self, user_id: str) -> UserDeleted:
        """Remove a user from the organization."""
        return await self._delete(f"{USERS_ROUTE}/{path_segment(user_id)}", UserDeleted)
