from typing import Optional

from anthropic_api.models.admin import (
    Workspace,
    WorkspaceList,
    WorkspaceListParams,
    WorkspaceMember,
    WorkspaceMemberAdd,
    WorkspaceMemberDeleted,
    WorkspaceMemberList,
    WorkspaceMemberUpdate,
    WorkspaceRole,
    WorkspaceWrite,
)
from anthropic_api.models.common import ListParams
from anthropic_api.resources.base import Resource, path_segment

WORKSPACES_ROUTE = "organizations/workspaces"


def _workspace_route(workspace_id: str) -> str:
    return f"{WORKSPACES_ROUTE}/{path_segment(workspace_id)}"


# ============================================================================
# Workspaces
# ============================================================================


class Workspaces(Resource):
    async def list(
        self,
        *,
        before_id: Optional[str] = None,
        after_id: Optional[str] = None,
        limit: Optional[int] = None,
        include_archived: Optional[bool] = None,
    ) -> WorkspaceList:
        """List workspaces; archived ones only when include_archived is set."""
        params = WorkspaceListParams(
            before_id=before_id,
            after_id=after_id,
            limit=limit,
            include_archived=include_archived,
        )
        return await self._get(WORKSPACES_ROUTE, WorkspaceList, params.to_query())

    async def retrieve(self, workspace_id: str) -> Workspace:
        return await self._get(_workspace_route(workspace_id), Workspace)

    async def create(self, name: str) -> Workspace:
        return await self._post(WORKSPACES_ROUTE, Workspace, WorkspaceWrite(name=name))

    async def update(self, workspace_id: str, name: str) -> Workspace:
        return await self._post(_workspace_route(workspace_id), Workspace, WorkspaceWrite(name=name))

    async def archive(self, workspace_id: str) -> Workspace:
        """Archive a workspace. Its API keys are deactivated by the server."""
        return await self._post(f"{_workspace_route(workspace_id)}/archive", Workspace)


# ============================================================================
# Workspace Members
# ============================================================================


class WorkspaceMembers(Resource):
    def _members_route(self, workspace_id: str, user_id: Optional[str] = None) -> str:
        route = f"{_workspace_route(workspace_id)}/members"
        if user_id is not None:
            route += f"/{path_segment(user_id)}"
        return route

    async def list(
        self,
        workspace_id: str,
        *,
        before_id: Optional[str] = None,
        after_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> WorkspaceMemberList:
        params = ListParams(before_id=before_id, after_id=after_id, limit=limit)
        return await self._get(self._members_route(workspace_id), WorkspaceMemberList, params.to_query())

    async def retrieve(self, workspace_id: str, user_id: str) -> WorkspaceMember:
        return await self._get(self._members_route(workspace_id, user_id), WorkspaceMember)

    async def add(self, workspace_id: str, user_id: str, role: WorkspaceRole) -> WorkspaceMember:
        body = WorkspaceMemberAdd(user_id=user_id, workspace_role=role)
        return await self._post(self._members_route(workspace_id), WorkspaceMember, body)

    async def update(self, workspace_id: str, user_id: str, role: WorkspaceRole) -> WorkspaceMember:
        body = WorkspaceMemberUpdate(workspace_role=role)
        return await self._post(self._members_route(workspace_id, user_id), WorkspaceMember, body)

    async def delete(self, workspace_id: str, user_id: str) -> WorkspaceMemberDeleted:
        return await self._delete(self._members_route(workspace_id, user_id), WorkspaceMemberDeleted)
