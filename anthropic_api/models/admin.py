"""
Organization administration models: API keys, invites, users, workspaces and
workspace members.

Admin endpoints require an admin API key.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from anthropic_api.models.common import ListParams, Page


class OrganizationRole(str, Enum):
    """Organization-level role of a user or invitee"""
    USER = "user"
    DEVELOPER = "developer"
    BILLING = "billing"
    ADMIN = "admin"


class WorkspaceRole(str, Enum):
    WORKSPACE_USER = "workspace_user"
    WORKSPACE_DEVELOPER = "workspace_developer"
    WORKSPACE_ADMIN = "workspace_admin"
    WORKSPACE_BILLING = "workspace_billing"


# ============================================================================
# API Keys
# ============================================================================


class ApiKeyStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class ApiKeyCreator(BaseModel):
    id: str
    type: str


class ApiKey(BaseModel):
    id: str
    name: str
    created_at: str
    created_by: ApiKeyCreator
    partial_key_hint: Optional[str] = None
    status: ApiKeyStatus
    type: str = "api_key"
    workspace_id: Optional[str] = None  # None for the default workspace


class ApiKeyListParams(ListParams):
    status: Optional[ApiKeyStatus] = None
    workspace_id: Optional[str] = None
    created_by_user_id: Optional[str] = None


class ApiKeyUpdate(BaseModel):
    name: Optional[str] = None
    status: Optional[ApiKeyStatus] = None


ApiKeyList = Page[ApiKey]


# ============================================================================
# Invites
# ============================================================================


class InviteStatus(str, Enum):
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    DELETED = "deleted"
    PENDING = "pending"


class Invite(BaseModel):
    id: str
    email: str
    invited_at: str
    expires_at: str
    role: OrganizationRole
    status: InviteStatus
    type: str = "invite"


class InviteCreate(BaseModel):
    email: str
    role: OrganizationRole


class InviteDeleted(BaseModel):
    id: str
    type: str = "invite_deleted"


InviteList = Page[Invite]


# ============================================================================
# Users
# ============================================================================


class User(BaseModel):
    id: str
    email: str
    name: str
    added_at: str
    role: OrganizationRole
    type: str = "user"


class UserListParams(ListParams):
    email: Optional[str] = None


class UserUpdate(BaseModel):
    role: OrganizationRole


class UserDeleted(BaseModel):
    id: str
    type: str = "user_deleted"


UserList = Page[User]


# ============================================================================
# Workspaces
# ============================================================================


class Workspace(BaseModel):
    id: str
    name: str
    created_at: str
    archived_at: Optional[str] = None
    display_color: str
    type: str = "workspace"


class WorkspaceListParams(ListParams):
    include_archived: Optional[bool] = None


class WorkspaceWrite(BaseModel):
    """Body for creating or renaming a workspace"""
    name: str = Field(min_length=1)


WorkspaceList = Page[Workspace]


class WorkspaceMember(BaseModel):
    type: str = "workspace_member"
    user_id: str
    workspace_id: str
    workspace_role: WorkspaceRole


class WorkspaceMemberAdd(BaseModel):
    user_id: str
    workspace_role: WorkspaceRole


class WorkspaceMemberUpdate(BaseModel):
    workspace_role: WorkspaceRole


class WorkspaceMemberDeleted(BaseModel):
    type: str = "workspace_member_deleted"
    user_id: str
    workspace_id: str


WorkspaceMemberList = Page[WorkspaceMember]
