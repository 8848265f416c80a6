from anthropic_api.resources.api_keys import ApiKeys
from anthropic_api.resources.invites import Invites
from anthropic_api.resources.messages import Messages
from anthropic_api.resources.models import Models
from anthropic_api.resources.users import Users
from anthropic_api.resources.workspaces import WorkspaceMembers, Workspaces

__all__ = [
    "ApiKeys",
    "Invites",
    "Messages",
    "Models",
    "Users",
    "WorkspaceMembers",
    "Workspaces",
]
