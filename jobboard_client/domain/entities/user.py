from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Represents the role of a user on the job board.

    Attributes:
        SUPER_ADMIN: Manages the whole site, all stacks and admins.
        STACK_ADMIN: Manages jobs and applications within assigned stacks.
        JOB_SEEKER: Browses jobs and applies.
    """

    SUPER_ADMIN = "super_admin"
    STACK_ADMIN = "stack_admin"
    JOB_SEEKER = "job_seeker"


class User(BaseModel):
    """The authenticated user as returned by the backend.

    Field names follow the backend's camelCase JSON through aliases; fields the
    backend adds later are preserved rather than rejected.

    Attributes:
        id: Backend identifier.
        email: Login email address.
        name: Display name.
        role: Role used by the host UI to pick dashboards.
        avatar: Optional avatar URL.
        blocked_by: Identifiers of stacks that blocked this user.
        created_at: Account creation time, when the backend includes it.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    email: str
    name: str = ""
    role: Role = Role.JOB_SEEKER
    avatar: Optional[str] = None
    blocked_by: List[str] = Field(default_factory=list, alias="blockedBy")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @property
    def is_admin(self) -> bool:
        return self.role in (Role.SUPER_ADMIN, Role.STACK_ADMIN)
