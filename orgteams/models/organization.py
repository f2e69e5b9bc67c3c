from sqlmodel import SQLModel, Field
from typing import List, Optional

class OrgUser(SQLModel):
    name: str
    role: Optional[str] = None

class OrgUserList(SQLModel):
    count: int = 0
    items: List[OrgUser] = Field(default_factory=list)

class Organization(SQLModel):
    name: str
    description: Optional[str] = None
    users: OrgUserList = Field(default_factory=OrgUserList)

    def is_admin(self, user_name: Optional[str]) -> bool:
        """True when ``user_name`` holds a role matching "admin" in this org."""
        if not user_name:
            return False
        return any(
            user.name == user_name
            for user in self.users.items
            if user.role and "admin" in user.role
        )
