from sqlmodel import SQLModel, Field
from typing import List, Optional
from enum import Enum

from .organization import OrgUserList

class PackagePermission(str, Enum):
    READ = "read"
    WRITE = "write"

class TeamPackage(SQLModel):
    name: str
    permission: PackagePermission = PackagePermission.READ

class TeamPackageList(SQLModel):
    count: int = 0
    items: List[TeamPackage] = Field(default_factory=list)

class Team(SQLModel):
    name: str
    description: Optional[str] = None
    users: OrgUserList = Field(default_factory=OrgUserList)
    packages: TeamPackageList = Field(default_factory=TeamPackageList)
