"""Convenience exports for the models package."""

from .notice import Notice, NoticeLevel, NoticeRead
from .organization import Organization, OrgUser, OrgUserList
from .team import PackagePermission, Team, TeamPackage, TeamPackageList
from .user import LoggedInUser
