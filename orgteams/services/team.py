from typing import Any, Dict, List, Optional

from orgteams.models import Organization, PackagePermission, Team
from orgteams.services.registry import OrgAgent, TeamAgent, UnknownUpdateTypeError

UPDATE_WRITE_PERMISSIONS = "updateWritePermissions"
REMOVE_PACKAGE = "removePackage"


async def get_organization(user_name: Optional[str], org_name: str) -> Organization:
    return await OrgAgent(user_name).get(org_name)


async def create_team(
    user_name: Optional[str],
    org_name: str,
    team_name: str,
    description: Optional[str],
    members: List[str],
) -> None:
    """Create ``team_name`` under ``org_name`` and add ``members`` to it.

    Steps run in order and stop at the first RegistryError:
    confirm the org exists, create the team, then add the members.
    """
    await OrgAgent(user_name).get(org_name)
    await OrgAgent(user_name).add_team(
        org_scope=org_name,
        team_name=team_name,
        description=description,
    )
    if members:
        await TeamAgent(user_name).add_users(
            team_name=team_name,
            scope=org_name,
            users=members,
        )


def package_view_model(team: Team) -> List[Dict[str, Any]]:
    packages = []
    for package in team.packages.items:
        item = {"name": package.name, "permission": package.permission.value}
        if package.permission == PackagePermission.WRITE:
            item["canWrite"] = True
        packages.append(item)
    return packages


async def get_team_view(user_name: Optional[str], org_name: str, team_name: str) -> Dict[str, Any]:
    team = await TeamAgent(user_name).get(org_scope=org_name, team_name=team_name)
    return {
        "teamName": team.name,
        "description": team.description,
        "orgName": org_name,
        "members": team.users.items,
        "packages": package_view_model(team),
    }


def permission_from_form(write_permission: Optional[str]) -> PackagePermission:
    return PackagePermission.WRITE if write_permission == "on" else PackagePermission.READ


async def update_team(
    user_name: Optional[str],
    org_name: str,
    team_name: str,
    update_type: Optional[str],
    package: Optional[str],
    write_permission: Optional[str] = None,
) -> None:
    agent = TeamAgent(user_name)
    if update_type == UPDATE_WRITE_PERMISSIONS:
        await agent.add_package(
            scope=org_name,
            id=team_name,
            package=package,
            permissions=permission_from_form(write_permission),
        )
    elif update_type == REMOVE_PACKAGE:
        await agent.remove_package(scope=org_name, id=team_name, package=package)
    else:
        raise UnknownUpdateTypeError(update_type)
