from fastapi import APIRouter, Depends, Request, Response

from orgteams.context import RequestContext, get_request_context
from orgteams.services.dispatch import handle_registry_error, handle_user_error, redirect
from orgteams.services.registry import RegistryError
from orgteams.services.team import (
    create_team,
    get_organization,
    get_team_view,
    update_team,
)
from orgteams.services.validation import invalid_user_name
from orgteams.views import not_found, render

router = APIRouter(
    prefix="/org",
    tags=["Team"],
)

ORG_FALLBACK_URL = "/org"


def _team_url(org: str, team_name: str) -> str:
    return f"/org/{org}/team/{team_name}"


async def _check_names(request: Request, context: RequestContext, org: str, team_name: str):
    """Return an error response when either name is invalid, else None."""
    if invalid_user_name(org):
        return await handle_user_error(request, context, ORG_FALLBACK_URL, "Invalid Org Name.")
    if invalid_user_name(team_name):
        return await handle_user_error(request, context, f"/org/{org}/team", "Invalid Team Name.")
    return None


@router.get("/{org}/team")
async def get_team_creation_page(
    org: str,
    request: Request,
    context: RequestContext = Depends(get_request_context),
):
    if not context.features.org_billing:
        return redirect(ORG_FALLBACK_URL)

    if invalid_user_name(org):
        return not_found(request)

    try:
        organization = await get_organization(context.user_name, org)
    except RegistryError as err:
        return await handle_registry_error(request, context, err, f"/org/{org}")

    if organization.is_admin(context.user_name):
        return render(request, "org/add-team", {"org": org})

    return await handle_user_error(
        request, context, f"/org/{org}", "You do not have access to that page"
    )


@router.post("/{org}/team")
async def add_team_to_org(
    org: str,
    request: Request,
    context: RequestContext = Depends(get_request_context),
):
    if not context.features.org_billing:
        return redirect(ORG_FALLBACK_URL)

    form = await request.form()
    team_name = form.get("team-name")
    description = form.get("description")
    members = [member for member in form.getlist("member") if member]

    error_response = await _check_names(request, context, org, team_name)
    if error_response is not None:
        return error_response

    try:
        await create_team(context.user_name, org, team_name, description, members)
    except RegistryError as err:
        return await handle_registry_error(request, context, err, ORG_FALLBACK_URL)

    return redirect(_team_url(org, team_name))


@router.get("/{org}/team/{teamName}")
async def show_team(
    org: str,
    teamName: str,
    request: Request,
    context: RequestContext = Depends(get_request_context),
):
    if not context.features.org_billing:
        return redirect(ORG_FALLBACK_URL)

    error_response = await _check_names(request, context, org, teamName)
    if error_response is not None:
        return error_response

    try:
        team_view = await get_team_view(context.user_name, org, teamName)
    except RegistryError as err:
        return await handle_registry_error(request, context, err, f"/org/{org}")

    return render(request, "team/show", team_view)


@router.post("/{org}/team/{teamName}")
async def update_team_packages(
    org: str,
    teamName: str,
    request: Request,
    context: RequestContext = Depends(get_request_context),
):
    if not context.features.org_billing:
        return redirect(ORG_FALLBACK_URL)

    error_response = await _check_names(request, context, org, teamName)
    if error_response is not None:
        return error_response

    form = await request.form()
    try:
        await update_team(
            context.user_name,
            org,
            teamName,
            update_type=form.get("updateType"),
            package=form.get("name"),
            write_permission=form.get("writePermission"),
        )
    except RegistryError as err:
        return await handle_registry_error(request, context, err, _team_url(org, teamName))

    return redirect(_team_url(org, teamName))


@router.get("/{org}/team/{teamName}/members")
async def show_team_members(org: str, teamName: str):
    # Placeholder until member listing gets its own view.
    return Response(status_code=200)
