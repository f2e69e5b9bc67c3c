from fastapi import Request
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from orgteams.context import RequestContext
from orgteams.services.notices import save_notices
from orgteams.services.registry import RegistryError
from orgteams.views import internal_error, not_found


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=302)


async def handle_user_error(
    request: Request,
    context: RequestContext,
    redirect_url: str,
    message: str,
):
    """Redirect to ``redirect_url`` with ``message`` attached as a one-shot notice."""
    context.logger.info("Sending %s to %s: %s", context.user_name, redirect_url, message)
    try:
        token = await save_notices(context.session, [message])
    except SQLAlchemyError as err:
        context.logger.error("Could not save notice %r: %s", message, err)
        await context.session.rollback()
        return internal_error(request)

    param = f"?notice={token}" if token else ""
    return redirect(redirect_url + param)


async def handle_registry_error(
    request: Request,
    context: RequestContext,
    err: RegistryError,
    redirect_url: str,
):
    context.logger.error("Registry call failed for %s: %s", context.user_name, err)

    if err.status_code == 404:
        return not_found(request, err.message)
    if err.status_code < 500:
        return await handle_user_error(request, context, redirect_url, err.message)
    return internal_error(request, err.message)
