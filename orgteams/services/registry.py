import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from orgteams.config import REGISTRY_TIMEOUT, REGISTRY_URL
from orgteams.models import Organization, PackagePermission, Team

logger = logging.getLogger(__name__)

BEARER_HEADER = "bearer"


class RegistryError(Exception):
    """A failed registry call, tagged with the HTTP status it maps to."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class UnknownUpdateTypeError(RegistryError):
    def __init__(self, update_type: Optional[str]):
        super().__init__(500, f"no update method for {update_type!r}")
        self.update_type = update_type


def _segment(value: str) -> str:
    return quote(value, safe="")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if message:
            return str(message)
    return response.reason_phrase or f"Registry returned {response.status_code}"


class RegistryAgent:
    """Base for registry agents acting on behalf of one logged-in user."""

    def __init__(self, user_name: Optional[str] = None):
        self.user_name = user_name

    def _headers(self) -> Dict[str, str]:
        headers = {"accept": "application/json"}
        if self.user_name:
            headers[BEARER_HEADER] = self.user_name
        return headers

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        try:
            async with httpx.AsyncClient(base_url=REGISTRY_URL, timeout=REGISTRY_TIMEOUT) as client:
                response = await client.request(method, path, json=json, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.error("Registry %s %s failed: %s", method, path, exc)
            raise RegistryError(500, "The registry could not be reached") from exc

        if response.status_code >= 400:
            raise RegistryError(response.status_code, _error_message(response))

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Registry %s %s sent a non-JSON body", method, path)
            raise RegistryError(500, "The registry sent an unreadable reply") from exc

    def _parse(self, model, data: Any, path: str):
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.error("Registry reply for %s does not fit %s: %s", path, model.__name__, exc)
            raise RegistryError(500, "The registry sent an unexpected reply") from exc


class OrgAgent(RegistryAgent):
    async def get(self, org_name: str) -> Organization:
        path = f"/-/org/{_segment(org_name)}"
        return self._parse(Organization, await self._request("GET", path), path)

    async def add_team(self, org_scope: str, team_name: str, description: Optional[str] = None) -> Any:
        return await self._request(
            "PUT",
            f"/-/org/{_segment(org_scope)}/team",
            json={"name": team_name, "description": description or ""},
        )


class TeamAgent(RegistryAgent):
    async def get(self, org_scope: str, team_name: str) -> Team:
        path = f"/-/team/{_segment(org_scope)}/{_segment(team_name)}"
        return self._parse(Team, await self._request("GET", path), path)

    async def add_users(self, team_name: str, scope: str, users: List[str]) -> List[Any]:
        # The registry takes one user per call; keep the caller's order.
        results = []
        for user in users:
            results.append(
                await self._request(
                    "PUT",
                    f"/-/team/{_segment(scope)}/{_segment(team_name)}/user",
                    json={"user": user},
                )
            )
        return results

    async def add_package(self, scope: str, id: str, package: str, permissions: PackagePermission) -> Any:
        return await self._request(
            "PUT",
            f"/-/team/{_segment(scope)}/{_segment(id)}/package",
            json={"package": package, "permissions": PackagePermission(permissions).value},
        )

    async def remove_package(self, scope: str, id: str, package: str) -> Any:
        return await self._request(
            "DELETE",
            f"/-/team/{_segment(scope)}/{_segment(id)}/package",
            json={"package": package},
        )
