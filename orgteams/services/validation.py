from typing import Optional
from urllib.parse import quote

MAX_NAME_LENGTH = 214

# Characters a browser's encodeURIComponent leaves untouched.
URL_SAFE_CHARS = "-_.!~*'()"


def validate_username(name: Optional[str]) -> Optional[str]:
    """Return why ``name`` is not a valid user/org/team name, or None if it is."""
    if not isinstance(name, str) or not name:
        return "Name cannot be empty"
    if name != name.lower():
        return "Name must be lowercase"
    if name != quote(name, safe=URL_SAFE_CHARS):
        return "Name may not contain non-url-safe chars"
    if name.startswith("."):
        return 'Name may not start with "."'
    if len(name) > MAX_NAME_LENGTH:
        return f"Name may not be longer than {MAX_NAME_LENGTH} characters"
    return None


def invalid_user_name(name: Optional[str]) -> bool:
    return validate_username(name) is not None
