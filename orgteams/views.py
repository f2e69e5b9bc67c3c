from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    view: str,
    data: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    """Render ``view`` (e.g. ``"team/show"``) with ``data`` as its context."""
    context = dict(data or {})
    context.setdefault("notices", getattr(request.state, "notices", []))
    return templates.TemplateResponse(
        request,
        f"{view}.html",
        context,
        status_code=status_code,
    )


def not_found(request: Request, message: Optional[str] = None):
    return render(request, "errors/not-found", {"message": message}, status_code=404)


def internal_error(request: Request, message: Optional[str] = None):
    return render(request, "errors/internal", {"message": message}, status_code=500)
