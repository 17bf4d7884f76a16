"""HTML page rendering backed by Jinja2 templates."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class PageRenderer:
    """Render a named view with a context dictionary."""

    def __init__(self, directory: Path | str = TEMPLATES_DIR) -> None:
        self._templates = Jinja2Templates(directory=str(directory))

    def render(self, request: Request, view: str, context: Dict[str, Any]) -> Response:
        return self._templates.TemplateResponse(request, f"{view}.html", context)


__all__ = ["PageRenderer", "TEMPLATES_DIR"]
