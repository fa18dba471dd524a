"""Browser-based interface for managing user records."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from .config import DEFAULT_TITLE
from .models import User
from .storage import UserStore
from .validation import FieldError, UserValidationError, validate_user

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

NOT_FOUND_MESSAGE = "User not found."
NO_RESULTS_MESSAGE = "No users found."

logger = logging.getLogger("userdir.web")


def _error_view(errors: List[FieldError]) -> List[Dict[str, str]]:
    return [{"field": error.field, "message": error.message} for error in errors]


def create_app(
    *,
    store: Optional[UserStore] = None,
    title: str = DEFAULT_TITLE,
) -> FastAPI:
    """Create the user directory web application around ``store``."""

    if store is None:
        store = UserStore()

    app = FastAPI(
        title=title,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.store = store

    templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
    templates.env.globals["app_title"] = title

    def _render(
        request: Request,
        template: str,
        *,
        title: str,
        status_code: int = status.HTTP_200_OK,
        **context: Any,
    ) -> HTMLResponse:
        context.setdefault("errors", [])
        context.setdefault("message", None)
        return templates.TemplateResponse(
            request,
            template,
            {"title": title, **context},
            status_code=status_code,
        )

    def _redirect_to_list(request: Request) -> RedirectResponse:
        return RedirectResponse(
            request.url_for("list_users"),
            status_code=status.HTTP_302_FOUND,
        )

    def _render_update_form(
        request: Request,
        user: Optional[User],
        *,
        status_code: int = status.HTTP_200_OK,
        errors: Optional[List[FieldError]] = None,
    ) -> HTMLResponse:
        return _render(
            request,
            "update_user.html",
            title="Update user",
            status_code=status_code,
            user=user,
            errors=_error_view(errors or []),
            message=NOT_FOUND_MESSAGE if user is None else None,
        )

    @app.get("/", response_class=HTMLResponse, name="list_users")
    async def list_users(request: Request):
        return _render(request, "index.html", title="User list", users=store.list())

    @app.get("/create", response_class=HTMLResponse, name="show_create_user")
    async def show_create_user(request: Request):
        return _render(request, "create_user.html", title="Create user")

    @app.post("/create", name="create_user")
    async def create_user(request: Request):
        form = await request.form()
        try:
            fields = validate_user(form)
        except UserValidationError as exc:
            logger.info("Rejected new user with %d validation error(s)", len(exc.errors))
            return _render(
                request,
                "create_user.html",
                title="Create user",
                status_code=status.HTTP_400_BAD_REQUEST,
                errors=_error_view(exc.errors),
            )

        store.add(fields)
        return _redirect_to_list(request)

    @app.get("/{user_id}/update", response_class=HTMLResponse, name="show_update_user")
    async def show_update_user(request: Request, user_id: str):
        user = store.get(user_id)
        if user is None:
            logger.info("Update form requested for unknown user %r", user_id)
            return _render_update_form(request, None, status_code=status.HTTP_404_NOT_FOUND)
        return _render_update_form(request, user)

    @app.post("/{user_id}/update", name="update_user")
    async def update_user(request: Request, user_id: str):
        existing = store.get(user_id)
        if existing is None:
            logger.warning("Refusing to update unknown user %r", user_id)
            return _render_update_form(request, None, status_code=status.HTTP_404_NOT_FOUND)

        form = await request.form()
        try:
            fields = validate_user(form)
        except UserValidationError as exc:
            logger.info(
                "Rejected update for user %s with %d validation error(s)",
                existing.id,
                len(exc.errors),
            )
            return _render_update_form(
                request,
                existing,
                status_code=status.HTTP_400_BAD_REQUEST,
                errors=exc.errors,
            )

        if not store.update(existing.id, fields):
            # Deleted between the lookup and the write.
            return _render_update_form(request, None, status_code=status.HTTP_404_NOT_FOUND)
        return _redirect_to_list(request)

    @app.post("/{user_id}/delete", name="delete_user")
    async def delete_user(request: Request, user_id: str):
        if not store.delete(user_id):
            logger.info("Delete requested for unknown user %r", user_id)
        return _redirect_to_list(request)

    @app.get("/search", response_class=HTMLResponse, name="search_users")
    async def search_users(request: Request, name: str = Query(...)):
        results = store.search(name)
        if results:
            return _render(
                request,
                "search_results.html",
                title="Search results",
                users=results,
                query=name.strip(),
            )
        return _render(
            request,
            "search_results.html",
            title="Search results",
            status_code=status.HTTP_404_NOT_FOUND,
            users=[],
            query=name.strip(),
            message=NO_RESULTS_MESSAGE,
        )

    return app


__all__ = ["create_app", "NOT_FOUND_MESSAGE", "NO_RESULTS_MESSAGE"]
