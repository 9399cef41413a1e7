"""Routes serving the number-entry page."""

from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse

from statform.core.errors import StoreWriteError, ValidationError
from statform.services.history import load_stored_statistics
from statform.services.rendering import Notice
from statform.services.submission import SubmissionHandler

from .dependencies import RendererDep, RepositoryDep, SettingsDep

router = APIRouter(tags=["pages"])

# Forms may use the bracketed ``values[]`` name; the page itself posts ``values``.
VALUE_FIELD_NAMES = ("values", "values[]")


def _render_page(
    repo: RepositoryDep,
    renderer: RendererDep,
    settings: SettingsDep,
    notices: list[Notice] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    stored = load_stored_statistics(repo, settings.sales_tax_rate)
    context = renderer.build_context(stored, notices)
    return HTMLResponse(renderer.render(context), status_code=status_code)


@router.get("/", response_class=HTMLResponse)
async def show_form(
    repo: RepositoryDep,
    renderer: RendererDep,
    settings: SettingsDep,
) -> HTMLResponse:
    """Render the form with the stored-values statistics."""
    return _render_page(repo, renderer, settings)


@router.post("/", response_class=HTMLResponse)
async def submit_values(
    request: Request,
    repo: RepositoryDep,
    renderer: RendererDep,
    settings: SettingsDep,
) -> HTMLResponse:
    """Store a submitted batch, then render the same page.

    Returns:
        200 with a confirmation notice when the batch was stored, 422 when it
        was rejected (nothing stored), 500 when an insert failed.
    """
    form = await request.form()
    fields = [name for name in VALUE_FIELD_NAMES if name in form]
    if not fields:
        # No values field at all: treat like a plain page view.
        return _render_page(repo, renderer, settings)

    raw_values = [
        item if isinstance(item, str) else ""
        for name in fields
        for item in form.getlist(name)
    ]

    handler = SubmissionHandler(repo, settings)
    try:
        receipt = handler.submit(raw_values)
    except ValidationError as err:
        return _render_page(
            repo,
            renderer,
            settings,
            notices=[Notice("error", str(err))],
            status_code=422,
        )
    except StoreWriteError as err:
        message = "Error inserting records"
        if err.partial:
            message += f" ({err.written} of {len(raw_values)} saved before the failure)"
        return _render_page(
            repo,
            renderer,
            settings,
            notices=[Notice("error", message)],
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    noun = "value" if receipt.count == 1 else "values"
    return _render_page(
        repo,
        renderer,
        settings,
        notices=[Notice("success", f"Saved {receipt.count} {noun}")],
    )
