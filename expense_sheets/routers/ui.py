from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from expense_sheets.models.constants import CATEGORIES
from expense_sheets.services.errors import (
    ExpenseValidationError,
    SubmissionInProgressError,
)
from expense_sheets.services.expense_form import ExpenseFormState
from expense_sheets.services.submission import ExpenseSubmitter

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

FORM_FIELDS = ("date", "category", "description", "amount")


def get_submitter(request: Request) -> ExpenseSubmitter:
    return request.app.state.submitter


def _page_context(
    request: Request,
    submitter: ExpenseSubmitter,
    form_state: Optional[ExpenseFormState] = None,
    open_settings: bool = False,
) -> Dict[str, Any]:
    settings = request.app.state.settings
    center = submitter.notifications
    endpoint = submitter.endpoint_url
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "categories": CATEGORIES,
        "form": (form_state or ExpenseFormState.defaults()).as_dict(),
        "notification": center.current(),
        "notification_ms": int(center.remaining_seconds() * 1000),
        "endpoint_url": endpoint,
        "endpoint_trusted": endpoint.startswith(submitter.client.url_prefix),
        "url_prefix": submitter.client.url_prefix,
        "settings_open": open_settings or submitter.settings_open,
        "is_loading": submitter.is_loading,
    }


@router.get("/", response_class=HTMLResponse)
async def ui_home(
    request: Request,
    settings: int = 0,
    submitter: ExpenseSubmitter = Depends(get_submitter),
):
    # the query flag opens the modal for this page only
    return templates.TemplateResponse(
        request, "index.html", _page_context(request, submitter, open_settings=bool(settings))
    )


@router.post("/ui/expenses", response_class=HTMLResponse)
async def ui_expense_submit(
    request: Request, submitter: ExpenseSubmitter = Depends(get_submitter)
):
    form = await request.form()
    fields = {name: form.get(name) for name in FORM_FIELDS}
    form_state = ExpenseFormState.from_fields(fields)
    status_code = status.HTTP_200_OK

    try:
        outcome = await submitter.submit(fields)
    except ExpenseValidationError as e:
        form_state = form_state.with_error(e.message)
    except SubmissionInProgressError as e:
        form_state = form_state.with_error(e.message)
        status_code = status.HTTP_409_CONFLICT
    else:
        form_state = form_state.after_outcome(outcome)

    return templates.TemplateResponse(
        request,
        "index.html",
        _page_context(request, submitter, form_state),
        status_code=status_code,
    )


@router.post("/ui/settings", response_class=RedirectResponse)
async def ui_settings_submit(
    request: Request, submitter: ExpenseSubmitter = Depends(get_submitter)
):
    form = await request.form()
    submitter.set_endpoint_url(form.get("google_sheet_url"))
    submitter.close_settings()
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/ui/settings/close", response_class=RedirectResponse)
async def ui_settings_close(submitter: ExpenseSubmitter = Depends(get_submitter)):
    submitter.close_settings()
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/ui/notification/dismiss", response_class=RedirectResponse)
async def ui_notification_dismiss(submitter: ExpenseSubmitter = Depends(get_submitter)):
    submitter.notifications.dismiss()
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
