from fastapi import APIRouter, Depends, Request, Response
from starlette import status

from expense_sheets.models.endpoint import EndpointConfig, EndpointConfigOut
from expense_sheets.models.notification import NotificationOut
from expense_sheets.services.submission import ExpenseSubmitter

router = APIRouter(prefix="/api", tags=["settings"])


def get_submitter(request: Request) -> ExpenseSubmitter:
    return request.app.state.submitter


def _endpoint_out(submitter: ExpenseSubmitter) -> EndpointConfigOut:
    url = submitter.endpoint_url
    return EndpointConfigOut(
        url=url,
        configured=bool(url),
        trusted=bool(url) and url.startswith(submitter.client.url_prefix),
    )


@router.get(
    "/settings/endpoint",
    response_model=EndpointConfigOut,
    summary="Get the configured Google Sheets web app URL",
)
async def get_endpoint(submitter: ExpenseSubmitter = Depends(get_submitter)):
    return _endpoint_out(submitter)


@router.put(
    "/settings/endpoint",
    response_model=EndpointConfigOut,
    summary="Set or clear the Google Sheets web app URL",
)
async def put_endpoint(
    payload: EndpointConfig, submitter: ExpenseSubmitter = Depends(get_submitter)
):
    submitter.set_endpoint_url(payload.url)
    return _endpoint_out(submitter)


@router.get(
    "/notification",
    response_model=NotificationOut | None,
    summary="Get the active notification, if any",
)
async def get_notification(submitter: ExpenseSubmitter = Depends(get_submitter)):
    center = submitter.notifications
    active = center.current()
    if active is None:
        return None
    return NotificationOut(
        message=active.message, type=active.type, expires_in=center.remaining_seconds()
    )


@router.delete(
    "/notification",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Dismiss the active notification",
)
async def dismiss_notification(submitter: ExpenseSubmitter = Depends(get_submitter)):
    submitter.notifications.dismiss()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
