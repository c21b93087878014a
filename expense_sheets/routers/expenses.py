from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette import status

from expense_sheets.core.errors import status_for_error
from expense_sheets.models.expense import ExpenseFormIn
from expense_sheets.services.submission import ExpenseSubmitter

router = APIRouter(prefix="/api/expenses", tags=["expenses"])

# Dependencies -----------------------------------------------------


def get_submitter(request: Request) -> ExpenseSubmitter:
    return request.app.state.submitter


# Routes -----------------------------------------------------------
@router.post("", status_code=201, summary="Validate an expense and send it to the sheet")
async def submit_expense(
    payload: ExpenseFormIn,
    submitter: ExpenseSubmitter = Depends(get_submitter),
):
    # Validation and in-flight rejections raise and go through the error handlers
    outcome = await submitter.submit(payload.model_dump())
    if outcome.ok:
        return JSONResponse(status_code=status.HTTP_201_CREATED, content=outcome.as_dict())
    return JSONResponse(status_code=status_for_error(outcome.error), content=outcome.as_dict())
