"""Guest list endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from guestlist.api.deps import get_checkin_locks, get_store
from guestlist.core.exceptions import BackendError, SchemaError
from guestlist.core.locks import KeyedLock
from guestlist.core.logging_config import get_logger
from guestlist.core.rate_limit import RATE_LIMITS, limiter
from guestlist.schemas import CheckinRequest, CheckinResponse, MessageResponse
from guestlist.services.checkin import CheckinOutcome, attempt_check_in
from guestlist.services.export import export_all
from guestlist.sheets import TableStore

logger = get_logger(__name__)
router = APIRouter()

# Repeat check-ins answer 300; existing scanner clients key off this code
HTTP_ALREADY_CHECKED = 300

READ_ERROR_MESSAGE = "Error reading the guest sheet."
CHECKIN_ERROR_MESSAGE = "Error processing check-in."


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


# Endpoints are plain functions: the sheet client blocks, so FastAPI runs
# each request in its own threadpool worker.
@router.get(
    "/getData",
    response_class=PlainTextResponse,
    responses={500: {"model": MessageResponse}},
)
@limiter.limit(RATE_LIMITS["export"])
def get_data(request: Request, store: TableStore = Depends(get_store)):
    """
    Export the whole guest sheet as CSV.

    The header line holds the normalized column names; every data row has
    exactly as many fields as the header.

    Example:
        Response (200, text/csv):
            id,email,username,teamname,tshirt,checked,checked_at
            42,a@x.com,ana,"Rockets, Inc",M,TRUE,2025-01-31T18:04:05.123Z
    """
    try:
        csv_text = export_all(store)
    except BackendError:
        logger.exception("export_failed")
        return _message(500, READ_ERROR_MESSAGE)

    return PlainTextResponse(csv_text, media_type="text/csv")


@router.post(
    "/postData",
    response_model=CheckinResponse,
    responses={
        HTTP_ALREADY_CHECKED: {"model": MessageResponse},
        400: {"model": MessageResponse},
        404: {"model": MessageResponse},
        500: {"model": MessageResponse},
        503: {"model": MessageResponse},
    },
)
@limiter.limit(RATE_LIMITS["check_in"])
def post_data(
    request: Request,
    checkin_request: CheckinRequest,
    store: TableStore = Depends(get_store),
    locks: Optional[KeyedLock] = Depends(get_checkin_locks),
):
    """
    Check a guest in by identifier (idempotent).

    Looks the identifier up in the guest sheet. The first attempt marks the
    row as checked and stamps ``checked_at``; every later attempt is a no-op
    answered with 300.

    Example:
        Request:
            POST /api/v1/postData
            {"id": "42"}

        Response (200):
            {"email": "a@x.com", "username": "ana", "teamName": "Rockets", "tShirt": "M"}

        Response (300):
            {"message": "Person already checked"}

        Response (404):
            {"message": "Person not found!"}

    Errors:
        - 400 when the id is missing or malformed
        - 500 when the sheet lacks a required column
        - 503 when the sheet cannot be read or written
    """
    if not checkin_request.id:
        return _message(400, "please provide an ID")

    try:
        result = attempt_check_in(store, checkin_request.id, locks=locks)
    except SchemaError as e:
        logger.error("checkin_schema_error", error=str(e))
        return _message(500, CHECKIN_ERROR_MESSAGE)
    except BackendError:
        logger.exception("checkin_backend_error")
        return _message(503, CHECKIN_ERROR_MESSAGE)

    if result.outcome is CheckinOutcome.NOT_FOUND:
        return _message(404, "Person not found!")

    if result.outcome is CheckinOutcome.ALREADY_CHECKED:
        return _message(HTTP_ALREADY_CHECKED, "Person already checked")

    return CheckinResponse(**result.profile)
