from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from app.features.waitlist.dependencies.waitlist import get_waitlist_service, resolve_waitlist_service
from app.features.waitlist.exceptions import SignupRejected
from app.features.waitlist.schemas.waitlist import WaitListResponse, WaitlistIn, WaitlistOut
from app.features.waitlist.services.waitlist import WaitlistService
from app.platform.config import settings
from app.platform.exceptions import SERVER_ERROR_MESSAGE
from app.platform.logger import get_logger
from app.platform.response import api_response

logger = get_logger("waitlist_routes")

router = APIRouter(tags=["Waitlist"])


@router.post("/waitlist", response_model=WaitListResponse, status_code=status.HTTP_201_CREATED)
def join_waitlist(
    waitlist_in: WaitlistIn, service: WaitlistService = Depends(get_waitlist_service)
):
    try:
        result = service.signup(waitlist_in)

        return api_response(
            data=WaitlistOut(email=result.email, signup_number=result.signup_number),
            message="Successfully added to waitlist",
            status_code=status.HTTP_201_CREATED,
        )
    except SignupRejected:
        raise
    except Exception as e:
        logger.exception(f"Error processing form submission: {e}")
        return api_response(
            message=SERVER_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


@router.get("/waitlist")
def waitlist_info(request: Request, action: Optional[str] = Query(default=None)):
    # health and the default answer must not need the sheet or its credentials
    if action == "stats":
        return get_stats(request)
    if action == "export":
        return export_data(request)
    if action == "health":
        return api_response(message="API is healthy")
    return api_response(message=f"{settings.SERVICE_NAME} API is running")


def get_stats(request: Request):
    try:
        stats = resolve_waitlist_service(request).get_stats()
    except Exception as e:
        logger.exception(f"Error getting stats: {e}")
        return api_response(
            message="Failed to get stats",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return api_response(data=stats, message="Stats retrieved")


def export_data(request: Request):
    try:
        export = resolve_waitlist_service(request).export_csv()
    except Exception as e:
        logger.exception(f"Error exporting data: {e}")
        return api_response(
            message="Failed to export data",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return api_response(data=export, message="Data exported")
