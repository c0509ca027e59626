"""Check-in submission: records that a user recited some pages."""

import logging

from pydantic import ValidationError

from src.core.exceptions import APIError
from src.core.models import CheckInRequest, CheckInResponse

logger = logging.getLogger(__name__)

CHECKIN_INCOMPLETE_TEXT = "Please fill in all fields and record audio"
CHECKIN_FAILED_TEXT = "Error during check-in"


def submit_check_in(client, username: str, recited_pages: str, recite_duration: int) -> str:
    """Post a check-in and return the message to show the user.

    No request is made unless username, recited pages and a nonzero
    duration are all present.
    """
    if not username or not recited_pages or not recite_duration:
        return CHECKIN_INCOMPLETE_TEXT

    try:
        request = CheckInRequest(
            username=username,
            recited_pages=recited_pages,
            recite_duration=recite_duration,
        )
        body = client.record_recitation(**request.model_dump())
    except APIError as exc:
        # Error replies that still carry a message are shown as-is
        if exc.category != "http" or not isinstance(exc.body, dict) or "message" not in exc.body:
            logger.error("Check-in failed: %s", exc)
            return CHECKIN_FAILED_TEXT
        logger.warning("Check-in rejected by the service: %s", exc.body)
        body = exc.body
    except ValidationError as exc:
        logger.error("Check-in request invalid: %s", exc)
        return CHECKIN_FAILED_TEXT

    try:
        response = CheckInResponse.model_validate(body)
    except ValidationError as exc:
        logger.error("Unexpected check-in response: %s", exc)
        return CHECKIN_FAILED_TEXT

    logger.info("Check-in record: %s", response.record)
    return response.message
