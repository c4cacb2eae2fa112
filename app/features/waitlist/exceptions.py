from typing import Any, Optional

from fastapi import HTTPException, status


class SignupRejected(HTTPException):
    """An expected refusal of a submission; reported to the caller, not logged as an error"""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Signup rejected"

    def __init__(self, message: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=message or self.message)


class RateLimited(SignupRejected):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    message = "Too many requests. Please try again later."


class InvalidEmail(SignupRejected):
    message = "Invalid email format"


class SpamRejected(SignupRejected):
    # Deliberately vague so the heuristic is not revealed
    message = "Please use a valid email address"


class DuplicateSignup(SignupRejected):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, original_signup_date: Any, formatted_date: str):
        self.original_signup_date = original_signup_date
        super().__init__(f"Email already registered on {formatted_date}")
