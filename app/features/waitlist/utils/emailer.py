from datetime import datetime
from typing import Tuple

from app.platform.services.email import env


def render_signup_notification(
    service_name: str, email: str, signup_number: int, signed_up_at: datetime, sheet_url: str
) -> Tuple[str, str]:
    """Subject and HTML body of the "new signup" email sent to the team"""
    subject = f"New {service_name} Signup (#{signup_number})"
    template = env.get_template("new_signup.html")
    body = template.render(
        email=email,
        signup_number=signup_number,
        signed_up_at=signed_up_at.astimezone().strftime("%a %b %d %Y %H:%M:%S %Z"),
        sheet_url=sheet_url,
    )
    return subject, body
