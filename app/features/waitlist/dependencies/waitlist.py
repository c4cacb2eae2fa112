from functools import lru_cache

from fastapi import Request

from app.features.waitlist.schemas.waitlist import WaitlistConfig
from app.features.waitlist.services.waitlist import WaitlistService
from app.platform.cache.redis import create_cache
from app.platform.config import settings
from app.platform.services.email import send_email
from app.platform.storage.sheets import create_storage


@lru_cache
def get_waitlist_service() -> WaitlistService:
    """
    Build the service once per process from settings.

    Tests replace this dependency through app.dependency_overrides.
    """
    return WaitlistService(
        config=WaitlistConfig.from_settings(settings),
        storage=create_storage(),
        cache=create_cache(),
        send_mail=send_email,
    )


def resolve_waitlist_service(request: Request) -> WaitlistService:
    """
    Build the service from inside a handler, only when the action needs storage.

    Honours app.dependency_overrides the same way Depends(get_waitlist_service) does.
    """
    provider = request.app.dependency_overrides.get(get_waitlist_service, get_waitlist_service)
    return provider()
