from app.platform.cache.redis import TTLCache

MAX_ATTEMPTS = 3
WINDOW_SECONDS = 3600


def rate_limit_key(email: str) -> str:
    return f"rate_limit_{email}"


def is_rate_limited(
    cache: TTLCache,
    email: str,
    max_attempts: int = MAX_ATTEMPTS,
    window_seconds: int = WINDOW_SECONDS,
) -> bool:
    """
    Count an attempt for email and report whether it is over the limit.

    A limited attempt is not counted. Read and write are separate cache
    calls, so concurrent attempts may lose an increment. Cache errors are
    raised to the caller.
    """
    key = rate_limit_key(email)
    attempts = cache.get(key)
    current = int(attempts) if attempts else 0

    if current >= max_attempts:
        return True

    cache.put(key, str(current + 1), window_seconds)
    return False
