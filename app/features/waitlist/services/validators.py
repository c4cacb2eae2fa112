import re
from typing import Optional

# local@domain.tld, no whitespace and a single "@"
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Disposable and throwaway mail providers, plus obvious test addresses
SPAM_EMAIL_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"temp.*mail",
        r"disposable",
        r"throwaway",
        r"10minute",
        r"guerrilla.*mail",
        r"mailinator",
        r"test.*test",
        r"example\.com",
        r"fake.*mail",
    )
]

BOT_USER_AGENT_PATTERNS = [
    re.compile(pattern, re.IGNORECASE) for pattern in (r"bot", r"crawl", r"spider", r"scrape")
]


def is_valid_email(email) -> bool:
    """Syntactic check only; the domain is never resolved."""
    if not isinstance(email, str):
        return False
    return EMAIL_PATTERN.match(email) is not None


def is_likely_spam(email: str, user_agent: Optional[str]) -> bool:
    if any(pattern.search(email) for pattern in SPAM_EMAIL_PATTERNS):
        return True

    # A missing user agent is enough; there is no length check.
    if not user_agent:
        return True

    return any(pattern.search(user_agent) for pattern in BOT_USER_AGENT_PATTERNS)
