"""Rate limiting configuration."""
from slowapi import Limiter
from slowapi.util import get_remote_address

from guestlist.core.config import settings


def get_client_ip(request):
    """Get client IP for rate limiting, considering proxies."""
    # Check X-Forwarded-For header (from reverse proxies)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first one
        return forwarded.split(",")[0].strip()

    # Fall back to direct connection IP
    return get_remote_address(request)


# Uses Redis if REDIS_URL is set, falls back to memory for local dev
limiter = Limiter(
    key_func=get_client_ip,
    default_limits=["100/minute"],
    storage_uri=settings.REDIS_URL or "memory://",
    strategy="fixed-window"
)

# Door scanners share one IP behind the venue NAT, so check-in is generous.
# Every export reads the whole sheet and counts against the Sheets API quota.
RATE_LIMITS = {
    "check_in": "120/minute",
    "export": "30/minute",
}
