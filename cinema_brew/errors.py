# cinema_brew/errors.py
import openai

FORMAT_ERROR_MESSAGE = (
    "The AI returned an invalid format. This usually happens when the concept "
    "is too complex. Try a simpler prompt."
)
QUOTA_ERROR_MESSAGE = (
    "The studio is currently out of credits (API Quota reached). "
    "Please wait a minute before brewing another project."
)

_QUOTA_CODES = {"insufficient_quota", "rate_limit_exceeded"}


class ProductionError(Exception):
    """Base for failures whose message is safe to show to the end user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FormatError(ProductionError):
    def __init__(self, message: str = FORMAT_ERROR_MESSAGE):
        super().__init__(message)


class QuotaError(ProductionError):
    def __init__(self, message: str = QUOTA_ERROR_MESSAGE):
        super().__init__(message)


class TransientImageError(Exception):
    """
    A single storyboard image request failed. Internal only: the fetcher
    either retries it or turns it into an empty frame.
    """

    def __init__(self, message: str, *, rate_limited: bool = False):
        super().__init__(message)
        self.rate_limited = rate_limited


def is_rate_limited(exc: BaseException) -> bool:
    """
    Decide from the error's structure (type, HTTP status, API error code)
    whether the upstream refused us for quota/rate reasons.
    """
    if isinstance(exc, openai.RateLimitError):
        return True
    if getattr(exc, "status_code", None) == 429:
        return True
    return getattr(exc, "code", None) in _QUOTA_CODES
