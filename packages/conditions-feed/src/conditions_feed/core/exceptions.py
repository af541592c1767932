class FeedError(Exception):
    """Base conditions feed exception."""


class ProviderRequestError(FeedError):
    """Raised when a provider request failed after retries."""


class ProviderPayloadError(FeedError):
    """Raised when a provider payload is missing expected fields."""
