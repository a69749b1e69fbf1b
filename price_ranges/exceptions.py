"""Error types raised by the price range collapser and its glue."""


class PriceRangeError(Exception):
    """Base class for price range errors."""


class InvalidArgumentError(PriceRangeError, ValueError):
    """Raised when a caller supplies arguments the operation cannot accept.

    Covers a non-positive target bucket count, bucket sequences that are not
    contiguous, malformed backend buckets and unknown query parameters.
    """


class EmptyDistributionError(PriceRangeError, ValueError):
    """Raised when every bucket has a zero document count."""


class SearchBackendError(PriceRangeError, RuntimeError):
    """Raised when the search backend cannot be reached or rejects a request."""
