"""Error taxonomy shared by the ingestion pipeline."""


class FoodVisionError(Exception):
    """Base class for classified pipeline failures."""

    kind = "FoodVisionError"
    retryable = False
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FoodVisionError):
    """The image payload or its media type is unusable."""

    kind = "ValidationError"
    status_code = 400


class NotFound(FoodVisionError):
    """The requested row does not exist for this user."""

    kind = "NotFound"
    status_code = 404


class MalformedResponse(FoodVisionError):
    """The upstream model answered without a usable JSON object."""

    kind = "MalformedResponse"
    status_code = 502


class RateLimited(FoodVisionError):
    """The upstream model is throttling requests."""

    kind = "RateLimited"
    retryable = True
    status_code = 429


class QuotaExhausted(FoodVisionError):
    """The upstream account has no remaining usage credit."""

    kind = "QuotaExhausted"
    status_code = 402


class UpstreamError(FoodVisionError):
    """Any other failed upstream call."""

    kind = "UpstreamError"
    retryable = True
    status_code = 502


class EmptyResponse(FoodVisionError):
    """The upstream call succeeded but carried no content."""

    kind = "EmptyResponse"
    retryable = True
    status_code = 502


class StorageError(FoodVisionError):
    """The object store rejected or failed the image upload."""

    kind = "StorageError"
    retryable = True
    status_code = 503
