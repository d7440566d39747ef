class ServiceError(Exception):
    pass


class GenerationError(ServiceError):
    """Any failure while turning a filter input into a recipe."""

    def __init__(self, message: str, cause: str | None = None):
        super().__init__(message)
        self.cause = cause or message


class RecipeDecodeError(GenerationError):
    def __init__(self, raw_text: str, reason: str):
        super().__init__(f"Could not decode recipe payload: {reason}", cause=reason)
        self.raw_text = raw_text
        self.reason = reason


class RateLimitedError(GenerationError):
    pass


class GeminiConfigurationError(ServiceError):
    pass


class InvalidGistAddressError(ServiceError):
    def __init__(self, url: str):
        super().__init__(f"Not a recognizable gist address: {url}")
        self.url = url


class RemoteFetchError(ServiceError):
    def __init__(self, url: str, reason: str, status_code: int | None = None):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class RemoteSyncError(ServiceError):
    def __init__(self, gist_id: str, reason: str, status_code: int | None = None):
        super().__init__(f"Failed to update gist {gist_id}: {reason}")
        self.gist_id = gist_id
        self.reason = reason
        self.status_code = status_code
