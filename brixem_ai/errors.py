"""
Error taxonomy for the chat client.

Nothing here is retried or recovered by the client itself; every failure
surfaces to the immediate caller.
"""


class AIClientError(Exception):
    """Base class for chat client failures."""
    pass


class ConfigurationError(AIClientError):
    """Unknown provider or missing credential. Raised before any network call."""
    pass


class ProviderRequestError(AIClientError):
    """The request could not be completed (connect/read failure, timeout)."""
    pass


class UpstreamError(ProviderRequestError):
    """Provider answered with a non-2xx status."""

    def __init__(self, provider: str, status_code: int, body: str):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(f"{provider} API error: {status_code} {body}")


class ResponseShapeError(AIClientError):
    """Provider response JSON did not have the expected structure."""
    pass
