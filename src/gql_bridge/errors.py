"""Error types raised while building or serving the bridge."""


class BridgeError(Exception):
    """Base class for all bridge errors."""


class SpecMalformed(BridgeError):
    """The API description cannot be translated into a consistent schema.

    Raised at startup; the service must not start.
    """


class InvocationError(BridgeError):
    """A field was invoked with arguments that cannot form an upstream request."""


class UpstreamFailure(BridgeError):
    """The proxied HTTP call failed (transport error or non-2xx status)."""

    def __init__(self, message: str, status_code: int | None = None, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
