"""Exceptions raised by the library itself.

The response builder never raises for caller errors: those are values that get
classified and serialized. These exceptions signal misuse of the integration.
"""


class RespError(Exception):
    """Base class for all library exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ContextNotBoundError(RespError):
    """Raised when a request context is requested outside a ContextRoute."""

    def __init__(self) -> None:
        super().__init__(
            "no response context is bound; register the route with route_class=ContextRoute"
        )
