"""Per-request response context.

A Context collects the single JSON response a handler produces. It offers two
write variants: a plain write, and an abort write that also tells the rest of
the request pipeline to stop. ContextRoute creates one per request and binds it
to a ContextVar, so dependencies and endpoints reach it through get_context().
"""

from contextvars import ContextVar, Token
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.requests import Request

from apiresp.exceptions import ContextNotBoundError, RespError
from apiresp.logging import get_logger

logger = get_logger(__name__)

_current: ContextVar["Context | None"] = ContextVar("apiresp_context", default=None)


class Context:
    """Response sink for one request.

    Usage:
        c = Context()
        c.json(200, {"ok": True})
        c.render()  # JSONResponse(status_code=200, content={"ok": True})
    """

    def __init__(self, request: Request | None = None) -> None:
        self.request = request
        self.status_code: int | None = None
        self.body: Any = None
        self.written = False
        self._aborted = False

    def is_aborted(self) -> bool:
        return self._aborted

    def abort(self) -> None:
        """Stop the pipeline without writing a response."""
        self._aborted = True

    def json(self, status_code: int, data: Any) -> None:
        """Write ``data`` with ``status_code``. Ignored once an abort write was recorded."""
        if self._aborted and self.written:
            logger.debug("write_after_abort", status_code=status_code)
            return
        self._write(status_code, data)

    def abort_with_status_json(self, status_code: int, data: Any) -> None:
        """Write ``data`` with ``status_code`` and stop the pipeline.

        The first abort write is final; any later write is ignored.
        """
        if self._aborted and self.written:
            logger.debug("write_after_abort", status_code=status_code)
            return
        self._aborted = True
        self._write(status_code, data)

    def _write(self, status_code: int, data: Any) -> None:
        self.status_code = status_code
        self.body = data
        self.written = True

    def render(self) -> JSONResponse:
        """Build the HTTP response for the recorded write."""
        if not self.written or self.status_code is None:
            raise RespError("nothing was written to the response context")
        return JSONResponse(status_code=self.status_code, content=jsonable_encoder(self.body))


def bind_context(context: Context) -> Token["Context | None"]:
    """Make ``context`` current; returns a token for unbind_context()."""
    return _current.set(context)


def unbind_context(token: Token["Context | None"]) -> None:
    _current.reset(token)


def current_context() -> Context | None:
    return _current.get()


async def get_context() -> Context:
    """FastAPI dependency that provides the request's response context.

    Usage in endpoints:
        @router.get("/users/{user_id}")
        async def get_user(c: Ctx, user_id: int) -> None:
            resp.not_found(c)
    """
    context = _current.get()
    if context is None:
        raise ContextNotBoundError()
    return context
