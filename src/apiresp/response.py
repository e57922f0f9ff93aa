"""Fluent builder for JSON responses.

Configure a Response with chained calls, then finish it with exactly one
terminal call that writes {"code": ..., "msg": ...} to the request Context:

    resp.with_code(403001).with_message("username taken").forbidden(c)
    # 403 {"code": 403001, "msg": "username taken"}

    if resp.with_message_log("load failed: ", err).check_internal_error(c, err):
        return

Explicitly set fields override the terminal method's default classification;
unset fields (0 / "") fall back to it. Error terminals abort the pipeline,
success() does not.
"""

import time
from typing import Any, Self

from apiresp.context import Context
from apiresp.logging import Caller, find_caller, get_logger
from apiresp.schemas.error import (
    BAD_REQUEST,
    FORBIDDEN,
    INTERNAL_ERROR,
    NOT_FOUND,
    OK,
    UNAUTHORIZED,
    ErrorInfo,
)

logger = get_logger(__name__)


def _format(parts: tuple[object, ...]) -> str:
    """Concatenate values, with a space only between two adjacent non-strings.

    ("user ", 42, " not found") -> "user 42 not found"; (1, 2) -> "1 2".
    """
    out: list[str] = []
    for i, part in enumerate(parts):
        if i and not isinstance(part, str) and not isinstance(parts[i - 1], str):
            out.append(" ")
        out.append(str(part))
    return "".join(out)


def _log_error(err: object, caller: Caller) -> None:
    logger.error(
        "error_logged",
        error=str(err),
        function=caller.function,
        file=caller.file,
        line=caller.line,
        unix_time=int(time.time()),
    )


class Response:
    """Single-use response builder. Create one per call, never reuse it."""

    def __init__(self) -> None:
        self.code = 0
        self.message = ""
        self.aborted = False

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def with_code(self, code: int) -> Self:
        self.code = code
        return self

    def with_message(self, *parts: object) -> Self:
        self.message = _format(parts)
        return self

    def with_code_and_message(self, info: ErrorInfo) -> Self:
        self.code = info.code
        self.message = info.message
        return self

    def abort(self) -> Self:
        """Make the next terminal call stop the pipeline, without writing now."""
        self.aborted = True
        return self

    def log(self, err: object) -> Self:
        """Log ``err`` together with the location this method was called from."""
        _log_error(err, find_caller())
        return self

    def try_(self, err: object) -> bool:
        return err is not None

    # ------------------------------------------------------------------
    # Payload helpers
    # ------------------------------------------------------------------
    def cover_data(self, base: ErrorInfo) -> ErrorInfo:
        """Overlay the fields set on this builder onto ``base``."""
        update: dict[str, Any] = {}
        if self.code != 0:
            update["code"] = self.code
        if self.message != "":
            update["message"] = self.message
        return base.model_copy(update=update)

    def default_data(self, data: Any) -> Any:
        """Substitute the builder's own classification (over OK) when ``data`` is None."""
        if data is None:
            return self.cover_data(OK)
        return data

    def finish_context(self, c: Context, status_code: int, data: Any) -> None:
        if self.aborted:
            c.abort_with_status_json(status_code, data)
            return
        c.json(status_code, data)

    # ------------------------------------------------------------------
    # Terminals
    # ------------------------------------------------------------------
    def _fail(self, c: Context, status_code: int, base: ErrorInfo) -> Self:
        self.aborted = True
        self.finish_context(c, status_code, self.cover_data(base))
        return self

    def internal_error(self, c: Context) -> Self:
        return self._fail(c, 500, INTERNAL_ERROR)

    def forbidden(self, c: Context) -> Self:
        return self._fail(c, 403, FORBIDDEN)

    def not_found(self, c: Context) -> Self:
        return self._fail(c, 404, NOT_FOUND)

    def unauthorized(self, c: Context) -> Self:
        return self._fail(c, 401, UNAUTHORIZED)

    def bad_request(self, c: Context) -> Self:
        return self._fail(c, 400, BAD_REQUEST)

    def success(self, c: Context, data: Any = None) -> None:
        self.finish_context(c, 200, self.default_data(data))

    def check_internal_error(self, c: Context, err: object) -> bool:
        """Respond 500 and return True if ``err`` is set; otherwise do nothing.

        Usage:
            if resp.check_internal_error(c, err):
                return
        """
        if err is None:
            return False
        self.internal_error(c)
        return True


# ----------------------------------------------------------------------
# Module-level shortcuts: build a fresh Response and delegate
# ----------------------------------------------------------------------
def with_code(code: int) -> Response:
    """Bind ``code`` to the response. Not meant for success()."""
    return Response().with_code(code)


def with_message(*parts: object) -> Response:
    """Bind the joined ``parts`` as the response msg. Not meant for success()."""
    return Response().with_message(*parts)


def with_code_and_message(info: ErrorInfo) -> Response:
    return Response().with_code_and_message(info)


def with_message_log(*parts: object) -> Response:
    """Like with_message(), and also log the message with the caller's location.

    A single None argument (e.g. a nil error) sets the message but skips the log.
    """
    r = Response().with_message(*parts)
    if len(parts) == 1 and parts[0] is None:
        return r
    _log_error(r.message, find_caller())
    return r


def log(err: object) -> Response:
    """Log ``err`` with the caller's location and time, and return a fresh builder."""
    _log_error(err, find_caller())
    return Response()


def success(c: Context, data: Any = None) -> None:
    Response().success(c, data)


def internal_error(c: Context) -> Response:
    return Response().internal_error(c)


def forbidden(c: Context) -> Response:
    return Response().forbidden(c)


def not_found(c: Context) -> Response:
    return Response().not_found(c)


def unauthorized(c: Context) -> Response:
    return Response().unauthorized(c)


def bad_request(c: Context) -> Response:
    return Response().bad_request(c)
