"""FastAPI route class that binds a response Context to every request."""

import functools
import inspect
import uuid
from collections.abc import Callable, Coroutine
from typing import Any

import structlog
from fastapi.routing import APIRoute
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response

from apiresp.config import settings
from apiresp.context import Context, bind_context, current_context, unbind_context


def _context_response(context: Context) -> Response:
    if not context.written:
        # Aborted without a body
        return Response(status_code=200)
    return context.render()


def _skip_when_aborted(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap ``endpoint`` so the bound Context decides the response.

    The endpoint does not run once a dependency aborted the Context, and its
    return value is dropped once it wrote to the Context. Both cases return a
    starlette Response, which FastAPI passes through without response_model
    validation and without raising through yield dependencies.

    functools.wraps keeps the original signature visible to FastAPI's
    dependency and response_model inspection.
    """

    @functools.wraps(endpoint)
    async def guarded(*args: Any, **kwargs: Any) -> Any:
        context = current_context()
        if context is not None and context.is_aborted():
            return _context_response(context)
        if inspect.iscoroutinefunction(endpoint):
            result = await endpoint(*args, **kwargs)
        else:
            result = await run_in_threadpool(endpoint, *args, **kwargs)
        if context is not None and context.written:
            return context.render()
        return result

    return guarded


class ContextRoute(APIRoute):
    """APIRoute that gives each request its own response Context.

    - Reads X-Request-ID (configurable) from the request, or generates a UUID
    - Binds request_id to structlog context for every log in the request
    - Renders whatever was written to the Context in place of the endpoint's return value
    - Skips the endpoint if a dependency aborted the Context

    Usage:
        router = APIRouter(route_class=ContextRoute)

        @router.get("/users/{user_id}")
        async def get_user(c: Ctx, user_id: int) -> None:
            resp.with_message("user ", user_id, " not found").not_found(c)
    """

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        super().__init__(path, _skip_when_aborted(endpoint), **kwargs)

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()
        header = settings.request_id_header

        async def context_route_handler(request: Request) -> Response:
            request_id = request.headers.get(header) or str(uuid.uuid4())
            token = bind_context(Context(request))
            try:
                with structlog.contextvars.bound_contextvars(request_id=request_id):
                    response = await handler(request)
            finally:
                unbind_context(token)

            response.headers[header] = request_id
            return response

        return context_route_handler

