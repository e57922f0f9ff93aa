"""Unit tests for the per-request response Context."""

import pytest

from apiresp.context import Context, bind_context, get_context, unbind_context
from apiresp.exceptions import ContextNotBoundError, RespError
from apiresp.schemas.error import NOT_FOUND


def test_plain_writes_replace_each_other() -> None:
    c = Context()
    c.json(200, {"a": 1})
    c.json(201, {"b": 2})
    assert (c.status_code, c.body) == (201, {"b": 2})
    assert not c.is_aborted()


def test_first_abort_write_is_final() -> None:
    c = Context()
    c.abort_with_status_json(404, NOT_FOUND)
    c.json(200, {"late": True})
    c.abort_with_status_json(500, {"later": True})
    assert c.status_code == 404
    assert c.body is NOT_FOUND
    assert c.is_aborted()


def test_abort_without_body_still_accepts_abort_write() -> None:
    c = Context()
    c.abort()
    assert c.is_aborted()
    assert not c.written
    c.abort_with_status_json(401, {"code": 0, "msg": "Unauthorized"})
    assert c.status_code == 401


def test_render_encodes_models_by_alias() -> None:
    c = Context()
    c.json(404, NOT_FOUND)
    response = c.render()
    assert response.status_code == 404
    assert response.body == b'{"code":0,"msg":"Not found"}'


def test_render_without_write_raises() -> None:
    with pytest.raises(RespError):
        Context().render()


@pytest.mark.asyncio
async def test_get_context_outside_route_raises() -> None:
    with pytest.raises(ContextNotBoundError):
        await get_context()


@pytest.mark.asyncio
async def test_get_context_returns_bound_context() -> None:
    c = Context()
    token = bind_context(c)
    try:
        assert await get_context() is c
    finally:
        unbind_context(token)
    with pytest.raises(ContextNotBoundError):
        await get_context()
