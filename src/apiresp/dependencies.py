"""Shared FastAPI dependencies.

Reusable type aliases that endpoints and dependencies import. Only resolvable
on routes registered with ContextRoute.
"""

from typing import Annotated

from fastapi import Depends

from apiresp.context import Context, get_context

Ctx = Annotated[Context, Depends(get_context)]
