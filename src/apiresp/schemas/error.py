"""Error classification schema.

Every error response uses the same envelope: {"code": 0, "msg": "..."}.
The predefined classifications below are the defaults that the response
builder overlays its own code and message onto.
"""

from pydantic import BaseModel, ConfigDict, Field


class ErrorInfo(BaseModel):
    """A (code, message) pair describing a response's status category.

    ``message`` is exposed on the wire as ``msg``. ``code`` 0 means unset.
    """

    model_config = ConfigDict(frozen=True)

    code: int = 0
    message: str = Field(default="", serialization_alias="msg")


# All classifications share code 0; callers tell them apart by HTTP status
# or by overriding the code with Response.with_code().
OK = ErrorInfo(code=0, message="OK")
BAD_REQUEST = ErrorInfo(code=0, message="Bad Request")
UNAUTHORIZED = ErrorInfo(code=0, message="Unauthorized")
FORBIDDEN = ErrorInfo(code=0, message="Forbidden")
NOT_FOUND = ErrorInfo(code=0, message="Not found")
INTERNAL_ERROR = ErrorInfo(code=0, message="Internal Error")
