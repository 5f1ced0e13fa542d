"""JSON response class backed by orjson.

Set as the application's default response class. orjson serializes
datetimes natively; the fallback hook covers the remaining types that can
reach a response from a MongoDB document.
"""

from typing import Any

import orjson
from bson import ObjectId
from fastapi.responses import JSONResponse
from pydantic import BaseModel


def _default(value: object) -> Any:  # noqa: ANN401 - returns any JSON-serializable value
    """Serialize types orjson does not know about.

    Raises:
        TypeError: For types that have no JSON representation.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    raise TypeError(f"Type is not JSON serializable: {type(value).__name__}")


class ORJSONResponse(JSONResponse):
    """Response class using orjson for JSON serialization.

    Attributes:
        media_type: The media type for the response.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts any JSON-serializable content
        """Render the content as JSON using orjson.

        Args:
            content: The content to serialize to JSON.

        Returns:
            bytes: The JSON-encoded bytes.
        """
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json", by_alias=True)

        return orjson.dumps(content, default=_default)
