"""Request and response models for the price list.

The add/edit forms post every value as text, so the field types parse that
text at the boundary: comma-separated lists become trimmed string lists,
``"true"``/``"false"`` becomes a boolean and numeric strings become floats.
"""

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
)

from src.domain.pricing import parse_status, reject_boolean, split_comma_list

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
CommaList = Annotated[list[str], BeforeValidator(split_comma_list)]
StatusFlag = Annotated[bool, BeforeValidator(parse_status)]
Price = Annotated[float, BeforeValidator(reject_boolean), Field(allow_inf_nan=False)]


class PriceItemCreate(BaseModel):
    """Fields required to create a price item."""

    model_config = ConfigDict(extra="ignore")

    title: NonBlankStr
    services: CommaList
    price: Price
    category: NonBlankStr
    tags: CommaList
    status: StatusFlag


class PriceItemUpdate(BaseModel):
    """Partial update; only the fields the client supplied are written."""

    model_config = ConfigDict(extra="ignore")

    title: NonBlankStr | None = None
    services: CommaList | None = None
    price: Price | None = None
    category: NonBlankStr | None = None
    tags: CommaList | None = None
    status: StatusFlag | None = None

    @classmethod
    def supplied_fields(cls, payload: dict[str, Any]) -> dict[str, Any]:
        """Drop values that mean "not supplied": null and blank text.

        The edit form submits every input, leaving untouched ones empty.
        """
        return {
            key: value
            for key, value in payload.items()
            if key in cls.model_fields
            and value is not None
            and not (isinstance(value, str) and not value.strip())
        }


class PriceItemCreated(BaseModel):
    """Response to a successful create."""

    message: str = Field(..., examples=["Price item created"])
    item_id: str = Field(
        ...,
        serialization_alias="itemId",
        description="Identifier of the new item",
        examples=["65f1c2a9e4b0a1b2c3d4e5f6"],
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(..., examples=["Price item updated"])
