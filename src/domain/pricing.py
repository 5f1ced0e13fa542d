"""Normalization of price list input.

The add/edit forms submit every value as a string: lists as comma-separated
text, the status flag as ``"true"``/``"false"``. These helpers turn such
values into typed data and raise ``ValueError`` for anything that does not
parse, which pydantic reports against the field being validated.
"""

from collections.abc import Iterable

TRUE_LITERAL = "true"
FALSE_LITERAL = "false"


def split_comma_list(value: object) -> list[str]:
    """Split comma-separated text (or a list of strings) into trimmed items.

    Empty segments, as in ``"a,,b"``, are dropped.

    Raises:
        ValueError: If the value is not text or a list of text, or holds no
            non-empty item.
    """
    if isinstance(value, str):
        segments: Iterable[object] = value.split(",")
    elif isinstance(value, list):
        segments = value
    else:
        msg = "must be a comma-separated string"
        raise ValueError(msg)  # noqa: TRY004 - pydantic only reports ValueError

    items: list[str] = []
    for segment in segments:
        if not isinstance(segment, str):
            msg = "items must be strings"
            raise ValueError(msg)  # noqa: TRY004
        if stripped := segment.strip():
            items.append(stripped)

    if not items:
        msg = "must contain at least one item"
        raise ValueError(msg)
    return items


def parse_status(value: object) -> bool:
    """Parse the status flag.

    Accepts the literal strings ``"true"`` and ``"false"`` and JSON booleans.

    Raises:
        ValueError: For any other value.
    """
    if isinstance(value, bool):
        return value
    if value == TRUE_LITERAL:
        return True
    if value == FALSE_LITERAL:
        return False
    msg = 'must be "true" or "false"'
    raise ValueError(msg)


def reject_boolean(value: object) -> object:
    """Refuse booleans where a number is expected.

    ``float`` validation would read ``true`` as ``1.0``; only numbers and
    numeric text are prices.

    Raises:
        ValueError: If the value is a boolean.
    """
    if isinstance(value, bool):
        msg = "must be a number or numeric string"
        raise ValueError(msg)
    return value
