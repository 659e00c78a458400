"""JSON encoding of ordered arrays.

JSON objects only have string keys, so an array is encoded as a list of
``[key, value]`` pairs wrapped in an object::

    {"target": [["second", "2"], ["first", "1"], [0, "last"]]}

This keeps integer keys and the insertion order intact. Mappings nested in
values, directly or inside lists, are encoded the same way.
"""

from __future__ import annotations

import json

import mosaic.error

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class JsonError(mosaic.error.MosaicError):
    pass


class JsonDataInvalidJsonError(JsonError):
    """An error thrown when a JSON document does not describe an array."""

    pass


PAIRS_KEY = "target"


def _encode_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return encode_pairs(value)
    if isinstance(value, (list, tuple)):
        return [_encode_value(item) for item in value]
    if callable(getattr(value, "as_dict", None)):
        # nested objects exposing their own JSON representation, such as
        # MosaicArray, are decoded back as plain dicts
        return value.as_dict()
    return value


def encode_pairs(array: Mapping) -> dict[str, Any]:
    """Return the JSON compatible representation of an ordered array.

    Mappings found in values, directly or inside lists and tuples, are
    encoded the same way. Tuples become lists.

    :param array: the mapping to encode
    :return: a dict with a single ``target`` entry holding the pairs
    """
    return {PAIRS_KEY: [[key, _encode_value(value)] for key, value in array.items()]}


def _decode_value(value: Any, origin: str) -> Any:
    if _is_encoded_array(value):
        return decode_pairs(value, origin)
    if isinstance(value, list):
        return [_decode_value(item, origin) for item in value]
    return value


def decode_pairs(obj: Any, origin: str = "decode_pairs") -> dict:
    """Rebuild an ordered array from its pairs representation.

    :param obj: the result of :func:`encode_pairs`, usually after a trip
        through :func:`json.loads`
    :param origin: name reported in errors
    :return: a new dict
    :raise: :class:`JsonDataInvalidJsonError` when *obj* has not the
        expected shape
    """
    if not _is_encoded_array(obj):
        raise JsonDataInvalidJsonError(
            f"expected an object with a single {PAIRS_KEY!r} list", origin
        )

    result = {}
    for pair in obj[PAIRS_KEY]:
        if not isinstance(pair, list) or len(pair) != 2:
            raise JsonDataInvalidJsonError(f"invalid key/value pair: {pair!r}", origin)
        key, value = pair
        if not isinstance(key, (str, int)) or isinstance(key, bool):
            raise JsonDataInvalidJsonError(f"invalid key: {key!r}", origin)
        result[key] = _decode_value(value, origin)
    return result


def _is_encoded_array(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and list(value) == [PAIRS_KEY]
        and isinstance(value[PAIRS_KEY], list)
    )


def dumps(array: Mapping) -> str:
    """Serialize an ordered array to a JSON string.

    :raise: :class:`JsonError` when a value cannot be represented in JSON

    .. seealso:: :func:`python:json.dumps`
    """  # noqa RST304
    try:
        return json.dumps(encode_pairs(array))
    except (TypeError, ValueError) as e:
        raise JsonError(f"cannot represent array in json: {e}", "dumps") from e


def loads(content: str) -> dict:
    """Load an ordered array from a JSON string produced by :func:`dumps`.

    :param content: the JSON document
    :raise: :class:`JsonDataInvalidJsonError` when *content* does not
        describe an array
    """
    return decode_pairs(json.loads(content), "loads")
