"""Comparison and truthiness rules used by MosaicArray.

Arrays handled by :class:`mosaic.collection.mosaic_array.MosaicArray` come
with two equality flavours:

* strict equality: both sides have the same kind (bool, int, float, str,
  None or array) and the same value. Arrays must hold the same keys in the
  same order with strictly equal values.
* loose equality: a small, explicit set of coercions:

  - a bool is compared with the truthiness of the other side
  - None equals the empty string, and any other value that is not truthy
  - numbers are compared numerically, including against numeric strings
    such as ``"3"``, ``" 3.0"`` or ``"1e3"``
  - a number and a non-numeric string are compared as strings
  - two numeric strings are compared numerically
  - arrays are equal when they have the same set of keys and loosely equal
    values for each key, whatever the order

Mappings, lists and tuples are all "arrays": a list is seen as a mapping
from its indexes to its items.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Set
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any, Hashable, List, Tuple


NUMERIC_STRING = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
INTEGER_STRING = re.compile(r"^\s*[+-]?\d+\s*$")


def is_array(value: Any) -> bool:
    """Return True if value is a mapping, a list or a tuple."""
    return isinstance(value, (Mapping, list, tuple))


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_numeric_string(value: Any) -> bool:
    return isinstance(value, str) and NUMERIC_STRING.match(value) is not None


def array_pairs(value: Any) -> List[Tuple[Hashable, Any]]:
    """Return the key/value pairs of an array, in order.

    :param value: a mapping, a list or a tuple
    """
    if isinstance(value, Mapping):
        return list(value.items())
    return list(enumerate(value))


def array_values(value: Any) -> List[Any]:
    """Return the values of an array, in order."""
    if isinstance(value, Mapping):
        return list(value.values())
    return list(value)


def is_truthy(value: Any) -> bool:
    """Shallow truthiness.

    Containers are truthy when they are not empty, their content is not
    inspected. Objects that are neither scalars nor containers are always
    truthy.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if is_number(value):
        return value != 0
    if isinstance(value, (str, bytes)):
        return len(value) > 0
    if isinstance(value, (Mapping, list, tuple, Set)):
        return len(value) > 0
    return True


def number_to_string(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return str(value)


def to_string(value: Any) -> str:
    """Return the string form of a value as used by regular expression filters."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if is_number(value):
        return number_to_string(value)
    if is_array(value):
        return "Array"
    return str(value)


def to_number(value: str) -> int | float:
    """Convert a numeric string to an int or a float."""
    if INTEGER_STRING.match(value):
        return int(value)
    return float(value)


def loose_equal(left: Any, right: Any) -> bool:
    """Compare two values with coercion (see module documentation)."""
    if isinstance(left, bool) or isinstance(right, bool):
        return is_truthy(left) == is_truthy(right)

    if left is None or right is None:
        other = right if left is None else left
        if isinstance(other, str):
            return other == ""
        return not is_truthy(other)

    if is_number(left) and is_number(right):
        return left == right

    if is_number(left) and isinstance(right, str):
        left, right = right, left
    if isinstance(left, str) and is_number(right):
        if is_numeric_string(left):
            return to_number(left) == right
        return left == number_to_string(right)

    if isinstance(left, str) and isinstance(right, str):
        if is_numeric_string(left) and is_numeric_string(right):
            return to_number(left) == to_number(right)
        return left == right

    if is_array(left) or is_array(right):
        if not (is_array(left) and is_array(right)):
            return False
        left_map = dict(array_pairs(left))
        right_map = dict(array_pairs(right))
        if left_map.keys() != right_map.keys():
            return False
        return all(loose_equal(v, right_map[k]) for k, v in left_map.items())

    return left == right


def _kind(value: Any) -> Any:
    if is_array(value):
        return "array"
    return type(value)


def strict_equal(left: Any, right: Any) -> bool:
    """Compare two values without coercion (see module documentation)."""
    if _kind(left) != _kind(right):
        return False

    if is_array(left):
        left_pairs = array_pairs(left)
        right_pairs = array_pairs(right)
        if len(left_pairs) != len(right_pairs):
            return False
        return all(
            strict_equal(lk, rk) and strict_equal(lv, rv)
            for (lk, lv), (rk, rv) in zip(left_pairs, right_pairs)
        )

    return left == right
