"""A simple array manipulation class.

MosaicArray wraps an ordered mapping (the *target*) whose keys are strings
or integers and offers a set of helpers on top of it::

    ma = MosaicArray({"second": "2", "first": "1", 0: "last"})
    ma.sort_by_array_keys([0, "second", "first"])
    # {0: "last", "second": "2", "first": "1"}

    MosaicArray.create([None, False, "", "found"]).find()
    # "found"

A list or a tuple given at creation is turned into a mapping from indexes
to items. Operations returning a mapping always return a new dict, except
to_array() and the "nothing to do" paths of except_(), sort_by_array_keys()
and sort_by_array_values() which return the target itself unless the
``copy_on_read`` option is set, either in the ``[array]`` section of the
configuration file or when creating the instance.
"""
from __future__ import annotations

import pickle
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import mosaic.log
from mosaic.collection.compare import (
    array_values,
    is_array,
    is_truthy,
    loose_equal,
    strict_equal,
    to_string,
)
from mosaic.config import ConfigSection
from mosaic.error import MosaicError
from mosaic.json import decode_pairs, dumps, encode_pairs, loads
from mosaic.yaml import YamlError, dump_ordered, load_ordered

if TYPE_CHECKING:
    from typing import (
        Any,
        Callable,
        Dict,
        Iterable,
        Iterator,
        KeysView,
        ItemsView,
        List,
        Optional,
        Pattern,
        Type,
        TypeVar,
        Union,
        ValuesView,
    )

    Key = Union[str, int]
    MosaicArraySelf = TypeVar("MosaicArraySelf", bound="MosaicArray")

logger = mosaic.log.getLogger("collection.mosaic_array")


@dataclass
class ArrayConfig(ConfigSection):
    title: ClassVar[str] = "array"

    copy_on_read: bool = False


array_config = ArrayConfig.load()


class MosaicArrayError(MosaicError):
    pass


class MosaicKeyError(MosaicArrayError, KeyError):
    """Raised when accessing a key that is not in the target array."""

    pass


def _key_id(key: Any) -> Any:
    """Identify a key without confusing True and False with 1 and 0."""
    return (isinstance(key, bool), key)


def _values_of(collection: Any) -> List[Any]:
    """Return the values of a MosaicArray, a mapping or any iterable."""
    if isinstance(collection, MosaicArray):
        return list(collection.target.values())
    if isinstance(collection, (Mapping, list, tuple)):
        return array_values(collection)
    return list(collection)


class MosaicArray:
    """Ordered array with lookup, filtering and reordering helpers.

    Besides its helpers, a MosaicArray behaves as an indexable, iterable,
    countable and serializable container:

    * ``ma[key]`` returns the value or None, ``ma[key] = value`` sets it,
      ``ma[None] = value`` appends it, ``del ma[key]`` removes it
    * ``key in ma`` is True when the key exists with a value other than None
    * iterating yields the values in order
    * ``len(ma)`` is the number of entries
    * instances can be pickled, see also serialize() and unserialize()
    """

    def __init__(
        self, array: Mapping | Iterable[Any], copy_on_read: Optional[bool] = None
    ) -> None:
        """Initialize a MosaicArray.

        :param array: the target array, any mapping is accepted. Other
            iterables are indexed from 0.
        :param copy_on_read: if True, return copies instead of the target
            itself. If None use the ``array.copy_on_read`` configuration value
        """
        self.target: Dict[Key, Any] = self._as_target(array)
        if copy_on_read is None:
            copy_on_read = array_config.copy_on_read
        self.copy_on_read = copy_on_read

    @classmethod
    def create(
        cls: Type[MosaicArraySelf], array: Mapping | Iterable[Any]
    ) -> MosaicArraySelf:
        """Create a MosaicArray, useful for chained calls.

        :param array: the target array
        """
        return cls(array)

    make = create

    @staticmethod
    def _as_target(array: Mapping | Iterable[Any]) -> Dict[Key, Any]:
        if isinstance(array, MosaicArray):
            return dict(array.target)
        if isinstance(array, Mapping):
            return dict(array)
        return dict(enumerate(array))

    def _read(self) -> Dict[Key, Any]:
        return dict(self.target) if self.copy_on_read else self.target

    def replace_target(
        self: MosaicArraySelf, target: Mapping | Iterable[Any]
    ) -> MosaicArraySelf:
        """Replace the target array with a new one.

        :param target: the new target
        :return: the current instance
        """
        self.target = self._as_target(target)
        logger.debug("target replaced (%d entries)", len(self.target))
        return self

    def to_array(self, key: Optional[Key] = None) -> Any:
        """Return the target array, or one of its values.

        :param key: if not None return the value associated with key
        :raise: MosaicKeyError if key is not in the target array
        """
        if key is None:
            return self._read()
        try:
            return self.target[key]
        except KeyError:
            raise MosaicKeyError(f"no such key: {key!r}", "to_array") from None

    def get_item(self, key: Key, default_result: Any = None) -> Any:
        """Get a value from the target array.

        A key whose value is None is considered as missing.

        :param key: the key to look for
        :param default_result: value returned when the key is missing
        """
        value = self.target.get(key)
        return default_result if value is None else value

    def has_intersections(
        self,
        array: Any,
        strict: bool = False,
        return_intersection: bool = False,
    ) -> Any:
        """Determine if two arrays have at least a single matching value.

        :param array: the array to compare with, only its values are used
        :param strict: if True compare without type coercion
        :param return_intersection: if True return the first value of the
            target array found in array instead of True
        :return: False if there is no common value
        """
        equal = strict_equal if strict else loose_equal
        candidates = _values_of(array)

        for element in self.target.values():
            if any(equal(element, candidate) for candidate in candidates):
                return element if return_intersection else True

        return False

    def find(self, default_result: Any = None) -> Any:
        """Return the first truthy value of the target array.

        Containers are truthy as soon as they are not empty, even if they
        only hold falsy values.

        :param default_result: returned if none of the values is truthy
        """
        for value in self.target.values():
            if is_truthy(value):
                return value

        return default_result

    def _grep(
        self,
        pattern: str | Pattern[str],
        candidates: List[Any],
        flags: int,
        invert: bool,
    ) -> List[Any]:
        regex = re.compile(pattern, flags)
        logger.debug("grep %r in %d entries", regex.pattern, len(candidates))
        return [
            candidate
            for candidate in candidates
            if (regex.search(to_string(candidate)) is not None) != invert
        ]

    def preg_keys(
        self,
        pattern: str | Pattern[str],
        default_result: Any = None,
        flags: int = 0,
        invert: bool = False,
    ) -> Any:
        """Get the keys of the target array matching a regular expression.

        :param pattern: regular expression, searched anywhere in the keys
        :param default_result: returned if no key matches
        :param flags: re module flags used to compile pattern
        :param invert: if True return the keys that do not match
        :return: a list of keys, in the target array order
        """
        result = self._grep(pattern, list(self.target), flags, invert)
        return result if result else default_result

    def preg_values(
        self,
        pattern: str | Pattern[str],
        default_result: Any = None,
        flags: int = 0,
        invert: bool = False,
    ) -> Any:
        """Get the values of the target array matching a regular expression.

        Values are matched against their string form (None and False are
        empty strings, True is "1", containers are "Array").

        :param pattern: regular expression, searched anywhere in the values
        :param default_result: returned if no value matches
        :param flags: re module flags used to compile pattern
        :param invert: if True return the values that do not match
        :return: a list of values, in the target array order
        """
        result = self._grep(pattern, list(self.target.values()), flags, invert)
        return result if result else default_result

    def except_(self, keys: Iterable[Key]) -> Dict[Key, Any]:
        """Exclude keys from the target array.

        :param keys: keys to exclude, unknown keys are ignored
        :return: the target array if keys is empty, a new dict otherwise
        """
        excluded = {_key_id(k) for k in _values_of(keys)}
        if not excluded:
            return self._read()
        return {k: v for k, v in self.target.items() if _key_id(k) not in excluded}

    def only(self, keys: Iterable[Key]) -> Dict[Key, Any]:
        """Get a subset of the target array.

        :param keys: keys to keep. If empty the result is empty
        :return: a new dict, in the target array order
        """
        kept = {_key_id(k) for k in _values_of(keys)}
        return {k: v for k, v in self.target.items() if _key_id(k) in kept}

    def sort_by_array_keys(self, order_by: Iterable[Key]) -> Dict[Key, Any]:
        """Sort the target array by another array.

        :param order_by: its values are keys of the target array. Entries
            not listed here come last, in their original order
        :return: a new dict, or the target array if order_by is empty
        """
        order = _values_of(order_by)
        if not order:
            return self._read()

        known = {_key_id(k): k for k in self.target}
        remaining = dict(self.target)
        result = {}
        for key in order:
            actual = known.get(_key_id(key))
            if actual is not None and actual in remaining:
                result[actual] = remaining.pop(actual)

        result.update(remaining)
        return result

    def sort_by_array_values(self, order_by: Iterable[Any]) -> Dict[Key, Any]:
        """Sort the target array by another array.

        Entries whose value does not loosely equal one of order_by values
        are not part of the result.

        :param order_by: its values are values of the target array. Every
            key holding one of them is set to that value in the result
        :return: a new dict, or the target array if order_by is empty
        """
        order = _values_of(order_by)
        if not order:
            return self._read()

        result = {}
        for value in order:
            for key, current in self.target.items():
                if loose_equal(current, value):
                    result[key] = value

        return result

    def exclude_by_rule(self, rule: Callable[[Key, Any], Any]) -> Dict[Key, Any]:
        """Exclude entries of the target array meeting a rule.

        :param rule: called with each key and value, the entry is excluded
            when it returns a truthy value
        :return: a new dict, keys are not renumbered
        """
        return {k: v for k, v in list(self.target.items()) if not rule(k, v)}

    def keys(self) -> KeysView[Key]:
        return self.target.keys()

    def values(self) -> ValuesView[Any]:
        return self.target.values()

    def items(self) -> ItemsView[Key, Any]:
        return self.target.items()

    def next_index(self) -> int:
        """Return the integer key used by the next append."""
        indexes = [
            k
            for k in self.target
            if isinstance(k, int) and not isinstance(k, bool) and k >= 0
        ]
        return max(indexes, default=-1) + 1

    def append(self, value: Any) -> None:
        self.target[self.next_index()] = value

    def __getitem__(self, key: Key) -> Any:
        return self.get_item(key)

    def __setitem__(self, key: Optional[Key], value: Any) -> None:
        if key is None:
            self.append(value)
        else:
            self.target[key] = value

    def __delitem__(self, key: Key) -> None:
        self.target.pop(key, None)

    def __contains__(self, key: Key) -> bool:
        return self.target.get(key) is not None

    def __iter__(self) -> Iterator[Any]:
        # Iterate over a snapshot so that the loop body can modify the array
        return iter(list(self.target.values()))

    def __len__(self) -> int:
        return len(self.target)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MosaicArray):
            return self.target == other.target
        return NotImplemented

    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.target!r})"

    def __copy__(self: MosaicArraySelf) -> MosaicArraySelf:
        return self.__class__(self.target, copy_on_read=self.copy_on_read)

    def __getstate__(self) -> Dict[str, Any]:
        return {"target": self.target, "copy_on_read": self.copy_on_read}

    def __setstate__(self, state: Dict[str, Any]) -> None:
        self.target = state["target"]
        self.copy_on_read = state.get("copy_on_read", False)

    def serialize(self) -> bytes:
        """Return the serialized form of the target array."""
        return pickle.dumps(self.target)

    def unserialize(self, data: bytes) -> None:
        """Restore the target array from the result of serialize().

        :param data: serialized target array
        """
        self.target = pickle.loads(data)
        logger.debug("target restored (%d entries)", len(self.target))

    def as_dict(self) -> Dict[str, Any]:
        """Return a JSON compatible representation of the target array.

        Entries are stored as a list of ``[key, value]`` pairs so that
        integer keys and order are preserved.
        """
        return encode_pairs(self.target)

    def as_json(self) -> str:
        return dumps(self.target)

    @classmethod
    def from_dict(cls: Type[MosaicArraySelf], obj: dict) -> MosaicArraySelf:
        """Create a MosaicArray from the result of as_dict().

        :raise: JsonDataInvalidJsonError if obj has not the expected shape
        """
        return cls(decode_pairs(obj, "from_dict"))

    @classmethod
    def from_json(cls: Type[MosaicArraySelf], content: str) -> MosaicArraySelf:
        """Create a MosaicArray from the result of as_json().

        :raise: JsonDataInvalidJsonError if content does not describe an array
        """
        return cls(loads(content))

    def as_yaml(self) -> str:
        return dump_ordered(self.target)

    @classmethod
    def from_yaml(cls: Type[MosaicArraySelf], content: str) -> MosaicArraySelf:
        """Create a MosaicArray from a YAML document.

        :param content: a YAML mapping or sequence
        :raise: YamlError if content is invalid or is not a mapping or a
            sequence
        """
        data = load_ordered(content)
        if not is_array(data):
            raise YamlError(
                "yaml document is not a mapping or a sequence", "from_yaml"
            )
        return cls(data)
