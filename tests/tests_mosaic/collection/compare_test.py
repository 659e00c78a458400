import pytest

from mosaic.collection.compare import (
    is_truthy,
    loose_equal,
    strict_equal,
    to_string,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, False),
        (False, False),
        (True, True),
        (0, False),
        (0.0, False),
        (-1, True),
        ("", False),
        ("0", True),
        ("x", True),
        ([], False),
        ({}, False),
        ((), False),
        ([None], True),
        ({"a": []}, True),
        (object(), True),
    ],
)
def test_is_truthy(value, expected):
    assert is_truthy(value) is expected


@pytest.mark.parametrize(
    "left,right,expected",
    [
        (1, "1", True),
        ("3", 3.0, True),
        (" 1e3", 1000, True),
        ("10", "1e1", True),
        ("abc", "abc", True),
        ("abc", "ABC", False),
        (0, "a", False),
        (1, "1a", False),
        (True, "x", True),
        (False, 0, True),
        (True, [], False),
        (None, "", True),
        (None, "0", False),
        (None, 0, True),
        (None, [], True),
        (None, [0], False),
        ([1, 2], {1: 2, 0: 1}, True),
        ([1, "2"], [1, 2], True),
        ([1, 2], [1, 2, 3], False),
        ([1], 1, False),
    ],
)
def test_loose_equal(left, right, expected):
    assert loose_equal(left, right) is expected
    assert loose_equal(right, left) is expected


@pytest.mark.parametrize(
    "left,right,expected",
    [
        (1, 1, True),
        (1, "1", False),
        (1, 1.0, False),
        (1, True, False),
        (None, None, True),
        ([1, 2], [1, 2], True),
        ([1, 2], (1, 2), True),
        ([1, 2], {0: 1, 1: 2}, True),
        ([1, 2], {1: 2, 0: 1}, False),
        ([1, [2]], [1, ["2"]], False),
        ({"a": 1}, {"a": 1}, True),
    ],
)
def test_strict_equal(left, right, expected):
    assert strict_equal(left, right) is expected


def test_to_string():
    assert to_string(None) == ""
    assert to_string(False) == ""
    assert to_string(True) == "1"
    assert to_string(3.0) == "3"
    assert to_string(2.5) == "2.5"
    assert to_string(42) == "42"
    assert to_string({"a": 1}) == "Array"
    assert to_string("text") == "text"
