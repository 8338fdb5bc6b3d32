"""Tests for format_change_summary."""
import pytest

from conftest import make_changes
from keymapsync.summary import format_change_summary


def test_summary_none_is_empty() -> None:
    assert format_change_summary(None) == ""


@pytest.mark.parametrize(
    ("add", "remove", "update", "expected"),
    [
        (0, 0, 0, "no changes"),
        (3, 0, 0, "3 added"),
        (0, 2, 0, "2 removed"),
        (0, 0, 5, "5 updated"),
        (1, 2, 0, "1 added, 2 removed"),
        (1, 0, 3, "1 added, 3 updated"),
        (0, 2, 3, "2 removed, 3 updated"),
        (1, 2, 3, "1 added, 2 removed, 3 updated"),
    ],
)
def test_summary_clauses_in_fixed_order(add: int, remove: int, update: int, expected: str) -> None:
    """Test every zero/non-zero combination of the three counts."""
    assert format_change_summary(make_changes(add, remove, update)) == expected
