import random
from collections import Counter

import pytest

from cell_value import to_row
from diff_reconciler import RowDiff, diff_rows
from view_models import RowViewModel


def _rows(*labels):
    return [RowViewModel(to_row([label])) for label in labels]


def test_overlapping_sequences():
    diff = diff_rows(_rows("A", "B", "C"), _rows("B", "C", "D"))
    assert diff.deletions == [0]
    assert diff.insertions == [2]


def test_identical_sequences_have_empty_diff():
    diff = diff_rows(_rows("A", "B"), _rows("A", "B"))
    assert diff == RowDiff([], [])
    assert diff.is_empty


def test_disjoint_sequences_report_every_position():
    diff = diff_rows(_rows("A", "B"), _rows("C", "D", "E"))
    assert diff.deletions == [0, 1]
    assert diff.insertions == [0, 1, 2]


def test_reordered_rows_are_neither_inserted_nor_deleted():
    old = _rows("A", "B", "C")
    new = _rows("C", "A", "B")
    diff = diff_rows(old, new)
    assert diff.is_empty
    assert diff.reload_positions(new) == [0, 1, 2]


def test_equality_is_by_value_not_identity():
    old = _rows("A")
    new = _rows("A")
    assert old[0] is not new[0]
    assert diff_rows(old, new).is_empty


def test_empty_sides():
    assert diff_rows([], _rows("A")).insertions == [0]
    assert diff_rows(_rows("A"), []).deletions == [0]
    assert diff_rows([], []).is_empty


def test_reload_positions_skip_insertions():
    new = _rows("B", "X", "C")
    diff = diff_rows(_rows("A", "B", "C"), new)
    assert diff.reload_positions(new) == [0, 2]


def _apply(old, new, diff):
    deleted = set(diff.deletions)
    kept = [row for idx, row in enumerate(old) if idx not in deleted]
    inserted = [new[idx] for idx in diff.insertions]
    return kept + inserted


@pytest.mark.parametrize("seed", range(20))
def test_applying_diff_reconstructs_new_content(seed):
    rnd = random.Random(seed)
    universe = [chr(ord("A") + i) for i in range(8)]
    old = _rows(*rnd.sample(universe, rnd.randint(0, 8)))
    new = _rows(*rnd.sample(universe, rnd.randint(0, 8)))
    diff = diff_rows(old, new)
    rebuilt = _apply(old, new, diff)
    assert Counter(rebuilt) == Counter(new)
    assert diff.deletions == sorted(diff.deletions)
    assert diff.insertions == sorted(diff.insertions)
