# tests/conftest.py
import sys
from pathlib import Path

import matplotlib
import pytest

# Pas d'affichage pendant les tests
matplotlib.use("Agg")

# Add project root to sys.path so the sudoku_* modules can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


REFERENCE = [
    "534678912",
    "672195348",
    "198342567",
    "859761423",
    "426853791",
    "713924856",
    "961537284",
    "287419635",
    "345286179",
]

CLASSIC = (
    "000000070"
    "006800004"
    "800090061"
    "005006040"
    "000524000"
    "010700500"
    "520060009"
    "400003800"
    "030000000"
)


def rows_to_grid(rows):
    return [[int(ch) for ch in row] for row in rows]


@pytest.fixture
def solved_grid():
    return rows_to_grid(REFERENCE)


@pytest.fixture
def classic_grid():
    return [[int(ch) for ch in CLASSIC[r * 9 : r * 9 + 9]] for r in range(9)]


@pytest.fixture
def empty_grid():
    return [[0] * 9 for _ in range(9)]
