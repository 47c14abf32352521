"""Shared pytest fixtures for braidtopo tests."""

from unittest.mock import patch

import pytest

from braidtopo.topology import BraidWord, LoopCoordinate


@pytest.fixture
def quiet_errors():
    """Suppress the rich error panels printed when errors are constructed."""
    with patch("braidtopo.errors.console.print") as mock_print:
        yield mock_print


@pytest.fixture
def basis4():
    """Canonical loops for braids on 4 strands: a = 0, b = -1."""
    return LoopCoordinate.basis(4)


@pytest.fixture
def braid_123():
    """sigma_1 sigma_2^-1 sigma_3 on 4 strands."""
    return BraidWord([1, -2, 3])


@pytest.fixture
def golden_braid():
    """(sigma_1 sigma_2^-1)^3, pseudo-Anosov with entropy 3 log((3 + sqrt 5) / 2)."""
    return BraidWord([1, -2, 1, -2, 1, -2])


@pytest.fixture
def loop_pair():
    """Two loops for 3-strand braids, as a column batch."""
    return LoopCoordinate([[1, -1, 2, 3], [2, 3, -1, 2]])
