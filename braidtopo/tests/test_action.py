# braidtopo/tests/test_action.py
"""
Tests for the generator action on loop coordinates.

Tests cover:
- Reference images of the canonical loops
- Braid relations (far commutativity, sigma_i sigma_{i+1} sigma_i)
- Locality and invertibility of single generators
- Batched action and orientation
- Strand-count checks and overflow handling
"""

import warnings

import pytest
import torch

from braidtopo.errors import CoordinateOverflowError, GeneratorRangeError, OverflowWarning
from braidtopo.topology import BraidWord, LoopCoordinate, act, apply_generator, get_backend


class TestReferenceImages:
    """Known images of the canonical loops."""

    def test_sigma1_sigma2inv_sigma3(self, braid_123, basis4):
        """sigma_1 sigma_2^-1 sigma_3 on the 4-strand basis."""
        loop = braid_123.act_on(basis4)
        assert loop.rows() == [[1, -2, 1, -2, -2, 2]]

    def test_intermediate_steps(self, basis4):
        """Generators apply left to right."""
        assert BraidWord([1]).act_on(basis4).rows() == [[1, 0, 0, 0, -1, -1]]
        assert BraidWord([1, -2]).act_on(basis4).rows() == [[1, -1, 0, -2, 1, -1]]

    def test_identity_is_a_no_op(self, basis4):
        """The empty word leaves loops unchanged."""
        assert BraidWord().act_on(basis4) == basis4

    def test_braid_relation(self):
        """sigma_1 sigma_2 sigma_1 and sigma_2 sigma_1 sigma_2 act identically."""
        basis = LoopCoordinate.basis(3)
        lhs = BraidWord([1, 2, 1]).act_on(basis)
        rhs = BraidWord([2, 1, 2]).act_on(basis)
        assert lhs.rows() == rhs.rows() == [[1, 2, 0, 0]]

    def test_non_commuting_generators(self):
        """Adjacent generators do not commute."""
        basis = LoopCoordinate.basis(3)
        assert BraidWord([1, 2]).act_on(basis).rows() == [[0, 2, -1, 0]]
        assert BraidWord([2, 1]).act_on(basis).rows() == [[2, 1, 0, 0]]

    def test_far_commutativity(self, basis4):
        """Generators two apart commute."""
        assert BraidWord([1, 3]).act_on(basis4) == BraidWord([3, 1]).act_on(basis4)


class TestApplyGenerator:
    """Tests for the single-generator update."""

    @pytest.fixture
    def coords(self):
        generator = torch.Generator().manual_seed(7)
        return torch.randint(-50, 51, (16, 8), generator=generator, dtype=torch.int64)

    @pytest.mark.parametrize("g", [1, 2, 3, 4, -1, -2, -3, -4])
    def test_invertibility(self, coords, g):
        """g followed by -g restores every row bit for bit."""
        backend = get_backend("int64")
        once = apply_generator(coords, g, backend)
        back = apply_generator(once, -g, backend)
        assert torch.equal(back, coords)

    @pytest.mark.parametrize("g", [2, -3])
    def test_locality(self, coords, g):
        """Only the pairs |g|-1 and |g| (1-based) change."""
        backend = get_backend("int64")
        m = coords.shape[1] // 2
        updated = apply_generator(coords, g, backend)
        touched = {abs(g) - 2, abs(g) - 1}
        for p in range(m):
            if p in touched:
                continue
            assert torch.equal(updated[:, p], coords[:, p])
            assert torch.equal(updated[:, m + p], coords[:, m + p])

    def test_first_generator_touches_one_pair(self, coords):
        """sigma_1 updates only the first pair."""
        backend = get_backend("int64")
        m = coords.shape[1] // 2
        first = apply_generator(coords, 1, backend)
        assert torch.equal(first[:, 1:m], coords[:, 1:m])
        assert torch.equal(first[:, m + 1:], coords[:, m + 1:])

    @pytest.mark.parametrize("g", [5, -5])
    def test_boundary_puncture_is_fixed(self, coords, g, quiet_errors):
        """|g| = n would move the boundary puncture and is rejected."""
        backend = get_backend("int64")
        assert coords.shape[1] // 2 + 1 == abs(g)
        with pytest.raises(GeneratorRangeError):
            apply_generator(coords, g, backend)

    def test_input_not_modified(self, coords):
        """The update returns a new container."""
        backend = get_backend("int64")
        before = coords.clone()
        apply_generator(coords, 2, backend)
        assert torch.equal(coords, before)

    def test_bigint_invertibility_with_huge_values(self):
        """Exact arithmetic stays invertible far beyond 64 bits."""
        backend = get_backend("bigint")
        coords = backend.asarray([[2 ** 90, -(3 ** 70), 5 ** 40, -(2 ** 77)]])
        for g in (1, -1, 2, -2):
            back = apply_generator(apply_generator(coords, g, backend), -g, backend)
            assert backend.to_python(back) == backend.to_python(coords)

    @pytest.mark.parametrize("g", [0, 3, -3, 5])
    def test_generator_out_of_range(self, g, quiet_errors):
        """Generators must lie in 1..n-1 for loops on n strands."""
        backend = get_backend("int64")
        coords = backend.asarray([[0, 0, -1, -1]])
        with pytest.raises(GeneratorRangeError):
            apply_generator(coords, g, backend)


class TestAct:
    """Tests for acting with whole braids."""

    def test_too_many_strands(self, quiet_errors):
        """A braid cannot act on loops with fewer strands."""
        b = BraidWord([1, 2, 3, 4, 5, 6])
        with pytest.raises(GeneratorRangeError):
            b.act_on(LoopCoordinate.basis(5))

    def test_fewer_strands_is_fine(self, basis4):
        """A braid on fewer strands acts on larger loops."""
        assert BraidWord([1]).act_on(basis4).n == 4

    def test_batch_matches_members(self, golden_braid, loop_pair):
        """A batch is transformed member by member."""
        images = golden_braid.act_on(loop_pair)
        for member, image in zip(loop_pair, images):
            assert golden_braid.act_on(member) == image

    def test_batch_orientation_preserved(self, golden_braid, loop_pair):
        """Row batches stay row batches."""
        images = golden_braid.act_on(loop_pair.T)
        assert images.shape == (1, 2)
        assert images == golden_braid.act_on(loop_pair).T

    @pytest.mark.parametrize("backend", ["int32", "bigint", "double"])
    def test_backends_agree(self, braid_123, backend):
        """All backends give the reference image."""
        loop = braid_123.act_on(LoopCoordinate.basis(4, backend=backend))
        assert loop.backend.name == backend
        assert loop.rows() == [[1, -2, 1, -2, -2, 2]]

    def test_lenient_overflow_warns(self):
        """Overflow in lenient mode warns once and still returns a loop."""
        b = BraidWord([1, -2] * 50)
        with pytest.warns(OverflowWarning) as record:
            loop = b.act_on(LoopCoordinate.basis(3))
        overflow_warnings = [w for w in record if issubclass(w.category, OverflowWarning)]
        assert len(overflow_warnings) == 1
        assert overflow_warnings[0].message.conditions
        assert loop.n == 3

    def test_strict_overflow_raises(self, quiet_errors):
        """Overflow in strict mode raises at the first overflowing step."""
        b = BraidWord([1, -2] * 50)
        with pytest.raises(CoordinateOverflowError):
            act(b, LoopCoordinate.basis(3), strict=True)

    def test_no_warning_without_overflow(self, golden_braid):
        """Short braids do not warn."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", OverflowWarning)
            golden_braid.act_on(LoopCoordinate.basis(3))

    def test_bigint_never_overflows(self):
        """Exact arithmetic handles long braids."""
        b = BraidWord([1, -2] * 50)
        with warnings.catch_warnings():
            warnings.simplefilter("error", OverflowWarning)
            loop = b.act_on(LoopCoordinate.basis(3, backend="bigint"))
        assert max(abs(v) for v in loop.rows()[0]) > 2 ** 63
