import numpy as np
import pytest

from field import Field, particle_count


def test_particle_count_truncates():
    assert particle_count(0.15, 80, 48) == 576
    assert particle_count(0.15, 3, 3) == 1
    assert particle_count(0.0, 80, 48) == 0


def test_generate_within_bounds(rng):
    field = Field.generate(2000, 40, 30, rng)

    assert len(field) == 2000
    assert np.all(field.positions[:, 0] >= 0) and np.all(field.positions[:, 0] < 40)
    assert np.all(field.positions[:, 1] >= 0) and np.all(field.positions[:, 1] < 30)
    assert np.all(field.velocities >= -1) and np.all(field.velocities < 1)


def test_generate_axes_are_independent(rng):
    field = Field.generate(5000, 50, 50, rng)

    # No shared draw between x and y or between the two velocity axes
    assert not np.allclose(field.positions[:, 0], field.positions[:, 1])
    assert not np.allclose(field.velocities[:, 0], field.velocities[:, 1])
    assert abs(np.corrcoef(field.positions[:, 0], field.positions[:, 1])[0, 1]) < 0.1


def test_generate_is_deterministic_for_a_seed():
    a = Field.generate(100, 20, 20, np.random.default_rng(7))
    b = Field.generate(100, 20, 20, np.random.default_rng(7))

    np.testing.assert_array_equal(a.positions, b.positions)
    np.testing.assert_array_equal(a.velocities, b.velocities)


def test_empty_field(rng):
    field = Field.generate(0, 10, 10, rng)

    assert len(field) == 0
    assert field.positions.shape == (0, 2)


def test_from_density(rng):
    field = Field.from_density(0.15, 80, 48, rng)

    assert len(field) == 576


def test_regenerate_keeps_count_and_shares_nothing(rng):
    field = Field.generate(300, 10, 10, rng)
    field.positions += 100.0

    fresh = field.regenerate(30, 20, rng)

    assert len(fresh) == len(field)
    assert fresh is not field
    assert not np.shares_memory(fresh.positions, field.positions)
    assert not np.shares_memory(fresh.velocities, field.velocities)
    assert np.all((fresh.positions[:, 0] >= 0) & (fresh.positions[:, 0] < 30))
    assert np.all((fresh.positions[:, 1] >= 0) & (fresh.positions[:, 1] < 20))


def test_rejects_bad_shapes():
    with pytest.raises(ValueError):
        Field(np.zeros((3, 3)), np.zeros((3, 3)))
    with pytest.raises(ValueError):
        Field(np.zeros((3, 2)), np.zeros((2, 2)))
