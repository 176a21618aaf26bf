"""Tests for saving and loading simulation output."""

import numpy as np
import pytest
import jax
import jax.numpy as jnp

import jax_brusselator.solvers as mol
from jax_brusselator.data_utils import save_dataset, load_dataset, save_trajectory, load_trajectory


@pytest.fixture
def trajectory():
    grid = mol.create_grid(4, (0.0, 1.0), (0.0, 2.0))
    y0 = mol.brusselator_initial_state(grid)
    t = jnp.array([0.0, 0.1])
    y = jnp.stack([y0, 0.5 * y0])
    return mol.Trajectory(t, y, grid=grid)


class TestDataset:

    def test_round_trip(self, tmp_path):
        path = str(tmp_path / "out" / "data.npz")
        data = {"a": jnp.arange(6.0).reshape(2, 3), "b": np.ones(4)}
        save_dataset(data, path, metadata={"alpha": 10.0, "bc": "clamped"})

        loaded, metadata = load_dataset(path)
        assert isinstance(loaded["a"], jax.Array)
        assert jnp.array_equal(loaded["a"], data["a"])
        assert jnp.array_equal(loaded["b"], data["b"])
        assert metadata == {"alpha": 10.0, "bc": "clamped"}

    def test_numpy_output(self, tmp_path):
        path = str(tmp_path / "data.npz")
        save_dataset({"a": jnp.ones(3)}, path)
        loaded, metadata = load_dataset(path, convert_to_jax=False)
        assert isinstance(loaded["a"], np.ndarray)
        assert metadata == {}

    def test_reserved_key(self, tmp_path):
        with pytest.raises(ValueError):
            save_dataset({"meta_x": np.ones(2)}, str(tmp_path / "data.npz"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dataset(str(tmp_path / "missing.npz"))


class TestTrajectoryIO:

    def test_round_trip(self, tmp_path, trajectory):
        path = str(tmp_path / "run.npz")
        save_trajectory(trajectory, path, metadata={"bc_type": "periodic", "alpha": 10.0})

        loaded, metadata = load_trajectory(path)
        assert jnp.array_equal(loaded.t, trajectory.t)
        assert jnp.array_equal(loaded.y, trajectory.y)
        assert jnp.array_equal(loaded.grid.x, trajectory.grid.x)
        assert jnp.array_equal(loaded.grid.y, trajectory.grid.y)
        assert loaded.grid.dx == pytest.approx(trajectory.grid.dx)
        assert loaded.grid.dy == pytest.approx(2.0 / 3.0)
        assert metadata == {"bc_type": "periodic", "alpha": 10.0}

    def test_without_grid(self, tmp_path, trajectory):
        path = str(tmp_path / "run.npz")
        save_trajectory(mol.Trajectory(trajectory.t, trajectory.y), path)
        loaded, metadata = load_trajectory(path)
        assert loaded.grid is None
        assert metadata == {}

    @pytest.mark.parametrize("key", ["dx", "dy"])
    def test_grid_spacing_keys_are_reserved(self, tmp_path, trajectory, key):
        path = tmp_path / "run.npz"
        with pytest.raises(ValueError):
            save_trajectory(trajectory, str(path), metadata={key: 0.5})
        assert not path.exists()

    def test_grid_without_spacing(self, tmp_path, trajectory):
        path = str(tmp_path / "run.npz")
        save_dataset(
            {"t": trajectory.t, "y": trajectory.y, "x": trajectory.grid.x, "y_coords": trajectory.grid.y},
            path,
        )
        with pytest.raises(ValueError):
            load_trajectory(path)

    def test_not_a_trajectory(self, tmp_path):
        path = str(tmp_path / "data.npz")
        save_dataset({"t": np.zeros(2)}, path)
        with pytest.raises(ValueError):
            load_trajectory(path)
