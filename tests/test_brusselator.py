"""Unit tests for the Brusselator right-hand side."""

import pytest
import jax
import jax.numpy as jnp

import jax_brusselator.solvers as mol


@pytest.fixture
def unit_square_4():
    """N=4 grid on the unit square, alpha=10, initial state from the closed-form profiles."""
    grid = mol.create_grid(4)
    y0 = mol.brusselator_initial_state(grid)
    return grid, y0


class TestHandComputedDerivative:
    """
    On the N=4 unit grid the coordinates are 0, 1/3, 2/3, 1 and

        u0 rows:    0, 44/9, 44/9, 0   (constant along each row)
        v0 columns: 0, 6, 6, 0         (constant along each column)
    """

    def test_corner_cell_clamped(self, unit_square_4):
        grid, y0 = unit_square_4
        params = mol.BrusselatorParams(grid=grid, bc_type=mol.BCType.CLAMPED, alpha=10.0)
        dy = mol.brusselator_rhs(0.0, y0, params)

        # Cell (0, 0): u = v = 0; one-sided differences reach only the inner neighbour
        lap_u = (0.0 - 0.0 + 44.0 / 9.0) * 9.0
        lap_v = (0.0 - 0.0 + 6.0) * 9.0
        assert float(dy[0, 0, 0]) == pytest.approx(10.0 * lap_u + 1.0)
        assert float(dy[1, 0, 0]) == pytest.approx(10.0 * lap_v)
        assert float(dy[0, 0, 0]) == pytest.approx(441.0)
        assert float(dy[1, 0, 0]) == pytest.approx(540.0)

    def test_interior_cell(self, unit_square_4):
        grid, y0 = unit_square_4
        u = 44.0 / 9.0
        v = 6.0
        lap_u = (0.0 - 2.0 * u + u) * 9.0
        lap_v = (0.0 - 2.0 * v + v) * 9.0
        expected_du = 10.0 * lap_u + 1.0 + v * u**2 - 4.4 * u
        expected_dv = 10.0 * lap_v + 3.4 * u - v * u**2

        # Interior cells do not see the boundary policy
        for bc_type in (mol.BCType.CLAMPED, mol.BCType.PERIODIC):
            params = mol.BrusselatorParams(grid=grid, bc_type=bc_type, alpha=10.0)
            dy = mol.brusselator_rhs(0.0, y0, params)
            assert float(dy[0, 1, 1]) == pytest.approx(expected_du, rel=1e-12)
            assert float(dy[1, 1, 1]) == pytest.approx(expected_dv, rel=1e-12)

    def test_corner_cell_periodic(self, unit_square_4):
        grid, y0 = unit_square_4
        params = mol.BrusselatorParams(grid=grid, bc_type=mol.BCType.PERIODIC, alpha=10.0)
        dy = mol.brusselator_rhs(0.0, y0, params)

        # Cell (0, 0) wraps to row 3 / column 3, which are zero as well
        lap_u = (0.0 - 0.0 + 44.0 / 9.0) * 9.0
        lap_v = (0.0 - 0.0 + 6.0) * 9.0
        assert float(dy[0, 0, 0]) == pytest.approx(10.0 * lap_u + 1.0)
        assert float(dy[1, 0, 0]) == pytest.approx(10.0 * lap_v)


class TestForcing:

    @pytest.fixture
    def params(self):
        grid = mol.create_grid(11)
        return mol.BrusselatorParams(grid=grid, bc_type=mol.BCType.CLAMPED)

    def test_pulse_switches_on(self, params):
        y0 = mol.brusselator_initial_state(params.grid)
        before = mol.brusselator_rhs(1.0, y0, params)
        after = mol.brusselator_rhs(1.1, y0, params)
        diff = after - before

        # Grid point (x, y) = (0.3, 0.6) sits at column 3, row 6
        assert float(diff[0, 6, 3]) == pytest.approx(5.0)
        assert float(diff[0, 0, 0]) == 0.0
        assert jnp.all(diff[1] == 0.0)
        assert jnp.all((diff[0] == 0.0) | jnp.isclose(diff[0], 5.0))

    def test_pulse_disc(self, params):
        X, Y = params.grid.meshgrid()
        f = mol.brusselator_forcing(X, Y, 2.0, params)
        inside = (X - 0.3)**2 + (Y - 0.6)**2 <= 0.1**2
        assert jnp.array_equal(f, jnp.where(inside, 5.0, 0.0))
        assert int(jnp.sum(f > 0)) >= 1

    def test_pulse_off_before_onset(self, params):
        X, Y = params.grid.meshgrid()
        assert jnp.all(mol.brusselator_forcing(X, Y, 1.0999, params) == 0.0)

    def test_amplitude_zero_disables(self, params):
        quiet = mol.BrusselatorParams(grid=params.grid, bc_type=params.bc_type, forcing_amplitude=0.0)
        X, Y = params.grid.meshgrid()
        assert jnp.all(mol.brusselator_forcing(X, Y, 5.0, quiet) == 0.0)


class TestProperties:

    @pytest.fixture
    def params(self):
        grid = mol.create_grid(8, (0.0, 1.0), (0.0, 2.0))
        return mol.BrusselatorParams(grid=grid, bc_type=mol.BCType.PERIODIC, alpha=3.0)

    def test_idempotent(self, params):
        y0 = mol.brusselator_initial_state(params.grid)
        first = mol.brusselator_rhs(1.5, y0, params)
        second = mol.brusselator_rhs(1.5, y0, params)
        assert jnp.array_equal(first, second)

        rhs_jit = jax.jit(lambda t, y: mol.brusselator_rhs(t, y, params))
        assert jnp.array_equal(rhs_jit(1.5, y0), rhs_jit(1.5, y0))

    def test_params_unchanged(self, params):
        y0 = mol.brusselator_initial_state(params.grid)
        x_before = jnp.array(params.grid.x)
        mol.brusselator_rhs(2.0, y0, params)
        assert params.alpha == 3.0
        assert params.bc_type is mol.BCType.PERIODIC
        assert jnp.array_equal(params.grid.x, x_before)

    def test_output_is_new_array(self, params):
        y0 = mol.brusselator_initial_state(params.grid)
        y_copy = jnp.array(y0)
        dy = mol.brusselator_rhs(0.0, y0, params)
        assert dy is not y0
        assert jnp.array_equal(y0, y_copy)

    def test_split_sums_to_rhs(self, params):
        y0 = mol.brusselator_initial_state(params.grid)
        split = mol.brusselator_split()
        total = split['implicit'](2.0, y0, params) + split['explicit'](2.0, y0, params)
        assert jnp.allclose(total, mol.brusselator_rhs(2.0, y0, params), rtol=1e-14)

    def test_diffusion_only_is_conservative(self, params):
        key = jax.random.PRNGKey(1)
        y = jax.random.uniform(key, (2, 8, 8), dtype=jnp.float64)
        d = mol.brusselator_diffusion(0.0, y, params)
        assert jnp.allclose(jnp.sum(d, axis=(1, 2)), 0.0, atol=1e-9)

    def test_uniform_state_has_no_diffusion(self, params):
        y = jnp.full((2, 8, 8), 1.3)
        assert jnp.array_equal(mol.brusselator_diffusion(0.0, y, params), jnp.zeros_like(y))

    def test_nan_propagates(self, params):
        y = mol.brusselator_initial_state(params.grid).at[0, 4, 4].set(jnp.nan)
        dy = mol.brusselator_rhs(0.0, y, params)
        assert bool(jnp.isnan(dy[0, 4, 4]))
        assert bool(jnp.isnan(dy[1, 4, 4]))

    def test_analytical_jvp(self, params):
        key1, key2 = jax.random.split(jax.random.PRNGKey(2))
        y = jax.random.uniform(key1, (2, 8, 8), dtype=jnp.float64, maxval=3.0)
        w = jax.random.normal(key2, (2, 8, 8), dtype=jnp.float64)
        _, expected = jax.jvp(lambda y_: mol.brusselator_rhs(2.0, y_, params), (y,), (w,))
        actual = mol.brusselator_jvp(2.0, y, w, params)
        assert jnp.allclose(actual, expected, rtol=1e-10, atol=1e-8)


class TestParamsValidation:

    def test_bc_type_required(self):
        grid = mol.create_grid(4)
        with pytest.raises(TypeError):
            mol.BrusselatorParams(grid=grid)
        with pytest.raises(ValueError):
            mol.BrusselatorParams(grid=grid, bc_type=None)

    def test_bc_type_by_name(self):
        params = mol.BrusselatorParams(grid=mol.create_grid(4), bc_type="periodic")
        assert params.bc_type is mol.BCType.PERIODIC

    @pytest.mark.parametrize("kwargs", [
        {"alpha": -1.0},
        {"forcing_radius": 0.0},
        {"forcing_center": (0.3,)},
    ])
    def test_rejects_bad_values(self, kwargs):
        with pytest.raises(ValueError):
            mol.BrusselatorParams(grid=mol.create_grid(4), bc_type="clamped", **kwargs)

    def test_rejects_non_grid(self):
        with pytest.raises(ValueError):
            mol.BrusselatorParams(grid=(jnp.zeros(3), jnp.zeros(3)), bc_type="clamped")
