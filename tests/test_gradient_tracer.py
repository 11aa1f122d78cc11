import numpy as np

from core.grid import GridMapper
from core.integrators import compute_gradient, trace_field_line
from analysis.field_lines import FieldLineTracer


def test_constant_field_has_zero_gradient():
    phi = np.full((20, 12), 3.25)
    nablax, nablay = compute_gradient(phi, 0.1)
    assert np.all(nablax == 0.0)
    assert np.all(nablay == 0.0)


def test_linear_field_gradient_uses_clamped_edges():
    grid = GridMapper(10, 8, 0.0, 1.0, 0.0, 0.8)
    X, _ = grid.meshgrid()
    nablax, nablay = compute_gradient(X.copy(), grid.dx)
    assert np.allclose(nablax[1:-1, :], 2.0)
    assert np.allclose(nablax[0, :], 1.0)
    assert np.allclose(nablax[-1, :], 1.0)
    assert np.allclose(nablay, 0.0)


def test_zero_gradient_trace_is_a_single_point():
    grid = GridMapper(16, 16, -1.0, 1.0, -1.0, 1.0)
    zeros = np.zeros(grid.shape)
    xy_in = np.ones(grid.shape, dtype=np.int16)
    line = trace_field_line(0.1, -0.2, zeros, zeros, xy_in, grid.x_min, grid.y_min, grid.dx, 0.01, 500)
    assert line.shape == (1, 2)
    assert np.allclose(line[0], (0.1, -0.2))


def test_trace_from_exterior_start_stops_immediately():
    grid = GridMapper(16, 16, -1.0, 1.0, -1.0, 1.0)
    ones = np.ones(grid.shape)
    xy_in = np.zeros(grid.shape, dtype=np.int16)
    line = trace_field_line(0.0, 0.0, ones, ones, xy_in, grid.x_min, grid.y_min, grid.dx, 0.01, 500)
    assert line.shape == (1, 2)


def test_trace_follows_gradient_with_fixed_step():
    grid = GridMapper(32, 32, -1.0, 1.0, -1.0, 1.0)
    nablax = np.full(grid.shape, 4.0)
    nablay = np.zeros(grid.shape)
    xy_in = np.ones(grid.shape, dtype=np.int16)
    line = trace_field_line(-0.5, 0.25, nablax, nablay, xy_in, grid.x_min, grid.y_min, grid.dx, 0.01, 40)
    assert line.shape == (41, 2)
    assert np.allclose(np.diff(line[:, 0]), 0.01)
    assert np.allclose(line[:, 1], 0.25)


def test_trace_stops_after_entering_exterior():
    grid = GridMapper(40, 40, -1.0, 1.0, -1.0, 1.0)
    X, _ = grid.meshgrid()
    xy_in = (np.abs(X) < 0.5).astype(np.int16)
    nablax = np.ones(grid.shape)
    nablay = np.zeros(grid.shape)
    line = trace_field_line(0.0, 0.0, nablax, nablay, xy_in, grid.x_min, grid.y_min, grid.dx, 0.02, 1000)
    assert len(line) < 1000
    i, j = grid.xy_to_ij(line[:, 0], line[:, 1])
    assert xy_in[i[-1], j[-1]] == 0
    assert np.all(xy_in[i[:-1], j[:-1]] == 1)


def test_seed_points_on_reference_ellipse():
    grid = GridMapper(64, 36, -2.0, 2.0, -1.125, 1.125)
    tracer = FieldLineTracer({'num_field_lines': 10, 'field_line_factor': 20}, grid)
    X, Y = grid.meshgrid()
    nablax, nablay = compute_gradient(np.exp(-(X ** 2 + Y ** 2)), grid.dx)
    seeds = tracer.seed_points(nablax, nablay)
    assert seeds.shape == (11, 2)
    assert np.allclose(seeds[0], (np.sqrt(3.58), 0.0))
    assert np.allclose(seeds[:, 0] ** 2 / 3.58 + seeds[:, 1] ** 2 / 1.18, 1.0)


def test_seed_points_fall_back_to_equal_spacing():
    grid = GridMapper(32, 18, -2.0, 2.0, -1.125, 1.125)
    tracer = FieldLineTracer({'num_field_lines': 4, 'field_line_factor': 10}, grid)
    zeros = np.zeros(grid.shape)
    seeds = tracer.seed_points(zeros, zeros)
    angles = np.arctan2(seeds[:, 1] / np.sqrt(1.18), seeds[:, 0] / np.sqrt(3.58))
    expected = np.array([0, 10, 20, 30, 39]) * 2.0 * np.pi / 40
    assert np.allclose(np.mod(angles, 2.0 * np.pi), expected)


def test_seeds_concentrate_where_gradient_is_large():
    grid = GridMapper(64, 36, -2.0, 2.0, -1.125, 1.125)
    tracer = FieldLineTracer({'num_field_lines': 20, 'field_line_factor': 50}, grid)
    X, _ = grid.meshgrid()
    nablax = np.where(X > 0.0, 1.0, 0.01)
    seeds = tracer.seed_points(nablax, np.zeros(grid.shape))
    assert np.count_nonzero(seeds[1:, 0] > 0.0) > 15


def test_trace_all_returns_one_line_per_seed():
    grid = GridMapper(48, 27, -2.0, 2.0, -1.125, 1.125)
    tracer = FieldLineTracer({'num_field_lines': 6, 'field_line_factor': 5,
                              'field_line_step': 0.01, 'field_line_max_steps': 50}, grid)
    X, Y = grid.meshgrid()
    nablax, nablay = compute_gradient(-(X ** 2 + Y ** 2), grid.dx)
    lines = tracer.trace_all(nablax, nablay, np.ones(grid.shape, dtype=np.int16))
    assert len(lines) == 7
    assert all(line.shape[1] == 2 and len(line) >= 1 for line in lines)
