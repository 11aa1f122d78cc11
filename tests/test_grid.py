import numpy as np

from core.grid import GridMapper


def test_index_round_trip_is_identity():
    grid = GridMapper(17, 11, -2.0, 2.0, -1.3, 1.3)
    ii, jj = np.meshgrid(np.arange(17), np.arange(11), indexing='ij')
    x, y = grid.ij_to_xy(ii, jj)
    i2, j2 = grid.xy_to_ij(x, y)
    assert np.array_equal(i2, ii)
    assert np.array_equal(j2, jj)


def test_scalar_round_trip():
    grid = GridMapper(40, 30, -1.0, 1.0, -0.75, 0.75)
    for i, j in [(0, 0), (39, 29), (7, 21)]:
        x, y = grid.ij_to_xy(i, j)
        assert grid.xy_to_ij(x, y) == (i, j)


def test_both_axes_share_dx():
    grid = GridMapper(64, 32, -2.0, 2.0, -1.0, 1.0)
    assert grid.dx == 4.0 / 64
    assert np.allclose(np.diff(grid.get_y_grid_coords()), grid.dx)


def test_xy_to_ij_clamps_out_of_range():
    grid = GridMapper(10, 10, 0.0, 1.0, 0.0, 1.0)
    assert grid.xy_to_ij(-5.0, 7.0) == (0, 9)
    i, j = grid.xy_to_ij(np.array([-1.0, 0.5, 3.0]), np.array([0.0, 0.5, 3.0]))
    assert list(i) == [0, 5, 9]
    assert list(j) == [0, 5, 9]


def test_xy_to_pos_normalised():
    grid = GridMapper(20, 10, -2.0, 2.0, -1.0, 1.0)
    assert grid.xy_to_pos(-2.0, -1.0) == (0.0, 0.0)
    px, py = grid.xy_to_pos(0.0, 0.0)
    assert np.isclose(px, 0.5)
    assert np.isclose(py, 0.5)


def test_meshgrid_is_cached_and_indexed_ij():
    grid = GridMapper(5, 3, 0.0, 5.0, 0.0, 3.0)
    X, Y = grid.meshgrid()
    assert X.shape == (5, 3)
    assert X[4, 0] == 4.0
    assert Y[0, 2] == 2.0
    assert grid.meshgrid()[0] is X
