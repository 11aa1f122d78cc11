import numpy as np

from analysis.statistics import compute_variance, renormalise_field, StatisticsManager


def test_variance_is_mean_square_over_interior():
    phi = np.array([[1.0, 2.0], [3.0, 100.0]])
    xy_in = np.array([[1, 1], [1, 0]], dtype=np.int16)
    assert np.isclose(compute_variance(phi, xy_in), 14.0 / 3.0)


def test_variance_of_empty_domain_is_zero():
    phi = np.ones((4, 4))
    xy_in = np.zeros((4, 4), dtype=np.int16)
    assert compute_variance(phi, xy_in) == 0.0


def test_renormalise_touches_interior_only():
    phi = np.array([[4.0, 8.0], [5.0, 6.0]])
    xy_in = np.array([[1, 1], [0, 2]], dtype=np.int16)
    renormalise_field(phi, xy_in, 16.0)
    assert np.array_equal(phi, [[1.0, 2.0], [5.0, 6.0]])


def test_renormalise_skips_zero_variance():
    phi = np.zeros((3, 3))
    xy_in = np.ones((3, 3), dtype=np.int16)
    renormalise_field(phi, xy_in, 0.0)
    assert np.all(np.isfinite(phi))
    assert np.all(phi == 0.0)


def test_color_scale_follows_rescale_flag():
    assert StatisticsManager({'rescale_variance': False}).color_scale(3.0) == 1.0
    assert StatisticsManager({'rescale_variance': True}).color_scale(3.0) == 2.0


def test_frame_stats_counts_components():
    xy_in = np.zeros((10, 10), dtype=np.int16)
    xy_in[1:4, 1:4] = 1
    xy_in[6:9, 5:9] = 1
    phi = np.where(xy_in == 1, 0.5, 9.0)
    nablax = np.zeros((10, 10))
    nablay = np.zeros((10, 10))
    nablax[2, 2] = 3.0
    nablay[2, 2] = 4.0

    stats = StatisticsManager({}).calculate_frame_stats(phi, xy_in, nablax, nablay)
    assert stats["components"] == 2
    assert stats["interior_cells"] == 21
    assert np.isclose(stats["energy"], 21 * 0.25)
    assert stats["max_value"] == 0.5
    assert stats["max_gradient"] == 5.0


def test_frame_stats_on_degenerate_domain():
    stats = StatisticsManager({}).calculate_frame_stats(np.ones((5, 5)), np.zeros((5, 5), dtype=np.int16))
    assert stats["interior_cells"] == 0
    assert stats["components"] == 0
    assert stats["variance"] == 0.0
