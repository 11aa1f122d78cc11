import numpy as np
import pytest

from physics.domains import make_classifier, domain_configs, domain_shape_registry
from physics.drivers import ShapeParameters


@pytest.mark.parametrize("max_iter", [1, 10, 1000])
def test_mandelbrot_origin_inside_and_far_point_outside(max_iter):
    classify = make_classifier('mandelbrot', {'max_iter': max_iter, 'escape_radius': 2.0})
    assert classify(0.0, 0.0) == 1
    assert classify(2.0, 2.0) == 0


def test_julia_codes_are_interior_or_boundary():
    classify = make_classifier('julia', {'max_iter': 50, 'scale': 1.0}, ShapeParameters(0.0, 0.0))
    assert classify(0.5, 0.0) == 1
    assert classify(1.5, 0.0) == 2
    X, Y = np.meshgrid(np.linspace(-2, 2, 9), np.linspace(-2, 2, 7), indexing='ij')
    codes = classify(X, Y)
    assert codes.dtype == np.int16
    assert set(np.unique(codes)) <= {1, 2}


def test_julia_requires_shape_parameters():
    with pytest.raises(ValueError):
        make_classifier('julia', {'max_iter': 10})


def test_unknown_shape_rejected():
    with pytest.raises(ValueError):
        make_classifier('dodecahedron', {})


def test_array_and_scalar_results_agree():
    classify = make_classifier('ellipse', {'semi_axis_x': 1.8, 'semi_axis_y': 1.0})
    x = np.array([0.0, 1.7, 1.9, 0.0])
    y = np.array([0.0, 0.0, 0.0, 0.99])
    codes = classify(x, y)
    assert codes.shape == (4,)
    assert [classify(a, b) for a, b in zip(x, y)] == list(codes)
    assert list(codes) == [1, 1, 0, 1]


def test_rectangle_and_sinai():
    rect = make_classifier('rectangle', {'half_width': 0.7, 'half_height': 1.0})
    assert rect(0.69, 0.0) == 1
    assert rect(0.71, 0.0) == 0
    sinai = make_classifier('sinai', {'radius': 0.7})
    assert sinai(0.0, 0.0) == 0
    assert sinai(1.5, 0.9) == 1


def test_stadium_caps():
    classify = make_classifier('stadium', {'half_length': 1.0, 'radius': 0.5})
    assert classify(0.0, 0.49) == 1
    assert classify(0.9, 0.0) == 1
    assert classify(1.1, 0.0) == 0
    assert classify(0.9, 0.45) == 0


def test_polygon_hexagon():
    classify = make_classifier('polygon', {'nsides': 6, 'radius': 1.0, 'rotation': 0.0})
    assert classify(0.0, 0.0) == 1
    assert classify(1.2, 0.0) == 0
    assert classify(0.0, 1.2) == 0


def test_annulus_heated_layers():
    classify = make_classifier('annulus_heated', {'inner_radius': 0.3, 'outer_radius': 1.0,
                                                  'ring_width': 0.05, 'outer_depth': 6})
    assert classify(0.0, 0.0) == 2
    assert classify(0.6, 0.0) == 1
    assert classify(1.02, 0.0) == 8
    assert classify(1.5, 0.0) == 0


def test_young_double_slit():
    classify = make_classifier('young', {'wall_half_width': 0.1, 'slit_offset': 0.7, 'slit_half_width': 0.1})
    assert classify(0.0, 0.0) == 0
    assert classify(0.0, 0.7) == 1
    assert classify(0.0, -0.7) == 1
    assert classify(0.5, 0.0) == 1


def test_menger_carpet_levels():
    plain = make_classifier('menger', {'depth': 2, 'ratio': 3})
    heated = make_classifier('menger_heated', {'depth': 2, 'ratio': 3})
    opened = make_classifier('menger_heated_open', {'depth': 2, 'ratio': 3})
    assert plain(0.0, 0.0) == 0
    assert plain(-0.95, -0.95) == 1
    assert heated(0.0, 0.0) == 2
    assert heated(-2.0 / 3.0, -2.0 / 3.0) == 3
    assert heated(-0.95, -0.95) == 1
    assert heated(1.5, 0.0) == 0
    assert opened(1.5, 0.0) == 1


def test_menger_depth_codes_non_decreasing_with_level():
    heated = make_classifier('menger_heated', {'depth': 3, 'ratio': 3})
    X, Y = np.meshgrid(np.linspace(-0.99, 0.99, 301), np.linspace(-0.99, 0.99, 301), indexing='ij')
    codes = heated(X, Y)
    assert set(np.unique(codes)) <= {1, 2, 3, 4}
    assert np.count_nonzero(codes == 2) > np.count_nonzero(codes == 3) // 8


def test_mandelbrot_circle_has_conductor():
    classify = make_classifier('mandelbrot_circle', {'max_iter': 100, 'circle_x': -1.0, 'circle_y': 0.0,
                                                     'circle_radius': 0.15})
    assert classify(-1.0, 0.0) == 2
    assert classify(0.0, 0.0) == 1


def test_every_preset_builds_a_classifier():
    for name, conf in domain_configs.items():
        assert conf['provider'] in domain_shape_registry
        shape_params = ShapeParameters(-0.8, 0.156) if conf['provider'] == 'julia' else None
        classify = make_classifier(conf['provider'], conf['args'], shape_params)
        X, Y = np.meshgrid(np.linspace(-2, 2, 16), np.linspace(-1, 1, 8), indexing='ij')
        codes = classify(X, Y)
        assert codes.shape == (16, 8), name
        assert codes.min() >= 0, name
