import numpy as np

from analysis.colors import hsl_to_rgb, color_cells, amplitude

COLOR_PARAMS = {
    'color_scheme': 'hue', 'slope': 0.3, 'attenuation': 0.0,
    'color_hue': 260.0, 'color_drift': 0.0, 'lum_mean': 0.5, 'lum_amp': 0.3,
    'hue_mean': 280.0, 'hue_amp': -110.0,
}


def test_primary_hues():
    assert np.allclose(hsl_to_rgb(0.0, 1.0, 0.5), (1.0, 0.0, 0.0))
    assert np.allclose(hsl_to_rgb(120.0, 1.0, 0.5), (0.0, 1.0, 0.0))
    assert np.allclose(hsl_to_rgb(240.0, 1.0, 0.5), (0.0, 0.0, 1.0))
    assert np.allclose(hsl_to_rgb(360.0 + 60.0, 1.0, 0.5), (1.0, 1.0, 0.0))


def test_grey_when_unsaturated():
    assert np.allclose(hsl_to_rgb(75.0, 0.0, 0.3), (0.3, 0.3, 0.3))


def test_amplitude_saturates_and_attenuates():
    assert np.isclose(amplitude(0.0, 1.0, 0.0, 0.3, 0.0), 0.0)
    assert amplitude(1e6, 1.0, 0.0, 0.3, 0.0) <= 1.0
    assert np.isclose(amplitude(1e6, 1.0, 1.0, 0.3, np.log(2.0)), 0.5)


def test_non_interior_cells_are_black():
    values = np.linspace(-1.0, 1.0, 12).reshape(4, 3)
    xy_in = np.array([[1, 0, 2], [1, 1, 1], [0, 0, 0], [1, 3, 1]], dtype=np.int16)
    for scheme in ('lum', 'hue', 'phase'):
        rgb = color_cells(values, xy_in, 1.0, 0.0, dict(COLOR_PARAMS, color_scheme=scheme))
        assert rgb.shape == (4, 3, 3)
        assert np.all(rgb[xy_in != 1] == 0.0)
        assert np.all((rgb >= 0.0) & (rgb <= 1.0))
        assert np.all(rgb[xy_in == 1].sum(axis=-1) > 0.0)


def test_empty_domain_renders_background():
    rgb = color_cells(np.ones((3, 3)), np.zeros((3, 3), dtype=np.int16), 1.0, 0.0, COLOR_PARAMS)
    assert np.all(rgb == 0.0)
