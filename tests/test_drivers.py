import math

import numpy as np
import pytest

from conftest import make_state
from physics.drivers import (DomainDriver, ShapeParameters, circle_driver, cardioid_driver,
                             shape_driver_configs)


def test_circle_driver_starts_on_positive_real_axis():
    c = circle_driver(0, 100, center_x=-0.9, center_y=0.0, radius=0.15)
    assert np.isclose(c.c_x, -0.75)
    assert np.isclose(c.c_y, 0.0)
    half = circle_driver(50, 100, center_x=-0.9, center_y=0.0, radius=0.15)
    assert np.isclose(half.c_x, -1.05)


def test_cardioid_driver_starts_on_main_cardioid():
    c = cardioid_driver(0, 4500)
    theta = 1.05 ** 0.333
    assert np.isclose(abs(complex(c.c_x, c.c_y) - 0.25), 0.5 * (1.0 - math.cos(theta)))


def test_parameters_are_pure_functions_of_frame():
    driver = DomainDriver('julia_circle', 400, 'julia', {'max_iter': 30, 'scale': 1.1})
    first = driver.parameters_at(17)
    for frame in (3, 250, 17, 0):
        driver.parameters_at(frame)
    assert driver.parameters_at(17) == first


def test_describe_formats_sign():
    assert ShapeParameters(-0.8, 0.156).describe() == "c = -0.80000 + 0.15600 i"
    assert ShapeParameters(-0.8, -0.156).describe() == "c = -0.80000 -0.15600 i"


@pytest.mark.parametrize("name", list(shape_driver_configs))
def test_apply_reclassifies_and_is_idempotent(name):
    args = {'max_iter': 40, 'escape_radius': 2.0, 'scale': 1.1}
    driver = DomainDriver(name, 200, 'julia', args)
    state = make_state('julia', args, nx=40, ny=24, bounds=(-2.0, 2.0, -1.2, 1.2),
                       shape_params=driver.parameters_at(0))
    state.phi[state.interior_mask()] = 0.3

    params = driver.apply(60, state)
    assert driver.current == params
    codes, phi = state.xy_in.copy(), state.phi.copy()
    assert set(np.unique(codes)) <= {1, 2}
    assert np.all(phi[codes == 2] == state.t_in)

    driver.apply(60, state)
    assert np.array_equal(state.xy_in, codes)
    assert np.array_equal(state.phi, phi)


def test_apply_keeps_values_of_cells_that_stay_interior(rng):
    args = {'max_iter': 40, 'escape_radius': 2.0, 'scale': 1.1}
    driver = DomainDriver('julia_circle', 200, 'julia', args)
    state = make_state('julia', args, nx=40, ny=24, bounds=(-2.0, 2.0, -1.2, 1.2),
                       shape_params=driver.parameters_at(0))
    before_interior = state.interior_mask().copy()
    state.phi[before_interior] = rng.uniform(-1.0, 1.0, size=np.count_nonzero(before_interior))
    before = state.phi.copy()

    driver.apply(25, state)
    kept = before_interior & state.interior_mask()
    assert np.any(kept)
    assert np.array_equal(state.phi[kept], before[kept])
