import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest

from core.grid import GridMapper
from core.field import FieldState
from physics.domains import make_classifier


def base_params(**overrides):
    params = {
        'backend': 'cpu',
        'boundary_condition': 'dirichlet',
        'precision': 'float64',
        'dt': 0.002,
        'viscosity': 1.0,
        'drift_speed': 0.0,
        'amplitude_clamp': False,
        'vmax': 10.0,
        'quiet_mode': True,
    }
    params.update(overrides)
    return params


def make_state(shape, args, nx=32, ny=32, bounds=(-2.0, 2.0, -2.0, 2.0), t_in=2.0, t_out=0.0, shape_params=None):
    grid = GridMapper(nx, ny, *bounds)
    classifier = make_classifier(shape, args, shape_params)
    state = FieldState(grid, classifier, t_in, t_out)
    state.initialize_from(0.0)
    return state


@pytest.fixture
def params():
    return base_params()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
