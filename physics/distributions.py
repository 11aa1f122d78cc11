# heat_domain/physics/distributions.py

import numpy as np

# ==============================================================================
# 1. 定义初始場模型 (只作用於內部格點的數值)
# ==============================================================================

def gaussian_bump(x, y, center_x: float, center_y: float, baseline: float, amplitude: float, width: float, **kwargs) -> np.ndarray:
    """baseline + amplitude * exp(-d^2 / width^2) / width，高斯部分下限為 1e-15。"""
    dist2 = (x - center_x) ** 2 + (y - center_y) ** 2
    module = amplitude * np.exp(-dist2 / (width * width))
    module = np.maximum(module, 1.0e-15)
    return baseline + module / width

def uniform_level(x, y, baseline: float, **kwargs) -> np.ndarray:
    return np.full(np.shape(x), baseline, dtype=np.float64)

# ==============================================================================
# 2. 注册模型
# ==============================================================================

initial_condition_registry = {
    'gaussian': gaussian_bump,
    'uniform': uniform_level,
}

# ==============================================================================
# 3. 定义配置
# ==============================================================================

initial_condition_configs = {
    'gaussian_default': {
        'provider': 'gaussian',
        'args': {'center_x': -1.0, 'center_y': 0.0, 'baseline': 0.1, 'amplitude': 0.0, 'width': 0.01},
        'description': "接近均勻的 0.1 背景 (振幅為零的高斯)。"
    },
    'gaussian_center': {
        'provider': 'gaussian',
        'args': {'center_x': 0.0, 'center_y': 0.0, 'baseline': 0.0, 'amplitude': 0.1, 'width': 0.2},
        'description': "區域中心的高斯熱斑。"
    },
    'uniform_cold': {
        'provider': 'uniform',
        'args': {'baseline': 0.0},
        'description': "內部全為 0。"
    },
}
