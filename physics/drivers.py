# heat_domain/physics/drivers.py

import math
from typing import NamedTuple, Dict, Any

from physics.domains import make_classifier


class ShapeParameters(NamedTuple):
    """參數化區域 (Julia 集合) 的複數參數 c = c_x + i c_y。"""
    c_x: float
    c_y: float

    def describe(self) -> str:
        if self.c_y >= 0.0:
            return f"c = {self.c_x:.5f} + {self.c_y:.5f} i"
        return f"c = {self.c_x:.5f} {self.c_y:.5f} i"

# ==============================================================================
# 1. 定义驅動規則：只依賴影格編號的純函數
# ==============================================================================

def circle_driver(frame: int, num_frames: int, center_x=-0.9, center_y=0.0, radius=0.15, **kwargs) -> ShapeParameters:
    """c 沿一個小圓走一圈，完整的一圈對應整段動畫。"""
    angle = frame * 2.0 * math.pi / max(num_frames, 1)
    return ShapeParameters(center_x + radius * math.cos(angle), center_y + radius * math.sin(angle))

def cardioid_driver(frame: int, num_frames: int, base=1.05, rate=0.00003, wobble=0.02, **kwargs) -> ShapeParameters:
    """c 沿主心臟線緩慢移動，並在虛部加上小幅擺動。"""
    angle = (base + frame * rate) ** 0.333
    yshift = wobble * math.sin(frame * 0.5 * math.pi * 0.002)
    cosj, sinj = math.cos(angle), math.sin(angle)
    c_x = 0.5 * (cosj * (1.0 - 0.5 * cosj) + 0.5 * sinj * sinj)
    c_y = 0.5 * sinj * (1.0 - cosj) + yshift
    return ShapeParameters(c_x, c_y)

def fixed_driver(frame: int, num_frames: int, c_x=-0.8, c_y=0.156, **kwargs) -> ShapeParameters:
    return ShapeParameters(c_x, c_y)

# ==============================================================================
# 2. 注册规则
# ==============================================================================

shape_driver_registry = {
    'circle': circle_driver,
    'cardioid': cardioid_driver,
    'fixed': fixed_driver,
}

# ==============================================================================
# 3. 定义配置
# ==============================================================================

shape_driver_configs = {
    'julia_circle': {
        'provider': 'circle',
        'args': {'center_x': -0.9, 'center_y': 0.0, 'radius': 0.15},
        'description': "c 繞 -0.9 走半徑 0.15 的圓。"
    },
    'julia_cardioid': {
        'provider': 'cardioid',
        'args': {'base': 1.05, 'rate': 0.00003, 'wobble': 0.02},
        'description': "c 沿 Mandelbrot 主心臟線移動。"
    },
    'julia_fixed': {
        'provider': 'fixed',
        'args': {'c_x': -0.8, 'c_y': 0.156},
        'description': "固定參數 c = -0.8 + 0.156 i。"
    },
}


class DomainDriver:
    """每個影格更新形狀參數，並讓 FieldState 重新分類網格與重設邊界溫度。"""
    def __init__(self, driver_config_name: str, num_frames: int, shape: str, shape_args: Dict[str, Any]):
        conf = shape_driver_configs[driver_config_name]
        self.provider = shape_driver_registry[conf['provider']]
        self.driver_args = dict(conf.get('args', {}))
        self.num_frames = num_frames
        self.shape = shape
        self.shape_args = shape_args
        self.current = None

    def parameters_at(self, frame: int) -> ShapeParameters:
        return self.provider(frame, self.num_frames, **self.driver_args)

    def apply(self, frame: int, field_state) -> ShapeParameters:
        shape_params = self.parameters_at(frame)
        classifier = make_classifier(self.shape, self.shape_args, shape_params)
        field_state.reclassify(classifier)
        self.current = shape_params
        return shape_params
