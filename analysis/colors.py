# heat_domain/analysis/colors.py

import numpy as np
from typing import Dict, Any

# ==============================================================================
# 1. HSL -> RGB (向量化)
# ==============================================================================

def hsl_to_rgb(hue, saturation, lightness) -> np.ndarray:
    """hue 以度為單位，saturation 與 lightness 在 [0, 1]。返回最後一軸為 3 的 RGB 陣列。"""
    h = np.mod(np.asarray(hue, dtype=np.float64), 360.0) / 60.0
    s = np.clip(np.asarray(saturation, dtype=np.float64), 0.0, 1.0)
    l = np.clip(np.asarray(lightness, dtype=np.float64), 0.0, 1.0)
    h, s, l = np.broadcast_arrays(h, s, l)

    c = (1.0 - np.abs(2.0 * l - 1.0)) * s
    x = c * (1.0 - np.abs(np.mod(h, 2.0) - 1.0))
    m = l - 0.5 * c
    zero = np.zeros_like(c)

    sector = np.floor(h).astype(np.int64) % 6
    r = np.choose(sector, [c, x, zero, zero, x, c])
    g = np.choose(sector, [x, c, c, x, zero, zero])
    b = np.choose(sector, [zero, zero, x, c, c, x])
    return np.stack((r + m, g + m, b + m), axis=-1)

def amplitude(value, scale: float, t: float, slope: float, attenuation: float):
    """tanh(slope * value / scale) * exp(-attenuation * t)，落在 (-1, 1)。"""
    return np.tanh(slope * np.asarray(value) / scale) * np.exp(-attenuation * t)

# ==============================================================================
# 2. 定义配色方案
# ==============================================================================

def luminosity_scheme(value, scale, t, p):
    """固定色相 (隨時間緩慢漂移)，以亮度表示數值。"""
    a = amplitude(value, scale, t, p['slope'], p['attenuation'])
    hue = p['color_hue'] + p['color_drift'] * t
    return hsl_to_rgb(hue, 0.9, p['lum_mean'] + a * p['lum_amp'])

def hue_scheme(value, scale, t, p):
    a = amplitude(value, scale, t, p['slope'], p['attenuation'])
    return hsl_to_rgb(p['hue_mean'] + a * p['hue_amp'], 0.9, 0.5)

def phase_scheme(value, scale, t, p):
    """色相繞整個色環，正負號分別落在對面的顏色。"""
    a = amplitude(value, scale, t, p['slope'], p['attenuation'])
    return hsl_to_rgb(180.0 * (1.0 + a), 0.9, 0.5)

# ==============================================================================
# 3. 注册方案
# ==============================================================================

color_scheme_registry = {
    'lum': luminosity_scheme,
    'hue': hue_scheme,
    'phase': phase_scheme,
}

field_representations = ('intensity', 'gradient')

def color_cells(values: np.ndarray, xy_in: np.ndarray, scale: float, t: float, params: Dict[str, Any]) -> np.ndarray:
    """
    每個格點一個 RGB 三元組 (形狀 (nx, ny, 3))。
    只有內部格點上色，其餘為黑色背景。
    """
    scheme = color_scheme_registry[params['color_scheme']]
    rgb = np.zeros(values.shape + (3,), dtype=np.float64)
    interior = xy_in == 1
    if np.any(interior):
        rgb[interior] = scheme(values[interior], scale, t, params)
    return rgb
