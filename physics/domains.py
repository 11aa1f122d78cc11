# heat_domain/physics/domains.py

import math
import numpy as np
from numba import njit, prange

# 格點分類碼：0 = 區域外，1 = 區域內 (演化)，k >= 2 = 深度 k-2 的邊界層
EXTERIOR = 0
INTERIOR = 1
BOUNDARY = 2

def _codes(mask):
    return np.asarray(mask).astype(np.int16)

# ==============================================================================
# 1. 定义形狀分類函數 (Providers)
#    每個函數接收座標陣列 x, y，返回同形狀的 int16 分類碼。
# ==============================================================================

def rectangle(x, y, half_width, half_height=1.0, **kwargs):
    return _codes((np.abs(x) < half_width) & (np.abs(y) < half_height))

def ellipse(x, y, semi_axis_x, semi_axis_y=1.0, **kwargs):
    return _codes(x * x / (semi_axis_x * semi_axis_x) + y * y / (semi_axis_y * semi_axis_y) < 1.0)

def stadium(x, y, half_length, radius=1.0, **kwargs):
    """矩形兩端各接一個半圓。"""
    a = 0.5 * half_length
    r2 = radius * radius
    body = (np.abs(x) < a) & (np.abs(y) < radius)
    caps = ((x + a) ** 2 + y * y < r2) | ((x - a) ** 2 + y * y < r2)
    return _codes(body | caps)

def sinai(x, y, radius, **kwargs):
    """整個網格矩形中挖去一個圓盤。"""
    return _codes(x * x + y * y > radius * radius)

def diamond(x, y, half_x, half_y=1.0, **kwargs):
    return _codes(np.abs(x) / half_x + np.abs(y) / half_y < 1.0)

def triangle(x, y, a, b=1.0, **kwargs):
    return _codes((x > -a) & (y > -b) & (x / a + y / b < 0.0))

def polygon(x, y, nsides, radius, rotation=0.0, **kwargs):
    """正多邊形，radius 為外接圓半徑，rotation 以 pi/2 為單位。"""
    omega = 2.0 * math.pi / nsides
    apothem = radius * math.cos(0.5 * omega)
    inside = np.ones(np.shape(x), dtype=bool)
    for k in range(nsides):
        angle = rotation * 0.5 * math.pi + (k + 0.5) * omega
        inside &= x * math.cos(angle) + y * math.sin(angle) < apothem
    return _codes(inside)

def annulus(x, y, inner_radius, outer_radius=1.0, offset=0.0, **kwargs):
    """兩圓之間的區域，內圓可沿 x 軸偏移。"""
    outside_inner = (x - offset) ** 2 + y * y > inner_radius * inner_radius
    inside_outer = x * x + y * y < outer_radius * outer_radius
    return _codes(outside_inner & inside_outer)

def annulus_heated(x, y, inner_radius, outer_radius=1.0, ring_width=0.05, outer_depth=6, **kwargs):
    """
    內外邊界溫度不同的環形區域：
    內圓盤為深度 0 的邊界 (T_IN)，外側一圈寬 ring_width 的邊界深度為 outer_depth。
    """
    r2 = x * x + y * y
    codes = np.zeros(np.shape(r2), dtype=np.int16)
    r_ring = outer_radius + ring_width
    codes[r2 < r_ring * r_ring] = BOUNDARY + outer_depth
    codes[r2 < outer_radius * outer_radius] = INTERIOR
    codes[r2 < inner_radius * inner_radius] = BOUNDARY
    return codes

def young(x, y, wall_half_width, slit_offset, slit_half_width, **kwargs):
    """Young 雙縫：x = 0 處有一道牆，牆上開兩條縫。"""
    off_wall = np.abs(x) >= wall_half_width
    slits = (np.abs(y - slit_offset) < slit_half_width) | (np.abs(y + slit_offset) < slit_half_width)
    return _codes(off_wall | slits)

def grating(x, y, wall_half_width, spacing, slit_half_width, **kwargs):
    """繞射光柵：牆上每隔 spacing 開一條縫。"""
    off_wall = np.abs(x) >= wall_half_width
    nearest = spacing * np.floor(y / spacing + 0.5)
    slits = np.abs(y - nearest) < slit_half_width
    return _codes(off_wall | slits)

def ehrenfest(x, y, radius, center_distance, channel_half_width, **kwargs):
    """Ehrenfest 罐子：兩個圓盤由一條窄通道連接。"""
    r2 = radius * radius
    disks = ((x - center_distance) ** 2 + y * y < r2) | ((x + center_distance) ** 2 + y * y < r2)
    channel = (np.abs(x) < center_distance) & (np.abs(y) < channel_half_width)
    return _codes(disks | channel)

def _menger_levels(x, y, depth, ratio):
    """
    對 [-1, 1]^2 內的點，返回其所在被挖去方塊的層級 (0 起算)，
    未被挖去者為 -1。方塊以外的點同樣返回 -1。
    """
    x1 = 0.5 * (np.asarray(x, dtype=np.float64) + 1.0)
    y1 = 0.5 * (np.asarray(y, dtype=np.float64) + 1.0)
    level = np.full(np.shape(x1), -1, dtype=np.int16)
    middle = ratio // 2
    for k in range(depth):
        x1 = x1 * ratio
        y1 = y1 * ratio
        i = np.floor(x1)
        j = np.floor(y1)
        x1 = x1 - i
        y1 = y1 - j
        hole = (i == middle) & (j == middle) & (level < 0)
        level[hole] = k
    return level

def menger(x, y, depth, ratio=3, **kwargs):
    in_square = (np.abs(x) < 1.0) & (np.abs(y) < 1.0)
    level = _menger_levels(x, y, depth, ratio)
    return _codes(in_square & (level < 0))

def menger_heated(x, y, depth, ratio=3, open_domain=False, **kwargs):
    """
    被挖去的方塊成為加熱邊界：第 k 層的方塊分類碼為 k + 2，
    因此邊界溫度 T_IN * 0.75^k 隨層級遞減。
    """
    in_square = (np.abs(x) < 1.0) & (np.abs(y) < 1.0)
    level = _menger_levels(x, y, depth, ratio)
    codes = np.where(level >= 0, level + BOUNDARY, INTERIOR).astype(np.int16)
    outside = EXTERIOR if not open_domain else INTERIOR
    codes[~in_square] = outside
    return codes

def menger_heated_open(x, y, depth, ratio=3, **kwargs):
    return menger_heated(x, y, depth, ratio, open_domain=True)

# ------------------------------------------------------------------------------
# 代數定義的區域 (逃逸時間迭代)
# ------------------------------------------------------------------------------

@njit(parallel=True, cache=True)
def _bounded_orbits(x, y, c_x, c_y, point_is_c, scale, max_iter, escape_radius):
    """z <- z^2 + c 的迭代，返回每個點的軌道在 max_iter 步內是否有界。"""
    limit = escape_radius * escape_radius
    out = np.empty(x.size, dtype=np.bool_)
    for k in prange(x.size):
        if point_is_c:
            zx = 0.0
            zy = 0.0
            cx = x[k]
            cy = y[k]
        else:
            zx = x[k] / scale
            zy = y[k] / scale
            cx = c_x
            cy = c_y
        bounded = True
        for _ in range(max_iter):
            if zx * zx + zy * zy > limit:
                bounded = False
                break
            zx, zy = zx * zx - zy * zy + cx, 2.0 * zx * zy + cy
        if bounded and zx * zx + zy * zy > limit:
            bounded = False
        out[k] = bounded
    return out

def _orbit_mask(x, y, c_x, c_y, point_is_c, scale, max_iter, escape_radius):
    xa = np.ascontiguousarray(np.broadcast_to(x, np.broadcast(x, y).shape), dtype=np.float64)
    ya = np.ascontiguousarray(np.broadcast_to(y, xa.shape), dtype=np.float64)
    mask = _bounded_orbits(xa.ravel(), ya.ravel(), float(c_x), float(c_y), point_is_c,
                           float(scale), int(max_iter), float(escape_radius))
    return mask.reshape(xa.shape)

def mandelbrot(x, y, max_iter=1000, escape_radius=2.0, **kwargs):
    bounded = _orbit_mask(x, y, 0.0, 0.0, True, 1.0, max_iter, escape_radius)
    return _codes(bounded)

def mandelbrot_circle(x, y, max_iter=1000, escape_radius=2.0, circle_x=-1.0, circle_y=0.0,
                      circle_radius=0.15, **kwargs):
    """Mandelbrot 集合加上一個圓形導體 (深度 0 的邊界)。"""
    codes = mandelbrot(x, y, max_iter, escape_radius)
    conductor = (x - circle_x) ** 2 + (y - circle_y) ** 2 < circle_radius * circle_radius
    codes[conductor] = BOUNDARY
    return codes

def julia(x, y, shape_params, max_iter=1000, escape_radius=2.0, scale=1.0, **kwargs):
    """Julia 集合：有界軌道為內部，逃逸的點是溫度固定的邊界。"""
    bounded = _orbit_mask(x, y, shape_params.c_x, shape_params.c_y, False, scale, max_iter, escape_radius)
    return np.where(bounded, INTERIOR, BOUNDARY).astype(np.int16)

# ==============================================================================
# 2. 注册形狀函數
# ==============================================================================

domain_shape_registry = {
    'rectangle': rectangle,
    'ellipse': ellipse,
    'stadium': stadium,
    'sinai': sinai,
    'diamond': diamond,
    'triangle': triangle,
    'polygon': polygon,
    'annulus': annulus,
    'annulus_heated': annulus_heated,
    'young': young,
    'grating': grating,
    'ehrenfest': ehrenfest,
    'menger': menger,
    'menger_heated': menger_heated,
    'menger_heated_open': menger_heated_open,
    'mandelbrot': mandelbrot,
    'mandelbrot_circle': mandelbrot_circle,
    'julia': julia,
}

# 需要外部複數參數 c 的形狀
parametrized_shapes = {'julia'}

def make_classifier(shape: str, args=None, shape_params=None):
    """
    為選定的形狀建立一次分類閉包 classify(x, y)。
    標量輸入返回 int，陣列輸入返回同形狀的 int16 陣列。
    """
    if shape not in domain_shape_registry:
        raise ValueError(f"错误: 區域形狀 '{shape}' 不存在。可用: {list(domain_shape_registry)}")
    provider = domain_shape_registry[shape]
    shape_args = dict(args or {})
    if shape in parametrized_shapes:
        if shape_params is None:
            raise ValueError(f"错误: 形狀 '{shape}' 需要形狀參數 (c_x, c_y)。")
        shape_args['shape_params'] = shape_params

    def classify(x, y):
        xa = np.asarray(x, dtype=np.float64)
        ya = np.asarray(y, dtype=np.float64)
        codes = np.asarray(provider(xa, ya, **shape_args))
        if codes.ndim == 0:
            return int(codes)
        return codes

    classify.shape = shape
    classify.args = shape_args
    return classify

# ==============================================================================
# 3. 定义配置
# ==============================================================================

domain_configs = {
    'rectangle_default': {
        'provider': 'rectangle',
        'args': {'half_width': 0.7, 'half_height': 1.0},
        'description': "矩形區域 |x| < 0.7, |y| < 1。"
    },
    'ellipse_default': {
        'provider': 'ellipse',
        'args': {'semi_axis_x': 1.8, 'semi_axis_y': 1.0},
        'description': "橢圓區域。"
    },
    'stadium_default': {
        'provider': 'stadium',
        'args': {'half_length': 0.7, 'radius': 1.0},
        'description': "體育場形區域 (矩形兩端接半圓)。"
    },
    'sinai_default': {
        'provider': 'sinai',
        'args': {'radius': 0.7},
        'description': "Sinai 撞球台：矩形挖去中心圓盤。"
    },
    'diamond_default': {
        'provider': 'diamond',
        'args': {'half_x': 1.0, 'half_y': 1.0},
        'description': "菱形區域。"
    },
    'triangle_default': {
        'provider': 'triangle',
        'args': {'a': 1.0, 'b': 1.0},
        'description': "直角三角形區域。"
    },
    'hexagon': {
        'provider': 'polygon',
        'args': {'nsides': 6, 'radius': 1.0, 'rotation': 1.0},
        'description': "正六邊形區域。"
    },
    'annulus_default': {
        'provider': 'annulus',
        'args': {'inner_radius': 0.3, 'outer_radius': 1.0, 'offset': 0.1},
        'description': "偏心環形區域。"
    },
    'annulus_heated': {
        'provider': 'annulus_heated',
        'args': {'inner_radius': 0.3, 'outer_radius': 1.0, 'ring_width': 0.05, 'outer_depth': 6},
        'description': "內外邊界溫度不同的環形區域。"
    },
    'young_default': {
        'provider': 'young',
        'args': {'wall_half_width': 0.1, 'slit_offset': 0.7, 'slit_half_width': 0.1},
        'description': "Young 雙縫。"
    },
    'grating_default': {
        'provider': 'grating',
        'args': {'wall_half_width': 0.1, 'spacing': 0.35, 'slit_half_width': 0.05},
        'description': "多縫繞射光柵。"
    },
    'ehrenfest_default': {
        'provider': 'ehrenfest',
        'args': {'radius': 0.7, 'center_distance': 1.1, 'channel_half_width': 0.1},
        'description': "Ehrenfest 雙罐。"
    },
    'menger_default': {
        'provider': 'menger',
        'args': {'depth': 2, 'ratio': 5},
        'description': "Menger-Sierpinski 地毯。"
    },
    'menger_heated': {
        'provider': 'menger_heated',
        'args': {'depth': 2, 'ratio': 5},
        'description': "被挖去的方塊按層級加熱的 Menger 地毯。"
    },
    'menger_heated_open': {
        'provider': 'menger_heated_open',
        'args': {'depth': 2, 'ratio': 5},
        'description': "同上，但地毯外的整個網格也屬於區域。"
    },
    'mandelbrot_default': {
        'provider': 'mandelbrot',
        'args': {'max_iter': 1000, 'escape_radius': 2.0},
        'description': "Mandelbrot 集合。"
    },
    'mandelbrot_circle': {
        'provider': 'mandelbrot_circle',
        'args': {'max_iter': 1000, 'escape_radius': 2.0, 'circle_x': -1.0, 'circle_y': 0.0, 'circle_radius': 0.15},
        'description': "Mandelbrot 集合加上圓形導體。"
    },
    'julia_default': {
        'provider': 'julia',
        'args': {'max_iter': 1000, 'escape_radius': 2.0, 'scale': 1.1},
        'description': "由驅動器隨時間改變參數 c 的 Julia 集合。"
    },
}
