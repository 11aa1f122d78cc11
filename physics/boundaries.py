# heat_domain/physics/boundaries.py

import numpy as np
from numba import njit
try:
    from numba import cuda
except ImportError:
    cuda = None

# ==============================================================================
# 1. 定义核心逻辑 (鄰居索引的解析)
# ==============================================================================

def _dirichlet_logic(k, n):
    # 越界的索引夾到最近的邊緣 (零通量近似)
    if k < 0:
        return 0
    if k >= n:
        return n - 1
    return k

def _periodic_logic(k, n):
    r = k % n
    if r < 0:
        r += n
    return r

# ==============================================================================
# 2. 注册与适配
# ==============================================================================

boundary_condition_registry_cpu = {
    'dirichlet': _dirichlet_logic,
    'periodic': _periodic_logic,
    # 吸收邊界在內部使用夾取索引，外圈另外處理
    'absorbing': _dirichlet_logic,
}

# 整數標誌，供 numba / CUDA 核心使用
boundary_mode_map = {'dirichlet': 0, 'periodic': 1, 'absorbing': 2}

clamp_index = njit(cache=True)(_dirichlet_logic)
wrap_index = njit(cache=True)(_periodic_logic)

# Numba JIT compile the same logic for GPU
if cuda:
    boundary_condition_registry_gpu = {
        'dirichlet': cuda.jit(_dirichlet_logic, device=True),
        'periodic': cuda.jit(_periodic_logic, device=True),
    }
else:
    boundary_condition_registry_gpu = {}

# ==============================================================================
# 3. 向量化輔助函式 (NumPy 後端與梯度計算共用)
# ==============================================================================

def neighbor_index_arrays(boundary_condition: str, n: int):
    """返回長度為 n 的 (plus, minus) 鄰居索引陣列。"""
    logic = boundary_condition_registry_cpu[boundary_condition]
    plus = np.array([logic(k + 1, n) for k in range(n)], dtype=np.int64)
    minus = np.array([logic(k - 1, n) for k in range(n)], dtype=np.int64)
    return plus, minus

def absorbing_ring_targets(nx: int, ny: int):
    """
    吸收邊界外圈的每個格點向其唯一的內側鄰居鬆弛。
    角落的歸屬優先順序：右 -> 上 -> 左 -> 下。
    返回 (ring_mask, target_i, target_j)。
    """
    ii, jj = np.meshgrid(np.arange(nx), np.arange(ny), indexing='ij')
    target_i = ii.copy()
    target_j = jj.copy()
    ring = np.zeros((nx, ny), dtype=bool)

    right = ii == nx - 1
    top = (jj == ny - 1) & ~right
    left = (ii == 0) & ~right & ~top
    bottom = (jj == 0) & ~right & ~top & ~left

    target_i[right] = nx - 2
    target_j[top] = ny - 2
    target_i[left] = 1
    target_j[bottom] = 1
    ring |= right | top | left | bottom
    return ring, target_i, target_j
