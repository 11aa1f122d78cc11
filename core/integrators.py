# heat_domain/core/integrators.py

import math
import numpy as np
from numba import njit

# ================= 梯度 =================

def compute_gradient(phi: np.ndarray, dx: float):
    """
    中央差分梯度 (phi[i+1] - phi[i-1]) / dx，兩個方向都夾取索引。
    與演化所用的邊界條件無關。
    """
    nx, ny = phi.shape
    ip = np.minimum(np.arange(nx) + 1, nx - 1)
    im = np.maximum(np.arange(nx) - 1, 0)
    jp = np.minimum(np.arange(ny) + 1, ny - 1)
    jm = np.maximum(np.arange(ny) - 1, 0)
    nablax = (phi[ip, :] - phi[im, :]) / dx
    nablay = (phi[:, jp] - phi[:, jm]) / dx
    return nablax, nablay

# ================= 場線積分 (CPU, Numba) =================

@njit(cache=True)
def _nearest_index(v, v_min, dx, n):
    k = int(math.floor((v - v_min) / dx + 0.5))
    if k < 0:
        return 0
    if k > n - 1:
        return n - 1
    return k

@njit(cache=True)
def trace_field_line(x0, y0, nablax, nablay, xy_in, x_min, y_min, dx, delta, nsteps):
    """
    沿梯度方向以固定步長 delta 追蹤一條場線，返回 (n, 2) 的座標陣列。
    起點總是第一個點。當前格點在區域外、或梯度接近零 (臨界點) 時停止；
    新的點落在區域外時，加入該點後停止。
    """
    nx, ny = nablax.shape
    points = np.empty((nsteps + 1, 2), dtype=np.float64)
    x = x0
    y = y0
    points[0, 0] = x
    points[0, 1] = y
    count = 1

    for _ in range(nsteps):
        i = _nearest_index(x, x_min, dx, nx)
        j = _nearest_index(y, y_min, dx, ny)
        if xy_in[i, j] == 0:
            break

        gx = nablax[i, j]
        gy = nablay[i, j]
        norm2 = gx * gx + gy * gy
        if norm2 <= 1.0e-14:
            break
        if norm2 < 1.0e-9:
            norm2 = 1.0e-9
        norm = math.sqrt(norm2)

        x += delta * gx / norm
        y += delta * gy / norm
        points[count, 0] = x
        points[count, 1] = y
        count += 1

        i = _nearest_index(x, x_min, dx, nx)
        j = _nearest_index(y, y_min, dx, ny)
        if xy_in[i, j] == 0:
            break

    return points[:count]
