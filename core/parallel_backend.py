# heat_domain/core/parallel_backend.py

import numpy as np
from numba import njit, prange

from .base import Backend
from physics.boundaries import boundary_mode_map, clamp_index, wrap_index

@njit(parallel=True, cache=True)
def evolve_step_kernel(src, dst, xy_in, intstep, intstep1, drift, bc_mode, use_clamp, vmax):
    """
    一個子步的多核心更新。每個格點只讀 src、只寫自己在 dst 中的位置，
    因此各行之間沒有資料競爭。
    """
    nx, ny = src.shape
    for i0 in prange(nx):
        # prange 的索引是無號整數，與負偏移混算會被推成 float64
        i = np.int64(i0)
        for j in range(ny):
            if xy_in[i, j] != 1:
                continue

            if bc_mode == 1:
                iplus = wrap_index(i + 1, nx)
                iminus = wrap_index(i - 1, nx)
                jplus = wrap_index(j + 1, ny)
                jminus = wrap_index(j - 1, ny)
            else:
                iplus = clamp_index(i + 1, nx)
                iminus = clamp_index(i - 1, nx)
                jplus = clamp_index(j + 1, ny)
                jminus = clamp_index(j - 1, ny)

            u = src[i, j]
            east = src[iplus, j] if xy_in[iplus, j] != 0 else u
            west = src[iminus, j] if xy_in[iminus, j] != 0 else u
            north = src[i, jplus] if xy_in[i, jplus] != 0 else u
            south = src[i, jminus] if xy_in[i, jminus] != 0 else u

            laplacian = (east - u) + (west - u) + (north - u) + (south - u)
            new = u + intstep * (laplacian - drift * (east - u))

            if bc_mode == 2:
                # 吸收邊界 (近似)：外圈向唯一的內側鄰居鬆弛
                ti = i
                tj = j
                on_ring = True
                if i == nx - 1:
                    ti = i - 1
                elif j == ny - 1:
                    tj = j - 1
                elif i == 0:
                    ti = 1
                elif j == 0:
                    tj = 1
                else:
                    on_ring = False
                if on_ring:
                    inward = src[ti, tj] if xy_in[ti, tj] != 0 else u
                    new = u - intstep1 * (u - inward)

            if use_clamp:
                if new > vmax:
                    new = vmax
                elif new < -vmax:
                    new = -vmax
            dst[i, j] = new


class ParallelBackend(Backend):
    """使用 Numba prange 在多個 CPU 核心上並行更新格點的后端。"""
    def _setup_backend_specifics(self):
        self.xp = np
        if not self.is_quiet: print("  [Backend Setup] Compiling Numba parallel kernels for CPU...")
        self.bc_mode = boundary_mode_map[self.boundary_condition]

    def step(self, src, dst, xy_in):
        evolve_step_kernel(src, dst, xy_in, self.intstep, self.intstep1, self.drift,
                           self.bc_mode, self.use_clamp, self.vmax)
