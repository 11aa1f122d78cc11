# heat_domain/core/cpu_backend.py

import numpy as np

from .base import Backend
from physics import boundaries

class CPUBackend(Backend):
    """使用 NumPy 向量化運算在 CPU 上執行計算的后端。"""
    def _setup_backend_specifics(self):
        self.xp = np
        if not self.is_quiet: print("  [Backend Setup] Initializing NumPy backend components...")
        nx, ny = self.grid.shape
        self.i_plus, self.i_minus = boundaries.neighbor_index_arrays(self.boundary_condition, nx)
        self.j_plus, self.j_minus = boundaries.neighbor_index_arrays(self.boundary_condition, ny)
        self.is_absorbing = self.boundary_condition == 'absorbing'
        if self.is_absorbing:
            self.ring, self.ring_i, self.ring_j = boundaries.absorbing_ring_targets(nx, ny)

    def step(self, src, dst, xy_in):
        u = src
        exterior = xy_in == 0
        ip, im, jp, jm = self.i_plus, self.i_minus, self.j_plus, self.j_minus

        # 區域外的鄰居不參與擴散：以中心值代替 (零通量)
        east = np.where(exterior[ip, :], u, u[ip, :])
        west = np.where(exterior[im, :], u, u[im, :])
        north = np.where(exterior[:, jp], u, u[:, jp])
        south = np.where(exterior[:, jm], u, u[:, jm])

        laplacian = (east - u) + (west - u) + (north - u) + (south - u)
        new = u + self.intstep * (laplacian - self.drift * (east - u))

        if self.is_absorbing:
            # 近似的開放邊界：外圈向內側鄰居鬆弛
            inward = np.where(exterior[self.ring_i, self.ring_j], u, u[self.ring_i, self.ring_j])
            relaxed = u - self.intstep1 * (u - inward)
            new = np.where(self.ring, relaxed, new)

        if self.use_clamp:
            np.clip(new, -self.vmax, self.vmax, out=new)

        np.copyto(dst, new, where=(xy_in == 1))
