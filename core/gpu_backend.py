# heat_domain/core/gpu_backend.py

import math
import numpy as np
import cupy as cp

from .base import Backend
from . import gpu_kernels
from physics.boundaries import boundary_mode_map

class GPUBackend(Backend):
    """使用 CuPy 和 Numba 在 GPU 上执行计算的后端。"""
    def _setup_backend_specifics(self):
        self.xp = cp
        if not self.is_quiet: print("  [Backend Setup] Compiling CUDA kernels for GPU...")
        self.bc_mode = boundary_mode_map[self.boundary_condition]
        self.evolve_kernel = gpu_kernels.create_evolve_kernel()
        nx, ny = self.grid.shape
        self.threads = (16, 16)
        self.blocks = (math.ceil(nx / self.threads[0]), math.ceil(ny / self.threads[1]))

    def step(self, src, dst, xy_in):
        self.evolve_kernel[self.blocks, self.threads](
            src, dst, xy_in, self.intstep, self.intstep1, self.drift,
            self.bc_mode, self.use_clamp, self.vmax
        )

    def evolve(self, field_state, nsteps: int):
        """整個影格的子步都留在 GPU 上，結束後才把場拷回主機。"""
        if nsteps <= 0:
            return
        src = self.xp.asarray(field_state.phi)
        dst = src.copy()
        xy_in = self.xp.asarray(field_state.xy_in)
        for _ in range(nsteps):
            self.step(src, dst, xy_in)
            src, dst = dst, src
        self.xp.cuda.runtime.deviceSynchronize()
        field_state.phi[...] = self.xp.asnumpy(src)
        np.copyto(field_state.next_buffer, field_state.phi)
