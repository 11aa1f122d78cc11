# heat_domain/core/gpu_kernels.py

from numba import cuda
from physics import boundaries

# ==============================================================================
#                      GPU Device Functions and Kernels
# ==============================================================================

def create_evolve_kernel():
    """工厂函数，创建并返回單一子步的熱傳導更新內核 (每個執行緒負責一個格點)。"""
    clamp_bc = boundaries.boundary_condition_registry_gpu['dirichlet']
    wrap_bc = boundaries.boundary_condition_registry_gpu['periodic']

    @cuda.jit
    def evolve_kernel(src, dst, xy_in, intstep, intstep1, drift, bc_mode, use_clamp, vmax):
        i, j = cuda.grid(2)
        nx, ny = src.shape
        if i >= nx or j >= ny:
            return
        if xy_in[i, j] != 1:
            return

        if bc_mode == 1:
            iplus = wrap_bc(i + 1, nx)
            iminus = wrap_bc(i - 1, nx)
            jplus = wrap_bc(j + 1, ny)
            jminus = wrap_bc(j - 1, ny)
        else:
            iplus = clamp_bc(i + 1, nx)
            iminus = clamp_bc(i - 1, nx)
            jplus = clamp_bc(j + 1, ny)
            jminus = clamp_bc(j - 1, ny)

        u = src[i, j]
        east = src[iplus, j] if xy_in[iplus, j] != 0 else u
        west = src[iminus, j] if xy_in[iminus, j] != 0 else u
        north = src[i, jplus] if xy_in[i, jplus] != 0 else u
        south = src[i, jminus] if xy_in[i, jminus] != 0 else u

        new = u + intstep * ((east - u) + (west - u) + (north - u) + (south - u) - drift * (east - u))

        if bc_mode == 2:
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

    return evolve_kernel
