# heat_domain/core/backends.py

from typing import Dict, Any
from .grid import GridMapper
from .base import Backend

# 导入具体的后端实现以便工厂函数可以使用它们
from .cpu_backend import CPUBackend
from .parallel_backend import ParallelBackend

try:
    import cupy as cp
except ImportError:
    cp = None

def get_backend(params: Dict[str, Any], grid: GridMapper) -> Backend:
    """
    后端工厂函数。
    根据配置创建并返回一个具体的后端实例 (CPUBackend、ParallelBackend 或 GPUBackend)。
    """
    if params['backend'] == 'gpu' and cp is not None:
        from .gpu_backend import GPUBackend
        return GPUBackend(params, grid)

    if params['backend'] == 'gpu':
        print("警告：请求了GPU后端，但Cupy不可用。将回退到多核CPU后端。")
        return ParallelBackend(params, grid)

    if params['backend'] == 'cpu':
        return CPUBackend(params, grid)

    return ParallelBackend(params, grid)
