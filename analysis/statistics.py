# heat_domain/analysis/statistics.py

import numpy as np
from scipy import ndimage
from typing import Dict, Any

def compute_variance(phi: np.ndarray, xy_in: np.ndarray) -> float:
    """內部格點的平均平方值。內部格點數至少按 1 計算。"""
    interior = xy_in == 1
    count = max(int(np.count_nonzero(interior)), 1)
    return float(np.sum(phi[interior] ** 2) / count)

def renormalise_field(phi: np.ndarray, xy_in: np.ndarray, variance: float):
    """把內部格點原地除以 sqrt(variance)。非正的 variance 不做任何事。"""
    if variance <= 0.0:
        return
    interior = xy_in == 1
    phi[interior] /= np.sqrt(variance)

class StatisticsManager:
    """负责计算模拟过程中的所有统计数据。"""
    def __init__(self, params: Dict[str, Any]):
        self.params = params
        self.rescale_variance = params.get('rescale_variance', False)

    def color_scale(self, variance: float) -> float:
        """顏色映射使用的對比尺度。"""
        if self.rescale_variance:
            return float(np.sqrt(1.0 + variance))
        return 1.0

    def calculate_frame_stats(self, phi: np.ndarray, xy_in: np.ndarray, nablax=None, nablay=None) -> Dict[str, float]:
        interior = xy_in == 1
        n_interior = int(np.count_nonzero(interior))
        values = phi[interior]

        stats = {
            "interior_cells": n_interior,
            "variance": compute_variance(phi, xy_in),
            "energy": float(np.sum(values ** 2)),
            "mean_value": float(values.mean()) if n_interior else 0.0,
            "min_value": float(values.min()) if n_interior else 0.0,
            "max_value": float(values.max()) if n_interior else 0.0,
            "max_gradient": np.nan,
            "components": self._count_components(interior),
        }

        if nablax is not None and nablay is not None and n_interior:
            norm = np.sqrt(nablax[interior] ** 2 + nablay[interior] ** 2)
            stats["max_gradient"] = float(norm.max())

        return stats

    def _count_components(self, interior: np.ndarray) -> int:
        """4-連通的內部區域個數 (例如 Julia 集合斷裂後的島嶼數目)。"""
        _, num = ndimage.label(interior)
        return int(num)
