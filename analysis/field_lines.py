# heat_domain/analysis/field_lines.py

import numpy as np
from typing import Dict, Any, List

from core.integrators import trace_field_line

class FieldLineTracer:
    """
    場線起點的放置與追蹤。
    起點取在一個參考橢圓上，按 |∇phi| 沿弧長的積分等分，
    因此梯度大的地方場線較密。
    """
    def __init__(self, params: Dict[str, Any], grid):
        self.grid = grid
        self.num_lines = params.get('num_field_lines', 200)
        self.factor = params.get('field_line_factor', 100)
        self.step = params.get('field_line_step', 2.0e-5)
        self.max_steps = params.get('field_line_max_steps', 100000)
        self.semi_axis_x = params.get('seed_ellipse_a', np.sqrt(3.58))
        self.semi_axis_y = params.get('seed_ellipse_b', np.sqrt(1.18))
        self._samples = None
        self._distances = None

    @property
    def num_samples(self) -> int:
        return self.num_lines * self.factor

    def _ensure_samples(self):
        """第一次使用時才建立橢圓上的取樣點與相鄰距離 (最後一段閉合迴路)。"""
        if self._samples is not None:
            return
        angles = np.arange(self.num_samples) * (2.0 * np.pi / self.num_samples)
        xs = self.semi_axis_x * np.cos(angles)
        ys = self.semi_axis_y * np.sin(angles)
        self._samples = np.column_stack((xs, ys))
        closed = np.vstack((self._samples, self._samples[:1]))
        self._distances = np.sqrt(np.sum(np.diff(closed, axis=0) ** 2, axis=1))

    def seed_points(self, nablax: np.ndarray, nablay: np.ndarray) -> np.ndarray:
        """返回 num_lines + 1 個起點，第一個永遠是第 0 個取樣點。"""
        self._ensure_samples()
        n_samples = self.num_samples
        i, j = self.grid.xy_to_ij(self._samples[:, 0], self._samples[:, 1])
        intensity = np.sqrt(nablax[i, j] ** 2 + nablay[i, j] ** 2) * self._distances
        integral = np.cumsum(intensity)
        total = integral[-1]

        if total > 0.0:
            targets = np.arange(1, self.num_lines + 1) * (total / self.num_lines)
            indices = np.searchsorted(integral, targets, side='right')
        else:
            # 梯度處處為零時改用等弧長間隔
            indices = (np.arange(1, self.num_lines + 1) * n_samples) // self.num_lines
        indices = np.minimum(indices, n_samples - 1)
        indices = np.concatenate(([0], indices))
        return self._samples[indices]

    def trace_all(self, nablax: np.ndarray, nablay: np.ndarray, xy_in: np.ndarray) -> List[np.ndarray]:
        """依序追蹤所有場線，每條返回一個 (n, 2) 陣列。"""
        seeds = self.seed_points(nablax, nablay)
        g = self.grid
        lines = []
        for x0, y0 in seeds:
            lines.append(trace_field_line(float(x0), float(y0), nablax, nablay, xy_in,
                                          g.x_min, g.y_min, g.dx, self.step, self.max_steps))
        return lines
