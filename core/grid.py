# heat_domain/core/grid.py

import math
import numpy as np


class GridMapper:
    """
    網格索引、連續座標與螢幕座標之間的轉換。
    x 與 y 共用同一個步長 dx = (x_max - x_min) / nx，以保持長寬比。
    """
    def __init__(self, nx: int, ny: int, x_min: float, x_max: float, y_min: float, y_max: float):
        self.nx = int(nx)
        self.ny = int(ny)
        self.x_min = x_min
        self.x_max = x_max
        self.y_min = y_min
        self.y_max = y_max
        self.dx = (x_max - x_min) / self.nx
        self.x_grid = x_min + np.arange(self.nx) * self.dx
        self.y_grid = y_min + np.arange(self.ny) * self.dx
        self._mesh = None

    @property
    def shape(self):
        return (self.nx, self.ny)

    def get_x_grid_coords(self) -> np.ndarray:
        return self.x_grid

    def get_y_grid_coords(self) -> np.ndarray:
        return self.y_grid

    def meshgrid(self):
        """返回 (X, Y)，形狀均為 (nx, ny)，以 [i, j] 索引。結果會被快取。"""
        if self._mesh is None:
            self._mesh = np.meshgrid(self.x_grid, self.y_grid, indexing='ij')
        return self._mesh

    def ij_to_xy(self, i, j):
        """網格索引 -> 連續座標。"""
        x = self.x_min + np.asarray(i) * self.dx
        y = self.y_min + np.asarray(j) * self.dx
        if np.ndim(x) == 0 and np.ndim(y) == 0:
            return float(x), float(y)
        return x, y

    def xy_to_ij(self, x, y):
        """連續座標 -> 最近的網格索引 (四捨五入後夾在有效範圍內)。"""
        if np.ndim(x) == 0 and np.ndim(y) == 0:
            i = int(math.floor((x - self.x_min) / self.dx + 0.5))
            j = int(math.floor((y - self.y_min) / self.dx + 0.5))
            return min(max(i, 0), self.nx - 1), min(max(j, 0), self.ny - 1)
        i = np.floor((np.asarray(x) - self.x_min) / self.dx + 0.5).astype(np.int64)
        j = np.floor((np.asarray(y) - self.y_min) / self.dx + 0.5).astype(np.int64)
        return np.clip(i, 0, self.nx - 1), np.clip(j, 0, self.ny - 1)

    def xy_to_pos(self, x, y):
        """連續座標 -> 正規化的螢幕位置 [0, 1] x [0, 1] (以網格實際覆蓋的範圍為準)。"""
        px = (np.asarray(x) - self.x_min) / (self.nx * self.dx)
        py = (np.asarray(y) - self.y_min) / (self.ny * self.dx)
        if np.ndim(px) == 0 and np.ndim(py) == 0:
            return float(px), float(py)
        return px, py
