# heat_domain/core/field.py

import numpy as np

from physics.distributions import gaussian_bump

BOUNDARY_DECAY = 0.75

def boundary_temperature(codes, t_in: float):
    """深度 k = code - 2 的邊界層溫度 T_IN * 0.75^k。"""
    depth = np.asarray(codes, dtype=np.float64) - 2.0
    return t_in * np.power(BOUNDARY_DECAY, depth)


class FieldState:
    """
    擁有標量場 phi、分類網格 xy_in 以及雙緩衝區的第二塊緩衝。
    兩個陣列的形狀都是 (nx, ny)，以 [i, j] 索引。
    """
    def __init__(self, grid, classifier, t_in: float, t_out: float, dtype=np.float64):
        self.grid = grid
        self.classifier = classifier
        self.t_in = t_in
        self.t_out = t_out
        self.phi = np.full(grid.shape, t_out, dtype=dtype)
        self._phi_next = np.empty_like(self.phi)
        self.xy_in = np.zeros(grid.shape, dtype=np.int16)

    def reclassify(self, classifier=None):
        """
        重新計算分類網格並重設邊界格點的溫度。
        內部格點的數值不受影響，因此可以每個影格呼叫，且重複呼叫結果不變。
        """
        if classifier is not None:
            self.classifier = classifier
        X, Y = self.grid.meshgrid()
        self.xy_in[...] = self.classifier(X, Y)
        boundary = self.xy_in >= 2
        self.phi[boundary] = boundary_temperature(self.xy_in[boundary], self.t_in)

    def initialize(self, seed_center, baseline: float, amplitude: float, width: float):
        """以高斯熱斑初始化內部，邊界按深度衰減，區域外為背景常數 T_OUT。"""
        X, Y = self.grid.meshgrid()
        values = gaussian_bump(X, Y, seed_center[0], seed_center[1], baseline, amplitude, width)
        self.initialize_from(values)

    def initialize_from(self, interior_values: np.ndarray):
        self.phi[...] = self.t_out
        self.reclassify()
        interior = self.interior_mask()
        self.phi[interior] = np.broadcast_to(interior_values, self.phi.shape)[interior]

    def interior_mask(self) -> np.ndarray:
        return self.xy_in == 1

    @property
    def next_buffer(self) -> np.ndarray:
        return self._phi_next

    def swap_buffers(self):
        self.phi, self._phi_next = self._phi_next, self.phi

    def get_field_matrix(self) -> np.ndarray:
        return self.phi
