# heat_domain/core/base.py

from abc import ABC, abstractmethod
from typing import Dict, Any
import numpy as np

class Backend(ABC):
    """
    演化引擎的抽象基類。
    每一步對所有內部格點做一次顯式更新：
        new = old + intstep * (Laplacian - drift * (east - old))
    其中 intstep = DT / (dx^2 * viscosity)。顯式格式的穩定條件約為 intstep <= 1/4，
    這是呼叫者的前置條件，這裡不做檢查。
    """
    def __init__(self, params: Dict[str, Any], grid):
        self.params = params
        self.grid = grid
        self.is_quiet = params.get('quiet_mode', False)
        self.boundary_condition = params['boundary_condition']
        dx = grid.dx
        self.intstep = params['dt'] / (dx * dx * params['viscosity'])
        # 吸收邊界外圈使用的積分常數
        self.intstep1 = params['dt'] / (dx * params['viscosity'])
        self.drift = params.get('drift_speed', 0.0)
        self.use_clamp = params.get('amplitude_clamp', False)
        self.vmax = params.get('vmax', 10.0)
        self.xp = None      # 将由子类设置为 numpy 或 cupy
        self._setup_backend_specifics()

    @abstractmethod
    def _setup_backend_specifics(self):
        """设置后端特定的属性，如 self.xp。"""
        pass

    @abstractmethod
    def step(self, src, dst, xy_in):
        """從 src 讀取，把內部格點的新值寫進 dst。非內部格點不寫入。"""
        pass

    def evolve(self, field_state, nsteps: int):
        """推進 nsteps 個子步。每一步結束時交換緩衝區。"""
        if nsteps <= 0:
            return
        # 讓兩塊緩衝的非內部格點保持一致
        np.copyto(field_state.next_buffer, field_state.phi)
        for _ in range(nsteps):
            self.step(field_state.phi, field_state.next_buffer, field_state.xy_in)
            field_state.swap_buffers()
