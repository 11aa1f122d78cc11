# heat_domain/analysis/visualization.py

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from typing import Dict, Any, List, Optional
import os

from .colors import color_cells

class MatplotlibRenderSink:
    """
    最簡單的繪圖接收端：接受每個格點的顏色、場線折線與文字。
    本身不含任何模擬邏輯。
    """
    def __init__(self, grid, figsize=(12.8, 7.2), dpi=100, line_color='white', line_width=0.6):
        self.grid = grid
        self.line_color = line_color
        self.line_width = line_width
        self.fig = plt.figure(figsize=figsize, dpi=dpi, facecolor='black')
        self.ax = self.fig.add_axes([0.0, 0.0, 1.0, 1.0])
        g = grid
        self.extent = [g.x_min, g.x_min + g.nx * g.dx, g.y_min, g.y_min + g.ny * g.dx]
        self._segments: List[np.ndarray] = []
        self.begin_frame()

    def begin_frame(self):
        self.ax.clear()
        self.ax.set_axis_off()
        self.ax.set_facecolor('black')
        self.ax.set_xlim(self.extent[0], self.extent[1])
        self.ax.set_ylim(self.extent[2], self.extent[3])
        self._segments = []

    def draw_cells(self, rgb: np.ndarray):
        """rgb 的形狀為 (nx, ny, 3)，以 [i, j] 索引。"""
        self.ax.imshow(np.transpose(rgb, (1, 0, 2)), origin='lower', extent=self.extent,
                       interpolation='nearest', aspect='auto')

    def draw_line_strip(self, points: np.ndarray):
        if len(points) >= 2:
            self._segments.append(np.asarray(points))

    def draw_text(self, pos, message: str):
        """pos 是正規化的螢幕位置 (0..1)。"""
        self.ax.text(pos[0], pos[1], message, color='white', fontsize=14,
                     transform=self.ax.transAxes, va='bottom', ha='left')

    def finish_frame(self):
        if self._segments:
            lines = LineCollection(self._segments, colors=self.line_color, linewidths=self.line_width)
            self.ax.add_collection(lines)
        self.fig.canvas.draw()
        return self.fig

    def close(self):
        plt.close(self.fig)


class VisualizationManager:
    """負責所有與可視化相關的編排工作。"""
    def __init__(self, params: Dict[str, Any], grid):
        self.params = params
        self.grid = grid
        self.is_live_plotting = params.get('live_plotting', False)
        self.output_path = self.params.get('plot_output_path', '.')
        self.field_rep = params.get('field_rep', 'intensity')
        self.draw_field_lines = params.get('draw_field_lines', True)
        self.num_frames = max(int(params.get('num_frames', 1)), 1)
        self.sink = None
        self._setup_plotting()

    def _setup_plotting(self):
        plt.rcParams['font.sans-serif'] = ['Microsoft YaHei', 'SimHei', 'DejaVu Sans']
        plt.rcParams['axes.unicode_minus'] = False
        os.makedirs(self.output_path, exist_ok=True)
        self.sink = MatplotlibRenderSink(self.grid,
                                         figsize=self.params.get('frame_figsize', (12.8, 7.2)),
                                         dpi=self.params.get('frame_dpi', 100),
                                         line_width=self.params.get('field_line_width', 0.6))
        if self.is_live_plotting:
            plt.ion()

    def overlay_text(self, driver=None) -> Optional[str]:
        """Julia 區域顯示當前參數 c；Menger 區域顯示層數。"""
        if driver is not None and driver.current is not None:
            return driver.current.describe()
        args = self.params.get('domain_args', {})
        if self.params.get('domain_shape', '').startswith('menger'):
            return f"Level {args.get('depth', 0)}"
        return None

    def render_frame(self, frame_idx: int, field_state, scale: float, nablax=None, nablay=None,
                     lines=None, message: Optional[str] = None):
        """把一個影格送進繪圖接收端，返回 matplotlib 的 Figure。"""
        if self.field_rep == 'gradient' and nablax is not None:
            values = np.sqrt(nablax ** 2 + nablay ** 2)
        else:
            values = field_state.get_field_matrix()

        t = frame_idx / self.num_frames
        rgb = color_cells(values, field_state.xy_in, scale, t, self.params)

        sink = self.sink
        sink.begin_frame()
        sink.draw_cells(rgb)
        if self.draw_field_lines and lines:
            for line in lines:
                sink.draw_line_strip(line)
        if message:
            g = self.grid
            sink.draw_text(g.xy_to_pos(g.x_min + 0.1, g.y_max - 0.2), message)
        fig = sink.finish_frame()

        if self.is_live_plotting:
            plt.draw()
            plt.pause(0.001)
        return fig

    def plot_summary_stats(self, history: List[Dict[str, Any]]):
        if not history: return

        print("\n正在生成系統演化統計圖...")
        frames = [s['frame'] for s in history]

        fig, axes = plt.subplots(2, 2, figsize=(18, 10), sharex=True)
        fig.suptitle('熱場演化統計圖', fontsize=16)
        ax1, ax2, ax3, ax4 = axes.flatten()

        ax1.plot(frames, [s['energy'] for s in history], 'o-', label='內部能量 $\\sum \\phi^2$')
        ax1.set_ylabel('能量'); ax1.set_title('能量演化'); ax1.legend(); ax1.grid(True)

        mean_v = np.array([s['mean_value'] for s in history])
        ax2.plot(frames, mean_v, 's-', color='red', label='平均值')
        ax2.fill_between(frames, [s['min_value'] for s in history], [s['max_value'] for s in history],
                         color='red', alpha=0.2, label='最小值 ~ 最大值')
        ax2.set_title('場值統計演化'); ax2.legend(); ax2.grid(True)

        ax3.plot(frames, [s['max_gradient'] for s in history], 'd-', color='green', label='$\\max |\\nabla \\phi|$')
        ax3.set_xlabel('影格'); ax3.set_title('最大梯度演化'); ax3.legend(); ax3.grid(True)

        ax4.plot(frames, [s['components'] for s in history], '^-', color='purple', label='連通區域數')
        ax4.set_xlabel('影格'); ax4.set_title('內部連通區域數'); ax4.legend(); ax4.grid(True)

        fig.tight_layout(rect=[0, 0.03, 1, 0.95])
        file_path = os.path.join(self.output_path, "summary_statistics.png")
        fig.savefig(file_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def finalize(self):
        if self.is_live_plotting: plt.ioff()
        print("\n所有繪圖已生成。")
        if self.is_live_plotting:
            plt.show()
        else:
            print(f"所有圖像已保存到 '{self.output_path}' 文件夾。")
        self.sink.close()
