# heat_domain/simulation.py

from typing import Dict, Any, Optional
from tqdm import tqdm

from core.backends import get_backend
from core.field import FieldState
from core.integrators import compute_gradient
from analysis.statistics import StatisticsManager, compute_variance, renormalise_field
from analysis.io import HistoryManager, ExportManager, FrameCaptureManager
from analysis.field_lines import FieldLineTracer
from analysis.snapshot import assemble_animation
from analysis.visualization import VisualizationManager
from timer import SimpleTimer

class Simulation:
    """
    每個影格的流程：
    驅動器更新形狀參數 -> 重新分類網格 -> 演化 N 個子步 -> (可選) 方差重整
    -> 梯度與場線 -> 繪圖 -> (可選) 擷取影格。
    """
    def __init__(self, params: Dict[str, Any], field_state: FieldState, driver=None):
        self.params = params
        self.is_quiet = self.params.get('quiet_mode', False)
        self.field_state = field_state
        self.grid = field_state.grid
        self.driver = driver

        if not self.is_quiet: print("\n--- 初始化核心組件 (僅一次) ---")
        self.backend = get_backend(self.params, self.grid)

        self.substeps = int(params.get('substeps_per_frame', 50))
        self.num_frames = int(params.get('num_frames', 0))
        self.rescale_variance = params.get('rescale_variance', False)
        self.scale = 1.0

        self.stats_manager = StatisticsManager(self.params)
        self.history_manager = HistoryManager(self.params)
        self.export_manager = ExportManager(self.params)
        self.capture_manager = FrameCaptureManager(self.params)
        self.tracer = FieldLineTracer(self.params, self.grid) if params.get('draw_field_lines', True) else None

        self.is_rendering = params.get('enable_rendering', True) or self.capture_manager.is_enabled
        self.viz_manager = None
        if self.is_rendering:
            self.viz_manager = VisualizationManager(self.params, self.grid)

        self.timer = SimpleTimer()
        self.last_fig = None

    def set_timer(self, timer):
        """從外部接收計時器物件。"""
        self.timer = timer

    def _rescale(self):
        """按內部方差重整場值，並返回顏色映射用的對比尺度。"""
        if not self.rescale_variance:
            return 1.0
        variance = compute_variance(self.field_state.phi, self.field_state.xy_in)
        renormalise_field(self.field_state.phi, self.field_state.xy_in, variance)
        return self.stats_manager.color_scale(variance)

    def process_frame(self, frame: int) -> Dict[str, Any]:
        """對已經演化好的場做後處理：梯度、場線、統計、繪圖、擷取與導出。"""
        fs = self.field_state
        with self.timer.record("梯度與場線"):
            nablax, nablay = compute_gradient(fs.phi, self.grid.dx)
            lines = self.tracer.trace_all(nablax, nablay, fs.xy_in) if self.tracer is not None else []

        result = {"frame": frame, "scale": self.scale, "num_lines": len(lines)}

        if self.history_manager.should_snapshot(frame, self.num_frames):
            stats = self.stats_manager.calculate_frame_stats(fs.phi, fs.xy_in, nablax, nablay)
            stats["frame"] = frame
            self.history_manager.record_snapshot(stats)
            result["stats"] = stats

        if self.viz_manager is not None:
            with self.timer.record("繪圖"):
                message = self.viz_manager.overlay_text(self.driver)
                self.last_fig = self.viz_manager.render_frame(frame, fs, self.scale, nablax, nablay, lines, message)
            if self.capture_manager.is_enabled:
                with self.timer.record("影格擷取"):
                    self.capture_manager.save_frame(self.last_fig)

        export_interval = max(int(self.params.get('export_interval', 100)), 1)
        if self.export_manager.is_enabled and (frame % export_interval == 0 or frame == self.num_frames):
            self.export_manager.export_frame_data({"frame": frame, "phi": fs.phi, "xy_in": fs.xy_in})

        return result

    def advance_frame(self, frame: int) -> Dict[str, Any]:
        """推進一個影格並完成其後處理。"""
        if self.driver is not None:
            with self.timer.record("區域重新分類"):
                shape_params = self.driver.apply(frame, self.field_state)
            if not self.is_quiet and self.params.get('verbose_driver', False):
                print(f"Julia set parameters : i = {frame}, {shape_params.describe()}")

        with self.timer.record("熱場演化 (evolve)"):
            self.backend.evolve(self.field_state, self.substeps)

        self.scale = self._rescale()
        return self.process_frame(frame)

    def run(self, num_frames: Optional[int] = None) -> Dict[str, Any]:
        total_frames = num_frames if num_frames is not None else self.num_frames
        self.num_frames = total_frames

        # 初始影格 (演化之前)
        self.scale = self._rescale()
        self.process_frame(0)
        if self.capture_manager.is_enabled and self.last_fig is not None:
            self.capture_manager.hold_first(self.last_fig)

        progress_bar = tqdm(range(1, total_frames + 1), desc="  影格進度", leave=False, disable=self.is_quiet)
        last = None
        for frame in progress_bar:
            last = self.advance_frame(frame)

        summary = {"frames": total_frames, "last": last, "capture_paths": [], "animation": None}
        if self.capture_manager.is_enabled and self.last_fig is not None:
            self.capture_manager.hold_last(self.last_fig)
            summary["capture_paths"] = list(self.capture_manager.saved_paths)
            if self.params.get('assemble_animation', False):
                with self.timer.record("動畫組裝"):
                    summary["animation"] = assemble_animation(
                        self.capture_manager.saved_paths,
                        self.params.get('animation_output_path', 'heat_animation.gif'),
                        self.params.get('animation_fps', 25),
                        self.params.get('animation_max_frames', 0))
        return summary

    def analyze_and_visualize(self):
        """繪製統計曲線並結束繪圖。"""
        if self.viz_manager is None: return
        if not self.is_quiet:
            self.viz_manager.plot_summary_stats(self.history_manager.get_history())
        self.viz_manager.finalize()
