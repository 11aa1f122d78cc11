# heat_domain/analysis/io.py

import os
import numpy as np
from PIL import Image
from typing import Dict, Any, List

class HistoryManager:
    """管理每個影格統計數據的記錄和檢索。"""
    def __init__(self, params: Dict[str, Any]):
        self.stats_interval = max(int(params.get('stats_interval', 10)), 1)
        self.frame_history: List[Dict[str, Any]] = []

    def should_snapshot(self, frame: int, total_frames: int) -> bool:
        """判断当前影格是否需要记录。第一個、最後一個以及每隔 stats_interval 個影格。"""
        is_first = frame == 0
        is_last = frame == total_frames
        is_interval = frame % self.stats_interval == 0
        return is_first or is_last or is_interval

    def record_snapshot(self, snapshot_data: Dict[str, Any]):
        self.frame_history.append(snapshot_data)

    def get_history(self) -> List[Dict[str, Any]]:
        return self.frame_history

class FrameCaptureManager:
    """把繪好的影格存成編號連續的 PNG 圖片 (heat.00000.png, heat.00001.png, ...)。"""
    def __init__(self, params: Dict[str, Any]):
        self.is_enabled = params.get('enable_capture', False)
        self.capture_path = params.get('capture_output_path', 'frames')
        self.prefix = params.get('capture_prefix', 'heat')
        self.hold_start = params.get('hold_frames_start', 50)
        self.hold_end = params.get('hold_frames_end', 20)
        self.counter = 0
        self.saved_paths: List[str] = []
        if self.is_enabled:
            if not os.path.isabs(self.capture_path):
                self.capture_path = os.path.join(os.getcwd(), self.capture_path)
            os.makedirs(self.capture_path, exist_ok=True)
            print(f"  [影格擷取] 功能已啟用。影格將被保存到: '{self.capture_path}'")

    @staticmethod
    def figure_to_image(fig) -> Image.Image:
        fig.canvas.draw()
        rgba = np.asarray(fig.canvas.buffer_rgba())
        return Image.fromarray(rgba).convert('RGB')

    def save_frame(self, fig, repeat: int = 1) -> List[str]:
        """保存同一個影格 repeat 次 (用於開頭與結尾的停留畫面)。"""
        if not self.is_enabled or repeat <= 0:
            return []
        image = self.figure_to_image(fig)
        written = []
        for _ in range(repeat):
            file_path = os.path.join(self.capture_path, f"{self.prefix}.{self.counter:05d}.png")
            try:
                image.save(file_path)
            except OSError as e:
                print(f"警告：寫入文件 {file_path} 失敗: {e}")
                continue
            self.counter += 1
            written.append(file_path)
        self.saved_paths.extend(written)
        return written

    def hold_first(self, fig) -> List[str]:
        return self.save_frame(fig, self.hold_start)

    def hold_last(self, fig) -> List[str]:
        return self.save_frame(fig, self.hold_end)

class ExportManager:
    """负责将模拟的原始数据导出到磁盘。"""
    def __init__(self, params: Dict[str, Any]):
        self.is_enabled = params.get('enable_export', False)
        self.export_path = params.get('default_export_path')
        if self.is_enabled:
            if not os.path.isabs(self.export_path):
                self.export_path = os.path.join(os.getcwd(), self.export_path)
            os.makedirs(self.export_path, exist_ok=True)
            print(f"  [數據導出] 功能已啟用。數據將被保存到: '{self.export_path}'")

    def export_frame_data(self, snapshot_data: Dict[str, Any]):
        """将单个影格的場與分類網格导出为 .npz 文件。"""
        if not self.is_enabled:
            return None

        frame = snapshot_data['frame']
        file_path = os.path.join(self.export_path, f"heat_snapshot_frame_{frame:05d}.npz")
        data_to_save = {k: np.asarray(v) for k, v in snapshot_data.items()}

        try:
            np.savez_compressed(file_path, **data_to_save)
        except OSError as e:
            print(f"警告：寫入文件 {file_path} 失敗: {e}")
            return None
        return file_path
