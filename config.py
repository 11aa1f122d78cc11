# heat_domain/config.py

from user_config import *

# ==============================================================================
# 模式專用設定
# ==============================================================================
def get_config() -> dict:
    """返回唯一的模擬設定字典。"""

    params = {
        # --- 後端與高層配置 ---
        'backend': 'parallel',
        'boundary_condition': 'dirichlet',
        'precision': 'float64',

        # --- 路徑設定 ---
        'default_export_path': 'exported_data',
        'plot_output_path': 'simulation_plots',
        'capture_output_path': 'tif_heat',
        'capture_prefix': 'heat',
        'animation_output_path': 'heat_animation.gif',

        # --- 網格 ---
        'nx': nx,
        'ny': ny,
        'x_min': x_min,
        'x_max': x_max,
        'y_min': y_min,
        'y_max': y_max,

        # --- 物理模型配置 ---
        'domain_config_name': domain_config_name,
        'shape_driver_config_name': shape_driver_config_name,
        'initial_condition_config_name': initial_condition_config_name,

        # --- 熱方程參數 ---
        'dt': dt,
        'viscosity': viscosity,
        't_in': t_in,
        't_out': t_out,
        'drift_speed': drift_speed,
        'amplitude_clamp': False,
        'vmax': 10.0,

        # --- 動畫長度 ---
        'num_frames': num_frames,
        'substeps_per_frame': substeps_per_frame,

        # --- 場線 ---
        'draw_field_lines': draw_field_lines,
        'num_field_lines': num_field_lines,
        'field_line_factor': field_line_factor,
        'field_line_step': field_line_step,
        'field_line_max_steps': field_line_max_steps,
        'field_line_width': 0.6,

        # --- 顏色 ---
        'field_rep': field_rep,
        'color_scheme': color_scheme,
        'rescale_variance': rescale_variance,
        'slope': 0.3,
        'attenuation': 0.0,
        'color_hue': 260.0,
        'color_drift': 0.0,
        'lum_mean': 0.5,
        'lum_amp': 0.3,
        'hue_mean': 280.0,
        'hue_amp': -110.0,

        # --- 輸出 ---
        'enable_capture': enable_capture,
        'hold_frames_start': 50,
        'hold_frames_end': 20,
        'animation_fps': 25,
        'enable_export': False,
        'export_interval': 100,
        'stats_interval': 10,
        'frame_dpi': 100,
        'live_plotting': False,
        'enable_rendering': True,
        'assemble_animation': False,
        'animation_max_frames': 600,
        'verbose_driver': False,
        'quiet_mode': False,
    }

    return params
