# heat_domain/main.py

import sys
import os
import argparse
from timer import SimpleTimer

# --- 專案路徑設定 ---
_current_file_dir = os.path.dirname(os.path.abspath(__file__))
if _current_file_dir not in sys.path:
    sys.path.insert(0, _current_file_dir)

# --- 匯入模組 ---
from config import get_config
from simulation import Simulation
from simulation_setup import setup_simulation_environment
from physics.domains import domain_configs
from physics.drivers import shape_driver_configs
from physics.distributions import initial_condition_configs

def list_presets():
    """列出所有可用的區域、驅動器與初始條件預設。"""
    for title, configs in [("區域形狀 (domain_config_name)", domain_configs),
                           ("形狀驅動 (shape_driver_config_name)", shape_driver_configs),
                           ("初始條件 (initial_condition_config_name)", initial_condition_configs)]:
        print(f"\n{title}:")
        for name, conf in configs.items():
            print(f"  {name:<22} [{conf['provider']}] {conf.get('description', '')}")

def run_animation(params: dict):
    """建立模擬環境，跑完全部影格，並輸出計時報告。"""
    timer = SimpleTimer()
    timer.start("總任務")

    with timer.record("初始化與編譯"):
        field_state, driver, updated_params = setup_simulation_environment(params)
        sim = Simulation(updated_params, field_state, driver)
        sim.set_timer(timer)

    print(f"\n--- 開始演化 {updated_params['num_frames']} 個影格，每個影格 {updated_params['substeps_per_frame']} 個子步 ---")
    summary = sim.run()
    sim.analyze_and_visualize()

    timer.stop("總任務")
    if summary["animation"]:
        print(f"動畫已保存到 '{summary['animation']}'。")
    timer.report()
    return summary

def main():
    """程式主入口，解析命令行參數並啟動模擬。"""
    parser = argparse.ArgumentParser(
        description="在任意形狀的平面區域上模擬熱傳導並即時繪製場線。",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument('--mode', type=str, default='animate', choices=['animate', 'list'],
                        help='選擇程式運行的模式 ("animate" 跑模擬，"list" 列出可用預設)')

    base_params = get_config()
    print("提示：已載入 config.py 中的預設設定。")

    # 動態地為所有可配置參數添加命令行接口
    for key, value in base_params.items():
        arg_name = f'--{key.replace("_", "-")}'
        if isinstance(value, bool):
            parser.add_argument(arg_name, action=argparse.BooleanOptionalAction, default=None)
        else:
            parser.add_argument(arg_name, type=type(value), default=None, help=f'覆寫 {key} 參數 (預設: {value})')

    args = parser.parse_args()

    if args.mode == 'list':
        list_presets()
        return

    # 將命令行參數覆寫到基礎設定上
    final_params = base_params.copy()
    for key, value in vars(args).items():
        if value is not None and key != 'mode':
            final_params[key] = value

    # --- 打印所有生效的參數配置，方便追溯 ---
    if not final_params.get('quiet_mode', False):
        print("\n" + "="*60)
        print("【運行配置報告 (Runtime Configuration Report)】")
        print(f"運行模式 (Mode): {args.mode}")
        print("-" * 60)
        for key in sorted(final_params.keys()):
            print(f"{key:<35}: {final_params[key]}")
        print("="*60 + "\n")

    try:
        run_animation(final_params)
    except ValueError as e:
        print(f"錯誤：{e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
