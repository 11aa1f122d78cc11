# heat_domain/analysis/snapshot.py

import os
from PIL import Image
from typing import List, Optional

def _palette_frames(frame_paths: List[str]):
    """逐張讀取影格並轉成調色盤模式，不一次把全部影格載入記憶體。"""
    for path in frame_paths:
        with Image.open(path) as im:
            yield im.convert('P', palette=Image.Palette.ADAPTIVE)

def assemble_animation(frame_paths: List[str], output_path: str, fps: int = 25,
                       max_frames: int = 0) -> Optional[str]:
    """
    把擷取到的影格依序組裝成一個 GIF 動畫。
    GIF 編碼器仍會在內部保留已寫入的影格，所以 max_frames > 0 時，
    超過這個數量的長動畫會直接跳過組裝。
    """
    print("  [分析] 正在把擷取的影格組裝成動畫...")

    if not frame_paths:
        print("    - 警告：沒有可用的影格，無法組裝動畫。")
        return None
    if max_frames > 0 and len(frame_paths) > max_frames:
        print(f"    - 警告：共 {len(frame_paths)} 個影格，超過上限 {max_frames}，跳過動畫組裝。")
        return None

    out_dir = os.path.dirname(output_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    frames = _palette_frames(frame_paths)
    first = next(frames)
    duration = max(int(round(1000.0 / max(fps, 1))), 1)
    first.save(output_path, save_all=True, append_images=frames, duration=duration, loop=0)

    print(f"  [組裝] 成功從 {len(frame_paths)} 個影格組裝了動畫: '{output_path}'")
    return output_path
