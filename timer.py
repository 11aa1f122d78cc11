import time
from contextlib import contextmanager

class SimpleTimer:
    """一個簡單的計時器類別，累計每個命名階段 (演化、繪圖、擷取...) 的耗時。"""
    def __init__(self):
        self.totals = {}
        self.counts = {}
        self.start_times = {}

    def start(self, name: str):
        self.start_times[name] = time.perf_counter()

    def stop(self, name: str) -> float:
        """停止一個命名計時器，累加並返回這一次的耗時。未啟動的計時器返回 0。"""
        started = self.start_times.pop(name, None)
        if started is None:
            return 0.0
        elapsed = time.perf_counter() - started
        self.totals[name] = self.totals.get(name, 0.0) + elapsed
        self.counts[name] = self.counts.get(name, 0) + 1
        return elapsed

    @contextmanager
    def record(self, name: str):
        """使用 'with' 語句來自動計時；區塊拋出例外時同樣會停止計時。"""
        self.start(name)
        try:
            yield
        finally:
            self.stop(name)

    def summary(self):
        """按總耗時排序的 (名稱, 總耗時, 次數) 列表。"""
        items = sorted(self.totals.items(), key=lambda item: item[1], reverse=True)
        return [(name, total, self.counts[name]) for name, total in items]

    def report(self):
        print("\n--- 計時器分析報告 ---")
        rows = self.summary()
        if not rows:
            print("沒有任何計時記錄。")
            return

        for name, total_time, count in rows:
            print(f"[{name}]: 總耗時 {total_time:.4f} 秒, {count} 次, 平均 {total_time / count:.4f} 秒/次")
        print("------------------------\n")
