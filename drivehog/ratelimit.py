import threading, time


class RateLimiter:
    def __init__(self, per_min: int = 60):
        self.per_min = max(1, per_min)
        self.min_interval = 60.0 / self.per_min
        self._lock = threading.Lock()
        self._last = 0.0


    def wait(self):
        with self._lock:
            now = time.perf_counter()
            delta = now - self._last
            wait_for = self.min_interval - delta
            if wait_for > 0:
                time.sleep(wait_for)
            self._last = time.perf_counter()
