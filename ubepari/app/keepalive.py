"""Background self-ping so free-tier hosts don't idle the service out."""
import threading

import requests

from ..utils.logger import get_logger

logger = get_logger()


class KeepAlive:
    def __init__(self, url: str, interval: float):
        self.url = url
        self.interval = interval
        self._stop = threading.Event()
        self._thread = None

    def start(self):
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="keepalive", daemon=True)
        self._thread.start()
        logger.info(f"[KEEPALIVE] Pinging {self.url} every {self.interval}s")

    def stop(self):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None

    def ping(self):
        # Failures are ignored; the next tick tries again.
        try:
            requests.get(self.url, timeout=10)
        except requests.exceptions.RequestException as e:
            logger.debug(f"[KEEPALIVE] ping failed: {e}")

    def _run(self):
        while not self._stop.wait(self.interval):
            self.ping()
