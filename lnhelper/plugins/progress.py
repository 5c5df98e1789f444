from __future__ import annotations
import itertools
import sys
import threading
from typing import Optional, TextIO

FRAMES = ("⠂", "⠃", "⠁", "⠉", "⠈", "⠘", "⠐", "⠰", "⠠", "⠤", "⠄", "⠆")
INTERVAL_SEC = 0.25


class Spinner:
    """Cosmetic "Processing" spinner on the diagnostic stream while ffmpeg runs.

    Only drawn when the stream is a terminal. The stop flag is an Event owned by the
    caller side; one frame slipping out after ``stop()`` is acceptable.
    """

    def __init__(self, stream: Optional[TextIO] = None, enabled: bool = True, interval: float = INTERVAL_SEC):
        self.stream = stream or sys.stderr
        self.interval = interval
        self.enabled = enabled and _is_terminal(self.stream)
        self._finished = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "Spinner":
        if self.enabled and self._thread is None:
            self._thread = threading.Thread(target=self._loop, name="lnhelper-spinner", daemon=True)
            self._thread.start()
        return self

    def stop(self) -> None:
        self._finished.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 2)
            self.stream.write("\r" + " " * len("Processing ?") + "\r")
            self.stream.flush()
            self._thread = None

    def _loop(self) -> None:
        for frame in itertools.cycle(FRAMES):
            if self._finished.is_set():
                break
            self.stream.write(f"Processing {frame}\r")
            self.stream.flush()
            self._finished.wait(self.interval)

    def __enter__(self) -> "Spinner":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def _is_terminal(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
