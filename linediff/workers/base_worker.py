"""
Base classes for running comparisons off the calling thread.

A worker does its job in `do_work`; `run` wraps it with state tracking
and turns the outcome into exactly one of the `finished`, `error` or
`cancelled` signals.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any, Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot, QMutex, QMutexLocker


class WorkerState(Enum):
    """Lifecycle of a worker."""
    PENDING = auto()
    RUNNING = auto()
    CANCELLING = auto()
    CANCELLED = auto()
    COMPLETED = auto()
    FAILED = auto()


class WorkerSignals(QObject):
    """Signals emitted by a worker, safe to connect across threads."""
    progress = pyqtSignal(int, int, str)    # (step, steps, message)
    status = pyqtSignal(str)
    started = pyqtSignal()
    finished = pyqtSignal(object)           # result of do_work
    error = pyqtSignal(str, str)            # (exception name, message)
    cancelled = pyqtSignal()
    state_changed = pyqtSignal(object)      # WorkerState


class CancelledException(Exception):
    """Raised inside `do_work` once cancellation has been requested."""


class WorkerMeta(type(QObject), type(ABC)):
    pass


class BaseWorker(QObject, ABC, metaclass=WorkerMeta):
    """
    Base class for comparison workers.

    Subclasses implement `do_work` and call `check_cancelled` between
    steps. `run` can be called directly for a synchronous comparison or
    connected to a thread through `WorkerThread`.
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.signals = WorkerSignals()
        self._mutex = QMutex()
        self._state = WorkerState.PENDING
        self._cancel_requested = False
        self._result: Any = None
        self._error: Optional[tuple[str, str]] = None

    @property
    def state(self) -> WorkerState:
        with QMutexLocker(self._mutex):
            return self._state

    @property
    def is_cancelled(self) -> bool:
        """True once `cancel` has been called."""
        with QMutexLocker(self._mutex):
            return self._cancel_requested

    @property
    def result(self) -> Any:
        """Value returned by `do_work`, or None unless completed."""
        return self._result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        """(exception name, message) after a failure."""
        return self._error

    def cancel(self) -> None:
        """Ask the worker to stop at its next cancellation check."""
        with QMutexLocker(self._mutex):
            self._cancel_requested = True
            running = self._state == WorkerState.RUNNING
            if running:
                self._state = WorkerState.CANCELLING
        if running:
            self.signals.state_changed.emit(WorkerState.CANCELLING)

    @pyqtSlot()
    def run(self) -> None:
        """Execute `do_work` and report how it ended."""
        self._set_state(WorkerState.RUNNING)
        self.signals.started.emit()

        try:
            result = self.do_work()
            self.check_cancelled()
        except CancelledException:
            self._set_state(WorkerState.CANCELLED)
            self.signals.cancelled.emit()
        except Exception as e:
            error_type = type(e).__name__
            self._error = (error_type, str(e))
            logging.debug(f"{type(self).__name__} - {error_type}: {e}")
            self._set_state(WorkerState.FAILED)
            self.signals.error.emit(error_type, str(e))
        else:
            self._result = result
            self._set_state(WorkerState.COMPLETED)
            self.signals.finished.emit(result)

    @abstractmethod
    def do_work(self) -> Any:
        """Perform the comparison and return its result."""
        pass

    def report_progress(self, current: int, total: int, message: str = "") -> None:
        self.signals.progress.emit(current, total, message)

    def report_status(self, message: str) -> None:
        self.signals.status.emit(message)

    def check_cancelled(self) -> None:
        """Raise CancelledException if cancellation was requested."""
        if self.is_cancelled:
            raise CancelledException("Comparison cancelled")

    def _set_state(self, value: WorkerState) -> None:
        with QMutexLocker(self._mutex):
            self._state = value
        self.signals.state_changed.emit(value)


class WorkerThread(QThread):
    """
    Runs a worker on its own thread.

    The thread's event loop stops as soon as the worker reports any
    outcome, so `wait()` returns once the comparison is over.

    Usage:
        thread = WorkerThread(worker)
        worker.signals.finished.connect(show_result)
        thread.start()
    """

    def __init__(self, worker: BaseWorker, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.worker = worker
        self.worker.moveToThread(self)

        self.started.connect(self.worker.run)
        for signal in (worker.signals.finished, worker.signals.error, worker.signals.cancelled):
            signal.connect(self.quit)

    def cancel(self) -> None:
        self.worker.cancel()

    @property
    def result(self) -> Any:
        return self.worker.result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        return self.worker.error
