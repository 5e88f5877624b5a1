"""
Background workers for non-blocking comparisons.

Provides QThread-based workers for:
- Comparing two text files
- Comparing in-memory text

All workers use Qt signals for thread-safe communication
with the UI thread.
"""

from linediff.workers.base_worker import (
    BaseWorker,
    CancelledException,
    WorkerSignals,
    WorkerState,
    WorkerThread,
)
from linediff.workers.compare_worker import (
    TextCompareWorker,
    TextCompareWorkerFromContent,
)

__all__ = [
    # Base
    'BaseWorker',
    'CancelledException',
    'WorkerSignals',
    'WorkerState',
    'WorkerThread',
    # Compare
    'TextCompareWorker',
    'TextCompareWorkerFromContent',
]
