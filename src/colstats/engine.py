"""
Concurrent fan-out/fan-in over input files.

Paths go into a shared queue drained by a bounded set of worker threads. Each
worker reports through one event queue with three event kinds:

- RESULT: the samples of one file
- ERROR: the exception that stopped a worker
- DONE: posted once by a watcher after every worker has exited

The caller's thread runs the merge loop and is the only writer of the
consolidated series. DONE is enqueued after every worker has joined, so it is
always read after all results those workers produced.
"""

import logging
import queue
import threading
from typing import Callable, List, Sequence, Tuple

from .aggregate import resolve_operation
from .config import RunConfig
from .errors import NoInputFilesError
from .extract import extract_file

log = logging.getLogger(__name__)

RESULT = "result"
ERROR = "error"
DONE = "done"

Extractor = Callable[..., List[float]]
Event = Tuple[str, object]


class WorkerPool:
    """Bounded pool extracting one column from many files."""

    def __init__(
        self,
        column: int,
        workers: int = 1,
        delimiter: str = ",",
        skip_header: bool = False,
        extractor: Extractor | None = None,
    ):
        self.column = column
        self.workers = workers
        self.delimiter = delimiter
        self.skip_header = skip_header
        self.extractor = extractor or extract_file

    @classmethod
    def from_config(cls, cfg: RunConfig, extractor: Extractor | None = None) -> "WorkerPool":
        return cls(
            column=cfg.column,
            workers=cfg.workers,
            delimiter=cfg.delimiter,
            skip_header=cfg.skip_header,
            extractor=extractor,
        )

    def _work(self, paths: "queue.Queue[str]", events: "queue.Queue[Event]", stop: threading.Event) -> None:
        while not stop.is_set():
            try:
                path = paths.get_nowait()
            except queue.Empty:
                return
            try:
                samples = self.extractor(path, self.column, delimiter=self.delimiter, skip_header=self.skip_header)
            except Exception as exc:
                events.put((ERROR, exc))
                return
            events.put((RESULT, samples))

    def _watch(self, threads: List[threading.Thread], events: "queue.Queue[Event]") -> None:
        for t in threads:
            t.join()
        events.put((DONE, None))

    def collect(self, paths: Sequence[str]) -> List[float]:
        """
        Extract the column from every path and return the consolidated series.

        The first worker error is raised as-is; workers stop taking new files
        once it is seen and anything they report afterwards is discarded.
        """
        pending: "queue.Queue[str]" = queue.Queue()
        for p in paths:
            pending.put(p)
        events: "queue.Queue[Event]" = queue.Queue()
        stop = threading.Event()

        n_workers = max(1, min(self.workers, len(paths)))
        threads = [
            threading.Thread(target=self._work, args=(pending, events, stop), name=f"colstats-worker-{i}", daemon=True)
            for i in range(n_workers)
        ]
        for t in threads:
            t.start()
        threading.Thread(target=self._watch, args=(threads, events), name="colstats-watcher", daemon=True).start()
        log.debug("Started %d worker(s) for %d file(s)", n_workers, len(paths))

        consolidated: List[float] = []
        files_done = 0
        while True:
            kind, payload = events.get()
            if kind == ERROR:
                stop.set()
                log.debug("Stopping workers after error: %s", payload)
                raise payload  # type: ignore[misc]
            if kind == RESULT:
                consolidated.extend(payload)  # type: ignore[arg-type]
                files_done += 1
                continue
            log.info("Processed %d file(s), %d sample(s) with %d worker(s)", files_done, len(consolidated), n_workers)
            return consolidated

    def run(self, paths: Sequence[str], op: str) -> float:
        """Collect every sample from `paths` and reduce them with `op`."""
        stats = resolve_operation(op)
        if not paths:
            raise NoInputFilesError()
        return stats(self.collect(paths))


def run(paths: Sequence[str], cfg: RunConfig, extractor: Extractor | None = None) -> float:
    """Aggregate `cfg.column` over `paths` using `cfg.op`."""
    return WorkerPool.from_config(cfg, extractor=extractor).run(paths, cfg.op)
