# driver.py
# Runs one solve request at a time on a background thread and reports
# progress and the outcome through a per-request channel.

from __future__ import annotations

import logging
import queue
import threading
from typing import Iterator, Mapping, Sequence

from board import CALENDAR_LAYOUT, Layout, build_board, validate_layout
from errors import SearchCancelled
from messages import (
    FailedMessage,
    ProgressMessage,
    SearchMessage,
    SolvedMessage,
    SolveRequest,
    TerminalMessage,
    UnsolvedMessage,
    is_terminal,
)
from pieces import Orientation, all_piece_orientations
from solver import AttemptCounter, solve

logger = logging.getLogger(__name__)

# Put on an abandoned job's channel to wake any reader blocked on it
_CLOSED = object()


class _SearchJob:
    def __init__(self, request_id: int, request: SolveRequest):
        self.request_id = request_id
        self.request = request
        self.channel: queue.Queue = queue.Queue()
        self.cancelled = threading.Event()
        self.thread: threading.Thread | None = None


class SearchDriver:
    """Host-facing entry point for solving dates without blocking the caller.

    At most one search is active. Submitting a new request abandons the one
    in flight: its thread stops before its next placement attempt and
    nothing it produces reaches the host.
    """

    def __init__(
        self,
        orientations: Mapping[int, Sequence[Orientation]] | None = None,
        layout: Layout = CALENDAR_LAYOUT,
        progress_interval: int | None = None,
        prune: bool | None = None,
    ):
        validate_layout(layout, months=12, days=31)
        self._orientations = orientations if orientations is not None else all_piece_orientations()
        self._layout = layout
        self._progress_interval = progress_interval
        self._prune = prune
        self._lock = threading.Lock()
        self._job: _SearchJob | None = None
        self._threads: list[threading.Thread] = []
        self._next_id = 1

    @property
    def current_request_id(self) -> int | None:
        job = self._job
        return job.request_id if job is not None else None

    def submit(self, month: int, day: int) -> int:
        """Start solving a date and return its request id.

        Raises pydantic.ValidationError for a month outside 1..12 or a day
        outside 1..31.
        """
        request = SolveRequest(month=month, day=day)
        with self._lock:
            if self._job is not None:
                logger.info("Request %d superseded", self._job.request_id)
                self._abandon(self._job)
            job = _SearchJob(self._next_id, request)
            self._next_id += 1
            self._job = job
            self._threads = [t for t in self._threads if t.is_alive()]

        job.thread = threading.Thread(
            target=self._run,
            args=(job,),
            name=f"calendar-search-{job.request_id}",
            daemon=True,
        )
        self._threads.append(job.thread)
        job.thread.start()
        logger.info("Request %d: solving %d/%d", job.request_id, month, day)
        return job.request_id

    def cancel(self) -> None:
        with self._lock:
            if self._job is not None:
                logger.info("Request %d cancelled", self._job.request_id)
                self._abandon(self._job)
                self._job = None

    def close(self, timeout: float | None = 5.0) -> None:
        """Cancel the current request and wait for every search thread to exit."""
        self.cancel()
        for thread in self._threads:
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Search thread %s still running after close", thread.name)
        self._threads = [t for t in self._threads if t.is_alive()]

    def __enter__(self) -> "SearchDriver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def poll(self) -> list[SearchMessage]:
        """Messages the current request has produced so far, without blocking."""
        job = self._job
        if job is None:
            return []
        received: list[SearchMessage] = []
        while True:
            try:
                item = job.channel.get_nowait()
            except queue.Empty:
                break
            if item is _CLOSED:
                break
            received.append(item)
            if is_terminal(item):
                self._finish(job)
                break
        return received

    def messages(self, timeout: float | None = None) -> Iterator[SearchMessage]:
        """Block on the current request, yielding messages through the terminal one.

        Stops early if the request is cancelled or superseded meanwhile.
        Raises TimeoutError if no message arrives within timeout seconds.
        """
        job = self._job
        if job is None:
            return
        while True:
            try:
                item = job.channel.get(timeout=timeout)
            except queue.Empty:
                raise TimeoutError(
                    f"No message from request {job.request_id} within {timeout}s"
                ) from None
            if item is _CLOSED or job.cancelled.is_set():
                return
            # The caller may stop iterating at the terminal message
            if is_terminal(item):
                self._finish(job)
                yield item
                return
            yield item

    def wait(self, timeout: float | None = None) -> TerminalMessage | None:
        """Terminal message of the current request, or None if it was abandoned."""
        job = self._job
        for message in self.messages(timeout):
            if is_terminal(message):
                if job is not None:
                    self._finish(job)
                return message
        return None

    def _abandon(self, job: _SearchJob) -> None:
        job.cancelled.set()
        job.channel.put(_CLOSED)

    def _finish(self, job: _SearchJob) -> None:
        with self._lock:
            if self._job is job:
                self._job = None

    def _run(self, job: _SearchJob) -> None:
        def report(attempts: int) -> None:
            job.channel.put(ProgressMessage(request_id=job.request_id, attempts=attempts))

        counter = AttemptCounter(
            interval=self._progress_interval,
            on_progress=report,
            cancelled=job.cancelled,
        )
        try:
            board = build_board(job.request.month, job.request.day, self._layout)
            result = solve(
                board,
                sorted(self._orientations),
                self._orientations,
                counter,
                self._prune,
            )
        except SearchCancelled as e:
            logger.debug("Request %d stopped after %d attempts", job.request_id, e.attempts)
            return
        except Exception as e:
            logger.error(f"Request {job.request_id} failed: {e}", exc_info=True)
            job.channel.put(FailedMessage(request_id=job.request_id, error=str(e)))
            return

        if job.cancelled.is_set():
            logger.debug("Request %d finished after being abandoned", job.request_id)
            return

        message: TerminalMessage
        if result is None:
            message = UnsolvedMessage(request_id=job.request_id, attempts=counter.count)
        else:
            message = SolvedMessage(request_id=job.request_id, board=result, attempts=counter.count)
        logger.info(
            "Request %d: %s after %d attempts", job.request_id, message.kind.value, counter.count
        )
        job.channel.put(message)
