"""
Module: session

Purpose:
    Debounced, latest-wins stitching for interactive callers. Rapid
    successive requests (reordering, editing crops, typing a width)
    collapse into one stitch, and a result that was superseded while it
    was being computed is dropped instead of published.

Key Classes:
    - StitchSession: Timer-based debounced stitch runner

Dependencies:
    - threading (std)
    - slicestream.pipeline: build_composite

Used By:
    - UI layers that preview the composite while inputs change
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, Optional, Tuple

from slicestream.config import DEFAULT_DEBOUNCE_SECONDS, StitchConfig
from slicestream.core.errors import SliceStreamError
from slicestream.core.models import Composite, SourceImage
from slicestream.pipeline import build_composite

logger = logging.getLogger(__name__)

ResultCallback = Callable[[Optional[Composite]], None]
ErrorCallback = Callable[[SliceStreamError], None]


class StitchSession:
    """
    Debounced stitch runner that only publishes the newest request.

    Each request() snapshots its inputs and bumps a generation counter.
    The stitch runs on a timer thread once no newer request arrived for
    `debounce_seconds`. Results from older generations are discarded.

    Usage:
        session = StitchSession(on_result=show_preview)
        session.request(images)
        session.request(images_reordered)   # supersedes the first
        session.wait(timeout=5)
        session.close()

    Attributes:
        debounce_seconds: Quiet period before a request runs (0 = run
            synchronously inside request())
    """

    def __init__(
        self,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        config: Optional[StitchConfig] = None,
        on_result: Optional[ResultCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        if debounce_seconds < 0:
            raise ValueError(f"debounce_seconds must be >= 0: {debounce_seconds}")
        self.debounce_seconds = debounce_seconds
        self._config = config
        self._on_result = on_result
        self._on_error = on_error

        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Tuple[int, Tuple[SourceImage, ...], Optional[int]]] = None
        self._generation = 0
        self._latest: Optional[Composite] = None
        self._latest_error: Optional[SliceStreamError] = None
        self._published_generation = 0
        self._settled = threading.Event()
        self._settled.set()
        self._closed = False

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def generation(self) -> int:
        """Number of requests made so far."""
        return self._generation

    @property
    def published_generation(self) -> int:
        """Generation of the currently published result (0 = none yet)."""
        return self._published_generation

    @property
    def latest(self) -> Optional[Composite]:
        """Most recent published composite (None for empty input)."""
        return self._latest

    @property
    def latest_error(self) -> Optional[SliceStreamError]:
        """Error of the most recent request, if it failed."""
        return self._latest_error

    # ─────────────────────────────────────────────────────────────────────────
    # Requests
    # ─────────────────────────────────────────────────────────────────────────

    def request(
        self,
        images: Iterable[SourceImage],
        target_width: Optional[int] = None,
    ) -> int:
        """
        Schedule a stitch of `images`.

        The sequence is copied immediately, so later changes to the
        caller's list do not affect this request.

        Returns:
            Generation number of this request

        Raises:
            RuntimeError: If the session is closed
        """
        snapshot = tuple(images)
        with self._lock:
            if self._closed:
                raise RuntimeError("StitchSession is closed")
            self._generation += 1
            generation = self._generation
            self._pending = (generation, snapshot, target_width)
            self._settled.clear()
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            if self.debounce_seconds > 0:
                self._timer = threading.Timer(self.debounce_seconds, self._run, args=(generation,))
                self._timer.daemon = True
                self._timer.start()

        logger.debug(f"Stitch request #{generation} with {len(snapshot)} images")
        if self.debounce_seconds == 0:
            self._run(generation)
        return generation

    def flush(self) -> Optional[Composite]:
        """Run any pending request now, on the calling thread.

        If the timer thread already took the request and is still
        stitching, this blocks until that result is published.
        """
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            pending = self._pending
        if pending is not None:
            self._run(pending[0])
        else:
            self._settled.wait()
        return self._latest

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the newest request has been published."""
        return self._settled.wait(timeout)

    def close(self) -> None:
        """Cancel pending work. In-flight results are discarded."""
        with self._lock:
            self._closed = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None
            self._settled.set()

    def __enter__(self) -> "StitchSession":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    # ─────────────────────────────────────────────────────────────────────────
    # Worker
    # ─────────────────────────────────────────────────────────────────────────

    def _run(self, generation: int) -> None:
        with self._lock:
            if self._pending is None or self._pending[0] != generation:
                return
            _, images, target_width = self._pending
            self._pending = None

        try:
            self._publish(generation, images, target_width)
        finally:
            # wait() must return even if the stitch raised unexpectedly
            with self._lock:
                if self._pending is None and (self._closed or generation == self._generation):
                    self._settled.set()

    def _publish(
        self,
        generation: int,
        images: Tuple[SourceImage, ...],
        target_width: Optional[int],
    ) -> None:
        result: Optional[Composite] = None
        error: Optional[SliceStreamError] = None
        try:
            result = build_composite(images, target_width, config=self._config)
        except SliceStreamError as e:
            error = e

        with self._lock:
            if self._closed or generation != self._generation:
                logger.debug(f"Dropping stale stitch result #{generation}")
                return
            # A failed stitch keeps the previous preview
            if error is None:
                self._latest = result
            self._latest_error = error
            self._published_generation = generation
            self._settled.set()

        if error is not None:
            logger.error(f"Stitching failed: {error}")
            if self._on_error is not None:
                self._on_error(error)
        elif self._on_result is not None:
            self._on_result(result)
