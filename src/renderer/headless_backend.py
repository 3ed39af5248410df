import concurrent.futures
import concurrent.futures
import threading
import threading
import time
import time
import typing
import typing
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
from src.core import linalg
from src.core import linalg
from src.core.common_types import FrameSubmission
from src.core.common_types import FrameSubmission

class HeadlessBackend:
    """
    Rendering backend without a GPU: consumes each frame on its own worker thread, in submission order
#   Rendering backend without a GPU: consumes each frame on its own worker thread, in submission order
    (like a hardware queue), then reports completion from that thread.
#   (like a hardware queue), then reports completion from that thread.
    "Drawing" a frame projects every instance origin to normalized device coordinates.
#   "Drawing" a frame projects every instance origin to normalized device coordinates.
    """
    def __init__(self, consume_delay: float = 0.0) -> None:
#   def __init__(self, consume_delay: float = 0.0) -> None:
        self.consume_delay: float = consume_delay
#       self.consume_delay: float = consume_delay
        self.executor: concurrent.futures.ThreadPoolExecutor = concurrent.futures.ThreadPoolExecutor(
#       self.executor: concurrent.futures.ThreadPoolExecutor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1,
#           max_workers=1,
            thread_name_prefix="headless-backend",
#           thread_name_prefix="headless-backend",
        )
#       )
        self.pending: list[concurrent.futures.Future[npt.NDArray[np.float64]]] = []
#       self.pending: list[concurrent.futures.Future[npt.NDArray[np.float64]]] = []
        self.lock: threading.Lock = threading.Lock()
#       self.lock: threading.Lock = threading.Lock()
        self.completed_frames: int = 0
#       self.completed_frames: int = 0
        self.completed_slots: list[int] = []
#       self.completed_slots: list[int] = []
        self.last_ndc_positions: npt.NDArray[np.float64] | None = None
#       self.last_ndc_positions: npt.NDArray[np.float64] | None = None
        pass
#       pass

    def submit(self, frame: FrameSubmission, on_complete: typing.Callable[[int], None]) -> None:
#   def submit(self, frame: FrameSubmission, on_complete: typing.Callable[[int], None]) -> None:
        future: concurrent.futures.Future[npt.NDArray[np.float64]] = self.executor.submit(self._consume, frame, on_complete)
#       future: concurrent.futures.Future[npt.NDArray[np.float64]] = self.executor.submit(self._consume, frame, on_complete)
        # Earlier frames the worker is done with leave the list first, so a long run never piles up futures.
#       # Earlier frames the worker is done with leave the list first, so a long run never piles up futures.
        # A failure among them surfaces here instead of waiting for drain().
#       # A failure among them surfaces here instead of waiting for drain().
        finished: list[concurrent.futures.Future[npt.NDArray[np.float64]]] = self.collect_finished()
#       finished: list[concurrent.futures.Future[npt.NDArray[np.float64]]] = self.collect_finished()
        self.pending.append(future)
#       self.pending.append(future)
        for finished_future in finished:
#       for finished_future in finished:
            finished_future.result()
#           finished_future.result()
        pass
#       pass

    def collect_finished(self) -> list[concurrent.futures.Future[npt.NDArray[np.float64]]]:
#   def collect_finished(self) -> list[concurrent.futures.Future[npt.NDArray[np.float64]]]:
        running: list[concurrent.futures.Future[npt.NDArray[np.float64]]] = []
#       running: list[concurrent.futures.Future[npt.NDArray[np.float64]]] = []
        finished: list[concurrent.futures.Future[npt.NDArray[np.float64]]] = []
#       finished: list[concurrent.futures.Future[npt.NDArray[np.float64]]] = []
        for pending_future in self.pending:
#       for pending_future in self.pending:
            if pending_future.done():
#           if pending_future.done():
                finished.append(pending_future)
#               finished.append(pending_future)
            else:
#           else:
                running.append(pending_future)
#               running.append(pending_future)
        self.pending = running
#       self.pending = running
        return finished
#       return finished

    def _consume(self, frame: FrameSubmission, on_complete: typing.Callable[[int], None]) -> npt.NDArray[np.float64]:
#   def _consume(self, frame: FrameSubmission, on_complete: typing.Callable[[int], None]) -> npt.NDArray[np.float64]:
        try:
#       try:
            if self.consume_delay > 0.0:
#           if self.consume_delay > 0.0:
                time.sleep(self.consume_delay)
#               time.sleep(self.consume_delay)

            view_projection: npt.NDArray[np.float64] = np.asarray(linalg.multiply(frame["projection"], frame["view"]))
#           view_projection: npt.NDArray[np.float64] = np.asarray(linalg.multiply(frame["projection"], frame["view"]))
            model_matrices: npt.NDArray[np.float64] = np.asarray(frame["model_matrices"][: frame["instance_count"]], dtype=np.float64)
#           model_matrices: npt.NDArray[np.float64] = np.asarray(frame["model_matrices"][: frame["instance_count"]], dtype=np.float64)
            # Row 3 of a model matrix is where it sends the local origin.
#           # Row 3 of a model matrix is where it sends the local origin.
            clip_positions: npt.NDArray[np.float64] = model_matrices[:, 3, :] @ view_projection
#           clip_positions: npt.NDArray[np.float64] = model_matrices[:, 3, :] @ view_projection
            with np.errstate(divide="ignore", invalid="ignore"):
#           with np.errstate(divide="ignore", invalid="ignore"):
                ndc_positions: npt.NDArray[np.float64] = clip_positions[:, 0:3] / clip_positions[:, 3:4]
#               ndc_positions: npt.NDArray[np.float64] = clip_positions[:, 0:3] / clip_positions[:, 3:4]

            with self.lock:
#           with self.lock:
                self.last_ndc_positions = ndc_positions
#               self.last_ndc_positions = ndc_positions
                self.completed_frames += 1
#               self.completed_frames += 1
                self.completed_slots.append(frame["slot_index"])
#               self.completed_slots.append(frame["slot_index"])
            return ndc_positions
#           return ndc_positions
        finally:
#       finally:
            # Always hand the slot back, even if consuming failed, or the simulation would stall.
#           # Always hand the slot back, even if consuming failed, or the simulation would stall.
            on_complete(frame["slot_index"])
#           on_complete(frame["slot_index"])

    def drain(self) -> None:
#   def drain(self) -> None:
        # Wait for every submitted frame; re-raises the first consumer failure.
#       # Wait for every submitted frame; re-raises the first consumer failure.
        pending: list[concurrent.futures.Future[npt.NDArray[np.float64]]] = self.pending
#       pending: list[concurrent.futures.Future[npt.NDArray[np.float64]]] = self.pending
        self.pending = []
#       self.pending = []
        for future in pending:
#       for future in pending:
            future.result()
#           future.result()
        pass
#       pass

    def close(self) -> None:
#   def close(self) -> None:
        try:
#       try:
            self.drain()
#           self.drain()
        finally:
#       finally:
            self.executor.shutdown(wait=True)
#           self.executor.shutdown(wait=True)
        pass
#       pass

    def __enter__(self) -> "HeadlessBackend":
#   def __enter__(self) -> "HeadlessBackend":
        return self
#       return self

    def __exit__(self, *exc_info: typing.Any) -> None:
#   def __exit__(self, *exc_info: typing.Any) -> None:
        self.close()
#       self.close()
        pass
#       pass
