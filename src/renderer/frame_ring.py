import threading
import threading
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
from src.core.errors import ConfigurationError
from src.core.errors import ConfigurationError

DEFAULT_RING_SIZE: int = 3

class FrameBufferRing:
    """
    Fixed ring of per-instance transform buffers shared between the simulation and a rendering backend.
#   Fixed ring of per-instance transform buffers shared between the simulation and a rendering backend.
    A slot is outstanding from acquire_next_slot() until the backend calls release() for it, and an
#   A slot is outstanding from acquire_next_slot() until the backend calls release() for it, and an
    outstanding slot is never handed out again, so the simulation cannot overwrite matrices the backend is
#   outstanding slot is never handed out again, so the simulation cannot overwrite matrices the backend is
    still reading. When every slot is outstanding the simulation blocks (backpressure, not an error).
#   still reading. When every slot is outstanding the simulation blocks (backpressure, not an error).
    """
    def __init__(self, instance_count: int, size: int = DEFAULT_RING_SIZE) -> None:
#   def __init__(self, instance_count: int, size: int = DEFAULT_RING_SIZE) -> None:
        if size < 1:
#       if size < 1:
            raise ConfigurationError(f"Frame ring needs at least one slot, got {size}")
#           raise ConfigurationError(f"Frame ring needs at least one slot, got {size}")
        if instance_count < 1:
#       if instance_count < 1:
            raise ConfigurationError(f"Frame ring needs at least one instance per slot, got {instance_count}")
#           raise ConfigurationError(f"Frame ring needs at least one instance per slot, got {instance_count}")
        self.size: int = size
#       self.size: int = size
        self.instance_count: int = instance_count
#       self.instance_count: int = instance_count
        self.slots: list[npt.NDArray[np.float32]] = [
#       self.slots: list[npt.NDArray[np.float32]] = [
            np.tile(np.identity(4, dtype=np.float32), (instance_count, 1, 1)) for _ in range(size)
#           np.tile(np.identity(4, dtype=np.float32), (instance_count, 1, 1)) for _ in range(size)
        ]
#       ]
        # -1 so the first acquisition hands out slot 0.
#       # -1 so the first acquisition hands out slot 0.
        self.current_index: int = -1
#       self.current_index: int = -1
        self._outstanding: set[int] = set()
#       self._outstanding: set[int] = set()
        # release() is called from the backend's completion context, acquire from the simulation.
#       # release() is called from the backend's completion context, acquire from the simulation.
        self._condition: threading.Condition = threading.Condition()
#       self._condition: threading.Condition = threading.Condition()
        pass
#       pass

    def acquire_next_slot(self) -> int:
#   def acquire_next_slot(self) -> int:
        # The only suspension point of the simulation. Slots are handed out strictly round-robin,
#       # The only suspension point of the simulation. Slots are handed out strictly round-robin,
        # so this waits for the NEXT slot to come back, not just for any slot.
#       # so this waits for the NEXT slot to come back, not just for any slot.
        with self._condition:
#       with self._condition:
            next_index: int = (self.current_index + 1) % self.size
#           next_index: int = (self.current_index + 1) % self.size
            self._condition.wait_for(lambda: next_index not in self._outstanding)
#           self._condition.wait_for(lambda: next_index not in self._outstanding)
            self._outstanding.add(next_index)
#           self._outstanding.add(next_index)
            self.current_index = next_index
#           self.current_index = next_index
            return next_index
#           return next_index

    def release(self, slot_index: int) -> None:
#   def release(self, slot_index: int) -> None:
        with self._condition:
#       with self._condition:
            if slot_index not in self._outstanding:
#           if slot_index not in self._outstanding:
                raise ValueError(f"Slot {slot_index} is not outstanding")
#               raise ValueError(f"Slot {slot_index} is not outstanding")
            self._outstanding.remove(slot_index)
#           self._outstanding.remove(slot_index)
            self._condition.notify_all()
#           self._condition.notify_all()
        pass
#       pass

    def slot(self, slot_index: int) -> npt.NDArray[np.float32]:
#   def slot(self, slot_index: int) -> npt.NDArray[np.float32]:
        return self.slots[slot_index]
#       return self.slots[slot_index]

    @property
#   @property
    def in_flight(self) -> int:
#   def in_flight(self) -> int:
        with self._condition:
#       with self._condition:
            return len(self._outstanding)
#           return len(self._outstanding)

    def is_outstanding(self, slot_index: int) -> bool:
#   def is_outstanding(self, slot_index: int) -> bool:
        with self._condition:
#       with self._condition:
            return slot_index in self._outstanding
#           return slot_index in self._outstanding

    def wait_until_idle(self) -> None:
#   def wait_until_idle(self) -> None:
        # Used on shutdown: block until the backend has returned every slot.
#       # Used on shutdown: block until the backend has returned every slot.
        with self._condition:
#       with self._condition:
            self._condition.wait_for(lambda: not self._outstanding)
#           self._condition.wait_for(lambda: not self._outstanding)
        pass
#       pass
