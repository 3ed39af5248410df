"""
Tests for the bounded frame slot ring.
"""
import threading
import threading
import numpy as np
import numpy as np
import pytest
import pytest
from src.core.errors import ConfigurationError
from src.core.errors import ConfigurationError
from src.renderer.frame_ring import FrameBufferRing
from src.renderer.frame_ring import FrameBufferRing

def acquire_in_thread(ring: FrameBufferRing) -> tuple[threading.Event, list[int]]:
    # started is set just before the worker calls acquire_next_slot, done once it has returned.
#   # started is set just before the worker calls acquire_next_slot, done once it has returned.
    started = threading.Event()
#   started = threading.Event()
    done = threading.Event()
#   done = threading.Event()
    acquired: list[int] = []
#   acquired: list[int] = []

    def acquire() -> None:
#   def acquire() -> None:
        started.set()
#       started.set()
        acquired.append(ring.acquire_next_slot())
#       acquired.append(ring.acquire_next_slot())
        done.set()
#       done.set()

    threading.Thread(target=acquire, daemon=True).start()
#   threading.Thread(target=acquire, daemon=True).start()
    assert started.wait(timeout=5.0)
#   assert started.wait(timeout=5.0)
    return done, acquired
#   return done, acquired

class TestFrameBufferRing:
    def test_round_robin_order(self):
#   def test_round_robin_order(self):
        ring = FrameBufferRing(instance_count=2, size=3)
#       ring = FrameBufferRing(instance_count=2, size=3)
        order = []
#       order = []
        for _ in range(7):
#       for _ in range(7):
            slot_index = ring.acquire_next_slot()
#           slot_index = ring.acquire_next_slot()
            order.append(slot_index)
#           order.append(slot_index)
            ring.release(slot_index)
#           ring.release(slot_index)
        assert order == [0, 1, 2, 0, 1, 2, 0]
#       assert order == [0, 1, 2, 0, 1, 2, 0]

    def test_slots_hold_one_matrix_per_instance(self):
#   def test_slots_hold_one_matrix_per_instance(self):
        ring = FrameBufferRing(instance_count=4, size=3)
#       ring = FrameBufferRing(instance_count=4, size=3)
        assert len(ring.slots) == 3
#       assert len(ring.slots) == 3
        for index in range(3):
#       for index in range(3):
            assert ring.slot(index).shape == (4, 4, 4)
#           assert ring.slot(index).shape == (4, 4, 4)
            assert ring.slot(index).dtype == np.float32
#           assert ring.slot(index).dtype == np.float32

    def test_n_acquisitions_then_block_until_release(self):
#   def test_n_acquisitions_then_block_until_release(self):
        ring = FrameBufferRing(instance_count=1, size=3)
#       ring = FrameBufferRing(instance_count=1, size=3)
        assert [ring.acquire_next_slot() for _ in range(3)] == [0, 1, 2]
#       assert [ring.acquire_next_slot() for _ in range(3)] == [0, 1, 2]
        assert ring.in_flight == 3
#       assert ring.in_flight == 3

        done, acquired = acquire_in_thread(ring)
#       done, acquired = acquire_in_thread(ring)
        assert not done.wait(timeout=0.1)
#       assert not done.wait(timeout=0.1)
        assert acquired == []
#       assert acquired == []

        ring.release(0)
#       ring.release(0)
        assert done.wait(timeout=5.0)
#       assert done.wait(timeout=5.0)
        assert acquired == [0]
#       assert acquired == [0]

    def test_release_of_another_slot_does_not_hand_out_an_outstanding_one(self):
#   def test_release_of_another_slot_does_not_hand_out_an_outstanding_one(self):
        ring = FrameBufferRing(instance_count=1, size=3)
#       ring = FrameBufferRing(instance_count=1, size=3)
        for _ in range(3):
#       for _ in range(3):
            ring.acquire_next_slot()
#           ring.acquire_next_slot()

        done, acquired = acquire_in_thread(ring)
#       done, acquired = acquire_in_thread(ring)
        # Slot 0 is next in line and still outstanding.
#       # Slot 0 is next in line and still outstanding.
        ring.release(2)
#       ring.release(2)
        assert not done.wait(timeout=0.1)
#       assert not done.wait(timeout=0.1)

        ring.release(0)
#       ring.release(0)
        assert done.wait(timeout=5.0)
#       assert done.wait(timeout=5.0)
        assert acquired == [0]
#       assert acquired == [0]

    def test_never_returns_an_outstanding_slot(self):
#   def test_never_returns_an_outstanding_slot(self):
        ring = FrameBufferRing(instance_count=1, size=3)
#       ring = FrameBufferRing(instance_count=1, size=3)
        outstanding: set[int] = set()
#       outstanding: set[int] = set()
        for step in range(30):
#       for step in range(30):
            if len(outstanding) == ring.size or (step % 4 == 3 and outstanding):
#           if len(outstanding) == ring.size or (step % 4 == 3 and outstanding):
                oldest = min(outstanding, key=lambda index: (index - ring.current_index - 1) % ring.size)
#               oldest = min(outstanding, key=lambda index: (index - ring.current_index - 1) % ring.size)
                ring.release(oldest)
#               ring.release(oldest)
                outstanding.remove(oldest)
#               outstanding.remove(oldest)
            slot_index = ring.acquire_next_slot()
#           slot_index = ring.acquire_next_slot()
            assert slot_index not in outstanding
#           assert slot_index not in outstanding
            outstanding.add(slot_index)
#           outstanding.add(slot_index)
            assert ring.in_flight == len(outstanding) <= ring.size
#           assert ring.in_flight == len(outstanding) <= ring.size

    def test_release_from_backend_thread(self):
#   def test_release_from_backend_thread(self):
        ring = FrameBufferRing(instance_count=1, size=2)
#       ring = FrameBufferRing(instance_count=1, size=2)
        produced = []
#       produced = []
        consumed = threading.Semaphore(0)
#       consumed = threading.Semaphore(0)

        # Backend releases slots in submission order from its own thread.
#       # Backend releases slots in submission order from its own thread.
        def release_in_order() -> None:
#       def release_in_order() -> None:
            released = 0
#           released = 0
            while released < 20:
#           while released < 20:
                consumed.acquire()
#               consumed.acquire()
                ring.release(produced[released])
#               ring.release(produced[released])
                released += 1
#               released += 1

        worker = threading.Thread(target=release_in_order, daemon=True)
#       worker = threading.Thread(target=release_in_order, daemon=True)
        worker.start()
#       worker.start()
        for _ in range(20):
#       for _ in range(20):
            produced.append(ring.acquire_next_slot())
#           produced.append(ring.acquire_next_slot())
            assert ring.in_flight <= ring.size
#           assert ring.in_flight <= ring.size
            consumed.release()
#           consumed.release()
        worker.join(timeout=5.0)
#       worker.join(timeout=5.0)
        assert not worker.is_alive()
#       assert not worker.is_alive()
        assert ring.in_flight == 0
#       assert ring.in_flight == 0
        assert produced == [index % 2 for index in range(20)]
#       assert produced == [index % 2 for index in range(20)]

    def test_release_of_idle_slot_rejected(self):
#   def test_release_of_idle_slot_rejected(self):
        ring = FrameBufferRing(instance_count=1, size=3)
#       ring = FrameBufferRing(instance_count=1, size=3)
        with pytest.raises(ValueError):
#       with pytest.raises(ValueError):
            ring.release(0)
#           ring.release(0)
        slot_index = ring.acquire_next_slot()
#       slot_index = ring.acquire_next_slot()
        ring.release(slot_index)
#       ring.release(slot_index)
        with pytest.raises(ValueError):
#       with pytest.raises(ValueError):
            ring.release(slot_index)
#           ring.release(slot_index)

    def test_wait_until_idle(self):
#   def test_wait_until_idle(self):
        ring = FrameBufferRing(instance_count=1, size=3)
#       ring = FrameBufferRing(instance_count=1, size=3)
        slot_index = ring.acquire_next_slot()
#       slot_index = ring.acquire_next_slot()
        timer = threading.Timer(0.05, ring.release, args=(slot_index,))
#       timer = threading.Timer(0.05, ring.release, args=(slot_index,))
        timer.start()
#       timer.start()
        ring.wait_until_idle()
#       ring.wait_until_idle()
        assert ring.in_flight == 0
#       assert ring.in_flight == 0

    @pytest.mark.parametrize("instance_count, size", [(1, 0), (0, 3)])
#   @pytest.mark.parametrize("instance_count, size", [(1, 0), (0, 3)])
    def test_invalid_configuration(self, instance_count, size):
#   def test_invalid_configuration(self, instance_count, size):
        with pytest.raises(ConfigurationError):
#       with pytest.raises(ConfigurationError):
            FrameBufferRing(instance_count=instance_count, size=size)
#           FrameBufferRing(instance_count=instance_count, size=size)
