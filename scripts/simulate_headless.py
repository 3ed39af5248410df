import sys
import sys
import math
import math
from src.renderer.headless_backend import HeadlessBackend
from src.renderer.headless_backend import HeadlessBackend
from src.scene.simulation import SceneSimulation
from src.scene.simulation import SceneSimulation

def simulate(frame_count: int, instance_count: int, seed: int | None) -> None:
    simulation: SceneSimulation = SceneSimulation.create(instance_count=instance_count, seed=seed)
#   simulation: SceneSimulation = SceneSimulation.create(instance_count=instance_count, seed=seed)
    print(f"Simulating {frame_count} frames of {instance_count} instances (seed={seed})...")
#   print(f"Simulating {frame_count} frames of {instance_count} instances (seed={seed})...")
    print(f"Bounding sphere: {simulation.bounding_sphere}")
#   print(f"Bounding sphere: {simulation.bounding_sphere}")

    delta_time: float = 1.0 / 60.0
#   delta_time: float = 1.0 / 60.0
    with HeadlessBackend() as backend:
#   with HeadlessBackend() as backend:
        for _ in range(frame_count):
#       for _ in range(frame_count):
            simulation.step(delta_time, backend)
#           simulation.step(delta_time, backend)
        backend.drain()
#       backend.drain()

        print(f"[FRAME] produced: {simulation.frame_number} | consumed: {backend.completed_frames} | in flight: {simulation.ring.in_flight}")
#       print(f"[FRAME] produced: {simulation.frame_number} | consumed: {backend.completed_frames} | in flight: {simulation.ring.in_flight}")
        for index, instance in enumerate(simulation.store):
#       for index, instance in enumerate(simulation.store):
            print(f"  [{index}] {instance}")
#           print(f"  [{index}] {instance}")

        # Pick through the centre of the viewport, then at every instance's projected position.
#       # Pick through the centre of the viewport, then at every instance's projected position.
        width, height = simulation.viewport_size
#       width, height = simulation.viewport_size
        print(f"[PICK] centre -> {simulation.pick((width / 2.0, height / 2.0))}")
#       print(f"[PICK] centre -> {simulation.pick((width / 2.0, height / 2.0))}")
        if backend.last_ndc_positions is not None:
#       if backend.last_ndc_positions is not None:
            for index, (x, y, _) in enumerate(backend.last_ndc_positions):
#           for index, (x, y, _) in enumerate(backend.last_ndc_positions):
                if not (math.isfinite(x) and math.isfinite(y)):
#               if not (math.isfinite(x) and math.isfinite(y)):
                    continue
#                   continue
                window_x: float = (x * 0.5 + 0.5) * width
#               window_x: float = (x * 0.5 + 0.5) * width
                window_y: float = (y * 0.5 + 0.5) * height
#               window_y: float = (y * 0.5 + 0.5) * height
                print(f"[PICK] instance {index} at ({window_x:.1f}, {window_y:.1f}) -> {simulation.pick((window_x, window_y))}")
#               print(f"[PICK] instance {index} at ({window_x:.1f}, {window_y:.1f}) -> {simulation.pick((window_x, window_y))}")
    pass
#   pass

if __name__ == "__main__":
    if len(sys.argv) < 2:
#   if len(sys.argv) < 2:
        print("Usage: python -m scripts.simulate_headless <frames> [instances] [seed]")
#       print("Usage: python -m scripts.simulate_headless <frames> [instances] [seed]")
    else:
#   else:
        frames: int = int(sys.argv[1])
#       frames: int = int(sys.argv[1])
        instances: int = int(sys.argv[2]) if len(sys.argv) > 2 else 5
#       instances: int = int(sys.argv[2]) if len(sys.argv) > 2 else 5
        seed: int | None = int(sys.argv[3]) if len(sys.argv) > 3 else None
#       seed: int | None = int(sys.argv[3]) if len(sys.argv) > 3 else None
        simulate(frame_count=frames, instance_count=instances, seed=seed)
#       simulate(frame_count=frames, instance_count=instances, seed=seed)
