import moderngl_window as mglw
import moderngl_window as mglw
from src.renderer.instanced_renderer import InstancedSceneRenderer
from src.renderer.instanced_renderer import InstancedSceneRenderer

if __name__ == "__main__":
    mglw.run_window_config(InstancedSceneRenderer)
#   mglw.run_window_config(InstancedSceneRenderer)
    pass
#   pass
