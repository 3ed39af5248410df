class ConfigurationError(RuntimeError):
    """
    Raised while building a scene when its camera, projection or frame ring is unusable.
#   Raised while building a scene when its camera, projection or frame ring is unusable.
    Picking and rendering are meaningless on top of such a scene, so it is never degraded silently.
#   Picking and rendering are meaningless on top of such a scene, so it is never degraded silently.
    """
    pass
#   pass

class SingularMatrixError(ConfigurationError):
    """
    Raised when a matrix that must be inverted (camera view, projection, viewport) is singular, or too ill-conditioned for its inverse to mean anything.
#   Raised when a matrix that must be inverted (camera view, projection, viewport) is singular, or too ill-conditioned for its inverse to mean anything.
    """
    def __init__(self, determinant: float) -> None:
#   def __init__(self, determinant: float) -> None:
        super().__init__(f"Matrix is not invertible (determinant={determinant!r})")
#       super().__init__(f"Matrix is not invertible (determinant={determinant!r})")
        self.determinant: float = determinant
#       self.determinant: float = determinant
        pass
#       pass
