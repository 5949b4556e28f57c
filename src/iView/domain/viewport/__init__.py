from .camera import Camera, PanDirection, PanSpeed
from .viewport import Viewport, ViewMode

__all__ = ["Camera", "PanDirection", "PanSpeed", "ViewMode", "Viewport"]
