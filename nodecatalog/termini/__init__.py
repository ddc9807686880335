from .base import NodeTerminus
from .plain import PlainTerminus
from .memory import MemoryTerminus
from .factory import create_terminus

__all__ = ["NodeTerminus", "PlainTerminus", "MemoryTerminus", "create_terminus"]
