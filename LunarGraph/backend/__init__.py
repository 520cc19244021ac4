from .config import CONFIG
from .config import load_config

__all__ = [
    "CONFIG",
    "load_config"
]
