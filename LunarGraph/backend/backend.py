"""
Backend runtime selector for LunarGraph.

- Single import point for array backend (`xp`) and core runtime flags.
- Toggle CPU (NumPy) / GPU (CuPy) for graph evaluation and parameter storage.
- Minimal API surface with global-access pattern:
    >>> import LunarGraph.backend.backend as backend
    >>> xp = backend.xp
    >>> DTYPE = backend.DTYPE

This module is stateful so userland code can switch device or precision
once and have every later graph pick it up.
"""

from __future__ import annotations

import logging
import numpy as _np
from LunarGraph.backend.config import CONFIG

logger = logging.getLogger(__name__)


# ---------------------------
# Optional GPU backend (CuPy)
# ---------------------------
try:
    import cupy as _cp
    _CUPY_AVAILABLE = True
except ImportError:
    _cp = None
    _CUPY_AVAILABLE = False


# ---------------------------
# Public runtime state (globals)
# ---------------------------
xp = _np                       # current array module (NumPy or CuPy)
USING = "cpu"                  # "cpu" | "gpu"
SEED = int(CONFIG.get("seed", 997))

DTYPE = _np.float32            # dtype of parameters and evaluated node values


# ===========================
# Introspection / utilities
# ===========================
def gpu_available() -> bool:
    """Return True if CuPy is importable."""
    return _CUPY_AVAILABLE


def is_gpu() -> bool:
    """Return True if current backend is GPU (CuPy)."""
    return USING == "gpu"


def device_name() -> str:
    """Human-readable device name."""
    if is_gpu() and _cp is not None:
        dev_id = _cp.cuda.Device().id
        props = _cp.cuda.runtime.getDeviceProperties(dev_id)
        name = props.get("name", b"GPU").decode(errors="ignore")
        return f"GPU:{dev_id} ({name})"
    return "CPU (NumPy)"


def get_device() -> str:
    """Return current device string: 'cpu' or 'gpu'."""
    return USING


# ===========================
# Backend switching
# ===========================
def _set_globals_for_numpy():
    global xp, USING, DTYPE
    xp = _np
    USING = "cpu"
    DTYPE = _np.float64 if DTYPE == _np.float64 else _np.float32


def _set_globals_for_cupy():
    global xp, USING, DTYPE
    xp = _cp
    USING = "gpu"
    # mirror dtype to CuPy (types are compatible across backends)
    DTYPE = _cp.float64 if DTYPE == _np.float64 else _cp.float32


def use_gpu():
    """
    Switch backend to GPU (CuPy).
    Raises ImportError if CuPy is not available.
    """
    if not _CUPY_AVAILABLE:
        raise ImportError("CuPy is not installed. Run `pip install cupy` to use GPU.")
    _set_globals_for_cupy()
    _cp.random.seed(SEED)
    logger.info("Using %s", device_name())


def use_cpu():
    """Switch backend to CPU (NumPy)."""
    _set_globals_for_numpy()
    _np.random.seed(SEED)
    logger.info("Using %s", device_name())


def set_seed(seed: int):
    """Set RNG seed for both NumPy and CuPy (if present)."""
    global SEED
    SEED = int(seed)
    _np.random.seed(SEED)
    if _CUPY_AVAILABLE:
        _cp.random.seed(SEED)


def set_dtype(dtype: str = "float32"):
    """Set the dtype used for parameters and node values to float32 or float64."""
    global DTYPE
    if dtype not in ("float32", "float64"):
        raise ValueError("dtype must be 'float32' or 'float64'")
    if is_gpu() and _cp is not None:
        DTYPE = _cp.float32 if dtype == "float32" else _cp.float64
    else:
        DTYPE = _np.float32 if dtype == "float32" else _np.float64


# Device auto-select from config
def _auto_select_device():
    device = str(CONFIG.get("device", "cpu")).lower()
    if device == "gpu" and _CUPY_AVAILABLE:
        use_gpu()
    else:
        if device == "gpu":
            logger.warning("GPU requested but CuPy is not installed; falling back to CPU.")
        use_cpu()


# Initialize from config
set_dtype(CONFIG.get("dtype", "float32"))
_auto_select_device()
