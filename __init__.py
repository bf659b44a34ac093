# ╔══════════════════════════════════════════════════════════════════════╗
# ║  PatchConv — Dense Convolution Primitives                            ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""
PatchConv — dense-tensor primitives for feed-forward convolutional inference.

2D convolution via patch extraction and a single matrix contraction,
channel-wise bias addition, ReLU, and 2D max pooling, all over NumPy.

Usage::

    import patchconv as pc
    import patchconv.nn.functional as F

    image = pc.randn(3, 8, 8, 1)          # (C, H, W, B)
    kernels = pc.randn(16, 3, 3, 3)       # (Co, Ci, kH, kW)
    out = F.conv2d(image, kernels, padding='same')
    out = F.relu(F.add_bias(out, pc.zeros(16)))
    out = F.max_pool2d(out, (2, 2))
"""
from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Pictofeed, LLC"

# ── Core tensor class & factory functions ──
from .tensor import (
    Tensor,
    tensor,
    zeros,
    ones,
    randn,
    manual_seed,
)

# ── Dtype constants ──
from .dtype import (
    dtype,
    float16, float32, float64, half,
    int8, int16, int32, int64, long,
    uint8,
)

# ── Errors ──
from .errors import (
    PatchConvError,
    ShapeError,
    ShapeMismatch,
    ConfigurationError,
)

# ── Runtime configuration & logging ──
from .config import RuntimeConfig, load_runtime_config, get_config, set_config
from .log import configure_logging

# ── Sub-packages ──
from . import nn
from .nn import Padding, compute_output_extent

__all__ = [
    "__version__",
    "__author__",

    # Tensor
    'Tensor', 'tensor', 'zeros', 'ones', 'randn', 'manual_seed',
    # Dtypes
    'dtype', 'float16', 'float32', 'float64', 'half',
    'int8', 'int16', 'int32', 'int64', 'long', 'uint8',
    # Errors
    'PatchConvError', 'ShapeError', 'ShapeMismatch', 'ConfigurationError',
    # Config
    'RuntimeConfig', 'load_runtime_config', 'get_config', 'set_config',
    'configure_logging',
    # Geometry
    'Padding', 'compute_output_extent',
    # Sub-packages
    'nn',
]

# Resolve PATCHCONV_* settings once, so logging is in place before any op runs.
get_config()
