# ╔══════════════════════════════════════════════════════════════════════╗
# ║  PatchConv — Dense Convolution Primitives                            ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""patchconv.nn — sliding-window geometry, patch extraction and functional ops."""
from __future__ import annotations

from .geometry import (
    Padding,
    VALID,
    SAME,
    Geometry2D,
    compute_output_extent,
    effective_extent,
    resolve_geometry,
    same_padding,
)
from .patches import extract_patches

# Functional API (accessible as nn.functional or F)
from . import functional

__all__ = [
    'Padding', 'VALID', 'SAME',
    'Geometry2D', 'resolve_geometry',
    'compute_output_extent', 'effective_extent', 'same_padding',
    'extract_patches',
    'functional',
]
