# ╔══════════════════════════════════════════════════════════════════════╗
# ║  PatchConv — Dense Convolution Primitives                            ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Exception hierarchy for PatchConv."""


class PatchConvError(Exception):
    """Base exception for all package-specific failures."""


class ShapeError(PatchConvError, ValueError):
    """Raised when a tensor rank or window/stride/dilation parameter is invalid,
    or when the resolved output geometry would be empty."""


class ShapeMismatch(PatchConvError, ValueError):
    """Raised when two operands disagree on a shared extent (channels)."""


class ConfigurationError(PatchConvError):
    """Raised when runtime configuration validation fails."""
