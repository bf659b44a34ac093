# ╔══════════════════════════════════════════════════════════════════════╗
# ║  PatchConv — Dense Convolution Primitives                            ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Scalar types a PatchConv tensor can hold."""
from __future__ import annotations

import enum
import numpy as np


class dtype(enum.Enum):
    """PatchConv scalar types, one per supported NumPy dtype."""
    float16 = "float16"
    float32 = "float32"
    float64 = "float64"
    int8 = "int8"
    int16 = "int16"
    int32 = "int32"
    int64 = "int64"
    uint8 = "uint8"

    def to_numpy(self) -> np.dtype:
        """Convert to numpy dtype."""
        return np.dtype(self.value)

    @property
    def is_floating_point(self) -> bool:
        return np.issubdtype(self.to_numpy(), np.floating)

    @staticmethod
    def from_numpy(np_dtype: np.dtype) -> 'dtype':
        """Convert numpy dtype to patchconv dtype.

        Raises ``TypeError`` for dtypes with no counterpart (bool, complex,
        object, bfloat-like extension types).
        """
        try:
            return dtype(np.dtype(np_dtype).name)
        except ValueError:
            raise TypeError(f"Unsupported tensor dtype: {np.dtype(np_dtype)}") from None

    def __repr__(self) -> str:
        return f"patchconv.{self.name}"


# Convenience aliases (patchconv.float32, patchconv.long, etc.)
float16 = dtype.float16
float32 = dtype.float32
float64 = dtype.float64
half = dtype.float16
int8 = dtype.int8
int16 = dtype.int16
int32 = dtype.int32
int64 = dtype.int64
long = dtype.int64
uint8 = dtype.uint8
