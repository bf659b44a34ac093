# ╔══════════════════════════════════════════════════════════════════════╗
# ║  PatchConv — Dense Convolution Primitives                            ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Patch extraction: sliding windows gathered into a dense strided view.

Convolution and pooling both reduce over the same patch tensor, laid out
``(C, kH, kW, Ho, Wo, B)`` so that channel and batch stay on their own
axes and the leading ``(C, kH, kW)`` block flattens into the contraction
rows.
"""
from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ..errors import ShapeError
from ..tensor import Tensor, _ensure_tensor
from .geometry import Geometry2D, Padding, resolve_geometry


def gather_patches(x: np.ndarray, geom: Geometry2D,
                   padding_value=0) -> np.ndarray:
    """Read-only view ``(C, kH, kW, Ho, Wo, B)`` of *x* ``(C, H, W, B)``.

    ``out[c, kr, kc, oh, ow, b] == x[c, oh*sH + kr*dH - padTop,
    ow*sW + kc*dW - padLeft, b]``, or *padding_value* inside the padding.
    Only a padded input is copied; otherwise the view aliases *x*.
    """
    (top, bottom), (left, right) = geom.pads
    if geom.is_padded:
        x = np.pad(x, ((0, 0), (top, bottom), (left, right), (0, 0)),
                   mode='constant', constant_values=padding_value)

    eh, ew = geom.effective_window
    sh, sw = geom.stride
    dh, dw = geom.dilation
    oh, ow = geom.output

    # (C, H', W', B, eH, eW)
    windows = sliding_window_view(x, (eh, ew), axis=(1, 2))
    windows = windows[:, :(oh - 1) * sh + 1:sh, :(ow - 1) * sw + 1:sw, :, ::dh, ::dw]
    return windows.transpose(0, 4, 5, 1, 2, 3)


def patch_matrix(patches: np.ndarray) -> np.ndarray:
    """Flatten a ``(C, kH, kW, Ho, Wo, B)`` patch view to ``(C*kH*kW, Ho*Wo*B)``."""
    c, kh, kw, oh, ow, b = patches.shape
    return patches.reshape(c * kh * kw, oh * ow * b)


def extract_patches(input, window, stride=1, dilation=1,
                    padding: Padding | str = Padding.VALID,
                    padding_value=0) -> Tensor:
    """Extract sliding windows from a ``(C, H, W, B)`` tensor.

    Args:
        input: rank-4 activation tensor.
        window: ``(kH, kW)`` or an int for a square window.
        stride: ``(sH, sW)`` or an int.
        dilation: ``(dH, dW)`` or an int.
        padding: ``Padding.VALID`` / ``Padding.SAME`` or ``"valid"`` / ``"same"``.
        padding_value: value read from the implicit SAME padding.

    Returns:
        Tensor of shape ``(C, kH, kW, Ho, Wo, B)``.
    """
    x = _ensure_tensor(input)
    if x.ndim != 4:
        raise ShapeError(f"extract_patches expects a (C, H, W, B) tensor, got {x.ndim}-D")
    geom = resolve_geometry(x.shape[1:3], window, stride, dilation, padding)
    return Tensor._wrap(gather_patches(x._data, geom, padding_value))
