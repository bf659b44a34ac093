# ╔══════════════════════════════════════════════════════════════════════╗
# ║  PatchConv — Dense Convolution Primitives                            ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""nn.functional — stateless convolution, pooling, bias and activation ops (F.*).

Activations are ``(C, H, W, B)``; kernels are ``(Co, Ci, kH, kW)``.
Every function validates all shapes before touching any data, never
modifies its inputs, and returns a freshly allocated :class:`Tensor`.
"""
from __future__ import annotations

import logging

import numpy as np

from ..errors import ShapeError, ShapeMismatch
from ..tensor import Tensor, _ensure_tensor
from .geometry import Padding, compute_output_extent, resolve_geometry
from .patches import extract_patches, gather_patches, patch_matrix

logger = logging.getLogger(__name__)

__all__ = [
    'conv2d', 'max_pool2d', 'add_bias', 'relu',
    'extract_patches', 'compute_output_extent',
]


def _expect_rank(t: Tensor, rank: int, name: str) -> None:
    if t.ndim != rank:
        raise ShapeError(f"{name} must be rank {rank}, got shape {t.shape}")


def _lowest(t: Tensor):
    """Identity element of ``max`` for the dtype of *t*."""
    if t.dtype.is_floating_point:
        return -np.inf
    return np.iinfo(t._data.dtype).min


# ──────────────────────── Convolution ─────────────────────────────────

def conv2d(input, kernels, stride=1, dilation=1,
           padding: Padding | str = Padding.VALID) -> Tensor:
    """2D cross-correlation via patch extraction and one matrix product.

    input:   (Ci, H, W, B)
    kernels: (Co, Ci, kH, kW)
    returns: (Co, Ho, Wo, B)

    The kernel is not flipped. Accumulation happens in the NumPy result
    dtype of the two operands; float sums may differ from a naive loop in
    the last bits because the BLAS summation order is unspecified.
    """
    x = _ensure_tensor(input)
    w = _ensure_tensor(kernels)
    _expect_rank(x, 4, 'conv2d input')
    _expect_rank(w, 4, 'conv2d kernels')

    c_in = x.shape[0]
    c_out, k_in, kh, kw = w.shape
    if k_in != c_in:
        raise ShapeMismatch(
            f"conv2d kernels expect {k_in} input channels, input has {c_in}")
    geom = resolve_geometry(x.shape[1:3], (kh, kw), stride, dilation, padding)
    ho, wo = geom.output
    batch = x.shape[3]

    cols = patch_matrix(gather_patches(x._data, geom))
    w_2d = w._data.reshape(c_out, k_in * kh * kw)
    out = np.matmul(w_2d, cols).reshape(c_out, ho, wo, batch)

    logger.debug("conv2d: %s * %s -> %s", x.shape, w.shape, out.shape)
    return Tensor._wrap(out)


# ──────────────────────── Pooling ─────────────────────────────────────

def max_pool2d(input, window, stride=None, dilation=1,
               padding: Padding | str = Padding.VALID) -> Tensor:
    """2D max pooling, per channel and per batch item.

    input:   (C, H, W, B)
    returns: (C, Ho, Wo, B)

    ``stride=None`` (or a 0 component) uses the window extent. SAME
    padding pads with the dtype's lowest value, so a padded position never
    beats a real element.
    """
    x = _ensure_tensor(input)
    _expect_rank(x, 4, 'max_pool2d input')
    geom = resolve_geometry(x.shape[1:3], window, stride, dilation, padding,
                            stride_defaults_to_window=True)

    patches = gather_patches(x._data, geom, padding_value=_lowest(x))
    # (C, kH, kW, Ho, Wo, B) -> (C, Ho, Wo, B)
    out = patches.max(axis=(1, 2))

    logger.debug("max_pool2d: %s window=%s stride=%s -> %s",
                 x.shape, geom.window, geom.stride, out.shape)
    return Tensor._wrap(out)


# ──────────────────────── Bias & activation ───────────────────────────

def add_bias(input, bias) -> Tensor:
    """Add ``bias[c]`` to every element of channel ``c`` (the leading axis)."""
    x = _ensure_tensor(input)
    b = _ensure_tensor(bias)
    _expect_rank(b, 1, 'bias')
    if x.ndim < 1:
        raise ShapeError("add_bias input needs a leading channel axis")
    if b.shape[0] != x.shape[0]:
        raise ShapeMismatch(
            f"bias has {b.shape[0]} entries, input has {x.shape[0]} channels")

    out = np.empty(x.shape, dtype=np.result_type(x._data, b._data))
    np.add(x._data, b._data.reshape((b.shape[0],) + (1,) * (x.ndim - 1)), out=out)
    return Tensor._wrap(out)


def relu(input) -> Tensor:
    """Elementwise ``max(0, x)`` for a tensor of any rank.

    Uses ``numpy.maximum``, which propagates NaN: ``relu(nan)`` is ``nan``.
    """
    x = _ensure_tensor(input)
    return Tensor._wrap(np.maximum(x._data, x._data.dtype.type(0)))
