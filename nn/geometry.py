# ╔══════════════════════════════════════════════════════════════════════╗
# ║  PatchConv — Dense Convolution Primitives                            ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Output geometry for sliding-window operators.

Every spatial axis is resolved independently with the same rules::

    effective = window + (window - 1) * (dilation - 1)
    VALID:  out = ceil((input - effective + 1) / stride)
    SAME:   out = ceil(input / stride)

SAME padding is split floor-half before, remainder after, so an odd total
puts the extra row/column at the bottom/right edge.
"""
from __future__ import annotations

import enum
import logging
import operator
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..errors import ShapeError

logger = logging.getLogger(__name__)


class Padding(enum.Enum):
    """Implicit padding policy."""
    VALID = "valid"
    SAME = "same"

    @classmethod
    def coerce(cls, value) -> 'Padding':
        """Accept a :class:`Padding` or its case-insensitive name."""
        if isinstance(value, Padding):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ShapeError(f"Unknown padding policy: {value!r}")


VALID = Padding.VALID
SAME = Padding.SAME


def _as_int(value, name: str) -> int:
    if isinstance(value, bool):
        raise ShapeError(f"{name} must be an integer, got {value!r}")
    try:
        return operator.index(value)
    except TypeError:
        raise ShapeError(f"{name} must be an integer, got {value!r}") from None


def _positive(value, name: str) -> int:
    v = _as_int(value, name)
    if v < 1:
        raise ShapeError(f"{name} must be positive, got {v}")
    return v


def _ceil_div(num: int, den: int) -> int:
    return -(-num // den)


def effective_extent(window_extent: int, dilation: int = 1) -> int:
    """Span covered by a dilated window."""
    return window_extent + (window_extent - 1) * (dilation - 1)


def compute_output_extent(input_extent: int, window_extent: int,
                          stride: int = 1, dilation: int = 1,
                          padding: Padding | str = Padding.VALID) -> int:
    """Number of window positions along one spatial axis.

    Raises :class:`ShapeError` for non-positive window/stride/dilation, a
    negative input extent, or when no window position exists.
    """
    padding = Padding.coerce(padding)
    input_extent = _as_int(input_extent, 'input extent')
    window_extent = _positive(window_extent, 'window extent')
    stride = _positive(stride, 'stride')
    dilation = _positive(dilation, 'dilation')
    if input_extent < 0:
        raise ShapeError(f"input extent must be non-negative, got {input_extent}")

    eff = effective_extent(window_extent, dilation)
    if padding is Padding.VALID:
        out = _ceil_div(input_extent - eff + 1, stride)
    else:
        out = _ceil_div(input_extent, stride)
    if out <= 0:
        logger.debug("rejected geometry: input=%d window=%d (effective %d) "
                     "stride=%d padding=%s", input_extent, window_extent,
                     eff, stride, padding.value)
        raise ShapeError(
            f"window {window_extent} (effective {eff}) with stride {stride} "
            f"and {padding.value.upper()} padding leaves no output positions "
            f"for input extent {input_extent}")
    return out


def same_padding(input_extent: int, window_extent: int,
                 stride: int = 1, dilation: int = 1) -> tuple[int, int]:
    """(before, after) implicit padding that realises SAME output geometry."""
    out = compute_output_extent(input_extent, window_extent, stride,
                                dilation, Padding.SAME)
    eff = effective_extent(window_extent, dilation)
    total = max((out - 1) * stride + eff - input_extent, 0)
    before = total // 2
    return before, total - before


def _pair(value, name: str) -> tuple[int, int]:
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if isinstance(value, Sequence) and not isinstance(value, str):
        if len(value) != 2:
            raise ShapeError(f"{name} must have 2 entries (rows, cols), got {len(value)}")
        return _as_int(value[0], name), _as_int(value[1], name)
    v = _as_int(value, name)
    return v, v


@dataclass(frozen=True)
class Geometry2D:
    """Fully resolved window geometry over the (H, W) axes."""
    window: tuple[int, int]
    stride: tuple[int, int]
    dilation: tuple[int, int]
    padding: Padding
    pads: tuple[tuple[int, int], tuple[int, int]]
    output: tuple[int, int]

    @property
    def effective_window(self) -> tuple[int, int]:
        return (effective_extent(self.window[0], self.dilation[0]),
                effective_extent(self.window[1], self.dilation[1]))

    @property
    def is_padded(self) -> bool:
        return any(p for side in self.pads for p in side)


def resolve_geometry(input_hw: Sequence[int], window, stride=1, dilation=1,
                     padding: Padding | str = Padding.VALID, *,
                     stride_defaults_to_window: bool = False) -> Geometry2D:
    """Validate window parameters against an (H, W) input and resolve them.

    ``window``, ``stride`` and ``dilation`` accept an int (square) or a
    ``(rows, cols)`` pair. With ``stride_defaults_to_window`` a ``None``
    stride, or a ``0`` component, takes the matching window extent.
    """
    padding = Padding.coerce(padding)
    win = _pair(window, 'window')
    if stride_defaults_to_window:
        st = win if stride is None else _pair(stride, 'stride')
        st = tuple(w if s == 0 else s for w, s in zip(win, st))
    else:
        st = _pair(stride, 'stride')
    dil = _pair(dilation, 'dilation')

    for name, pair in (('window', win), ('stride', st), ('dilation', dil)):
        for v in pair:
            _positive(v, name)

    output = []
    pads = []
    for extent, k, s, d in zip(input_hw, win, st, dil):
        output.append(compute_output_extent(extent, k, s, d, padding))
        if padding is Padding.SAME:
            pads.append(same_padding(extent, k, s, d))
        else:
            pads.append((0, 0))

    geom = Geometry2D(window=win, stride=st, dilation=dil, padding=padding,
                      pads=(pads[0], pads[1]), output=(output[0], output[1]))
    logger.debug("resolved geometry: input=%s window=%s stride=%s dilation=%s "
                 "padding=%s pads=%s -> output=%s", tuple(input_hw), win, st,
                 dil, padding.value, geom.pads, geom.output)
    return geom
