# ╔══════════════════════════════════════════════════════════════════════╗
# ║  PatchConv — Dense Convolution Primitives                            ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Dense, immutable Tensor backed by a single NumPy array."""
from __future__ import annotations

import numpy as np
from typing import Any

from .config import get_config
from .dtype import dtype as Dtype


class Tensor:
    """Dense N-dimensional tensor.

    Wraps one :class:`numpy.ndarray` that is flagged read-only, so the
    extents and element values of a tensor never change once it exists.
    Reshapes and indexing return views over the same buffer; every
    arithmetic result is a freshly allocated tensor.

    Axis conventions used by :mod:`patchconv.nn.functional`:

    * activations: ``(C, H, W, B)``
    * kernels:     ``(Co, Ci, kH, kW)``
    * bias:        ``(C,)``
    """

    __slots__ = ('_data',)

    # ------------------------------------------------------------------ #
    #  Construction                                                      #
    # ------------------------------------------------------------------ #

    def __init__(self, data: Any, dtype: Dtype | np.dtype | str | None = None):
        if isinstance(data, Tensor):
            data = data._data
        arr = np.array(data, dtype=_resolve_dtype(dtype), copy=True)
        Dtype.from_numpy(arr.dtype)
        arr.flags.writeable = False
        self._data: np.ndarray = arr

    @staticmethod
    def _wrap(data: np.ndarray) -> 'Tensor':
        """Adopt *data* without copying; the caller must not keep writing to it."""
        t = Tensor.__new__(Tensor)
        view = data.view()
        view.flags.writeable = False
        t._data = view
        return t

    # ------------------------------------------------------------------ #
    #  Properties                                                        #
    # ------------------------------------------------------------------ #

    @property
    def shape(self) -> tuple:
        return self._data.shape

    @property
    def ndim(self) -> int:
        return self._data.ndim

    @property
    def dtype(self) -> Dtype:
        return Dtype.from_numpy(self._data.dtype)

    def size(self, dim: int | None = None):
        s = self.shape
        if dim is not None:
            return s[dim]
        return s

    def dim(self) -> int:
        return self.ndim

    def numel(self) -> int:
        return self._data.size

    def item(self) -> float | int:
        return self._data.item()

    def __len__(self) -> int:
        return self.shape[0]

    def __repr__(self) -> str:
        return "tensor(" + repr(self._data) + ")"

    # ------------------------------------------------------------------ #
    #  Views and conversions                                             #
    # ------------------------------------------------------------------ #

    def reshape(self, *shape) -> 'Tensor':
        if len(shape) == 1 and isinstance(shape[0], (tuple, list)):
            shape = tuple(shape[0])
        return Tensor._wrap(self._data.reshape(shape))

    def view(self, *shape) -> 'Tensor':
        return self.reshape(*shape)

    def __getitem__(self, key) -> 'Tensor':
        return Tensor._wrap(np.asarray(self._data[key]))

    def numpy(self) -> np.ndarray:
        """Return a writable copy of the backing array."""
        return self._data.copy()

    def tolist(self):
        return self._data.tolist()

    def __array__(self, dtype=None, copy=None):
        if dtype is not None and np.dtype(dtype) != self._data.dtype:
            if copy is False:
                raise ValueError(
                    f"cannot view a {self._data.dtype} tensor as {np.dtype(dtype)} without copying")
            return self._data.astype(dtype)
        if copy:
            return self._data.copy()
        return self._data

    def __neg__(self) -> 'Tensor':
        return Tensor._wrap(np.negative(self._data))


# ====================================================================
# Module-level factory functions
# ====================================================================

def _resolve_dtype(dtype) -> np.dtype | None:
    if dtype is None:
        return None
    if isinstance(dtype, Dtype):
        return dtype.to_numpy()
    return np.dtype(dtype)


def _default_dtype(dtype) -> np.dtype:
    return _resolve_dtype(dtype) or np.dtype(get_config().default_dtype)


def _size_args(size) -> tuple:
    if len(size) == 1 and isinstance(size[0], (tuple, list)):
        return tuple(size[0])
    return size


def tensor(data, dtype=None) -> Tensor:
    return Tensor(data, dtype=dtype)


def zeros(*size, dtype=None) -> Tensor:
    return Tensor._wrap(np.zeros(_size_args(size), dtype=_default_dtype(dtype)))


def ones(*size, dtype=None) -> Tensor:
    return Tensor._wrap(np.ones(_size_args(size), dtype=_default_dtype(dtype)))


def randn(*size, dtype=None) -> Tensor:
    arr = np.asarray(np.random.randn(*_size_args(size))).astype(_default_dtype(dtype))
    return Tensor._wrap(arr)


def manual_seed(seed: int) -> None:
    np.random.seed(seed)


def _ensure_tensor(x) -> Tensor:
    if isinstance(x, Tensor):
        return x
    return Tensor(x)
