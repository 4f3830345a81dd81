"""
Fixed-shape containers of Variables.

Tensor1D is a column vector (R^n) and Tensor2D an r x c matrix. Both are
thin wrappers around numpy object arrays; every operation is expressed per
element through the scalar engine, so gradients flow exactly as they would
for hand-written scalar code.
"""

from __future__ import annotations
import numbers
from typing import Callable, Iterable, Sequence, Tuple

import numpy as np

from .core import tape as tape_mod
from .core.var import Variable
from .errors import GraphError, PreconditionError, ShapeError


def _as_element(x, tape) -> Variable:
    if isinstance(x, Variable):
        return x
    if isinstance(x, bool) or not isinstance(x, numbers.Real):
        raise TypeError(f"tensor elements must be Variables or real numbers, got {type(x)}")
    return Variable(x, tape=tape)


def _resolve_tape(values: Sequence, tape):
    """
    Tape shared by the Variable elements, falling back to `tape` or the active
    tape for all-number inputs. Elements from different tapes are rejected.
    """
    for v in values:
        if isinstance(v, Variable):
            if tape is None:
                tape = v.tape
            elif v.tape is not tape:
                raise GraphError("tensor elements must all be recorded on the same tape")
    return tape if tape is not None else tape_mod.global_tape


def _object_array(items: Sequence, shape: Tuple[int, ...]) -> np.ndarray:
    arr = np.empty(len(items), dtype=object)
    for i, item in enumerate(items):
        arr[i] = item
    return arr.reshape(shape)


class _Container:
    """Shared element-wise machinery; subclasses fix the number of dimensions."""

    data: np.ndarray

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.data.shape

    @property
    def size(self) -> int:
        return self.data.size

    @property
    def tape(self):
        return self.data.flat[0].tape if self.size else tape_mod.global_tape

    def _like(self, items: Sequence, shape=None):
        out = self.__class__.__new__(self.__class__)
        out.data = _object_array(items, self.shape if shape is None else shape)
        return out

    def __iter__(self):
        return iter(self.data)

    def __len__(self):
        return self.shape[0]

    def __getitem__(self, index):
        return self.data[index]

    def __repr__(self):
        return f"{self.__class__.__name__}({self.values().tolist()})"

    # ---------------- element-wise ---------------- #
    def _zip(self, other, fn: Callable):
        if isinstance(other, _Container):
            if other.shape != self.shape:
                raise ShapeError(f"shape mismatch: {self.shape} vs {other.shape}")
            items = [fn(a, b) for a, b in zip(self.data.flat, other.data.flat)]
        else:
            items = [fn(a, other) for a in self.data.flat]
        return self._like(items)

    def apply(self, fn: Callable[[Variable], Variable]):
        """Apply a scalar function to every element."""
        return self._like([fn(a) for a in self.data.flat])

    def __add__(self, other):
        return self._zip(other, lambda a, b: a + b)

    def __radd__(self, other):
        return self._zip(other, lambda a, b: b + a)

    def __sub__(self, other):
        return self._zip(other, lambda a, b: a - b)

    def __rsub__(self, other):
        return self._zip(other, lambda a, b: b - a)

    def __mul__(self, other):
        return self._zip(other, lambda a, b: a * b)

    def __rmul__(self, other):
        return self._zip(other, lambda a, b: b * a)

    def __truediv__(self, other):
        return self._zip(other, lambda a, b: a / b)

    def __neg__(self):
        return self.apply(lambda a: -a)

    def sin(self):
        return self.apply(lambda a: a.sin())

    def cos(self):
        return self.apply(lambda a: a.cos())

    def exp(self):
        return self.apply(lambda a: a.exp())

    def relu(self):
        return self.apply(lambda a: a.relu())

    def sigmoid(self):
        return self.apply(lambda a: a.sigmoid())

    def silu(self):
        return self.apply(lambda a: a.silu())

    # ---------------- reductions ---------------- #
    def sum(self) -> Variable:
        total = Variable(0.0, tape=self.tape)
        for a in self.data.flat:
            total = total + a
        return total

    def mean(self) -> Variable:
        if self.size == 0:
            raise PreconditionError("mean of an empty tensor")
        return self.sum() / self.size

    # ---------------- scalar access ---------------- #
    def cast(self) -> Variable:
        """The single element of a one-element container."""
        if self.size != 1:
            raise PreconditionError(f"cannot cast a tensor of shape {self.shape} to a scalar")
        return self.data.flat[0]

    def backward(self):
        self.cast().backward()

    def values(self) -> np.ndarray:
        return np.array([a.value for a in self.data.flat], dtype=np.float64).reshape(self.shape)

    def grads(self) -> np.ndarray:
        return np.array([a.grad for a in self.data.flat], dtype=np.float64).reshape(self.shape)


class Tensor1D(_Container):
    """Column vector of n Variables."""

    def __init__(self, values: Iterable, *, tape=None):
        values = list(values)
        tape = _resolve_tape(values, tape)
        items = [_as_element(v, tape) for v in values]
        self.data = _object_array(items, (len(items),))

    @classmethod
    def zeros(cls, n: int, *, tape=None) -> Tensor1D:
        return cls([0.0] * n, tape=tape)

    def softmax(self) -> Tensor1D:
        """
        exp(x_i) / sum_j exp(x_j). The largest value is subtracted first as a
        plain constant, which leaves both the result and its gradient unchanged.
        """
        if self.size == 0:
            raise PreconditionError("softmax of an empty tensor")
        shift = float(max(a.value for a in self.data))
        exps = (self - shift).exp()
        total = exps.sum()
        return exps / total

    def t(self) -> Tensor2D:
        """Transpose to a 1 x n row matrix sharing the same elements."""
        return Tensor2D([list(self.data)])

    def dot(self, other: Tensor1D) -> Variable:
        if not isinstance(other, Tensor1D) or other.shape != self.shape:
            raise ShapeError(f"dot needs two vectors of shape {self.shape}")
        return (self * other).sum()


class Tensor2D(_Container):
    """r x c matrix of Variables."""

    def __init__(self, rows: Iterable[Iterable], *, tape=None):
        rows = [list(row) for row in rows]
        tape = _resolve_tape([v for row in rows for v in row], tape)
        rows = [[_as_element(v, tape) for v in row] for row in rows]
        n_cols = len(rows[0]) if rows else 0
        if any(len(row) != n_cols for row in rows):
            raise ShapeError("all rows of a Tensor2D must have the same length")
        self.data = _object_array([v for row in rows for v in row], (len(rows), n_cols))

    @classmethod
    def zeros(cls, n_rows: int, n_cols: int, *, tape=None) -> Tensor2D:
        return cls([[0.0] * n_cols for _ in range(n_rows)], tape=tape)

    def t(self) -> Tensor2D:
        return self._like(list(self.data.T.flat), shape=self.shape[::-1])

    def __matmul__(self, other):
        n_rows, n_inner = self.shape
        if isinstance(other, Tensor1D):
            if other.shape[0] != n_inner:
                raise ShapeError(f"cannot multiply {self.shape} matrix by vector of shape {other.shape}")
            out = []
            for i in range(n_rows):
                c = Variable(0.0, tape=self.tape)
                for k in range(n_inner):
                    c = c + self.data[i, k] * other.data[k]
                out.append(c)
            return other._like(out, shape=(n_rows,))
        if isinstance(other, Tensor2D):
            if other.shape[0] != n_inner:
                raise ShapeError(f"cannot multiply {self.shape} matrix by {other.shape} matrix")
            n_cols = other.shape[1]
            out = []
            for i in range(n_rows):
                for j in range(n_cols):
                    c = Variable(0.0, tape=self.tape)
                    for k in range(n_inner):
                        c = c + self.data[i, k] * other.data[k, j]
                    out.append(c)
            return self._like(out, shape=(n_rows, n_cols))
        return NotImplemented
