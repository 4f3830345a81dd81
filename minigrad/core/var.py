# minigrad/core/var.py
from __future__ import annotations
import numbers
from typing import Optional, Tuple

import numpy as np

from ..errors import PreconditionError
from . import tape as tape_mod  # module access keeps use_tape() swaps visible
from .node import Node, Op


class Variable:
    """
    Handle to one scalar node of the computation graph.

    The node itself (value, grad, operands) lives on a Tape; a Variable is
    just ``(tape, id)`` and is cheap to copy around. Two handles are equal
    exactly when they point at the same node.

    Attributes
    ----------
    tape : Tape
        Arena that owns the node.
    id : int
        Identity of the node on its tape (monotonically increasing).
    """

    # make numpy scalars defer to our reflected operators (np.float64(2) * x)
    __array_ufunc__ = None

    def __init__(self, value, *, name: Optional[str] = None, tape=None):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError(
                f"Variable only accepts real numbers (int, float, numpy scalar), "
                f"but got {type(value)}"
            )
        self.tape = tape if tape is not None else tape_mod.global_tape
        self.id = self.tape.push_node(Op.LEAF, value, name=name)

    @classmethod
    def _wrap(cls, tape, node_id: int) -> Variable:
        """Handle for a node that is already on `tape`."""
        out = cls.__new__(cls)
        out.tape = tape
        out.id = node_id
        return out

    @property
    def node(self) -> Node:
        return self.tape.node(self.id)

    @property
    def value(self) -> float:
        return self.node.value

    @property
    def grad(self) -> float:
        return self.node.grad

    @property
    def op(self) -> Op:
        return self.node.op

    @property
    def name(self) -> Optional[str]:
        return self.node.name

    @property
    def children(self) -> Tuple[Variable, ...]:
        return tuple(Variable._wrap(self.tape, c) for c in self.node.children)

    @property
    def is_leaf(self) -> bool:
        return self.node.is_leaf

    def item(self) -> float:
        return float(self.value)

    def __repr__(self):
        node = self.node
        return (f"Variable(value={float(node.value)}, grad={float(node.grad)}, "
                f"op={node.op.value}, name={node.name!r})")

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return NotImplemented
        return self.tape is other.tape and self.id == other.id

    def __hash__(self):
        return hash((id(self.tape), self.id))

    # ---------------- parameter utilities ---------------- #
    def zero_grad(self):
        """Reset the gradient of a leaf. Interior nodes are rejected."""
        node = self.node
        if not node.is_leaf:
            raise PreconditionError(
                f"zero_grad is only valid on leaf nodes, got a '{node.op.value}' node"
            )
        node.grad = 0.0

    def step(self, learning_rate: float):
        """Gradient-descent update in place: value -= learning_rate * grad."""
        node = self.node
        node.value = np.float64(node.value - learning_rate * node.grad)

    def backward(self):
        from .engine import backward
        backward(self)

    # ---------------- operator overloading ---------------- #
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, exponent):
        from ..ops.arithmetic import pow
        return pow(self, exponent)

    def pow(self, exponent):
        return self ** exponent

    # ---------------- elementwise functions ---------------- #
    def sin(self):
        from ..ops.transcendental import sin
        return sin(self)

    def cos(self):
        from ..ops.transcendental import cos
        return cos(self)

    def exp(self):
        from ..ops.transcendental import exp
        return exp(self)

    def relu(self):
        from ..ops.activation import relu
        return relu(self)

    def sigmoid(self):
        from ..ops.activation import sigmoid
        return sigmoid(self)

    def silu(self):
        from ..ops.activation import silu
        return silu(self)
