# minigrad/core/engine.py
from __future__ import annotations
import logging
from typing import List, Optional

import numpy as np

from . import tape as tape_mod
from .node import Node, Op
from .tape import Tape
from .var import Variable

logger = logging.getLogger(__name__)


def topological_order(root: Variable) -> List[Variable]:
    """
    Order every node reachable from `root` so that each node comes after all
    of its children (DFS post-order). Reversed, this is the backward order.

    Uses an explicit stack instead of recursion, so graph depth is bounded by
    memory rather than by the interpreter's recursion limit. Nodes are marked
    by id: a node shared by several parents is emitted once.
    """
    tape = root.tape
    order: List[int] = []
    visited = {root.id}
    # (node id, index of the next child to visit)
    stack = [(root.id, 0)]
    while stack:
        node_id, child_idx = stack[-1]
        children = tape.node(node_id).children
        if child_idx < len(children):
            stack[-1] = (node_id, child_idx + 1)
            child = children[child_idx]
            if child not in visited:
                visited.add(child)
                stack.append((child, 0))
        else:
            stack.pop()
            order.append(node_id)
    return [Variable._wrap(tape, i) for i in order]


def propagate(tape: Tape, node: Node):
    """
    Apply the local derivative rule of `node`: add node.grad * (∂node/∂child)
    into every child's grad, using the children's current values.

    Notation: g = node.grad, x (and y) = child values.
    """
    op = node.op
    g = node.grad

    # ---------- Leaf: nothing to distribute ----------
    if op is Op.LEAF:
        return

    x = tape.node(node.children[0])

    # ---------- Binary ops ----------
    if op is Op.ADD:
        y = tape.node(node.children[1])
        x.grad += g
        y.grad += g
        return

    if op is Op.MUL:
        # ∂(xy)/∂x = y, ∂(xy)/∂y = x; read both values before either update (x*x)
        y = tape.node(node.children[1])
        xv, yv = x.value, y.value
        x.grad += g * yv
        y.grad += g * xv
        return

    if op is Op.DIV:
        # ∂(x/y)/∂x = 1/y, ∂(x/y)/∂y = -x/y^2
        y = tape.node(node.children[1])
        xv, yv = x.value, y.value
        x.grad += g / yv
        y.grad += g * (-xv / (yv * yv))
        return

    # ---------- Unary ops ----------
    if op is Op.POW:
        p = node.exponent
        x.grad += g * p * np.power(x.value, p - 1.0)
        return

    if op is Op.SIN:
        x.grad += g * np.cos(x.value)
        return

    if op is Op.COS:
        x.grad += -g * np.sin(x.value)
        return

    if op is Op.EXP:
        x.grad += g * np.exp(x.value)
        return

    if op is Op.RELU:
        if x.value > 0:
            x.grad += g
        return

    raise ValueError(f"no derivative rule for operation {op!r}")


def backward(root: Variable):
    """
    Run a single reverse pass from `root`.

    Seeds root.grad = 1.0, then visits the reachable nodes parents-first and
    lets each one push its gradient into its children:
        child.grad += node.grad * (∂node/∂child)

    Existing gradients are not cleared: a second call without zeroing
    accumulates onto the previous results.
    """
    tape = root.tape
    tape.node(root.id).grad = 1.0
    order = topological_order(root)
    logger.debug("backward from node %d: %d reachable nodes", root.id, len(order))
    for v in reversed(order):
        propagate(tape, tape.node(v.id))


def zero_grads(tape: Optional[Tape] = None):
    """
    Set the gradient of every node on the tape (default: the active tape) to
    zero, interior nodes included. Use before re-running backward on a graph.
    """
    tape = tape if tape is not None else tape_mod.global_tape
    for _, node in tape:
        node.grad = 0.0
