# minigrad/ops/transcendental.py
import numpy as np

from ..core.node import Op
from ..core.var import Variable
from .arithmetic import _tape_of


def _unary(x, op: Op, f):
    tape = _tape_of(x)
    return Variable._wrap(tape, tape.push_node(op, f(x.value), (x.id,)))


def sin(x):
    return _unary(x, Op.SIN, np.sin)


def cos(x):
    return _unary(x, Op.COS, np.cos)


def exp(x):
    return _unary(x, Op.EXP, np.exp)
