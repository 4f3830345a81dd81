# minigrad/ops/arithmetic.py
import numbers

import numpy as np

from ..core.node import Op
from ..core.var import Variable
from ..errors import DomainError, GraphError


def _tape_of(*xs):
    """Tape shared by the Variable operands; plain numbers don't count."""
    tape = None
    for x in xs:
        if isinstance(x, Variable):
            if tape is None:
                tape = x.tape
            elif x.tape is not tape:
                raise GraphError("cannot combine Variables recorded on different tapes")
    if tape is None:
        raise TypeError("at least one operand must be a Variable")
    return tape


def _as_var(x, tape):
    """Ensure x is a Variable on `tape`; otherwise wrap it as a constant leaf."""
    if isinstance(x, Variable):
        return x
    if isinstance(x, bool) or not isinstance(x, numbers.Real):
        raise TypeError(f"unsupported operand type {type(x)}; expected Variable or real number")
    return Variable(x, tape=tape)


def _binary(x, y, op: Op, f):
    """
    Generic binary primitive:
      - wraps plain numbers as constant leaves on the shared tape
      - computes out.value = f(x.value, y.value)
      - records one node with children (x, y) in that order
    """
    tape = _tape_of(x, y)
    x = _as_var(x, tape)
    y = _as_var(y, tape)
    value = f(x.value, y.value)
    return Variable._wrap(tape, tape.push_node(op, value, (x.id, y.id)))


def add(x, y):
    return _binary(x, y, Op.ADD, lambda a, b: a + b)


def mul(x, y):
    return _binary(x, y, Op.MUL, lambda a, b: a * b)


def div(x, y):
    """
    Quotient x / y. Fails fast with DomainError when y is exactly zero,
    before anything is recorded, instead of producing inf/nan.
    """
    divisor = y.value if isinstance(y, Variable) else y
    if divisor == 0:
        raise DomainError("division by zero")
    return _binary(x, y, Op.DIV, lambda a, b: a / b)


def pow(x, exponent):
    """
    Power x ** p with a fixed real exponent p.

    p is stored on the node and is not itself differentiated. A negative base
    with a fractional exponent yields nan, as ordinary float power does.
    """
    if isinstance(exponent, Variable):
        raise TypeError("pow() exponent must be a real number, not a Variable")
    if isinstance(exponent, bool) or not isinstance(exponent, numbers.Real):
        raise TypeError(f"unsupported exponent type {type(exponent)}")
    tape = _tape_of(x)
    p = float(exponent)
    value = np.power(x.value, p)
    return Variable._wrap(tape, tape.push_node(Op.POW, value, (x.id,), exponent=p))


def neg(x):
    return mul(x, -1.0)


def sub(x, y):
    tape = _tape_of(x, y)
    return add(x, neg(_as_var(y, tape)))
