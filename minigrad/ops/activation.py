# minigrad/ops/activation.py
from ..core.node import Op
from .arithmetic import add, mul, neg, pow
from .transcendental import _unary, exp


def relu(x):
    return _unary(x, Op.RELU, lambda v: max(v, 0.0))


def sigmoid(x):
    """
    Logistic function 1 / (1 + e^-x), composed from primitives:
        pow(add(1, exp(neg(x))), -1)
    Its gradient falls out of the chain rule, no dedicated rule is recorded.
    """
    return pow(add(1.0, exp(neg(x))), -1.0)


def silu(x):
    """SiLU / swish: x * sigmoid(x)."""
    return mul(x, sigmoid(x))
