# minigrad/ops/__init__.py

# Convenience re-exports so users can do: from minigrad.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, neg, pow
from .transcendental import sin, cos, exp
from .activation import relu, sigmoid, silu

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow",
    "sin", "cos", "exp",
    "relu", "sigmoid", "silu",
]
