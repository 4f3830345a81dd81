# minigrad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through a fresh tape, so each helper call leaves no trace behind.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .engine import backward
from .tape import use_tape
from .var import Variable


def value(x: Any) -> Any:
    """Return the numeric value of a Variable; pass through plain numbers unchanged."""
    return x.value if isinstance(x, Variable) else x


def _ensure_var(v: Any, *, name: str) -> Variable:
    """Wrap a plain value as a leaf Variable on the active tape."""
    return Variable(value(v), name=name)


def _check_output(y: Any, caller: str) -> Variable:
    if not isinstance(y, Variable):
        raise TypeError(f"{caller} expects f to return a scalar Variable, got {type(y)}")
    return y


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Variable], Variable], x0: float) -> float:
    """
    Derivative of a scalar function y=f(x) at x0.
    Runs one reverse pass within a fresh, isolated tape.
    """
    with use_tape():
        x = _ensure_var(x0, name="x")
        y = _check_output(f(x), "grad(f, x0)")
        backward(y)
        return x.grad


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Variable]], Variable],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y=f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE reverse pass to obtain all ∂y/∂var simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: Variable} and returning a Variable
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    with use_tape():
        vars_: Dict[str, Variable] = {k: _ensure_var(v, name=k) for k, v in inputs.items()}
        y = _check_output(f(vars_), "grads(f, inputs)")
        backward(y)
        return {k: vars_[k].grad for k in inputs.keys()}


def grads_list(f: Callable[[List[Variable]], Variable],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs: List[Variable] = [_ensure_var(v, name=f"x{i}") for i, v in enumerate(x0_list)]
        y = _check_output(f(xs), "grads_list(f, x0_list)")
        backward(y)
        return [x.grad for x in xs]
