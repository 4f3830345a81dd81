"""
Finite-difference verification of reverse-mode gradients.

The analytic gradient comes from one backward pass (`grads_list`); the
numerical one from bumping each input with scipy's `approx_fprime`.
"""

from typing import Callable, List, Sequence

import numpy as np
from scipy.optimize import approx_fprime

from .core.seeds import grads_list
from .core.tape import use_tape
from .core.var import Variable
from .errors import GradcheckError

# sqrt(machine epsilon): balances truncation and round-off of a forward difference
DEFAULT_EPSILON = np.sqrt(np.finfo(float).eps)


def _evaluate(f: Callable[[List[Variable]], Variable], x: np.ndarray) -> float:
    with use_tape():
        y = f([Variable(float(v)) for v in x])
        return float(y.value)


def numerical_grad(f: Callable[[List[Variable]], Variable], xs: Sequence[float],
                   epsilon: float = DEFAULT_EPSILON) -> np.ndarray:
    """Forward-difference gradient of f at xs, one function evaluation per input."""
    x0 = np.asarray(xs, dtype=np.float64)
    return approx_fprime(x0, lambda x: _evaluate(f, x), epsilon)


def gradcheck(f: Callable[[List[Variable]], Variable], xs: Sequence[float], *,
              rtol: float = 1e-4, atol: float = 1e-5,
              epsilon: float = DEFAULT_EPSILON) -> bool:
    """
    Compare the backward-pass gradient of f at xs with finite differences.

    Returns True when every component agrees within (rtol, atol); raises
    GradcheckError listing the offending components otherwise.
    """
    analytic = np.asarray(grads_list(f, xs), dtype=np.float64)
    numeric = numerical_grad(f, xs, epsilon)
    close = np.isclose(analytic, numeric, rtol=rtol, atol=atol)
    if not close.all():
        bad = ", ".join(
            f"x{i}: analytic={analytic[i]:.6g} numerical={numeric[i]:.6g}"
            for i in np.flatnonzero(~close)
        )
        raise GradcheckError(f"gradient mismatch ({bad})")
    return True
