# minigrad/__init__.py
# Scalar reverse-mode automatic differentiation

from .core.var import Variable
from .core.node import Node, Op
from .core.tape import Tape, global_tape, use_tape
from .core.engine import backward, topological_order, zero_grads
from .core.seeds import grad, grads, grads_list, value
from .errors import (
    AutodiffError,
    DomainError,
    PreconditionError,
    ShapeError,
    GraphError,
    StaleVariableError,
    GradcheckError,
)

from . import ops
from .tensor import Tensor1D, Tensor2D
from .optim import SGD, SGDConfig, FitResult
from .gradcheck import gradcheck, numerical_grad

__all__ = [
    # Core
    'Variable',
    'Node',
    'Op',
    'Tape',
    'global_tape',
    'use_tape',
    # Engine
    'backward',
    'topological_order',
    'zero_grads',
    # Helpers
    'grad',
    'grads',
    'grads_list',
    'value',
    'gradcheck',
    'numerical_grad',
    # Errors
    'AutodiffError',
    'DomainError',
    'PreconditionError',
    'ShapeError',
    'GraphError',
    'StaleVariableError',
    'GradcheckError',
    # Containers & optimisation
    'ops',
    'Tensor1D',
    'Tensor2D',
    'SGD',
    'SGDConfig',
    'FitResult',
]
