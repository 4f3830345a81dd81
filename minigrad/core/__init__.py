# minigrad/core/__init__.py

"""
Core public API for minigrad.

Exports:
    Variable          : Handle to a scalar node of the computation graph.
    Op, Node          : The operation tags and the node record stored on a tape.
    Tape              : Arena owning the nodes of a graph.
    global_tape       : The default tape that new Variables are recorded on.
    use_tape          : Context manager to temporarily switch the active tape.
    backward          : Run a single reverse pass from an output.
    topological_order : Children-before-parents order of a subgraph.
    zero_grads        : Reset every gradient on a tape.
    grad, grads, grads_list, value : Functional helpers on isolated tapes.
"""

from .node import Node, Op
from .var import Variable
from .tape import Tape, global_tape, use_tape, current_tape
from .engine import backward, topological_order, propagate, zero_grads
from .seeds import grad, grads, grads_list, value

__all__ = [
    "Node", "Op",
    "Variable",
    "Tape", "global_tape", "use_tape", "current_tape",
    "backward", "topological_order", "propagate", "zero_grads",
    "grad", "grads", "grads_list", "value",
]
