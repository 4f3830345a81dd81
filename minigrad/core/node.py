# minigrad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Op(str, Enum):
    """
    Closed set of primitive operations recorded on the tape.

    Negation, subtraction, sigmoid and SiLU are built from these primitives
    and never appear as tags of their own.
    """
    LEAF = "leaf"
    ADD = "add"
    MUL = "mul"
    DIV = "div"
    POW = "pow"
    SIN = "sin"
    COS = "cos"
    EXP = "exp"
    RELU = "relu"


@dataclass
class Node:
    """
    One vertex of the computation graph, owned by a Tape.

    Attributes
    ----------
    op       : Op
        Operation that produced this node (Op.LEAF for inputs/constants).
    value    : float
        Forward value, fixed at construction (only `Variable.step` changes it).
    grad     : float
        Accumulated adjoint; 0.0 until a backward pass reaches the node.
    children : Tuple[int, ...]
        Ids of the operand nodes, in operand order (left, right).
    exponent : Optional[float]
        Fixed real exponent of a POW node. Not an edge, never differentiated.
    name     : Optional[str]
        Debug label.
    """
    op: Op
    value: float
    grad: float = 0.0
    children: Tuple[int, ...] = ()
    exponent: Optional[float] = None
    name: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return self.op is Op.LEAF
