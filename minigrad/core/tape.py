# minigrad/core/tape.py
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from ..errors import StaleVariableError
from .node import Node, Op

logger = logging.getLogger(__name__)


class Tape:
    """
    Arena that owns every node of a graph, in creation order.

    Nodes are addressed by an integer id drawn from a per-tape counter. Ids
    only ever grow, so an id is never handed out twice, even after `rewind`.
    """
    def __init__(self):
        self.nodes: Dict[int, Node] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[Tuple[int, Node]]:
        return iter(self.nodes.items())

    def push_node(self, op: Op, value, children: Tuple[int, ...] = (), *,
                  exponent: Optional[float] = None, name: Optional[str] = None) -> int:
        """
        Append a Node to the tape and return its id.
        `children` must already live on this tape.
        """
        node_id = self._next_id
        self._next_id += 1
        self.nodes[node_id] = Node(op=op, value=np.float64(value), children=tuple(children),
                                   exponent=exponent, name=name)
        return node_id

    def node(self, node_id: int) -> Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise StaleVariableError(
                f"node {node_id} is not on this tape (it was reset or rewound)"
            ) from None

    def reset(self):
        logger.debug("reset tape: dropping %d nodes", len(self.nodes))
        self.nodes.clear()

    def mark(self) -> int:
        """Return a position that `rewind` can later truncate back to."""
        return self._next_id

    def rewind(self, mark: int):
        """Drop every node created at or after `mark`."""
        stale = [i for i in self.nodes if i >= mark]
        for i in stale:
            del self.nodes[i]
        logger.debug("rewind tape to %d: dropped %d nodes", mark, len(stale))


# Default tape; swapped by use_tape()
global_tape = Tape()


def current_tape() -> Tape:
    from . import tape as _tape_mod  # read the module attribute, use_tape() rebinds it
    return _tape_mod.global_tape


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily record onto another (by default fresh) tape:
        with use_tape():
            ... build computation ...
            y.backward()
    """
    from . import tape as _tape_mod  # local import to avoid cycles
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev
