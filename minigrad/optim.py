"""
Manual gradient descent over leaf Variables.

Usage:
    >>> a, b = Variable(0.0, name="a"), Variable(0.0, name="b")
    >>> opt = SGD([a, b], SGDConfig(learning_rate=0.05, max_iterations=500))
    >>> result = opt.minimize(lambda: (a * 2.0 + b - 5.0) ** 2)
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence

from .core.engine import backward
from .core.var import Variable
from .errors import GraphError, PreconditionError

logger = logging.getLogger(__name__)


@dataclass
class SGDConfig:
    """Configuration for plain gradient descent."""
    learning_rate: float = 0.01
    max_iterations: int = 1000
    # Stop once |loss_k - loss_{k-1}| drops below this
    tolerance: float = 1e-8
    # Log the loss every `log_every` iterations (0 = only at the end)
    log_every: int = 0


@dataclass
class FitResult:
    """Outcome of `SGD.minimize`; `loss` is evaluated at the returned parameters."""
    loss: float
    iterations: int
    converged: bool


class SGD:
    """
    Gradient descent on a fixed set of leaf parameters.

    All parameters must live on one tape. `minimize` marks the tape when it
    starts and rewinds to that mark before rebuilding the loss graph, so only
    nodes created by `loss_fn` are reclaimed and memory stays bounded however
    long the loop runs.
    """

    def __init__(self, params: Sequence[Variable], config: SGDConfig = None):
        self.params: List[Variable] = list(params)
        self.config = config or SGDConfig()
        if not self.params:
            raise PreconditionError("SGD needs at least one parameter")
        tape = self.params[0].tape
        for p in self.params:
            if p.tape is not tape:
                raise GraphError("all parameters must be recorded on the same tape")
            if not p.is_leaf:
                raise PreconditionError("SGD parameters must be leaf Variables")
        self.tape = tape

    def zero_grad(self):
        for p in self.params:
            p.zero_grad()

    def step(self):
        for p in self.params:
            p.step(self.config.learning_rate)

    def minimize(self, loss_fn: Callable[[], Variable]) -> FitResult:
        """
        Repeat: rebuild the loss, zero the parameter gradients, backward, step.

        `loss_fn` takes no arguments and must build its graph from the
        parameters. Variables it creates are discarded between iterations and
        once more on return; nodes that existed before the call are untouched.
        The reported loss is re-evaluated at the final parameters.
        """
        cfg = self.config
        mark = self.tape.mark()
        prev_loss = None
        converged = False
        it = 0
        for it in range(1, cfg.max_iterations + 1):
            self.tape.rewind(mark)
            loss = loss_fn()
            loss_value = loss.item()
            self.zero_grad()
            backward(loss)
            self.step()

            if cfg.log_every and it % cfg.log_every == 0:
                logger.info("iteration %d: loss=%.6g", it, loss_value)
            if prev_loss is not None and abs(prev_loss - loss_value) < cfg.tolerance:
                converged = True
                break
            prev_loss = loss_value

        self.tape.rewind(mark)
        final_loss = loss_fn().item()
        self.tape.rewind(mark)

        if converged:
            logger.info("converged after %d iterations: loss=%.6g", it, final_loss)
        else:
            logger.info("stopped after %d iterations: loss=%.6g", it, final_loss)
        return FitResult(loss=final_loss, iterations=it, converged=converged)
