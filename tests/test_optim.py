import logging

import numpy as np
import pytest

import minigrad as mg
from minigrad import SGD, SGDConfig, Tape, Tensor1D, Variable

TRUE_SLOPE = 2.0
TRUE_INTERCEPT = -1.0


@pytest.fixture
def dataset():
    xs = np.linspace(-1.0, 1.0, 10)
    ys = TRUE_SLOPE * xs + TRUE_INTERCEPT
    return list(zip(xs, ys))


def _mse(a, b, dataset):
    total = None
    for x, y in dataset:
        residual = (a * x + b - y) ** 2
        total = residual if total is None else total + residual
    return total / len(dataset)


def test_manual_gradient_descent_converges(dataset):
    a = Variable(0.0, name="a")
    b = Variable(0.0, name="b")
    for _ in range(300):
        a.zero_grad()
        b.zero_grad()
        loss = _mse(a, b, dataset)
        loss.backward()
        a.step(0.1)
        b.step(0.1)
    assert abs(a.value - TRUE_SLOPE) < 0.1
    assert abs(b.value - TRUE_INTERCEPT) < 0.1


def test_sgd_minimize_converges(dataset):
    a = Variable(0.0, name="a")
    b = Variable(0.0, name="b")
    opt = SGD([a, b], SGDConfig(learning_rate=0.1, max_iterations=1000))
    result = opt.minimize(lambda: _mse(a, b, dataset))

    assert result.converged
    assert result.iterations < 1000
    assert result.loss < 1e-4
    assert a.value == pytest.approx(TRUE_SLOPE, abs=0.1)
    assert b.value == pytest.approx(TRUE_INTERCEPT, abs=0.1)


def test_sgd_keeps_tape_bounded(dataset, tape):
    a = Variable(0.0)
    b = Variable(0.0)
    before = len(tape)
    opt = SGD([a, b], SGDConfig(learning_rate=0.1, max_iterations=3, tolerance=0.0))
    opt.minimize(lambda: _mse(a, b, dataset))
    assert len(tape) == before

    result = SGD([a, b], SGDConfig(learning_rate=0.1, max_iterations=30, tolerance=0.0)).minimize(
        lambda: _mse(a, b, dataset)
    )
    assert not result.converged
    assert result.iterations == 30
    assert len(tape) == before


def test_sgd_keeps_data_built_after_construction(dataset):
    a = Variable(0.0)
    b = Variable(0.0)
    opt = SGD([a, b], SGDConfig(learning_rate=0.1, max_iterations=1000))
    xs = Tensor1D([x for x, _ in dataset])
    ys = Tensor1D([y for _, y in dataset])

    def loss_fn():
        residual = xs * a + b - ys
        return (residual * residual).mean()

    result = opt.minimize(loss_fn)
    assert result.converged
    assert a.value == pytest.approx(TRUE_SLOPE, abs=0.1)
    assert b.value == pytest.approx(TRUE_INTERCEPT, abs=0.1)
    np.testing.assert_allclose(xs.values(), [x for x, _ in dataset])


def test_two_optimizers_share_a_tape():
    a = Variable(3.0)
    first = SGD([a], SGDConfig(learning_rate=0.1, max_iterations=50))
    c = Variable(5.0)
    second = SGD([c], SGDConfig(learning_rate=0.1, max_iterations=50))

    first.minimize(lambda: a * a)
    assert c.value == 5.0
    assert c.is_leaf

    second.minimize(lambda: (c - 1.0) * (c - 1.0))
    assert c.value == pytest.approx(1.0, abs=1e-3)
    assert abs(a.value) < 1e-3


def test_fit_result_loss_is_at_final_parameters():
    a = Variable(2.0)
    result = SGD([a], SGDConfig(learning_rate=0.25, max_iterations=1, tolerance=0.0)).minimize(
        lambda: a * a
    )
    # one step: a = 2 - 0.25 * 4 = 1
    assert a.value == pytest.approx(1.0)
    assert result.loss == pytest.approx(1.0)


def test_sgd_step_and_zero_grad():
    a = Variable(1.0)
    opt = SGD([a], SGDConfig(learning_rate=0.5))
    (a * a).backward()
    opt.step()
    assert a.value == pytest.approx(0.0)
    opt.zero_grad()
    assert a.grad == 0.0


def test_sgd_rejects_bad_parameters():
    a = Variable(1.0)
    with pytest.raises(mg.PreconditionError):
        SGD([a * 2.0])
    with pytest.raises(mg.GraphError):
        SGD([a, Variable(1.0, tape=Tape())])
    with pytest.raises(mg.PreconditionError):
        SGD([])


def test_sgd_logs_progress(dataset, caplog):
    caplog.set_level(logging.INFO, logger="minigrad.optim")
    a = Variable(0.0)
    b = Variable(0.0)
    SGD([a, b], SGDConfig(learning_rate=0.1, max_iterations=20, tolerance=0.0, log_every=10)).minimize(
        lambda: _mse(a, b, dataset)
    )
    assert "iteration 10" in caplog.text
    assert "iteration 20" in caplog.text
    assert "stopped after 20 iterations" in caplog.text
