from minigrad import Tape, Variable
from minigrad.core.graph_utils import (
    format_graph_summary,
    get_graph_stats,
    print_graph_summary,
    reachable_stats,
)


def _build():
    a = Variable(2.0, name="a")
    b = Variable(3.0, name="b")
    return a, b, a * b + a


def test_graph_stats(tape):
    _build()
    stats = get_graph_stats(tape)
    assert stats["nodes"] == 4
    assert stats["edges"] == 4
    assert stats["max_fan_in"] == 2
    assert stats["max_fan_out"] == 2
    assert stats["avg_fan_in"] == 1.0
    assert stats["operations"] == {"leaf": 2, "mul": 1, "add": 1}


def test_reachable_stats_ignore_unrelated_nodes(tape):
    _, _, c = _build()
    Variable(10.0)
    assert get_graph_stats(tape)["nodes"] == 5
    assert reachable_stats(c)["nodes"] == 4


def test_empty_tape():
    empty = Tape()
    assert get_graph_stats(empty)["nodes"] == 0
    assert format_graph_summary(empty) == "Empty computation graph"


def test_detailed_summary_lists_nodes(tape):
    _build()
    text = format_graph_summary(tape, detailed=True)
    assert "COMPUTATION GRAPH SUMMARY" in text
    assert "[leaf/input]" in text
    assert "<- [Node0, Node1]" in text


def test_detailed_summary_truncates(tape):
    for i in range(5):
        Variable(float(i))
    text = format_graph_summary(tape, detailed=True, max_nodes=2)
    assert "... (3 more nodes)" in text


def test_print_graph_summary(tape, capsys):
    _build()
    stats = print_graph_summary(tape)
    out = capsys.readouterr().out
    assert "Total nodes:" in out
    assert stats["nodes"] == 4
