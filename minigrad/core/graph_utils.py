"""
Graph introspection helpers.
Summarise the structure of a tape (or of the subgraph behind one output).
"""

from collections import Counter
from typing import Dict, Iterable, Tuple

import numpy as np

from .engine import topological_order
from .node import Node
from .tape import Tape
from .var import Variable


def _stats(items: Iterable[Tuple[int, Node]]) -> Dict:
    items = list(items)
    if not items:
        return {
            'nodes': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    n_nodes = len(items)
    fan_ins = [len(node.children) for _, node in items]

    # Fan-out: how many operand slots reference each node (x*x counts twice)
    fan_outs = Counter()
    for _, node in items:
        fan_outs.update(node.children)
    fan_out_list = [fan_outs.get(node_id, 0) for node_id, _ in items]

    op_counter = Counter(node.op.value for _, node in items)

    return {
        'nodes': n_nodes,
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_out_list),
        'avg_fan_out': float(np.mean(fan_out_list)),
        'operations': dict(op_counter)
    }


def get_graph_stats(tape: Tape) -> Dict:
    """
    Statistics for every node on a tape (no printing).

    Returns:
        dict with keys nodes, edges, max/avg fan-in, max/avg fan-out and
        operations (op tag -> count)
    """
    return _stats(tape)


def reachable_stats(root: Variable) -> Dict:
    """Same as get_graph_stats, restricted to the nodes `root` depends on."""
    return _stats((v.id, v.node) for v in topological_order(root))


def format_graph_summary(tape: Tape, detailed: bool = False, max_nodes: int = 100) -> str:
    stats = get_graph_stats(tape)
    if stats['nodes'] == 0:
        return "Empty computation graph"

    lines = [
        "=" * 70,
        "COMPUTATION GRAPH SUMMARY",
        "=" * 70,
        f"Total nodes:        {stats['nodes']:,}",
        f"Total edges:        {stats['edges']:,}",
        f"Max fan-in:         {stats['max_fan_in']}",
        f"Avg fan-in:         {stats['avg_fan_in']:.2f}",
        f"Max fan-out:        {stats['max_fan_out']}",
        f"Avg fan-out:        {stats['avg_fan_out']:.2f}",
        "",
        "Operation breakdown:",
    ]
    for op, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / stats['nodes']
        lines.append(f"  {op:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed:
        lines += ["", "=" * 70, f"NODE LIST (first {max_nodes} nodes)", "=" * 70]
        for i, (node_id, node) in enumerate(tape):
            if i >= max_nodes:
                lines.append(f"... ({len(tape) - max_nodes} more nodes)")
                break
            if node.children:
                operands = ", ".join(f"Node{c}" for c in node.children)
                lines.append(f"Node {node_id:4d}: {node.op.value:8s} ({node.value:10.6f}) <- [{operands}]")
            else:
                lines.append(f"Node {node_id:4d}: {node.op.value:8s} ({node.value:10.6f}) [leaf/input]")
    lines.append("=" * 70)
    return "\n".join(lines)


def print_graph_summary(tape: Tape, detailed: bool = False) -> Dict:
    """
    Print a summary of the tape and return its statistics.

    Args:
        tape: Tape to describe
        detailed: also list the nodes one per line
    """
    print("\n" + format_graph_summary(tape, detailed=detailed) + "\n")
    return get_graph_stats(tape)
