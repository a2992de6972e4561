"""
Text renderings of a circuit: adjacency view, Graphviz DOT source and the
node voltage table.
"""

from typing import List

from .circuit import Circuit
from .components import Component, CurrentSource, VoltageSource
from .node_registry import GROUND_INDEX, GROUND_NAME


def _format_value(value: float) -> str:
    return f"{value:g}"


def _arrow(component: Component, from_node: int) -> str:
    """Connector drawn from the given endpoint towards the other one."""
    at_a = component.node_a == from_node
    if isinstance(component, CurrentSource):
        return " --> " if at_a else " <-- "
    if isinstance(component, VoltageSource):
        return " (+)- " if at_a else " -(-) "
    return " --- "


def render_adjacency(circuit: Circuit) -> str:
    """
    Render the circuit as an adjacency list, one block per node.

    Ground comes first, the remaining nodes follow in display order.
    """
    if not circuit.components:
        return "Circuit is empty. Nothing to visualize."

    nodes = [(GROUND_NAME, GROUND_INDEX)] + list(circuit.registry.items())
    lines: List[str] = ["====== CIRCUIT GRAPH TOPOLOGY (Adjacency List) ======"]
    for name, index in nodes:
        lines.append(f" Node [{name}] connects to:")
        connected = False
        for component in circuit.components:
            if not component.touches(index):
                continue
            connected = True
            neighbor = circuit.node_name(component.other_node(index))
            lines.append(
                f"   |-- [{component.name} ({_format_value(component.value)})]"
                f"{_arrow(component, index)}Node [{neighbor}]"
            )
        if not connected:
            lines.append("   (No connections - Isolated)")
        lines.append("")
    lines.append("=" * 53)
    return "\n".join(lines)


def to_graphviz(circuit: Circuit) -> str:
    """Return Graphviz DOT source for an undirected drawing of the circuit."""
    lines = [
        "graph Circuit {",
        "  rankdir=LR;",
        "  node [shape=circle, style=filled, fillcolor=lightblue];",
    ]
    for component in circuit.components:
        node_a = circuit.node_name(component.node_a)
        node_b = circuit.node_name(component.node_b)
        label = f"{component.name}\\n{_format_value(component.value)} {component.unit}"
        lines.append(f'  "{node_a}" -- "{node_b}" [label="{label}"];')
    lines.append("}")
    return "\n".join(lines)


def format_results(circuit: Circuit, precision: int = None) -> str:
    """Format solved node voltages as a table, ground excluded."""
    if not circuit.has_results:
        return "No results available. Please solve the circuit first."
    if precision is None:
        precision = circuit.settings.result_precision
    lines = ["--- Simulation Results ---"]
    for name, voltage in circuit.voltages_by_name().items():
        lines.append(f"Node [{name}]: {voltage:.{precision}f} V")
    lines.append("--------------------------")
    return "\n".join(lines)
