"""
Circuit sanity checker for detecting topology issues before the MNA solve.

The ground-reference pre-check is binding: it raises InvalidState. The graph
checks are advisory; they explain likely causes of a singular matrix but do
not change what the solver accepts.
"""

import logging
from typing import Dict, List, Sequence
import networkx as nx

from .components import Component, VoltageSource
from .errors import InvalidState
from .node_registry import GROUND_INDEX

logger = logging.getLogger(__name__)


def check_ground_reference(node_count: int, components: Sequence[Component]) -> None:
    """Validate that the circuit can be solved at all.

    Raises:
        InvalidState: If there are no nodes, or no component touches ground.
    """
    if node_count == 0:
        raise InvalidState("Circuit is empty. Add components first.")
    if not any(component.touches(GROUND_INDEX) for component in components):
        raise InvalidState("Circuit has no ground reference: no component is connected to GND.")


def build_circuit_graph(components: Sequence[Component]) -> nx.MultiGraph:
    """Build an undirected multigraph with node indices as vertices and components as edges."""
    graph = nx.MultiGraph()
    graph.add_node(GROUND_INDEX)
    for position, component in enumerate(components):
        graph.add_edge(component.node_a, component.node_b, key=position, component=component)
    return graph


class CircuitSanityChecker:
    """
    Performs advisory topology checks on a component list.
    Uses a NetworkX multigraph for connectivity analysis.
    """

    def __init__(self, components: Sequence[Component], node_count: int):
        """
        Initialize the sanity checker.

        Args:
            components: Components in circuit order
            node_count: Number of non-ground nodes allocated by the registry
        """
        self.components = list(components)
        self.node_count = node_count
        self.graph = build_circuit_graph(self.components)
        self.graph.add_nodes_from(range(1, node_count + 1))
        self.warnings: List[str] = []

    def check_all(self) -> Dict[str, List]:
        """
        Run all advisory checks.

        Returns:
            Dictionary with 'warnings' list and 'floating_nodes' list
        """
        self.warnings.clear()
        floating = self._check_floating_nodes()
        self._check_parallel_voltage_sources()
        return {
            'warnings': self.warnings.copy(),
            'floating_nodes': floating,
        }

    def floating_nodes(self) -> List[int]:
        """Node indices with no path to ground."""
        connected = nx.node_connected_component(self.graph, GROUND_INDEX)
        return sorted(node for node in self.graph.nodes() if node not in connected)

    def _check_floating_nodes(self) -> List[int]:
        floating = self.floating_nodes()
        if floating:
            self.warnings.append(
                f"Floating nodes detected (not connected to ground): {floating}"
            )
        return floating

    def _check_parallel_voltage_sources(self) -> None:
        """Voltage sources sharing the same node pair over-constrain the system."""
        node_pairs: Dict[tuple, List[VoltageSource]] = {}
        for component in self.components:
            if isinstance(component, VoltageSource):
                pair = tuple(sorted((component.node_a, component.node_b)))
                node_pairs.setdefault(pair, []).append(component)

        for pair, sources in node_pairs.items():
            if len(sources) > 1:
                names = [f"{source.name}({source.voltage}V)" for source in sources]
                self.warnings.append(
                    f"Voltage sources connected in parallel: {names} on nodes {pair[0]}-{pair[1]}"
                )

    def log_results(self) -> None:
        """Log the sanity check results."""
        if self.warnings:
            logger.warning("Circuit topology warnings detected:")
            for warning in self.warnings:
                logger.warning(f"  - {warning}")
        else:
            logger.debug("Circuit topology checks passed")
