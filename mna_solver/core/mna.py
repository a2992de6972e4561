"""
Modified Nodal Analysis assembly.

Node i (1-based, ground excluded) owns row/column i-1. The k-th voltage source
in circuit order owns auxiliary row/column node_count + k, whose unknown is the
branch current through the source.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence
import numpy as np

from .circuit_sanity_checker import check_ground_reference
from .components import Component, CurrentSource, Resistor, VoltageSource
from .gaussian import PIVOT_TOLERANCE, gaussian_elimination
from .node_registry import GROUND_INDEX

logger = logging.getLogger(__name__)


@dataclass
class MnaSystem:
    """
    Linear system assembled for one solve.

    Attributes:
        A: Conductance matrix augmented with voltage source rows.
        B: Right-hand side vector (injected currents and source voltages).
        node_count: Number of non-ground nodes.
        aux_index: Mapping position of a voltage source in the component list -> auxiliary row.
    """
    A: np.ndarray
    B: np.ndarray
    node_count: int
    aux_index: Dict[int, int] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return self.A.shape[0]

    def solve(self, tolerance: float = PIVOT_TOLERANCE) -> np.ndarray:
        return gaussian_elimination(self.A, self.B, tolerance)


def _row(node: int) -> Optional[int]:
    """Matrix row of a node index, None for ground."""
    return None if node == GROUND_INDEX else node - 1


def stamp_resistor(A: np.ndarray, resistor: Resistor) -> None:
    g = resistor.conductance
    u = _row(resistor.node_a)
    v = _row(resistor.node_b)
    if u is not None:
        A[u, u] += g
    if v is not None:
        A[v, v] += g
    if u is not None and v is not None:
        A[u, v] -= g
        A[v, u] -= g


def stamp_current_source(B: np.ndarray, source: CurrentSource) -> None:
    """
    Current leaves node_a and enters node_b.
    """
    u = _row(source.node_a)
    v = _row(source.node_b)
    if u is not None:
        B[u] -= source.current
    if v is not None:
        B[v] += source.current


def stamp_voltage_source(A: np.ndarray, B: np.ndarray, aux: int, source: VoltageSource) -> None:
    p = _row(source.node_a)
    q = _row(source.node_b)
    if p is not None:
        A[p, aux] = 1.0
        A[aux, p] = 1.0
    if q is not None:
        A[q, aux] = -1.0
        A[aux, q] = -1.0
    B[aux] = source.voltage


def assemble(node_count: int, components: Sequence[Component]) -> MnaSystem:
    """
    Build the MNA system for the given circuit.

    Args:
        node_count: Number of non-ground nodes allocated by the registry
        components: Components in circuit order

    Returns:
        MnaSystem: Matrix, right-hand side and auxiliary row assignment

    Raises:
        InvalidState: If the circuit is empty or has no ground reference
    """
    check_ground_reference(node_count, components)

    voltage_source_count = sum(1 for c in components if isinstance(c, VoltageSource))
    size = node_count + voltage_source_count
    logger.info(f"Building MNA system ({size}x{size})...")

    A = np.zeros((size, size), dtype=float)
    B = np.zeros(size, dtype=float)
    aux_index: Dict[int, int] = {}

    for position, component in enumerate(components):
        if isinstance(component, Resistor):
            stamp_resistor(A, component)
        elif isinstance(component, CurrentSource):
            stamp_current_source(B, component)
        elif isinstance(component, VoltageSource):
            aux = node_count + len(aux_index)
            aux_index[position] = aux
            stamp_voltage_source(A, B, aux, component)
        else:
            raise TypeError(f"Unsupported component type: {type(component).__name__}")

    return MnaSystem(A=A, B=B, node_count=node_count, aux_index=aux_index)
