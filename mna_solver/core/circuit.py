import logging
from typing import Dict, Optional, Tuple

from .circuit_sanity_checker import CircuitSanityChecker
from .components import (
    Component, CurrentSource, Resistor, VoltageSource, make_component
)
from .errors import CircuitError, InvalidState
from .mna import assemble
from .node_registry import GROUND_INDEX, NodeRegistry
from .solver_settings import SolverSettings

logger = logging.getLogger(__name__)


class Circuit:
    """
    Linear DC circuit solved with Modified Nodal Analysis.

    The circuit owns its components (in insertion order), the node registry
    and the results of the last successful solve. Results are discarded on
    any mutation and are left untouched when a solve fails.
    """

    def __init__(self, settings: Optional[SolverSettings] = None):
        """
        Initialize an empty circuit with ground pre-registered.

        Args:
            settings: Solver settings. Defaults to SolverSettings().
        """
        self.settings = settings or SolverSettings()
        self.registry = NodeRegistry()
        self._components = []
        self._node_voltages: Optional[Dict[int, float]] = None
        self._source_currents: Optional[Dict[int, float]] = None

    # --- Building ---

    def add_component(self, kind, name: str, node_a: str, node_b: str, value: float) -> Component:
        """
        Add a component of the given kind letter between two named nodes.

        The component is validated before the circuit is touched, so a
        rejected component allocates no node names.

        Raises:
            InvalidArgument: If a node name is empty or the component is invalid
        """
        index_a, index_b = self.registry.preview(node_a, node_b)
        component = make_component(kind, name, index_a, index_b, value)

        self.registry.resolve(node_a)
        self.registry.resolve(node_b)
        self._components.append(component)
        self._invalidate_results()
        logger.debug(f"Added {component.label} '{name}' between '{node_a}' and '{node_b}' ({value})")
        return component

    def add_resistor(self, name: str, node_a: str, node_b: str, resistance: float) -> Resistor:
        return self.add_component(Resistor.kind, name, node_a, node_b, resistance)

    def add_current_source(self, name: str, node_from: str, node_to: str, current: float) -> CurrentSource:
        return self.add_component(CurrentSource.kind, name, node_from, node_to, current)

    def add_voltage_source(self, name: str, node_pos: str, node_neg: str, voltage: float) -> VoltageSource:
        return self.add_component(VoltageSource.kind, name, node_pos, node_neg, voltage)

    def clear(self) -> None:
        """Reset to an empty circuit with only ground registered."""
        self._components.clear()
        self.registry.clear()
        self._invalidate_results()
        logger.debug("Circuit cleared")

    def _invalidate_results(self) -> None:
        self._node_voltages = None
        self._source_currents = None

    # --- Accessors ---

    @property
    def components(self) -> Tuple[Component, ...]:
        return tuple(self._components)

    @property
    def node_count(self) -> int:
        return self.registry.node_count

    def node_name(self, index: int) -> str:
        return self.registry.lookup_name(index)

    def __len__(self) -> int:
        return len(self._components)

    # --- Solving ---

    def solve(self) -> Dict[str, float]:
        """
        Solve the circuit for its node voltages.

        Returns:
            Dict[str, float]: Node name -> voltage, ground excluded, in display order

        Raises:
            InvalidState: If the circuit is empty or has no ground reference
            SingularMatrix: If the system has no unique solution
        """
        node_count = self.registry.node_count
        try:
            if self.settings.run_sanity_checks and node_count:
                checker = CircuitSanityChecker(self._components, node_count)
                checker.check_all()
                checker.log_results()
            system = assemble(node_count, self._components)
            solution = system.solve(self.settings.pivot_tolerance)
        except CircuitError as exc:
            logger.error(f"Solver error: {exc}")
            raise

        self._node_voltages = {index: float(solution[index - 1]) for index in range(1, node_count + 1)}
        self._source_currents = {
            position: float(solution[aux]) for position, aux in system.aux_index.items()
        }
        logger.info("Circuit solved successfully!")
        return self.voltages_by_name()

    @property
    def has_results(self) -> bool:
        return self._node_voltages is not None

    @property
    def node_voltages(self) -> Optional[Dict[int, float]]:
        """Node index -> voltage for every non-ground node, or None if unavailable."""
        if self._node_voltages is None:
            return None
        return dict(self._node_voltages)

    def _require_results(self) -> Dict[int, float]:
        if self._node_voltages is None:
            raise InvalidState("No results available. Please solve the circuit first.")
        return self._node_voltages

    def voltage(self, name: str) -> float:
        """Solved voltage of a named node (ground is 0.0)."""
        voltages = self._require_results()
        index = self.registry.index_of(name)
        if index == GROUND_INDEX:
            return 0.0
        return voltages[index]

    def voltages_by_name(self) -> Dict[str, float]:
        """Node name -> voltage in display order, ground excluded."""
        voltages = self._require_results()
        return {name: voltages[index] for name, index in self.registry.items()}

    def source_current(self, name: str) -> float:
        """
        Current through a voltage source, from the MNA auxiliary unknown.

        The sign follows the MNA convention: positive current flows into the
        positive terminal through the source.
        """
        self._require_results()
        for position, component in enumerate(self._components):
            if isinstance(component, VoltageSource) and component.name == name:
                return self._source_currents[position]
        raise KeyError(f"No voltage source named '{name}'.")
