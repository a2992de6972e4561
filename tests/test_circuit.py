import logging
import pytest
import numpy as np
from mna_solver.core.circuit import Circuit
from mna_solver.core.components import Resistor, CurrentSource, VoltageSource
from mna_solver.core.errors import InvalidArgument, InvalidState, SingularMatrix
from mna_solver.core.solver_settings import SolverSettings


def kcl_residuals(circuit: Circuit) -> dict:
    """Sum of currents leaving each non-ground node through resistors and sources."""
    v = {0: 0.0}
    v.update(circuit.node_voltages)
    residual = {index: 0.0 for index in range(1, circuit.node_count + 1)}
    for component in circuit.components:
        a, b = component.node_a, component.node_b
        if isinstance(component, Resistor):
            current = (v[a] - v[b]) * component.conductance
        elif isinstance(component, CurrentSource):
            current = component.current
        else:
            # MNA unknown: current entering the + terminal through the source
            current = circuit.source_current(component.name)
        if a != 0:
            residual[a] += current
        if b != 0:
            residual[b] -= current
    return residual


class TestWorkedExamples:
    """Reference circuits with hand-computed answers."""

    def test_current_source_into_resistor(self, circuit):
        circuit.add_resistor("R1", "A", "GND", 10.0)
        circuit.add_current_source("I1", "GND", "A", 1.0)
        result = circuit.solve()
        assert result == {"A": pytest.approx(10.0)}
        assert circuit.voltage("A") == pytest.approx(10.0)

    def test_voltage_source_across_resistor(self, circuit):
        circuit.add_voltage_source("V1", "A", "GND", 5.0)
        circuit.add_resistor("R1", "A", "GND", 5.0)
        circuit.solve()
        assert circuit.voltage("A") == pytest.approx(5.0)
        assert circuit.source_current("V1") == pytest.approx(-1.0)

    def test_floating_resistor_has_no_ground_reference(self, circuit):
        circuit.add_resistor("R1", "A", "B", 100.0)
        with pytest.raises(InvalidState, match="no ground reference"):
            circuit.solve()
        assert not circuit.has_results

    def test_parallel_voltage_sources_are_singular(self, circuit):
        circuit.add_voltage_source("V1", "A", "GND", 5.0)
        circuit.add_voltage_source("V2", "A", "GND", 3.0)
        circuit.add_resistor("R1", "A", "GND", 10.0)
        with pytest.raises(SingularMatrix):
            circuit.solve()

    def test_divider(self, divider_circuit):
        divider_circuit.solve()
        assert divider_circuit.voltage("in") == pytest.approx(10.0)
        assert divider_circuit.voltage("out") == pytest.approx(20.0 / 3.0)
        assert divider_circuit.voltage("gnd") == 0.0

    def test_floating_source_between_nodes(self, circuit):
        """Voltage source with neither terminal on ground."""
        circuit.add_voltage_source("V1", "a", "b", 3.0)
        circuit.add_resistor("R1", "a", "GND", 1.0)
        circuit.add_resistor("R2", "b", "GND", 2.0)
        circuit.solve()
        assert circuit.voltage("a") - circuit.voltage("b") == pytest.approx(3.0)
        assert circuit.voltage("a") == pytest.approx(1.0)
        assert circuit.voltage("b") == pytest.approx(-2.0)


def test_empty_circuit_cannot_be_solved(circuit):
    with pytest.raises(InvalidState, match="empty"):
        circuit.solve()


def test_kcl_holds_for_bridge(bridge_circuit):
    """Test that currents balance at every node of a resistor network."""
    bridge_circuit.solve()
    residuals = kcl_residuals(bridge_circuit)
    assert np.allclose(list(residuals.values()), 0.0, atol=1e-9)
    assert bridge_circuit.voltage("top") == pytest.approx(12.0)


def test_kcl_holds_with_current_sources(circuit):
    circuit.add_voltage_source("V1", "1", "0", 9.0)
    circuit.add_resistor("R1", "1", "2", 4.7)
    circuit.add_resistor("R2", "2", "3", 10.0)
    circuit.add_resistor("R3", "3", "0", 2.2)
    circuit.add_resistor("R4", "2", "0", 6.8)
    circuit.add_current_source("I1", "0", "3", 0.25)
    circuit.solve()
    residuals = kcl_residuals(circuit)
    assert np.allclose(list(residuals.values()), 0.0, atol=1e-9)


def test_resolve_is_idempotent(bridge_circuit):
    """Test that solving twice gives bit-identical results."""
    first = bridge_circuit.solve()
    second = bridge_circuit.solve()
    assert first == second
    assert list(first) == list(second)


def test_results_indexed_by_node(divider_circuit):
    assert divider_circuit.node_voltages is None
    divider_circuit.solve()
    voltages = divider_circuit.node_voltages
    assert set(voltages) == {1, 2}
    assert voltages[1] == pytest.approx(10.0)


def test_results_unavailable_before_solve(divider_circuit):
    with pytest.raises(InvalidState, match="No results"):
        divider_circuit.voltage("out")
    with pytest.raises(InvalidState):
        divider_circuit.voltages_by_name()


def test_mutation_invalidates_results(divider_circuit):
    divider_circuit.solve()
    assert divider_circuit.has_results
    divider_circuit.add_resistor("R3", "out", "GND", 2000.0)
    assert not divider_circuit.has_results
    divider_circuit.solve()
    assert divider_circuit.voltage("out") == pytest.approx(5.0)


def test_failed_solve_keeps_circuit_usable(circuit):
    """Test that a solve failure leaves the circuit editable and solvable."""
    circuit.add_resistor("R1", "A", "B", 100.0)
    with pytest.raises(InvalidState):
        circuit.solve()
    circuit.add_resistor("R2", "B", "GND", 100.0)
    circuit.add_current_source("I1", "GND", "A", 0.01)
    circuit.solve()
    assert circuit.voltage("A") == pytest.approx(2.0)
    assert circuit.voltage("B") == pytest.approx(1.0)


def test_failed_solve_keeps_previous_results():
    """Test that a singular solve with a tighter tolerance leaves results in place."""
    circuit = Circuit()
    circuit.add_resistor("R1", "A", "GND", 10.0)
    circuit.add_current_source("I1", "GND", "A", 1.0)
    circuit.solve()
    circuit.settings = SolverSettings(pivot_tolerance=1.0)
    with pytest.raises(SingularMatrix):
        circuit.solve()
    assert circuit.voltage("A") == pytest.approx(10.0)


def test_invalid_component_has_no_effect(circuit):
    """Test that a rejected component registers no nodes and adds nothing."""
    with pytest.raises(InvalidArgument):
        circuit.add_resistor("R1", "A", "B", -1.0)
    with pytest.raises(InvalidArgument):
        circuit.add_voltage_source("V1", "C", "C", 1.0)
    with pytest.raises(InvalidArgument):
        circuit.add_current_source("I1", "GND", "0", 1.0)
    with pytest.raises(InvalidArgument):
        circuit.add_resistor("R1", "", "GND", 1.0)
    assert len(circuit) == 0
    assert circuit.node_count == 0


def test_component_indices(circuit):
    r = circuit.add_resistor("R1", "x", "y", 1.0)
    v = circuit.add_voltage_source("V1", "y", "gnd", 2.0)
    assert (r.node_a, r.node_b) == (1, 2)
    assert (v.node_a, v.node_b) == (2, 0)
    assert isinstance(v, VoltageSource)
    assert circuit.components == (r, v)
    assert circuit.node_name(2) == "y"


def test_add_component_by_kind_letter(circuit):
    circuit.add_component("r", "R1", "A", "GND", 10.0)
    circuit.add_component("I", "I1", "GND", "A", 1.0)
    assert [c.kind.value for c in circuit.components] == ["R", "I"]


def test_clear(divider_circuit):
    divider_circuit.solve()
    divider_circuit.clear()
    assert len(divider_circuit) == 0
    assert divider_circuit.node_count == 0
    assert not divider_circuit.has_results
    assert divider_circuit.registry.resolve("GND") == 0
    assert divider_circuit.registry.resolve("new") == 1


def test_source_current_unknown_name(divider_circuit):
    divider_circuit.solve()
    with pytest.raises(KeyError):
        divider_circuit.source_current("R1")


def test_voltage_unknown_node(divider_circuit):
    divider_circuit.solve()
    with pytest.raises(KeyError):
        divider_circuit.voltage("nowhere")


def test_display_order_of_results(circuit):
    circuit.add_voltage_source("V1", "10", "GND", 1.0)
    circuit.add_resistor("R1", "10", "2", 1.0)
    circuit.add_resistor("R2", "2", "GND", 1.0)
    assert list(circuit.solve()) == ["2", "10"]


def test_solver_errors_are_logged(circuit, caplog):
    circuit.add_resistor("R1", "A", "B", 1.0)
    with caplog.at_level(logging.ERROR):
        with pytest.raises(InvalidState):
            circuit.solve()
    assert "Solver error" in caplog.text


def test_sanity_warnings_logged(circuit, caplog):
    """Test that a floating subcircuit is reported before the singular failure."""
    circuit.add_resistor("R1", "A", "GND", 1.0)
    circuit.add_resistor("R2", "B", "C", 1.0)
    with caplog.at_level(logging.WARNING):
        with pytest.raises(SingularMatrix):
            circuit.solve()
    assert "Floating nodes detected" in caplog.text


def test_sanity_checks_can_be_disabled(caplog):
    circuit = Circuit(settings=SolverSettings(run_sanity_checks=False))
    circuit.add_resistor("R1", "A", "GND", 1.0)
    circuit.add_resistor("R2", "B", "C", 1.0)
    with caplog.at_level(logging.WARNING):
        with pytest.raises(SingularMatrix):
            circuit.solve()
    assert "Floating nodes detected" not in caplog.text
