from mna_solver.core.circuit import Circuit
from mna_solver.core.solver_settings import SolverSettings
from mna_solver.core.visualization import render_adjacency, to_graphviz, format_results


def test_adjacency_of_empty_circuit(circuit):
    assert render_adjacency(circuit) == "Circuit is empty. Nothing to visualize."


def test_adjacency_arrows(circuit):
    """Test connector symbols seen from each endpoint."""
    circuit.add_voltage_source("V1", "A", "GND", 5.0)
    circuit.add_current_source("I1", "A", "B", 0.5)
    circuit.add_resistor("R1", "B", "GND", 10.0)
    text = render_adjacency(circuit)
    lines = text.splitlines()

    assert lines[0].startswith("====== CIRCUIT GRAPH TOPOLOGY")
    assert lines[1] == " Node [GND] connects to:"
    assert "   |-- [V1 (5)] -(-) Node [A]" in lines
    assert "   |-- [R1 (10)] --- Node [B]" in lines
    assert "   |-- [V1 (5)] (+)- Node [GND]" in lines
    assert "   |-- [I1 (0.5)] --> Node [B]" in lines
    assert "   |-- [I1 (0.5)] <-- Node [A]" in lines


def test_adjacency_marks_isolated_ground(circuit):
    circuit.add_resistor("R1", "A", "B", 1.0)
    text = render_adjacency(circuit)
    assert " Node [GND] connects to:\n   (No connections - Isolated)" in text


def test_graphviz_export(circuit):
    circuit.add_voltage_source("V1", "in", "0", 12.0)
    circuit.add_resistor("R1", "in", "out", 470.0)
    circuit.add_current_source("I1", "out", "gnd", 0.002)
    dot = to_graphviz(circuit)
    assert dot.startswith("graph Circuit {")
    assert dot.endswith("}")
    assert "  rankdir=LR;" in dot
    assert '  "in" -- "GND" [label="V1\\n12 V"];' in dot
    assert '  "in" -- "out" [label="R1\\n470 Ohm"];' in dot
    assert '  "out" -- "GND" [label="I1\\n0.002 A"];' in dot


def test_format_results_before_solve(divider_circuit):
    assert "No results available" in format_results(divider_circuit)


def test_format_results(divider_circuit):
    divider_circuit.solve()
    assert format_results(divider_circuit).splitlines() == [
        "--- Simulation Results ---",
        "Node [in]: 10.000 V",
        "Node [out]: 6.667 V",
        "--------------------------",
    ]


def test_format_results_precision_from_settings():
    circuit = Circuit(settings=SolverSettings(result_precision=1))
    circuit.add_resistor("R1", "A", "GND", 3.0)
    circuit.add_current_source("I1", "GND", "A", 1.0)
    circuit.solve()
    assert "Node [A]: 3.0 V" in format_results(circuit)
    assert "Node [A]: 3.00000 V" in format_results(circuit, precision=5)
