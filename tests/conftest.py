import pytest
from mna_solver.core.circuit import Circuit


@pytest.fixture
def circuit():
    """Empty circuit with default settings."""
    return Circuit()


@pytest.fixture
def divider_circuit():
    """10 V source feeding a 1k/2k divider: V(in)=10, V(out)=20/3."""
    c = Circuit()
    c.add_voltage_source("V1", "in", "GND", 10.0)
    c.add_resistor("R1", "in", "out", 1000.0)
    c.add_resistor("R2", "out", "GND", 2000.0)
    return c


@pytest.fixture
def bridge_circuit():
    """Unbalanced Wheatstone bridge driven by a single voltage source."""
    c = Circuit()
    c.add_voltage_source("Vs", "top", "0", 12.0)
    c.add_resistor("R1", "top", "a", 100.0)
    c.add_resistor("R2", "top", "b", 220.0)
    c.add_resistor("R3", "a", "gnd", 330.0)
    c.add_resistor("R4", "b", "GND", 470.0)
    c.add_resistor("R5", "a", "b", 50.0)
    return c
