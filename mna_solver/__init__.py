from .core import (
    Circuit, NodeRegistry, SolverSettings,
    CircuitError, InvalidArgument, InvalidState, SingularMatrix, IOFailure,
)
from .core.components import Resistor, CurrentSource, VoltageSource, make_component
from .core.gaussian import gaussian_elimination
from .core.netlist import save_circuit, load_circuit

__version__ = "0.1.0"

# Export the main classes and functions that users will need
__all__ = [
    'Circuit',
    'NodeRegistry',
    'SolverSettings',
    'Resistor',
    'CurrentSource',
    'VoltageSource',
    'make_component',
    'gaussian_elimination',
    'save_circuit',
    'load_circuit',
    'CircuitError',
    'InvalidArgument',
    'InvalidState',
    'SingularMatrix',
    'IOFailure',
]
