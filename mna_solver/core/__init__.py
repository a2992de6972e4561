# mna_solver/core/__init__.py

# Import from errors.py
from .errors import CircuitError, InvalidArgument, InvalidState, SingularMatrix, IOFailure

# Import from circuit.py
from .circuit import Circuit

# Import from solver_settings.py
from .solver_settings import SolverSettings

# Import from node_registry.py
from .node_registry import NodeRegistry

# Define what should be available when someone imports from mna_solver.core
__all__ = [
    # Main classes
    'Circuit',
    'NodeRegistry',
    'SolverSettings',
    # Errors
    'CircuitError',
    'InvalidArgument',
    'InvalidState',
    'SingularMatrix',
    'IOFailure',
]
