"""
Line-oriented circuit file format.

Each line holds one component:

    <Kind> <Name> <NodeA> <NodeB> <Magnitude>

Kind is one of R, I, V (either case). Lines that do not parse are skipped with
a warning. Components are written and read back in circuit order.
"""

import logging
from typing import List, Optional, Tuple

from .circuit import Circuit
from .components import ComponentKind
from .errors import CircuitError, InvalidArgument, IOFailure

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


def format_component_line(kind: str, name: str, node_a: str, node_b: str, value: float) -> str:
    for field_name, token in (("name", name), ("node A", node_a), ("node B", node_b)):
        if not token or any(ch.isspace() for ch in token):
            raise InvalidArgument(f"Cannot save component '{name}': {field_name} '{token}' contains whitespace.")
    return f"{kind} {name} {node_a} {node_b} {float(value)!r}"


def parse_component_line(line: str) -> Optional[Tuple[ComponentKind, str, str, str, float]]:
    """
    Parse one netlist line.

    Returns:
        Tuple (kind, name, node_a, node_b, value), or None if the line is
        malformed or has an unknown kind letter.
    """
    tokens = line.split()
    if len(tokens) != 5:
        return None
    kind_token, name, node_a, node_b, value_token = tokens
    try:
        kind = ComponentKind(kind_token.upper())
        value = float(value_token)
    except ValueError:
        return None
    return kind, name, node_a, node_b, value


def save_circuit(circuit: Circuit, filename: str) -> int:
    """
    Write the circuit to a file, one component per line.

    Returns:
        int: Number of components written

    Raises:
        InvalidArgument: If a name cannot be represented in the format
        IOFailure: If the file cannot be opened for writing
    """
    lines: List[str] = []
    for component in circuit.components:
        lines.append(format_component_line(
            component.kind.value,
            component.name,
            circuit.node_name(component.node_a),
            circuit.node_name(component.node_b),
            component.value,
        ))

    try:
        with open(filename, "w") as out_file:
            for line in lines:
                out_file.write(line + "\n")
    except OSError as exc:
        raise IOFailure(f"Could not save to file {filename}: {exc}") from exc

    logger.info(f"Circuit saved to {filename}")
    return len(lines)


def load_circuit(circuit: Circuit, filename: str) -> int:
    """
    Replace the circuit contents with the components stored in a file.

    Malformed lines are skipped. An invalid component (e.g. a non-positive
    resistance) aborts the load and leaves the circuit empty.

    Returns:
        int: Number of components loaded

    Raises:
        IOFailure: If the file cannot be opened; the circuit is unchanged
        InvalidArgument: If a line describes an invalid component; the circuit is cleared
    """
    try:
        with open(filename, "r") as in_file:
            lines = in_file.readlines()
    except OSError as exc:
        raise IOFailure(f"Could not open file {filename}: {exc}") from exc

    circuit.clear()
    count = 0
    try:
        for line_number, line in enumerate(lines, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith(COMMENT_PREFIX):
                continue
            parsed = parse_component_line(stripped)
            if parsed is None:
                logger.warning(f"Skipping malformed line {line_number}: {stripped}")
                continue
            circuit.add_component(*parsed)
            count += 1
    except CircuitError as exc:
        logger.error(f"Error loading {filename}: {exc}")
        circuit.clear()
        raise

    logger.info(f"Loaded {count} components from {filename}")
    return count
