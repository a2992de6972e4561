from abc import ABC
from enum import Enum
from typing import ClassVar, Dict, Type
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import InvalidArgument


class ComponentKind(str, Enum):
    """Kind letter used in netlists and for stamping dispatch."""
    RESISTOR = "R"
    CURRENT_SOURCE = "I"
    VOLTAGE_SOURCE = "V"


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(loc) for loc in error.get("loc", ())) or "input"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


class Component(BaseModel, ABC):
    """Abstract base class for all two-terminal circuit components.

    Components reference their endpoints by node index, not by name. They are
    immutable once constructed.
    """
    name: str = Field(..., min_length=1, description="Display name, not required to be unique")
    node_a: int = Field(..., ge=0, description="Index of the first node")
    node_b: int = Field(..., ge=0, description="Index of the second node")
    value: float = Field(..., description="Resistance (ohms), current (amperes) or voltage (volts)")

    kind: ClassVar[ComponentKind]
    label: ClassVar[str] = "Component"
    unit: ClassVar[str] = ""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    def __init__(self, **data):
        """Validate and build the component, reporting every failure as InvalidArgument."""
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidArgument(
                f"Invalid {type(self).label} '{data.get('name')}': {_describe_validation_error(exc)}"
            ) from exc

    @model_validator(mode="after")
    def validate_distinct_nodes(self) -> "Component":
        """A component cannot be connected to the same node at both ends."""
        if self.node_a == self.node_b:
            raise InvalidArgument(
                f"{self.label} '{self.name}' cannot be connected to the same node."
            )
        return self

    def touches(self, node: int) -> bool:
        """Check if the component is connected to the given node index."""
        return node in (self.node_a, self.node_b)

    def other_node(self, node: int) -> int:
        """Return the opposite endpoint of the given node index."""
        if node == self.node_a:
            return self.node_b
        if node == self.node_b:
            return self.node_a
        raise ValueError(f"Node {node} is not an endpoint of '{self.name}'")


class Resistor(Component):
    """Resistor component."""
    kind: ClassVar[ComponentKind] = ComponentKind.RESISTOR
    label: ClassVar[str] = "Resistor"
    unit: ClassVar[str] = "Ohm"

    def __init__(self, name: str, node_a: int, node_b: int, resistance: float, **data):
        """Initialize resistor with positional arguments support."""
        super().__init__(name=name, node_a=node_a, node_b=node_b, value=resistance, **data)

    @model_validator(mode="after")
    def validate_positive_resistance(self) -> "Resistor":
        """Validate that the resistance is strictly positive."""
        if self.value <= 0:
            raise InvalidArgument(
                f"Resistance of resistor '{self.name}' must be positive, got {self.value}."
            )
        return self

    @property
    def resistance(self) -> float:
        return self.value

    @property
    def conductance(self) -> float:
        """Conductance G = 1/R used as the stamping coefficient."""
        return 1.0 / self.value


class CurrentSource(Component):
    """Ideal current source. Positive current flows from node_a to node_b through the source."""
    kind: ClassVar[ComponentKind] = ComponentKind.CURRENT_SOURCE
    label: ClassVar[str] = "Current source"
    unit: ClassVar[str] = "A"

    def __init__(self, name: str, node_a: int, node_b: int, current: float, **data):
        """Initialize current source with positional arguments support."""
        super().__init__(name=name, node_a=node_a, node_b=node_b, value=current, **data)

    @property
    def current(self) -> float:
        return self.value


class VoltageSource(Component):
    """Ideal voltage source enforcing V(node_a) - V(node_b) = voltage."""
    kind: ClassVar[ComponentKind] = ComponentKind.VOLTAGE_SOURCE
    label: ClassVar[str] = "Voltage source"
    unit: ClassVar[str] = "V"

    def __init__(self, name: str, node_a: int, node_b: int, voltage: float, **data):
        """Initialize voltage source with positional arguments support."""
        super().__init__(name=name, node_a=node_a, node_b=node_b, value=voltage, **data)

    @property
    def voltage(self) -> float:
        return self.value


COMPONENT_TYPES: Dict[ComponentKind, Type[Component]] = {
    ComponentKind.RESISTOR: Resistor,
    ComponentKind.CURRENT_SOURCE: CurrentSource,
    ComponentKind.VOLTAGE_SOURCE: VoltageSource,
}


def parse_kind(kind) -> ComponentKind:
    """Map a kind letter ("R", "r", "I", "i", "V", "v") to a ComponentKind."""
    if isinstance(kind, ComponentKind):
        return kind
    try:
        return ComponentKind(str(kind).strip().upper())
    except ValueError:
        raise InvalidArgument(f"Unknown component kind '{kind}'.") from None


def make_component(kind, name: str, node_a: int, node_b: int, value: float) -> Component:
    """Build a component of the given kind letter."""
    cls = COMPONENT_TYPES[parse_kind(kind)]
    return cls(name, node_a, node_b, value)
