"""
Bidirectional mapping between user-facing node names and integer node indices.

Index 0 is reserved for ground. Every other name is assigned the next free
positive index the first time it is seen, so indices follow first-seen order.
"""

import logging
from functools import cmp_to_key
from typing import Dict, Iterator, List

from .errors import InvalidArgument

logger = logging.getLogger(__name__)

GROUND_INDEX = 0
GROUND_NAME = "GND"
GROUND_ALIASES = ("0", "GND")


def is_ground_alias(name: str) -> bool:
    """Return True if the name refers to the ground node ("0", "GND", "gnd", ...)."""
    return name.strip().upper() in GROUND_ALIASES


def _validate_name(name: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgument("Node name cannot be empty.")


def compare_node_names(a: str, b: str) -> int:
    """Compare two node names for display.

    Pure-digit names compare numerically (shorter digit strings first, then
    lexicographically). Any other pair compares lexicographically.
    """
    if a.isdigit() and b.isdigit() and len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    if a == b:
        return 0
    return -1 if a < b else 1


def sort_node_names(names) -> List[str]:
    """Sort node names in display order."""
    return sorted(names, key=cmp_to_key(compare_node_names))


class NodeRegistry:
    """
    Registry of circuit nodes.

    Ground aliases are pre-seeded and always resolve to index 0. The registry
    only grows between clears; there is no removal operation.
    """

    def __init__(self):
        self._name_to_index: Dict[str, int] = {}
        self._index_to_name: Dict[int, str] = {}
        self._next_index = 1

    def resolve(self, name: str) -> int:
        """Return the index for a node name, allocating a new one if unseen.

        Args:
            name: User-facing node name.

        Returns:
            int: Node index (0 for ground).

        Raises:
            InvalidArgument: If the name is empty.
        """
        _validate_name(name)
        if is_ground_alias(name):
            return GROUND_INDEX
        index = self._name_to_index.get(name)
        if index is None:
            index = self._next_index
            self._next_index += 1
            self._name_to_index[name] = index
            self._index_to_name[index] = name
            logger.debug(f"Registered node '{name}' as index {index}")
        return index

    def preview(self, *names: str) -> List[int]:
        """Indices the names would resolve to, in order, without registering them.

        Raises:
            InvalidArgument: If any name is empty.
        """
        pending: Dict[str, int] = {}
        next_index = self._next_index
        indices = []
        for name in names:
            _validate_name(name)
            if is_ground_alias(name):
                indices.append(GROUND_INDEX)
            elif name in self._name_to_index:
                indices.append(self._name_to_index[name])
            else:
                if name not in pending:
                    pending[name] = next_index
                    next_index += 1
                indices.append(pending[name])
        return indices

    def index_of(self, name: str) -> int:
        """Return the index of a known node without allocating."""
        if isinstance(name, str) and name.strip() and is_ground_alias(name):
            return GROUND_INDEX
        if name not in self._name_to_index:
            raise KeyError(f"Unknown node '{name}'.")
        return self._name_to_index[name]

    def contains(self, name: str) -> bool:
        try:
            self.index_of(name)
        except KeyError:
            return False
        return True

    def lookup_name(self, index: int) -> str:
        """Reverse lookup for display. Ground reports as "GND"."""
        if index == GROUND_INDEX:
            return GROUND_NAME
        if index not in self._index_to_name:
            raise KeyError(f"Unknown node index {index}.")
        return self._index_to_name[index]

    def clear(self) -> None:
        """Reset to the initial state: ground only, next index 1."""
        self._name_to_index.clear()
        self._index_to_name.clear()
        self._next_index = 1

    @property
    def node_count(self) -> int:
        """Number of non-ground nodes allocated so far."""
        return self._next_index - 1

    def names(self) -> List[str]:
        """Non-ground node names in display order."""
        return sort_node_names(self._name_to_index)

    def items(self) -> Iterator:
        """Yield (name, index) pairs for non-ground nodes in display order."""
        for name in self.names():
            yield name, self._name_to_index[name]

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def __len__(self) -> int:
        return self.node_count
