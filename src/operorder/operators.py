"""
Operator precedence table.

A lower precedence rank binds tighter: exponentiation is rank 1, addition
rank 3. ``OperatorTable.compare`` translates ranks into the usual
"higher/lower precedence" vocabulary used by the shunting-yard converter.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from .errors import ConfigurationError


class Associativity(Enum):
    """Grouping direction for operators of equal precedence."""

    LEFT = "left"
    RIGHT = "right"


class Precedence(Enum):
    """Result of comparing two operators."""

    HIGHER = 1
    EQUAL = 0
    LOWER = -1


@dataclass(frozen=True)
class OperatorDescriptor:
    """Static properties of a binary operator."""

    symbol: str
    precedence: int
    associativity: Associativity

    @property
    def is_left_associative(self) -> bool:
        return self.associativity is Associativity.LEFT


DEFAULT_OPERATORS: Tuple[OperatorDescriptor, ...] = (
    OperatorDescriptor("**", 1, Associativity.RIGHT),
    OperatorDescriptor("^", 1, Associativity.RIGHT),
    OperatorDescriptor("*", 2, Associativity.LEFT),
    OperatorDescriptor("/", 2, Associativity.LEFT),
    OperatorDescriptor("+", 3, Associativity.LEFT),
    OperatorDescriptor("-", 3, Associativity.LEFT),
)


class OperatorTable:
    """Immutable lookup from operator symbol to its descriptor."""

    def __init__(self, descriptors: Iterable[OperatorDescriptor]):
        self._descriptors: Mapping[str, OperatorDescriptor] = MappingProxyType(
            {d.symbol: d for d in descriptors}
        )

    @property
    def symbols(self) -> frozenset:
        return frozenset(self._descriptors)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._descriptors

    def lookup(self, symbol: str, position: Optional[int] = None) -> OperatorDescriptor:
        """Returns the descriptor for ``symbol``.

        Raises:
            ConfigurationError: If the symbol is not in the table
        """
        descriptor = self._descriptors.get(symbol)
        if descriptor is None:
            raise ConfigurationError(f"Unknown operator: '{symbol}'", position)
        return descriptor

    def compare(self, a: str, b: str) -> Precedence:
        """Compares the precedence of operator ``a`` against operator ``b``."""
        rank_a = self.lookup(a).precedence
        rank_b = self.lookup(b).precedence
        if rank_a < rank_b:
            return Precedence.HIGHER
        if rank_a > rank_b:
            return Precedence.LOWER
        return Precedence.EQUAL


DEFAULT_OPERATOR_TABLE = OperatorTable(DEFAULT_OPERATORS)
