"""Dense remapping of external node identifiers.

GraphML and GML files name their nodes with arbitrary identifiers (strings in
GraphML, integers in GML). Graphs built by this package always use the
vertices ``1..N``, so readers pass every declared identifier through an
`IdentifierRemapper`, which hands out indices in first-seen order.

Example:
    >>> remapper = IdentifierRemapper()
    >>> remapper.assign("n7")
    1
    >>> remapper.assign("n2")
    2
    >>> remapper.assign("n7")
    1
    >>> remapper.lookup("n2")
    2
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Generic, Hashable, Iterator, List, Tuple, TypeVar

from graphpersist.errors import DuplicateAssignment, UnknownNodeReference

T = TypeVar("T", bound=Hashable)


@dataclass
class IdentifierRemapper(Generic[T]):
    """Bidirectional mapping between external identifiers and 1-based indices.

    Attributes:
        to_index: Maps external identifiers to internal indices.
        to_external: Internal indices back to external identifiers; position
            ``i`` holds the identifier of index ``i + 1``.
    """

    to_index: Dict[T, int] = field(default_factory=dict)
    to_external: List[T] = field(default_factory=list)

    def assign(self, external_id: T) -> int:
        """Return the index of `external_id`, allocating the next one if new.

        Args:
            external_id: Identifier as written in the source file.

        Returns:
            Internal index in ``1..len(self)``.
        """
        index = self.to_index.get(external_id)
        if index is None:
            self.to_external.append(external_id)
            index = len(self.to_external)
            self.to_index[external_id] = index
        return index

    def declare(self, external_id: T) -> int:
        """Assign an index to a node declaration that must be unique.

        Raises:
            DuplicateAssignment: If `external_id` was declared before.
        """
        if external_id in self.to_index:
            raise DuplicateAssignment(
                f"Node '{external_id}' is declared more than once "
                f"(first as vertex {self.to_index[external_id]})."
            )
        return self.assign(external_id)

    def lookup(self, external_id: T) -> int:
        """Return the index of an already assigned identifier.

        Raises:
            UnknownNodeReference: If `external_id` was never assigned.
        """
        try:
            return self.to_index[external_id]
        except KeyError:
            raise UnknownNodeReference(
                f"Reference to undeclared node '{external_id}'."
            ) from None

    def external_id(self, index: int) -> T:
        """Return the external identifier behind internal `index`.

        Raises:
            KeyError: If `index` is outside ``1..len(self)``.
        """
        if not 1 <= index <= len(self.to_external):
            raise KeyError(index)
        return self.to_external[index - 1]

    def items(self) -> Iterator[Tuple[T, int]]:
        """Yield ``(external_id, index)`` pairs in index order."""
        for i, external_id in enumerate(self.to_external, start=1):
            yield external_id, i

    def __contains__(self, external_id: object) -> bool:
        return external_id in self.to_index

    def __len__(self) -> int:
        return len(self.to_external)
