"""
Depth-first spanning tree of a molecule in canonical order.

The tree is a nested sequence of ``Leaf`` (one atom) and ``Branch`` (a
parenthesised sub-chain) nodes. An atom is followed in its sequence by its
branches and then, when its highest-ranked neighbour was still unvisited,
by the leaf that continues the chain. Back edges found during the walk
become ring closures numbered in discovery order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence, Union

from .exceptions import NoStartAtomError

if TYPE_CHECKING:
    from .types import Molecule

@dataclass(frozen=True, slots=True)
class Leaf:
    """One atom of the tree."""
    atom: int

@dataclass(frozen=True, slots=True)
class Branch:
    """A sub-chain hanging off the atom that precedes it."""
    nodes: tuple["Node", ...]

    @property
    def head(self) -> int:
        """The atom that opens the branch."""
        return self.nodes[0].atom

Node = Union[Leaf, Branch]

@dataclass(frozen=True, slots=True)
class RingClosure:
    """A back edge and the marker written at both of its ends."""
    atom1: int
    atom2: int
    marker: int

    def other(self, atom_idx: int) -> int:
        return self.atom2 if atom_idx == self.atom1 else self.atom1

class RingClosures:
    """Ring-closure table keyed by unordered atom pair."""

    def __init__(self) -> None:
        self._by_pair: dict[frozenset[int], RingClosure] = {}
        self._by_atom: dict[int, list[RingClosure]] = {}

    def add(self, atom1: int, atom2: int) -> RingClosure:
        """Record a back edge; a pair seen before keeps its existing marker."""
        key = frozenset((atom1, atom2))
        closure = self._by_pair.get(key)
        if closure is None:
            closure = RingClosure(atom1, atom2, len(self._by_pair) + 1)
            self._by_pair[key] = closure
            self._by_atom.setdefault(atom1, []).append(closure)
            self._by_atom.setdefault(atom2, []).append(closure)
        return closure

    def is_broken(self, atom1: int, atom2: int) -> bool:
        """True if the bond between the two atoms is written as a ring closure."""
        return frozenset((atom1, atom2)) in self._by_pair

    def is_ring_opening(self, atom_idx: int) -> bool:
        """True if the atom carries at least one ring-closure marker."""
        return atom_idx in self._by_atom

    def for_atom(self, atom_idx: int) -> list[RingClosure]:
        """Closures owned by an atom, in ascending marker order."""
        return sorted(self._by_atom.get(atom_idx, ()), key=lambda c: c.marker)

    def __len__(self) -> int:
        return len(self._by_pair)

@dataclass
class SpanningTree:
    """Result of the depth-first walk.

    Attributes:
        roots: One top-level sequence per connected component.
        closures: Ring-closure table.
        parents: DFS parent of every atom (None for component roots).
    """
    roots: list[tuple[Node, ...]] = field(default_factory=list)
    closures: RingClosures = field(default_factory=RingClosures)
    parents: dict[int, int | None] = field(default_factory=dict)

@dataclass(slots=True)
class _Frame:
    """An atom whose neighbours are still being walked."""
    atom: int
    neighbours: list[int]
    seq: list[Node]
    pos: int = 0
    close: tuple[list[Node], list[Node]] | None = None  # (outer sequence, branch)

def build_spanning_tree(mol: Molecule, ranks: Sequence[int]) -> SpanningTree:
    """Build the canonical DFS spanning tree.

    The walk starts at the atom ranked 1; further components start at their
    lowest-ranked atom. Neighbours are taken in ascending rank order. An
    unvisited neighbour continues the current chain only if it is the last
    neighbour in that order, otherwise it opens a branch.

    The walk keeps its own stack, so chain length is not bounded by the
    interpreter's recursion limit.

    Args:
        mol: Molecule to walk.
        ranks: Canonical rank per atom index.

    Returns:
        The spanning tree with its ring-closure table.

    Raises:
        NoStartAtomError: If the molecule is empty or no atom has rank 1.
    """
    if not mol.atoms:
        raise NoStartAtomError("Cannot build a spanning tree of an empty molecule")
    order = sorted(range(len(mol.atoms)), key=lambda i: (ranks[i], i))
    if ranks[order[0]] != 1:
        raise NoStartAtomError("No atom has canonical rank 1")

    tree = SpanningTree()
    visited: set[int] = set()

    def enter(atom_idx: int, parent: int | None, seq: list[Node], close) -> _Frame:
        seq.append(Leaf(atom_idx))
        visited.add(atom_idx)
        tree.parents[atom_idx] = parent
        neighbours = sorted(mol.atoms[atom_idx].neighbors(mol), key=lambda i: (ranks[i], i))
        if parent is not None:
            neighbours.remove(parent)
        return _Frame(atom_idx, neighbours, seq, close=close)

    for start in order:
        if start in visited:
            continue
        root: list[Node] = []
        stack = [enter(start, None, root, None)]
        while stack:
            frame = stack[-1]
            if frame.pos == len(frame.neighbours):
                stack.pop()
                if frame.close is not None:
                    outer, branch = frame.close
                    outer.append(Branch(tuple(branch)))
                continue
            x = frame.pos
            nbr = frame.neighbours[x]
            frame.pos += 1
            if nbr in visited:
                tree.closures.add(frame.atom, nbr)
            elif x == len(frame.neighbours) - 1:
                # the chain continues in the same sequence
                stack[-1] = enter(nbr, frame.atom, frame.seq, frame.close)
            else:
                branch: list[Node] = []
                stack.append(enter(nbr, frame.atom, branch, (frame.seq, branch)))
        tree.roots.append(tuple(root))

    return tree
