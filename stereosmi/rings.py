"""
Ring sets and the aromatic-ring adapter.

The generator does not perceive rings itself: it is handed a ring set (by
default the SSSR computed here) and an aromaticity classifier, and only asks
point questions such as "is this atom in an aromatic ring?".
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .aromaticity import RingClassifier
    from .types import Molecule


Ring = frozenset[int]


def find_sssr(mol: "Molecule") -> list[Ring]:
    """Find the Smallest Set of Smallest Rings (SSSR).

    The SSSR is a linearly independent basis of cycles whose size equals the
    cyclomatic number (E - V + C). Candidates are Horton cycles: for every
    root atom and every non-tree bond (u, v) of its BFS tree, the cycle
    root..u-v..root. They are taken smallest first and kept when independent
    of the rings already chosen (Gaussian elimination over GF(2) on bond
    sets).

    Example:
        >>> rings = find_sssr(naphthalene)
        >>> sorted(len(r) for r in rings)
        [6, 6]
    """
    n = len(mol.atoms)
    if n == 0 or not mol.bonds:
        return []

    mu = len(mol.bonds) - n + len(mol.connected_components())
    if mu <= 0:
        return []

    adj: dict[int, list[int]] = {i: list(mol.atoms[i].neighbors(mol)) for i in range(n)}
    bond_bit = {
        frozenset((b.atom1_idx, b.atom2_idx)): 1 << b.idx for b in mol.bonds
    }

    def path_bits(path: list[int]) -> int:
        bits = 0
        for a, b in zip(path, path[1:]):
            bits |= bond_bit[frozenset((a, b))]
        return bits

    candidates: dict[int, Ring] = {}  # bond vector -> ring atoms
    for root in range(n):
        parent = _bfs_parents(adj, root)
        for bond in mol.bonds:
            u, v = bond.atom1_idx, bond.atom2_idx
            if u not in parent or v not in parent or parent[u] == v or parent[v] == u:
                continue
            path_u = _path_to_root(parent, u)
            path_v = _path_to_root(parent, v)
            if set(path_u) & set(path_v) != {root}:
                continue
            vector = path_bits(path_u) | path_bits(path_v) | bond_bit[frozenset((u, v))]
            candidates.setdefault(vector, frozenset(path_u) | frozenset(path_v))

    sssr: list[Ring] = []
    basis: dict[int, int] = {}  # leading bit -> reduced vector
    for vector, ring in sorted(candidates.items(), key=lambda item: (len(item[1]), sorted(item[1]))):
        if len(sssr) >= mu:
            break
        while vector:
            lead = vector.bit_length() - 1
            if lead not in basis:
                basis[lead] = vector
                sssr.append(ring)
                break
            vector ^= basis[lead]

    return sssr


def _bfs_parents(adj: dict[int, list[int]], root: int) -> dict[int, int]:
    """BFS tree from root as a child -> parent map (root maps to -1)."""
    parent = {root: -1}
    queue = deque([root])
    while queue:
        node = queue.popleft()
        for nbr in adj[node]:
            if nbr not in parent:
                parent[nbr] = node
                queue.append(nbr)
    return parent


def _path_to_root(parent: dict[int, int], atom_idx: int) -> list[int]:
    path = [atom_idx]
    while parent[path[-1]] != -1:
        path.append(parent[path[-1]])
    return path


def _shortest_path_avoiding(adj: dict[int, list[int]], start: int, end: int) -> list[int] | None:
    """BFS path from start to end that does not use the direct start-end bond."""
    prev: dict[int, int] = {start: -1}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for nbr in adj[node]:
            if node == start and nbr == end:
                continue
            if nbr in prev:
                continue
            prev[nbr] = node
            if nbr == end:
                path = [end]
                while path[-1] != start:
                    path.append(prev[path[-1]])
                return path
            queue.append(nbr)
    return None


class AromaticRings:
    """Point queries over an externally supplied, externally classified ring set.

    Args:
        mol: Molecule the rings belong to.
        rings: Rings as collections of atom indices.
        classifier: Callable deciding whether one ring is aromatic.
    """

    def __init__(
        self,
        mol: "Molecule",
        rings: Iterable[Iterable[int]],
        classifier: "RingClassifier",
    ) -> None:
        self._rings: list[Ring] = [frozenset(r) for r in rings]
        aromatic: set[int] = set()
        for ring in self._rings:
            if classifier(ring, mol):
                aromatic.update(ring)
        self._aromatic_atoms = frozenset(aromatic)

    def is_aromatic(self, atom_idx: int) -> bool:
        """True if the atom belongs to any ring classified aromatic."""
        return atom_idx in self._aromatic_atoms

    def __contains__(self, atom_idx: int) -> bool:
        return self.is_aromatic(atom_idx)

    def is_aromatic_pair(self, atom1_idx: int, atom2_idx: int) -> bool:
        """True if both atoms are aromatic, so no bond symbol is written."""
        return self.is_aromatic(atom1_idx) and self.is_aromatic(atom2_idx)

    @property
    def rings(self) -> list[Ring]:
        return list(self._rings)

    def rings_containing(self, *atom_indices: int) -> list[Ring]:
        """Rings that contain every one of the given atoms."""
        return [r for r in self._rings if all(a in r for a in atom_indices)]
