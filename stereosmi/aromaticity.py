"""
Per-ring aromaticity classifiers.

The SMILES generator asks one question per ring: is it aromatic? Any
callable ``(ring, mol) -> bool`` will do. Two are provided:

- ``flagged_aromaticity`` trusts the ``is_aromatic`` flags already on the
  atoms (the default; whoever built the molecule decided).
- ``huckel_aromaticity`` counts pi electrons on a Kekulé structure and
  applies Hückel's 4n+2 rule to the single ring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .elements import OUTER_ELECTRONS
from .rings import _shortest_path_avoiding

if TYPE_CHECKING:
    from .rings import Ring
    from .types import Atom, Molecule


@runtime_checkable
class RingClassifier(Protocol):
    """Protocol for deciding whether a single ring is aromatic."""

    def __call__(self, ring: Ring, mol: Molecule) -> bool:
        ...


def flagged_aromaticity(ring: Ring, mol: Molecule) -> bool:
    """A ring is aromatic when every one of its atoms is flagged aromatic."""
    return bool(ring) and all(mol.atoms[i].is_aromatic for i in ring)


# Atoms that pull the pi electron out of an exocyclic double bond (C=O etc.)
_ELECTRON_STEALERS = frozenset({7, 8, 16})


def huckel_aromaticity(ring: Ring, mol: Molecule) -> bool:
    """Hückel 4n+2 test on one ring of a Kekulé structure.

    Each ring atom contributes:
    - 1 electron for a double bond that lies in some ring,
    - 0 electrons for an exocyclic double bond to N, O or S,
    - 2 electrons for a lone pair (N, O, S, P... without double bonds, or a
      carbanion), 0 for an empty p orbital (carbocation, boron).
    Anything else (sp3 carbon, triple bond, other exocyclic double bond)
    makes the ring non-aromatic.
    """
    if len(ring) < 3:
        return False

    adj = {i: list(mol.atoms[i].neighbors(mol)) for i in range(len(mol.atoms))}
    electrons = 0
    for atom_idx in ring:
        count = _count_pi_electrons(mol.atoms[atom_idx], mol, adj)
        if count is None:
            return False
        electrons += count

    return electrons % 4 == 2


def _count_pi_electrons(atom: Atom, mol: Molecule, adj: dict[int, list[int]]) -> int | None:
    double_partner = None
    for bond in atom.get_bonds(mol):
        if bond.order == 3:
            return None
        if bond.order == 2:
            if double_partner is not None:
                return None
            double_partner = bond.other_atom(atom.idx)

    if double_partner is not None:
        if _shortest_path_avoiding(adj, atom.idx, double_partner) is not None:
            return 1
        if mol.atoms[double_partner].atomic_number in _ELECTRON_STEALERS:
            return 0
        return None

    atomic_num = atom.atomic_number
    outer = OUTER_ELECTRONS.get(atomic_num)
    if outer is None:
        return None
    if outer == 3 or (atomic_num == 6 and atom.charge > 0):
        return 0
    if atomic_num == 6:
        return 2 if atom.charge < 0 else None
    connections = len(atom.bond_indices) + atom.total_hydrogens(mol)
    if outer == 5 and connections > 3:
        return None
    if outer == 6 and connections > 2:
        return None
    return 2
