"""
Canonical ranking and graph invariants.

The SMILES generator treats canonical ranks as an input: when atoms do not
carry ``canonical_rank`` it falls back to ``canonical_ranks`` here. The
Morgan numbers are the graph invariants the stereo resolver uses to tell
apart neighbours that share an element symbol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Hashable, Sequence

if TYPE_CHECKING:
    from .types import Molecule


# =============================================================================
# Partition refinement
# =============================================================================

def _dense_ranks(keys: Sequence[Hashable]) -> list[int]:
    """Map sortable keys to dense 0-based class indices (equal keys share one)."""
    ordered = sorted(set(keys))
    index = {key: i for i, key in enumerate(ordered)}
    return [index[key] for key in keys]


def _atom_invariant(mol: Molecule, atom_idx: int) -> tuple:
    atom = mol.atoms[atom_idx]
    return (
        len(atom.bond_indices),
        atom.atomic_number,
        atom.isotope or 0,
        atom.charge,
        atom.total_hydrogens(mol),
        atom.is_aromatic,
    )


def _refine_partitions(mol: Molecule, classes: list[int]) -> list[int]:
    """Split classes by sorted (neighbour class, bond order) until stable."""
    n_classes = len(set(classes))
    while True:
        keys = []
        for atom in mol.atoms:
            env = sorted(
                (classes[bond.other_atom(atom.idx)], bond.order)
                for bond in atom.get_bonds(mol)
            )
            keys.append((classes[atom.idx], tuple(env)))
        refined = _dense_ranks(keys)
        n_refined = len(set(refined))
        if n_refined == n_classes:
            return refined
        classes, n_classes = refined, n_refined


def _break_ties(mol: Molecule, classes: list[int]) -> list[int]:
    """Break remaining ties: split off the lowest-index atom of the first tied class."""
    n = len(classes)
    while len(set(classes)) < n:
        seen: dict[int, int] = {}
        tied_class = None
        for idx in sorted(range(n), key=lambda i: (classes[i], i)):
            if classes[idx] in seen:
                tied_class = classes[idx]
                break
            seen[classes[idx]] = idx
        chosen = seen[tied_class]
        classes = [2 * c + (1 if c == tied_class and i != chosen else 0) for i, c in enumerate(classes)]
        classes = _refine_partitions(mol, _dense_ranks(classes))
    return classes


# =============================================================================
# Public API
# =============================================================================

def canonical_ranks(mol: Molecule) -> list[int]:
    """Compute 1-based canonical ranks for a molecule.

    Atoms are partitioned by local invariants (degree, element, isotope,
    charge, hydrogens, aromatic flag), the partition is refined by
    neighbourhoods until stable, and remaining ties are broken one at a
    time. Rank 1 is the atom with the smallest invariants.

    Args:
        mol: Molecule to rank.

    Returns:
        List of ranks indexed by atom index, a permutation of 1..N.

    Example:
        >>> ranks = canonical_ranks(mol)
        >>> start = ranks.index(1)
    """
    if not mol.atoms:
        return []
    classes = _dense_ranks([_atom_invariant(mol, i) for i in range(len(mol.atoms))])
    classes = _refine_partitions(mol, classes)
    classes = _break_ties(mol, classes)
    return [c + 1 for c in classes]


def morgan_numbers(mol: Molecule) -> list[int]:
    """Extended connectivity values (Morgan algorithm).

    Starting from the atom degrees, every atom's value is repeatedly
    replaced by the sum of its neighbours' values. Iteration stops as soon
    as the number of distinct values no longer grows; the last values that
    still increased it are returned. Symmetry-equivalent atoms get equal
    numbers.
    """
    values = [len(atom.bond_indices) for atom in mol.atoms]
    n_distinct = len(set(values))
    while True:
        new_values = [
            sum(values[nbr] for nbr in atom.neighbors(mol))
            for atom in mol.atoms
        ]
        n_new = len(set(new_values))
        if n_new <= n_distinct:
            return values
        values, n_distinct = new_values, n_new
