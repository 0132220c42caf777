"""
Core molecular data types.

This module defines the molecular graph consumed by the SMILES generator:
Atom, Bond and Molecule. The generator only reads these objects; every piece
of per-call scratch state lives in side tables owned by the generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator

from .elements import (
    BondOrder,
    get_atomic_number,
    get_default_valence,
)

Point2D = tuple[float, float]


class BondStereo(IntEnum):
    """Wedge marker on a bond as drawn in a 2-D depiction."""

    NONE = 0
    UP = 1
    DOWN = -1
    UNDEFINED = 4

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(slots=True)
class Bond:
    """Represents a chemical bond between two atoms.

    Attributes:
        idx: Unique index of this bond in the molecule.
        atom1_idx: Index of the first atom.
        atom2_idx: Index of the second atom.
        order: Bond order (1=single, 2=double, 3=triple). Other values
            cannot be written and are reported when encountered.
        stereo: Wedge marker (up, down, undefined or none).
    """

    idx: int
    atom1_idx: int
    atom2_idx: int
    order: float = BondOrder.SINGLE
    stereo: BondStereo = BondStereo.NONE

    def other_atom(self, atom_idx: int) -> int:
        """Get the index of the atom on the other end of this bond.

        Raises:
            ValueError: If atom_idx is not part of this bond.
        """
        if atom_idx == self.atom1_idx:
            return self.atom2_idx
        if atom_idx == self.atom2_idx:
            return self.atom1_idx
        raise ValueError(f"Atom {atom_idx} not in bond {self.idx}")

    @property
    def is_stereo(self) -> bool:
        """True if the bond carries any wedge marker."""
        return self.stereo != BondStereo.NONE

    def __contains__(self, atom_idx: int) -> bool:
        return atom_idx in (self.atom1_idx, self.atom2_idx)


@dataclass(slots=True)
class Atom:
    """Represents an atom in a molecule.

    Attributes:
        idx: Unique index of this atom in the molecule.
        symbol: Element symbol (e.g., "C", "N", "Cl").
        charge: Formal charge.
        explicit_hydrogens: Hydrogen count carried by the atom itself.
        is_aromatic: Aromatic flag as set by whoever built the molecule.
        isotope: Mass number, or None for natural abundance.
        canonical_rank: 1-based canonical rank, or None if not assigned.
        point2d: 2-D depiction coordinate, or None.
        bond_indices: Indices of bonds connected to this atom.
    """

    idx: int
    symbol: str
    charge: int = 0
    explicit_hydrogens: int = 0
    is_aromatic: bool = False
    isotope: int | None = None
    canonical_rank: int | None = None
    point2d: Point2D | None = None
    bond_indices: list[int] = field(default_factory=list)

    @property
    def atomic_number(self) -> int:
        """Get the atomic number for this element."""
        return get_atomic_number(self.symbol)

    @property
    def default_valence(self) -> int | None:
        """Get the default valence for this element."""
        return get_default_valence(self.atomic_number)

    def neighbors(self, mol: "Molecule") -> Iterator[int]:
        """Iterate over indices of neighbouring atoms, in bond order."""
        for bond_idx in self.bond_indices:
            yield mol.bonds[bond_idx].other_atom(self.idx)

    def get_bonds(self, mol: "Molecule") -> Iterator[Bond]:
        """Iterate over bonds connected to this atom."""
        for bond_idx in self.bond_indices:
            yield mol.bonds[bond_idx]

    def total_hydrogens(self, mol: "Molecule") -> int:
        """Explicit hydrogens plus those implied by the default valence."""
        default_val = self.default_valence
        if default_val is None:
            return self.explicit_hydrogens

        bond_order_sum = sum(bond.order for bond in self.get_bonds(mol))

        implicit = max(
            0,
            default_val - int(round(bond_order_sum)) + self.charge - self.explicit_hydrogens
        )
        return self.explicit_hydrogens + implicit


@dataclass
class Molecule:
    """A molecular graph with optional depiction coordinates.

    Example:
        >>> mol = Molecule()
        >>> c1 = mol.add_atom("C")
        >>> c2 = mol.add_atom("C")
        >>> mol.add_bond(c1, c2)
        0
        >>> len(mol)
        2
    """

    atoms: list[Atom] = field(default_factory=list)
    bonds: list[Bond] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.atoms)

    def add_atom(
        self,
        symbol: str,
        *,
        charge: int = 0,
        explicit_hydrogens: int = 0,
        is_aromatic: bool = False,
        isotope: int | None = None,
        canonical_rank: int | None = None,
        point2d: Point2D | None = None,
    ) -> int:
        """Append an atom and return its index."""
        idx = len(self.atoms)
        self.atoms.append(Atom(
            idx=idx,
            symbol=symbol,
            charge=charge,
            explicit_hydrogens=explicit_hydrogens,
            is_aromatic=is_aromatic,
            isotope=isotope,
            canonical_rank=canonical_rank,
            point2d=point2d,
        ))
        return idx

    def add_bond(
        self,
        atom1_idx: int,
        atom2_idx: int,
        *,
        order: float = BondOrder.SINGLE,
        stereo: BondStereo = BondStereo.NONE,
    ) -> int:
        """Bond two existing atoms and return the bond index.

        Raises:
            IndexError: If either atom index is out of bounds.
        """
        if atom1_idx >= len(self.atoms) or atom2_idx >= len(self.atoms):
            raise IndexError(f"Atom index out of bounds: {atom1_idx}, {atom2_idx}")

        idx = len(self.bonds)
        self.bonds.append(Bond(idx, atom1_idx, atom2_idx, order=order, stereo=stereo))
        self.atoms[atom1_idx].bond_indices.append(idx)
        self.atoms[atom2_idx].bond_indices.append(idx)
        return idx

    def get_bond_between(self, atom1_idx: int, atom2_idx: int) -> Bond | None:
        """Find the bond between two atoms, or None."""
        for bond in self.atoms[atom1_idx].get_bonds(self):
            if atom2_idx in bond:
                return bond
        return None

    def neighbors(self, atom_idx: int) -> list[int]:
        """Indices of atoms bonded to atom_idx, in bond order."""
        return list(self.atoms[atom_idx].neighbors(self))

    def connected_components(self) -> list[list[int]]:
        """Atom indices of each fragment, sorted, in order of lowest index."""
        seen = [False] * len(self.atoms)
        components: list[list[int]] = []
        for start in range(len(self.atoms)):
            if seen[start]:
                continue
            seen[start] = True
            todo = [start]
            members = []
            while todo:
                current = todo.pop()
                members.append(current)
                for nbr in self.atoms[current].neighbors(self):
                    if not seen[nbr]:
                        seen[nbr] = True
                        todo.append(nbr)
            components.append(sorted(members))
        return components
