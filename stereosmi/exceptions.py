"""Custom exceptions for stereosmi."""

from __future__ import annotations


class ChemError(Exception):
    """Base exception for chemistry-related errors."""
    pass


class MissingCoordinatesError(ChemError):
    """Stereo output was requested but an atom has no 2-D coordinate."""

    def __init__(self, atom_idx: int):
        self.atom_idx = atom_idx
        super().__init__(f"Atom number {atom_idx} has no 2D coordinates")


class NoStartAtomError(ChemError):
    """No atom carries canonical rank 1, so traversal cannot start."""
    pass


class UnrepresentableBondOrderError(ChemError):
    """Bond order that has no SMILES bond symbol."""

    def __init__(self, bond_idx: int, order: float):
        self.bond_idx = bond_idx
        self.order = order
        super().__init__(f"Bond {bond_idx} has unrepresentable order {order!r}")


class UnrepresentableBondOrderWarning(UserWarning):
    """Bond order that has no SMILES bond symbol was written as nothing."""
    pass
