"""Test configuration and fixtures for stereosmi tests."""

from __future__ import annotations

import math
import re
from typing import Callable

import pytest

# RDKit is used as an independent reference: it supplies molecule graphs and
# 2-D layouts, and parses our output back.
from rdkit import Chem
from rdkit.Chem import AllChem

from stereosmi import BondStereo, Molecule


_RDKIT_ORDERS = {
    Chem.BondType.SINGLE: 1,
    Chem.BondType.DOUBLE: 2,
    Chem.BondType.TRIPLE: 3,
}

_RDKIT_WEDGES = {
    Chem.BondDir.BEGINWEDGE: BondStereo.UP,
    Chem.BondDir.BEGINDASH: BondStereo.DOWN,
}


def molecule_from_rdkit(smiles: str, coordinates: bool = False, wedges: bool = False) -> Molecule:
    """Build a Molecule from SMILES via RDKit.

    Bond orders come from RDKit's Kekulé form; aromatic flags are kept on
    the atoms so the default ring classifier sees them.

    Args:
        smiles: Input SMILES.
        coordinates: Also copy an RDKit 2-D layout onto the atoms.
        wedges: Also let RDKit wedge its stereocentres (implies
            coordinates). A wedged bond starts at its stereocentre.
    """
    rdmol = Chem.MolFromSmiles(smiles)
    if rdmol is None:
        raise ValueError(f"RDKit could not parse: {smiles}")
    rdmol = Chem.Mol(rdmol)
    Chem.Kekulize(rdmol, clearAromaticFlags=False)
    coordinates = coordinates or wedges
    if coordinates:
        AllChem.Compute2DCoords(rdmol)
    if wedges:
        Chem.WedgeMolBonds(rdmol, rdmol.GetConformer())

    mol = Molecule()
    for atom in rdmol.GetAtoms():
        point = None
        if coordinates:
            pos = rdmol.GetConformer().GetAtomPosition(atom.GetIdx())
            point = (pos.x, pos.y)
        mol.add_atom(
            atom.GetSymbol(),
            charge=atom.GetFormalCharge(),
            is_aromatic=atom.GetIsAromatic(),
            isotope=atom.GetIsotope() or None,
            point2d=point,
        )
    for bond in rdmol.GetBonds():
        begin, end = bond.GetBeginAtomIdx(), bond.GetEndAtomIdx()
        stereo = _RDKIT_WEDGES.get(bond.GetBondDir(), BondStereo.NONE) if wedges else BondStereo.NONE
        if stereo != BondStereo.NONE and bond.GetBeginAtom().GetChiralTag() == Chem.ChiralType.CHI_UNSPECIFIED:
            begin, end = end, begin
        mol.add_bond(begin, end, order=_RDKIT_ORDERS[bond.GetBondType()], stereo=stereo)
    return mol


def rdkit_canonical(smiles: str) -> str:
    """RDKit canonical SMILES without stereo, for connectivity comparison."""
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"RDKit could not parse: {smiles}")
    return Chem.MolToSmiles(mol, canonical=True, isomericSmiles=False)


def rdkit_canonical_isomeric(smiles: str) -> str:
    """RDKit canonical SMILES with stereochemistry."""
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"RDKit could not parse: {smiles}")
    return Chem.MolToSmiles(mol, canonical=True, isomericSmiles=True)


_RING_DIGIT = re.compile(r"%\((\d+)\)|%(\d\d)|(\d)")


def ring_digits(smiles: str) -> list[int]:
    """Ring-closure markers in order of appearance (bracket contents skipped)."""
    bare = re.sub(r"\[[^\]]*\]", "", smiles)
    return [int(next(g for g in m.groups() if g)) for m in _RING_DIGIT.finditer(bare)]


def build_molecule(atoms: list[tuple], bonds: list[tuple]) -> Molecule:
    """Build a Molecule from compact tuples.

    Args:
        atoms: ``(symbol, rank, (x, y))`` per atom; rank or point may be None.
        bonds: ``(a, b)``, ``(a, b, order)`` or ``(a, b, order, stereo)``.
    """
    mol = Molecule()
    for symbol, rank, point in atoms:
        mol.add_atom(symbol, canonical_rank=rank, point2d=point)
    for entry in bonds:
        a, b = entry[:2]
        order = entry[2] if len(entry) > 2 else 1
        stereo = entry[3] if len(entry) > 3 else BondStereo.NONE
        mol.add_bond(a, b, order=order, stereo=stereo)
    return mol

def rotate_drawing(mol: Molecule, degrees: float) -> Molecule:
    """Rotate every 2-D coordinate of mol in place about the origin."""
    theta = math.radians(degrees)
    for atom in mol.atoms:
        x, y = atom.point2d
        atom.point2d = (x * math.cos(theta) - y * math.sin(theta), x * math.sin(theta) + y * math.cos(theta))
    return mol


@pytest.fixture
def from_smiles() -> Callable[..., Molecule]:
    """Factory building Molecules from SMILES through RDKit."""
    return molecule_from_rdkit


@pytest.fixture
def tetrahedral_centre() -> Molecule:
    """C-C(N)(O)F drawn with one wedge, the centre reached from the methyl.

    The methyl sits below the centre, N to the left, O to the right and
    the wedged F on top.
    """
    return build_molecule(
        [
            ("C", 1, (0.0, -1.0)),
            ("C", 2, (0.0, 0.0)),
            ("N", 3, (-1.0, 0.5)),
            ("O", 4, (1.0, 0.5)),
            ("F", 5, (0.0, 1.0)),
        ],
        [(0, 1), (1, 2), (1, 3), (1, 4, 1, BondStereo.UP)],
    )


@pytest.fixture
def simple_smiles() -> list[str]:
    """Basic valid SMILES strings for smoke testing."""
    return [
        "C",
        "CC",
        "CCC",
        "CCO",
        "C=C",
        "C#C",
        "C=O",
        "C#N",
        "CC(C)C",
    ]


@pytest.fixture
def aromatic_smiles() -> list[str]:
    """Aromatic SMILES strings."""
    return [
        "c1ccccc1",
        "c1ccncc1",
        "c1ccoc1",
        "c1ccsc1",
        "c1ccc2ccccc2c1",
        "Cc1ccccc1",
    ]


@pytest.fixture
def ring_smiles() -> list[str]:
    """SMILES with ring closures."""
    return [
        "C1CC1",
        "C1CCC1",
        "C1CCCCC1",
        "C1CC2CCCCC2C1",
        "C12CC1CC2",
        "C1CC2CC1C2",
    ]
