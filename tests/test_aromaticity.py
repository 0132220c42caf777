"""Tests for the per-ring aromaticity classifiers."""

import pytest

from stereosmi import Molecule
from stereosmi.aromaticity import RingClassifier, flagged_aromaticity, huckel_aromaticity
from stereosmi.rings import find_sssr


def kekule(smiles, from_smiles) -> Molecule:
    """RDKit Kekulé structure with the aromatic flags cleared."""
    mol = from_smiles(smiles)
    for atom in mol.atoms:
        atom.is_aromatic = False
    return mol


class TestFlagged:
    """Trusting the atom flags."""

    def test_all_flagged(self, from_smiles):
        mol = from_smiles("c1ccccc1")
        assert flagged_aromaticity(find_sssr(mol)[0], mol)

    def test_one_unflagged(self, from_smiles):
        mol = from_smiles("c1ccccc1")
        mol.atoms[2].is_aromatic = False
        assert not flagged_aromaticity(find_sssr(mol)[0], mol)

    def test_empty_ring(self):
        assert not flagged_aromaticity(frozenset(), Molecule())

    def test_protocol(self):
        assert isinstance(flagged_aromaticity, RingClassifier)
        assert isinstance(huckel_aromaticity, RingClassifier)


class TestHuckel:
    """4n+2 electron count on a single ring."""

    @pytest.mark.parametrize("smiles", [
        "C1=CC=CC=C1",
        "C1=CC=NC=C1",
        "C1=COC=C1",
        "C1=CSC=C1",
        "O=C1C=CC=CC=C1",
    ])
    def test_aromatic(self, smiles, from_smiles):
        mol = kekule(smiles, from_smiles)
        rings = find_sssr(mol)
        assert len(rings) == 1
        assert huckel_aromaticity(rings[0], mol)

    @pytest.mark.parametrize("smiles", [
        "C1CCCCC1",
        "C1=CC=C1",
        "C1=CCC=C1",
        "C1=CC=CC=CC=C1",
        "C=C1C=CC=C1",
    ])
    def test_not_aromatic(self, smiles, from_smiles):
        mol = kekule(smiles, from_smiles)
        rings = find_sssr(mol)
        assert len(rings) == 1
        assert not huckel_aromaticity(rings[0], mol)

    def test_fused_rings_classified_separately(self, from_smiles):
        mol = kekule("c1ccc2ccccc2c1", from_smiles)
        assert all(huckel_aromaticity(ring, mol) for ring in find_sssr(mol))
