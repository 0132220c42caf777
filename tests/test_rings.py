"""Tests for SSSR detection and the aromatic-ring adapter."""

import pytest

from stereosmi.aromaticity import flagged_aromaticity
from stereosmi.rings import AromaticRings, find_sssr


class TestSSSR:
    """Smallest set of smallest rings."""

    @pytest.mark.parametrize("smiles,sizes", [
        ("CCCC", []),
        ("C1CC1", [3]),
        ("c1ccccc1", [6]),
        ("c1ccc2ccccc2c1", [6, 6]),
        ("C1CC2CCC1C2", [5, 5]),
        ("C12C3C4C1C5C2C3C45", [4, 4, 4, 4, 4]),
        ("C1CC1.C1CCC1", [3, 4]),
    ])
    def test_ring_sizes(self, smiles, sizes, from_smiles):
        rings = find_sssr(from_smiles(smiles))
        assert sorted(len(r) for r in rings) == sizes

    def test_spiro(self, from_smiles):
        rings = find_sssr(from_smiles("C1CCC2(C1)CC2"))
        assert sorted(len(r) for r in rings) == [3, 5]

    def test_rings_are_cycles(self, from_smiles):
        mol = from_smiles("c1ccc2cc3ccccc3cc2c1")
        for ring in find_sssr(mol):
            for atom_idx in ring:
                in_ring = [n for n in mol.neighbors(atom_idx) if n in ring]
                assert len(in_ring) >= 2


class TestAromaticRings:
    """Point queries over a classified ring set."""

    def test_flagged_rings(self, from_smiles):
        mol = from_smiles("Cc1ccccc1")
        adapter = AromaticRings(mol, find_sssr(mol), flagged_aromaticity)
        assert not adapter.is_aromatic(0)
        assert all(adapter.is_aromatic(i) for i in range(1, 7))
        assert 3 in adapter
        assert adapter.is_aromatic_pair(1, 2)
        assert not adapter.is_aromatic_pair(0, 1)

    def test_classifier_decides(self, from_smiles):
        mol = from_smiles("c1ccccc1")
        adapter = AromaticRings(mol, find_sssr(mol), lambda ring, m: False)
        assert not any(adapter.is_aromatic(i) for i in range(6))

    def test_rings_containing(self, from_smiles):
        mol = from_smiles("C1CCC2CCCCC2C1")
        adapter = AromaticRings(mol, find_sssr(mol), flagged_aromaticity)
        fusion = [i for i in range(len(mol.atoms)) if len(adapter.rings_containing(i)) == 2]
        assert len(fusion) == 2
        assert len(adapter.rings_containing(*fusion)) == 2
        assert len(adapter.rings) == 2
