"""Tests for the molecular graph types."""

import pytest

from stereosmi import BondStereo, Molecule


class TestMolecule:
    """Graph construction and queries."""

    def test_add_bond_out_of_range(self):
        mol = Molecule()
        mol.add_atom("C")
        with pytest.raises(IndexError):
            mol.add_bond(0, 1)

    def test_bond_lookup_either_direction(self):
        mol = Molecule()
        mol.add_atom("C")
        mol.add_atom("O")
        mol.add_atom("N")
        mol.add_bond(0, 1, order=2, stereo=BondStereo.UP)
        assert mol.get_bond_between(1, 0) is mol.bonds[0]
        assert mol.get_bond_between(0, 2) is None
        assert mol.bonds[0].is_stereo

    def test_other_atom(self):
        mol = Molecule()
        mol.add_atom("C")
        mol.add_atom("C")
        mol.add_atom("C")
        mol.add_bond(0, 1)
        bond = mol.bonds[0]
        assert bond.other_atom(1) == 0
        with pytest.raises(ValueError):
            bond.other_atom(2)

    def test_connected_components(self, from_smiles):
        mol = from_smiles("CC.O.c1ccccc1")
        assert [len(c) for c in mol.connected_components()] == [2, 1, 6]

    @pytest.mark.parametrize("smiles,idx,expected", [
        ("C", 0, 4),
        ("CC=O", 1, 1),
        ("[NH4+]", 0, 4),
        ("C[O-]", 1, 0),
        ("c1ccccc1", 0, 1),
    ])
    def test_total_hydrogens(self, smiles, idx, expected, from_smiles):
        mol = from_smiles(smiles)
        assert mol.atoms[idx].total_hydrogens(mol) == expected
