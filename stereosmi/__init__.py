"""
Stereosmi - canonical and chiral SMILES generation in pure Python.

A zero-dependency library that writes canonical SMILES for a molecule
graph, optionally reading tetrahedral, square-planar, bipyramidal and
cis/trans configuration from the wedge bonds of a 2-D depiction.

    >>> from stereosmi import Molecule, create_smiles
    >>> mol = Molecule()
    >>> c = mol.add_atom("C")
    >>> o = mol.add_atom("O")
    >>> _ = mol.add_bond(c, o)
    >>> create_smiles(mol)
    'CO'

Submodules:
    stereosmi.canon       - Canonical ranks and Morgan numbers
    stereosmi.rings       - SSSR and the aromatic-ring adapter
    stereosmi.aromaticity - Per-ring aromaticity classifiers
    stereosmi.stereo      - Stereo descriptors from 2-D geometry
"""

__version__ = "0.1.0"

# Core types
from stereosmi.types import Atom, Bond, BondStereo, Molecule

# Writing
from stereosmi.writer import (
    SmilesGenerator,
    create_chiral_smiles,
    create_smiles,
    generate,
)
from stereosmi.canon import canonical_ranks, morgan_numbers

# Oracles
from stereosmi.rings import AromaticRings, find_sssr
from stereosmi.aromaticity import RingClassifier, flagged_aromaticity, huckel_aromaticity

# Exceptions
from stereosmi.exceptions import (
    ChemError,
    MissingCoordinatesError,
    NoStartAtomError,
    UnrepresentableBondOrderError,
    UnrepresentableBondOrderWarning,
)

# Element data
from stereosmi.elements import BondOrder, Element, ORGANIC_SUBSET, major_isotope

__all__ = [
    # Types
    "Atom", "Bond", "BondStereo", "Molecule",
    # Writing
    "SmilesGenerator", "generate", "create_smiles", "create_chiral_smiles",
    # Canonicalization
    "canonical_ranks", "morgan_numbers",
    # Oracles
    "AromaticRings", "find_sssr",
    "RingClassifier", "flagged_aromaticity", "huckel_aromaticity",
    # Exceptions
    "ChemError", "MissingCoordinatesError", "NoStartAtomError",
    "UnrepresentableBondOrderError", "UnrepresentableBondOrderWarning",
    # Elements
    "BondOrder", "Element", "ORGANIC_SUBSET", "major_isotope",
]
