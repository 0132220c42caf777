#!/usr/bin/env python3
"""
Benchmark script comparing SMILES generation speed between RDKit and stereosmi.

Usage:
    python benchmarks/bench_generate.py [--chiral]

Options:
    --chiral    Generate chiral SMILES from 2-D layouts (stereosmi only
                computes parities when asked, so this is the slower path)
"""

import sys
import os
import time
from dataclasses import dataclass
from typing import Optional

# Ensure local stereosmi is used (not installed version)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

TEST_MOLECULES = {
    "small_ether": "CCOCC",
    "medium_drug": "CC(C)Cc1ccc(cc1)C(C)C(=O)O",  # Ibuprofen
    "drug_like": "Cc1ccc(cc1Nc2nccc(n2)c3cccnc3)NC(=O)c4ccc(cc4)CN5CCN(CC5)C",  # Imatinib-like
    "stereo_rich": "C[C@H]1CC[C@@H](O)[C@H](C)C1/C=C/C(=O)N[C@@H](CC)C(=O)O",
    "cage": "C12C3C4C1C5C2C3C45",  # Cubane
}

ITERATIONS = 500


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    smiles: str
    output: str
    time_seconds: float
    iterations: int
    num_atoms: int

    @property
    def time_per_call_ms(self) -> float:
        return (self.time_seconds / self.iterations) * 1000

    @property
    def time_per_atom_us(self) -> float:
        """Microseconds per atom per call."""
        return (self.time_seconds / self.iterations / self.num_atoms) * 1_000_000


def to_stereosmi(smiles: str, coordinates: bool):
    """Convert an RDKit-parsed molecule into a stereosmi Molecule."""
    from rdkit import Chem
    from rdkit.Chem import AllChem
    from stereosmi import Molecule

    rdmol = Chem.MolFromSmiles(smiles)
    if rdmol is None:
        raise ValueError(f"RDKit failed to parse SMILES: {smiles}")
    Chem.Kekulize(rdmol, clearAromaticFlags=False)
    if coordinates:
        AllChem.Compute2DCoords(rdmol)

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
            point2d=point,
        )
    for bond in rdmol.GetBonds():
        mol.add_bond(
            bond.GetBeginAtomIdx(),
            bond.GetEndAtomIdx(),
            order=int(bond.GetBondTypeAsDouble()),
        )
    return mol


def benchmark_rdkit(smiles: str, iterations: int, chiral: bool) -> BenchmarkResult:
    """Benchmark RDKit MolToSmiles."""
    from rdkit import Chem

    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"RDKit failed to parse SMILES: {smiles}")

    # Warmup
    output = Chem.MolToSmiles(mol, isomericSmiles=chiral)

    start = time.perf_counter()
    for _ in range(iterations):
        output = Chem.MolToSmiles(mol, isomericSmiles=chiral)
    end = time.perf_counter()

    return BenchmarkResult(
        smiles=smiles,
        output=output,
        time_seconds=end - start,
        iterations=iterations,
        num_atoms=mol.GetNumAtoms(),
    )


def benchmark_stereosmi(smiles: str, iterations: int, chiral: bool) -> BenchmarkResult:
    """Benchmark stereosmi generation."""
    from stereosmi import create_chiral_smiles, create_smiles

    mol = to_stereosmi(smiles, coordinates=chiral)
    if chiral:
        def run():
            return create_chiral_smiles(mol, double_bond_stereo=True)
    else:
        def run():
            return create_smiles(mol)

    # Warmup
    output = run()

    start = time.perf_counter()
    for _ in range(iterations):
        output = run()
    end = time.perf_counter()

    return BenchmarkResult(
        smiles=smiles,
        output=output,
        time_seconds=end - start,
        iterations=iterations,
        num_atoms=len(mol.atoms),
    )


def run_benchmark(chiral: bool):
    """Run every test molecule through both generators."""
    mode = "chiral" if chiral else "non-chiral"
    print("=" * 90)
    print(f"SMILES Generation Benchmark ({mode}): RDKit vs stereosmi")
    print("=" * 90)
    print(f"\nIterations per molecule: {ITERATIONS}")
    print("-" * 90)
    print(f"{'Molecule':<15} {'Atoms':>6} {'RDKit ms':>10} {'stereosmi ms':>13} {'us/atom':>9} {'Ratio':>8}")
    print("-" * 90)

    for name, smiles in TEST_MOLECULES.items():
        rdkit_result: Optional[BenchmarkResult] = None
        ours: Optional[BenchmarkResult] = None
        try:
            rdkit_result = benchmark_rdkit(smiles, ITERATIONS, chiral)
        except ImportError:
            print("SKIPPED (rdkit not installed)")
            return
        try:
            ours = benchmark_stereosmi(smiles, ITERATIONS, chiral)
        except Exception as e:
            print(f"{name:<15} ERROR: {e}")
            continue

        ratio = ours.time_seconds / rdkit_result.time_seconds
        print(
            f"{name:<15} {ours.num_atoms:>6} "
            f"{rdkit_result.time_per_call_ms:>10.3f} {ours.time_per_call_ms:>13.3f} "
            f"{ours.time_per_atom_us:>9.2f} {ratio:>7.2f}x"
        )

    print("-" * 90)


if __name__ == "__main__":
    run_benchmark(chiral="--chiral" in sys.argv)
