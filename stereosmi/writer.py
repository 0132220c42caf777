"""
SMILES string generator.

Converts a Molecule into a canonical SMILES string, optionally carrying
chirality read from wedge bonds of a 2-D depiction and cis/trans marks on
double bonds.

The work happens in three passes over call-scoped state:

1. Build a depth-first spanning tree in canonical-rank order; back edges
   become numbered ring closures.
2. Where chirality is requested, resolve each stereocentre's neighbour
   order from the depiction and pick the child order that encodes it.
3. Render tokens: atoms, bonds, ring digits, parentheses and the
   ``/``/``\\`` marks of stereo double bonds.

Example:
    >>> mol = Molecule()
    >>> a = mol.add_atom("C")
    >>> b = mol.add_atom("O")
    >>> mol.add_bond(a, b)
    0
    >>> create_smiles(mol)
    'CO'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

from .aromaticity import RingClassifier, flagged_aromaticity
from .canon import canonical_ranks, morgan_numbers
from .elements import major_isotope
from .exceptions import MissingCoordinatesError
from .rings import AromaticRings, find_sssr
from .stereo import StereoResolver
from .tokens import IsotopeTable, atom_token, bond_token, ring_number
from .tree import Branch, Node, SpanningTree, build_spanning_tree

if TYPE_CHECKING:
    from .types import Molecule


RankOracle = Callable[["Molecule"], Sequence[int]]
RingOracle = Callable[["Molecule"], Iterable[Iterable[int]]]
InvariantOracle = Callable[["Molecule"], Sequence[int]]


class _PendingMarks:
    """Double-bond marks waiting for the bond they belong to.

    A mark is queued when the far end of a stereo double bond is written
    and is taken when the bond from that atom to its chosen neighbour is
    written. Unmatched marks stay queued for the rest of the call.
    """

    def __init__(self) -> None:
        self._stack: list[tuple[int, int, str]] = []

    def push(self, tail: int, target: int, symbol: str) -> None:
        self._stack.append((tail, target, symbol))

    def take(self, parent: int, atom_idx: int) -> str | None:
        """Remove and return the most recent mark for the bond parent->atom."""
        for i in range(len(self._stack) - 1, -1, -1):
            tail, target, symbol = self._stack[i]
            if tail == parent and target == atom_idx:
                del self._stack[i]
                return symbol
        return None

    def __len__(self) -> int:
        return len(self._stack)


@dataclass
class _RenderState:
    """Everything one generate call reads and writes besides the molecule."""
    mol: Molecule
    tree: SpanningTree
    aromatic: AromaticRings
    resolver: StereoResolver
    chiral: bool = False
    double_bond_stereo: bool = False
    out: list[str] = field(default_factory=list)
    opened: set[int] = field(default_factory=set)
    marks: dict[int, str] = field(default_factory=dict)
    pending: _PendingMarks = field(default_factory=_PendingMarks)


class SmilesGenerator:
    """Canonical SMILES generator with optional stereo output.

    All oracles are optional callables; the defaults cover a plain molecule
    graph. Instances hold configuration only and can be reused.

    Args:
        rings: ``mol -> rings`` giving the ring set (default: SSSR).
        ring_classifier: ``(ring, mol) -> bool`` deciding aromaticity per
            ring (default: every ring atom flagged ``is_aromatic``).
        ranks: ``mol -> ranks`` used when atoms carry no
            ``canonical_rank`` (default: ``canonical_ranks``).
        invariants: ``mol -> numbers`` separating same-element neighbours
            of a stereocentre (default: Morgan numbers).
        isotopes: ``symbol -> mass number`` of the major isotope.
        strict_bond_orders: Raise instead of warning on bond orders that
            have no SMILES symbol.

    Example:
        >>> gen = SmilesGenerator()
        >>> gen.generate(mol)
        'CC'
    """

    def __init__(
        self,
        rings: RingOracle | None = None,
        ring_classifier: RingClassifier | None = None,
        ranks: RankOracle | None = None,
        invariants: InvariantOracle | None = None,
        isotopes: IsotopeTable | None = None,
        strict_bond_orders: bool = False,
    ) -> None:
        self._rings = rings if rings is not None else find_sssr
        self._ring_classifier = ring_classifier if ring_classifier is not None else flagged_aromaticity
        self._ranks = ranks if ranks is not None else canonical_ranks
        self._invariants = invariants if invariants is not None else morgan_numbers
        self._isotopes = isotopes if isotopes is not None else major_isotope
        self._strict = strict_bond_orders

    def generate(self, mol: Molecule, chiral: bool = False, double_bond_stereo: bool = False) -> str:
        """Generate the SMILES string of a molecule.

        Args:
            mol: Molecule to write. It is not modified.
            chiral: Write ``@`` / ``@SP1`` for stereocentres drawn with wedges.
            double_bond_stereo: Write ``/`` and ``\\`` around stereo double bonds.

        Returns:
            SMILES string; components are joined with '.'. An empty
            molecule gives ''.

        Raises:
            MissingCoordinatesError: If stereo output is requested and an
                atom has no 2-D coordinate.
            NoStartAtomError: If no atom has canonical rank 1.
            UnrepresentableBondOrderError: On a bond order with no symbol,
                when ``strict_bond_orders`` is set.
        """
        if not mol.atoms:
            return ""
        if chiral or double_bond_stereo:
            for atom in mol.atoms:
                if atom.point2d is None:
                    raise MissingCoordinatesError(atom.idx)

        tree = build_spanning_tree(mol, self._ranks_for(mol))
        aromatic = AromaticRings(mol, self._rings(mol), self._ring_classifier)
        state = _RenderState(
            mol=mol,
            tree=tree,
            aromatic=aromatic,
            resolver=StereoResolver(mol, tree.closures, aromatic, self._invariants),
            chiral=chiral,
            double_bond_stereo=double_bond_stereo,
        )

        parts: list[str] = []
        for root in tree.roots:
            state.out = []
            self._write_chain(root, None, state)
            parts.append("".join(state.out))
        return ".".join(parts)

    def _ranks_for(self, mol: Molecule) -> list[int]:
        stored = [atom.canonical_rank for atom in mol.atoms]
        if all(rank is not None for rank in stored):
            return stored
        return list(self._ranks(mol))

    # =========================================================================
    # Rendering
    # =========================================================================

    def _write_chain(self, nodes: Sequence[Node], parent: int | None, state: _RenderState) -> None:
        """Write a sequence of the tree, starting with its leading leaf.

        Each atom is followed by its branches and then by the leaf that
        continues the sequence. A stereocentre may reorder these children,
        in which case the rest of the sequence is written here as well.
        """
        h = 0
        while h < len(nodes):
            atom_idx = nodes[h].atom
            j = h + 1
            while j < len(nodes) and isinstance(nodes[j], Branch):
                j += 1
            branches: Sequence[Branch] = nodes[h + 1:j]
            continuation = nodes[j].atom if j < len(nodes) else None

            children: dict[int, Sequence[Node]] = {b.head: b.nodes for b in branches}
            if continuation is not None:
                children[continuation] = nodes[j:]

            plan = None
            if state.chiral:
                plan = state.resolver.resolve(atom_idx, parent, list(children), continuation)

            self._write_atom(atom_idx, parent, state, plan.suffix if plan else "")
            if state.double_bond_stereo and parent is not None:
                target = continuation if continuation is not None else (branches[0].head if branches else None)
                self._queue_double_bond_mark(atom_idx, parent, target, state)

            if plan is None or not plan.children:
                atom = state.mol.atoms[atom_idx]
                for k, branch in enumerate(branches):
                    # "C1CCC1" rather than "C1(CCC1)"
                    inline = (
                        continuation is None
                        and k == len(branches) - 1
                        and state.tree.closures.is_ring_opening(atom_idx)
                        and len(atom.bond_indices) < 4
                    )
                    self._write_branch(branch.nodes, atom_idx, state, parens=not inline)
                parent, h = atom_idx, j
                continue

            *bracketed, last = plan.children
            for head in bracketed:
                self._write_branch(children[head], atom_idx, state, parens=True)
            if continuation is None:
                self._write_branch(children[last], atom_idx, state, parens=True)
                return
            # the last child carries on this sequence without parentheses
            nodes, h, parent = children[last], 0, atom_idx

    def _write_branch(self, nodes: Sequence[Node], parent: int, state: _RenderState, parens: bool) -> None:
        if parens:
            state.out.append("(")
        self._write_chain(nodes, parent, state)
        if parens:
            state.out.append(")")

    def _write_atom(self, atom_idx: int, parent: int | None, state: _RenderState, stereo: str) -> None:
        mol = state.mol
        out = state.out
        if parent is not None:
            out.append(self._bond(parent, atom_idx, state))
            if state.double_bond_stereo:
                mark = state.pending.take(parent, atom_idx)
                if mark is None and state.resolver.is_double_bond_head(atom_idx, parent):
                    mark = "/"
                if mark is not None:
                    out.append(mark)
                    state.marks[atom_idx] = mark

        out.append(atom_token(
            mol.atoms[atom_idx],
            aromatic=state.aromatic.is_aromatic(atom_idx),
            stereo=stereo,
            isotopes=self._isotopes,
        ))

        for closure in state.tree.closures.for_atom(atom_idx):
            if closure.marker in state.opened:
                out.append(self._bond(closure.atom1, closure.atom2, state))
            else:
                state.opened.add(closure.marker)
            out.append(ring_number(closure.marker))

    def _bond(self, atom1: int, atom2: int, state: _RenderState) -> str:
        bond = state.mol.get_bond_between(atom1, atom2)
        return bond_token(
            bond,
            aromatic_pair=state.aromatic.is_aromatic_pair(atom1, atom2),
            strict=self._strict,
        )

    def _queue_double_bond_mark(
        self,
        atom_idx: int,
        parent: int,
        target: int | None,
        state: _RenderState,
    ) -> None:
        """Queue the mark for the bond leaving the far end of a double bond."""
        if target is None or not state.resolver.is_double_bond_tail(atom_idx, parent):
            return
        head_mark = state.marks.get(parent)
        view_from = state.tree.parents.get(parent)
        if head_mark is None or view_from is None:
            return
        symbol = state.resolver.double_bond_mark(view_from, parent, atom_idx, target)
        if head_mark == "\\":
            symbol = "/" if symbol == "\\" else "\\"
        state.pending.push(atom_idx, target, symbol)


# =============================================================================
# Convenience functions
# =============================================================================

def generate(
    mol: Molecule,
    chiral: bool = False,
    double_bond_stereo: bool = False,
    **oracles,
) -> str:
    """Generate a SMILES string; keyword options go to ``SmilesGenerator``."""
    return SmilesGenerator(**oracles).generate(mol, chiral, double_bond_stereo)


def create_smiles(mol: Molecule, **oracles) -> str:
    """Canonical SMILES without stereo; coordinates are not needed.

    Example:
        >>> create_smiles(benzene)
        'c1ccccc1'
    """
    return generate(mol, **oracles)


def create_chiral_smiles(mol: Molecule, double_bond_stereo: bool = False, **oracles) -> str:
    """Canonical SMILES with stereocentres read from wedge bonds.

    Raises:
        MissingCoordinatesError: If any atom has no 2-D coordinate.
    """
    return generate(mol, True, double_bond_stereo, **oracles)
