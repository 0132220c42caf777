"""
Stereo descriptor resolution from 2-D depictions.

For an atom reached from a DFS parent this module decides whether the atom
is a stereocentre and, if so, in which order its remaining neighbours must
be written so that a single ``@`` describes the drawn configuration:

- tetrahedral centres (4 neighbours) keyed on the up/down wedge counts,
- square-planar centres (4 neighbours, 2 up + 2 down, up bonds opposite),
- trigonal-bipyramidal and octahedral centres (5 or 6 neighbours, one up
  and one down wedge, entered over one of the wedges).

It also answers the cis/trans questions for double bonds: whether an atom
heads a stereo double bond, and whether it is the tail reached across one.

A wedge marker belongs to the atom at the narrow end, which is the bond's
first atom. Seen from the atom at the other end the marker is inverted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Sequence

from .geometry import give_angle, is_left, lift, signed_volume
from .types import BondStereo

if TYPE_CHECKING:
    from .rings import AromaticRings
    from .tree import RingClosures
    from .types import Molecule


NONE = BondStereo.NONE
UP = BondStereo.UP
DOWN = BondStereo.DOWN

# Below this the neighbours are drawn too flat to read a handedness from
_FLAT = 1e-6

# Double bonds in smaller rings are always cis
_MIN_STEREO_RING = 8


class StereoKind(Enum):
    TETRAHEDRAL = "tetrahedral"
    SQUARE_PLANAR = "square_planar"
    BIPYRAMIDAL = "bipyramidal"  # trigonal bipyramidal or octahedral


@dataclass(frozen=True, slots=True)
class StereoOrder:
    """Required order of the neighbours written after the parent.

    Tetrahedral: anticlockwise seen from the parent. Square planar: around
    the square starting next to the parent. Bipyramidal: the equatorial
    neighbours anticlockwise seen from the parent, then the far axial one.
    """
    kind: StereoKind
    slots: tuple[int, ...]

    @property
    def suffix(self) -> str:
        return "@SP1" if self.kind is StereoKind.SQUARE_PLANAR else "@"

    def arrangements(self) -> list[tuple[int, ...]]:
        """Every neighbour sequence that reads the same with this suffix."""
        slots = self.slots
        if self.kind is StereoKind.TETRAHEDRAL:
            return [slots[i:] + slots[:i] for i in range(len(slots))]
        if self.kind is StereoKind.SQUARE_PLANAR:
            return [slots, slots[::-1]]
        equator, axial = slots[:-1], slots[-1:]
        return [equator[i:] + equator[:i] + axial for i in range(len(equator))]


@dataclass(frozen=True, slots=True)
class StereoPlan:
    """How the renderer writes a stereocentre: token suffix and child order."""
    suffix: str
    children: tuple[int, ...]


class StereoResolver:
    """Answers stereo questions for one molecule during one generate call.

    Args:
        mol: Molecule being written. Every atom must have ``point2d``.
        closures: Ring-closure table of the spanning tree.
        rings: Ring adapter, used for the fused-ring and aromatic tests.
        invariants: Callable returning graph-invariant numbers per atom;
            evaluated at most once, and only if symbols collide.
    """

    def __init__(
        self,
        mol: Molecule,
        closures: RingClosures,
        rings: AromaticRings,
        invariants: Callable[[Molecule], Sequence[int]],
    ) -> None:
        self._mol = mol
        self._closures = closures
        self._rings = rings
        self._invariant_fn = invariants
        self._invariants: Sequence[int] | None = None

    # =========================================================================
    # Helpers
    # =========================================================================

    def _neighbors(self, atom_idx: int) -> list[int]:
        return list(self._mol.atoms[atom_idx].neighbors(self._mol))

    def _stereo(self, atom_idx: int, other: int) -> BondStereo:
        """Wedge marker of the bond to other, as seen from atom_idx."""
        bond = self._mol.get_bond_between(atom_idx, other)
        if bond is None:
            return NONE
        stereo = BondStereo(bond.stereo)
        if bond.atom1_idx == atom_idx:
            return stereo
        if stereo == UP:
            return DOWN
        if stereo == DOWN:
            return UP
        return stereo

    def _point(self, atom_idx: int):
        return self._mol.atoms[atom_idx].point2d

    def _marker_counts(self, atom_idx: int) -> tuple[int, int]:
        up = down = 0
        for nbr in self._neighbors(atom_idx):
            marker = self._stereo(atom_idx, nbr)
            if marker == UP:
                up += 1
            elif marker == DOWN:
                down += 1
        return up, down

    def _connections(self, atom_idx: int) -> int:
        atom = self._mol.atoms[atom_idx]
        return len(atom.bond_indices) + atom.total_hydrogens(self._mol)

    def _get_invariants(self) -> Sequence[int]:
        if self._invariants is None:
            self._invariants = self._invariant_fn(self._mol)
        return self._invariants

    def _is_left(self, where_is: int, view_from: int, view_to: int) -> bool:
        return is_left(self._point(where_is), self._point(view_from), self._point(view_to))

    def _angle_sweep(self, centre: int, parent: int, candidates: Sequence[int]) -> list[int]:
        """Candidates clockwise from the parent bond; equal angles keep the last one."""
        by_angle: dict[float, int] = {}
        for nbr in candidates:
            by_angle[give_angle(self._point(centre), self._point(parent), self._point(nbr))] = nbr
        return [by_angle[key] for key in sorted(by_angle)]

    def _depth(self, atom_idx: int, nbr: int) -> int:
        marker = self._stereo(atom_idx, nbr)
        if marker == UP:
            return 1
        if marker == DOWN:
            return -1
        return 0

    # =========================================================================
    # Classification
    # =========================================================================

    def is_stereo(self, atom_idx: int) -> bool:
        """True if the atom is a stereocentre worth describing.

        Needs 4-6 neighbours and at least one marked bond. When two
        neighbours share an element symbol, the graph invariants must tell
        them apart; failing that, a 4-neighbour centre with one marked bond
        still counts if it sits on a ring fusion.
        """
        nbrs = self._neighbors(atom_idx)
        if not 4 <= len(nbrs) <= 6:
            return False
        marked = sum(1 for bond in self._mol.atoms[atom_idx].get_bonds(self._mol) if bond.is_stereo)
        if marked == 0:
            return False

        symbols = [self._mol.atoms[n].symbol for n in nbrs]
        distinct = list(dict.fromkeys(symbols))
        if len(distinct) == len(nbrs):
            return True

        invariants = self._get_invariants()
        with_different_invariants = len(distinct)
        for symbol in distinct:
            first = None
            for nbr, nbr_symbol in zip(nbrs, symbols):
                if nbr_symbol != symbol:
                    continue
                if first is None:
                    first = invariants[nbr]
                elif invariants[nbr] == first:
                    with_different_invariants -= 1

        if with_different_invariants == len(distinct):
            return True

        # cis/trans ring fusion
        if marked == 1 and len(nbrs) == 4:
            if any(len(self._rings.rings_containing(atom_idx, nbr)) > 1 for nbr in nbrs):
                return True
        if len(nbrs) in (5, 6) and with_different_invariants + len(distinct) > 1:
            return True
        return False

    def stereos_are_opposite(self, atom_idx: int) -> bool:
        """True if the first neighbour's bond and the bond drawn opposite it
        carry the same marker.
        """
        nbrs = self._neighbors(atom_idx)
        ordered = self._angle_sweep(atom_idx, nbrs[0], nbrs[1:])
        if len(ordered) < 2:
            return False
        return self._stereo(atom_idx, nbrs[0]) == self._stereo(atom_idx, ordered[1])

    def tetrahedral_kind(self, atom_idx: int) -> int:
        """0 if not tetrahedral, else 1-4 for (1 up, 1 down), (2 up, 2 down
        with adjacent up bonds), (1 up), (1 down).
        """
        if len(self._mol.atoms[atom_idx].bond_indices) != 4:
            return 0
        up, down = self._marker_counts(atom_idx)
        if up == 1 and down == 1:
            return 1
        if up == 2 and down == 2:
            return 0 if self.stereos_are_opposite(atom_idx) else 2
        if up == 1 and down == 0:
            return 3
        if down == 1 and up == 0:
            return 4
        return 0

    def is_square_planar(self, atom_idx: int) -> bool:
        if len(self._mol.atoms[atom_idx].bond_indices) != 4:
            return False
        return self._marker_counts(atom_idx) == (2, 2) and self.stereos_are_opposite(atom_idx)

    def is_bipyramidal(self, atom_idx: int) -> bool:
        """Trigonal bipyramidal (5) or octahedral (6) with one up and one down bond."""
        if not 5 <= len(self._mol.atoms[atom_idx].bond_indices) <= 6:
            return False
        return self._marker_counts(atom_idx) == (1, 1)

    # =========================================================================
    # Neighbour orders
    # =========================================================================

    def neighbour_order(self, atom_idx: int, parent: int | None) -> StereoOrder | None:
        """Required order of the non-parent neighbours, or None if it cannot be read."""
        if parent is None:
            return None
        others = [n for n in self._neighbors(atom_idx) if n != parent]
        if self.tetrahedral_kind(atom_idx):
            slots = self._tetrahedral_slots(atom_idx, parent, others)
            if slots is None:
                return None
            return StereoOrder(StereoKind.TETRAHEDRAL, slots)
        if self.is_square_planar(atom_idx):
            return StereoOrder(StereoKind.SQUARE_PLANAR, tuple(self._angle_sweep(atom_idx, parent, others)))
        if self.is_bipyramidal(atom_idx):
            slots = self._bipyramidal_slots(atom_idx, parent, others)
            if slots is None:
                return None
            return StereoOrder(StereoKind.BIPYRAMIDAL, slots)
        return None

    def _tetrahedral_slots(self, atom_idx: int, parent: int, others: list[int]) -> tuple[int, ...] | None:
        """The three other neighbours, anticlockwise seen from the parent.

        Bond directions are lifted out of the plane by their wedges and the
        handedness is the sign of the volume they span.
        """
        centre = self._point(atom_idx)
        p, a, b, c = (
            lift(centre, self._point(n), self._depth(atom_idx, n))
            for n in (parent, *others)
        )
        volume = signed_volume(p, a, b, c)
        if abs(volume) < _FLAT:
            return None
        if volume < 0:
            return tuple(others)
        return (others[0], others[2], others[1])

    def _bipyramidal_slots(self, atom_idx: int, parent: int, others: list[int]) -> tuple[int, ...] | None:
        """Equatorial neighbours anticlockwise seen from the parent, far axial last.

        Only readable when the parent is one of the two wedged, axial
        neighbours; a plain parent bond lies in the equator.
        """
        parent_marker = self._stereo(atom_idx, parent)
        if parent_marker not in (UP, DOWN):
            return None
        opposite = DOWN if parent_marker == UP else UP
        axial = [n for n in others if self._stereo(atom_idx, n) == opposite]
        equator = [n for n in others if self._stereo(atom_idx, n) == NONE]
        if len(axial) != 1 or len(equator) != len(others) - 1:
            return None
        swept = self._angle_sweep(atom_idx, parent, equator)
        if len(swept) != len(equator):
            return None
        # Clockwise on paper is anticlockwise seen from behind the paper
        if parent_marker == UP:
            swept.reverse()
        return (*swept, axial[0])

    # =========================================================================
    # Applying an order to the tree
    # =========================================================================

    def resolve(
        self,
        atom_idx: int,
        parent: int | None,
        children: Sequence[int],
        continuation: int | None,
    ) -> StereoPlan | None:
        """Plan how to write a stereocentre, or None to write it plainly.

        Ring-closure neighbours are written straight after the atom, in
        marker order, so the children must complete the required order
        behind them.

        Args:
            atom_idx: The centre.
            parent: Its DFS parent.
            children: Heads of its tree children in canonical order.
            continuation: The child that continues the chain, if any.
        """
        if not self.is_stereo(atom_idx):
            return None
        order = self.neighbour_order(atom_idx, parent)
        if order is None:
            return None
        closures = [c.other(atom_idx) for c in self._closures.for_atom(atom_idx)]
        arranged = self._arrange(order, closures, children, continuation)
        if arranged is None:
            return None
        return StereoPlan(order.suffix, tuple(arranged))

    @staticmethod
    def _arrange(
        order: StereoOrder,
        closures: Sequence[int],
        children: Sequence[int],
        continuation: int | None,
    ) -> list[int] | None:
        """Child order completing the required order, continuation last if possible."""
        n_ring = len(closures)
        fallback = None
        for sequence in order.arrangements():
            if list(sequence[:n_ring]) != list(closures):
                continue
            rest = list(sequence[n_ring:])
            if sorted(rest) != sorted(children):
                continue
            if continuation is None or not rest or rest[-1] == continuation:
                return rest
            if fallback is None:
                fallback = rest
        return fallback

    # =========================================================================
    # Double bonds
    # =========================================================================

    def is_double_bond_tail(self, atom_idx: int, parent: int) -> bool:
        """True if atom is the far end of a stereo double bond entered from parent.

        Both ends need three connections (hydrogens included), and the
        atom's other substituents must be present and differ in element
        symbol. Aromatic bonds and double bonds in small rings carry no
        cis/trans marks.
        """
        bond = self._mol.get_bond_between(atom_idx, parent)
        if bond is None or bond.order != 2:
            return False
        if self._rings.is_aromatic_pair(atom_idx, parent):
            return False
        if self._connections(atom_idx) != 3 or self._connections(parent) != 3:
            return False
        others = [n for n in self._neighbors(atom_idx) if n != parent]
        if not others:
            return False
        if len(others) >= 2 and self._mol.atoms[others[0]].symbol == self._mol.atoms[others[-1]].symbol:
            return False
        if any(len(ring) < _MIN_STEREO_RING for ring in self._rings.rings_containing(atom_idx, parent)):
            return False
        return True

    def is_double_bond_head(self, atom_idx: int, parent: int | None) -> bool:
        """True if atom starts a stereo double bond leading away from parent."""
        if self._connections(atom_idx) != 3:
            return False
        for nbr in self._neighbors(atom_idx):
            if nbr == parent:
                continue
            bond = self._mol.get_bond_between(atom_idx, nbr)
            if bond.order == 2 and self.is_double_bond_tail(nbr, atom_idx) and self.is_double_bond_tail(atom_idx, nbr):
                return True
        return False

    def double_bond_mark(self, view_from: int, head: int, tail: int, target: int) -> str:
        """Symbol for the tail->target bond, assuming "/" was written before head.

        Both substituents are placed against the same line, head -> tail.
        The same side (cis) gives a backslash, opposite sides a slash.
        """
        old_side = self._is_left(view_from, head, tail)
        new_side = self._is_left(target, head, tail)
        return "\\" if old_side == new_side else "/"
