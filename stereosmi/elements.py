"""
Chemical elements and constants.

This module provides element data and the isotope reference table used when
deciding whether an atom's mass has to be written out in a SMILES string.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Final, FrozenSet


class BondOrder(IntEnum):
    """Bond orders representable in SMILES output."""

    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class Element:
    """Immutable element data.

    Attributes:
        atomic_number: Atomic number (proton count).
        symbol: Element symbol (e.g., "C", "Cl").
        name: Full element name.
        default_valence: Common valence for organic chemistry.
        major_isotope: Mass number of the most abundant isotope, if known.
    """

    atomic_number: int
    symbol: str
    name: str
    default_valence: int | None = None
    major_isotope: int | None = None

    # Class-level registry
    _by_symbol: ClassVar[dict[str, "Element"]] = {}
    _by_number: ClassVar[dict[int, "Element"]] = {}

    def __post_init__(self) -> None:
        Element._by_symbol[self.symbol] = self
        Element._by_number[self.atomic_number] = self

    @classmethod
    def from_symbol(cls, symbol: str) -> "Element | None":
        """Look up element by symbol (case-insensitive for aromatic forms)."""
        if symbol in cls._by_symbol:
            return cls._by_symbol[symbol]
        return cls._by_symbol.get(symbol.capitalize())

    @classmethod
    def from_atomic_number(cls, num: int) -> "Element | None":
        """Look up element by atomic number."""
        return cls._by_number.get(num)


# (atomic_number, symbol, name, default_valence, major_isotope)
_ELEMENTS_DATA: Final[list[tuple[int, str, str, int | None, int | None]]] = [
    (1, "H", "Hydrogen", 1, 1),
    (2, "He", "Helium", None, 4),
    (3, "Li", "Lithium", 1, 7),
    (4, "Be", "Beryllium", 2, 9),
    (5, "B", "Boron", 3, 11),
    (6, "C", "Carbon", 4, 12),
    (7, "N", "Nitrogen", 3, 14),
    (8, "O", "Oxygen", 2, 16),
    (9, "F", "Fluorine", 1, 19),
    (10, "Ne", "Neon", None, 20),
    (11, "Na", "Sodium", 1, 23),
    (12, "Mg", "Magnesium", 2, 24),
    (13, "Al", "Aluminum", 3, 27),
    (14, "Si", "Silicon", 4, 28),
    (15, "P", "Phosphorus", 3, 31),
    (16, "S", "Sulfur", 2, 32),
    (17, "Cl", "Chlorine", 1, 35),
    (18, "Ar", "Argon", None, 40),
    (19, "K", "Potassium", 1, 39),
    (20, "Ca", "Calcium", 2, 40),
    (21, "Sc", "Scandium", None, 45),
    (22, "Ti", "Titanium", None, 48),
    (23, "V", "Vanadium", None, 51),
    (24, "Cr", "Chromium", None, 52),
    (25, "Mn", "Manganese", None, 55),
    (26, "Fe", "Iron", None, 56),
    (27, "Co", "Cobalt", None, 59),
    (28, "Ni", "Nickel", None, 58),
    (29, "Cu", "Copper", None, 63),
    (30, "Zn", "Zinc", 2, 64),
    (31, "Ga", "Gallium", 3, 69),
    (32, "Ge", "Germanium", 4, 74),
    (33, "As", "Arsenic", 3, 75),
    (34, "Se", "Selenium", 2, 80),
    (35, "Br", "Bromine", 1, 79),
    (36, "Kr", "Krypton", None, 84),
    (37, "Rb", "Rubidium", 1, 85),
    (38, "Sr", "Strontium", 2, 88),
    (39, "Y", "Yttrium", None, 89),
    (40, "Zr", "Zirconium", None, 90),
    (41, "Nb", "Niobium", None, 93),
    (42, "Mo", "Molybdenum", None, 98),
    (43, "Tc", "Technetium", None, None),
    (44, "Ru", "Ruthenium", None, 102),
    (45, "Rh", "Rhodium", None, 103),
    (46, "Pd", "Palladium", None, 106),
    (47, "Ag", "Silver", 1, 107),
    (48, "Cd", "Cadmium", 2, 114),
    (49, "In", "Indium", 3, 115),
    (50, "Sn", "Tin", 4, 120),
    (51, "Sb", "Antimony", 3, 121),
    (52, "Te", "Tellurium", 2, 130),
    (53, "I", "Iodine", 1, 127),
    (54, "Xe", "Xenon", None, 132),
    (55, "Cs", "Cesium", 1, 133),
    (56, "Ba", "Barium", 2, 138),
    (57, "La", "Lanthanum", None, 139),
    (58, "Ce", "Cerium", None, 140),
    (59, "Pr", "Praseodymium", None, 141),
    (60, "Nd", "Neodymium", None, 142),
    (61, "Pm", "Promethium", None, None),
    (62, "Sm", "Samarium", None, 152),
    (63, "Eu", "Europium", None, 153),
    (64, "Gd", "Gadolinium", None, 158),
    (65, "Tb", "Terbium", None, 159),
    (66, "Dy", "Dysprosium", None, 164),
    (67, "Ho", "Holmium", None, 165),
    (68, "Er", "Erbium", None, 166),
    (69, "Tm", "Thulium", None, 169),
    (70, "Yb", "Ytterbium", None, 174),
    (71, "Lu", "Lutetium", None, 175),
    (72, "Hf", "Hafnium", None, 180),
    (73, "Ta", "Tantalum", None, 181),
    (74, "W", "Tungsten", None, 184),
    (75, "Re", "Rhenium", None, 187),
    (76, "Os", "Osmium", None, 192),
    (77, "Ir", "Iridium", None, 193),
    (78, "Pt", "Platinum", None, 195),
    (79, "Au", "Gold", 1, 197),
    (80, "Hg", "Mercury", 2, 202),
    (81, "Tl", "Thallium", 3, 205),
    (82, "Pb", "Lead", 4, 208),
    (83, "Bi", "Bismuth", 3, 209),
    (84, "Po", "Polonium", 2, None),
    (85, "At", "Astatine", 1, None),
    (86, "Rn", "Radon", None, None),
    (87, "Fr", "Francium", 1, None),
    (88, "Ra", "Radium", 2, None),
    (89, "Ac", "Actinium", None, None),
    (90, "Th", "Thorium", None, 232),
    (91, "Pa", "Protactinium", None, 231),
    (92, "U", "Uranium", None, 238),
]

ELEMENTS: Final[tuple[Element, ...]] = tuple(
    Element(num, sym, name, valence, isotope)
    for num, sym, name, valence, isotope in _ELEMENTS_DATA
)

# Daylight "organic subset" - atoms that can appear without brackets
ORGANIC_SUBSET: Final[FrozenSet[str]] = frozenset({
    "B", "C", "N", "O", "P", "S", "F", "Cl", "Br", "I",
})

# Outer (valence shell) electrons, used by the Hückel ring classifier
OUTER_ELECTRONS: Final[dict[int, int]] = {
    5: 3,    # B
    6: 4,    # C
    7: 5,    # N
    8: 6,    # O
    15: 5,   # P
    16: 6,   # S
    33: 5,   # As
    34: 6,   # Se
}


def get_atomic_number(symbol: str) -> int:
    """Get atomic number for an element symbol.

    Args:
        symbol: Element symbol (e.g., "C", "cl", "Cl").

    Returns:
        Atomic number, or 0 if not found.
    """
    elem = Element.from_symbol(symbol)
    return elem.atomic_number if elem else 0


def get_default_valence(atomic_num: int) -> int | None:
    """Get default valence for an element, or None if not applicable."""
    elem = Element.from_atomic_number(atomic_num)
    return elem.default_valence if elem else None


def major_isotope(symbol: str) -> int | None:
    """Mass number of the most abundant isotope of an element.

    Returns None for unknown symbols and for elements without a stable
    major isotope.
    """
    elem = Element.from_symbol(symbol)
    return elem.major_isotope if elem else None


def is_organic_symbol(symbol: str) -> bool:
    """Check if symbol may be written without brackets."""
    return symbol in ORGANIC_SUBSET
