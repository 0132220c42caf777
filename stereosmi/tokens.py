"""
SMILES token rendering: atoms, bonds and ring-closure digits.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Callable

from .elements import is_organic_symbol, major_isotope
from .exceptions import UnrepresentableBondOrderError, UnrepresentableBondOrderWarning

if TYPE_CHECKING:
    from .types import Atom, Bond


IsotopeTable = Callable[[str], "int | None"]

_BOND_SYMBOLS = {1: "", 2: "=", 3: "#"}


def charge_string(charge: int) -> str:
    """Format a formal charge: '', '+', '-', '+n' or '-n'."""
    if charge == 0:
        return ""
    sign = "+" if charge > 0 else "-"
    magnitude = abs(charge)
    return sign if magnitude == 1 else f"{sign}{magnitude}"


def mass_string(atom: Atom, isotopes: IsotopeTable = major_isotope) -> str:
    """Mass number to write, or '' when it is unset or the major isotope's."""
    if atom.isotope is None:
        return ""
    if atom.isotope == isotopes(atom.symbol):
        return ""
    return str(atom.isotope)


def ring_number(n: int) -> str:
    """Format a ring-closure marker."""
    if 1 <= n <= 9:
        return str(n)
    if 10 <= n <= 99:
        return f"%{n}"
    return f"%({n})"


def atom_token(
    atom: Atom,
    *,
    aromatic: bool = False,
    stereo: str = "",
    isotopes: IsotopeTable = major_isotope,
) -> str:
    """Render one atom.

    Args:
        atom: Atom to render.
        aromatic: Write the symbol in lowercase.
        stereo: Chirality suffix ("@" or "@SP1"), empty for none.
        isotopes: Lookup of the major isotope's mass number per symbol.

    Returns:
        The bare symbol for plain organic-subset atoms, else a bracket atom.
    """
    symbol = atom.symbol.lower() if aromatic else atom.symbol
    mass = mass_string(atom, isotopes)
    charge = charge_string(atom.charge)
    if is_organic_symbol(atom.symbol) and not (mass or charge or stereo):
        return symbol
    return f"[{mass}{symbol}{stereo}{charge}]"


def bond_token(bond: Bond, *, aromatic_pair: bool = False, strict: bool = False) -> str:
    """Render one bond.

    Bonds between two aromatic atoms are implicit. Single bonds are always
    implicit.

    Raises:
        UnrepresentableBondOrderError: If the order has no symbol and
            ``strict`` is set. Otherwise the bond is written as nothing and
            an ``UnrepresentableBondOrderWarning`` is issued.
    """
    if aromatic_pair:
        return ""
    symbol = _BOND_SYMBOLS.get(bond.order)
    if symbol is not None:
        return symbol
    if strict:
        raise UnrepresentableBondOrderError(bond.idx, bond.order)
    warnings.warn(
        f"Bond {bond.idx} has order {bond.order!r}, which has no SMILES symbol; writing nothing",
        UnrepresentableBondOrderWarning,
        stacklevel=3,
    )
    return ""
