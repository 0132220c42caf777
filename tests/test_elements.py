"""Tests for element data and the isotope table."""

import pytest

from stereosmi.elements import (
    BondOrder,
    Element,
    ORGANIC_SUBSET,
    get_atomic_number,
    get_default_valence,
    is_organic_symbol,
    major_isotope,
)


class TestElement:
    """Test Element class."""

    def test_carbon(self):
        elem = Element.from_symbol("C")
        assert elem is not None
        assert elem.atomic_number == 6
        assert elem.major_isotope == 12

    def test_two_letter_symbol(self):
        elem = Element.from_symbol("Cl")
        assert elem is not None
        assert elem.atomic_number == 17

    def test_from_atomic_number(self):
        elem = Element.from_atomic_number(8)
        assert elem is not None
        assert elem.symbol == "O"

    def test_invalid_symbol(self):
        assert Element.from_symbol("Xx") is None
        assert get_atomic_number("Xx") == 0


class TestIsotopes:
    """Major isotope mass numbers."""

    @pytest.mark.parametrize("symbol,mass", [
        ("H", 1),
        ("C", 12),
        ("N", 14),
        ("O", 16),
        ("Cl", 35),
        ("Br", 79),
        ("Pt", 195),
        ("U", 238),
    ])
    def test_major_isotope(self, symbol, mass):
        assert major_isotope(symbol) == mass

    def test_unknown(self):
        assert major_isotope("Xx") is None


class TestSubsets:
    """Organic subset and valences."""

    @pytest.mark.parametrize("symbol", ["B", "C", "N", "O", "P", "S", "F", "Cl", "Br", "I"])
    def test_organic(self, symbol):
        assert symbol in ORGANIC_SUBSET
        assert is_organic_symbol(symbol)

    @pytest.mark.parametrize("symbol", ["H", "Na", "Fe", "Se", "Si"])
    def test_not_organic(self, symbol):
        assert not is_organic_symbol(symbol)

    def test_default_valence(self):
        assert get_default_valence(6) == 4
        assert get_default_valence(8) == 2

    def test_bond_orders(self):
        assert [int(o) for o in BondOrder] == [1, 2, 3]
        assert str(BondOrder.DOUBLE) == "double"
