"""Tests for planet size categories."""

import pytest

from stellarforge.tables.size_table import (
    DENSITY_RANGES,
    MASS_RANGES,
    SizeCategory,
    categories_between,
    category_from_mass,
    category_from_mass_kg,
    density_from_mass_radius,
    get_mass_range_kg,
    is_gaseous,
    radius_from_mass_density,
    random_category,
    random_density,
    random_mass_kg,
)
from stellarforge.utils import EARTH_MASS, EARTH_RADIUS, SeededRng


class TestCategoryFromMass:
    """Test inverse mass lookup."""

    def test_dwarf_and_gas_giant(self):
        """Small masses are dwarfs, large ones gas giants."""
        assert category_from_mass(0.001) == SizeCategory.DWARF
        assert category_from_mass(500) == SizeCategory.GAS_GIANT

    @pytest.mark.parametrize(
        "mass, expected",
        [
            (0.01, SizeCategory.SUB_TERRESTRIAL),
            (0.5, SizeCategory.TERRESTRIAL),
            (2.0, SizeCategory.SUPER_EARTH),
            (10.0, SizeCategory.MINI_NEPTUNE),
            (20.0, SizeCategory.NEPTUNE_CLASS),
            (80.0, SizeCategory.GAS_GIANT),
        ],
    )
    def test_boundaries_belong_to_heavier_category(self, mass, expected):
        """A mass on a boundary resolves to the category starting there."""
        assert category_from_mass(mass) == expected

    def test_out_of_range_clamps(self):
        """Masses beyond the table clamp to the end categories."""
        assert category_from_mass(1e-9) == SizeCategory.DWARF
        assert category_from_mass(1e6) == SizeCategory.GAS_GIANT

    def test_kilogram_lookup(self):
        """Lookup in kilograms matches lookup in Earth masses."""
        assert category_from_mass_kg(EARTH_MASS) == SizeCategory.TERRESTRIAL

    def test_ranges_contiguous(self):
        """Each range ends where the next begins."""
        categories = list(SizeCategory)
        for lighter, heavier in zip(categories, categories[1:]):
            assert MASS_RANGES[lighter][1] == MASS_RANGES[heavier][0]


class TestDensity:
    """Test density ranges and sphere geometry."""

    def test_rocky_denser_than_gaseous(self):
        """The lightest rocky density exceeds the heaviest gaseous one."""
        rocky_min = min(DENSITY_RANGES[c][0] for c in SizeCategory if not is_gaseous(c))
        gaseous_max = max(DENSITY_RANGES[c][1] for c in SizeCategory if is_gaseous(c))
        assert rocky_min > gaseous_max

    def test_earth_radius_from_density(self):
        """Earth's mass at its mean density gives Earth's radius."""
        assert radius_from_mass_density(EARTH_MASS, 5514.0) == pytest.approx(EARTH_RADIUS, rel=1e-3)

    def test_density_round_trip(self):
        """density_from_mass_radius inverts radius_from_mass_density."""
        radius = radius_from_mass_density(1e23, 3000.0)
        assert density_from_mass_radius(1e23, radius) == pytest.approx(3000.0)

    def test_zero_density_rejected(self):
        """Density must be positive."""
        with pytest.raises(ValueError, match="positive"):
            radius_from_mass_density(EARTH_MASS, 0.0)

    def test_zero_radius_density(self):
        """A body without radius has density 0."""
        assert density_from_mass_radius(EARTH_MASS, 0.0) == 0.0


class TestSampling:
    """Test random draws inside categories."""

    def test_random_mass_inside_category(self):
        """Sampled masses stay in their category's range."""
        rng = SeededRng(42)
        for category in SizeCategory:
            low, high = get_mass_range_kg(category)
            for _ in range(20):
                assert low * (1 - 1e-12) <= random_mass_kg(category, rng) <= high * (1 + 1e-12)

    def test_random_density_inside_category(self):
        """Sampled densities stay in their category's range."""
        rng = SeededRng(42)
        low, high = DENSITY_RANGES[SizeCategory.TERRESTRIAL]
        for _ in range(20):
            assert low <= random_density(SizeCategory.TERRESTRIAL, rng) <= high

    def test_random_category_inside_limits(self):
        """Drawn categories respect the inclusive limits."""
        rng = SeededRng(1)
        drawn = {
            random_category(rng, SizeCategory.TERRESTRIAL, SizeCategory.MINI_NEPTUNE)
            for _ in range(100)
        }
        assert drawn == {
            SizeCategory.TERRESTRIAL,
            SizeCategory.SUPER_EARTH,
            SizeCategory.MINI_NEPTUNE,
        }

    def test_categories_between(self):
        """Inclusive, ordered slice of categories."""
        assert categories_between(SizeCategory.TERRESTRIAL, SizeCategory.MINI_NEPTUNE) == [
            SizeCategory.TERRESTRIAL,
            SizeCategory.SUPER_EARTH,
            SizeCategory.MINI_NEPTUNE,
        ]
