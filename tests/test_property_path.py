"""Tests for property path parsing and access."""

import pytest

from stellarforge.models import BodyType, CelestialBody, OrbitalProps, PhysicalProps
from stellarforge.models.property_path import (
    PropertyPath,
    canonical_path,
    get_property,
    parse_path,
    paths_for,
    set_property,
)
from stellarforge.utils import AU, EARTH_MASS, EARTH_RADIUS


@pytest.fixture
def planet():
    return CelestialBody(
        id="planet-0",
        name="Test",
        body_type=BodyType.PLANET,
        physical=PhysicalProps(mass_kg=EARTH_MASS, radius_m=EARTH_RADIUS),
        orbital=OrbitalProps(semi_major_axis_m=AU, eccentricity=0.1),
    )


class TestParsePath:
    """Test path parsing."""

    def test_valid(self):
        assert parse_path("orbital.eccentricity") == PropertyPath("orbital", "eccentricity")

    def test_case_and_whitespace_ignored(self):
        assert canonical_path("  Physical.MASS_KG ") == "physical.mass_kg"

    def test_path_object_passes_through(self):
        path = PropertyPath("physical", "radius_m")
        assert parse_path(path) is path

    @pytest.mark.parametrize("path", ["", "physical", "physical.", "a.b.c", ".mass_kg"])
    def test_malformed(self, path):
        with pytest.raises(ValueError, match="Malformed"):
            parse_path(path)

    def test_unknown_section(self):
        with pytest.raises(ValueError, match="Unknown section"):
            parse_path("chemistry.mass_kg")

    def test_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown field"):
            parse_path("physical.colour")

    def test_non_string(self):
        with pytest.raises(ValueError, match="must be a string"):
            parse_path(42)


class TestAppliesTo:
    """Test which body types carry which sections."""

    def test_star_has_no_orbit(self):
        assert not parse_path("orbital.eccentricity").applies_to(BodyType.STAR)
        assert parse_path("stellar.luminosity_watts").applies_to(BodyType.STAR)

    def test_planet_has_no_stellar_section(self):
        assert not parse_path("stellar.age_years").applies_to(BodyType.PLANET)
        assert parse_path("surface.albedo").applies_to(BodyType.MOON)

    def test_paths_for_star(self):
        sections = {path.section for path in paths_for(BodyType.STAR)}
        assert sections == {"physical", "stellar"}


class TestPropertyAccess:
    """Test reading and replacing values."""

    def test_get(self, planet):
        assert get_property(planet, "orbital.eccentricity") == 0.1

    def test_set_returns_copy(self, planet):
        updated = set_property(planet, "orbital.eccentricity", 0.42)
        assert updated.orbital.eccentricity == 0.42
        assert planet.orbital.eccentricity == 0.1
        assert updated.orbital.semi_major_axis_m == AU

    def test_missing_section(self, planet):
        with pytest.raises(KeyError, match="no 'surface' section"):
            get_property(planet, "surface.albedo")
        with pytest.raises(KeyError):
            set_property(planet, "surface.albedo", 0.3)
