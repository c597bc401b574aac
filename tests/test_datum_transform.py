"""Tests for Helmert datum conversion through the hub datum."""

import pytest

from osgrid.errors import UnrecognizedDatum
from osgrid.geodesy.cartesian import CartesianPoint, GeodeticPoint, to_cartesian
from osgrid.geodesy.datums import DATUMS, Datum, DatumRegistry, HelmertTransform
from osgrid.geodesy.ellipsoids import ELLIPSOIDS
from osgrid.geodesy.transform import DatumTransformer, convert_datum, default_transformer

WGS84 = DATUMS.get("WGS84")
OSGB36 = DATUMS.get("OSGB36")
ED50 = DATUMS.get("ED50")

GREENWICH = GeodeticPoint(51.47788, -0.00147, 0.0, WGS84)


class TestIdentity:
    def test_same_datum_returns_same_point(self):
        c = to_cartesian(GREENWICH)
        assert default_transformer.convert(c, WGS84) is c

    def test_same_datum_geodetic(self):
        p = GeodeticPoint(52.0, -1.0, 0.0, OSGB36)
        assert convert_datum(p, "OSGB36") is p


class TestHubConversions:
    def test_hub_to_datum_applies_datum_transform(self):
        c = CartesianPoint(4000000.0, 0.0, 5000000.0, WGS84)
        out = default_transformer.convert(c, OSGB36)
        assert out.datum is OSGB36
        assert (out.x, out.y, out.z) == OSGB36.transform.apply(c.x, c.y, c.z)

    def test_datum_to_hub_applies_negated_transform(self):
        c = CartesianPoint(4000000.0, 0.0, 5000000.0, OSGB36)
        out = default_transformer.convert(c, WGS84)
        assert out.datum is WGS84
        assert (out.x, out.y, out.z) == OSGB36.transform.negated().apply(c.x, c.y, c.z)

    def test_non_hub_pair_relays_through_hub(self):
        c = CartesianPoint(4000000.0, 0.0, 5000000.0, OSGB36)
        direct = default_transformer.convert(c, ED50)
        via_hub = default_transformer.convert(default_transformer.convert(c, WGS84), ED50)
        assert direct.datum is ED50
        assert direct.x == pytest.approx(via_hub.x, abs=1e-9)
        assert direct.y == pytest.approx(via_hub.y, abs=1e-9)
        assert direct.z == pytest.approx(via_hub.z, abs=1e-9)

    def test_unknown_target(self):
        with pytest.raises(UnrecognizedDatum):
            convert_datum(GREENWICH, "Atlantis")


class TestGeodetic:
    def test_greenwich_to_osgb36(self):
        p = convert_datum(GREENWICH, OSGB36)
        assert p.datum is OSGB36
        assert p.latitude == pytest.approx(51.4773, abs=1e-4)
        assert p.longitude == pytest.approx(0.0001, abs=1e-4)

    def test_round_trip(self):
        there = convert_datum(GREENWICH, "OSGB36")
        back = convert_datum(there, "WGS84")
        assert back.latitude == pytest.approx(GREENWICH.latitude, abs=1e-5)
        assert back.longitude == pytest.approx(GREENWICH.longitude, abs=1e-5)
        assert back.height == pytest.approx(0.0, abs=0.1)

    @pytest.mark.parametrize("name", ["ED50", "Irl1975", "NAD27", "NAD83", "NTF", "Potsdam", "TokyoJapan", "WGS72"])
    def test_round_trip_every_datum(self, name):
        back = convert_datum(convert_datum(GREENWICH, name), WGS84)
        assert back.latitude == pytest.approx(GREENWICH.latitude, abs=1e-5)
        assert back.longitude == pytest.approx(GREENWICH.longitude, abs=1e-5)

    def test_etrs89_coincides_with_wgs84(self):
        p = convert_datum(GREENWICH, "ETRS89")
        assert p.latitude == pytest.approx(GREENWICH.latitude, abs=1e-8)
        assert p.longitude == pytest.approx(GREENWICH.longitude, abs=1e-8)


class TestCustomRegistry:
    def test_alternative_hub(self):
        hub = Datum("Hub", ELLIPSOIDS["GRS80"], is_hub=True)
        shifted = Datum("Shifted", ELLIPSOIDS["GRS80"], HelmertTransform(tx=100.0))
        transformer = DatumTransformer(DatumRegistry([hub, shifted]))

        out = transformer.convert(CartesianPoint(1.0, 2.0, 3.0, hub), "Shifted")
        assert (out.x, out.y, out.z) == (101.0, 2.0, 3.0)
        back = transformer.convert(out, "Hub")
        assert (back.x, back.y, back.z) == (1.0, 2.0, 3.0)
