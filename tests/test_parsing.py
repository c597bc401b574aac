"""Tests for degree, lat/lon and grid reference parsing and formatting."""

import math

import pytest

from osgrid.errors import InvalidCoordinate, InvalidGridReference, OutOfRangeGridReference
from osgrid.geodesy.cartesian import GeodeticPoint
from osgrid.geodesy.national_grid import GridReference
from osgrid.parsing import (
    format_grid_reference,
    format_latlon,
    parse_degrees,
    parse_grid_reference,
    parse_latlon,
    to_brng,
    to_dms,
    to_lat,
    to_lon,
    wrap90,
    wrap180,
    wrap360,
)


class TestParseDegrees:
    @pytest.mark.parametrize("text,expected", [
        ("0.0", 0.0),
        ("0°", 0.0),
        ("000°00′00.0″", 0.0),
        ("45.76260", 45.7626),
        (" 45.76260 ", 45.7626),
        ("45°45.756′", 45.7626),
        ('45° 45.756′ 0"', 45.7626),
        ("45° 45’ 45.36", 45.7626),
        ('45° 45’ 45.36"', 45.7626),
        ("45 45 45.36", 45.7626),
        ("45.76260N", 45.7626),
        ("45.76260S", -45.7626),
        ("45.76260E", 45.7626),
        ("45.76260W", -45.7626),
        ("-45.76260", -45.7626),
        ("+45.76260", 45.7626),
        ("3 37 12W", -3.62),
    ])
    def test_valid(self, text, expected):
        assert parse_degrees(text) == pytest.approx(expected, abs=1e-12)

    @pytest.mark.parametrize("text", ["", "    ", "7.2.1", "7..18", "1 2 3 4", "abc", "°45"])
    def test_invalid(self, text):
        with pytest.raises(InvalidCoordinate):
            parse_degrees(text)

    def test_numbers_pass_through(self):
        assert parse_degrees(-3.5) == -3.5
        assert parse_degrees(51) == 51.0

    def test_non_finite(self):
        with pytest.raises(InvalidCoordinate):
            parse_degrees(math.inf)
        with pytest.raises(InvalidCoordinate):
            parse_degrees("nan")

    def test_bool_rejected(self):
        with pytest.raises(InvalidCoordinate):
            parse_degrees(True)


class TestWrap:
    def test_wrap90(self):
        assert wrap90(45) == 45
        assert wrap90(91) == 89
        assert wrap90(-91) == -89
        assert wrap90(180) == 0

    def test_wrap180(self):
        assert wrap180(181) == -179
        assert wrap180(-181) == 179
        assert wrap180(180) == 180

    def test_wrap360(self):
        assert wrap360(-1) == 359
        assert wrap360(361) == 1
        assert wrap360(360) == 360


class TestFormatDegrees:
    def test_decimal(self):
        assert to_dms(51.47788) == "051.4779°"

    def test_dm(self):
        assert to_dms(51.47788, "dm") == "051°28.67′"

    def test_dms(self):
        assert to_dms(51.47788, "dms") == "051°28′40″"

    def test_dms_rounds_up_into_minutes(self):
        assert to_dms(0.99999999, "dms") == "001°00′00″"

    def test_invalid_format(self):
        with pytest.raises(ValueError):
            to_dms(1.0, "x")

    def test_greenwich_lat_lon(self):
        assert to_lat(51.47788, "dms", 2) == "51°28′40.37″N"
        assert to_lon(-0.00147, "dms", 2) == "000°00′05.29″W"

    def test_bearing(self):
        assert to_brng(-90, "d", 0) == "270°"


class TestLatLon:
    def test_parse(self):
        p = parse_latlon("51°28′40.37″N, 000°00′05.29″W")
        assert p.latitude == pytest.approx(51.47788, abs=1e-5)
        assert p.longitude == pytest.approx(-0.00147, abs=1e-5)
        assert p.datum.name == "WGS84"

    def test_parse_with_datum(self):
        assert parse_latlon("52.1, -1.2", datum="OSGB36").datum.name == "OSGB36"

    def test_parse_wraps(self):
        p = parse_latlon("91, 181")
        assert p.latitude == 89
        assert p.longitude == -179

    def test_parse_needs_two_parts(self):
        with pytest.raises(InvalidCoordinate):
            parse_latlon("51.5")

    def test_format(self):
        p = GeodeticPoint(51.47788, -0.00147)
        assert format_latlon(p) == "51.4779°N, 000.0015°W"
        assert format_latlon(p, "n") == "51.4779, -0.0015"


class TestParseGridReference:
    @pytest.mark.parametrize("text,easting,northing", [
        ("651409, 313177", 651409, 313177),
        ("TG 51409 13177", 651409, 313177),
        ("tg5140913177", 651409, 313177),
        ("SU 0 0", 400000, 100000),
        ("SE095255", 409500, 425500),
        ("SE0849025580", 408490, 425580),
        ("SV", 0, 0),
        ("HP 40 12", 440000, 1212000),
    ])
    def test_valid(self, text, easting, northing):
        assert parse_grid_reference(text) == GridReference(easting, northing)

    @pytest.mark.parametrize("text", [
        "SI095255",  # no letter I
        "ZZ095255",
        "S095255",
        "SJ95255",  # odd digit count
        "SJ95X255",
        "SJ 12345 67890 1",
        "AA 00 00",
        "",
    ])
    def test_invalid(self, text):
        with pytest.raises(InvalidGridReference):
            parse_grid_reference(text)

    def test_numeric_out_of_range(self):
        with pytest.raises(OutOfRangeGridReference):
            parse_grid_reference("700001,0")


class TestFormatGridReference:
    def test_ten_digits(self):
        assert format_grid_reference(GridReference(651409, 313177)) == "TG 51409 13177"

    def test_eight_digits_truncates(self):
        assert format_grid_reference(GridReference(146760, 28548), 8) == "SW 4676 2854"

    def test_compact(self):
        assert format_grid_reference(GridReference(146760, 28548), 8, spaces=False) == "SW46762854"

    def test_numeric(self):
        assert format_grid_reference(GridReference(146760, 28548), 0) == "146760,28548"

    def test_two_digits(self):
        assert format_grid_reference(GridReference(651409, 313177), 2) == "TG 5 1"

    def test_zero_padding(self):
        assert format_grid_reference(GridReference(400100, 100020)) == "SU 00100 00020"

    @pytest.mark.parametrize("digits", [1, 3, 12, -2])
    def test_invalid_precision(self, digits):
        with pytest.raises(ValueError):
            format_grid_reference(GridReference(651409, 313177), digits)

    def test_out_of_range(self):
        with pytest.raises(OutOfRangeGridReference):
            format_grid_reference(GridReference(800000, 0))
