"""Utilities for parsing and formatting grid references and lat/lon strings.

Grid references are accepted as letter-pair plus digits ('TG 51409 13177',
'SU0000', 'tg5113') or as numeric 'easting,northing'. Degrees are accepted as
signed decimals or deg/min/sec with any separators and an optional compass
suffix ('-3.62', '3 37 12W', '3°37′12″W').
"""

import math
import re
from typing import Optional, Union

from .errors import InvalidCoordinate, InvalidGridReference
from .geodesy.cartesian import GeodeticPoint
from .geodesy.datums import DATUMS, Datum
from .geodesy.national_grid import GridReference

_NUMERIC_GRIDREF_RE = re.compile(r"^(\d+(?:\.\d+)?),(\d+(?:\.\d+)?)$")
_LETTER_GRIDREF_RE = re.compile(r"^([A-Z])([A-Z])(\d*)$")
_DMS_SEPARATOR_RE = re.compile(r"[^0-9.]+")

# Default decimal places per sexagesimal format
_DEFAULT_DP = {"d": 4, "dm": 2, "dms": 0}


# ── Wrapping ─────────────────────────────────────────────────────


def wrap90(degrees: float) -> float:
    """Constrain to -90..+90 (latitude); e.g. 91 -> 89, -91 -> -89."""
    if -90 <= degrees <= 90:
        return degrees
    # triangle wave, amplitude 90, period 360
    return 4 * 90 / 360 * abs((degrees - 90) % 360 - 180) - 90


def wrap180(degrees: float) -> float:
    """Constrain to -180..+180 (longitude); e.g. 181 -> -179."""
    if -180 <= degrees <= 180:
        return degrees
    return (degrees - 180) % 360 - 180


def wrap360(degrees: float) -> float:
    """Constrain to 0..360 (bearing); e.g. -1 -> 359."""
    if 0 <= degrees <= 360:
        return degrees
    return degrees % 360


# ── Degrees ──────────────────────────────────────────────────────


def parse_degrees(value: Union[str, float, int]) -> float:
    """Parse decimal degrees or deg/min/sec into signed decimal degrees.

    Raises InvalidCoordinate for anything that is not 1-3 numeric components,
    or that would not be a finite number.
    """
    if isinstance(value, bool):
        raise InvalidCoordinate(f"Invalid degrees: {value!r}")
    if not isinstance(value, str):
        # numeric types, including numpy scalars
        try:
            result = float(value)
        except (TypeError, ValueError):
            raise InvalidCoordinate(f"Invalid degrees: {value!r}") from None
        if not math.isfinite(result):
            raise InvalidCoordinate(f"Invalid degrees: {value!r}")
        return result

    s = value.strip()
    try:
        result = float(s)
    except ValueError:
        pass
    else:
        if not math.isfinite(result):
            raise InvalidCoordinate(f"Invalid degrees: '{value}'")
        return result

    if not s:
        raise InvalidCoordinate(f"Invalid degrees: '{value}'")

    # strip off any sign or compass direction, then split out d/m/s
    negative = s[0] == "-"
    if s[0] in "+-":
        s = s[1:].strip()
    if s and s[-1].upper() in "SW":
        negative = True
        s = s[:-1].strip()
    elif s and s[-1].upper() in "NE":
        s = s[:-1].strip()

    parts = _DMS_SEPARATOR_RE.split(s)
    if parts and parts[-1] == "":
        parts.pop()
    if not parts or parts[0] == "" or len(parts) > 3:
        raise InvalidCoordinate(f"Invalid degrees: '{value}'")

    total = 0.0
    multiplier = 1.0
    for part in parts:
        try:
            total += float(part) * multiplier
        except ValueError:
            raise InvalidCoordinate(f"Invalid degrees: '{value}'") from None
        multiplier /= 60

    return -total if negative else total


def _fixed(value: float, dp: int, int_digits: int) -> str:
    """Format to dp places, left-padded with zeros to int_digits integer digits."""
    text = f"{value:.{dp}f}"
    return text.zfill(int_digits + (dp + 1 if dp > 0 else 0))


def to_dms(degrees: float, fmt: str = "d", dp: Optional[int] = None) -> str:
    """Format unsigned degrees as 'd' (051.4779°), 'dm' or 'dms' (051°28′40″)."""
    if fmt not in _DEFAULT_DP:
        raise ValueError(f"Invalid format '{fmt}'. Must be one of: d, dm, dms")
    if not math.isfinite(degrees):
        raise InvalidCoordinate(f"Cannot format {degrees!r} as degrees")
    if dp is None:
        dp = _DEFAULT_DP[fmt]

    degrees = abs(degrees)

    if fmt == "d":
        return _fixed(degrees, dp, 3) + "°"

    if fmt == "dm":
        d = math.floor(degrees)
        m = _fixed((degrees * 60) % 60, dp, 2)
        if float(m) == 60:  # rounded up
            m = _fixed(0, dp, 2)
            d += 1
        return f"{d:03d}°{m}′"

    d = math.floor(degrees)
    m = math.floor(degrees * 3600 / 60) % 60
    s = _fixed(degrees * 3600 % 60, dp, 2)
    if float(s) == 60:
        s = _fixed(0, dp, 2)
        m += 1
    if m == 60:
        m = 0
        d += 1
    return f"{d:03d}°{m:02d}′{s}″"


def to_lat(degrees: float, fmt: str = "d", dp: Optional[int] = None) -> str:
    # latitudes never need the third degree digit
    return to_dms(wrap90(degrees), fmt, dp)[1:] + ("S" if degrees < 0 else "N")


def to_lon(degrees: float, fmt: str = "d", dp: Optional[int] = None) -> str:
    return to_dms(wrap180(degrees), fmt, dp) + ("W" if degrees < 0 else "E")


def to_brng(degrees: float, fmt: str = "d", dp: Optional[int] = None) -> str:
    return to_dms(wrap360(degrees), fmt, dp).replace("360", "0")


# ── Lat/lon points ───────────────────────────────────────────────


def parse_latlon(
    text: str,
    height: float = 0.0,
    datum: Union[Datum, str, None] = None,
) -> GeodeticPoint:
    """Parse 'lat, lon' (decimal or sexagesimal) into a range-wrapped point.

    The datum defaults to the hub (WGS84).
    """
    parts = text.split(",") if isinstance(text, str) else []
    if len(parts) != 2:
        raise InvalidCoordinate(f"Invalid lat/lon: '{text}'")
    lat = wrap90(parse_degrees(parts[0]))
    lon = wrap180(parse_degrees(parts[1]))
    return GeodeticPoint(lat, lon, height, DATUMS.resolve(datum))


def format_latlon(point: GeodeticPoint, fmt: str = "d", dp: Optional[int] = None) -> str:
    """'51.4779°N, 000.0015°W' style, or signed '51.4779, -0.0015' for fmt='n'."""
    if fmt == "n":
        dp = 4 if dp is None else dp
        return f"{point.latitude:.{dp}f}, {point.longitude:.{dp}f}"
    return f"{to_lat(point.latitude, fmt, dp)}, {to_lon(point.longitude, fmt, dp)}"


# ── Grid references ──────────────────────────────────────────────


def parse_grid_reference(text: str) -> GridReference:
    """Parse a letter-pair or numeric grid reference.

    Letter-pair digits are split in half and right-padded to metres, so
    'ST 17 76' is the south-west corner of a 1km square (317000, 176000).
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidGridReference(f"Invalid grid reference: {text!r}")

    s = re.sub(r"\s+", "", text).upper()

    match = _NUMERIC_GRIDREF_RE.match(s)
    if match:
        return GridReference(int(float(match.group(1))), int(float(match.group(2)))).validate()

    match = _LETTER_GRIDREF_RE.match(s)
    if not match:
        raise InvalidGridReference(f"Invalid grid reference: '{text}'")
    first, second, digits = match.groups()

    # 'I' is not used in grid letters
    if first == "I" or second == "I":
        raise InvalidGridReference(f"Invalid grid reference: '{text}'")

    l1 = ord(first) - ord("A")
    l2 = ord(second) - ord("A")
    if l1 > 7:
        l1 -= 1
    if l2 > 7:
        l2 -= 1

    # first letter must be one of the 500km squares H..T
    if not 7 <= l1 <= 18:
        raise InvalidGridReference(f"Invalid grid reference: '{text}'")

    if len(digits) % 2 or len(digits) > 10:
        raise InvalidGridReference(
            f"Invalid grid reference: '{text}' (need an even number of digits, at most 10)"
        )

    # 100km square indexes from the false origin (square SV)
    e100km = ((l1 - 2) % 5) * 5 + (l2 % 5)
    n100km = (19 - (l1 // 5) * 5) - (l2 // 5)

    half = len(digits) // 2
    easting = int((digits[:half] + "00000")[:5])
    northing = int((digits[half:] + "00000")[:5])

    return GridReference(e100km * 100_000 + easting, n100km * 100_000 + northing).validate()


def format_grid_reference(
    ref: GridReference,
    digits: int = 10,
    spaces: bool = True,
) -> str:
    """Format as 'TG 51409 13177' at 2-10 digits, or numeric 'e,n' for digits=0.

    Reduced precision truncates rather than rounds, so the reference names
    the square that contains the point.
    """
    if digits == 0:
        return f"{ref.easting},{ref.northing}"
    if digits % 2 or not 2 <= digits <= 10:
        raise ValueError(f"Invalid precision {digits}. Must be 0 or an even number from 2 to 10")

    ref.validate()
    e100km = ref.easting // 100_000
    n100km = ref.northing // 100_000

    # numeric equivalents of the grid letters, then skip 'I'
    l1 = (19 - n100km) - (19 - n100km) % 5 + (e100km + 10) // 5
    l2 = (19 - n100km) * 5 % 25 + e100km % 5
    if l1 > 7:
        l1 += 1
    if l2 > 7:
        l2 += 1
    letters = chr(l1 + ord("A")) + chr(l2 + ord("A"))

    half = digits // 2
    e = (ref.easting % 100_000) // 10 ** (5 - half)
    n = (ref.northing % 100_000) // 10 ** (5 - half)

    if spaces:
        return f"{letters} {e:0{half}d} {n:0{half}d}"
    return f"{letters}{e:0{half}d}{n:0{half}d}"
