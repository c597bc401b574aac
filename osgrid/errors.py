"""Exception types raised by the geodesy and parsing modules."""


class GeodesyError(Exception):
    """Base class for conversion errors."""


class OutOfRangeGridReference(GeodesyError, ValueError):
    """Easting/northing outside the National Grid's 700km x 1300km extent."""

    def __init__(self, easting, northing):
        self.easting = easting
        self.northing = northing
        super().__init__(
            f"Grid reference ({easting}, {northing}) is outside the National Grid "
            f"(0-700000 E, 0-1300000 N)"
        )


class InvalidGridReference(GeodesyError, ValueError):
    """Grid reference text that cannot be parsed."""


class InvalidCoordinate(GeodesyError, ValueError):
    """Degree or lat/lon text that cannot be parsed."""


class DatumMismatch(GeodesyError, ValueError):
    """Point is defined on a different datum than the operation requires."""


class UnrecognizedDatum(GeodesyError, LookupError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Unrecognised datum '{name}'")

    def __str__(self):
        return self.args[0]


class UnrecognizedEllipsoid(GeodesyError, LookupError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Unrecognised ellipsoid '{name}'")

    def __str__(self):
        return self.args[0]


class DegenerateGeometry(GeodesyError, ArithmeticError):
    """Input for which the result would be undefined (NaN, infinity, the geocentre)."""


class ConvergenceError(GeodesyError, ArithmeticError):
    """Iterative latitude recovery did not reach tolerance within its iteration cap."""

    def __init__(self, northing, iterations, residual):
        self.northing = northing
        self.iterations = iterations
        self.residual = residual
        super().__init__(
            f"Latitude for northing {northing} did not converge after {iterations} "
            f"iterations (residual {residual:.3e} m)"
        )
