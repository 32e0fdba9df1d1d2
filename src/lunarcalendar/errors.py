"""Error taxonomy for the lunar calendar core and its collaborators."""


class InvalidInputError(ValueError):
    """Non-finite or out-of-range coordinate, fraction, year or coordinate string."""


class ImpossibleDateError(ValueError):
    """A day that does not exist in the given (year, month)."""


class UnoccupiedCellError(ValueError):
    """Inspection requested for a grid cell that holds no day."""


class GeocodingError(Exception):
    """Reverse-geocoder call failure."""
