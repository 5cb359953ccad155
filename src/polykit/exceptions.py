"""Exception hierarchy for Polykit."""


class PolykitError(Exception):
    """Base exception for all Polykit errors."""

    pass


class GeometryError(PolykitError):
    """Errors in geometric calculations."""

    pass


class InvalidPolygonError(GeometryError):
    """Polygon data could not be turned into a polygon."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid polygon: {reason}")


class FillError(PolykitError):
    """Errors related to raster filling."""

    pass


class PixelOutOfBoundsError(FillError):
    """Pixel coordinates fall outside the buffer."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(f"Pixel ({x}, {y}) is outside a {width}x{height} buffer")


class BufferSizeError(FillError):
    """Pixel buffer length does not match its declared dimensions."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Pixel buffer has {actual} bytes, expected {expected}")


class BufferDimensionsError(FillError):
    """Buffer dimensions are negative."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        super().__init__(f"Buffer dimensions must be non-negative: {width}x{height}")


class UnsupportedFillRuleError(FillError):
    """Fill rule is not supported by the active edge table filler."""

    def __init__(self, rule: str) -> None:
        self.rule = rule
        super().__init__(f"Fill rule '{rule}' is not implemented")


class MissingPolygonError(FillError):
    """A polygon-driven fill strategy was requested without a polygon."""

    def __init__(self, strategy: str) -> None:
        self.strategy = strategy
        super().__init__(f"Fill strategy '{strategy}' requires a polygon")


class ParseError(PolykitError):
    """Errors related to parsing textual input."""

    pass


class PointParseError(ParseError):
    """A point list literal could not be parsed."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Could not parse points '{text}': {reason}")


class ColorParseError(ParseError):
    """A color value could not be converted to RGBA8."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid color '{text}': {reason}")
