"""RGBA8 pixel buffer access and color conversion.

Buffers are flat ``bytearray`` objects of ``width * height * 4`` bytes,
row-major, origin top-left. ``get_pixel`` and ``set_pixel`` are the only
functions that index into a buffer, so bounds are checked in one place.
"""

from collections.abc import Sequence

from polykit.exceptions import (
    BufferDimensionsError,
    BufferSizeError,
    ColorParseError,
    PixelOutOfBoundsError,
)

RGBA = tuple[int, int, int, int]

TRANSPARENT: RGBA = (0, 0, 0, 0)
BLACK: RGBA = (0, 0, 0, 255)
WHITE: RGBA = (255, 255, 255, 255)
RED: RGBA = (255, 0, 0, 255)

BYTES_PER_PIXEL = 4


def create_buffer(width: int, height: int, color: RGBA = TRANSPARENT) -> bytearray:
    """Allocate a buffer filled with ``color``.

    Args:
        width: Buffer width in pixels
        height: Buffer height in pixels
        color: Initial color of every pixel

    Returns:
        New RGBA8 buffer

    Raises:
        BufferDimensionsError: If either dimension is negative
    """
    if width < 0 or height < 0:
        raise BufferDimensionsError(width, height)
    return bytearray(bytes(color) * (width * height))


def check_buffer(buffer: bytearray, width: int, height: int) -> None:
    """Verify that ``buffer`` matches its declared dimensions.

    Raises:
        BufferSizeError: If the length is not ``width * height * 4``
    """
    expected = width * height * BYTES_PER_PIXEL
    if len(buffer) != expected:
        raise BufferSizeError(expected, len(buffer))


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def get_pixel(buffer: bytearray, width: int, height: int, x: int, y: int) -> RGBA:
    """Read the color at (x, y).

    Raises:
        PixelOutOfBoundsError: If (x, y) lies outside the buffer
    """
    if not in_bounds(x, y, width, height):
        raise PixelOutOfBoundsError(x, y, width, height)
    idx = (y * width + x) * BYTES_PER_PIXEL
    return (buffer[idx], buffer[idx + 1], buffer[idx + 2], buffer[idx + 3])


def set_pixel(
    buffer: bytearray, width: int, height: int, x: int, y: int, color: RGBA
) -> None:
    """Write ``color`` at (x, y).

    Raises:
        PixelOutOfBoundsError: If (x, y) lies outside the buffer
    """
    if not in_bounds(x, y, width, height):
        raise PixelOutOfBoundsError(x, y, width, height)
    idx = (y * width + x) * BYTES_PER_PIXEL
    buffer[idx : idx + BYTES_PER_PIXEL] = bytes(color)


def count_pixels(buffer: bytearray, color: RGBA) -> int:
    """Count pixels of exactly ``color``."""
    target = bytes(color)
    return sum(
        1
        for idx in range(0, len(buffer), BYTES_PER_PIXEL)
        if buffer[idx : idx + BYTES_PER_PIXEL] == target
    )


def color_from_floats(components: Sequence[float]) -> RGBA:
    """Convert float RGBA components in [0, 1] to bytes.

    Components are clamped, scaled by 255 and truncated. A missing alpha
    component means opaque.

    Examples:
        >>> color_from_floats((1.0, 0.5, 0.0))
        (255, 127, 0, 255)
    """
    if len(components) not in (3, 4):
        raise ColorParseError(
            str(tuple(components)), f"expected 3 or 4 components, got {len(components)}"
        )
    values = list(components) + ([1.0] if len(components) == 3 else [])
    r, g, b, a = (int(min(max(c, 0.0), 1.0) * 255) for c in values)
    return (r, g, b, a)


def color_to_floats(color: RGBA) -> tuple[float, float, float, float]:
    """Convert an RGBA8 color to float components in [0, 1]."""
    r, g, b, a = color
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def parse_hex_color(text: str) -> RGBA:
    """Parse ``#RRGGBB`` or ``#RRGGBBAA`` (leading ``#`` optional).

    Raises:
        ColorParseError: If the text is not a 6 or 8 digit hex color

    Examples:
        >>> parse_hex_color("#ff0000")
        (255, 0, 0, 255)
    """
    value = text.strip().removeprefix("#")
    if len(value) not in (6, 8):
        raise ColorParseError(text, "expected #RRGGBB or #RRGGBBAA")
    try:
        channels = [int(value[i : i + 2], 16) for i in range(0, len(value), 2)]
    except ValueError as e:
        raise ColorParseError(text, "non-hexadecimal digits") from e
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = channels
    return (r, g, b, a)
