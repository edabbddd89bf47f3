"""Traveller-style size codes from body diameter.

Codes 0-9 and A cover 1600 km bands centred on multiples of 1600 km (so
code 8 spans 12000-13600 km). Larger bodies use the extended letters:

    B  16800 - 40000 km   (large super-earths, mini-neptunes)
    C  40000 - 80000 km   (neptunes)
    D  80000 - 120000 km  (saturns)
    E  120000 - 250000 km (jupiters)
    F  250000 km and up   (super-jupiters)

A diameter on a boundary takes the larger code.
"""

BAND_WIDTH_KM = 1600.0

SIZE_CODES = ("0", "1", "2", "3", "4", "5", "6", "7", "8", "9", "A", "B", "C", "D", "E", "F")

# Lower diameter edge of each code in km
_CODE_LOWER_KM = {
    "0": 0.0,
    **{code: BAND_WIDTH_KM * i - BAND_WIDTH_KM / 2 for i, code in enumerate(SIZE_CODES[1:11], 1)},
    "B": 16800.0,
    "C": 40000.0,
    "D": 80000.0,
    "E": 120000.0,
    "F": 250000.0,
}


def size_code_from_diameter_km(diameter_km: float) -> str:
    """Size code for a diameter.

    Args:
        diameter_km: Body diameter in kilometers

    Returns:
        Single-character size code

    Raises:
        ValueError: If diameter is negative

    Examples:
        >>> size_code_from_diameter_km(12742)
        '8'
        >>> size_code_from_diameter_km(139820)
        'E'
    """
    if diameter_km < 0:
        raise ValueError(f"Invalid diameter: {diameter_km} (must be >= 0)")
    for code in reversed(SIZE_CODES):
        if diameter_km >= _CODE_LOWER_KM[code]:
            return code
    return "0"


def get_diameter_range_km(code: str) -> tuple[float, float]:
    """Diameter range [min, max) of a size code.

    Raises:
        KeyError: If the code is unknown
    """
    code = code.upper()
    if code not in _CODE_LOWER_KM:
        raise KeyError(f"Unknown size code: {code}")
    index = SIZE_CODES.index(code)
    upper = _CODE_LOWER_KM[SIZE_CODES[index + 1]] if index + 1 < len(SIZE_CODES) else float("inf")
    return _CODE_LOWER_KM[code], upper
