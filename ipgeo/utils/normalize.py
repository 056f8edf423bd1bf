"""Country code normalization shared by both stores."""

from ipgeo.utils.errors import ValidationError


def normalize_country_code(raw: str, *, source: str = "") -> str:
    """Uppercase a country code and check it has exactly two characters.

    Args:
        raw: Country code as read from input (e.g., "us", "US")
        source: Optional location used in the error message (file, line)

    Returns:
        Uppercased two-character code

    Raises:
        ValidationError: If the code is not exactly two characters long

    Examples:
        >>> normalize_country_code("us")
        'US'

        >>> normalize_country_code("usa")
        Traceback (most recent call last):
        ...
        ipgeo.utils.errors.ValidationError: invalid country code: USA
    """
    code = raw.upper()
    if len(code) != 2:
        where = f" ({source})" if source else ""
        raise ValidationError(f"invalid country code: {code}{where}")
    return code


__all__ = ["normalize_country_code"]
