def fmt_currency(value, decimals: int = 0):
    """ Customer-safe currency formatter.
    - None -> 'N/A'
    - Int / float -> $ with comma separators
    """
    if value is None:
        return "N/A"
    try:
        return f"${float(value):,.{decimals}f}"
    except (ValueError, TypeError):
        return str(value)


def fmt_number(value, decimals: int = 0):
    """ Customer-safe number formatter.
    - None -> 'N/A'
    - Int / float -> comma separated
    """
    if value is None:
        return "N/A"
    try:
        return f"{float(value):,.{decimals}f}"
    except (ValueError, TypeError):
        return str(value)


def fmt_percent(value):
    """ Percent formatter for values already expressed in percent (42.5 -> '42.5%')."""
    if value is None:
        return "N/A"
    try:
        return f"{float(value):.1f}%"
    except (ValueError, TypeError):
        return str(value)


def fmt_years(value):
    if value is None:
        return "N/A"
    return f"{float(value):.1f} years"
