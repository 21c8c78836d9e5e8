"""Pure financial calculation utilities.

Every function here is stateless and never raises on a zero denominator.
Used by the KPI engine and the dashboard service.
"""


def safe_div(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is zero.

    >>> safe_div(30000, 100)
    300.0
    >>> safe_div(30000, 0)
    0.0
    """
    if denominator == 0:
        return 0.0
    return numerator / denominator


def mom_change(current: float, previous: float) -> float:
    """Month-over-month change in percent, relative to the signed previous value.

    Returns 0.0 when *previous* is zero.

    >>> mom_change(55000, 50000)
    10.0
    >>> mom_change(85, 100)
    -15.0
    >>> mom_change(100, 0)
    0.0
    """
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def mean(values: list[float]) -> float:
    """Arithmetic mean; 0.0 for an empty list.

    >>> mean([20000.0, -23000.0])
    -1500.0
    """
    if not values:
        return 0.0
    return sum(values) / len(values)


def signed_percent(value: float, decimals: int = 1) -> str:
    """Format a percentage change with an explicit ``+`` for gains.

    >>> signed_percent(10.0)
    '+10.0%'
    >>> signed_percent(-2.345, 2)
    '-2.35%'
    >>> signed_percent(0)
    '0.0%'
    """
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.{decimals}f}%"
