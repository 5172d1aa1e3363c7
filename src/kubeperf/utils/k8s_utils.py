import math
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

# Longest suffixes first so "Mi" wins over "M" and "m".
_SUFFIX_MULTIPLIERS = (
    ("Ki", Decimal(1024)),
    ("Mi", Decimal(1024**2)),
    ("Gi", Decimal(1024**3)),
    ("Ti", Decimal(1024**4)),
    ("Pi", Decimal(1024**5)),
    ("Ei", Decimal(1024**6)),
    ("n", Decimal("0.000000001")),
    ("u", Decimal("0.000001")),
    ("m", Decimal("0.001")),
    ("k", Decimal(1000)),
    ("M", Decimal(1000**2)),
    ("G", Decimal(1000**3)),
    ("T", Decimal(1000**4)),
    ("P", Decimal(1000**5)),
    ("E", Decimal(1000**6)),
)

Quantity = Union[str, int, float, Decimal, None]


def parse_quantity(quantity: Quantity) -> Decimal:
    """
    Parse a Kubernetes quantity ('250m', '1.5', '128Mi', '2G', ...) to Decimal.
    Unparseable values are treated as zero.
    """
    if quantity is None:
        return Decimal(0)
    if isinstance(quantity, (int, float, Decimal)):
        return Decimal(quantity)

    text = str(quantity).strip()
    multiplier = Decimal(1)
    for suffix, factor in _SUFFIX_MULTIPLIERS:
        if text.endswith(suffix):
            text = text[: -len(suffix)]
            multiplier = factor
            break

    try:
        return Decimal(text) * multiplier
    except (InvalidOperation, ValueError):
        return Decimal(0)


def parse_cpu_request(cpu: Optional[str]) -> int:
    """Converts K8s CPU string to millicores (int), truncating fractions."""
    if not cpu:
        return 0
    return int(parse_quantity(cpu) * 1000)


def parse_memory_request(memory: Optional[str]) -> int:
    """Converts K8s memory string to bytes (int), truncating fractions."""
    if not memory:
        return 0
    return int(parse_quantity(memory))


def parse_cpu_usage(cpu: Quantity) -> int:
    """
    Converts a K8s CPU quantity to millicores, rounding up.

    Metrics-server reports CPU in nanocores; any non-zero value maps to at
    least 1m, so a tiny limit or usage is never mistaken for "unset".
    """
    if not cpu:
        return 0
    return max(0, math.ceil(parse_quantity(cpu) * 1000))


def parse_memory_usage(memory: Quantity) -> int:
    """Converts a K8s memory quantity to bytes, rounding up."""
    if not memory:
        return 0
    return max(0, math.ceil(parse_quantity(memory)))


def to_mebibytes(value: int) -> int:
    """Whole MiB in a byte count."""
    return value // (1024 * 1024)
