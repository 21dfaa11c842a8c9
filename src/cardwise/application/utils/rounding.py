import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3).

    Built-in round() sends halves to the even neighbour (2.5 -> 2).
    """
    return int(math.floor(value + 0.5))
