"""Distance calculations on the board grid."""


def chebyshev_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    """Calculate Chebyshev distance between two cells.

    Chebyshev distance is the maximum absolute difference of coordinates.
    Two cells touch (orthogonally or diagonally) exactly when their
    Chebyshev distance is 1, which is what the no-touching placement rule
    is phrased in.

    Args:
        x1: X coordinate of first cell
        y1: Y coordinate of first cell
        x2: X coordinate of second cell
        y2: Y coordinate of second cell

    Returns:
        Chebyshev distance between the two cells

    Examples:
        >>> chebyshev_distance(0, 0, 1, 1)
        1  # Diagonal neighbours touch
        >>> chebyshev_distance(0, 0, 2, 0)
        2  # One cell of water in between
    """
    return max(abs(x2 - x1), abs(y2 - y1))
