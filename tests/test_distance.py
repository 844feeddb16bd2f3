"""Tests for distance calculations."""

from battleship.utils import chebyshev_distance


class TestChebyshevDistance:
    """Test Chebyshev distance calculation."""

    def test_distance_same_point(self):
        """Test distance from a point to itself."""
        assert chebyshev_distance(5, 5, 5, 5) == 0

    def test_distance_orthogonal_neighbors(self):
        """Test orthogonal neighbors are at distance 1."""
        assert chebyshev_distance(4, 4, 5, 4) == 1
        assert chebyshev_distance(4, 4, 4, 3) == 1

    def test_distance_diagonal_neighbors(self):
        """Test diagonal neighbors are also at distance 1."""
        assert chebyshev_distance(4, 4, 5, 5) == 1
        assert chebyshev_distance(4, 4, 3, 5) == 1

    def test_distance_diagonal(self):
        """Test distance for diagonal movement."""
        assert chebyshev_distance(0, 0, 3, 4) == 4
        assert chebyshev_distance(0, 0, 5, 5) == 5

    def test_distance_board_corners(self):
        """Test distance between board corners (10x10 grid)."""
        assert chebyshev_distance(0, 0, 9, 9) == 9
        assert chebyshev_distance(0, 9, 9, 0) == 9
