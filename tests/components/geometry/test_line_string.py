"""
Unit tests for LineString, Line and LinearRing
"""

import pytest

from geofactory.core import GeometryType, StructuralError
from geofactory.components.factory import GeometryFactory
from geofactory.components.geometry import LineString, Line, LinearRing


@pytest.fixture
def factory():
    return GeometryFactory()


def make_points(factory, coords):
    return [factory.point(*coord) for coord in coords]


class TestLineString:
    """Test LineString accessors"""

    def test_accessors(self, factory):
        line_string = factory.line_string(make_points(factory, [(0, 0), (3, 4), (3, 0)]))

        assert line_string.num_points == 3
        assert line_string.start_point == factory.point(0, 0)
        assert line_string.end_point == factory.point(3, 0)
        assert line_string.point_n(1) == factory.point(3, 4)
        assert line_string.point_n(3) is None
        assert line_string.length() == pytest.approx(9.0)
        assert line_string.dimension == 1
        assert line_string.coordinates() == [[0.0, 0.0], [3.0, 4.0], [3.0, 0.0]]

    def test_empty(self, factory):
        line_string = factory.line_string([])

        assert line_string.is_empty()
        assert line_string.start_point is None
        assert not line_string.is_closed()
        assert line_string.length() == 0

    def test_single_point_rejected(self, factory):
        with pytest.raises(StructuralError):
            factory.line_string(make_points(factory, [(0, 0)]))

    def test_non_point_element_rejected(self, factory):
        line = factory.line(*make_points(factory, [(0, 0), (1, 1)]))

        with pytest.raises(StructuralError):
            factory.line_string([line, factory.point(2, 2)])

    def test_point_from_other_factory_rejected(self, factory):
        other = GeometryFactory(srid=3857)

        with pytest.raises(StructuralError):
            factory.line_string([factory.point(0, 0), other.point(1, 1)])

    def test_is_closed_and_is_ring(self, factory):
        square = factory.line_string(make_points(factory, [(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)]))
        bowtie = factory.line_string(make_points(factory, [(0, 0), (1, 1), (1, 0), (0, 1), (0, 0)]))

        assert square.is_closed() and square.is_ring()
        assert bowtie.is_closed() and not bowtie.is_ring()


class TestLine:
    """Test Line construction"""

    def test_two_points(self, factory):
        line = factory.line(factory.point(0, 0), factory.point(1, 1))

        assert isinstance(line, Line)
        assert line.geometry_type == GeometryType.LINE

    def test_three_points_rejected(self, factory):
        with pytest.raises(StructuralError):
            factory.line(*make_points(factory, [(0, 0), (1, 1), (2, 2)]))

    def test_equals_line_string_with_same_points(self, factory):
        """Line belongs to the LineString family for equality"""
        points = make_points(factory, [(0, 0), (1, 1)])

        assert factory.line(*points) == factory.line_string(points)


class TestLinearRing:
    """Test LinearRing construction"""

    def test_closed_ring(self, factory):
        ring = factory.linear_ring(make_points(factory, [(0, 0), (1, 0), (1, 1), (0, 0)]))

        assert isinstance(ring, LinearRing)
        assert ring.is_closed()

    def test_three_points_rejected(self, factory):
        with pytest.raises(StructuralError):
            factory.linear_ring(make_points(factory, [(0, 0), (1, 0), (0, 0)]))

    def test_unclosed_rejected(self, factory):
        with pytest.raises(StructuralError):
            factory.linear_ring(make_points(factory, [(0, 0), (1, 0), (1, 1), (0, 1)]))

    def test_empty_ring_allowed(self, factory):
        assert factory.linear_ring([]).is_empty()

    def test_is_line_string(self, factory):
        ring = factory.linear_ring(make_points(factory, [(0, 0), (1, 0), (1, 1), (0, 0)]))

        assert isinstance(ring, LineString)
