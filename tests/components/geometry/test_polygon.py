"""
Unit tests for Polygon values
"""

import pytest

from geofactory.core import GeometryType, StructuralError
from geofactory.components.factory import GeometryFactory


def ring(factory, coords):
    return factory.linear_ring([factory.point(*coord) for coord in coords])


@pytest.fixture
def factory():
    return GeometryFactory()


@pytest.fixture
def square_with_hole(factory):
    outer = ring(factory, [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)])
    inner = ring(factory, [(2, 2), (4, 2), (4, 4), (2, 4), (2, 2)])
    return factory.polygon(outer, [inner])


class TestPolygon:
    """Test polygon accessors and structural checks"""

    def test_accessors(self, square_with_hole):
        assert square_with_hole.geometry_type == GeometryType.POLYGON
        assert square_with_hole.dimension == 2
        assert square_with_hole.num_interior_rings == 1
        assert square_with_hole.interior_ring_n(0).num_points == 5
        assert square_with_hole.interior_ring_n(1) is None
        assert square_with_hole.exterior_ring.start_point.x == 0.0
        assert len(square_with_hole.rings) == 2
        assert len(square_with_hole.coordinates()) == 2

    def test_empty_polygon(self, factory):
        polygon = factory.polygon(factory.linear_ring([]))

        assert polygon.is_empty()
        assert polygon.rings == []

    def test_empty_exterior_with_holes_rejected(self, factory):
        inner = ring(factory, [(2, 2), (4, 2), (4, 4), (2, 2)])

        with pytest.raises(StructuralError):
            factory.polygon(factory.linear_ring([]), [inner])

    def test_inner_ring_from_other_factory_rejected(self, factory):
        """Rings must belong to the polygon's factory"""
        other = GeometryFactory(has_z=True)
        outer = ring(factory, [(0, 0), (10, 0), (10, 10), (0, 0)])
        inner = ring(other, [(2, 2), (4, 2), (4, 4), (2, 2)])

        with pytest.raises(StructuralError):
            factory.polygon(outer, [inner])

    def test_line_string_is_not_a_ring(self, factory):
        line_string = factory.line_string([factory.point(0, 0), factory.point(1, 1)])

        with pytest.raises(StructuralError):
            factory.polygon(line_string)

    def test_structural_equality(self, factory, square_with_hole):
        outer = ring(factory, [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)])
        inner = ring(factory, [(2, 2), (4, 2), (4, 4), (2, 4), (2, 2)])

        assert factory.polygon(outer, [inner]) == square_with_hole
        assert factory.polygon(outer) != square_with_hole


class TestPolygonValidity:
    """Topological validity is delegated to shapely"""

    def test_valid_polygon(self, square_with_hole):
        assert square_with_hole.is_valid()
        assert square_with_hole.invalid_reason() is None

    def test_self_intersecting_polygon(self, factory):
        bowtie = factory.polygon(ring(factory, [(0, 0), (2, 2), (2, 0), (0, 2), (0, 0)]))

        assert not bowtie.is_valid()
        assert "Self-intersection" in bowtie.invalid_reason()
