"""
Unit tests for casting geometries between factories
"""

import pytest

from geofactory.components.factory import GeometryFactory
from geofactory.components.crs import projection


class TestCast:
    """Test GeometryFactory.cast / GeometryOps.cast"""

    def test_same_factory_returns_geometry(self):
        factory = GeometryFactory()
        point = factory.point(1, 2)

        assert factory.cast(point) is point

    def test_adds_z(self):
        source = GeometryFactory()
        target = GeometryFactory(has_z=True)

        point = target.cast(source.point(1, 2))

        assert point.factory is target
        assert point.ordinates() == (1.0, 2.0, 0.0)

    def test_drops_z_and_keeps_m(self):
        source = GeometryFactory(has_z=True, has_m=True)
        target = GeometryFactory(has_m=True)

        point = target.cast(source.point(1, 2, 3, 4))

        assert point.ordinates() == (1.0, 2.0, 4.0)

    def test_nested_structure(self):
        source = GeometryFactory(srid=4326)
        target = GeometryFactory(srid=0, has_z=True)
        collection = source.parse_wkt(
            "GEOMETRYCOLLECTION (POLYGON ((0 0, 1 0, 1 1, 0 0)), MULTIPOINT ((1 1)))"
        )

        result = target.cast(collection)

        assert result.srid == 0
        assert result.geometry_n(0).exterior_ring.point_n(1).ordinates() == (1.0, 0.0, 0.0)
        assert result.geometry_n(1).geometry_n(0).factory is target

    def test_line_stays_line(self):
        source = GeometryFactory()
        line = source.line(source.point(0, 0), source.point(1, 1))

        result = GeometryFactory(srid=1).cast(line)

        assert result.geometry_type == line.geometry_type

    def test_project_without_capability_copies_coordinates(self, monkeypatch):
        monkeypatch.setattr(projection, "_CAPABILITY", {"default": None})
        source = GeometryFactory(proj4="EPSG:4326")
        target = GeometryFactory(proj4="EPSG:3857")

        point = target.cast(source.point(10, 0), project=True)

        assert (point.x, point.y) == (10.0, 0.0)

    def test_project_with_pyproj(self):
        pytest.importorskip("pyproj")
        source = GeometryFactory(proj4="EPSG:4326", srid=4326)
        target = GeometryFactory(proj4="EPSG:3857", srid=3857)

        point = target.cast(source.point(10, 0), project=True)

        assert point.x == pytest.approx(1113194.9, rel=1e-6)
        assert point.y == pytest.approx(0.0, abs=1e-6)

    def test_no_projection_by_default(self):
        pytest.importorskip("pyproj")
        source = GeometryFactory(proj4="EPSG:4326", srid=4326)
        target = GeometryFactory(proj4="EPSG:3857", srid=3857)

        point = target.cast(source.point(10, 0))

        assert (point.x, point.y) == (10.0, 0.0)
