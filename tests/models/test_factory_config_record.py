"""
Unit tests for FactoryConfigRecord - shared persistence record for both envelopes.
"""

import pytest
from pydantic import ValidationError

from geofactory.models import FactoryConfigRecord, ProjectionRecord


@pytest.fixture
def record():
    return FactoryConfigRecord(
        has_z_coordinate=True,
        srid=3857,
        buffer_resolution=4,
        wkt_generator={"convert_case": "upper"},
        proj4=ProjectionRecord(definition="EPSG:3857"),
        coord_sys='PROJCS["WGS 84 / Pseudo-Mercator"]',
    )


class TestFactoryConfigRecord:
    """Test key styles of FactoryConfigRecord"""

    def test_defaults(self):
        record = FactoryConfigRecord()

        assert record.has_z_coordinate is False
        assert record.has_m_coordinate is False
        assert record.srid == 0
        assert record.buffer_resolution == 1
        assert record.proj4 is None
        assert record.coord_sys is None

    def test_document_keys(self, record):
        """Document form uses descriptive field names"""
        data = record.to_document()

        assert data["has_z_coordinate"] is True
        assert data["buffer_resolution"] == 4
        assert data["wkt_generator"] == {"convert_case": "upper"}
        assert data["proj4"] == {"definition": "EPSG:3857", "radians": False}
        assert data["coord_sys"].startswith("PROJCS")

    def test_marshal_keys(self, record):
        """Object-graph form uses compact keys"""
        data = record.to_marshal()

        assert set(data) == {"hasz", "hasm", "srid", "bufr", "wktg", "wkbg", "wktp", "wkbp", "proj4", "cs"}
        assert data["hasz"] is True
        assert data["bufr"] == 4

    def test_none_fields_are_omitted(self):
        data = FactoryConfigRecord().to_document()

        assert "proj4" not in data
        assert "coord_sys" not in data

    @pytest.mark.parametrize("style", ["to_document", "to_marshal"])
    def test_from_mapping_accepts_both_styles(self, record, style):
        assert FactoryConfigRecord.from_mapping(getattr(record, style)()) == record

    def test_invalid_mapping(self):
        with pytest.raises(ValidationError):
            FactoryConfigRecord.from_mapping({"srid": "not a number"})

    def test_record_is_frozen(self, record):
        with pytest.raises(ValidationError):
            record.srid = 4326
