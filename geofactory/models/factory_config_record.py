"""Factory configuration snapshot shared by both persistence envelopes"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ProjectionRecord(BaseModel):
    """Projection definition as stored in a persisted unit"""
    definition: str = Field(..., alias="proj4", description="Original or canonical projection string")
    radians: bool = Field(default=False, description="Geographic coordinates are in radians")

    class Config:
        populate_by_name = True
        frozen = True


class FactoryConfigRecord(BaseModel):
    """
    Self-contained snapshot of a GeometryFactory configuration.

    Field names are the keys of the document (YAML) form; aliases are the
    compact keys of the object-graph (pickle) form. Both forms are produced
    from this single field list:

        record.model_dump(exclude_none=True)                 # document
        record.model_dump(by_alias=True, exclude_none=True)  # object graph
    """
    has_z_coordinate: bool = Field(default=False, alias="hasz")
    has_m_coordinate: bool = Field(default=False, alias="hasm")
    srid: int = Field(default=0, alias="srid")
    buffer_resolution: int = Field(default=1, alias="bufr")
    wkt_generator: Dict[str, Any] = Field(default_factory=dict, alias="wktg")
    wkb_generator: Dict[str, Any] = Field(default_factory=dict, alias="wkbg")
    wkt_parser: Dict[str, Any] = Field(default_factory=dict, alias="wktp")
    wkb_parser: Dict[str, Any] = Field(default_factory=dict, alias="wkbp")
    proj4: Optional[ProjectionRecord] = Field(default=None, alias="proj4")
    coord_sys: Optional[str] = Field(default=None, alias="cs", description="WKT-CRS text")

    class Config:
        populate_by_name = True
        frozen = True
        json_schema_extra = {
            "example": {
                "has_z_coordinate": False,
                "has_m_coordinate": False,
                "srid": 4326,
                "buffer_resolution": 1,
                "wkt_generator": {"convert_case": "upper", "tag_format": "wkt11",
                                  "emit_ewkt_srid_prefix": False},
                "wkb_generator": {"type_format": "ewkb", "emit_srid": False,
                                  "little_endian": True, "hex_format": False},
                "wkt_parser": {},
                "wkb_parser": {},
            }
        }

    def to_document(self) -> Dict[str, Any]:
        """Mapping with descriptive keys (structured-document form)"""
        return self.model_dump(exclude_none=True)

    def to_marshal(self) -> Dict[str, Any]:
        """Mapping with compact keys (object-graph form)"""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> 'FactoryConfigRecord':
        """Build from either key style"""
        return cls.model_validate(data)
