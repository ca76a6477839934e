"""Shared schema configuration"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema whose JSON field names are camelCase (the dashboard client's convention)"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
