"""
Base schema shared by every API model.

The back office speaks camelCase JSON (bankStatementId,
postDate, ...). Python code keeps snake_case attribute names;
the alias generator maps between the two.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
