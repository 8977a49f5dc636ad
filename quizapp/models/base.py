from typing import Annotated, Union
from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

# MongoDB ObjectIds travel as plain strings in every API payload
PyObjectId = Annotated[str, BeforeValidator(str)]

class MongoModel(BaseModel):
    """
    Base for every document and API schema.
    Fields are snake_case in Python and MongoDB, camelCase on the wire.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )

# Marks and scores are whole numbers in practice but may be fractional
Number = Union[int, float]
