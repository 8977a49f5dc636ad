from pydantic import Field
from .base import MongoModel, PyObjectId

class Category(MongoModel):
    id: PyObjectId = Field(alias="_id")
    name: str
    description: str

class CategoryWithCount(Category):
    tests_count: int = 0
