from typing import List
from pydantic import Field
from .base import MongoModel, Number, PyObjectId

class QuestionBase(MongoModel):
    text: str
    options: List[str]
    marks: Number = 1

class PublicQuestion(QuestionBase):
    """
    Question as served while a test is being taken: no correct option
    """
    id: PyObjectId = Field(alias="_id")
