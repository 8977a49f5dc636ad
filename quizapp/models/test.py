from typing import List
from pydantic import Field
from .base import MongoModel, Number, PyObjectId
from .question import PublicQuestion

class TestSummary(MongoModel):
    id: PyObjectId = Field(alias="_id")
    title: str
    description: str
    total_questions: int
    total_marks: Number
    passing_marks: Number
    duration: int  # in minutes

class TestDetail(TestSummary):
    instructions: List[str] = []

class CategoryTests(MongoModel):
    category_name: str
    tests: List[TestSummary]

class TestQuestions(MongoModel):
    id: PyObjectId = Field(alias="_id")
    title: str
    duration: int
    total_questions: int
    questions: List[PublicQuestion]
