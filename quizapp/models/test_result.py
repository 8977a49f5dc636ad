from datetime import datetime
from typing import List, Optional
from pydantic import Field, StrictInt
from .base import MongoModel, Number, PyObjectId
from .question import QuestionBase

# selected_option value recorded for an unanswered question
UNANSWERED = -1

class SubmittedAnswer(MongoModel):
    question_id: str
    # strict: true, "0" and 0.0 are not option 0
    selected_option: Optional[StrictInt] = None

class TestSubmission(MongoModel):
    answers: List[SubmittedAnswer] = []

class SubmissionResponse(MongoModel):
    message: str
    result_id: PyObjectId

class AnswerRecord(MongoModel):
    question_id: PyObjectId
    selected_option: int
    is_correct: bool

class TestResultBase(MongoModel):
    score: Number
    total_questions: int
    correct_answers: int
    wrong_answers: int
    skipped_answers: int

class ScoredTest(TestResultBase):
    answers: List[AnswerRecord]

# Populated views used for results review

class TestReference(MongoModel):
    id: PyObjectId = Field(alias="_id")
    title: str
    total_marks: Number
    passing_marks: Number

class ReviewedQuestion(QuestionBase):
    id: PyObjectId = Field(alias="_id")
    correct_option: int

class ReviewedAnswer(MongoModel):
    # None when the question has since been removed
    question_id: Optional[ReviewedQuestion] = None
    selected_option: int
    is_correct: bool

class TestResultSummary(TestResultBase):
    id: PyObjectId = Field(alias="_id")
    user: PyObjectId
    test_id: Optional[TestReference] = None
    completed_at: datetime

class TestResult(TestResultSummary):
    answers: List[ReviewedAnswer]
