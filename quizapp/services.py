"""
Data access shared by the JSON API routes and the HTML pages.
Failures are raised as HTTPException so both surfaces report them the same way.
"""

import logging
from datetime import datetime
from typing import List
from bson import ObjectId
from fastapi import HTTPException, status
from pymongo.errors import DuplicateKeyError
from .models.category import CategoryWithCount
from .models.question import PublicQuestion
from .models.test import CategoryTests, TestDetail, TestQuestions, TestSummary
from .models.test_result import (
    SubmittedAnswer,
    TestResult,
    TestResultSummary,
)
from .models.user import AuthResponse, User, UserCreate, UserLogin
from .utils.database import (
    db,
    parse_object_id,
    CATEGORIES,
    QUESTIONS,
    TESTS,
    TEST_RESULTS,
    USERS,
)
from .utils.scoring import score_answers
from .utils.security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

SUMMARY_FIELDS = {
    "title": 1,
    "description": 1,
    "total_questions": 1,
    "total_marks": 1,
    "passing_marks": 1,
    "duration": 1,
}

REFERENCE_FIELDS = {"title": 1, "total_marks": 1, "passing_marks": 1}

INVALID_CREDENTIALS = "Invalid credentials"

# Auth

def _auth_response(user: dict) -> AuthResponse:
    return AuthResponse(
        token=create_access_token(str(user["_id"])),
        user=User(**user)
    )

async def register_user(user_data: UserCreate) -> AuthResponse:
    existing_user = await db[USERS].find_one({"email": user_data.email})
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists"
        )

    user_dict = user_data.model_dump(exclude={"password"})
    user_dict.update({
        "password": get_password_hash(user_data.password),
        "created_at": datetime.utcnow()
    })

    try:
        result = await db[USERS].insert_one(user_dict)
    except DuplicateKeyError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists"
        )
    user_dict["_id"] = result.inserted_id

    logger.info("Registered user %s", user_dict["_id"])
    return _auth_response(user_dict)

async def authenticate_user(credentials: UserLogin) -> AuthResponse:
    """
    Unknown email and wrong password fail identically
    """
    user = await db[USERS].find_one({"email": credentials.email})
    if not user or not verify_password(credentials.password, user["password"]):
        logger.warning("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _auth_response(user)

# Catalog

async def list_categories() -> List[CategoryWithCount]:
    categories = await db[CATEGORIES].find().to_list(None)

    results = []
    for category in categories:
        tests_count = await db[TESTS].count_documents({"category": category["_id"]})
        results.append(CategoryWithCount(**category, tests_count=tests_count))
    return results

async def list_category_tests(category_id: str) -> CategoryTests:
    oid = parse_object_id(category_id, "category")

    category = await db[CATEGORIES].find_one({"_id": oid})
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    tests = await db[TESTS].find({"category": oid}, SUMMARY_FIELDS).to_list(None)
    return CategoryTests(
        category_name=category["name"],
        tests=[TestSummary(**test) for test in tests]
    )

# Test delivery

async def _find_test(test_id: str, projection=None) -> dict:
    oid = parse_object_id(test_id, "test")
    test = await db[TESTS].find_one({"_id": oid}, projection)
    if not test:
        raise HTTPException(status_code=404, detail="Test not found")
    return test

async def _load_questions(question_ids: List[ObjectId]) -> List[dict]:
    """
    Fetch questions in the given order; ids that no longer resolve are dropped
    """
    found = await db[QUESTIONS].find({"_id": {"$in": question_ids}}).to_list(None)
    by_id = {question["_id"]: question for question in found}
    return [by_id[oid] for oid in question_ids if oid in by_id]

async def get_test(test_id: str) -> TestDetail:
    test = await _find_test(test_id, {**SUMMARY_FIELDS, "instructions": 1})
    return TestDetail(**test)

async def get_test_questions(test_id: str) -> TestQuestions:
    test = await _find_test(test_id)
    questions = await _load_questions(test.get("questions", []))
    return TestQuestions(
        id=test["_id"],
        title=test["title"],
        duration=test["duration"],
        total_questions=test["total_questions"],
        questions=[PublicQuestion(**question) for question in questions]
    )

# Submission

async def submit_test(test_id: str, user: User, answers: List[SubmittedAnswer]) -> str:
    test = await _find_test(test_id)
    questions = await _load_questions(test.get("questions", []))

    scored = score_answers(questions, answers)

    result_doc = scored.model_dump(exclude={"answers"})
    result_doc.update({
        "user": ObjectId(user.id),
        "test_id": test["_id"],
        "answers": [
            {
                "question_id": ObjectId(record.question_id),
                "selected_option": record.selected_option,
                "is_correct": record.is_correct
            }
            for record in scored.answers
        ],
        "completed_at": datetime.utcnow()
    })

    result = await db[TEST_RESULTS].insert_one(result_doc)
    logger.info(
        "User %s submitted test %s: score %s (%s/%s/%s)",
        user.id, test["_id"], scored.score,
        scored.correct_answers, scored.wrong_answers, scored.skipped_answers
    )
    return str(result.inserted_id)

# Results

async def _test_references(test_ids) -> dict:
    tests = await db[TESTS].find(
        {"_id": {"$in": list(set(test_ids))}}, REFERENCE_FIELDS
    ).to_list(None)
    return {test["_id"]: test for test in tests}

async def get_test_result(test_id: str, user: User) -> TestResult:
    oid = parse_object_id(test_id, "test")

    result = await db[TEST_RESULTS].find_one(
        {"test_id": oid, "user": ObjectId(user.id)},
        sort=[("completed_at", -1)]
    )
    if not result:
        raise HTTPException(status_code=404, detail="Test result not found")

    references = await _test_references([result["test_id"]])
    question_ids = [answer["question_id"] for answer in result.get("answers", [])]
    found = await db[QUESTIONS].find({"_id": {"$in": question_ids}}).to_list(None)
    questions = {question["_id"]: question for question in found}

    result["test_id"] = references.get(result["test_id"])
    result["answers"] = [
        {**answer, "question_id": questions.get(answer["question_id"])}
        for answer in result.get("answers", [])
    ]
    return TestResult(**result)

async def list_test_results(user: User) -> List[TestResultSummary]:
    results = await db[TEST_RESULTS].find(
        {"user": ObjectId(user.id)},
        sort=[("completed_at", -1)]
    ).to_list(None)

    references = await _test_references([result["test_id"] for result in results])
    summaries = []
    for result in results:
        result["test_id"] = references.get(result["test_id"])
        summaries.append(TestResultSummary(**result))
    return summaries
