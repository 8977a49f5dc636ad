"""
Fixtures for the API and page tests.

The application runs against an in-memory mongomock-motor database; the
startup hook is not triggered because TestClient is not used as a context
manager.
"""

import asyncio
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from quizapp import app
from quizapp.utils.database import db, ensure_indexes, CATEGORIES, QUESTIONS, TESTS

USER_DATA = {"name": "Test User", "email": "test@example.com", "password": "password123"}


def run(coro):
    """Run a database coroutine from synchronous test code"""
    return asyncio.run(coro)


@pytest.fixture
def database():
    db.bind(AsyncMongoMockClient(), "quiz_app_test")
    run(ensure_indexes())
    yield db
    db.client = None
    db.database = None


@pytest.fixture
def client(database):
    return TestClient(app)


@pytest.fixture
def registered_user(client):
    response = client.post("/api/auth/register", json=USER_DATA)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['token']}"}


@pytest.fixture
def catalog(database):
    """
    One category holding a two-question test (marks 1 and 2, correct options
    0 and 1) and one category without tests.
    """
    web_dev = ObjectId()
    mobile = ObjectId()
    q1 = ObjectId()
    q2 = ObjectId()
    test_id = ObjectId()

    run(database[CATEGORIES].insert_many([
        {"_id": web_dev, "name": "Web Development", "description": "HTML, CSS and JavaScript"},
        {"_id": mobile, "name": "Mobile Development", "description": "Android and iOS"},
    ]))
    run(database[QUESTIONS].insert_many([
        {"_id": q1, "text": "What does HTML stand for?",
         "options": ["Hyper Text Markup Language", "High Tech Multi Language", "Home Tool Markup Language"],
         "correct_option": 0, "marks": 1},
        {"_id": q2, "text": "Which CSS property controls spacing between elements?",
         "options": ["spacing", "margin", "padding"],
         "correct_option": 1, "marks": 2},
    ]))
    run(database[TESTS].insert_one({
        "_id": test_id,
        "title": "HTML & CSS Basics",
        "description": "Test your knowledge of HTML and CSS fundamentals",
        "category": web_dev,
        "total_questions": 2,
        "total_marks": 3,
        "passing_marks": 1,
        "duration": 5,
        "questions": [q1, q2],
        "instructions": ["Read each question carefully before answering"],
    }))

    return SimpleNamespace(
        category_id=str(web_dev),
        empty_category_id=str(mobile),
        test_id=str(test_id),
        q1=str(q1),
        q2=str(q2),
    )
