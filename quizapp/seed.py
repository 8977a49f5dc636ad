"""
Populate the database with a test user and sample categories, questions and tests.

Usage: python -m quizapp.seed
"""

import asyncio
import logging
from datetime import datetime
from .utils.database import (
    db,
    connect_to_db,
    close_db_connection,
    CATEGORIES,
    QUESTIONS,
    TESTS,
    TEST_RESULTS,
    USERS,
)
from .utils.security import get_password_hash

logger = logging.getLogger(__name__)

TEST_USER = {"name": "Test User", "email": "test@example.com", "password": "password123"}

CATEGORY_DATA = [
    {
        "name": "Web Development",
        "description": "Tests related to HTML, CSS, JavaScript, and web frameworks"
    },
    {
        "name": "Data Science",
        "description": "Tests covering statistics, machine learning, and data analysis"
    },
    {
        "name": "Mobile Development",
        "description": "Tests for Android, iOS, and cross-platform mobile development"
    },
]

WEB_DEV_QUESTIONS = [
    ("What does HTML stand for?",
     ["Hyper Text Markup Language", "High Tech Multi Language",
      "Hyper Transfer Markup Language", "Home Tool Markup Language"], 0, 1),
    ("Which CSS property is used to control the spacing between elements?",
     ["spacing", "margin", "padding", "gap"], 1, 1),
    ("Which of the following is NOT a JavaScript framework?",
     ["React", "Angular", "Vue", "Django"], 3, 2),
    ("What is the correct way to declare a variable in JavaScript?",
     ["var name;", "variable name;", "v name;", "let = name;"], 0, 1),
    ("Which HTTP status code represents a successful response?",
     ["200", "404", "500", "302"], 0, 1),
]

DATA_SCIENCE_QUESTIONS = [
    ("Which of the following is NOT a Python library used for data analysis?",
     ["Pandas", "NumPy", "Express", "Matplotlib"], 2, 2),
    ("What does SQL stand for?",
     ["Structured Query Language", "Simple Query Language",
      "Standard Question Language", "Structured Question Logic"], 0, 1),
    ("Which algorithm is commonly used for classification in machine learning?",
     ["K-means", "Linear Regression", "Random Forest", "Principal Component Analysis"], 2, 2),
    ("What is the purpose of data normalization?",
     ["To increase the size of the dataset", "To scale features to a similar range",
      "To remove all outliers", "To convert categorical data to numerical"], 1, 2),
    ("Which measure represents the middle value in a dataset?",
     ["Mean", "Mode", "Median", "Range"], 2, 1),
]

BASE_INSTRUCTIONS = [
    "Read each question carefully before answering",
    "Each question has only one correct answer",
]

NO_NEGATIVE_MARKING = "There is no negative marking for wrong answers"

async def insert_questions(rows) -> list:
    result = await db[QUESTIONS].insert_many([
        {"text": text, "options": options, "correct_option": correct, "marks": marks}
        for text, options, correct, marks in rows
    ])
    return result.inserted_ids

async def seed_database():
    """
    Clear existing data and insert the sample catalog
    """
    for collection in (USERS, CATEGORIES, QUESTIONS, TESTS, TEST_RESULTS):
        await db[collection].delete_many({})
    logger.info("Cleared existing data")

    await db[USERS].insert_one({
        "name": TEST_USER["name"],
        "email": TEST_USER["email"],
        "password": get_password_hash(TEST_USER["password"]),
        "created_at": datetime.utcnow()
    })
    logger.info("Created test user %s", TEST_USER["email"])

    categories = (await db[CATEGORIES].insert_many(CATEGORY_DATA)).inserted_ids
    web_dev = await insert_questions(WEB_DEV_QUESTIONS)
    data_science = await insert_questions(DATA_SCIENCE_QUESTIONS)

    await db[TESTS].insert_many([
        {
            "title": "HTML & CSS Basics",
            "description": "Test your knowledge of HTML and CSS fundamentals",
            "category": categories[0],
            "total_questions": 2,
            "total_marks": 2,
            "passing_marks": 1,
            "duration": 5,
            "questions": web_dev[:2],
            "instructions": BASE_INSTRUCTIONS + [NO_NEGATIVE_MARKING]
        },
        {
            "title": "JavaScript Fundamentals",
            "description": "Test covering core JavaScript concepts",
            "category": categories[0],
            "total_questions": 3,
            "total_marks": 4,
            "passing_marks": 2,
            "duration": 10,
            "questions": web_dev[2:],
            "instructions": BASE_INSTRUCTIONS + [NO_NEGATIVE_MARKING]
        },
        {
            "title": "Data Science Basics",
            "description": "Test your knowledge of fundamental data science concepts",
            "category": categories[1],
            "total_questions": 5,
            "total_marks": 8,
            "passing_marks": 5,
            "duration": 15,
            "questions": data_science,
            "instructions": BASE_INSTRUCTIONS + [
                "Questions have different mark values",
                NO_NEGATIVE_MARKING
            ]
        },
    ])
    logger.info("Created tests and questions")

async def main():
    await connect_to_db()
    try:
        await seed_database()
        logger.info("Database seeded successfully")
    finally:
        await close_db_connection()

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
