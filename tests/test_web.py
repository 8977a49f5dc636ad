"""
Test cases for the server-rendered pages.
"""

import asyncio

from bson import ObjectId

from quizapp.utils.database import db, QUESTIONS, TESTS
from quizapp.utils.security import TOKEN_COOKIE

from .conftest import USER_DATA


def log_in(client):
    return client.post(
        "/login",
        data={"email": USER_DATA["email"], "password": USER_DATA["password"]},
        follow_redirects=False
    )


class TestAuthenticationPages:
    def test_pages_redirect_to_login_without_a_session(self, client, catalog):
        for url in ("/", "/categories", f"/tests/{catalog.test_id}", f"/tests/{catalog.test_id}/take"):
            response = client.get(url, follow_redirects=False)
            assert response.status_code == 303, url
            assert response.headers["location"] == "/login"

    def test_register_form_logs_the_user_in(self, client, database):
        response = client.post("/register", data=USER_DATA, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert TOKEN_COOKIE in response.cookies

        dashboard = client.get("/")
        assert dashboard.status_code == 200
        assert "Welcome, Test User" in dashboard.text

    def test_register_form_rejects_duplicates(self, client, registered_user):
        response = client.post("/register", data=USER_DATA, follow_redirects=False)

        assert response.status_code == 400
        assert "User already exists" in response.text

    def test_login_form_with_wrong_password(self, client, registered_user):
        response = client.post(
            "/login",
            data={"email": USER_DATA["email"], "password": "wrong"},
            follow_redirects=False
        )

        assert response.status_code == 400
        assert "Invalid credentials" in response.text

    def test_logout_clears_the_session(self, client, registered_user):
        log_in(client)
        client.get("/logout", follow_redirects=False)

        response = client.get("/", follow_redirects=False)
        assert response.status_code == 303


class TestTakingATest:
    def test_catalog_pages(self, client, registered_user, catalog):
        log_in(client)

        categories = client.get("/categories")
        assert "Web Development" in categories.text
        assert "Mobile Development" in categories.text

        tests = client.get(f"/categories/{catalog.category_id}/tests")
        assert "HTML &amp; CSS Basics" in tests.text

        empty = client.get(f"/categories/{catalog.empty_category_id}/tests")
        assert "No tests in this category yet." in empty.text

        instructions = client.get(f"/tests/{catalog.test_id}")
        assert "Read each question carefully before answering" in instructions.text

    def test_unknown_category_goes_back_with_a_notice(self, client, registered_user, catalog):
        log_in(client)

        response = client.get("/categories/not-an-id/tests", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"].startswith("/categories?notice=")

    def test_submit_and_review(self, client, registered_user, catalog):
        log_in(client)

        page = client.get(f"/tests/{catalog.test_id}/take")
        assert page.status_code == 200
        assert f'name="q_{catalog.q1}"' in page.text
        assert 'data-seconds="300"' in page.text

        response = client.post(
            f"/tests/{catalog.test_id}/take",
            data={f"q_{catalog.q1}": "0", f"q_{catalog.q2}": "2"},
            follow_redirects=False
        )
        assert response.status_code == 303
        assert response.headers["location"] == f"/tests/{catalog.test_id}/results"

        review = client.get(response.headers["location"])
        assert review.status_code == 200
        assert "Passed" in review.text
        assert "1/3" in review.text
        assert "(33%)" in review.text
        assert "(Your answer)" in review.text

        dashboard = client.get("/")
        assert "HTML &amp; CSS Basics" in dashboard.text

    def test_unanswered_questions_are_marked(self, client, registered_user, catalog):
        log_in(client)

        client.post(f"/tests/{catalog.test_id}/take", data={})
        review = client.get(f"/tests/{catalog.test_id}/results")

        assert "Failed" in review.text
        assert review.text.count("You didn't answer this question") == 2

    def test_results_page_without_a_result(self, client, registered_user, catalog):
        log_in(client)

        response = client.get(f"/tests/{catalog.test_id}/results", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"].startswith("/?notice=")

    def test_question_page_navigation(self, client, registered_user, catalog):
        log_in(client)

        page = client.get(f"/tests/{catalog.test_id}/take").text

        assert "Question 1 of 2" in page
        assert "Question 2 of 2" in page
        assert 'id="previous-button"' in page
        assert 'id="next-button"' in page
        assert 'id="submit-button"' in page
        assert 'max="2"' in page

    def test_test_without_questions(self, client, registered_user, catalog):
        asyncio.run(db[TESTS].update_one({"_id": ObjectId(catalog.test_id)}, {"$set": {"questions": []}}))
        log_in(client)

        page = client.get(f"/tests/{catalog.test_id}/take")

        assert page.status_code == 200
        assert "No questions available for this test." in page.text
        assert "test-form" not in page.text

    def test_review_with_a_deleted_question(self, client, registered_user, catalog):
        log_in(client)
        client.post(f"/tests/{catalog.test_id}/take", data={f"q_{catalog.q1}": "0", f"q_{catalog.q2}": "1"})
        asyncio.run(db[QUESTIONS].delete_one({"_id": ObjectId(catalog.q2)}))

        review = client.get(f"/tests/{catalog.test_id}/results")

        assert review.status_code == 200
        assert "What does HTML stand for?" in review.text
        assert "Which CSS property" not in review.text
