"""
Server-rendered pages walking a user through login, category selection,
test instructions, the timed question page and the results review.
"""

import logging
import os
from typing import Optional
from urllib.parse import urlencode
from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from .. import services
from ..config import settings
from ..models.test_result import SubmittedAnswer
from ..models.user import User, UserCreate, UserLogin
from ..utils.security import TOKEN_COOKIE, get_optional_page_user

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
templates = Jinja2Templates(directory=os.path.join(BASE_DIR, "templates"))

router = APIRouter(include_in_schema=False)

ANSWER_FIELD_PREFIX = "q_"

def redirect(url: str, notice: Optional[str] = None) -> RedirectResponse:
    if notice:
        url = f"{url}?{urlencode({'notice': notice})}"
    return RedirectResponse(url, status_code=303)

def login_redirect() -> RedirectResponse:
    return redirect("/login")

def _logged_in(response: RedirectResponse, token: str) -> RedirectResponse:
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax"
    )
    return response

def _error_message(exc: HTTPException) -> str:
    if isinstance(exc.detail, dict):
        return exc.detail.get("message", "Something went wrong")
    return str(exc.detail)

# Authentication pages

@router.get("/login")
async def login_page(request: Request):
    return templates.TemplateResponse(request, "login.html", {"error": None})

@router.post("/login")
async def login_submit(
    request: Request,
    email: str = Form(...),
    password: str = Form(...)
):
    try:
        auth = await services.authenticate_user(UserLogin(email=email, password=password))
    except (HTTPException, ValidationError):
        return templates.TemplateResponse(
            request,
            "login.html",
            {"error": services.INVALID_CREDENTIALS, "email": email},
            status_code=400
        )
    return _logged_in(redirect("/"), auth.token)

@router.get("/register")
async def register_page(request: Request):
    return templates.TemplateResponse(request, "register.html", {"error": None})

@router.post("/register")
async def register_submit(
    request: Request,
    name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...)
):
    try:
        auth = await services.register_user(
            UserCreate(name=name, email=email, password=password)
        )
    except ValidationError:
        error = "Please enter a name, a valid email and a password"
    except HTTPException as e:
        error = _error_message(e)
    else:
        return _logged_in(redirect("/"), auth.token)

    return templates.TemplateResponse(
        request,
        "register.html",
        {"error": error, "name": name, "email": email},
        status_code=400
    )

@router.get("/logout")
async def logout():
    response = redirect("/login", "You have been successfully logged out")
    response.delete_cookie(TOKEN_COOKIE)
    return response

# Dashboard and catalog

@router.get("/")
async def dashboard(request: Request, user: Optional[User] = Depends(get_optional_page_user)):
    if user is None:
        return login_redirect()

    results = await services.list_test_results(user)
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"user": user, "results": results}
    )

@router.get("/categories")
async def categories_page(request: Request, user: Optional[User] = Depends(get_optional_page_user)):
    if user is None:
        return login_redirect()

    categories = await services.list_categories()
    return templates.TemplateResponse(
        request,
        "categories.html",
        {"user": user, "categories": categories}
    )

@router.get("/categories/{category_id}/tests")
async def tests_page(
    request: Request,
    category_id: str,
    user: Optional[User] = Depends(get_optional_page_user)
):
    if user is None:
        return login_redirect()

    try:
        category_tests = await services.list_category_tests(category_id)
    except HTTPException as e:
        return redirect("/categories", _error_message(e))

    return templates.TemplateResponse(
        request,
        "tests.html",
        {
            "user": user,
            "category_name": category_tests.category_name,
            "tests": category_tests.tests
        }
    )

# Test taking

@router.get("/tests/{test_id}")
async def instructions_page(
    request: Request,
    test_id: str,
    user: Optional[User] = Depends(get_optional_page_user)
):
    if user is None:
        return login_redirect()

    try:
        test = await services.get_test(test_id)
    except HTTPException as e:
        return redirect("/categories", _error_message(e))

    return templates.TemplateResponse(
        request,
        "instructions.html",
        {"user": user, "test": test}
    )

@router.get("/tests/{test_id}/take")
async def take_test_page(
    request: Request,
    test_id: str,
    user: Optional[User] = Depends(get_optional_page_user)
):
    if user is None:
        return login_redirect()

    try:
        test = await services.get_test_questions(test_id)
    except HTTPException as e:
        return redirect("/categories", _error_message(e))

    return templates.TemplateResponse(
        request,
        "take_test.html",
        {
            "user": user,
            "test": test,
            "field_prefix": ANSWER_FIELD_PREFIX,
            "duration_seconds": test.duration * 60
        }
    )

@router.post("/tests/{test_id}/take")
async def submit_test_form(
    request: Request,
    test_id: str,
    user: Optional[User] = Depends(get_optional_page_user)
):
    if user is None:
        return login_redirect()

    form = await request.form()
    answers = []
    for field, value in form.multi_items():
        if not field.startswith(ANSWER_FIELD_PREFIX):
            continue
        try:
            selected = int(value)
        except (TypeError, ValueError):
            continue
        answers.append(SubmittedAnswer(
            question_id=field[len(ANSWER_FIELD_PREFIX):],
            selected_option=selected
        ))

    try:
        await services.submit_test(test_id, user, answers)
    except HTTPException as e:
        logger.warning("Test submission from the web page failed: %s", e.detail)
        return redirect(f"/tests/{test_id}", "Failed to submit test")

    return redirect(f"/tests/{test_id}/results")

@router.get("/tests/{test_id}/results")
async def results_page(
    request: Request,
    test_id: str,
    user: Optional[User] = Depends(get_optional_page_user)
):
    if user is None:
        return login_redirect()

    try:
        result = await services.get_test_result(test_id, user)
    except HTTPException as e:
        return redirect("/", _error_message(e))

    total_marks = result.test_id.total_marks if result.test_id else 0
    passing_marks = result.test_id.passing_marks if result.test_id else 0
    percentage = round(result.score / total_marks * 100) if total_marks else 0

    return templates.TemplateResponse(
        request,
        "results.html",
        {
            "user": user,
            "result": result,
            "passed": result.score >= passing_marks,
            "total_marks": total_marks,
            "percentage": percentage
        }
    )
