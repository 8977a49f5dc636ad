from fastapi import APIRouter, Depends, HTTPException

from .. import services
from ..models.test import TestDetail, TestQuestions
from ..models.test_result import SubmissionResponse, TestResult, TestSubmission
from ..models.user import User
from ..utils.errors import server_error
from ..utils.security import get_current_user

router = APIRouter(prefix="/api/tests", tags=["tests"])

@router.get("/{test_id}", response_model=TestDetail)
async def get_test(test_id: str, current_user: User = Depends(get_current_user)):
    """
    Test metadata and instructions, without questions
    """
    try:
        return await services.get_test(test_id)
    except HTTPException:
        raise
    except Exception as e:
        raise server_error(e)

@router.get("/{test_id}/questions", response_model=TestQuestions)
async def get_test_questions(test_id: str, current_user: User = Depends(get_current_user)):
    """
    Questions in test order, with the correct options stripped
    """
    try:
        return await services.get_test_questions(test_id)
    except HTTPException:
        raise
    except Exception as e:
        raise server_error(e)

@router.post("/{test_id}/submit", response_model=SubmissionResponse)
async def submit_test(
    test_id: str,
    submission: TestSubmission,
    current_user: User = Depends(get_current_user)
):
    try:
        result_id = await services.submit_test(test_id, current_user, submission.answers)
    except HTTPException:
        raise
    except Exception as e:
        raise server_error(e)

    return {"message": "Test submitted successfully", "result_id": result_id}

@router.get("/{test_id}/results", response_model=TestResult)
async def get_test_result(test_id: str, current_user: User = Depends(get_current_user)):
    """
    Most recent result of the current user for this test, with question detail
    """
    try:
        return await services.get_test_result(test_id, current_user)
    except HTTPException:
        raise
    except Exception as e:
        raise server_error(e)
