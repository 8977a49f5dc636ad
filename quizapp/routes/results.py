from typing import List
from fastapi import APIRouter, Depends, HTTPException

from .. import services
from ..models.test_result import TestResultSummary
from ..models.user import User
from ..utils.errors import server_error
from ..utils.security import get_current_user

router = APIRouter(prefix="/api/test-results", tags=["results"])

@router.get("", response_model=List[TestResultSummary])
async def get_user_results(current_user: User = Depends(get_current_user)):
    """
    All results of the current user, most recent first
    """
    try:
        return await services.list_test_results(current_user)
    except HTTPException:
        raise
    except Exception as e:
        raise server_error(e)
