from typing import List
from fastapi import APIRouter, Depends, HTTPException

from .. import services
from ..models.category import CategoryWithCount
from ..models.test import CategoryTests
from ..models.user import User
from ..utils.errors import server_error
from ..utils.security import get_current_user

router = APIRouter(prefix="/api/categories", tags=["categories"])

@router.get("", response_model=List[CategoryWithCount])
async def get_categories(current_user: User = Depends(get_current_user)):
    """
    List all categories with the number of tests in each
    """
    try:
        return await services.list_categories()
    except HTTPException:
        raise
    except Exception as e:
        raise server_error(e)

@router.get("/{category_id}/tests", response_model=CategoryTests)
async def get_category_tests(
    category_id: str,
    current_user: User = Depends(get_current_user)
):
    try:
        return await services.list_category_tests(category_id)
    except HTTPException:
        raise
    except Exception as e:
        raise server_error(e)
