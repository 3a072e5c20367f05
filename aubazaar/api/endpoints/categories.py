from fastapi import APIRouter

from aubazaar.core.dependencies import Context
from aubazaar.db.repositories.category_repository import CategoryRepository
from aubazaar.db.session import DbSession
from aubazaar.schemas.category import CategoryList
from aubazaar.services.category_service import CategoryService

router = APIRouter()


@router.get("", response_model=CategoryList)
async def list_categories(session: DbSession, ctx: Context):
    """All categories with the number of active listings in each."""
    return await CategoryService(CategoryRepository(session), ctx.cache).list_categories()
