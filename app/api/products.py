"""
Product API endpoints
Clean API layer with dependency injection
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from app.core.config import config
from app.core.errors import ErrorResponseModel
from app.core.rate_limit import limiter
from app.dependencies.auth import get_current_user, require_admin
from app.dependencies.services import get_product_service
from app.models.product import Product
from app.models.user import User
from app.schemas.product import ProductCreate, ProductListResponse, ProductUpdate, ReviewCreate
from app.schemas.user import MessageResponse
from app.services.product import ProductService

router = APIRouter()


@router.get("", response_model=ProductListResponse)
async def list_products(
    keyword: Optional[str] = Query(None, description="Case-insensitive substring of the product name"),
    page_number: int = Query(1, alias="pageNumber", description="1-based page number"),
    service: ProductService = Depends(get_product_service),
):
    """
    Paginated product listing, newest first.
    Returns {products, page, pages} with a fixed page size.
    """
    return await service.get_products(keyword, page_number)


@router.get("/top-rated", response_model=ProductListResponse)
async def list_top_rated_products(
    keyword: Optional[str] = Query(None),
    page_number: int = Query(1, alias="pageNumber"),
    service: ProductService = Depends(get_product_service),
):
    """Same envelope as the listing, ordered by rating"""
    return await service.get_products(keyword, page_number, top_rated=True)


@router.get(
    "/all",
    response_model=List[Product],
    responses={401: {"model": ErrorResponseModel}, 403: {"model": ErrorResponseModel}},
)
async def list_all_products(
    service: ProductService = Depends(get_product_service),
    _: User = Depends(require_admin),
):
    return await service.get_all_products()


@router.get(
    "/{product_id}",
    response_model=Product,
    responses={404: {"model": ErrorResponseModel}},
)
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    return await service.get_product(product_id)


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponseModel}, 401: {"model": ErrorResponseModel}},
)
async def create_product(
    product: ProductCreate,
    service: ProductService = Depends(get_product_service),
    user: User = Depends(require_admin),
):
    """
    Create a new product. Rejects duplicate names.
    Requires admin.
    """
    return await service.create_product(product, created_by=user.id)


@router.put(
    "/{product_id}",
    response_model=Product,
    responses={404: {"model": ErrorResponseModel}},
)
async def update_product(
    product_id: str,
    product: ProductUpdate,
    service: ProductService = Depends(get_product_service),
    _: User = Depends(require_admin),
):
    """Partial update; omitted or empty fields keep their current value"""
    return await service.update_product(product_id, product)


@router.post(
    "/{product_id}/review",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
@limiter.limit(config.review_rate_limit)
async def add_review(
    request: Request,
    product_id: str,
    review: ReviewCreate,
    service: ProductService = Depends(get_product_service),
    user: User = Depends(get_current_user),
):
    """One review per user; the product rating is recomputed on every review"""
    await service.add_review(product_id, review, user)
    return {"message": "Review added"}


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponseModel}},
)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
    _: User = Depends(require_admin),
):
    await service.delete_product(product_id)
    return {"message": "Product deleted"}
