from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.database import get_db
from storefront.core.exceptions import NotFoundError, ValidationError
from storefront.repositories.category_repositories import CategoryRepository
from storefront.schemas.category_schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from storefront.services.category_services import CategoryService


router = APIRouter(prefix=f"{settings.API_PREFIX}/categories", tags=["categories"])


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(CategoryRepository(db))


@router.get("", response_model=List[CategoryResponse])
def list_categories(svc: CategoryService = Depends(get_category_service)):
    return svc.get_all_categories()


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: str, svc: CategoryService = Depends(get_category_service)):
    try:
        return svc.get_category(category_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_in: CategoryCreate, svc: CategoryService = Depends(get_category_service)
):
    try:
        return svc.create_category(category_in)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    category_in: CategoryUpdate,
    svc: CategoryService = Depends(get_category_service),
):
    try:
        return svc.update_category(category_id, category_in)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: str, svc: CategoryService = Depends(get_category_service)):
    try:
        svc.delete_category(category_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
