"""Category and product routes.

Fixed paths (`/admin`, `/search`, `/category/{id}`) are declared before
`/{id}` so they are not captured as identifiers.
"""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.pagination import Page, page_params
from storefront.api.schemas import (
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    MessageResponse,
    PaginatedProducts,
    ProductResponse,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from storefront.auth.guards import admin_only
from storefront.category.category import Category
from storefront.category.management import CreateCategory, DeleteCategory, UpdateCategory
from storefront.product.creation import CreateProduct
from storefront.product.details import UpdateProduct
from storefront.product.product import Product
from storefront.product.removal import DeleteProduct
from storefront.user.user import User

category_router = APIRouter(prefix="/categories", tags=["categories"])
product_router = APIRouter(prefix="/products", tags=["products"])


def _paginated(results, paging: Page) -> PaginatedProducts:
    return PaginatedProducts(
        products=[ProductResponse.from_product(product) for product in results.items],
        total=results.total,
        page=paging.page,
        limit=paging.limit,
    )


def _load_category(category_id: str) -> CategoryResponse:
    return CategoryResponse.from_category(current_domain.repository_for(Category).get(category_id))


def _load_product(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


# --- Categories ---


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    """Active categories, by name."""
    return [CategoryResponse.from_category(c) for c in current_domain.repository_for(Category).list_active()]


@category_router.get("/admin", response_model=list[CategoryResponse])
async def list_all_categories(_: User = Depends(admin_only)) -> list[CategoryResponse]:
    return [CategoryResponse.from_category(c) for c in current_domain.repository_for(Category).list_all()]


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str) -> CategoryResponse:
    return _load_category(category_id)


@category_router.post("", status_code=201, response_model=CategoryResponse)
async def create_category(body: CreateCategoryRequest, _: User = Depends(admin_only)) -> CategoryResponse:
    category_id = current_domain.process(CreateCategory(**body.model_dump(exclude_none=True)), asynchronous=False)
    return _load_category(category_id)


@category_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str, body: UpdateCategoryRequest, _: User = Depends(admin_only)
) -> CategoryResponse:
    command = UpdateCategory(category_id=category_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return _load_category(category_id)


@category_router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: str, _: User = Depends(admin_only)) -> MessageResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return MessageResponse(message="Category deleted")


# --- Products ---


@product_router.get("", response_model=PaginatedProducts)
async def list_products(paging: Page = Depends(page_params)) -> PaginatedProducts:
    results = current_domain.repository_for(Product).list_active(paging.page, paging.limit)
    return _paginated(results, paging)


@product_router.get("/admin", response_model=PaginatedProducts)
async def list_all_products(paging: Page = Depends(page_params), _: User = Depends(admin_only)) -> PaginatedProducts:
    results = current_domain.repository_for(Product).list_all(paging.page, paging.limit)
    return _paginated(results, paging)


@product_router.get("/search", response_model=PaginatedProducts)
async def search_products(
    q: str = Query(..., min_length=1, max_length=100),
    paging: Page = Depends(page_params),
) -> PaginatedProducts:
    results = current_domain.repository_for(Product).search(q, paging.page, paging.limit)
    return _paginated(results, paging)


@product_router.get("/category/{category_id}", response_model=PaginatedProducts)
async def list_products_by_category(category_id: str, paging: Page = Depends(page_params)) -> PaginatedProducts:
    results = current_domain.repository_for(Product).list_by_category(category_id, paging.page, paging.limit)
    return _paginated(results, paging)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _load_product(product_id)


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, _: User = Depends(admin_only)) -> ProductResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        discount_percentage=body.discount_percentage,
        images=json.dumps(body.images),
        category_id=body.category_id,
        stock=body.stock,
        is_active=body.is_active,
        specifications=json.dumps(body.specifications),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return _load_product(product_id)


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest, _: User = Depends(admin_only)) -> ProductResponse:
    changes = body.model_dump(exclude_none=True)
    if "images" in changes:
        changes["images"] = json.dumps(changes["images"])
    if "specifications" in changes:
        changes["specifications"] = json.dumps(changes["specifications"])

    current_domain.process(UpdateProduct(product_id=product_id, **changes), asynchronous=False)
    return _load_product(product_id)


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str, _: User = Depends(admin_only)) -> MessageResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return MessageResponse(message="Product deleted")
