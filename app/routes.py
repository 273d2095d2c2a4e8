# app/routes.py
# The product route table. /products/stats is declared before
# /products/{product_id} so "stats" is never read as an id.
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from .auth import require_api_key
from .core import validated_product
from .database import ProductStore
from .exceptions import NotFoundError
from .logic import list_products_logic, parse_product_query, product_stats_logic
from .models import ProductIn

router = APIRouter(prefix="/products", tags=["Products"])


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


@router.get("")
async def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    store: ProductStore = Depends(get_store),
):
    query = parse_product_query(category=category, search=search, page=page, limit=limit)
    return list_products_logic(store, query)


@router.get("/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    return product_stats_logic(store)


@router.get("/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    p = store.find(product_id)
    if p is None:
        raise NotFoundError(product_id)
    return p.to_response()


@router.post("", status_code=201, dependencies=[Depends(require_api_key)])
async def create_product(
    payload: ProductIn = Depends(validated_product),
    store: ProductStore = Depends(get_store),
):
    return store.insert(payload.model_dump()).to_response()


@router.put("/{product_id}", dependencies=[Depends(require_api_key)])
async def update_product(
    product_id: str,
    payload: ProductIn = Depends(validated_product),
    store: ProductStore = Depends(get_store),
):
    # optional fields the client left out keep their stored values
    return store.replace(product_id, payload.model_dump(exclude_unset=True)).to_response()


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_api_key)])
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    store.remove(product_id)
    return Response(status_code=204)
