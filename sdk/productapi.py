# sdk/productapi.py
import requests
import httpx
from typing import Any, Dict, List, Optional

API_KEY_HEADER = "x-api-key"


class ProductClientError(Exception):
    """Non-2xx response from the product API."""

    def __init__(self, status_code: int, body: Any):
        self.status_code = status_code
        body = body if isinstance(body, dict) else {}
        self.kind = body.get("error", "HTTPError")
        self.message = body.get("message", f"HTTP {status_code}")
        self.fields: List[str] = body.get("fields", [])
        super().__init__(f"{status_code} {self.kind}: {self.message}")


def _check(r) -> Any:
    if r.status_code >= 400:
        try:
            body = r.json()
        except ValueError:
            body = None
        raise ProductClientError(r.status_code, body)
    if r.status_code == 204 or not r.content:
        return None
    return r.json()


def _product_payload(name: str, price: float, category: str,
                     description: Optional[str] = None, in_stock: Optional[bool] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"name": name, "price": price, "category": category}
    if description is not None:
        payload["description"] = description
    if in_stock is not None:
        payload["inStock"] = in_stock
    return payload


class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        # anything with requests-style get/post/put/delete works (TestClient in tests)
        self.session = session if session is not None else requests.Session()
        if api_key:
            self.session.headers.update({API_KEY_HEADER: api_key})

    # Read routes
    def list_products(self, category: Optional[str] = None, search: Optional[str] = None,
                      page: Optional[int] = None, limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(f"{self.base_url}/products", params=params, timeout=self.timeout)
        return _check(r)

    def search_products(self, name: str):
        return self.list_products(search=name)

    def get_stats(self):
        r = self.session.get(f"{self.base_url}/products/stats", timeout=self.timeout)
        return _check(r)

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        return _check(r)

    # Mutating routes (need the API key)
    def create_product(self, name: str, price: float, category: str,
                       description: Optional[str] = None, in_stock: Optional[bool] = None):
        payload = _product_payload(name, price, category, description, in_stock)
        r = self.session.post(f"{self.base_url}/products", json=payload, timeout=self.timeout)
        return _check(r)

    def update_product(self, product_id: str, name: str, price: float, category: str,
                       description: Optional[str] = None, in_stock: Optional[bool] = None):
        payload = _product_payload(name, price, category, description, in_stock)
        r = self.session.put(f"{self.base_url}/products/{product_id}", json=payload, timeout=self.timeout)
        return _check(r)

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        _check(r)

    # Async create (used by the concurrent demo)
    async def create_product_async(self, name: str, price: float, category: str,
                                   description: Optional[str] = None, in_stock: Optional[bool] = None,
                                   transport: Optional[httpx.AsyncBaseTransport] = None):
        headers = {API_KEY_HEADER: self.api_key} if self.api_key else {}
        payload = _product_payload(name, price, category, description, in_stock)
        async with httpx.AsyncClient(timeout=self.timeout, transport=transport) as client:
            r = await client.post(f"{self.base_url}/products", json=payload, headers=headers)
            return _check(r)


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(description="Product API client")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000", help="API base URL")
    parser.add_argument("--api-key", default=None, help="Value for the x-api-key header")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Exact category filter")
    lp.add_argument("--search", help="Case-insensitive name search")
    lp.add_argument("--page", type=int, help="Page number (from 1)")
    lp.add_argument("--limit", type=int, help="Page size")

    subparsers.add_parser("stats", help="Show catalog statistics")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    for cmd, help_text in (("create-product", "Create a product"), ("update-product", "Replace a product")):
        sp = subparsers.add_parser(cmd, help=help_text)
        if cmd == "update-product":
            sp.add_argument("--product-id", required=True, help="ID of the product")
        sp.add_argument("--name", required=True, help="Product name")
        sp.add_argument("--price", type=float, required=True, help="Price")
        sp.add_argument("--category", required=True, help="Product category")
        sp.add_argument("--description", help="Description")
        sp.add_argument("--in-stock", dest="in_stock", action="store_true", default=None)
        sp.add_argument("--out-of-stock", dest="in_stock", action="store_false")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True, help="ID of the product")
    return parser


def run_command(c: ProductClient, args):
    if args.command == "list-products":
        return c.list_products(args.category, args.search, args.page, args.limit)
    elif args.command == "stats":
        return c.get_stats()
    elif args.command == "get-product":
        return c.get_product(args.product_id)
    elif args.command == "create-product":
        return c.create_product(args.name, args.price, args.category, args.description, args.in_stock)
    elif args.command == "update-product":
        return c.update_product(args.product_id, args.name, args.price, args.category,
                                args.description, args.in_stock)
    elif args.command == "delete-product":
        c.delete_product(args.product_id)
        return {"deleted": args.product_id}
    raise ValueError(f"unknown command: {args.command}")


if __name__ == "__main__":
    import sys
    from rich import print

    args = build_parser().parse_args()
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)
    try:
        print(run_command(c, args))
    except ProductClientError as e:
        print(f"[red]{e}[/red]")
        if e.fields:
            print(f"[red]fields: {', '.join(e.fields)}[/red]")
        sys.exit(1)
