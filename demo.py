#!/usr/bin/env python
import os
from sdk.productapi import ProductClient, ProductClientError

def main():
    c = ProductClient(base_url="http://127.0.0.1:3000", api_key=os.environ.get("API_KEY"))

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    lamp = c.create_product("Desk Lamp", 35, "home", description="LED lamp with dimmer")
    kettle = c.create_product("Electric Kettle", 25.5, "kitchen", in_stock=False)
    print(lamp)
    print(kettle)

    # -----------------------------
    # List / filter / search
    # -----------------------------
    print("\nListing products (page 1, 2 per page)...")
    print(c.list_products(page=1, limit=2))

    print("\nKitchen products...")
    print(c.list_products(category="kitchen"))

    print("\nSearching for 'lamp'...")
    print(c.search_products("lamp"))

    # -----------------------------
    # Update (full body required)
    # -----------------------------
    print("\nMarking the kettle as in stock...")
    print(c.update_product(kettle["id"], "Electric Kettle", 25.5, "kitchen", in_stock=True))

    # -----------------------------
    # Statistics
    # -----------------------------
    print("\nCatalog statistics...")
    print(c.get_stats())

    # -----------------------------
    # Delete twice: the second call is a NotFound
    # -----------------------------
    print("\nDeleting the lamp...")
    c.delete_product(lamp["id"])
    try:
        c.delete_product(lamp["id"])
    except ProductClientError as e:
        print(f"Second delete rejected as expected: {e}")

    # -----------------------------
    # Missing credential
    # -----------------------------
    anonymous = ProductClient(base_url=c.base_url)
    try:
        anonymous.create_product("Ghost", 1, "misc")
    except ProductClientError as e:
        print(f"\nCreate without API key rejected: {e}")

if __name__ == "__main__":
    main()
