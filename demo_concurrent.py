import asyncio
import os
from sdk.productapi import ProductClient, ProductClientError

async def create_one(client, i):
    try:
        p = await client.create_product_async(f"Widget {i}", 10 + i, "widgets")
        print(f"✅ created {p['name']} ({p['id']})")
        return p
    except ProductClientError as e:
        print(f"❌ Widget {i} failed: {e}")
    return None

async def main():
    c = ProductClient(base_url="http://127.0.0.1:3000", api_key=os.environ.get("API_KEY"))

    before = await asyncio.to_thread(c.get_stats)
    print(f"\n📦 Products before: {before['totalProducts']}")

    print("\n⚡ Creating 20 products concurrently...")
    results = await asyncio.gather(*(create_one(c, i) for i in range(20)))
    created = [r for r in results if r]

    after = await asyncio.to_thread(c.get_stats)
    print(f"\n📦 Products after: {after['totalProducts']}")
    print("📊 Categories:", after["categoryCount"])

    ids = {p["id"] for p in created}
    if len(ids) != len(created):
        print("⚠️  duplicate ids handed out")
    if after["totalProducts"] != before["totalProducts"] + len(created):
        print("⚠️  product count does not match the number of successful creates")

if __name__ == "__main__":
    asyncio.run(main())
