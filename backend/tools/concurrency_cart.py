"""
Fire concurrent "add to cart" requests for one (user, product) pair and check
that no increment was lost: final quantity must equal workers * qty.

Usage:
    python tools/concurrency_cart.py --product <product-id> --workers 16 --qty 1
"""
import argparse
import concurrent.futures
import os

import requests

BASE = os.environ.get("STOREFRONT_BASE", "http://127.0.0.1:8000")


def add_task(i, user_id, product_id, qty):
    headers = {"X-User-Id": user_id}
    try:
        r = requests.post(
            f"{BASE}/api/cart",
            json={"productId": product_id, "quantity": qty},
            headers=headers,
            timeout=10,
        )
        return (i, r.status_code, r.text)
    except requests.RequestException as e:
        return (i, "ERR", str(e))


def run(workers, user_id, product_id, qty):
    headers = {"X-User-Id": user_id}
    requests.delete(f"{BASE}/api/cart", headers=headers, timeout=10)

    print(f"Running cart test: workers={workers}, product={product_id}, qty={qty}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(add_task, i, user_id, product_id, qty) for i in range(workers)]
        results = [f.result() for f in futures]
    failed = [r for r in results if r[1] != 201]
    for r in failed:
        print("failed:", r)

    cart = requests.get(f"{BASE}/api/cart", headers=headers, timeout=10).json()
    lines = [it for it in cart if it["productId"] == product_id]
    got = lines[0]["quantity"] if lines else 0
    expected = (workers - len(failed)) * qty
    print(f"rows={len(lines)} quantity={got} expected={expected}")
    print("OK" if len(lines) == 1 and got == expected else "LOST UPDATE")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrency test for atomic add-to-cart.")
    parser.add_argument("--product", required=True)
    parser.add_argument("--user", default="concurrency-user")
    parser.add_argument("--qty", type=int, default=1)
    parser.add_argument("--workers", type=int, default=8)
    args = parser.parse_args()
    run(args.workers, args.user, args.product, args.qty)
