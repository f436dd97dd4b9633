import os
import sys

import requests
import concurrent.futures
import argparse
import json

BASE = os.environ.get("PRODUCT_SERVICE_BASE", "http://127.0.0.1:8000")

def insert_task(i, token, name):
    form = {
        "name": f"{name} #{i}",
        "price": "10.00",
        "weight": "1.0",
        "description": "concurrency probe",
        "stock": "1",
    }
    headers = {"Authorization": f"Bearer {token}"}
    try:
        r = requests.post(f"{BASE}/api/product/", data=form, headers=headers, timeout=10)
        return (i, r.status_code, r.text)
    except requests.RequestException as e:
        return (i, "ERR", str(e))

def run_insert_concurrent(workers, token, name):
    print(f"Running insert test: workers={workers}, name={name}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(insert_task, i, token, name) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r)
    skus = [json.loads(r[2]).get("sku") for r in results if r[1] == 201]
    print(f"Created {len(skus)} products, unique SKUs: {len(set(skus))}")
    if len(skus) != len(set(skus)):
        print("DUPLICATE SKUs DETECTED")
        sys.exit(1)

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fire concurrent product inserts and check SKU uniqueness.")
    parser.add_argument("--token", required=True, help="seller bearer token")
    parser.add_argument("--workers", type=int, default=8)
    parser.add_argument("--name", default="Probe Product")
    args = parser.parse_args()

    run_insert_concurrent(args.workers, args.token, args.name)
