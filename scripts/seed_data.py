#!/usr/bin/env python3
"""
Seed script: fills the persons index through the API (POST /person creates 5 fake persons per call).
Run: API and Elasticsearch must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --batches 20 --purge-first
"""

import argparse

import httpx

API_BASE = "http://localhost:8000"


def main():
    ap = argparse.ArgumentParser(description="Seed fake persons via API")
    ap.add_argument("--batches", type=int, default=10, help="Number of POST /person calls")
    ap.add_argument("--purge-first", action="store_true", help="DELETE /person/purge before seeding")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        if args.purge_first:
            r = client.delete("/person/purge")
            # 400 just means there was no index to delete
            print(f"Purge: {r.status_code}")

        print(f"Creating {args.batches} batches...")
        for i in range(args.batches):
            try:
                r = client.post("/person")
                if r.status_code == 201:
                    created += 1
                else:
                    errors.append(f"Batch {i + 1}: {r.status_code}")
            except httpx.HTTPError as e:
                errors.append(f"Batch {i + 1}: {e}")

        r = client.get("/person", params={"limit": 1})
        print(f"GET /person -> {r.status_code}")

    print(f"\nDone. Batches created: {created}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
