#!/usr/bin/env python3
"""
Seed script: creates users and listings through the running API (no direct DB access).
Run with the API up:
  python scripts/seed_data.py
  python scripts/seed_data.py --users 20 --items-per-user 10 --base-url http://localhost:5000/api
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:5000/api"

TITLES = [
    "Denim jacket", "Leather boots", "Silk scarf", "Wireless headphones", "Table lamp",
    "Kids raincoat", "Perfume set", "Yoga mat", "Running shoes", "Wool sweater",
    "Vintage handbag", "Bluetooth speaker", "Ceramic vase", "Snow boots", "Tennis racket",
]

DESCRIPTIONS = [
    "Worn a couple of times, no visible marks.",
    "Bought last season, still in great shape.",
    "Original packaging included.",
    "Small scratch on the side, otherwise perfect.",
    "Selling because it no longer fits.",
]

CATEGORIES = ["Clothing", "Shoes", "Accessories", "Electronics", "Home", "Kids", "Beauty", "Sports", "Other"]
CONDITIONS = ["New with tags", "New without tags", "Very good", "Good", "Satisfactory"]
BRANDS = ["", "Levi's", "Nike", "Zara", "Sony", "IKEA", "Adidas"]
CITIES = ["Vilnius", "Kaunas", "Klaipeda", "Riga", "Tallinn"]


def random_item() -> dict:
    return {
        "title": random.choice(TITLES),
        "description": random.choice(DESCRIPTIONS),
        "price": round(random.uniform(1, 250), 2),
        "category": random.choice(CATEGORIES),
        "condition": random.choice(CONDITIONS),
        "brand": random.choice(BRANDS),
        "location": random.choice(CITIES),
        "images": [f"https://picsum.photos/seed/{random.randint(1, 10_000)}/600/800"],
    }


def get_token(client: httpx.Client, username: str, email: str, password: str) -> str | None:
    r = client.post("/auth/register", json={"username": username, "email": email, "password": password})
    if r.status_code == 201:
        return r.json()["token"]
    # Already registered on a previous run: log in instead
    r = client.post("/auth/login", json={"email": email, "password": password})
    if r.status_code == 200:
        return r.json()["token"]
    return None


def main():
    ap = argparse.ArgumentParser(description="Seed users and listings via the API")
    ap.add_argument("--users", type=int, default=10, help="Number of users to create")
    ap.add_argument("--items-per-user", type=int, default=8, help="Listings per user")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created_items = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        for i in range(args.users):
            username = f"seller{i + 1}"
            email = f"seller{i + 1}@example.com"
            token = get_token(client, username, email, "password123")
            if not token:
                errors.append(f"Could not authenticate {email}")
                continue
            headers = {"Authorization": f"Bearer {token}"}
            for _ in range(args.items_per_user):
                r = client.post("/items", headers=headers, json=random_item())
                if r.status_code == 201:
                    created_items += 1
                else:
                    errors.append(f"Item for {email}: {r.status_code} {r.text[:80]}")
            print(f"  {username}: total listings so far {created_items}")

    print(f"\nDone. Listings created: {created_items}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)


if __name__ == "__main__":
    main()
