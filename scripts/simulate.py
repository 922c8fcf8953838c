"""
Duplicate-Create Race Simulation

Fires many identical create requests at a running server at the same time
and checks that exactly one succeeds while every other one gets 409.

Run from project root (server started with ``python -m wacdo``):
    python scripts/simulate.py --email admin@example.com --password 'Secret123!'

The account is registered with the seeded default role if it does not
exist yet.
"""

import argparse
import asyncio
import sys
import time
import uuid
from collections import Counter
from typing import Any

import httpx

# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Configuration
API_BASE_URL = "http://localhost:8080"
CONCURRENT_REQUESTS = 50


async def get_token(client: httpx.AsyncClient, email: str, password: str, roles_id: int) -> str:
    """Log in, registering the account first when needed."""
    response = await client.post("/users/login", json={"email": email, "password": password})
    if response.status_code == 401:
        created = await client.post(
            "/users",
            json={"username": "simulation", "email": email, "password": password, "roles_id": roles_id},
        )
        if created.status_code != 201:
            raise SystemExit(f"❌ Could not register {email}: {created.text}")
        response = await client.post("/users/login", json={"email": email, "password": password})

    if response.status_code != 200:
        raise SystemExit(f"❌ Login failed: {response.text}")
    return response.json()["access_token"]


async def send_create(client: httpx.AsyncClient, name: str, request_num: int) -> dict[str, Any]:
    start_time = time.time()
    try:
        response = await client.post("/categories", json={"name": name}, timeout=30.0)
        return {
            "request_num": request_num,
            "status": response.status_code,
            "time": round(time.time() - start_time, 3),
        }
    except httpx.HTTPError as e:
        return {
            "request_num": request_num,
            "status": None,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
        }


async def run_simulation(email: str, password: str, roles_id: int, num_requests: int) -> bool:
    name = f"Race {uuid.uuid4().hex[:8]}"

    print("=" * 70)
    print("🔥 DUPLICATE CREATE SIMULATION")
    print("=" * 70)
    print(f"📋 Concurrent requests: {num_requests}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"🏷️  Category name: {name}")
    print("=" * 70)

    async with httpx.AsyncClient(base_url=API_BASE_URL) as client:
        health = await client.get("/health")
        if health.status_code != 200:
            print(f"❌ Health check failed: {health.text}")
            return False

        token = await get_token(client, email, password, roles_id)
        client.headers["Authorization"] = f"Bearer {token}"

        start_time = time.time()
        results = await asyncio.gather(
            *(send_create(client, name, i + 1) for i in range(num_requests))
        )
        total_time = round(time.time() - start_time, 2)

    statuses = Counter(r["status"] for r in results)

    print("\n📊 RESULTS")
    for status_code, count in sorted(statuses.items(), key=lambda item: str(item[0])):
        print(f"   {status_code}: {count}")
    print(f"⏱️  Total Time: {total_time}s")

    # Rate limiting may legitimately reject some requests with 429
    accepted = statuses.get(201, 0)
    unexpected = {s: c for s, c in statuses.items() if s not in (201, 409, 429)}

    ok = accepted == 1 and not unexpected
    print("\n" + ("✅ Exactly one create succeeded" if ok else "❌ Uniqueness was not enforced"))
    print("=" * 70)
    return ok


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Duplicate-create race simulation")
    parser.add_argument("--email", required=True, help="Account used to obtain a token")
    parser.add_argument("--password", required=True, help="Password for the account")
    parser.add_argument("--role-id", type=int, default=1, help="Role used when registering")
    parser.add_argument("--requests", type=int, default=CONCURRENT_REQUESTS, help="Concurrent requests")
    args = parser.parse_args()

    success = asyncio.run(run_simulation(args.email, args.password, args.role_id, args.requests))
    sys.exit(0 if success else 1)
