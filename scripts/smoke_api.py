#!/usr/bin/env python3
"""Smoke check for a running booking API.

Usage:
  uvicorn app.main:app --reload --port 8001
  python3 scripts/smoke_api.py
"""

import sys

import httpx


BASE_URL = "http://127.0.0.1:8001"

FORM = {
    "name": "Aisyah Rahman",
    "address": "12 Jalan Mawar, Ipoh",
    "phone": "012-3456789",
    "adults": "2",
    "children": "0",
    "checkIn": "2026-01-10",
    "checkOut": "2026-01-12",
    "rooms": ["seroja", "dahlia"],
    "paymentType": "deposit",
    "depositAmount": "500",
}


def check_quote() -> bool:
    print("=" * 60)
    print("POST /api/v1/bookings/quote")
    print("=" * 60)

    try:
        response = httpx.post(f"{BASE_URL}/api/v1/bookings/quote", json=FORM, timeout=10.0)
        response.raise_for_status()
        for line in response.json()["receipt"]:
            print(f"  {line}")
        return True
    except httpx.HTTPStatusError as e:
        print(f"HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False


def check_submit() -> str | None:
    print("\n" + "=" * 60)
    print("POST /api/v1/bookings")
    print("=" * 60)

    try:
        response = httpx.post(f"{BASE_URL}/api/v1/bookings", json=FORM, timeout=30.0)
        response.raise_for_status()
        data = response.json()
        booking = data["booking"]
        print(f"Created {booking['booking_id']} ({booking['status']})")
        for line in data["receipt"]:
            print(f"  {line}")
        return booking["booking_id"]
    except httpx.HTTPStatusError as e:
        print(f"HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None


def check_settle(booking_id: str) -> bool:
    print("\n" + "=" * 60)
    print(f"POST /api/v1/bookings/{booking_id}/complete")
    print("=" * 60)

    try:
        response = httpx.post(f"{BASE_URL}/api/v1/bookings/{booking_id}/complete", timeout=30.0)
        response.raise_for_status()
        booking = response.json()
        print(f"Status: {booking['status']}  Balance: {booking['balance']:.2f}")
        return True
    except httpx.HTTPStatusError as e:
        print(f"HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False


def main() -> None:
    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
    except httpx.HTTPError:
        print("Server is not running!")
        print("   Please start it with: uvicorn app.main:app --reload --port 8001")
        sys.exit(1)

    ok = check_quote()
    booking_id = check_submit()
    if booking_id:
        ok = check_settle(booking_id) and ok
    else:
        ok = False

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
