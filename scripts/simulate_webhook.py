#!/usr/bin/env python3
"""
Simulate a signed webhook delivery for local testing.

Usage:
    python scripts/simulate_webhook.py --topic orders/create
    python scripts/simulate_webhook.py --tamper
"""

import argparse
import json
import os

import httpx

from hook_sentry.verification import DEFAULT_HMAC_HEADER, sign_payload


def main():
    parser = argparse.ArgumentParser(description="Simulate a signed webhook")
    parser.add_argument("--url", default="http://localhost:8000/webhook")
    parser.add_argument("--topic", default="orders/create", help="Webhook topic")
    parser.add_argument("--header", default=DEFAULT_HMAC_HEADER, help="Signature header name")
    parser.add_argument("--algorithm", default="sha256", help="HMAC digest")
    parser.add_argument(
        "--secret", default=None, help="Webhook secret (or use WEBHOOK_SECRET env)"
    )
    parser.add_argument(
        "--tamper", action="store_true", help="Alter the body after signing it"
    )

    args = parser.parse_args()

    secret = args.secret or os.environ.get("WEBHOOK_SECRET")
    if not secret:
        print("Error: Webhook secret required (--secret or WEBHOOK_SECRET)")
        return 1

    payload = {
        "id": 820982911946154508,
        "email": "jon@example.com",
        "total_price": "199.00",
        "currency": "USD",
    }

    payload_bytes = json.dumps(payload).encode()
    signature = sign_payload(secret, payload_bytes, algorithm=args.algorithm)

    if args.tamper:
        payload_bytes = payload_bytes.replace(b"199.00", b"1.00")

    print(f"Sending webhook to {args.url}")
    print(f"Payload: {payload_bytes.decode()}")

    response = httpx.post(
        args.url,
        content=payload_bytes,
        headers={
            "Content-Type": "application/json",
            args.header: signature,
            "X-Shopify-Topic": args.topic,
        },
    )

    print(f"\nResponse status: {response.status_code}")
    print(f"Response body: {response.json()}")

    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    exit(main())
