#!/usr/bin/env python3
"""
Smoke check for a running embedded signing server.
"""
import os
import sys
from datetime import datetime

import requests
from dotenv import load_dotenv


def check_landing_page(base_url, timeout=30):
    response = requests.get(base_url, timeout=timeout, allow_redirects=False)
    print(f"[{datetime.now()}] GET / -> {response.status_code}")
    if response.is_redirect:
        print(f"  - Redirects to: {response.headers.get('Location')}")
        return True
    return response.status_code == 200 and "<form" in response.text


def check_return_page(base_url, event="signing_complete", timeout=30):
    response = requests.get(f"{base_url}/dsreturn", params={"event": event}, timeout=timeout)
    print(f"[{datetime.now()}] GET /dsreturn -> {response.status_code}")
    return response.status_code == 200 and event in response.text


def check_ceremony(base_url, timeout=60):
    """Starts a real ceremony; needs ACCESS_TOKEN and ACCOUNT_ID on the server side."""
    response = requests.post(base_url, timeout=timeout, allow_redirects=False)
    print(f"[{datetime.now()}] POST / -> {response.status_code}")
    if response.is_redirect:
        print(f"  - Signing url: {response.headers.get('Location')}")
        return True
    print(f"  - Error page: {response.text[:500]}")
    return False


def main():
    load_dotenv()
    base_url = os.getenv("BASE_URL") or "http://localhost:3000"

    if len(sys.argv) > 1 and sys.argv[1] == "--help":
        print("Usage:")
        print("  python smoke_check.py           # Check landing and return pages")
        print("  python smoke_check.py ceremony  # Also start a signing ceremony")
        print()
        print("Environment variables:")
        print("  BASE_URL: Base URL of the server (default: http://localhost:3000)")
        sys.exit(0)

    try:
        ok = check_landing_page(base_url) and check_return_page(base_url)
        if ok and len(sys.argv) > 1 and sys.argv[1] == "ceremony":
            ok = check_ceremony(base_url)
    except requests.exceptions.ConnectionError:
        print(f"[{datetime.now()}] Error: Cannot connect to the server at {base_url}")
        ok = False

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
