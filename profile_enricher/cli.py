from __future__ import annotations

import argparse
import json

import requests

from .services import normalize_url
from .web_scraper import EnrichmentError, ProfileScraper
from config import FETCH_TIMEOUT_SECONDS, HOST, PORT

DEMO_REQUESTS = [
    (
        "Valid request with httpbin.org",
        {"username": "johndoe", "email": "john@example.com", "profileUrl": "https://httpbin.org/html"},
    ),
    (
        "Valid request with example.com",
        {"username": "janedoe", "email": "jane@example.com", "profileUrl": "https://example.com"},
    ),
    (
        "Invalid email format",
        {"username": "testuser", "email": "invalid-email", "profileUrl": "https://example.com"},
    ),
]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Profile Enrichment Service: enrich user submissions with the name found on their profile page."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", default=HOST, help=f"Interface to bind (default: {HOST})")
    serve.add_argument("--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT})")

    demo = sub.add_parser("demo", help="Send sample requests to a running service")
    demo.add_argument(
        "--base-url",
        default=f"http://localhost:{PORT}",
        help=f"Service base URL (default: http://localhost:{PORT})",
    )

    scrape = sub.add_parser("scrape", help="Scrape one URL and print the extracted name")
    scrape.add_argument("url", help="Profile URL to fetch")
    scrape.add_argument(
        "--timeout",
        type=float,
        default=FETCH_TIMEOUT_SECONDS,
        help=f"Fetch timeout in seconds (default: {FETCH_TIMEOUT_SECONDS:g})",
    )
    return parser.parse_args(argv)


def _print_response(response: requests.Response) -> None:
    try:
        body = json.dumps(response.json(), indent=2)
    except ValueError:
        body = response.text
    print(f"✅ Response ({response.status_code}): {body}")


def run_demo(base_url: str) -> None:
    print("🎯 Profile Enrichment Service Demo\n")
    for name, payload in DEMO_REQUESTS:
        print(f"📋 Testing: {name}")
        print(f"📤 Request: {json.dumps(payload, indent=2)}")
        try:
            response = requests.post(f"{base_url}/users/enrich", json=payload, timeout=FETCH_TIMEOUT_SECONDS + 5)
            _print_response(response)
        except requests.RequestException as e:
            print(f"❌ Error: Request failed: {e}")
        print("─" * 60)

    print("🏥 Testing health endpoint...")
    try:
        response = requests.get(f"{base_url}/health", timeout=5)
        _print_response(response)
    except requests.RequestException as e:
        print(f"❌ Health check failed: {e}")


def run_scrape(url: str, timeout: float) -> int:
    print(f"🔍 Fetching {url} ...")
    try:
        full_name = ProfileScraper(timeout=timeout).scrape_full_name(normalize_url(url) or url)
    except EnrichmentError as e:
        print(f"❌ {e}")
        return 1
    print(f"✅ h1 text: {full_name!r}")
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if args.command == "serve":
        from app import start_server

        handle = start_server(args.host, args.port)
        try:
            handle.wait()
        except KeyboardInterrupt:
            handle.stop()
    elif args.command == "demo":
        run_demo(args.base_url.rstrip("/"))
    else:
        from app import configure_logging

        configure_logging()
        raise SystemExit(run_scrape(args.url, args.timeout))


if __name__ == "__main__":
    main()
