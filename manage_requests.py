#!/usr/bin/env python3
"""
Administer booking requests from the command line.

Talks to a running Booking Request API through
``BookingRequestClient``.  The API location and admin key default to
the ``BOOKING_API_URL`` and ``ADMIN_API_KEY`` environment variables.

Usage:
    python manage_requests.py list --status requested
    python manage_requests.py show 12
    python manage_requests.py set-status 12 scheduled
"""

import argparse
import json
import os
import sys

from booking_request_client import BookingRequestClient

STATUSES = ("requested", "scheduled", "cancelled")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Manage booking requests.")
    ap.add_argument("--url", default=os.getenv("BOOKING_API_URL", "http://localhost:3001"), help="Base URL of the API")
    ap.add_argument("--key", default=os.getenv("ADMIN_API_KEY", ""), help="Admin API key")
    sub = ap.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="List requests with a status")
    list_cmd.add_argument("--status", default="requested", choices=STATUSES)
    list_cmd.add_argument("--limit", type=int, default=None)

    show_cmd = sub.add_parser("show", help="Show one request")
    show_cmd.add_argument("request_id", type=int)

    status_cmd = sub.add_parser("set-status", help="Change the status of a request")
    status_cmd.add_argument("request_id", type=int)
    status_cmd.add_argument("status", choices=STATUSES)
    return ap


def format_request(item: dict) -> str:
    dates = ", ".join(item.get("preferred_dates") or [])
    windows = ", ".join(item.get("preferred_windows") or [])
    return (
        f"#{item['id']} [{item['status']}] {item['created_at']}  {item['name']} {item['phone']}  "
        f"{item['line1']}, {item['city']} {item['state']} {item['zip']}  days: {dates}  windows: {windows}"
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if not args.key:
        print("[!] No admin key given (use --key or ADMIN_API_KEY).", file=sys.stderr)
        return 1

    client = BookingRequestClient(base_url=args.url, admin_key=args.key)

    if args.command == "list":
        items, error = client.list_requests(args.status, limit=args.limit)
        if error:
            print(f"[!] {error['message']}", file=sys.stderr)
            return 2
        for item in items:
            print(format_request(item))
        print(f"[+] {len(items)} request(s) with status {args.status}")
    elif args.command == "show":
        item, error = client.get_request(args.request_id)
        if error:
            print(f"[!] {error['message']}", file=sys.stderr)
            return 2
        print(json.dumps(item, indent=2, ensure_ascii=False))
    else:
        _, error = client.update_status(args.request_id, args.status)
        if error:
            print(f"[!] {error['message']}", file=sys.stderr)
            return 2
        print(f"[+] Request {args.request_id} set to {args.status}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
