"""Fire many concurrent booking requests for one resource and count successes."""

from __future__ import annotations

import argparse
import json
import sys
import time
import urllib.request
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from urllib.error import HTTPError

DEFAULT_URL = "http://localhost:9090/api/bookings"
DEFAULT_RESOURCE_ID = 1
DEFAULT_COUNT = 50
STAGGER_SECONDS = 0.01


@dataclass(frozen=True)
class RaceResult:
    """Outcome of a race: how many requests were made and how many succeeded."""

    attempts: int
    done: int


def book(url: str, user_id: int, resource_id: int, delay: float = 0.0) -> tuple[int, str]:
    """Wait delay seconds, then request a booking; return the status and body.

    Network failures raise OSError.
    """
    if delay > 0:
        time.sleep(delay)
    payload = json.dumps({"user_id": user_id, "resource_id": resource_id}).encode("utf-8")
    request = urllib.request.Request(
        url,
        data=payload,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urllib.request.urlopen(request, timeout=30) as resp:
            return resp.status, resp.read().decode("utf-8", errors="replace")
    except HTTPError as exc:
        with exc:
            return exc.code, exc.read().decode("utf-8", errors="replace")


def _attempt(url: str, user_id: int, resource_id: int) -> bool:
    try:
        status, body = book(url, user_id, resource_id, user_id * STAGGER_SECONDS)
    except OSError:
        print(f"User {user_id}: network error")
        return False
    if status == 201:
        print(f"User {user_id}: done. resource {resource_id} booked")
        return True
    print(f"User {user_id}: fail {status} ({body})")
    return False


def run_race(
    url: str = DEFAULT_URL,
    count: int = DEFAULT_COUNT,
    resource_id: int = DEFAULT_RESOURCE_ID,
) -> RaceResult:
    """Book resource_id once for each of users 1..count concurrently."""
    if count <= 0:
        return RaceResult(attempts=0, done=0)
    with ThreadPoolExecutor(max_workers=count) as pool:
        outcomes = list(
            pool.map(lambda uid: _attempt(url, uid, resource_id), range(1, count + 1))
        )
    return RaceResult(attempts=count, done=sum(outcomes))


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check booking for race conditions.")
    parser.add_argument("--url", default=DEFAULT_URL, help="bookings endpoint")
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT, help="concurrent users")
    parser.add_argument("--resource-id", type=int, default=DEFAULT_RESOURCE_ID)
    args = parser.parse_args(argv)

    print(f"Test/Race Condition: {args.count} goroutines and {args.resource_id} resource.")
    result = run_race(args.url, args.count, args.resource_id)
    print()
    print("Result RaceCondition/Test:")
    print(f"Total attempts: {result.attempts}")
    print(f"Done bookings: {result.done} - bug")
    print(f"Race Condition: {result.done} users have received one resource")
    return 0


if __name__ == "__main__":
    sys.exit(main())