"""Send a question to a running relay and print the answer.

Usage:
    python scripts/solve_question.py "Integrate x^2 from 0 to 3" --url http://localhost:3000

Handy for checking a deployment end to end without the browser front-end.
"""

from __future__ import annotations

import argparse
import sys

import httpx


def _build_contents(*, question: str) -> list[dict]:
    return [{"role": "user", "parts": [{"text": question}]}]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("question", help="Question text to send.")
    parser.add_argument("--url", default="http://localhost:3000", help="Relay base URL.")
    parser.add_argument("--timeout", type=float, default=120.0, help="Seconds to wait.")
    args = parser.parse_args()

    resp = httpx.post(
        f"{args.url.rstrip('/')}/api/solve",
        json={"contents": _build_contents(question=args.question)},
        timeout=args.timeout,
    )
    data = resp.json()
    if resp.status_code != 200:
        print(f"Error ({resp.status_code}): {data.get('error')}", file=sys.stderr)
        raise SystemExit(1)

    print(data["text"])


if __name__ == "__main__":
    main()
