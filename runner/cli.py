from __future__ import annotations

import argparse
import os


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the smoke runner."""
    parser = argparse.ArgumentParser(description="Folder manager smoke runner")
    parser.add_argument("--base-url", default=os.getenv("BASE_URL", "http://127.0.0.1:8000"))
    parser.add_argument(
        "--client-id",
        default=os.getenv("SMOKE_CLIENT_ID"),
        help="Client id to create; defaults to a random YYYY-SERIAL id",
    )
    parser.add_argument("--timeout", type=float, default=20.0, help="Health wait in seconds")
    return parser.parse_args(argv)
