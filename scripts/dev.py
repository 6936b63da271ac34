#!/usr/bin/env python3
"""
Dev runner for the flashcards API.
Usage: python scripts/dev.py [--seed] [--backend jsonl|sql|memory]
"""

import argparse
import logging
import os
import socket
import sys
from pathlib import Path

import uvicorn

ROOT = Path(__file__).resolve().parent.parent
BACKEND_PORT = int(os.environ.get("BACKEND_PORT", "8000"))


def port_in_use(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        return s.connect_ex(("127.0.0.1", port)) == 0


def main():
    parser = argparse.ArgumentParser(description="Run the flashcards API with reload")
    parser.add_argument("--seed", action="store_true",
                        help="Seed the sample deck into an empty store")
    parser.add_argument("--backend", choices=["jsonl", "sql", "memory"], default=None,
                        help="Card store backend (default: $CARD_STORE_BACKEND or jsonl)")
    args = parser.parse_args()

    os.chdir(ROOT)
    if port_in_use(BACKEND_PORT):
        print(f"Port {BACKEND_PORT} is in use. Stop the process or set BACKEND_PORT=<port>")
        sys.exit(1)

    # Settings are read from the environment by the reloaded worker
    if args.seed:
        os.environ["SEED_SAMPLE_CARDS"] = "1"
    if args.backend:
        os.environ["CARD_STORE_BACKEND"] = args.backend

    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    print()
    print(f"  API docs: http://localhost:{BACKEND_PORT}/docs")
    print()

    uvicorn.run("server.app:app", host="0.0.0.0", port=BACKEND_PORT,
                reload=True, app_dir=str(ROOT))


if __name__ == "__main__":
    main()
