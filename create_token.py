#!/usr/bin/env python3
"""
Print a signed bearer token for the Service Catalog API.

The token is signed with ``SECRET_KEY`` from the environment, so run
this script with the same value the server uses.

Usage:
    python create_token.py --sub deploy-bot --days 365
"""

import argparse

from service_catalog_api.app.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Create an API bearer token")
    parser.add_argument("--sub", default="admin", help="Subject stored in the token")
    parser.add_argument("--days", type=int, default=365, help="Token lifetime in days")
    args = parser.parse_args()
    print(create_access_token({"sub": args.sub}, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
