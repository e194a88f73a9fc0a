#!/usr/bin/env python3
"""
Mint a development access token for a user id.
The API accepts it when IDENTITY_MODE=jwt and SUPABASE_JWT_SECRET matches.
"""

import argparse
from datetime import timedelta

from companion.config import SUPABASE_JWT_SECRET
from companion.identity import issue_token


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("user_id", help="value for the token's sub claim")
    parser.add_argument("--email")
    parser.add_argument("--name", help="full name shown on the dashboard")
    parser.add_argument("--hours", type=float, default=1.0, help="token lifetime")
    args = parser.parse_args()

    token = issue_token(
        args.user_id,
        secret=SUPABASE_JWT_SECRET,
        email=args.email,
        full_name=args.name,
        expires_in=timedelta(hours=args.hours),
    )

    print("=" * 70)
    print(f"Access token for {args.user_id} (valid {args.hours}h):")
    print("=" * 70)
    print(token)
    print()
    print("Example:")
    print(f'  curl -H "Authorization: Bearer {token}" http://localhost:3000/api/dashboard')


if __name__ == "__main__":
    main()
