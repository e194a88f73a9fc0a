#!/usr/bin/env python3
"""
Generate a signing secret for locally minted access tokens.
Run this and copy the output to your .env file.

In production use the project's JWT secret from the Supabase dashboard
instead (Settings → API → JWT Secret).
"""

import secrets

if __name__ == "__main__":
    print("=" * 60)
    print("Token Signing Secret Generator")
    print("=" * 60)
    print("\nGenerating a secure random key...\n")

    secret_key = secrets.token_hex(32)

    print(f"SUPABASE_JWT_SECRET={secret_key}")
    print("IDENTITY_MODE=jwt")
    print("\n" + "=" * 60)
    print("Copy the lines above to your .env file")
    print("=" * 60)
