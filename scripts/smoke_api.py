"""
Smoke checks for the Classroom Companion API endpoints.
Run the API server first (IDENTITY_MODE=header): companion-api
Then run this: python scripts/smoke_api.py <user-id> [ROLE]
"""

import json
import sys

import requests

BASE_URL = "http://localhost:3000"


def banner(title):
    print("\n" + "=" * 50)
    print(f"CHECK: {title}")
    print("=" * 50)


def show(response):
    print(f"Status Code: {response.status_code}")
    print(f"Response: {json.dumps(response.json(), indent=2)}")


def check_health():
    banner("Health Check")
    response = requests.get(f"{BASE_URL}/health")
    show(response)
    return response.status_code == 200


def check_profile_missing_header():
    banner("Profile Without x-user-id")
    response = requests.get(f"{BASE_URL}/api/auth/profile")
    show(response)
    return response.status_code == 400


def check_profile(user_id):
    banner("Get User Profile")
    response = requests.get(f"{BASE_URL}/api/auth/profile", headers={"x-user-id": user_id})
    show(response)
    return response.status_code in (200, 404)


def check_tiles_missing_role():
    banner("Tiles Without role")
    response = requests.get(f"{BASE_URL}/api/dashboard/tiles")
    show(response)
    return response.status_code == 400


def check_tiles(role):
    banner(f"Tiles For {role}")
    response = requests.get(f"{BASE_URL}/api/dashboard/tiles", params={"role": role})
    show(response)
    return response.status_code == 200


def check_dashboard(user_id):
    banner("Dashboard")
    response = requests.get(f"{BASE_URL}/api/dashboard", headers={"x-user-id": user_id})
    show(response)
    return response.status_code == 200


def main():
    if len(sys.argv) < 2:
        print("usage: python scripts/smoke_api.py <user-id> [ROLE]")
        sys.exit(2)

    user_id = sys.argv[1]
    role = sys.argv[2] if len(sys.argv) > 2 else "PROGRAM_OFFICE"

    results = {
        "health": check_health(),
        "profile_missing_header": check_profile_missing_header(),
        "profile": check_profile(user_id),
        "tiles_missing_role": check_tiles_missing_role(),
        "tiles": check_tiles(role),
        "dashboard": check_dashboard(user_id),
    }

    print("\n" + "=" * 50)
    print("SUMMARY")
    print("=" * 50)
    for name, ok in results.items():
        print(f"  {'✓' if ok else '✗'} {name}")

    sys.exit(0 if all(results.values()) else 1)


if __name__ == "__main__":
    main()
