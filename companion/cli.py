"""
Interactive CLI for the Classroom Companion dashboard.
Look up a user's role and the tiles it unlocks, straight from the store.
"""

from companion.config import is_development
from companion.database import init_engine
from companion.errors import CompanionError
from companion.profiles import resolve_role
from companion.roles import Role, normalize_role, role_label
from companion.tiles import load_tiles, describe_tiles, catalog_drift


def print_tiles(engine, role: Role):
    tiles = describe_tiles(load_tiles(engine, role.value))
    print(f"\n[tiles] {role_label(role)} ({role.value}) can view {len(tiles)} tile(s)")
    if not tiles:
        print("(no tiles)")
    for i, t in enumerate(tiles, 1):
        print(f"  {i}. {t['tile_label']} [{t['tile_key']}]")
        if t["description"]:
            print(f"     {t['description']}")


def print_drift(engine):
    drift = catalog_drift(engine)
    if not drift:
        print("\n[audit] Store and dashboard catalog agree for every role.")
        return
    print("\n[audit] Store and dashboard catalog disagree:")
    for role_code, diff in drift.items():
        print(f"  {role_code}: store only={diff['store_only']} catalog only={diff['catalog_only']}")


def main():
    print("=== Classroom Companion: role & tile lookup ===\n")

    engine = init_engine()
    allow_override = is_development()

    print("Commands: <user id> | audit | quit")
    if allow_override:
        print("          as <ROLE>  (view the dashboard as another role)")

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        if not line:
            continue
        if line.lower() in {"quit", "exit"}:
            print("Goodbye.")
            break

        try:
            if line.lower() == "audit":
                print_drift(engine)
            elif line.lower().startswith("as "):
                if not allow_override:
                    print("[WARN] Role override is only available with FLASK_ENV=development")
                    continue
                print_tiles(engine, normalize_role(line[3:]))
            else:
                resolution = resolve_role(engine, line)
                print(f"\n[role] {line}: {resolution.role.value} (source={resolution.source}, "
                      f"stored={resolution.raw_role!r})")
                print_tiles(engine, resolution.role)
        except CompanionError as e:
            print("\n[ERROR] Lookup failed.")
            print("Details:", e)


if __name__ == "__main__":
    main()
