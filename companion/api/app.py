"""
Flask application factory and server entry-point.
"""

import os
import sys
import traceback

from flask import Flask
from flask_cors import CORS

from companion.config import is_development
from companion.database import init_engine
from companion.identity import build_identity
from companion.models import AppContext
from companion.api.routes import register_routes


def create_app(engine=None, identity=None, allow_role_override=None):
    """Build and return a fully configured Flask application."""
    app = Flask(__name__)
    CORS(app)

    # ── Initialise shared resources ──────────────────────────────────
    try:
        if engine is None:
            print("[init] Initializing database connection...")
            engine = init_engine()

        if identity is None:
            identity = build_identity()
        print(f"[init] Identity provider: {identity.name}")

        if allow_role_override is None:
            allow_role_override = is_development()

        print("[init] ✓ API server ready")
    except Exception as e:
        print(f"[FATAL] Failed to initialize: {e}", file=sys.stderr)
        traceback.print_exc()
        sys.exit(1)

    ctx = AppContext(
        engine=engine,
        identity=identity,
        allow_role_override=allow_role_override,
    )

    # ── Register routes ──────────────────────────────────────────────
    register_routes(app, ctx)

    return app


def main():
    """Run the development server."""
    print("=" * 60)
    print("Classroom Companion – REST API Server")
    print("=" * 60)

    app = create_app()

    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "3000"))
    debug = is_development()

    print(f"\n[server] Starting Flask API on {host}:{port}")
    print(f"[server] Debug mode: {debug}")
    print("\nAPI Endpoints:")
    print(f"  - GET  http://{host}:{port}/api/auth/profile")
    print(f"  - GET  http://{host}:{port}/api/auth/role")
    print(f"  - GET  http://{host}:{port}/api/dashboard/tiles?role=ROLE")
    print(f"  - GET  http://{host}:{port}/api/dashboard")
    print(f"  - GET  http://{host}:{port}/health")
    print("\n" + "=" * 60)

    app.run(host=host, port=port, debug=debug, threaded=True)


if __name__ == "__main__":
    main()
