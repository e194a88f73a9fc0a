"""
Flask route handlers for the REST API.
"""

import sys
import traceback

from flask import request, jsonify

from companion.errors import (
    AuthenticationError,
    Forbidden,
    InvalidRequest,
    NotFound,
    UpstreamUnavailable,
)
from companion.database import ping
from companion.profiles import load_profile, resolve_role
from companion.roles import Role, normalize_role, role_label
from companion.tiles import load_tiles, describe_tiles


def _upstream_error(e: UpstreamUnavailable, where: str):
    """Log the underlying store error and answer with a sanitised body."""
    print(f"[ERROR] {where}: {e} ({e.__cause__!r})", file=sys.stderr)
    traceback.print_exc()
    return jsonify({"error": str(e), "code": e.code}), e.status


def register_routes(app, ctx):
    """Register all API routes on the Flask *app*, bound to *ctx*."""

    # ── Health / info ────────────────────────────────────────────────

    @app.route("/", methods=["GET"])
    def index():
        return jsonify({
            "service": "Classroom Companion API",
            "version": "1.0.0",
            "status": "running",
            "endpoints": {
                "profile": "/api/auth/profile",
                "role": "/api/auth/role",
                "tiles": "/api/dashboard/tiles",
                "dashboard": "/api/dashboard",
                "health": "/health",
            },
        })

    @app.route("/health", methods=["GET"])
    def health():
        checks = {"database": False}
        try:
            ping(ctx.engine)
            checks["database"] = True
        except Exception as e:
            print(f"[WARN] Health check failed: {e}", file=sys.stderr)

        all_healthy = all(checks.values())
        return jsonify({
            "status": "healthy" if all_healthy else "unhealthy",
            "checks": checks,
            "identity": ctx.identity.name,
        }), 200 if all_healthy else 503

    # ── Auth ─────────────────────────────────────────────────────────

    @app.route("/api/auth/profile", methods=["GET"])
    def get_profile():
        try:
            who = ctx.identity.identify(request)
            profile = load_profile(ctx.engine, who.user_id)
        except (InvalidRequest, AuthenticationError) as e:
            return jsonify({"error": str(e)}), e.status
        except NotFound:
            return jsonify({"error": "Profile not found"}), 404
        except UpstreamUnavailable as e:
            return _upstream_error(e, "Profile lookup")

        return jsonify({
            "primary_role": profile.primary_role,
            "access_status": profile.access_status,
        }), 200

    @app.route("/api/auth/role", methods=["GET"])
    def get_role():
        try:
            who = ctx.identity.identify(request)
            resolution = resolve_role(ctx.engine, who.user_id)
        except (InvalidRequest, AuthenticationError) as e:
            return jsonify({"error": str(e)}), e.status

        return jsonify({
            "role": resolution.role.value,
            "role_label": role_label(resolution.role),
            "source": resolution.source,
        }), 200

    # ── Dashboard ────────────────────────────────────────────────────

    @app.route("/api/dashboard/tiles", methods=["GET"])
    def get_tiles():
        role_code = request.args.get("role")
        if not role_code:
            return jsonify({"error": "Missing role query parameter"}), 400

        try:
            tiles = load_tiles(ctx.engine, role_code)
        except UpstreamUnavailable as e:
            return _upstream_error(e, "Tile lookup")

        return jsonify([t.to_dict() for t in tiles]), 200

    @app.route("/api/dashboard", methods=["GET"])
    def get_dashboard():
        try:
            who = ctx.identity.identify(request)
            resolution = resolve_role(ctx.engine, who.user_id)
            role = resolution.role
            source = resolution.source

            view_as = (request.args.get("view_as") or "").strip()
            if view_as:
                if not ctx.allow_role_override:
                    raise Forbidden("Role override is only available in development")
                role = normalize_role(view_as)
                source = "override"

            tiles = load_tiles(ctx.engine, role.value)
        except (InvalidRequest, AuthenticationError, Forbidden) as e:
            return jsonify({"error": str(e)}), e.status
        except UpstreamUnavailable as e:
            return _upstream_error(e, "Dashboard tiles")

        return jsonify({
            "user": {
                "id": who.user_id,
                "display_name": who.display_name,
                "email": who.email,
            },
            "role": role.value,
            "role_label": role_label(role),
            "role_source": source,
            "available_roles": [r.value for r in Role] if ctx.allow_role_override else [],
            "tiles": describe_tiles(tiles),
        }), 200

    # ── Error handlers ───────────────────────────────────────────────

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Endpoint not found", "message": str(e)}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed", "message": str(e)}), 405

    @app.errorhandler(500)
    def internal_error(e):
        return jsonify({"error": "Internal server error"}), 500
