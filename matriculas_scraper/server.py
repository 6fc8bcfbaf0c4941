"""
JSON API for the monthly plate-series table.

Routes:
- GET /api/matriculas: cached monthly table
- GET /: health check
"""

import json

from aiohttp import web
import structlog

from .orchestrator import MonthlyBuilder

logger = structlog.get_logger(__name__)

BUILDER_KEY = web.AppKey("builder", MonthlyBuilder)


@web.middleware
async def cors_middleware(request, handler):
    """Allow cross-origin reads from any origin."""
    if request.method == "OPTIONS":
        response = web.Response(status=204)
    else:
        response = await handler(request)
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


async def handle_matriculas(request):
    """Monthly table handler."""
    builder = request.app[BUILDER_KEY]

    try:
        monthly = await builder.get_monthly()
    except Exception as e:
        logger.exception("build_failed", error=str(e))
        return web.json_response({"ok": False, "error": str(e)}, status=500)

    return web.json_response(
        {
            "ok": True,
            "source": "combined",
            "data": {"monthly": [r.to_dict() for r in monthly]},
        },
        dumps=_dumps,
    )


async def handle_health(request):
    """Health check."""
    return web.Response(text="Matriculas API OK", status=200)


def _dumps(obj) -> str:
    return json.dumps(obj, ensure_ascii=False)


def create_app(builder: MonthlyBuilder) -> web.Application:
    """
    Create the aiohttp application.

    Args:
        builder: MonthlyBuilder shared by all requests

    Returns:
        Configured web.Application
    """
    app = web.Application(middlewares=[cors_middleware])
    app[BUILDER_KEY] = builder

    app.router.add_get("/api/matriculas", handle_matriculas)
    app.router.add_get("/", handle_health)

    return app


def run_server(builder: MonthlyBuilder, port: int) -> None:
    """Start the API server and block until interrupted."""
    app = create_app(builder)
    logger.info("server_listening", port=port)
    web.run_app(app, port=port, print=None)
