from datetime import datetime, timezone

from fastapi import APIRouter

from storefront.version import VERSION


def health_router(service: str, name: str, *paths: str) -> APIRouter:
    """Health and info endpoints; ``paths`` are extra health aliases."""
    router = APIRouter(tags=["health"])

    def health():
        return {
            "status": "UP",
            "service": name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    for path in ("/health", *paths):
        router.add_api_route(path, health, methods=["GET"], include_in_schema=False)

    @router.get("/v1/_info")
    def info():
        return {"service": service, "version": VERSION}

    return router
