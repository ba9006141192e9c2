"""Main application entry point."""

from faculty_portal.config.environment import IS_PRODUCTION_ENVIRONMENT
from faculty_portal.api.app import app

if __name__ == "__main__":
    import uvicorn

    if not IS_PRODUCTION_ENVIRONMENT:
        # Development mode - direct app instance for debugging
        uvicorn.run(
            app,
            host="0.0.0.0",
            port=8000,
            log_level="debug"
        )
    else:
        # Production mode - string reference required for multiple workers
        uvicorn.run(
            "faculty_portal.api.app:app",
            host="0.0.0.0",
            port=8000,
            reload=False,
            workers=4,
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
