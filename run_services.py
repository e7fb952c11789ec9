import asyncio
import uvicorn

from shared.core.config import settings

# (app import path, port)
SERVICES = [
    ("auth_service.app.main:app", 8001),
    ("inventory_service.app.main:app", 8002),
]


async def start_servers():
    servers = [
        uvicorn.Server(uvicorn.Config(
            app_path,
            host="0.0.0.0",
            port=port,
            reload=settings.APP_ENV == "development",
            log_level=settings.LOG_LEVEL.lower(),
        ))
        for app_path, port in SERVICES
    ]

    # Run both services in one process
    await asyncio.gather(*(server.serve() for server in servers))

if __name__ == "__main__":
    try:
        asyncio.run(start_servers())
    except KeyboardInterrupt:
        print("\nShutting down servers...")
