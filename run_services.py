import asyncio
import uvicorn

from shared.core.config import settings


async def start_servers():
    # Auth (WildApricot login, session tokens)
    auth_config = uvicorn.Config(
        "auth_service.app.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
    auth_server = uvicorn.Server(auth_config)

    # Inventory API
    inventory_config = uvicorn.Config(
        "inventory_service.app.main:app",
        host="0.0.0.0",
        port=8002,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
    inventory_server = uvicorn.Server(inventory_config)

    # Run both servers concurrently
    await asyncio.gather(
        auth_server.serve(),
        inventory_server.serve(),
    )

if __name__ == "__main__":
    try:
        asyncio.run(start_servers())
    except KeyboardInterrupt:
        print("\nShutting down servers...")
