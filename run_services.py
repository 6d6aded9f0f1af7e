import os
import uvicorn


def start_server():
    config = uvicorn.Config(
        "inventory_service.app.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 8002)),
    )
    uvicorn.Server(config).run()


if __name__ == "__main__":
    try:
        start_server()
    except KeyboardInterrupt:
        print("\nShutting down server...")
