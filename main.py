import uvicorn
from fastapi.middleware.cors import CORSMiddleware

from notifyhub.main import create_app


def build_app():
    """Create the application served by ``uvicorn main:app``."""

    app = create_app()

    # Allow the dashboard client served from the dev server.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = build_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, log_level="info")
