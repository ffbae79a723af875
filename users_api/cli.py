"""Command-line entry point: `users-api --port 5000`."""

import typer
import uvicorn

from users_api.config import settings

app = typer.Typer(
    name="users-api",
    help="Users API - CRUD service for user records stored in MongoDB",
    add_completion=False,
)


@app.command()
def serve(
    port: int = typer.Option(
        settings.backend_port,
        "--port",
        help="Port to listen on",
        min=1,
        max=65535,
    ),
    host: str = typer.Option(settings.backend_host, "--host", help="Host to bind to"),
) -> None:
    """Start the HTTP server. Exits non-zero if MongoDB is unreachable at startup."""
    uvicorn.run(
        "users_api.main:app",
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
