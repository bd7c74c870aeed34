"""FastAPI application for the SpecFlow backend."""

from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from .routes import specs


def create_app(project_path: Optional[Path] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        project_path: Project directory holding .specflow/

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="SpecFlow API",
        description="Generate user stories, tasks and risks from a feature description",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000", "*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.project_path = Path(project_path) if project_path else None

    app.include_router(specs.router, prefix="/api", tags=["specs"])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "SpecFlow API",
            "version": __version__,
            "docs": "/docs",
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def run_server(
    project_path: Path,
    host: str = "127.0.0.1",
    port: int = 8000,
    reload: bool = False
) -> None:
    """Run the API server.

    Args:
        project_path: Project directory holding .specflow/
        host: Host to bind to
        port: Port to listen on
        reload: Enable auto-reload for development
    """
    import uvicorn

    app = create_app(project_path)

    uvicorn.run(
        app,
        host=host,
        port=port,
        reload=reload,
    )
