"""
FastAPI main application
Competition leaderboard: ground truth upload, submission scoring and ranking

Routers in scoreboard/api/:
- health.py: Health check and system status
- admin.py: Ground truth upload, bulk submissions (HTTP Basic)
- submission.py: Team submission upload
- leaderboard.py: Ranked table and metric selection
- config.py: Configuration retrieval

Settings are resolved and one Leaderboard instance is built at startup;
both are kept on app.state.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import logging
import os

from scoreboard.config import DEFAULT_CONFIG_PATH, load_config
from scoreboard.models import Settings
from scoreboard.services.leaderboard import Leaderboard
from scoreboard.services.persistence import KeyValueStore

# Import all API routers
from scoreboard.api import health, admin, submission, leaderboard
from scoreboard.api import config as config_router


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def resolve_settings() -> Settings:
    """Settings from $SCOREBOARD_CONFIG, else the default file if present, else defaults"""
    config_path = os.getenv("SCOREBOARD_CONFIG")
    if config_path:
        return load_config(config_path)
    if Path(DEFAULT_CONFIG_PATH).exists():
        return load_config(DEFAULT_CONFIG_PATH)
    logger.info("No config file found, using defaults")
    return Settings()


def create_app(settings: Optional[Settings] = None, kv: Optional[KeyValueStore] = None) -> FastAPI:
    """
    Build the application

    Args:
        settings: Server settings (resolved from config file at startup if None)
        kv: Key-value store override (otherwise chosen by settings.storage)
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events"""
        # Startup: restore persisted state
        try:
            resolved = settings or resolve_settings()
            app.state.settings = resolved
            app.state.leaderboard = Leaderboard.from_settings(resolved, kv)
            logger.info(
                f"✅ Server started ({resolved.storage} storage, "
                f"{len(app.state.leaderboard.get_ranked())} submissions)"
            )
        except Exception as e:
            logger.error(f"❌ Startup failed: {e}")
            raise

        yield

        # Shutdown
        logger.info("🛑 Server shutting down")

    app = FastAPI(
        title="Competition Leaderboard",
        description="Scores CSV prediction files against ground truth and ranks teams",
        version="1.0.0",
        lifespan=lifespan
    )

    # CORS middleware (allow all origins for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ==================== INCLUDE ROUTERS ====================

    app.include_router(health.router)
    app.include_router(admin.router)
    app.include_router(submission.router)
    app.include_router(leaderboard.router)
    app.include_router(config_router.router)

    return app


app = create_app()


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
