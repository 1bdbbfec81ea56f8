"""FastAPI application entry point."""
import sys
from fastapi import FastAPI
from topic_stats.config import settings
from topic_stats.errors import TopicDataError
from topic_stats.handlers import install_exception_handlers
from topic_stats.logging_utils import LoggingMiddleware
from topic_stats.routes import health, topics, metrics
import logging

# Initialize logger
logger = logging.getLogger(__name__)

# Configure logging level
from topic_stats.logging_utils import configure_logging
configure_logging(settings.log_level)

# Create FastAPI app
app = FastAPI(
    title="Topic Stats Service",
    description="Read-only statistics about topic runs recorded on the filesystem",
    version="1.0.0",
)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

install_exception_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(topics.router)
app.include_router(metrics.router)


@app.on_event("startup")
async def startup_event():
    """Validate configuration on startup."""
    if not settings.validate_topics_root():
        logger.error("TOPICS_ROOT is not set or is not a directory. Service will not be ready.")
    logger.info("Application started")


def main(argv=None) -> int:
    """Run the service for the topics folder given as the single argument."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        logger.error("Expected exactly 1 argument: path to the topics folder.")
        return 1

    from topic_stats.dependencies import get_provider
    settings.topics_root = args[0]
    get_provider.cache_clear()
    try:
        get_provider()
    except TopicDataError:
        logger.exception("Failed to start application.")
        return 1

    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_config=None,  # We use our own JSON logging
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
