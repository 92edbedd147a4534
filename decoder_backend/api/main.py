from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os
import logging
from contextlib import asynccontextmanager

from decoder_backend import metrics
from decoder_backend.api import dbc as _dbc_module
from decoder_backend.api import dbc_store
from decoder_backend.api import metrics as _metrics_module
from signal_decoder.config import ConfigManager
from signal_decoder.constants import SERVICE_NAME, SERVICE_VERSION
from signal_decoder.exceptions import ConfigurationError
from signal_decoder.logging_config import configure_logging
from signal_decoder.services.frame_decoder import FrameDecoder

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler: load configuration, build the decoder and load persisted DBCs."""
    config = ConfigManager(os.environ.get("DECODER_CONFIG"))
    configure_logging(config.app_settings.log_level)

    try:
        decoder = config.build_decoder()
    except ConfigurationError as e:
        logger.warning(f"Invalid decoder configuration, using defaults: {e}")
        decoder = FrameDecoder()

    app.state.config = config
    app.state.decoder = decoder

    dbc_store.set_dbcs_dir(config.app_settings.get_dbc_dir())
    try:
        app.state.dbcs = dbc_store.load_all_dbcs()
    except OSError as e:
        logger.warning(f"Failed to load persisted DBCs: {e}", exc_info=True)
        app.state.dbcs = {}
    metrics.inc(metrics.DBC_LOADED, len(app.state.dbcs))
    logger.info(f"Loaded {len(app.state.dbcs)} persisted DBC files")

    try:
        yield
    finally:
        logger.info("Shutting down decoder backend")
        app.state.dbcs = {}


app = FastAPI(title="DBC Signal Decoder", lifespan=lifespan)

# Allow local frontends to call the API during development/testing.
if os.environ.get("ENV", "development") in ("development", "test"):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:8080",
            "http://127.0.0.1:8080",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=False,
    )


@app.get("/api/health")
def health():
    """Simple health endpoint for smoke tests."""
    return {"status": "ok", "service": SERVICE_NAME, "version": SERVICE_VERSION}


app.include_router(_dbc_module.router)
app.include_router(_metrics_module.router)
