# Core module exports
from core.config import settings, get_settings
from core.database import engine, Base, AsyncSessionLocal, get_db
from core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    generate_correlation_id,
    api_logger,
    db_logger,
    validation_logger,
)
