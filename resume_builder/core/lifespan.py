from contextlib import asynccontextmanager
import logging

from resume_builder.ai.config import load_ai_config
from resume_builder.ai.factory import get_ai_client
from resume_builder.api.deps import get_file_manager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    files = get_file_manager()
    files.ensure_storage()
    files.prune_old_files()

    cfg = load_ai_config()
    app.state.ai_client = get_ai_client()
    logger.info(
        "resume_builder_started storage=%s provider=%s model=%s",
        files.storage_dir,
        cfg.provider,
        cfg.model,
    )
    yield
