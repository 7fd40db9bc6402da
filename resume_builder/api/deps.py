from __future__ import annotations

from functools import lru_cache

from fastapi import Request

from resume_builder.core.config import settings
from resume_builder.core.downloads import download_registry
from resume_builder.render.pdf import PdfOptions, WeasyPrintConverter
from resume_builder.services.enhancer import ContentEnhancer
from resume_builder.services.pdf_files import PdfFileManager


@lru_cache(maxsize=1)
def get_file_manager() -> PdfFileManager:
    return PdfFileManager(
        settings.resume_dir,
        converter=WeasyPrintConverter(),
        registry=download_registry,
        options=PdfOptions(
            format=settings.pdf_format,
            border=settings.pdf_border,
            timeout_s=settings.pdf_timeout_s,
        ),
        retention=settings.resume_retention,
    )


def get_enhancer(request: Request) -> ContentEnhancer:
    client = getattr(request.app.state, "ai_client", None)
    return ContentEnhancer(client, timeout_s=settings.ai_timeout_s)
