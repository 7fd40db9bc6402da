from fastapi import APIRouter, Depends, Request

from resume_builder.api.deps import get_enhancer, get_file_manager
from resume_builder.core.config import settings
from resume_builder.core.errors import ResumeServiceError
from resume_builder.core.rate_limit import rate_limit
from resume_builder.schemas import GenerateResumeResponse, ResumeInput
from resume_builder.services.enhancer import ContentEnhancer
from resume_builder.services.pdf_files import PdfFileManager
from resume_builder.services.resume_service import generate_resume

router = APIRouter()


@router.post("/api/generate-resume", response_model=GenerateResumeResponse)
@rate_limit(settings.generate_rate_limit)
async def generate_resume_endpoint(
    request: Request,
    payload: ResumeInput,
    enhancer: ContentEnhancer = Depends(get_enhancer),
    files: PdfFileManager = Depends(get_file_manager),
):
    _ = request
    try:
        return await generate_resume(payload, enhancer=enhancer, files=files)
    except ResumeServiceError:
        raise
    except Exception as exc:
        raise ResumeServiceError(str(exc) or "Internal server error") from exc
