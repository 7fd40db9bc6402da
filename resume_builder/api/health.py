from fastapi import APIRouter, Depends

from resume_builder.api.deps import get_file_manager
from resume_builder.services.pdf_files import PdfFileManager

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check(files: PdfFileManager = Depends(get_file_manager)):
    return {"status": "healthy", "stored_resumes": len(files.stored_files())}
