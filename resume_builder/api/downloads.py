from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from resume_builder.api.deps import get_file_manager
from resume_builder.services.pdf_files import PdfFileManager

router = APIRouter()


def _content_disposition(filename: str) -> str:
    if filename.isascii():
        return f'attachment; filename="{filename}"'
    return f"attachment; filename*=utf-8''{quote(filename)}"


@router.get("/download-resume/{filename}")
def download_resume(filename: str, files: PdfFileManager = Depends(get_file_manager)):
    download = files.serve_and_delete(filename)
    return StreamingResponse(
        download.iter_bytes(),
        media_type="application/pdf",
        headers={
            "Content-Disposition": _content_disposition(download.filename),
            "Cache-Control": "no-store, no-cache, must-revalidate, private",
        },
        background=BackgroundTask(download.finish),
    )
