from __future__ import annotations


class ResumeServiceError(RuntimeError):
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class ResumeValidationError(ResumeServiceError):
    def __init__(self, message: str = "Name and email are required"):
        super().__init__(message, status_code=400)


class RenderError(ResumeServiceError):
    def __init__(self, message: str = "Failed to generate PDF"):
        super().__init__(message, status_code=500)


class ResumeNotFoundError(ResumeServiceError):
    def __init__(self, message: str = "Resume not found"):
        super().__init__(message, status_code=404)


class ConcurrentDownloadError(ResumeServiceError):
    def __init__(self, message: str = "Download already in progress"):
        super().__init__(message, status_code=429)


class StreamError(ResumeServiceError):
    def __init__(self, message: str = "Error streaming file"):
        super().__init__(message, status_code=500)
