from __future__ import annotations

import asyncio
import logging
import random
import re
import threading
import time
from pathlib import Path
from typing import BinaryIO, Callable, Iterator

from resume_builder.core.downloads import ActiveDownloadRegistry
from resume_builder.core.errors import ConcurrentDownloadError, RenderError, ResumeNotFoundError, StreamError
from resume_builder.render.pdf import PdfConverter, PdfOptions

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_UNSAFE_NAME_RE = re.compile(r"[^\w-]")
PDF_SUFFIX = ".pdf"


def sanitize_name(name: str) -> str:
    cleaned = _UNSAFE_NAME_RE.sub("", _WHITESPACE_RE.sub("_", (name or "").strip()))
    return cleaned or "candidate"


class PdfDownload:
    """One claimed download. ``finish`` deletes the file and releases the claim once."""

    def __init__(
        self,
        path: Path,
        handle: BinaryIO,
        registry: ActiveDownloadRegistry,
        chunk_size: int = 64 * 1024,
    ):
        self.path = path
        self.filename = path.name
        self._handle = handle
        self._registry = registry
        self._chunk_size = chunk_size
        self._finished = False
        self._lock = threading.Lock()

    def iter_bytes(self) -> Iterator[bytes]:
        try:
            while True:
                chunk = self._handle.read(self._chunk_size)
                if not chunk:
                    break
                yield chunk
        except (OSError, ValueError) as exc:
            logger.error("pdf_stream_failed file=%s: %s", self.filename, exc)
        finally:
            self.finish()

    def finish(self) -> None:
        with self._lock:
            if self._finished:
                return
            self._finished = True
        try:
            self._handle.close()
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error("pdf_delete_failed file=%s: %s", self.filename, exc)
        finally:
            self._registry.release(self.filename)

    @property
    def finished(self) -> bool:
        return self._finished


class PdfFileManager:
    def __init__(
        self,
        storage_dir: str | Path,
        *,
        converter: PdfConverter,
        registry: ActiveDownloadRegistry,
        options: PdfOptions | None = None,
        retention: int = 5,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
    ):
        self.storage_dir = Path(storage_dir)
        self._converter = converter
        self._registry = registry
        self._options = options or PdfOptions()
        self._retention = retention
        self._clock = clock
        self._rng = rng or random.Random()

    def ensure_storage(self) -> Path:
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        return self.storage_dir

    def stored_files(self) -> list[str]:
        if not self.storage_dir.is_dir():
            return []
        return sorted(path.name for path in self.storage_dir.glob(f"*{PDF_SUFFIX}"))

    def build_filename(self, name: str) -> str:
        millis = int(self._clock() * 1000)
        return f"{millis}_{self._rng.randint(0, 999)}_{sanitize_name(name)}_resume{PDF_SUFFIX}"

    async def create_file(self, html: str, name: str) -> str:
        try:
            pdf_bytes = await asyncio.wait_for(
                asyncio.to_thread(self._converter.convert, html, self._options),
                timeout=self._options.timeout_s,
            )
        except asyncio.TimeoutError as exc:
            logger.error("pdf_render_timeout timeout_s=%s", self._options.timeout_s)
            raise RenderError() from exc
        except Exception as exc:  # noqa: BLE001 - converter is a black box
            logger.error("pdf_render_failed: %s", exc)
            raise RenderError() from exc

        storage = self.ensure_storage()
        filename = self.build_filename(name)
        while (storage / filename).exists():
            filename = self.build_filename(name)
        (storage / filename).write_bytes(pdf_bytes)
        logger.info("pdf_created file=%s bytes=%s", filename, len(pdf_bytes))
        return filename

    def prune_old_files(self) -> list[str]:
        if not self.storage_dir.is_dir():
            return []

        entries: list[tuple[int, str, Path]] = []
        for path in self.storage_dir.glob(f"*{PDF_SUFFIX}"):
            try:
                entries.append((path.stat().st_mtime_ns, path.name, path))
            except FileNotFoundError:
                continue
        entries.sort(reverse=True)

        active = self._registry.snapshot()
        deleted: list[str] = []
        for _, name, path in entries[self._retention :]:
            if name in active:
                logger.info("pdf_prune_skipped_active file=%s", name)
                continue
            try:
                path.unlink()
                deleted.append(name)
            except OSError as exc:
                logger.warning("pdf_prune_delete_failed file=%s: %s", name, exc)
        if deleted:
            logger.info("pdf_prune deleted=%s", len(deleted))
        return deleted

    def _resolve(self, filename: str) -> Path | None:
        if not filename or filename.startswith(".") or not filename.endswith(PDF_SUFFIX):
            return None
        if Path(filename).name != filename or "\\" in filename:
            return None
        return self.storage_dir / filename

    def serve_and_delete(self, filename: str) -> PdfDownload:
        path = self._resolve(filename)
        if path is None:
            raise ResumeNotFoundError()
        if not self._registry.claim(filename):
            raise ConcurrentDownloadError()

        try:
            handle = path.open("rb")
        except FileNotFoundError as exc:
            self._registry.release(filename)
            raise ResumeNotFoundError() from exc
        except OSError as exc:
            logger.error("pdf_open_failed file=%s: %s", filename, exc)
            try:
                path.unlink(missing_ok=True)
            except OSError as unlink_exc:
                logger.error("pdf_delete_failed file=%s: %s", filename, unlink_exc)
            self._registry.release(filename)
            raise StreamError() from exc

        return PdfDownload(path, handle, self._registry)
