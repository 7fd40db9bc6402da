import os
import random
import re
import tempfile
import time
import unittest
from pathlib import Path
from unittest.mock import patch

from resume_builder.core.downloads import ActiveDownloadRegistry
from resume_builder.core.errors import ConcurrentDownloadError, RenderError, ResumeNotFoundError, StreamError
from resume_builder.render.pdf import PdfOptions
from resume_builder.services.pdf_files import PdfDownload, PdfFileManager, sanitize_name

FILENAME_RE = re.compile(r"^\d+_\d+_[\w-]+_resume\.pdf$")


class FakeConverter:
    def __init__(self, error: Exception | None = None, delay_s: float = 0.0):
        self.error = error
        self.delay_s = delay_s
        self.calls: list[tuple[str, PdfOptions]] = []

    def convert(self, html: str, options: PdfOptions) -> bytes:
        self.calls.append((html, options))
        if self.delay_s:
            time.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        return b"%PDF-1.4\n" + html.encode("utf-8")


class _BrokenHandle:
    """Yields one chunk, then fails like a disk read error."""

    def __init__(self):
        self.reads = 0
        self.closed = False

    def read(self, size):
        self.reads += 1
        if self.reads == 1:
            return b"%PDF"
        raise OSError("read failed")

    def close(self):
        self.closed = True


class _StorageMixin:
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.storage = Path(self._tmp.name) / "resumes"
        self.registry = ActiveDownloadRegistry()
        self.converter = FakeConverter()
        self.files = PdfFileManager(
            self.storage,
            converter=self.converter,
            registry=self.registry,
            clock=lambda: 1_700_000_000.5,
            rng=random.Random(7),
        )

    def tearDown(self):
        self._tmp.cleanup()

    def _write_pdf(self, name: str, mtime: int) -> Path:
        self.storage.mkdir(parents=True, exist_ok=True)
        path = self.storage / name
        path.write_bytes(b"%PDF-1.4 test")
        os.utime(path, (mtime, mtime))
        return path


class SanitizeNameTests(unittest.TestCase):
    def test_whitespace_runs_become_underscores(self):
        self.assertEqual(sanitize_name("  Jane   Q  Doe "), "Jane_Q_Doe")

    def test_path_characters_are_removed(self):
        self.assertEqual(sanitize_name("../../etc/passwd"), "etcpasswd")
        self.assertEqual(sanitize_name("///"), "candidate")


class RetentionTests(_StorageMixin, unittest.TestCase):
    def test_sixth_file_prunes_the_oldest(self):
        base = 1_700_000_000
        for index in range(6):
            self._write_pdf(f"file{index}_resume.pdf", base + index * 10)

        deleted = self.files.prune_old_files()

        self.assertEqual(deleted, ["file0_resume.pdf"])
        self.assertEqual(
            sorted(p.name for p in self.storage.glob("*.pdf")),
            [f"file{index}_resume.pdf" for index in range(1, 6)],
        )

    def test_non_pdf_files_are_ignored(self):
        for index in range(7):
            self._write_pdf(f"file{index}_resume.pdf", 1_700_000_000 + index)
        (self.storage / "notes.txt").write_text("keep me")

        self.files.prune_old_files()

        self.assertEqual(len(list(self.storage.glob("*.pdf"))), 5)
        self.assertTrue((self.storage / "notes.txt").exists())

    def test_file_mid_download_is_not_pruned(self):
        for index in range(6):
            self._write_pdf(f"file{index}_resume.pdf", 1_700_000_000 + index)
        self.registry.claim("file0_resume.pdf")

        with self.assertLogs("resume_builder.services.pdf_files", level="INFO"):
            deleted = self.files.prune_old_files()

        self.assertEqual(deleted, [])
        self.assertTrue((self.storage / "file0_resume.pdf").exists())

    def test_missing_storage_directory_is_a_no_op(self):
        self.assertEqual(self.files.prune_old_files(), [])


class CreateFileTests(_StorageMixin, unittest.IsolatedAsyncioTestCase):
    async def test_create_file_writes_pdf_with_expected_name(self):
        filename = await self.files.create_file("<html>hi</html>", "Jane Doe")

        self.assertRegex(filename, FILENAME_RE)
        self.assertTrue(filename.startswith("1700000000500_"))
        self.assertTrue(filename.endswith("_Jane_Doe_resume.pdf"))
        self.assertTrue((self.storage / filename).read_bytes().startswith(b"%PDF"))
        _, options = self.converter.calls[0]
        self.assertEqual((options.format, options.border, options.timeout_s), ("Letter", "10mm", 30.0))

    async def test_converter_failure_raises_render_error(self):
        self.converter.error = OSError("engine crashed")

        with self.assertRaises(RenderError) as ctx:
            await self.files.create_file("<html></html>", "Jane")

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(str(ctx.exception), "Failed to generate PDF")
        self.assertEqual(self.files.stored_files(), [])

    async def test_converter_timeout_raises_render_error(self):
        files = PdfFileManager(
            self.storage,
            converter=FakeConverter(delay_s=0.3),
            registry=self.registry,
            options=PdfOptions(timeout_s=0.01),
        )
        with self.assertRaises(RenderError):
            await files.create_file("<html></html>", "Jane")


class DownloadTests(_StorageMixin, unittest.TestCase):
    def test_download_streams_then_deletes(self):
        self._write_pdf("1_2_Jane_resume.pdf", 1_700_000_000)

        download = self.files.serve_and_delete("1_2_Jane_resume.pdf")
        body = b"".join(download.iter_bytes())

        self.assertEqual(body, b"%PDF-1.4 test")
        self.assertFalse((self.storage / "1_2_Jane_resume.pdf").exists())
        self.assertNotIn("1_2_Jane_resume.pdf", self.registry)
        with self.assertRaises(ResumeNotFoundError):
            self.files.serve_and_delete("1_2_Jane_resume.pdf")

    def test_second_download_while_in_flight_is_rejected(self):
        path = self._write_pdf("1_2_Jane_resume.pdf", 1_700_000_000)

        first = self.files.serve_and_delete("1_2_Jane_resume.pdf")
        with self.assertRaises(ConcurrentDownloadError) as ctx:
            self.files.serve_and_delete("1_2_Jane_resume.pdf")

        self.assertEqual(ctx.exception.status_code, 429)
        self.assertTrue(path.exists())
        first.finish()
        self.assertFalse(path.exists())
        self.assertEqual(len(self.registry), 0)

    def test_finish_is_idempotent(self):
        self._write_pdf("1_2_Jane_resume.pdf", 1_700_000_000)
        download = self.files.serve_and_delete("1_2_Jane_resume.pdf")

        list(download.iter_bytes())
        download.finish()

        self.assertTrue(download.finished)
        self.assertEqual(len(self.registry), 0)

    def test_missing_file_releases_claim(self):
        with self.assertRaises(ResumeNotFoundError) as ctx:
            self.files.serve_and_delete("404_1_Nobody_resume.pdf")
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(len(self.registry), 0)

    def test_read_error_mid_stream_still_deletes_and_releases(self):
        path = self._write_pdf("1_2_Jane_resume.pdf", 1_700_000_000)
        self.assertTrue(self.registry.claim(path.name))
        download = PdfDownload(path, _BrokenHandle(), self.registry)

        with self.assertLogs("resume_builder.services.pdf_files", level="ERROR") as logs:
            body = b"".join(download.iter_bytes())

        self.assertEqual(body, b"%PDF")
        self.assertIn("pdf_stream_failed", logs.output[0])
        self.assertFalse(path.exists())
        self.assertTrue(download.finished)
        self.assertEqual(len(self.registry), 0)

    def test_open_failure_raises_stream_error_and_cleans_up(self):
        path = self._write_pdf("1_2_Jane_resume.pdf", 1_700_000_000)

        with patch.object(Path, "open", side_effect=PermissionError("denied")):
            with self.assertLogs("resume_builder.services.pdf_files", level="ERROR"):
                with self.assertRaises(StreamError) as ctx:
                    self.files.serve_and_delete(path.name)

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertFalse(path.exists())
        self.assertEqual(len(self.registry), 0)

    def test_unsafe_names_are_not_found(self):
        outside = Path(self._tmp.name) / "secret.pdf"
        outside.write_bytes(b"%PDF secret")

        for name in ("../secret.pdf", "resume.txt", ".hidden.pdf", ""):
            with self.assertRaises(ResumeNotFoundError):
                self.files.serve_and_delete(name)
        self.assertTrue(outside.exists())


if __name__ == "__main__":
    unittest.main()
