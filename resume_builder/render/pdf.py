from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class PdfOptions:
    format: str = "Letter"
    border: str = "10mm"
    timeout_s: float = 30.0


class PdfConverter(Protocol):
    def convert(self, html: str, options: PdfOptions) -> bytes: ...


class WeasyPrintConverter:
    def convert(self, html: str, options: PdfOptions) -> bytes:
        # WeasyPrint loads Pango at import time; keep that off the app import path.
        from weasyprint import CSS, HTML

        page_css = CSS(string=f"@page {{ size: {options.format}; margin: {options.border}; }}")
        return HTML(string=html).write_pdf(stylesheets=[page_css])
