from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import urlparse

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from resume_builder.schemas import CanonicalResume, CertificationDetail

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*:", re.IGNORECASE)


def link_url(raw_url: str | None) -> str:
    """Return an http(s) URL for a contact link, or "" when it is unusable."""
    value = (raw_url or "").strip()
    if not value:
        return ""
    if not _SCHEME_RE.match(value):
        value = f"https://{value}"
    parsed = urlparse(value)
    if parsed.scheme.lower() not in {"http", "https"} or not parsed.netloc:
        return ""
    return value


def certification_detail(cert) -> tuple[str, str]:
    if isinstance(cert, CertificationDetail):
        return cert.issuer, cert.date
    return "", ""


env = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    autoescape=True,
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)
env.filters["link_url"] = link_url
env.globals["certification_detail"] = certification_detail


def render_resume_html(data: CanonicalResume) -> str:
    return env.get_template("resume.html").render(r=data)
