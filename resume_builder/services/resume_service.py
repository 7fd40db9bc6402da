from __future__ import annotations

import logging

from resume_builder.normalize.normalize_resume import normalize_resume, validate_required
from resume_builder.render.html_renderer import render_resume_html
from resume_builder.schemas import CanonicalResume, GenerateResumeResponse, ResumeInput
from resume_builder.services.enhancer import ContentEnhancer
from resume_builder.services.pdf_files import PdfFileManager

logger = logging.getLogger(__name__)


def default_career_objective(skills: list[str]) -> str:
    return f"Computer Science student with {', '.join(skills[:3])} skills"


async def enhance_resume(data: CanonicalResume, enhancer: ContentEnhancer) -> CanonicalResume:
    objective = data.career_objective or default_career_objective(data.skills)
    data.career_objective = " ".join(await enhancer.enhance(objective, None, "summary"))

    for exp in data.experience:
        if any(item.strip() for item in exp.responsibilities):
            exp.enhanced_points = await enhancer.enhance(
                "\n".join(exp.responsibilities),
                {"position": exp.position, "company": exp.company},
                "experience",
            )

    for project in data.projects:
        if project.description.strip():
            project.enhanced_points = await enhancer.enhance(
                project.description,
                {"title": project.title},
                "project",
            )
    return data


async def generate_resume(
    payload: ResumeInput,
    *,
    enhancer: ContentEnhancer,
    files: PdfFileManager,
) -> GenerateResumeResponse:
    validate_required(payload)
    data = await enhance_resume(normalize_resume(payload), enhancer)

    html = render_resume_html(data)
    filename = await files.create_file(html, data.personal_info.name or "")
    files.prune_old_files()
    logger.info(
        "resume_generated file=%s experience=%s projects=%s",
        filename,
        len(data.experience),
        len(data.projects),
    )
    return GenerateResumeResponse(pdf_filename=filename)
