from __future__ import annotations

from resume_builder.core.errors import ResumeValidationError
from resume_builder.schemas import (
    AchievementInput,
    CanonicalResume,
    Certification,
    CertificationDetail,
    CertificationInput,
    CertificationName,
    ExperienceEntry,
    LanguageEntry,
    ProjectEntry,
    ResumeInput,
)

from .utils import clean, title_case_words

DEFAULT_LANGUAGES = (LanguageEntry(language="English", proficiency="Fluent"),)


def validate_required(payload: ResumeInput) -> None:
    info = payload.personal_info
    if not clean(info.name) or not clean(info.email):
        raise ResumeValidationError()


def normalize_skills(skills: list[str]) -> list[str]:
    titled = [title_case_words(skill) for skill in skills]
    return [skill for skill in titled if skill]


def normalize_certification(raw: str | CertificationInput) -> Certification | None:
    match raw:
        case str():
            name = clean(raw)
            return CertificationName(name=name) if name else None
        case CertificationInput(name=name, title=title) if clean(name or title):
            return CertificationDetail(
                name=clean(name or title),
                issuer=raw.issuer or "",
                date=raw.date or "",
            )
        case _:
            return None


def normalize_achievement(raw: str | AchievementInput) -> str:
    match raw:
        case str():
            return raw
        case AchievementInput(title=title) if clean(title):
            return title
        case AchievementInput(description=description) if clean(description):
            return description
        case _:
            return ""


def normalize_resume(payload: ResumeInput) -> CanonicalResume:
    validate_required(payload)

    certifications = [
        cert for cert in (normalize_certification(raw) for raw in payload.certifications) if cert is not None
    ]
    achievements = [ach for ach in (normalize_achievement(raw) for raw in payload.achievements) if ach.strip()]
    if payload.languages is not None:
        languages = list(payload.languages)
    else:
        languages = [lang.model_copy() for lang in DEFAULT_LANGUAGES]

    return CanonicalResume(
        personal_info=payload.personal_info,
        skills=normalize_skills(payload.skills),
        career_objective=payload.career_objective or "",
        experience=[ExperienceEntry(**exp.model_dump()) for exp in payload.experience],
        projects=[ProjectEntry(**proj.model_dump()) for proj in payload.projects],
        certifications=certifications,
        achievements=achievements,
        education=list(payload.education),
        languages=languages,
    )
