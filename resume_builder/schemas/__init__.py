from .resume import (
    AchievementInput,
    CanonicalResume,
    Certification,
    CertificationDetail,
    CertificationInput,
    CertificationName,
    EducationEntry,
    ExperienceEntry,
    ExperienceInput,
    GenerateResumeResponse,
    LanguageEntry,
    PersonalInfo,
    ProjectEntry,
    ProjectInput,
    ResumeInput,
)

__all__ = [
    "PersonalInfo",
    "ExperienceInput",
    "ProjectInput",
    "CertificationInput",
    "AchievementInput",
    "EducationEntry",
    "LanguageEntry",
    "ResumeInput",
    "CertificationName",
    "CertificationDetail",
    "Certification",
    "ExperienceEntry",
    "ProjectEntry",
    "CanonicalResume",
    "GenerateResumeResponse",
]
