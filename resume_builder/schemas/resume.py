from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class _ResumeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value, info: ValidationInfo):
        # Form clients send null for untouched fields; treat it as absent.
        if value is not None:
            return value
        field = cls.model_fields[info.field_name]
        if field.is_required():
            return value
        return field.get_default(call_default_factory=True)


class PersonalInfo(_ResumeModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None
    portfolio: str | None = None


class ExperienceInput(_ResumeModel):
    position: str = ""
    company: str = ""
    location: str | None = None
    start_date: str = Field(default="", alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    responsibilities: list[str] = Field(default_factory=list)


class ProjectInput(_ResumeModel):
    title: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    date: str | None = None


class CertificationInput(_ResumeModel):
    name: str | None = None
    title: str | None = None
    issuer: str | None = None
    date: str | None = None


class AchievementInput(_ResumeModel):
    title: str | None = None
    description: str | None = None


class EducationEntry(_ResumeModel):
    degree: str = ""
    institution: str = ""
    location: str | None = None
    year: str = ""
    gpa: str | None = None


class LanguageEntry(_ResumeModel):
    language: str = ""
    proficiency: str = ""


class ResumeInput(_ResumeModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo, alias="personalInfo")
    skills: list[str] = Field(default_factory=list)
    career_objective: str | None = Field(default=None, alias="careerObjective")
    experience: list[ExperienceInput] = Field(default_factory=list)
    projects: list[ProjectInput] = Field(default_factory=list)
    certifications: list[Union[str, CertificationInput]] = Field(default_factory=list)
    achievements: list[Union[str, AchievementInput]] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    languages: list[LanguageEntry] | None = None


class CertificationName(_ResumeModel):
    name: str


class CertificationDetail(_ResumeModel):
    name: str
    issuer: str = ""
    date: str = ""


Certification = Union[CertificationName, CertificationDetail]


class ExperienceEntry(ExperienceInput):
    enhanced_points: list[str] = Field(default_factory=list, alias="enhancedPoints")


class ProjectEntry(ProjectInput):
    enhanced_points: list[str] = Field(default_factory=list, alias="enhancedPoints")


class CanonicalResume(_ResumeModel):
    personal_info: PersonalInfo = Field(alias="personalInfo")
    skills: list[str] = Field(default_factory=list)
    career_objective: str = Field(default="", alias="careerObjective")
    experience: list[ExperienceEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    languages: list[LanguageEntry] = Field(default_factory=list)


class GenerateResumeResponse(_ResumeModel):
    pdf_filename: str = Field(alias="pdfFilename")
