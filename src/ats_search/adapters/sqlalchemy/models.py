"""SQLAlchemy adapter – ORM models for the searchable entities.

Only the columns the search engine reads are mapped.  List-valued attributes
(``skills``, ``tags``, ``locations``) are JSON arrays; on PostgreSQL they are
stored as JSONB.
"""
from __future__ import annotations

import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, ForeignKey, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

JsonList = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    pass


class ScopedTimestampMixin:
    """Organisation scope and creation timestamp shared by candidates and jobs."""

    company_id: Mapped[str] = mapped_column(String(64), index=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )


class PipelineStageModel(Base):
    __tablename__ = "pipeline_stages"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    job_id: Mapped[str | None] = mapped_column(ForeignKey("jobs.id"), nullable=True)
    name: Mapped[str] = mapped_column(String(100))

    job: Mapped[JobModel | None] = relationship(back_populates="pipeline_stages")


class JobCandidateModel(Base):
    """A candidate's assignment to a job and the stage it currently occupies."""

    __tablename__ = "job_candidates"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id"))
    candidate_id: Mapped[str] = mapped_column(ForeignKey("candidates.id"))
    current_stage_id: Mapped[str | None] = mapped_column(ForeignKey("pipeline_stages.id"), nullable=True)

    job: Mapped[JobModel] = relationship(back_populates="job_candidates")
    candidate: Mapped[CandidateModel] = relationship(back_populates="job_candidates")
    current_stage: Mapped[PipelineStageModel | None] = relationship()


class CandidateModel(ScopedTimestampMixin, Base):
    __tablename__ = "candidates"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(320))
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    current_company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    location: Mapped[str] = mapped_column(String(200), default="")
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    department: Mapped[str | None] = mapped_column(String(200), nullable=True)
    industry: Mapped[str | None] = mapped_column(String(200), nullable=True)
    job_domain: Mapped[str | None] = mapped_column(String(200), nullable=True)
    source: Mapped[str | None] = mapped_column(String(100), nullable=True)
    experience_years: Mapped[float | None] = mapped_column(Float, nullable=True)
    skills: Mapped[list[Any]] = mapped_column(JsonList, default=list)
    tags: Mapped[list[Any]] = mapped_column(JsonList, default=list)

    job_candidates: Mapped[list[JobCandidateModel]] = relationship(back_populates="candidate")


class JobModel(ScopedTimestampMixin, Base):
    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    department: Mapped[str] = mapped_column(String(200), default="")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    job_domain: Mapped[str | None] = mapped_column(String(200), nullable=True)
    preferred_industry: Mapped[str | None] = mapped_column(String(200), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="active")
    priority: Mapped[str | None] = mapped_column(String(20), nullable=True)
    experience_min: Mapped[float | None] = mapped_column(Float, nullable=True)
    experience_max: Mapped[float | None] = mapped_column(Float, nullable=True)
    skills: Mapped[list[Any]] = mapped_column(JsonList, default=list)
    locations: Mapped[list[Any]] = mapped_column(JsonList, default=list)

    job_candidates: Mapped[list[JobCandidateModel]] = relationship(back_populates="job")
    pipeline_stages: Mapped[list[PipelineStageModel]] = relationship(back_populates="job")


__all__ = [
    "Base",
    "CandidateModel",
    "JobCandidateModel",
    "JobModel",
    "PipelineStageModel",
    "ScopedTimestampMixin",
]
