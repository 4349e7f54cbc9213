"""SQLAlchemy adapter – SqlAlchemySearchRepository."""
from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from sqlalchemy import JSON, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.base import ExecutableOption

from ats_search.adapters.sqlalchemy.compiler import PredicateCompiler
from ats_search.adapters.sqlalchemy.models import CandidateModel, JobCandidateModel, JobModel
from ats_search.application.pagination import PageRequest, SortDirection
from ats_search.application.search.fields import EntityKind
from ats_search.application.search.ports import SearchRepository
from ats_search.kernel.errors import UnsupportedPredicateError
from ats_search.kernel.predicate import Predicate

DEFAULT_MODELS: Mapping[EntityKind, type[Any]] = {
    EntityKind.CANDIDATE: CandidateModel,
    EntityKind.JOB: JobModel,
}


def default_load_options(kind: EntityKind) -> list[ExecutableOption]:
    """Eager-load the relations a search result is rendered with."""
    if kind is EntityKind.CANDIDATE:
        return [
            selectinload(CandidateModel.job_candidates).options(
                selectinload(JobCandidateModel.job),
                selectinload(JobCandidateModel.current_stage),
            )
        ]
    return [
        selectinload(JobModel.job_candidates).options(
            selectinload(JobCandidateModel.candidate),
            selectinload(JobCandidateModel.current_stage),
        ),
        selectinload(JobModel.pipeline_stages),
    ]


class SqlAlchemySearchRepository(SearchRepository):
    """Evaluates predicates as SQL.

    Every read opens its own session from *session_factory*, so the page and
    count reads of one search can run concurrently.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        *,
        models: Mapping[EntityKind, type[Any]] | None = None,
        load_options: Callable[[EntityKind], Sequence[ExecutableOption]] | None = default_load_options,
    ) -> None:
        self._session_factory = session_factory
        self._models = dict(models or DEFAULT_MODELS)
        self._load_options = load_options

    def _model(self, kind: EntityKind) -> type[Any]:
        return self._models[kind]

    @staticmethod
    def _where(session: AsyncSession, predicate: Predicate, model: type[Any]) -> Any:
        return PredicateCompiler(session.get_bind().dialect.name).compile(predicate, model)

    async def find_page(self, kind: EntityKind, predicate: Predicate, page: PageRequest) -> list[Any]:
        model = self._model(kind)
        async with self._session_factory() as session:
            stmt = select(model).where(self._where(session, predicate, model))
            for sort in page.sorts:
                column = getattr(model, sort.field, None)
                if column is None:
                    raise UnsupportedPredicateError(
                        f"{model.__name__} has no attribute '{sort.field}'", adapter="sqlalchemy"
                    )
                stmt = stmt.order_by(column.desc() if sort.direction is SortDirection.DESC else column.asc())
            if self._load_options is not None:
                stmt = stmt.options(*self._load_options(kind))
            result = await session.execute(stmt.offset(page.offset).limit(page.size))
            return list(result.scalars().all())

    async def count(self, kind: EntityKind, predicate: Predicate) -> int:
        model = self._model(kind)
        async with self._session_factory() as session:
            stmt = select(func.count()).select_from(model).where(self._where(session, predicate, model))
            return int((await session.execute(stmt)).scalar_one())

    async def distinct_values(self, kind: EntityKind, predicate: Predicate, attribute: str) -> list[Any]:
        model = self._model(kind)
        column = getattr(model, attribute)
        async with self._session_factory() as session:
            where = self._where(session, predicate, model)
            if isinstance(column.expression.type, JSON):
                rows = (await session.execute(select(column).where(where))).scalars().all()
                values = [item for row in rows if row for item in row]
            else:
                stmt = select(column).distinct().where(where, column.is_not(None))
                values = list((await session.execute(stmt)).scalars().all())
        return sorted({v for v in values if v is not None and v != ""}, key=str)


__all__ = ["DEFAULT_MODELS", "SqlAlchemySearchRepository", "default_load_options"]
