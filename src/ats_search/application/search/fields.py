"""Application search – per-entity field descriptor tables.

One table per entity kind lists the searchable fields (public name, storage
attribute, text-vs-collection).  The search-condition builder and the
highlighter both read it, so what can be found and what gets emphasised never
drift apart.
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Mapping

from ats_search.kernel.predicate import CollectionContains, Predicate, TextContains, resolve_path


class EntityKind(str, Enum):
    CANDIDATE = "candidate"
    JOB = "job"


class FieldKind(str, Enum):
    TEXT = "text"
    COLLECTION = "collection"


@dataclasses.dataclass(frozen=True)
class SearchField:
    """A field a free-text term is matched against.

    ``name`` is the public (wire) name used in highlight markers,
    ``attribute`` the storage attribute the predicate targets.
    """

    name: str
    attribute: str
    kind: FieldKind = FieldKind.TEXT

    def term_predicate(self, term: str) -> Predicate:
        """Substring containment for text, case-insensitive membership for collections."""
        if self.kind is FieldKind.COLLECTION:
            return CollectionContains(self.attribute, term, case_insensitive=True)
        return TextContains(self.attribute, term)

    def contains(self, row: Any, term: str) -> bool:
        """Case-insensitive substring test used for highlighting.

        For collections any element containing *term* counts.
        """
        needle = term.lower()
        value = resolve_path(row, self.attribute)
        if value is None:
            return False
        if self.kind is FieldKind.COLLECTION:
            if isinstance(value, (str, bytes)):
                return False
            return any(isinstance(item, str) and needle in item.lower() for item in value)
        return isinstance(value, str) and needle in value.lower()


@dataclasses.dataclass(frozen=True)
class EntityDescriptor:
    kind: EntityKind
    search_fields: tuple[SearchField, ...]
    suggestion_fields: tuple[SearchField, ...]
    sortable: Mapping[str, str]
    id_attribute: str = "id"
    scope_attribute: str = "company_id"
    created_attribute: str = "created_at"

    def field(self, name: str) -> SearchField:
        for field in self.search_fields:
            if field.name == name:
                return field
        raise KeyError(name)


_TEXT = FieldKind.TEXT
_COLLECTION = FieldKind.COLLECTION

CANDIDATE = EntityDescriptor(
    kind=EntityKind.CANDIDATE,
    search_fields=(
        SearchField("name", "name"),
        SearchField("email", "email"),
        SearchField("phone", "phone"),
        SearchField("currentCompany", "current_company"),
        SearchField("location", "location"),
        SearchField("title", "title"),
        SearchField("department", "department"),
        SearchField("industry", "industry"),
        SearchField("jobDomain", "job_domain"),
        SearchField("skills", "skills", _COLLECTION),
        SearchField("tags", "tags", _COLLECTION),
    ),
    suggestion_fields=(
        SearchField("name", "name"),
        SearchField("email", "email"),
        SearchField("currentCompany", "current_company"),
    ),
    sortable={
        "createdAt": "created_at",
        "name": "name",
        "email": "email",
        "location": "location",
        "title": "title",
        "currentCompany": "current_company",
        "experienceYears": "experience_years",
        "source": "source",
    },
)

JOB = EntityDescriptor(
    kind=EntityKind.JOB,
    search_fields=(
        SearchField("title", "title"),
        SearchField("department", "department"),
        SearchField("description", "description"),
        SearchField("jobDomain", "job_domain"),
        SearchField("preferredIndustry", "preferred_industry"),
        SearchField("skills", "skills", _COLLECTION),
        SearchField("locations", "locations", _COLLECTION),
    ),
    suggestion_fields=(SearchField("title", "title"),),
    sortable={
        "createdAt": "created_at",
        "title": "title",
        "department": "department",
        "status": "status",
        "priority": "priority",
        "experienceMin": "experience_min",
        "experienceMax": "experience_max",
    },
)

DESCRIPTORS: Mapping[EntityKind, EntityDescriptor] = {
    EntityKind.CANDIDATE: CANDIDATE,
    EntityKind.JOB: JOB,
}


__all__ = [
    "CANDIDATE",
    "DESCRIPTORS",
    "JOB",
    "EntityDescriptor",
    "EntityKind",
    "FieldKind",
    "SearchField",
]
