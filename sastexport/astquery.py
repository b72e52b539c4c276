"""AST query ids and custom query lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .interfaces import QueriesRepo, QueryMappingRepo
from .queryid import get_ast_query_id

_NOT_CUSTOM_PACKAGE_TYPE = "Cx"


@dataclass
class QueryGroup:
    name: str = ""
    package_type: str = ""
    queries: list[Any] = field(default_factory=list)


@dataclass
class QueryCollection:
    is_successful: bool = False
    query_groups: list[QueryGroup] = field(default_factory=list)


class ASTQueryProvider:
    """Resolves AST query ids and filters custom queries."""

    def __init__(self, queries_repo: QueriesRepo, query_mapping_repo: QueryMappingRepo) -> None:
        self._queries_repo = queries_repo
        self._mapping = query_mapping_repo.get_mapping()

    def get_query_id(self, language: str, name: str, group: str, sast_query_id: str) -> str:
        """Return the mapped AST id, or one derived from the query's path."""
        mapped = next(
            (m.ast_id for m in self._mapping if m.sast_id == sast_query_id),
            "",
        )
        if mapped:
            return mapped
        return get_ast_query_id(language, name, group)

    def get_custom_queries_list(self) -> QueryCollection:
        """Return only the query groups that are not built in."""
        collection = self._queries_repo.get_queries_list()
        return QueryCollection(
            is_successful=True,
            query_groups=[
                group
                for group in collection.query_groups
                if group.package_type != _NOT_CUSTOM_PACKAGE_TYPE
            ],
        )