"""Data carriers and protocols shared between the export components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .querymapping import QueryMap


@dataclass
class ASTQuery:
    language: str = ""
    name: str = ""
    group: str = ""
    query_id: str = ""


@dataclass
class ResultPath:
    path_id: str = ""
    method_lines: list[str] = field(default_factory=list)


@dataclass
class SourceFile:
    result_id: str = ""
    remote_name: str = ""
    local_name: str = ""


class ASTQueryIDProvider(Protocol):
    def get_query_id(self, language: str, name: str, group: str, sast_query_id: str) -> str:
        """Return the AST query id for a SAST query."""
        ...


class QueriesRepo(Protocol):
    def get_queries_list(self) -> Any:
        """Return the query collection known to SAST."""
        ...


class QueryMappingRepo(Protocol):
    def get_mapping(self) -> list[QueryMap]:
        """Return the SAST to AST query id mappings."""
        ...

    def add_query_mapping(self, language: str, name: str, group: str, sast_query_id: str) -> None:
        """Add a mapping for a SAST query unless one exists."""
        ...


class MethodLineRepo(Protocol):
    def get_method_lines(self, scan_id: str, query_id: str, path_id: str) -> list[str]:
        """Return the method lines of one result path."""
        ...

    def get_method_lines_by_path(self, scan_id: str, query_id: str) -> list[ResultPath]:
        """Return method lines of every path of a query in a scan."""
        ...


class SourceFileRepo(Protocol):
    def download_source_files(self, scan_id: str, source_files: list[SourceFile]) -> None:
        """Download the given source files of a scan."""
        ...


class PresetRepo(Protocol):
    def get_preset_details(self, preset_id: int) -> Any:
        """Return details of one preset."""
        ...


class InstallationRepo(Protocol):
    def get_installation_settings(self) -> Any:
        """Return the installation settings of the SAST server."""
        ...


class SimilarityIDProvider(Protocol):
    def calculate(
        self,
        filename1: str,
        name1: str,
        line1: str,
        column1: str,
        method_line1: str,
        filename2: str,
        name2: str,
        line2: str,
        column2: str,
        method_line2: str,
        query_id: str,
        sim_id_version: int,
    ) -> str:
        """Return the similarity id of a result path."""
        ...