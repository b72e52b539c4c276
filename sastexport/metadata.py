"""Metadata records linking SAST results to AST similarity ids."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from .interfaces import (
    ASTQueryIDProvider,
    MethodLineRepo,
    ResultPath,
    SimilarityIDProvider,
    SourceFile,
    SourceFileRepo,
)
from .report import CxXMLResults
from .worker import get_num_cpu


@dataclass
class RecordPath:
    path_id: str = ""
    similarity_id: str = ""
    result_id: str = ""
    sast_similarity_id: str = ""


@dataclass
class RecordResult:
    result_id: str = ""
    paths: list[RecordPath] = field(default_factory=list)


@dataclass
class RecordQuery:
    query_id: str = ""
    results: list[RecordResult] = field(default_factory=list)


@dataclass
class Record:
    queries: list[RecordQuery] = field(default_factory=list)


@dataclass
class Node:
    file_name: str = ""
    name: str = ""
    line: str = ""
    column: str = ""


@dataclass
class Result:
    path_id: str = ""
    result_id: str = ""
    similarity_id: str = ""
    first_node: Node = field(default_factory=Node)
    last_node: Node = field(default_factory=Node)


@dataclass
class Query:
    query_id: str = ""
    language: str = ""
    name: str = ""
    group: str = ""
    results: list[Result] = field(default_factory=list)


@dataclass
class _SimilarityJob:
    filename1: str
    name1: str
    line1: str
    column1: str
    method_line1: str
    filename2: str
    name2: str
    line2: str
    column2: str
    method_line2: str
    query_id: str
    sim_id_version: int


def _find_source_file(result_id: str, remote_name: str, files: list[SourceFile]) -> SourceFile | None:
    return next(
        (f for f in files if f.remote_name == remote_name and f.result_id == result_id),
        None,
    )


def _find_method_lines(path_id: str, paths: list[ResultPath]) -> list[str]:
    found = next((p for p in paths if p.path_id == path_id), None)
    if found is None or not found.method_lines:
        raise ValueError(f"no method lines for path {path_id}")
    return found.method_lines


class MetadataFactory:
    """Builds metadata records by computing similarity ids of triaged results."""

    def __init__(
        self,
        ast_query_id_provider: ASTQueryIDProvider,
        similarity_id_provider: SimilarityIDProvider,
        source_provider: SourceFileRepo,
        method_line_provider: MethodLineRepo,
        tmp_dir: str,
        sim_id_version: int,
    ) -> None:
        self._ast_query_id_provider = ast_query_id_provider
        self._similarity_id_provider = similarity_id_provider
        self._source_provider = source_provider
        self._method_line_provider = method_line_provider
        self._tmp_dir = tmp_dir
        self._sim_id_version = sim_id_version

    def _files_to_download(self, query: Query) -> list[SourceFile]:
        files: list[SourceFile] = []
        for result in query.results:
            for node in (result.first_node, result.last_node):
                if _find_source_file(result.result_id, node.file_name, files) is None:
                    files.append(
                        SourceFile(
                            result_id=result.result_id,
                            remote_name=node.file_name,
                            local_name=os.path.join(self._tmp_dir, result.result_id, node.file_name),
                        )
                    )
        return files

    def _job(
        self,
        result: Result,
        files: list[SourceFile],
        method_lines_by_path: list[ResultPath],
        ast_query_id: str,
    ) -> _SimilarityJob:
        first_file = _find_source_file(result.result_id, result.first_node.file_name, files)
        last_file = _find_source_file(result.result_id, result.last_node.file_name, files)
        method_lines = _find_method_lines(result.path_id, method_lines_by_path)
        return _SimilarityJob(
            first_file.local_name if first_file else "",
            result.first_node.name,
            result.first_node.line,
            result.first_node.column,
            method_lines[0],
            last_file.local_name if last_file else "",
            result.last_node.name,
            result.last_node.line,
            result.last_node.column,
            method_lines[-1],
            ast_query_id,
            self._sim_id_version,
        )

    def _calculate(self, job: _SimilarityJob) -> str:
        return self._similarity_id_provider.calculate(
            job.filename1,
            job.name1,
            job.line1,
            job.column1,
            job.method_line1,
            job.filename2,
            job.name2,
            job.line2,
            job.column2,
            job.method_line2,
            job.query_id,
            job.sim_id_version,
        )

    def get_metadata_record(self, scan_id: str, queries: list[Query]) -> Record:
        """Return the metadata record of the given queries of a scan."""
        output = Record()
        for query in queries:
            record_query = RecordQuery(query_id=query.query_id)
            output.queries.append(record_query)
            try:
                ast_query_id = self._ast_query_id_provider.get_query_id(
                    query.language, query.name, query.group, query.query_id
                )
            except Exception as err:
                raise RuntimeError(
                    f"could not get AST query id for language {query.language}, "
                    f"group {query.group}, and name {query.name}: {err}"
                ) from err
            try:
                method_lines_by_path = self._method_line_provider.get_method_lines_by_path(
                    scan_id, query.query_id
                )
            except Exception as err:
                raise RuntimeError(f"could not get method lines: {err}") from err
            files = self._files_to_download(query)
            try:
                self._source_provider.download_source_files(scan_id, files)
            except Exception as err:
                raise RuntimeError(f"could not download source code: {err}") from err

            jobs = [
                self._job(result, files, method_lines_by_path, ast_query_id)
                for result in query.results
            ]
            with ThreadPoolExecutor(max_workers=max(1, get_num_cpu())) as pool:
                try:
                    similarity_ids = list(pool.map(self._calculate, jobs))
                except Exception as err:
                    raise RuntimeError(f"failed calculating similarity id: {err}") from err

            for result, similarity_id in zip(query.results, similarity_ids):
                record_result = next(
                    (r for r in record_query.results if r.result_id == result.result_id), None
                )
                if record_result is None:
                    record_result = RecordResult(result_id=result.result_id)
                    record_query.results.append(record_result)
                if not any(p.path_id == result.path_id for p in record_result.paths):
                    record_result.paths.append(
                        RecordPath(
                            path_id=result.path_id,
                            similarity_id=similarity_id,
                            result_id=result.result_id,
                            sast_similarity_id=result.similarity_id,
                        )
                    )
        return output


def get_queries_from_report(report: CxXMLResults) -> list[Query]:
    """Return the queries of a report with one result per path of each triaged result."""
    output: list[Query] = []
    for report_query in report.queries:
        query = Query(
            query_id=report_query.id,
            name=report_query.name,
            language=report_query.language,
            group=report_query.group,
        )
        for report_result in report_query.results:
            # only triaged results get metadata records
            if not report_result.remark:
                continue
            for path in report_result.paths:
                if not path.path_nodes:
                    raise ValueError(f"path {path.path_id} of result {path.result_id} has no nodes")
                first, last = path.path_nodes[0], path.path_nodes[-1]
                query.results.append(
                    Result(
                        result_id=path.result_id,
                        path_id=path.path_id,
                        similarity_id=path.similarity_id,
                        first_node=Node(first.file_name, first.name, first.line, first.column),
                        last_node=Node(last.file_name, last.name, last.line, last.column),
                    )
                )
        if query.results:
            output.append(query)
    return output