"""Scan report (CxXMLResults) model and parser."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

_ROOT_TAG = "CxXMLResults"


@dataclass
class PathNode:
    file_name: str = ""
    line: str = ""
    column: str = ""
    node_id: str = ""
    name: str = ""
    type: str = ""
    length: str = ""
    snippet_line_number: str = ""
    snippet_code: str = ""


@dataclass
class ReportPath:
    result_id: str = ""
    path_id: str = ""
    similarity_id: str = ""
    new_similarity_id: str = ""
    path_nodes: list[PathNode] = field(default_factory=list)


@dataclass
class ReportResult:
    node_id: str = ""
    file_name: str = ""
    status: str = ""
    line: str = ""
    column: str = ""
    false_positive: str = ""
    severity: str = ""
    assign_to_user: str = ""
    state: str = ""
    remark: str = ""
    deep_link: str = ""
    severity_index: str = ""
    detection_date: str = ""
    paths: list[ReportPath] = field(default_factory=list)


@dataclass
class ReportQuery:
    id: str = ""
    cwe_id: str = ""
    name: str = ""
    group: str = ""
    severity: str = ""
    language: str = ""
    language_hash: str = ""
    language_change_date: str = ""
    severity_index: str = ""
    query_path: str = ""
    query_version_code: str = ""
    results: list[ReportResult] = field(default_factory=list)


@dataclass
class CxXMLResults:
    initiator_name: str = ""
    owner: str = ""
    scan_id: str = ""
    project_id: str = ""
    project_name: str = ""
    team_full_path_on_report_date: str = ""
    deep_link: str = ""
    scan_start: str = ""
    preset: str = ""
    scan_time: str = ""
    lines_of_code_scanned: str = ""
    files_scanned: str = ""
    report_creation_time: str = ""
    team: str = ""
    checkmarx_version: str = ""
    scan_comments: str = ""
    scan_type: str = ""
    source_origin: str = ""
    visibility: str = ""
    queries: list[ReportQuery] = field(default_factory=list)


def _text(element: ET.Element, tag: str) -> str:
    return element.findtext(tag, default="") or ""


def _parse_path_node(element: ET.Element) -> PathNode:
    snippet_line = element.find("Snippet/Line")
    return PathNode(
        file_name=_text(element, "FileName"),
        line=_text(element, "Line"),
        column=_text(element, "Column"),
        node_id=_text(element, "NodeId"),
        name=_text(element, "Name"),
        type=_text(element, "Type"),
        length=_text(element, "Length"),
        snippet_line_number="" if snippet_line is None else _text(snippet_line, "Number"),
        snippet_code="" if snippet_line is None else _text(snippet_line, "Code"),
    )


def _parse_path(element: ET.Element) -> ReportPath:
    attrs = element.attrib
    return ReportPath(
        result_id=attrs.get("ResultId", ""),
        path_id=attrs.get("PathId", ""),
        similarity_id=attrs.get("SimilarityId", ""),
        new_similarity_id=attrs.get("NewSimilarityId", ""),
        path_nodes=[_parse_path_node(node) for node in element.findall("PathNode")],
    )


def _parse_result(element: ET.Element) -> ReportResult:
    attrs = element.attrib
    return ReportResult(
        node_id=attrs.get("NodeId", ""),
        file_name=attrs.get("FileName", ""),
        status=attrs.get("Status", ""),
        line=attrs.get("Line", ""),
        column=attrs.get("Column", ""),
        false_positive=attrs.get("FalsePositive", ""),
        severity=attrs.get("Severity", ""),
        assign_to_user=attrs.get("AssignToUser", ""),
        state=attrs.get("state", ""),
        remark=attrs.get("Remark", ""),
        deep_link=attrs.get("DeepLink", ""),
        severity_index=attrs.get("SeverityIndex", ""),
        detection_date=attrs.get("DetectionDate", ""),
        paths=[_parse_path(path) for path in element.findall("Path")],
    )


def _parse_query(element: ET.Element) -> ReportQuery:
    attrs = element.attrib
    return ReportQuery(
        id=attrs.get("id", ""),
        cwe_id=attrs.get("cweId", ""),
        name=attrs.get("name", ""),
        group=attrs.get("group", ""),
        severity=attrs.get("Severity", ""),
        language=attrs.get("Language", ""),
        language_hash=attrs.get("LanguageHash", ""),
        language_change_date=attrs.get("LanguageChangeDate", ""),
        severity_index=attrs.get("SeverityIndex", ""),
        query_path=attrs.get("QueryPath", ""),
        query_version_code=attrs.get("QueryVersionCode", ""),
        results=[_parse_result(result) for result in element.findall("Result")],
    )


def parse_report(data: bytes | str) -> CxXMLResults:
    """Parse a scan report; missing attributes and elements become empty strings."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as err:
        raise ValueError(f"invalid scan report: {err}") from err
    if root.tag != _ROOT_TAG:
        raise ValueError(f"expected element type <{_ROOT_TAG}> but have <{root.tag}>")
    attrs = root.attrib
    return CxXMLResults(
        initiator_name=attrs.get("InitiatorName", ""),
        owner=attrs.get("Owner", ""),
        scan_id=attrs.get("ScanId", ""),
        project_id=attrs.get("ProjectId", ""),
        project_name=attrs.get("ProjectName", ""),
        team_full_path_on_report_date=attrs.get("TeamFullPathOnReportDate", ""),
        deep_link=attrs.get("DeepLink", ""),
        scan_start=attrs.get("ScanStart", ""),
        preset=attrs.get("Preset", ""),
        scan_time=attrs.get("ScanTime", ""),
        lines_of_code_scanned=attrs.get("LinesOfCodeScanned", ""),
        files_scanned=attrs.get("FilesScanned", ""),
        report_creation_time=attrs.get("ReportCreationTime", ""),
        team=attrs.get("Team", ""),
        checkmarx_version=attrs.get("CheckmarxVersion", ""),
        scan_comments=attrs.get("ScanComments", ""),
        scan_type=attrs.get("ScanType", ""),
        source_origin=attrs.get("SourceOrigin", ""),
        visibility=attrs.get("Visibility", ""),
        queries=[_parse_query(query) for query in root.findall("Query")],
    )