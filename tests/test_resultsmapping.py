from sastexport.metadata import Record, RecordPath, RecordQuery, RecordResult
from sastexport.resultsmapping import _sanitize, generate_csv, write_all_to_sanitized_csv

HEADERS = ["result_id", "cxone_similarity_id", "sast_similarity_id"]
SIMILARITY_ID1 = "-1234567890"
SIMILARITY_ID2 = "-1234567891"


def record1():
    return Record(queries=[
        RecordQuery(query_id="6300", results=[
            RecordResult(result_id="1000002", paths=[
                RecordPath(path_id="2", similarity_id=SIMILARITY_ID1, sast_similarity_id=SIMILARITY_ID1),
                RecordPath(path_id="3", similarity_id=SIMILARITY_ID2, sast_similarity_id=SIMILARITY_ID2),
            ]),
        ]),
    ])


def record2():
    return Record(queries=[
        RecordQuery(query_id="6300", results=[
            RecordResult(result_id="1000002", paths=[
                RecordPath(path_id="2", similarity_id=SIMILARITY_ID1, sast_similarity_id=SIMILARITY_ID1),
            ]),
        ]),
    ])


def test_generate_csv_first_record():
    assert generate_csv([record1()]) == [
        HEADERS,
        ["", "-1234567890", "-1234567890"],
        ["", "-1234567891", "-1234567891"],
    ]


def test_generate_csv_second_record():
    assert generate_csv([record2()]) == [HEADERS, ["", "-1234567890", "-1234567890"]]


def test_generate_csv_all_records():
    assert generate_csv([record1(), record2()]) == [
        HEADERS,
        ["", "-1234567890", "-1234567890"],
        ["", "-1234567891", "-1234567891"],
        ["", "-1234567890", "-1234567890"],
    ]


def test_generate_csv_empty_returns_headers():
    assert generate_csv([]) == [HEADERS]


def test_generate_csv_none_returns_headers():
    assert generate_csv(None) == [HEADERS]


def test_write_all_to_sanitized_csv():
    items = [
        ["result_id", "path_id", "cxone_similarity_id", "sast_similarity_id"],
        ["", "2", "-1234567890", "-1234567890"],
        ["", "3", "-1234567891", "-1234567891"],
    ]
    expected = (
        b"\"'result_id\",\"'path_id\",\"'cxone_similarity_id\",\"'sast_similarity_id\"\n"
        b"\"'\",\"'2\",\"'-1234567890\",\"'-1234567890\"\n"
        b"\"'\",\"'3\",\"'-1234567891\",\"'-1234567891\"\n"
    )
    assert write_all_to_sanitized_csv(items) == expected


def test_write_all_to_sanitized_csv_empty():
    assert write_all_to_sanitized_csv([]) == b""


def test_sanitize_with_single_quote():
    assert _sanitize("=1+2'\" ;,=1+2") == "\"'=1+2'\"\" ;,=1+2\""


def test_sanitize_without_single_quote():
    assert _sanitize('=1+2";=1+2') == "\"'=1+2\"\";=1+2\""