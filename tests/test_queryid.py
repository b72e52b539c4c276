import pytest

from sastexport.queryid import get_ast_query_id


@pytest.mark.parametrize(
    ("language", "group", "name", "expected"),
    [
        ("Kotlin", "Kotlin_High_Risk", "Code_Injection", "15158446363146771540"),
        ("CSharp", "General", "Find_SQL_Injection_Evasion_Attack", "8984835614866342550"),
        ("Go", "General", "Find_Command_Injection_Sanitize", "9498204717545098527"),
    ],
)
def test_get_ast_query_id(language, group, name, expected):
    assert get_ast_query_id(language, name, group) == expected


def test_get_ast_query_id_is_deterministic_and_order_sensitive():
    first = get_ast_query_id("Go", "Name", "Group")
    assert first == get_ast_query_id("Go", "Name", "Group")
    assert first != get_ast_query_id("Go", "Group", "Name")
    assert int(first) < 2**64