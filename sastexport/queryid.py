"""Query identifiers used by the AST side of the export."""

_FNV64_OFFSET_BASIS = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _fnv1_64(data: bytes) -> int:
    """Return the 64-bit FNV-1 hash of ``data``."""
    value = _FNV64_OFFSET_BASIS
    for byte in data:
        value = (value * _FNV64_PRIME) & _MASK64
        value ^= byte
    return value


def get_ast_query_id(language: str, name: str, group: str) -> str:
    """Return the AST query id for a query, as a decimal string."""
    source_path = f"queries/{language}/{group}/{name}/{name}.cs"
    return str(_fnv1_64(source_path.encode("utf-8")))