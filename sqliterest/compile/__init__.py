"""sqliterest compilation layer: request snapshot -> parameterized SQL."""
from sqliterest.compile.base import CompiledQuery
from sqliterest.compile.builder import StatementCompiler
from sqliterest.compile.content_range import format_content_range

__all__ = [
    "CompiledQuery",
    "StatementCompiler",
    "format_content_range",
]
