from tinyfy.diagnostics.extractor import DiagnosticExtractor
from tinyfy.diagnostics.models import Diagnostic
from tinyfy.diagnostics.rules import ExtractionRule, ParseErrorRule, StructuredLocationRule

__all__ = [
    "Diagnostic",
    "DiagnosticExtractor",
    "ExtractionRule",
    "ParseErrorRule",
    "StructuredLocationRule",
]
