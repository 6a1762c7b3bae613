from typing import ClassVar

from tinyfy.diagnostics.models import Diagnostic
from tinyfy.diagnostics.rules import ExtractionRule, ParseErrorRule, StructuredLocationRule
from tinyfy.logging.logger import Log

PARSE_ERROR = ParseErrorRule.name
STRUCTURED_LOCATION = StructuredLocationRule.name


class DiagnosticExtractor:
    """Selects extraction rules by grammar and returns the first match."""

    RULES: ClassVar[dict[str, tuple[ExtractionRule, ...]]] = {
        PARSE_ERROR: (ParseErrorRule(),),
        STRUCTURED_LOCATION: (StructuredLocationRule(),),
    }

    def __init__(self, rules: dict[str, tuple[ExtractionRule, ...]] | None = None) -> None:
        self._rules = rules if rules is not None else self.RULES

    def extract(self, raw_text: str, grammar: str) -> Diagnostic | None:
        """Extract a located diagnostic from raw tool output.

        Unknown grammars try every registered rule in registration order.

        Returns:
            The first Diagnostic found, or None when nothing matched.
        """
        if not raw_text:
            return None
        for rule in self._rules_for(grammar):
            diagnostic = rule.match(raw_text)
            if diagnostic is not None:
                Log.debug(
                    f"Rule '{rule.name}' located error at "
                    f"line {diagnostic.line}, column {diagnostic.column}"
                )
                return diagnostic
        return None

    def _rules_for(self, grammar: str) -> tuple[ExtractionRule, ...]:
        rules = self._rules.get(grammar)
        if rules is not None:
            return rules
        Log.warning(f"Unknown diagnostic grammar '{grammar}', trying all rules")
        return tuple(rule for group in self._rules.values() for rule in group)
