"""
Reporting and output formatting for validation results.
"""

import json
from typing import Any, Dict, List

from jsoncheck.jsoncheck_error import JSONCheckValidationError
from jsoncheck.jsoncheck_validator import JSONCheckResult


class JSONCheckReporter:
    """Formats and outputs validation results."""

    def format_error(self, error: JSONCheckValidationError) -> str:
        """Format one violation as: message : near KIND (line,column)."""
        token = error.token
        return f"{error.message} : near {token.kind.name} ({token.line},{token.column})"

    def format_text(self, results: List[JSONCheckResult]) -> str:
        """Format results as human-readable text."""
        lines = []

        for result in results:
            name = result.source_name or "<document>"
            if result.accepted:
                lines.append(f"✓ {name} - valid")
                continue

            lines.append(f"✗ {name} - {result.error_count} error(s)")
            for error in result.errors:
                lines.append(f"  └─ {self.format_error(error)}")

        invalid = [r for r in results if not r.accepted]
        total_errors = sum(r.error_count for r in results)

        lines.append("")
        lines.append("Summary:")
        lines.append(f"  Documents checked: {len(results)}")
        lines.append(f"  Invalid documents: {len(invalid)}")
        lines.append(f"  Total errors: {total_errors}")

        if invalid:
            lines.append(f"  Status: ✗ FAILED - {len(invalid)} invalid document(s)")

        else:
            lines.append("  Status: ✓ PASSED - All documents are valid")

        return "\n".join(lines)

    def _error_to_dict(self, error: JSONCheckValidationError) -> Dict[str, Any]:
        return {
            "kind": error.kind.name,
            "message": error.message,
            "line": error.token.line,
            "column": error.token.column,
            "token": error.token.kind.name,
            "literal": error.token.literal
        }

    def format_json(self, results: List[JSONCheckResult]) -> str:
        """Format results as JSON."""
        results_data = []

        for result in results:
            results_data.append({
                "source": result.source_name,
                "valid": result.accepted,
                "errors": [self._error_to_dict(e) for e in result.errors]
            })

        data = {
            "summary": {
                "documents_checked": len(results),
                "invalid_documents": len([r for r in results if not r.accepted]),
                "error_count": sum(r.error_count for r in results),
                "all_valid": all(r.accepted for r in results)
            },
            "results": results_data
        }

        return json.dumps(data, indent=2)

    def format_results(self, results: List[JSONCheckResult], format_type: str = "text") -> str:
        if format_type == "json":
            return self.format_json(results)

        return self.format_text(results)

    def print_results(self, results: List[JSONCheckResult], format_type: str = "text") -> None:
        """Print results to stdout in the specified format."""
        print(self.format_results(results, format_type))

    def save_results(self, results: List[JSONCheckResult], output_path: str, format_type: str = "text") -> None:
        """Save results to a file."""
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.format_results(results, format_type))
            f.write("\n")

    def get_exit_code(self, results: List[JSONCheckResult]) -> int:
        """Get appropriate exit code for CI/CD integration."""
        return 0 if all(r.accepted for r in results) else 1
