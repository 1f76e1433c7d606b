"""JSON output formatter for license conclusions."""
import json
from datetime import datetime, timezone
from typing import Any

from license_hound import __version__
from license_hound.constants import LEGAL_DISCLAIMER
from license_hound.models.scan import ScanResult


class ConclusionJsonFormatter:
    """Format conclusions as JSON output.

    Conclusions keep the order of the input dependencies so reports can
    be diffed between runs.
    """

    def format_scan_result(self, result: ScanResult) -> str:
        """Format scan result as JSON string.

        Args:
            result: The scan result to format.

        Returns:
            JSON string representation of the scan result.
        """
        output = self._build_output(result)
        return json.dumps(output, indent=2)

    def _build_output(self, result: ScanResult) -> dict[str, Any]:
        """Build the output dictionary structure."""
        return {
            "scan_metadata": self._build_scan_metadata(),
            "summary": self._build_summary(result),
            "conclusions": [c.to_record() for c in result.conclusions],
        }

    def _build_scan_metadata(self) -> dict[str, Any]:
        """Build scan metadata section, including the legal disclaimer."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return {
            "generated_at": timestamp,
            "tool_version": __version__,
            "disclaimer": LEGAL_DISCLAIMER,
            "disclaimer_type": "informational",
        }

    def _build_summary(self, result: ScanResult) -> dict[str, Any]:
        """Build summary section.

        Args:
            result: The scan result.

        Returns:
            Dictionary with totals, per-license counts and overall status.
        """
        return {
            "total_dependencies": result.total_dependencies,
            "resolved": result.total_dependencies - result.unresolved,
            "unresolved": result.unresolved,
            "licenses": result.license_counts(),
            "unresolved_dependencies": [
                f"{c.name}@{c.version}" for c in result.conclusions if not c.is_resolved
            ],
            "overall_status": "UNRESOLVED" if result.has_issues else "PASS",
        }
