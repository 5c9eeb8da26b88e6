import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Protocol, Sequence, Tuple, Union

from canvaslog.types import ParseError
from replay import ReplayOutcome
from violations import Violation


logger = logging.getLogger(__name__)


class CheckStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    SKIPPED = "SKIPPED"


Detail = Union[Violation, ParseError]


# ---------- Output Model ----------

@dataclass(frozen=True)
class CheckResult:
    name: str
    status: CheckStatus
    details: Tuple[Detail, ...] = ()

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "details": [d.to_dict() for d in self.details],
        }


@dataclass(frozen=True)
class Report:
    passed: bool
    checks: Dict[str, CheckResult]
    stats: Dict[str, int]

    def failed_checks(self) -> List[str]:
        return [
            name for name, result in self.checks.items()
            if result.status == CheckStatus.FAIL
        ]

    def to_dict(self) -> dict:
        return {
            "passed": self.passed,
            "stats": dict(self.stats),
            "checks": {
                name: result.to_dict() for name, result in self.checks.items()
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


# ---------- Check Interface ----------

class Check(Protocol):
    name: str

    def check(self, outcome: ReplayOutcome) -> List[Violation]:
        ...


# ---------- Aggregator ----------

class ReportBuilder:
    """
    Runs every check over the same replayed state and folds the verdicts.

    No check can suppress another: all of them run, in the order given,
    even after a failure. Checks named in `skipped` are not run and are
    listed as SKIPPED.
    """

    def __init__(self, checks: Sequence[Check], skipped: Sequence[str] = ()):
        self.checks = list(checks)
        self.skipped = list(skipped)

    def build(self, outcome: ReplayOutcome) -> Report:
        results: Dict[str, CheckResult] = {}

        results["parse"] = self._result("parse", outcome.parse_errors)

        for check in self.checks:
            if check.name in self.skipped:
                results[check.name] = CheckResult(
                    name=check.name, status=CheckStatus.SKIPPED
                )
                continue
            results[check.name] = self._result(check.name, check.check(outcome))

        passed = all(r.status != CheckStatus.FAIL for r in results.values())

        return Report(
            passed=passed,
            checks=results,
            stats={
                "events": outcome.event_count,
                "parse_errors": len(outcome.parse_errors),
                "artists": len(outcome.registry),
                "cells": len(outcome.canvas),
            },
        )

    def _result(self, name: str, details: Sequence[Detail]) -> CheckResult:
        status = CheckStatus.FAIL if details else CheckStatus.PASS
        logger.info("check %s: %s (%d findings)", name, status.value, len(details))
        return CheckResult(name=name, status=status, details=tuple(details))


# ---------- Rendering ----------

def render_text(report: Report, max_details: int = 20) -> str:
    lines = []

    s = report.stats
    lines.append(
        f"Analyzed {s['events']} events: {s['artists']} artists, "
        f"{s['cells']} cells painted, {s['parse_errors']} unparsable lines"
    )
    lines.append("")

    for name, result in report.checks.items():
        lines.append(f"[{result.status.value:<7}] {name}")

        for detail in result.details[:max_details]:
            lines.append(f"    - {detail.describe()}")

        hidden = len(result.details) - max_details
        if hidden > 0:
            lines.append(f"    ... and {hidden} more")

    lines.append("")
    lines.append("RESULT: " + ("PASSED" if report.passed else "FAILED"))
    return "\n".join(lines)
