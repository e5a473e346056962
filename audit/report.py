"""Final audit report: tiering, statistics and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from audit.models import ErrorCategory, ReportTier, StoreSnapshot


WIDE_RULE = "=" * 60
BANNER_RULE = "=" * 50
SECTION_RULE = "-" * 40

DEFAULT_TITLE = "EXECUTOR ENVIRONMENT CHECK"
DEFAULT_SUBTITLE = "Testing executor capabilities with extreme thoroughness"


@dataclass(frozen=True)
class TierEntry:
    """One probe placed in a report tier."""

    name: str
    issue: str = ""
    category: ErrorCategory | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name}
        if self.issue:
            payload["issue"] = self.issue
        if self.category is not None:
            payload["category"] = self.category.value
        return payload


@dataclass(frozen=True)
class Report:
    """Tiered view over a completed run."""

    available: tuple[TierEntry, ...]
    problematic: tuple[TierEntry, ...]
    unusable: tuple[TierEntry, ...]
    untested: tuple[TierEntry, ...]
    successes: tuple[tuple[str, str], ...]
    passes: int
    fails: int
    max_successes_shown: int = 10
    lines: tuple[str, ...] = field(default=(), repr=False)

    @property
    def total(self) -> int:
        return self.passes + self.fails

    @property
    def pass_rate(self) -> int:
        return pass_rate(self.passes, self.fails)

    def tier_of(self, name: str) -> ReportTier | None:
        for tier, entries in self.tiers().items():
            if any(entry.name == name for entry in entries):
                return tier
        return None

    def tiers(self) -> dict[ReportTier, tuple[TierEntry, ...]]:
        return {
            ReportTier.AVAILABLE: self.available,
            ReportTier.PROBLEMATIC: self.problematic,
            ReportTier.UNUSABLE: self.unusable,
            ReportTier.UNTESTED: self.untested,
        }

    def render(self) -> str:
        return "\n".join(self.lines)

    def as_dict(self) -> dict[str, Any]:
        return {
            "passes": self.passes,
            "fails": self.fails,
            "untested": len(self.untested),
            "pass_rate": self.pass_rate,
            "verdict": verdict(self.pass_rate),
            "tiers": {
                tier.value: [entry.as_dict() for entry in entries]
                for tier, entries in self.tiers().items()
            },
        }


def pass_rate(passes: int, fails: int) -> int:
    """Return the floored pass percentage, or 0 when nothing ran."""

    total = passes + fails
    if total <= 0:
        return 0
    return (passes * 100) // total


def verdict(rate: int) -> str:
    if rate == 100:
        return "🎉 Excellent! Your executor environment is fully functional!"
    if rate >= 80:
        return "👍 Good! Most functions are working correctly."
    if rate >= 50:
        return "⚠️  Fair! Some functions may not work as expected."
    return "❌ Poor! Many functions are not working. Consider using a different executor."


def render_header(title: str = DEFAULT_TITLE, subtitle: str = DEFAULT_SUBTITLE) -> list[str]:
    """Lines printed before any probe settles."""

    return ["", f"🚀 {title}", subtitle, "-" * 50]


class ReportBuilder:
    """Build a deterministic report from a store snapshot."""

    def __init__(self, max_successes_shown: int = 10) -> None:
        self.max_successes_shown = max(0, int(max_successes_shown))

    def build(self, snapshot: StoreSnapshot) -> Report:
        available: list[TierEntry] = []
        problematic: list[TierEntry] = []
        unusable: list[TierEntry] = []
        untested: list[TierEntry] = []

        for outcome in snapshot.successes:
            detail = snapshot.details.get(outcome.name)
            if detail is not None and detail.category is ErrorCategory.MISSING_ALIASES:
                problematic.append(TierEntry(outcome.name, detail.error, detail.category))
            else:
                available.append(TierEntry(outcome.name))

        for outcome in snapshot.failures:
            if outcome.category is ErrorCategory.MISSING_FUNCTION:
                unusable.append(TierEntry(outcome.name, outcome.error, outcome.category))
            else:
                problematic.append(
                    TierEntry(outcome.name, outcome.error or "Unknown error", outcome.category)
                )

        for outcome in snapshot.missing:
            untested.append(TierEntry(outcome.name))

        successes = sorted((o.name, o.message) for o in snapshot.successes)
        report = Report(
            available=_sorted(available),
            problematic=_sorted(problematic),
            unusable=_sorted(unusable),
            untested=_sorted(untested),
            successes=tuple(successes),
            passes=snapshot.passes,
            fails=snapshot.fails,
            max_successes_shown=self.max_successes_shown,
        )
        lines = [*_summary_lines(report), *_detail_lines(report), *_closing_lines(report)]
        return replace(report, lines=tuple(lines))


def _sorted(entries: list[TierEntry]) -> tuple[TierEntry, ...]:
    return tuple(sorted(entries, key=lambda entry: entry.name))


def _summary_lines(report: Report) -> list[str]:
    rate = report.pass_rate
    total = report.total
    lines = [
        "",
        BANNER_RULE,
        "TEST COMPLETED",
        BANNER_RULE,
        "",
        "📋 Quick Summary:",
        f"✅ Passed:  {report.passes}/{total} ({rate:.1f}%)",
        f"❌ Failed:  {report.fails}/{total} ({100 - rate:.1f}%)",
        f"⏺️  Untested: {len(report.untested)}",
    ]
    if report.successes and report.max_successes_shown > 0:
        lines.extend(["", "✨ SUCCESSFUL FUNCTIONS:"])
        shown = report.successes[: report.max_successes_shown]
        for index, (name, message) in enumerate(shown, start=1):
            suffix = f" • {message}" if message else ""
            lines.append(f"  {index:2d}. {name}{suffix}")
        hidden = len(report.successes) - len(shown)
        if hidden > 0:
            lines.append(f"  ... and {hidden} more")
    return lines


def _detail_lines(report: Report) -> list[str]:
    lines = ["", WIDE_RULE, "DETAILED TEST ANALYSIS", WIDE_RULE]

    lines.extend(["", f"✅ FULLY AVAILABLE ({len(report.available)})"])
    lines.extend(f"   ✅ {entry.name}" for entry in report.available)
    if not report.available:
        lines.append("   None")

    lines.extend(["", f"⚠️  PARTIALLY FUNCTIONAL ({len(report.problematic)})"])
    for entry in report.problematic:
        category = entry.category.value if entry.category is not None else "Unknown"
        lines.append(f"   ⚠️  {entry.name} — [{category}] {entry.issue}")
    if not report.problematic:
        lines.append("   None")

    lines.extend(["", f"❌ UNUSABLE ({len(report.unusable)})"])
    lines.extend(f"   ❌ {entry.name}" for entry in report.unusable)
    if not report.unusable:
        lines.append("   None")

    if report.untested:
        lines.extend(["", f"⏺️  UNTESTED ({len(report.untested)})"])
        lines.extend(f"   ⏺️ {entry.name}" for entry in report.untested)

    lines.extend(
        [
            "",
            "📊 SUMMARY STATISTICS",
            SECTION_RULE,
            f"✅ Fully Available: {len(report.available)}",
            f"⚠️  Partially Functional: {len(report.problematic)}",
            f"❌ Unusable: {len(report.unusable)}",
        ]
    )
    if report.untested:
        lines.append(f"⏺️  Untested: {len(report.untested)}")

    lines.extend(["", "💡 RECOMMENDATIONS", SECTION_RULE])
    if report.unusable:
        lines.append(
            f"• {len(report.unusable)} functions are completely missing. "
            "Check if your executor supports them."
        )
    if report.problematic:
        lines.append(
            f"• {len(report.problematic)} functions have issues "
            "(missing aliases or test failures). Review the details above."
        )
    if not (report.available or report.problematic or report.unusable):
        lines.append("• No test results? Make sure the script runs correctly.")
    return lines


def _closing_lines(report: Report) -> list[str]:
    return ["", WIDE_RULE, "END OF REPORT", WIDE_RULE, "", verdict(report.pass_rate)]
