from __future__ import annotations

from planguard.analysis.classification import EXIT_DRIFT, EXIT_OFF_PLAN
from planguard.analysis.phase_slice import phase_numbers
from planguard.runtime.path_policy import posix_relative
from planguard.tooling.plan_guard import GuardOutcome

REPORT_TITLE = "=== PLAN GUARD REPORT ==="


def _section(title: str, entries: tuple[str, ...], marker: str) -> list[str]:
    lines = [f"-- {title} --"]
    if not entries:
        lines.append("  none")
    else:
        lines.extend(f"  {marker} {entry}" for entry in entries)
    lines.append("")
    return lines


def result_line(exit_code: int) -> str:
    if exit_code == EXIT_OFF_PLAN:
        return "Result: OFF-PLAN (missing required paths)"
    if exit_code == EXIT_DRIFT:
        return "Result: ON-PLAN but drift detected (extra files present)"
    return "Result: ON-PLAN (no missing, no drift)"


def render_report(outcome: GuardOutcome) -> list[str]:
    """Render the human-readable findings of one run, one line per entry."""
    root = outcome.repo_root
    lines = [
        REPORT_TITLE,
        "",
        f"Repo: {root}",
        f"Plan: {outcome.manifest.plan}",
        f"Plan hash: {outcome.plan.sha256}",
        f"Enforcement mode: {outcome.enforcement.mode}",
    ]
    if outcome.enforcement.phase is not None:
        lines.append(f"Phase filter: {outcome.enforcement.phase}")
    phases = phase_numbers(outcome.plan.text)
    if phases:
        lines.append("Phases in plan: " + ", ".join(str(phase) for phase in phases))
    lines.extend(
        [
            f"Watched roots: {', '.join(outcome.snapshot.watched_roots)}",
            f"Allowlist paths detected (full plan): {len(outcome.allowlist)}",
            f"Required paths enforced (missing check): {len(outcome.required)}",
            f"Manifest saved: {posix_relative(outcome.manifest_paths.manifest, root=root)}",
        ]
    )
    if outcome.manifest_paths.snapshot is not None:
        lines.append(
            f"Snapshot saved: {posix_relative(outcome.manifest_paths.snapshot, root=root)}"
        )
    lines.append("")

    if outcome.created is not None:
        lines.append("-- Created (enforced set only) --")
        lines.append(f"Dirs: {len(outcome.created.dirs)}")
        lines.extend(f"  + {entry}" for entry in outcome.created.dirs)
        lines.append(f"Files: {len(outcome.created.files)}")
        lines.extend(f"  + {entry}" for entry in outcome.created.files)
        lines.append("")

    lines.extend(_section("Missing required paths (OFF-PLAN)", outcome.result.missing, "MISSING"))
    lines.extend(_section("Extra files under watched roots (DRIFT)", outcome.result.extra, "EXTRA"))
    lines.append(result_line(outcome.exit_code))
    return lines
