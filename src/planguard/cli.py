from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Mapping, Optional

import typer

from planguard.config import as_bool, as_optional_text, guard_defaults, merge_payload
from planguard.exceptions import PlanGuardError
from planguard.tooling.enforcement import resolve_enforcement
from planguard.tooling.plan_guard import GuardOutcome, GuardRequest, run_plan_guard
from planguard.tooling.report import render_report

EXIT_FATAL = 1
_ENFORCEMENT_KEYS = frozenset({"phase", "all"})

app = typer.Typer(add_completion=False)
Runner = Callable[[GuardRequest], GuardOutcome]


def _context_run_plan_guard(ctx: typer.Context) -> Runner:
    obj = ctx.obj
    if isinstance(obj, Mapping):
        candidate = obj.get("run_plan_guard")
        if callable(candidate):
            return candidate
    return run_plan_guard


def _fatal(message: str) -> None:
    typer.secho(f"plan-guard: {message}", err=True, fg=typer.colors.RED)


def build_guard_request(
    *,
    repo: Path,
    plan: Optional[Path],
    phase: Optional[str],
    all_phases: bool,
    create: bool,
    snapshot: Optional[str],
    config: Optional[Path],
) -> GuardRequest:
    """Merge command-line values over ``planguard.toml`` defaults.

    ``phase`` and ``all`` form one enforcement choice: when either is given on
    the command line, neither is taken from the config file.
    """
    defaults = guard_defaults(root=repo, config_path=config)
    if phase is not None or all_phases:
        defaults = {
            key: value for key, value in defaults.items() if key not in _ENFORCEMENT_KEYS
        }
    merged = merge_payload(
        {
            "plan": str(plan) if plan is not None else None,
            "phase": phase,
            "all": True if all_phases else None,
        },
        defaults,
    )
    plan_text = as_optional_text(merged.get("plan"))
    enforcement = resolve_enforcement(
        all_phases=as_bool(merged.get("all")),
        phase_raw=as_optional_text(merged.get("phase")),
    )
    return GuardRequest(
        repo_root=repo,
        plan=Path(plan_text) if plan_text is not None else None,
        enforcement=enforcement,
        create=create,
        snapshot=snapshot,
    )


@app.command()
def check(
    ctx: typer.Context,
    report: bool = typer.Option(
        False,
        "--report",
        help="Print the report (default when neither --create nor --snapshot is given).",
    ),
    create: bool = typer.Option(
        False,
        "--create",
        help="Create missing dirs and empty placeholder files for the enforced set.",
    ),
    snapshot: Optional[str] = typer.Option(
        None,
        "--snapshot",
        help="Also save the manifest as .plan_guard/manifest.<name>.json.",
    ),
    phase: Optional[str] = typer.Option(
        None,
        "--phase",
        envvar="PLAN_GUARD_PHASE",
        help='Enforce only paths referenced under "# PHASE <n>" (missing check).',
    ),
    all_phases: bool = typer.Option(
        False,
        "--all",
        help="Enforce all plan paths (missing check); overrides --phase.",
    ),
    plan: Optional[Path] = typer.Option(
        None,
        "--plan",
        envvar="PLAN_GUARD_PLAN",
        help="Plan path, relative to --repo (default: master_build.md).",
    ),
    repo: Path = typer.Option(Path("."), "--repo", help="Repository root."),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Config file (default: <repo>/planguard.toml).",
    ),
) -> None:
    """Check the repository tree against the plan of record."""
    run_fn = _context_run_plan_guard(ctx)
    try:
        request = build_guard_request(
            repo=repo,
            plan=plan,
            phase=phase,
            all_phases=all_phases,
            create=create,
            snapshot=snapshot,
            config=config,
        )
        outcome = run_fn(request)
    except PlanGuardError as exc:
        _fatal(str(exc))
        raise typer.Exit(code=EXIT_FATAL) from exc
    except OSError as exc:
        _fatal(f"filesystem error: {exc}")
        raise typer.Exit(code=EXIT_FATAL) from exc

    if report or (not create and snapshot is None):
        for line in render_report(outcome):
            typer.echo(line)
    raise typer.Exit(code=outcome.exit_code)


def main(argv: List[str] | None = None) -> int:
    """Console entry point; usage errors map to the fatal exit code."""
    try:
        result = app(args=argv, prog_name="plan-guard", standalone_mode=False)
    except typer.TyperException as exc:
        _fatal(exc.format_message())
        return EXIT_FATAL
    except typer.Abort:
        _fatal("aborted")
        return EXIT_FATAL
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
