"""
CLI: ``lambdakit demo`` — walkthroughs of the memo cache and retry executor.
"""

from __future__ import annotations

import typer

from lambdakit.cli.utils import err_console, print_rows, print_summary
from lambdakit.core.cache import MemoCache
from lambdakit.core.errors import InvalidConfigError
from lambdakit.core.logging import LogContext
from lambdakit.core.result import Ok
from lambdakit.core.settings import get_settings
from lambdakit.execution.retry import RetryExecutor

app = typer.Typer(no_args_is_help=True)


@app.command("cache")
def demo_cache(
    key: str = typer.Option("user-42", "--key", "-k", help="Identifier to look up."),
    repeat: int = typer.Option(2, "--repeat", "-n", min=1, help="Number of lookups."),
    absent: bool = typer.Option(False, "--absent", help="Supplier returns no value."),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Look up one key repeatedly through a memoizing cache."""
    cache: MemoCache[str, str] = MemoCache(name="demo")
    supplier_calls = 0

    def fetch() -> str | None:
        nonlocal supplier_calls
        supplier_calls += 1
        return None if absent else key.capitalize()

    rows = []
    with LogContext(demo="cache"):
        for call in range(1, repeat + 1):
            result = cache.get_or_compute(key, fetch)
            if isinstance(result, Ok):
                shown = result.value
            else:
                shown = f"absent ({type(result.error).__name__})"
            rows.append({"call": call, "result": shown, "supplier_calls": supplier_calls})

    print_rows(rows, title=f"get_or_compute({key!r})", as_json=json_out)
    if not json_out:
        print_summary({"cached": key in cache, **cache.stats.to_dict()})


@app.command("retry")
def demo_retry(
    fail_times: int = typer.Option(2, "--fail-times", "-f", min=0, help="Failures before success."),
    max_attempts: int | None = typer.Option(None, "--max-attempts", "-m", help="Attempt ceiling."),
    delay: float | None = typer.Option(None, "--delay", "-d", help="Seconds between attempts."),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Run a flaky operation under the bounded retry executor."""
    settings = get_settings()
    try:
        executor = RetryExecutor(
            max_attempts=max_attempts if max_attempts is not None else settings.retry_max_attempts,
            delay=delay if delay is not None else settings.retry_delay_seconds,
        )
    except InvalidConfigError as e:
        err_console.print(f"[bold red]Error[/bold red] ({e.category.value}): {e.message}")
        raise typer.Exit(code=2) from e
    calls = 0

    def flaky_operation() -> str:
        nonlocal calls
        calls += 1
        if calls <= fail_times:
            raise ConnectionError(f"attempt {calls} failed")
        return f"succeeded on call {calls}"

    outcome: dict[str, object] = {"max_attempts": executor.max_attempts, "delay": executor.delay}
    with LogContext(demo="retry"):
        try:
            outcome["result"] = executor.run(flaky_operation)
        except ConnectionError as e:
            outcome.update(state=executor.state.value, calls=calls, error=str(e))
            print_summary(outcome, as_json=json_out)
            err_console.print(f"[bold red]Exhausted[/bold red] after {executor.attempts} attempts: {e}")
            raise typer.Exit(code=1) from e

    outcome.update(state=executor.state.value, calls=calls)
    print_summary(outcome, as_json=json_out)
