"""Shared Rich Console for CLI output.

The playback core never prints; only the CLI layer writes to the console.
"""

from rich.console import Console

_console: Console | None = None

# Rich styles keyed by playback status value
STATUS_STYLES = {
    "stopped": "dim",
    "loading": "yellow",
    "playing": "bold green",
    "paused": "cyan",
}


def get_console() -> Console:
    """Get or create the process-wide Rich Console."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def print_event(stream: str, value: object, style: str | None = None) -> None:
    """Print one observed stream value as ``stream → value``.

    Args:
        stream: Stream name (e.g. "status", "track")
        value: Emitted value; rendered with str()
        style: Optional Rich style; status values pick one from STATUS_STYLES
    """
    rendered = str(value)
    if style is None and stream == "status":
        style = STATUS_STYLES.get(getattr(value, "value", rendered).lower())
    label = f"[bold]{stream:<8}[/bold] → "
    if style:
        get_console().print(f"{label}[{style}]{rendered}[/{style}]")
    else:
        get_console().print(f"{label}{rendered}")
