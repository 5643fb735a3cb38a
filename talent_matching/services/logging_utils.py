import sys
from typing import Callable, Optional, TextIO


def print_with_prefix(
    prefix: str,
    message: Optional[str],
    enabled: bool = True,
    stream: Optional[TextIO] = None,
) -> None:
    if not enabled:
        return
    out = stream or sys.stdout
    text = "" if message is None else str(message)
    lines = text.splitlines() or [""]
    for line in lines:
        if line:
            print(f"{prefix} {line}", file=out)
        else:
            print(prefix, file=out)


def log_error(prefix: str, message: str, error: Optional[BaseException] = None) -> None:
    """Errori gestiti: sempre stampati su stderr, anche con verbose=False."""
    if error is not None:
        message = f"{message}: {type(error).__name__}: {error}"
    print_with_prefix(f"{prefix} ERRORE", message, enabled=True, stream=sys.stderr)


def log_section(
    log_fn: Callable[[str], None],
    title: str,
    width: int = 70,
    char: str = "=",
) -> None:
    line = char * width
    log_fn(line)
    log_fn(title)
    log_fn(line)
