"""Process entrypoint: runs the CLI and maps every outcome to an ``ExitCode``."""

from __future__ import annotations

import sys
import traceback
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


class ExitCode(IntEnum):
    SUCCESS = 0
    LINT_REJECTED = 1
    INPUT_ERROR = 2
    INTERNAL_ERROR = 4


# Every domain error (asset, config, logic parse) subclasses ValueError.
_INPUT_ERRORS: tuple[type[BaseException], ...] = (
    ValueError,
    FileNotFoundError,
    IsADirectoryError,
    NotADirectoryError,
    PermissionError,
)


def cli_entrypoint(argv: Sequence[str] | None = None) -> int:
    """Run the CLI; used by ``python -m cheevo_lint`` and the console script."""

    try:
        from cheevo_lint.ui.cli import run_cli

        return _as_exit_code(run_cli(argv))
    except SystemExit as exc:
        return _as_exit_code(exc.code)
    except KeyboardInterrupt:
        _write_stderr("interrupted")
        return ExitCode.INTERNAL_ERROR
    except Exception as exc:  # noqa: BLE001 - last stop before the process exits.
        if _is_input_error(exc):
            _write_stderr(f"error: {str(exc).strip() or type(exc).__name__}")
            return ExitCode.INPUT_ERROR
        traceback.print_exception(exc, file=sys.stderr)
        return ExitCode.INTERNAL_ERROR


def _as_exit_code(raw: object) -> int:
    if raw is None:
        return ExitCode.SUCCESS
    if isinstance(raw, int):
        try:
            return ExitCode(raw)
        except ValueError:
            return ExitCode.INTERNAL_ERROR
    # ``sys.exit("message")`` carries its reason as text.
    _write_stderr(str(raw))
    return ExitCode.INTERNAL_ERROR


def _is_input_error(exc: BaseException) -> bool:
    return any(isinstance(item, _INPUT_ERRORS) for item in _causes(exc))


def _causes(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or (
            None if current.__suppress_context__ else current.__context__
        )


def _write_stderr(message: str) -> None:
    print(message.rstrip("\n"), file=sys.stderr)


__all__ = ["ExitCode", "cli_entrypoint"]
