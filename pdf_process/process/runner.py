"""Asynchronous child process runner.

Spawns a tool with an argument vector (never through a shell), writes the
optional stdin payload while draining stdout and stderr concurrently, and
enforces a deadline or cancel event. Whatever happens, the child is not
left running when ``run_process`` returns or raises.
"""

import asyncio
import contextlib
import logging
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from pdf_process.errors import (
    ExecutableNotFound,
    OutputReadError,
    ProcessCancelled,
    ProcessTimeout,
    StdinWriteError,
)

logger = logging.getLogger(__name__)

# Flags whose following argument must never reach the logs
_SECRET_FLAGS = frozenset({"-upw", "-opw"})


class ProcessOutcome(BaseModel):
    """Exit status and captured output of one finished process.

    Attributes:
        exit_code: Process return code.
        stdout: Everything the child wrote to stdout.
        stderr: Everything the child wrote to stderr.
        stdin_error: Description of a failed stdin write, if the child
            stopped reading its input early.
    """

    model_config = ConfigDict(frozen=True)

    exit_code: int
    stdout: bytes = Field(default=b"", repr=False)
    stderr: bytes = Field(default=b"", repr=False)
    stdin_error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


def redact_args(args: Sequence[str]) -> list[str]:
    """Mask password values in an argument vector for logging."""
    redacted: list[str] = []
    hide_next = False
    for arg in args:
        redacted.append("******" if hide_next else arg)
        hide_next = arg in _SECRET_FLAGS
    return redacted


async def _feed_stdin(
    stream: asyncio.StreamWriter | None, payload: bytes | None
) -> str | None:
    """Write the payload and close stdin; return a description if writing fails."""
    if stream is None:
        return None
    try:
        if payload:
            stream.write(payload)
            await stream.drain()
    except OSError as e:
        return f"{type(e).__name__}: {e}"
    finally:
        stream.close()
        with contextlib.suppress(OSError):
            await stream.wait_closed()
    return None


async def _drain(stream: asyncio.StreamReader | None) -> bytes:
    if stream is None:
        return b""
    return await stream.read()


async def _communicate(
    process: asyncio.subprocess.Process, executable: str, payload: bytes | None
) -> ProcessOutcome:
    """Feed stdin and drain both pipes concurrently, then reap the child."""
    try:
        stdin_error, stdout, stderr = await asyncio.gather(
            _feed_stdin(process.stdin, payload),
            _drain(process.stdout),
            _drain(process.stderr),
        )
    except OSError as e:
        raise OutputReadError(executable, f"failed to read process output: {e}") from e

    exit_code = await process.wait()
    return ProcessOutcome(
        exit_code=exit_code,
        stdout=stdout,
        stderr=stderr,
        stdin_error=stdin_error,
    )


async def _reap(
    process: asyncio.subprocess.Process, io_task: "asyncio.Task[ProcessOutcome]"
) -> None:
    """Wait for the I/O task to settle and the child to be reaped."""
    await asyncio.gather(io_task, return_exceptions=True)
    await process.wait()


async def _wait_for_outcome(
    io_task: "asyncio.Task[ProcessOutcome]",
    executable: str,
    timeout: float | None,
    cancel: asyncio.Event | None,
) -> ProcessOutcome:
    """Wait for the I/O task, racing it against the deadline and cancel event."""
    waiters: set[asyncio.Future] = {io_task}
    cancel_task: asyncio.Task | None = None
    if cancel is not None:
        if cancel.is_set():
            raise ProcessCancelled(executable)
        cancel_task = asyncio.ensure_future(cancel.wait())
        waiters.add(cancel_task)

    try:
        done, _ = await asyncio.wait(
            waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        if cancel_task is not None:
            cancel_task.cancel()

    # A cancel that lands in the same tick as completion still wins
    if cancel is not None and cancel.is_set():
        raise ProcessCancelled(executable)
    if io_task not in done:
        raise ProcessTimeout(executable, timeout)
    return io_task.result()


async def run_process(
    executable: str,
    args: Sequence[str],
    *,
    stdin: bytes | None = None,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> ProcessOutcome:
    """Run an executable to completion and capture its output.

    Args:
        executable: Program name (resolved via PATH) or explicit path.
        args: Argument vector, passed to the program as-is.
        stdin: Optional payload written to the child's stdin.
        timeout: Optional deadline in seconds.
        cancel: Optional event; setting it kills the child.

    Returns:
        ProcessOutcome with exit code and captured stdout/stderr.

    Raises:
        ExecutableNotFound: If the program cannot be resolved or executed.
        StdinWriteError: If stdin could not be written and the child still exited 0.
        OutputReadError: If stdout/stderr could not be drained.
        ProcessTimeout: If the deadline expired (the child is killed).
        ProcessCancelled: If the cancel event fired (the child is killed).
    """
    argv = [str(arg) for arg in args]
    logger.debug(f"Spawning {executable} {' '.join(redact_args(argv))}")

    try:
        process = await asyncio.create_subprocess_exec(
            executable,
            *argv,
            stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (FileNotFoundError, NotADirectoryError, PermissionError) as e:
        raise ExecutableNotFound(executable) from e

    io_task = asyncio.ensure_future(_communicate(process, executable, stdin))
    try:
        outcome = await _wait_for_outcome(io_task, executable, timeout, cancel)
    except ProcessTimeout as e:
        logger.warning(f"Killing {executable} (pid {process.pid}): {e}")
        raise
    finally:
        # Runs on success, timeout, cancel event and task cancellation alike
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
        if not io_task.done():
            io_task.cancel()
        await asyncio.shield(_reap(process, io_task))

    logger.debug(
        f"{executable} exited with code {outcome.exit_code} "
        f"(stdout {len(outcome.stdout)} bytes, stderr {len(outcome.stderr)} bytes)"
    )

    if outcome.stdin_error and outcome.succeeded:
        raise StdinWriteError(executable, f"failed to write stdin: {outcome.stdin_error}")

    return outcome
