"""Subprocess spawning with captured output and a timeout.

Children are started in their own session on POSIX so that a timeout can
signal the whole process group (a shell and whatever it forked).
"""

import errno
import logging
import os
import signal
import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Mapping, Optional, Union

logger = logging.getLogger(__name__)

# Seconds a timed-out child gets to exit after SIGTERM before SIGKILL.
KILL_GRACE_PERIOD = 2.0

# Seconds to let the pipes reach EOF after the child exits before
# signalling whatever background processes still hold them.
DRAIN_GRACE_PERIOD = 0.5


@dataclass
class ProcessOutcome:
    """What a finished (or terminated) child produced."""
    stdout: str
    stderr: str
    exit_code: Optional[int]
    timed_out: bool = False


def split_command(command: str) -> list[str]:
    """Split a command string on spaces, honoring quoted spans.

    Single or double quotes group a span into one token and are stripped.
    There are no escape sequences and no nesting: inside a quoted span the
    other quote character is literal.
    """
    parts: list[str] = []
    current = ""
    quote: Optional[str] = None

    for char in command:
        if quote:
            if char == quote:
                quote = None
            else:
                current += char
            continue

        if char in ("'", '"'):
            quote = char
            continue

        if char == " ":
            if current:
                parts.append(current)
                current = ""
            continue

        current += char

    if current:
        parts.append(current)

    return parts


def run_process(
    argv: list[str],
    cwd: Union[str, Path],
    env: Mapping[str, str],
    timeout: Optional[float] = None,
) -> ProcessOutcome:
    """Run a command to completion, capturing stdout and stderr.

    Both pipes are drained on reader threads while the main thread waits for
    the process to exit, so the outcome is decided by exit (or by the timer)
    rather than by the pipes closing. If ``timeout`` elapses first the
    process group is sent SIGTERM (then SIGKILL after a grace period) and the
    outcome is marked timed out with no exit code. Background children left
    holding the pipes after a normal exit are terminated the same way.

    Args:
        argv: Command and arguments.
        cwd: Working directory.
        env: Complete environment for the child.
        timeout: Seconds before termination. None = wait indefinitely.

    Returns:
        ProcessOutcome.

    Raises:
        OSError: If the process could not be spawned.
    """
    if not argv:
        raise OSError(errno.ENOENT, "empty command")

    proc = subprocess.Popen(
        argv,
        cwd=str(cwd),
        env=dict(env),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
        start_new_session=os.name != "nt",
    )

    stdout_lines: list[str] = []
    stderr_lines: list[str] = []
    readers = [
        threading.Thread(target=_drain, args=(proc.stdout, stdout_lines), daemon=True),
        threading.Thread(target=_drain, args=(proc.stderr, stderr_lines), daemon=True),
    ]
    for reader in readers:
        reader.start()

    timed_out = False
    try:
        exit_code: Optional[int] = proc.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.debug("Timed out after %ss: %s", timeout, argv)
        timed_out = True
        exit_code = None
        _terminate(proc)

    _join_readers(proc, readers)
    for reader, stream in zip(readers, (proc.stdout, proc.stderr)):
        if not reader.is_alive():
            stream.close()

    return ProcessOutcome(
        stdout="".join(stdout_lines),
        stderr="".join(stderr_lines),
        exit_code=exit_code,
        timed_out=timed_out,
    )


def _drain(stream: IO[str], sink: list[str]) -> None:
    for line in iter(stream.readline, ""):
        sink.append(line)


def _terminate(proc: subprocess.Popen) -> None:
    """Terminate a child (and its group), escalating to SIGKILL."""
    _signal(proc, signal.SIGTERM)
    try:
        proc.wait(timeout=KILL_GRACE_PERIOD)
    except subprocess.TimeoutExpired:
        logger.debug("Process %s ignored SIGTERM, killing", proc.pid)
        _signal(proc, getattr(signal, "SIGKILL", signal.SIGTERM))
        proc.wait()


def _join_readers(proc: subprocess.Popen, readers: list[threading.Thread]) -> None:
    """Wait for both pipes to close, clearing out stray background children."""
    _join_all(readers, DRAIN_GRACE_PERIOD)
    if any(r.is_alive() for r in readers):
        logger.debug("Pipes of %s still open after exit, signalling group", proc.pid)
        _signal(proc, signal.SIGTERM)
        _join_all(readers, KILL_GRACE_PERIOD)
    if any(r.is_alive() for r in readers):
        _signal(proc, getattr(signal, "SIGKILL", signal.SIGTERM))
        _join_all(readers, KILL_GRACE_PERIOD)


def _join_all(readers: list[threading.Thread], timeout: float) -> None:
    deadline = time.monotonic() + timeout
    for reader in readers:
        reader.join(max(0.0, deadline - time.monotonic()))


def _signal(proc: subprocess.Popen, sig: int) -> None:
    if os.name == "nt":
        if proc.poll() is None:
            proc.terminate()
        return
    try:
        os.killpg(proc.pid, sig)
    except (ProcessLookupError, PermissionError):
        pass
