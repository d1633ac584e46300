#!/usr/bin/env python

"""
Supervised execution of an already validated command.

The program and its arguments are handed to the OS as a vector, never as a
shell string. stdout and stderr are captured concurrently with a per-stream
byte cap, and the whole run is bounded by a wall-clock timeout. A single
coroutine owns the child, so every call ends in exactly one outcome:
a result, CommandTimeout, NonZeroExit or SpawnError.
"""

import asyncio
import os
import signal
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from .constants import COMMAND_TIMEOUT, MAX_OUTPUT_BYTES, PROCESS_CLEANUP_TIMEOUT, READ_CHUNK_SIZE, TRUNCATION_MARKER
from .errors import CommandTimeout, NonZeroExit, SpawnError
from .logger import logger


@dataclass(frozen=True)
class ExecutionResult:
    stdout: str
    stderr: str
    exit_code: int
    duration_ms: int = 0
    stdout_truncated: bool = False
    stderr_truncated: bool = False


class OutputBuffer:
    """Byte buffer that stops growing at `limit` and remembers that it did"""

    def __init__(self, limit: int):
        self.limit = limit
        self.truncated = False
        self._data = bytearray()

    def feed(self, chunk: bytes) -> None:
        if self.truncated:
            return
        room = self.limit - len(self._data)
        if len(chunk) > room:
            self._data.extend(chunk[:room])
            self.truncated = True
        else:
            self._data.extend(chunk)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def text(self) -> str:
        text = self._data.decode('utf-8', errors='replace')
        if self.truncated:
            text += TRUNCATION_MARKER
        return text


async def _pump(stream: asyncio.StreamReader, buffer: OutputBuffer) -> None:
    # Keep reading after truncation so the child never blocks on a full pipe
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            return
        buffer.feed(chunk)


async def _collect(process: asyncio.subprocess.Process, stdout: OutputBuffer, stderr: OutputBuffer) -> int:
    await asyncio.gather(_pump(process.stdout, stdout), _pump(process.stderr, stderr))
    return await process.wait()


def _signal_group(process: asyncio.subprocess.Process, sig: int) -> None:
    # start_new_session makes the child a group leader, so its pid is the
    # group id even after the child itself has been reaped
    try:
        os.killpg(process.pid, sig)
    except (ProcessLookupError, PermissionError):
        pass


async def _terminate(process: asyncio.subprocess.Process) -> None:
    """
    Stop the child's whole process group.

    SIGTERM goes to the group, the child gets a grace period to exit, then
    SIGKILL goes to the group regardless, so descendants that outlived the
    child (and may still hold its pipes) cannot survive a timeout.
    """
    _signal_group(process, signal.SIGTERM)
    try:
        await asyncio.wait_for(process.wait(), PROCESS_CLEANUP_TIMEOUT)
    except asyncio.TimeoutError:
        logger.warning(f"Process {process.pid} ignored SIGTERM, sending SIGKILL")

    _signal_group(process, signal.SIGKILL)
    if process.returncode is None:
        try:
            await asyncio.wait_for(process.wait(), PROCESS_CLEANUP_TIMEOUT)
        except asyncio.TimeoutError:
            logger.error(f"Process {process.pid} is still running after SIGKILL")


def _close_pipes(process: asyncio.subprocess.Process) -> None:
    # Close the transport while the loop still runs; left to the finalizer it
    # would touch pipes of a loop that is already closed
    transport = getattr(process, "_transport", None)
    if transport is not None:
        transport.close()


async def execute(
    program: str,
    args: Sequence[str],
    timeout: Optional[float] = COMMAND_TIMEOUT,
    output_cap: int = MAX_OUTPUT_BYTES,
) -> ExecutionResult:
    """
    Run program with args and capture its output.

    Returns an ExecutionResult when the program exits with status 0.
    Raises SpawnError if the program cannot be started, CommandTimeout if it
    outlives `timeout` seconds (the process group is killed and no output is
    returned) and NonZeroExit for any other exit status.
    """
    start = time.monotonic()
    try:
        process = await asyncio.create_subprocess_exec(
            program,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=True,
        )
    except (OSError, ValueError) as e:
        raise SpawnError(program, e) from e

    logger.debug(f"Started pid {process.pid}: {program} {list(args)!r}")

    stdout = OutputBuffer(output_cap)
    stderr = OutputBuffer(output_cap)
    try:
        exit_code = await asyncio.wait_for(_collect(process, stdout, stderr), timeout)
    except asyncio.TimeoutError:
        await _terminate(process)
        raise CommandTimeout(timeout) from None
    except BaseException:
        await _terminate(process)
        raise
    finally:
        _close_pipes(process)

    duration_ms = int((time.monotonic() - start) * 1000)
    if exit_code != 0:
        raise NonZeroExit(exit_code, stderr.text, stdout.text)

    return ExecutionResult(
        stdout=stdout.text,
        stderr=stderr.text,
        exit_code=exit_code,
        duration_ms=duration_ms,
        stdout_truncated=stdout.truncated,
        stderr_truncated=stderr.truncated,
    )


def run_command(
    program: str,
    args: Sequence[str],
    timeout: Optional[float] = COMMAND_TIMEOUT,
    output_cap: int = MAX_OUTPUT_BYTES,
) -> ExecutionResult:
    """Synchronous wrapper around execute() for callers without an event loop"""
    return asyncio.run(execute(program, args, timeout=timeout, output_cap=output_cap))
