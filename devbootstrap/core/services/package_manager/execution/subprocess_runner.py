"""
L4 Execution: core subprocess runner.

The SINGLE PLACE where package operations spawn processes. Output is
streamed chunk by chunk to the caller's callbacks while the process
runs; nothing is buffered to completion.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import time
from collections.abc import Callable, Sequence

from devbootstrap.core.services.package_manager.errors import SpawnError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096

OutputCallback = Callable[[str], None]


class _StreamReadError(Exception):
    """An OS-level failure reading a child pipe, kept apart from callback errors."""

    def __init__(self, cause: OSError):
        super().__init__(str(cause))
        self.cause = cause


class SubprocessRunner:
    """Spawn a command and stream its stdout/stderr as they arrive.

    Per-stream order is preserved. The two streams are read concurrently,
    so chunks from stdout and stderr may interleave in any order. No
    timeout and no retry: both belong to the caller.
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE):
        self._chunk_size = chunk_size

    async def run(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        on_stdout: OutputCallback | None = None,
        on_stderr: OutputCallback | None = None,
        env: dict[str, str] | None = None,
        cwd: str | None = None,
    ) -> int:
        """Run ``command args...`` and return its exit code.

        Every chunk is handed to its callback before this coroutine
        returns.

        Raises:
            SpawnError: The process could not be started, or reading its
                output failed at the OS level. ``stderr`` carries the last
                stderr text seen.
        """
        last_stderr = ""

        def _stderr(text: str) -> None:
            nonlocal last_stderr
            last_stderr = text
            if on_stderr is not None:
                on_stderr(text)

        full_env = None
        if env:
            full_env = os.environ.copy()
            full_env.update(env)

        logger.debug("Spawning: %s %s (cwd=%s)", command, " ".join(args), cwd)
        start = time.monotonic()
        try:
            proc = await asyncio.create_subprocess_exec(
                command,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=full_env,
                cwd=cwd,
            )
        except OSError as e:
            raise SpawnError(command, f"Cannot start {command}: {e}", stderr=str(e)) from e

        readers = [
            asyncio.create_task(self._pump(proc.stdout, on_stdout)),
            asyncio.create_task(self._pump(proc.stderr, _stderr)),
        ]
        try:
            await asyncio.gather(*readers)
        except _StreamReadError as e:
            await self._reap(proc, readers)
            raise SpawnError(
                command,
                f"{command} failed while streaming output: {e.cause}",
                stderr=last_stderr or str(e.cause),
            ) from e.cause
        except BaseException:
            # A callback raised: nobody drains the pipes any more. The
            # callback's exception goes out unchanged.
            await self._reap(proc, readers)
            raise

        code = await proc.wait()
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("%s exited with %s after %dms", command, code, elapsed_ms)
        return code

    @staticmethod
    async def _reap(proc: asyncio.subprocess.Process, readers: list[asyncio.Task]) -> None:
        for task in readers:
            task.cancel()
        await asyncio.gather(*readers, return_exceptions=True)
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
        await proc.wait()

    async def _pump(
        self,
        stream: asyncio.StreamReader | None,
        callback: OutputCallback | None,
    ) -> None:
        if stream is None:
            return
        # Multi-byte characters may straddle chunk boundaries.
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            try:
                chunk = await stream.read(self._chunk_size)
            except OSError as e:
                raise _StreamReadError(e) from e
            text = decoder.decode(chunk, final=not chunk)
            if text and callback is not None:
                callback(text)
            if not chunk:
                return
