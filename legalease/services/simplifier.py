"""Dispatches document simplification to the external processing program.

The program is started as a child process with the document path written to
its stdin. Two reader tasks drain stdout and stderr while two racing tasks
wait for either process exit or the deadline. Whichever settles the
ResponseLatch first decides the outcome; the other becomes a no-op.

The path is checked for existence before the child starts, but the child
reads it later. A file removed in between surfaces as a processing failure.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from legalease.core.exceptions import (
    DocumentNotFoundError,
    ProcessingTimeoutError,
    ScriptNotFoundError,
)
from legalease.services.models import ProcessingResult

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 4096
UNKNOWN_ERROR_DETAIL = "Unknown processing error"


@dataclass(frozen=True)
class Exited:
    exit_code: int


@dataclass(frozen=True)
class TimedOut:
    timeout_seconds: float


Outcome = Union[Exited, TimedOut]


class ResponseLatch:
    """Single-assignment guard: only the first settle() call takes effect."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._settled = asyncio.Event()
        self._outcome: Optional[Outcome] = None

    def settle(self, outcome: Outcome) -> bool:
        """Record outcome if nothing was recorded yet.

        Returns:
            True if this call won the latch, False if it was already settled
        """
        with self._lock:
            if self._outcome is not None:
                return False
            self._outcome = outcome
        self._settled.set()
        return True

    @property
    def is_settled(self) -> bool:
        return self._outcome is not None

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._outcome

    async def wait(self) -> Outcome:
        await self._settled.wait()
        return self._outcome


async def _drain(stream: Optional[asyncio.StreamReader], sink: list[bytes]) -> None:
    if stream is None:
        return
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        sink.append(chunk)


def _decode(chunks: list[bytes]) -> str:
    return b"".join(chunks).decode("utf-8", errors="replace")


class SimplificationDispatcher:
    """Runs the external simplifier script against stored files."""

    def __init__(
        self,
        script_path: Path,
        python_executable: str,
        timeout_seconds: float = 30.0,
        kill_grace_seconds: float = 2.0,
    ):
        self.script_path = Path(script_path)
        self.python_executable = python_executable
        self.timeout_seconds = timeout_seconds
        self.kill_grace_seconds = kill_grace_seconds

    async def simplify(self, file_path: str) -> ProcessingResult:
        """
        Run the external program on file_path.

        Returns:
            ProcessingResult for a child that exited on its own, successful or not

        Raises:
            DocumentNotFoundError: file_path does not exist (nothing spawned)
            ScriptNotFoundError: the external program is missing (nothing spawned)
            ProcessingTimeoutError: the deadline passed; the child was terminated
        """
        document = Path(file_path)
        if not document.exists():
            raise DocumentNotFoundError(file_path)

        if not self.script_path.exists():
            logger.error("Simplifier script missing: %s", self.script_path)
            raise ScriptNotFoundError(str(self.script_path))

        process = await asyncio.create_subprocess_exec(
            self.python_executable,
            str(self.script_path),
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        logger.info(
            "Simplifier started for %s",
            document.name,
            extra={"pid": process.pid, "file_name": document.name},
        )

        stdout_chunks: list[bytes] = []
        stderr_chunks: list[bytes] = []
        readers = [
            asyncio.create_task(_drain(process.stdout, stdout_chunks)),
            asyncio.create_task(_drain(process.stderr, stderr_chunks)),
        ]
        latch = ResponseLatch()

        watchers = [
            asyncio.create_task(self._watch_exit(process, readers, latch)),
            asyncio.create_task(self._watch_deadline(process, latch)),
        ]

        try:
            await self._feed_stdin(process, file_path)
            outcome = await latch.wait()
        finally:
            # Partial output of a timed-out child is discarded.
            for task in (*watchers, *readers):
                task.cancel()
            await self._reap(process)
            await asyncio.gather(*readers, *watchers, return_exceptions=True)

        if isinstance(outcome, TimedOut):
            logger.warning(
                "Simplifier timed out after %.1fs",
                outcome.timeout_seconds,
                extra={"pid": process.pid, "exit_code": process.returncode},
            )
            raise ProcessingTimeoutError(outcome.timeout_seconds)

        output = _decode(stdout_chunks).strip()
        if outcome.exit_code == 0 and output:
            logger.info(
                "Simplifier finished for %s",
                document.name,
                extra={"pid": process.pid, "exit_code": 0},
            )
            return ProcessingResult(
                success=True,
                output=output,
                processed_file_name=document.name,
                exit_code=0,
            )

        error_detail = _decode(stderr_chunks)
        logger.error(
            "Simplifier failed: %s",
            error_detail or "(no stderr)",
            extra={"pid": process.pid, "exit_code": outcome.exit_code},
        )
        return ProcessingResult(
            success=False,
            error_detail=error_detail or UNKNOWN_ERROR_DETAIL,
            processed_file_name=document.name,
            exit_code=outcome.exit_code,
        )

    async def _feed_stdin(self, process: asyncio.subprocess.Process, file_path: str) -> None:
        if process.stdin is None:
            return
        try:
            process.stdin.write(file_path.encode("utf-8"))
            await process.stdin.drain()
        except (BrokenPipeError, ConnectionResetError):
            # Child exited before reading; its exit status decides the outcome.
            logger.warning("Simplifier closed stdin early", extra={"pid": process.pid})
        finally:
            process.stdin.close()

    async def _watch_exit(
        self,
        process: asyncio.subprocess.Process,
        readers: list[asyncio.Task],
        latch: ResponseLatch,
    ) -> None:
        # Streams are fully drained before the exit counts, so output is complete.
        await asyncio.gather(*readers)
        exit_code = await process.wait()
        if not latch.settle(Exited(exit_code)):
            logger.debug("Exit after timeout ignored", extra={"exit_code": exit_code})

    async def _watch_deadline(
        self, process: asyncio.subprocess.Process, latch: ResponseLatch
    ) -> None:
        await asyncio.sleep(self.timeout_seconds)
        if latch.settle(TimedOut(self.timeout_seconds)):
            self._signal(process, kill=False)

    def _signal(self, process: asyncio.subprocess.Process, kill: bool) -> None:
        if process.returncode is not None:
            return
        try:
            if kill:
                process.kill()
            else:
                process.terminate()
        except ProcessLookupError:
            pass

    async def _reap(self, process: asyncio.subprocess.Process) -> None:
        """Make sure the child is gone: SIGTERM, then SIGKILL after the grace period."""
        if process.returncode is not None:
            return
        self._signal(process, kill=False)
        try:
            await asyncio.wait_for(process.wait(), timeout=self.kill_grace_seconds)
        except asyncio.TimeoutError:
            logger.warning("Simplifier ignored SIGTERM, killing", extra={"pid": process.pid})
            self._signal(process, kill=True)
            await process.wait()
