"""
Run external toolchain commands and capture their output
"""

import asyncio
import logging
import os
import shlex
from enum import Enum
from typing import Mapping, Optional

from ..models import SubprocessResult

logger = logging.getLogger('token_agent')


class StderrPolicy(Enum):
    """How a command's stderr output counts toward failure"""
    STRICT = "strict"          # non-zero exit or any stderr text
    EXIT_CODE = "exit_code"    # non-zero exit only

    @classmethod
    def parse(cls, value: str) -> "StderrPolicy":
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Unknown stderr policy {value!r}, expected 'strict' or 'exit_code'")


class CommandRunner:
    """Runs one command to completion; subclasses may fake it in tests"""

    async def run(self, command: str, env: Optional[Mapping[str, str]] = None) -> SubprocessResult:
        raise NotImplementedError


class SubprocessRunner(CommandRunner):
    """CommandRunner backed by a real child process"""

    def __init__(
        self,
        policy: StderrPolicy = StderrPolicy.STRICT,
        timeout: Optional[float] = None,
        cwd: Optional[str] = None,
    ):
        self.policy = policy
        self.timeout = timeout
        self.cwd = cwd

    async def run(self, command: str, env: Optional[Mapping[str, str]] = None) -> SubprocessResult:
        """Run the command and wait for it to exit

        ``env`` entries are layered over the current process environment.
        Without a timeout a hung command blocks the caller indefinitely.
        """
        child_env = None
        if env:
            child_env = dict(os.environ)
            child_env.update(env)

        logger.info(f"Running: {command}")
        try:
            proc = await asyncio.create_subprocess_exec(
                *shlex.split(command),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.cwd,
                env=child_env,
            )
        except OSError as e:
            logger.error(f"Could not start {command}: {e}")
            return SubprocessResult(stdout='', stderr=str(e), failed=True)

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            try:
                proc.kill()
            except ProcessLookupError:
                pass  # already exited
            await proc.wait()
            logger.error(f"{command} timed out after {self.timeout}s")
            return SubprocessResult(
                stdout='',
                stderr=f"Command timed out after {self.timeout}s: {command}",
                failed=True,
                returncode=proc.returncode,
            )

        result = SubprocessResult(
            stdout=stdout.decode('utf-8', errors='replace'),
            stderr=stderr.decode('utf-8', errors='replace'),
            failed=False,
            returncode=proc.returncode,
        )
        result.failed = self.is_failure(result)

        if result.failed:
            logger.error(f"{command} failed (exit {proc.returncode}): {result.stderr.strip()[:500]}")
        else:
            logger.debug(f"{command} output: {result.stdout}")
        return result

    def is_failure(self, result: SubprocessResult) -> bool:
        if result.returncode != 0:
            return True
        if self.policy is StderrPolicy.STRICT and result.stderr:
            return True
        return False
