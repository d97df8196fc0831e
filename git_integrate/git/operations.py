"""Version-control operations consumed by the merge orchestrator.

Every primitive is a separate coroutine on the GitOperations protocol and
reports a plain success/failure (or the conflicted paths for the status
query). The orchestrator only ever talks to this protocol, so tests drive
it with an in-memory fake and production uses SubprocessGitOperations.

Example:
    >>> ops = SubprocessGitOperations("/path/to/clone")
    >>> if await ops.fetch_all():
    ...     await ops.reset_branch("release", "origin/main")
"""

import asyncio
from pathlib import Path
from typing import Protocol

import structlog

from git_integrate.exceptions import GitCommandError

log = structlog.get_logger(__name__)


class GitOperations(Protocol):
    """Capability interface over the git primitives a run needs."""

    async def fetch_all(self) -> bool:
        """Fetch every configured remote."""
        ...

    async def reset_branch(self, branch: str, start_point: str) -> bool:
        """Create or reset `branch` at `start_point` and check it out, untracked."""
        ...

    async def merge(self, ref: str) -> bool:
        """Merge `ref` into HEAD with a merge commit, reusing recorded resolutions."""
        ...

    async def commit(self) -> bool:
        """Finalize a pending merge with the prepared message."""
        ...

    async def conflicted_paths(self) -> list[str]:
        """Paths currently in a conflicted (unmerged) state."""
        ...


async def run_git(
    *args: str,
    cwd: Path | str | None = None,
    capture_output: bool = False,
) -> tuple[int, str]:
    """Run one git command to completion.

    Output is streamed straight to the operator's terminal unless
    capture_output is set, in which case stdout is returned decoded
    (stderr still goes to the terminal).

    Args:
        *args: Arguments after "git".
        cwd: Working directory, normally the top of the working tree.
        capture_output: Capture stdout instead of inheriting it.

    Returns:
        Tuple of (return_code, stdout).

    Raises:
        GitCommandError: If the git executable could not be started.
    """
    command = list(args)
    log.debug("git_command", args=command, cwd=str(cwd) if cwd else None)

    try:
        process = await asyncio.create_subprocess_exec(
            "git",
            *command,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE if capture_output else None,
        )
    except OSError as e:
        raise GitCommandError(command, str(e)) from e

    stdout_bytes, _ = await process.communicate()
    returncode = process.returncode or 0

    if returncode != 0:
        log.debug("git_command_failed", args=command, returncode=returncode)

    return returncode, (stdout_bytes or b"").decode("utf-8", errors="replace")


class SubprocessGitOperations:
    """GitOperations backed by the git command line.

    One git subprocess per call; no state is kept between calls.

    Attributes:
        cwd: Directory git runs in.
    """

    def __init__(self, cwd: Path | str | None = None) -> None:
        self.cwd = cwd

    async def _succeeds(self, *args: str) -> bool:
        returncode, _ = await run_git(*args, cwd=self.cwd)
        return returncode == 0

    async def fetch_all(self) -> bool:
        return await self._succeeds("fetch", "--all")

    async def reset_branch(self, branch: str, start_point: str) -> bool:
        return await self._succeeds("checkout", "--no-track", "-B", branch, start_point)

    async def merge(self, ref: str) -> bool:
        return await self._succeeds("merge", "--no-ff", "--no-edit", "--rerere-autoupdate", "--log", ref)

    async def commit(self) -> bool:
        return await self._succeeds("commit", "--no-edit")

    async def conflicted_paths(self) -> list[str]:
        """Unmerged paths, as reported by `git diff --diff-filter=U`.

        A failing status query is reported as an error rather than as
        "no conflicts", since the latter would send the run down the
        finalize-commit path on a broken working tree.
        """
        returncode, stdout = await run_git(
            "diff", "--name-only", "--diff-filter=U", "-z", cwd=self.cwd, capture_output=True
        )
        if returncode != 0:
            raise GitCommandError(
                ["diff", "--name-only", "--diff-filter=U", "-z"],
                f"exited with status {returncode}",
            )

        # -z output is NUL separated; the same path can appear once per stage
        paths: list[str] = []
        for path in stdout.split("\0"):
            if path and path not in paths:
                paths.append(path)
        return paths
