"""Image push: run ``docker push`` locally, streamed or quiet."""

import asyncio
import logging

logger = logging.getLogger(__name__)

PUSH_TIMEOUT = 1800


def push_command(image):
    return ["docker", "push", image]


def make_push_image(work_dir="./", verbose=False, dry_run=False, timeout=PUSH_TIMEOUT):
    """Create a push_image callable.

    The callable is ``async push_image(image) -> (returncode, stdout, stderr)``.
    In verbose mode docker's output is logged line by line as it arrives;
    otherwise it is captured and only returned.
    """

    async def push_image(image):
        command = push_command(image)
        if dry_run:
            logger.info(f"[dry-run] {' '.join(command)}")
            return 0, "", ""

        try:
            proc = await asyncio.create_subprocess_exec(
                *command,
                cwd=work_dir,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            # e.filename is the binary when exec fails, the cwd when chdir fails
            if isinstance(e, FileNotFoundError) and e.filename in (None, command[0]):
                logger.error(f"Error: '{command[0]}' not found. Is it installed and on PATH?")
                return 127, "", f"'{command[0]}' not found"
            detail = f"{e.strerror or e}: {e.filename}" if e.filename else str(e.strerror or e)
            logger.error(f"Error: cannot run {' '.join(command)} in {work_dir}: {detail}")
            return 126, "", f"cannot run '{command[0]}': {detail}"

        try:
            if verbose:
                stdout_lines, stderr_lines = [], []

                async def _read_stream(pipe, lines, level):
                    async for raw_line in pipe:
                        line = raw_line.decode(errors="replace").rstrip("\n")
                        logger.log(level, line)
                        lines.append(line)

                await asyncio.wait_for(
                    asyncio.gather(
                        _read_stream(proc.stdout, stdout_lines, logging.INFO),
                        _read_stream(proc.stderr, stderr_lines, logging.ERROR),
                        proc.wait(),
                    ),
                    timeout=timeout,
                )
                return proc.returncode, "\n".join(stdout_lines), "\n".join(stderr_lines)

            stdout_bytes, stderr_bytes = await asyncio.wait_for(proc.communicate(), timeout=timeout)
            stdout = stdout_bytes.decode(errors="replace") if stdout_bytes else ""
            stderr = stderr_bytes.decode(errors="replace") if stderr_bytes else ""
            return proc.returncode, stdout, stderr
        except TimeoutError:
            logger.error(f"Push timed out after {timeout}s: {' '.join(command)}")
            proc.kill()
            await proc.wait()
            return 1, "", f"timed out after {timeout}s"

    return push_image
