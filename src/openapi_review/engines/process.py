import asyncio
import logging

from openapi_review.errors import EngineError

logger = logging.getLogger(__name__)


async def run_command(*args: str, ok_codes: tuple[int, ...] = (0,)) -> str:
    """Run an external command and return its stdout."""
    logger.debug("Running %s", " ".join(args))
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        raise EngineError(args[0], 127, f"{args[0]} not found in PATH") from None
    stdout, stderr = await process.communicate()
    returncode = process.returncode if process.returncode is not None else -1
    if returncode not in ok_codes:
        raise EngineError(args[0], returncode, stderr.decode("utf-8", errors="replace"))
    return stdout.decode("utf-8")
