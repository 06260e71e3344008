from __future__ import annotations

import logging
import subprocess
import time
from typing import Sequence

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    pass


def run_command(argv: Sequence[str]) -> str:
    """Run an external host command and return its stdout.

    Blocks until the command exits; no timeout is applied here. Raises
    CommandError if the command cannot be started or exits non-zero.
    """
    start = time.monotonic()
    try:
        completed = subprocess.run(
            list(argv),
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as exc:
        raise CommandError(f"command not found: {argv[0]}") from exc
    except subprocess.CalledProcessError as exc:
        raise CommandError(f"{argv[0]} exited with status {exc.returncode}") from exc
    except UnicodeDecodeError as exc:
        raise CommandError(f"{argv[0]} produced output that is not valid UTF-8") from exc
    except OSError as exc:
        raise CommandError(f"failed to run {argv[0]}: {exc}") from exc
    finally:
        logger.debug(
            "command finished",
            extra={"argv": list(argv), "duration_ms": int((time.monotonic() - start) * 1000)},
        )
    return completed.stdout
