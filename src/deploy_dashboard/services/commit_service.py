"""Looks up the most recent commit of the deployed checkout."""

import subprocess
from pathlib import Path
from typing import Dict

from deploy_dashboard.exceptions import CommitLookupException
from deploy_dashboard.logging_config import get_logger

logger = get_logger(__name__)

# Fields are separated by the ASCII unit separator so commit subjects can contain anything.
_FIELD_SEPARATOR = "\x1f"
_LOG_FORMAT = _FIELD_SEPARATOR.join(["%H", "%s", "%an", "%cI"])


class CommitService:
    def __init__(self, repository: Path, timeout: float = 5.0):
        self.repository = Path(repository)
        self.timeout = timeout

    def get_last_commit(self) -> Dict[str, str]:
        """
        Return hash, subject, author and commit timestamp of ``HEAD``.

        Raises:
            CommitLookupException: If git is missing, the directory is not a
                repository, or the command times out.
        """
        cmd = ["git", "log", "-1", f"--format={_LOG_FORMAT}"]
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repository,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise CommitLookupException("git executable not found", repository=str(self.repository))
        except subprocess.CalledProcessError as e:
            reason = (e.stderr or "").strip() or f"git exited with status {e.returncode}"
            raise CommitLookupException(reason, repository=str(self.repository))
        except subprocess.TimeoutExpired:
            raise CommitLookupException(
                f"git timed out after {self.timeout}s", repository=str(self.repository)
            )

        fields = result.stdout.strip().split(_FIELD_SEPARATOR)
        if len(fields) != 4:
            raise CommitLookupException("unexpected git log output", repository=str(self.repository))

        commit_hash, message, author, timestamp = fields
        return {
            "hash": commit_hash,
            "message": message,
            "author": author,
            "timestamp": timestamp,
        }
