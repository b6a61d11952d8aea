"""
Apply a SQL migration file statement by statement through the provider's
`exec_sql` RPC endpoint.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

import requests

logger = logging.getLogger(__name__)

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
PREVIEW_LENGTH = 100


def clean_sql(sql: str) -> str:
    """Drop `--` comment lines, blank lines and `/* */` blocks."""
    lines = [
        line
        for line in sql.split("\n")
        if line.strip() and not line.strip().startswith("--")
    ]
    return _BLOCK_COMMENT.sub("", "\n".join(lines))


def split_statements(sql: str) -> list[str]:
    return [part.strip() for part in sql.split(";") if part.strip()]


@dataclass
class MigrationReport:
    total: int = 0
    succeeded: int = 0
    failed: list[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class MigrationRunner:
    def __init__(
        self,
        supabase_url: str,
        service_key: str | None,
        anon_key: str | None,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ):
        if not supabase_url:
            raise ValueError("SUPABASE_URL is required to apply migrations")
        if not (service_key or anon_key):
            raise ValueError("A service-role or anon key is required")
        self.rpc_url = f"{supabase_url.rstrip('/')}/rest/v1/rpc/exec_sql"
        self.service_key = service_key
        self.anon_key = anon_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def _post(self, statement: str, headers: dict) -> requests.Response:
        return self.session.post(
            self.rpc_url,
            json={"sql_query": statement},
            headers={"Content-Type": "application/json", **headers},
            timeout=self.timeout,
        )

    def _rpc(self, statement: str) -> Optional[str]:
        """Primary call with the strongest key; returns an error or None."""
        key = self.service_key or self.anon_key
        try:
            response = self._post(
                statement, {"apikey": key, "Authorization": f"Bearer {key}"}
            )
        except requests.RequestException as exc:
            return str(exc)
        if not response.ok:
            return f"HTTP {response.status_code}: {response.text[:200]}"
        return None

    def _fallback(self, statement: str) -> bool:
        bearer = self.service_key or self.anon_key
        try:
            response = self._post(
                statement,
                {
                    "apikey": self.anon_key or bearer,
                    "Authorization": f"Bearer {bearer}",
                },
            )
        except requests.RequestException as exc:
            logger.debug("Fallback request failed: %s", exc)
            return False
        return response.ok

    def execute(self, statement: str) -> bool:
        error = self._rpc(statement)
        if error is None:
            return True
        logger.debug("RPC failed (%s), retrying via REST", error)
        if self._fallback(statement):
            return True
        logger.error("Statement failed: %s", error)
        return False

    def apply(self, sql: str) -> MigrationReport:
        statements = split_statements(clean_sql(sql))
        report = MigrationReport(total=len(statements))
        logger.info("Executing %d SQL statements...", report.total)
        for index, statement in enumerate(statements, start=1):
            logger.info(
                "Executing statement %d/%d: %s...",
                index,
                report.total,
                statement[:PREVIEW_LENGTH],
            )
            if self.execute(statement):
                report.succeeded += 1
                logger.info("Statement %d executed successfully", index)
            else:
                report.failed.append(index)
        return report
