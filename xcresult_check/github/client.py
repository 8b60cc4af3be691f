"""GitHub Checks API client."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp

from xcresult_check.conclusion import Conclusion
from xcresult_check.github.config import ChecksConfig
from xcresult_check.github.models import CheckRun, CheckRunOutput

log = logging.getLogger(__name__)


class ChecksApiError(Exception):
    """Raised when the Checks API rejects a request."""


@dataclass(frozen=True, kw_only=True)
class ChecksClient:
    """Creates check runs on one repository."""

    config: ChecksConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: ChecksConfig
    ) -> AsyncGenerator["ChecksClient", None]:
        """Create client with managed session lifecycle."""
        headers = {
            "Authorization": f"Bearer {config.token.get_secret_value()}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        # GitHub Enterprise serves the API below /api/v3, so request paths
        # are relative to a base URL ending in a slash.
        async with aiohttp.ClientSession(
            base_url=f"{config.api_base_url.rstrip('/')}/",
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

    async def create_check_run(
        self,
        *,
        name: str,
        head_sha: str,
        conclusion: Conclusion,
        output: CheckRunOutput,
    ) -> CheckRun:
        """Create a completed check run and return it.

        Raises:
            ChecksApiError: If GitHub does not answer with 201 Created

        """
        url = f"repos/{self.config.owner}/{self.config.repo}/check-runs"
        payload = {
            "name": name,
            "head_sha": head_sha,
            "status": "completed",
            "conclusion": conclusion,
            "output": output.model_dump(mode="json", exclude_none=True),
        }

        log.info(
            "Creating check run: api_base_url=%s, url=%s, name=%s, head_sha=%s, "
            "conclusion=%s, annotations=%d",
            self.config.api_base_url,
            url,
            name,
            head_sha,
            conclusion,
            len(output.annotations),
        )

        async with self.session.post(url, json=payload) as response:
            if response.status != 201:
                text = await response.text()
                raise ChecksApiError(
                    f"Failed to create check run: {response.status} {text}"
                )
            data = await response.json()

        return CheckRun.model_validate(data)
