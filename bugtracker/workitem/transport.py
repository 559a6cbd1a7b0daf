"""aiohttp-backed HttpTransport for the Azure DevOps REST API."""

import aiohttp

from bugtracker.workitem.azure_devops import CONTENT_TYPE
from bugtracker.workitem.config import DEFAULT_TIMEOUT_S
from bugtracker.workitem.types import HttpResponse


class AiohttpTransport:
    """
    POSTs JSON Patch documents with personal access token authentication.

    A session is opened per request, so the transport carries no state
    between calls and may be shared by concurrent tasks.
    """

    def __init__(self, timeout_s: float = DEFAULT_TIMEOUT_S, content_type: str = CONTENT_TYPE):
        self._timeout = aiohttp.ClientTimeout(total=timeout_s)
        self._content_type = content_type

    async def post(self, uri: str, json_body: str, auth_token: str) -> HttpResponse:
        """
        POST ``json_body`` to ``uri``.

        Azure DevOps takes a PAT as the password of Basic auth with an
        empty user name.

        Raises:
            aiohttp.ClientError: On connection-level failures
            asyncio.TimeoutError: If the request exceeds the timeout
        """
        auth = aiohttp.BasicAuth("", auth_token) if auth_token else None
        headers = {"Content-Type": self._content_type, "Accept": "application/json"}

        async with aiohttp.ClientSession(timeout=self._timeout) as session, session.post(
            uri,
            data=json_body.encode("utf-8"),
            auth=auth,
            headers=headers,
        ) as resp:
            text = await resp.text()
            return HttpResponse(status=resp.status, body=text)
