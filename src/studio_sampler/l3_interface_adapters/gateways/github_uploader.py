"""Gateway: GitHub contents API uploader — implements SampleUploader port."""

from __future__ import annotations

import base64
import logging
from urllib.parse import quote

import httpx

from studio_sampler.l2_use_cases.ports.sample_uploader import UploadOutcome

log = logging.getLogger('ssm.upload')

_API_VERSION = '2022-11-28'


class GitHubSampleUploader:
    """PUTs each file to ``/repos/{owner}/{repo}/contents/{path}`` with a caller-supplied token."""

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str,
        branch: str = 'main',
        api_url: str = 'https://api.github.com',
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._owner = owner
        self._repo = repo
        self._token = token
        self._branch = branch
        self._api_url = api_url.rstrip('/')
        self._timeout = timeout
        self._transport = transport

    def contents_url(self, path: str) -> str:
        return f'{self._api_url}/repos/{self._owner}/{self._repo}/contents/{quote(path, safe="/")}'

    async def upload(self, path: str, content: bytes, *, message: str) -> UploadOutcome:
        filename = path.rsplit('/', 1)[-1]
        body = {
            'message': message,
            'content': base64.b64encode(content).decode('ascii'),
            'branch': self._branch,
        }
        headers = {
            'Authorization': f'Bearer {self._token}',
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': _API_VERSION,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.put(self.contents_url(path), json=body, headers=headers)
        except httpx.HTTPError as e:
            return UploadOutcome(filename=filename, path=path, ok=False, status=0, detail=f'{type(e).__name__}: {e}')

        if not resp.is_success:
            return UploadOutcome(filename=filename, path=path, ok=False, status=resp.status_code, detail=resp.text)

        try:
            stored = resp.json().get('content', {}).get('path') or path
        except ValueError:
            stored = path
        log.debug('Uploaded %s (%d bytes) -> %s', filename, len(content), stored)
        return UploadOutcome(filename=filename, path=stored, ok=True, status=resp.status_code)
