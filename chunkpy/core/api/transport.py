"""
HTTP transport for the upload server.

Implements the chunk upload and combine calls over aiohttp.
"""
import asyncio
import time
from typing import Optional

import aiohttp

from .config import TransportConfig
from ..exceptions import TransportError
from ..logging import get_logger


class HttpTransport:
    """
    aiohttp transport for chunk upload and combine requests.

    Reuses one HTTP session for every request of a batch.

    Example:
        >>> async with HttpTransport(TransportConfig(base_url="http://localhost:8000")) as t:
        ...     await t.upload_chunk("171_reportpdf", 0, 1, "report", b"...")
        ...     url = await t.combine("171_reportpdf")
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize transport.

        Args:
            config: Transport configuration (uses defaults if not provided)
            session: Optional shared session; the transport will not close it
        """
        self._config = config or TransportConfig.default()
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger('chunkpy.api.transport')

    @property
    def config(self) -> TransportConfig:
        """Get current configuration."""
        return self._config

    async def __aenter__(self) -> 'HttpTransport':
        await self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(**self._config.get_connector_kwargs()),
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close session if we own it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    async def upload_chunk(
        self,
        file_id: str,
        chunk_index: int,
        total_chunks: int,
        file_name: str,
        chunk: bytes
    ) -> None:
        """
        Upload one chunk as a multipart form.

        Args:
            file_id: Upload identifier of the file
            chunk_index: Index of the chunk
            total_chunks: Number of chunks in the file
            file_name: File name without extension
            chunk: Chunk bytes (may be empty for zero-byte files)

        Raises:
            TransportError: On network failure or non-2xx response
        """
        form = aiohttp.FormData()
        form.add_field('file_id', file_id)
        form.add_field('chunk_index', str(chunk_index))
        form.add_field('total_chunks', str(total_chunks))
        form.add_field('file_name', file_name)
        form.add_field(
            'file',
            chunk,
            filename='blob',
            content_type='application/octet-stream'
        )

        chunk_size_kb = len(chunk) / 1024
        self._logger.debug(
            f"POST chunk {chunk_index + 1}/{total_chunks} of {file_id} ({chunk_size_kb:.1f} KB)"
        )
        await self._post(self._config.chunk_url, data=form)

    async def combine(self, file_id: str) -> str:
        """
        Ask the server to reassemble the uploaded chunks of a file.

        Args:
            file_id: Upload identifier of the file

        Returns:
            URL of the combined file

        Raises:
            TransportError: On network failure, non-2xx response or a
                response body without a 'url'
        """
        self._logger.debug(f"POST combine for {file_id}")
        body = await self._post(self._config.combine_url, parse_json=True, json={'file_id': file_id})
        if not isinstance(body, dict) or 'url' not in body:
            raise TransportError(f"Combine response for {file_id} has no url: {body!r}")
        return body['url']

    async def _post(self, url: str, parse_json: bool = False, **kwargs):
        """
        POST a request and check its status.

        The body of a chunk acknowledgment is ignored; only combine
        responses are decoded (parse_json=True).
        """
        session = await self._get_session()
        start = time.time()
        try:
            async with session.post(
                url,
                proxy=self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None,
                **kwargs
            ) as response:
                if response.status >= 400:
                    text = await response.text()
                    raise TransportError(
                        f"HTTP {response.status} from {url}: {text[:200]}",
                        status=response.status
                    )
                body = await response.json(content_type=None) if parse_json else None
        except asyncio.TimeoutError as e:
            elapsed = time.time() - start
            self._logger.error(f"Request to {url} timed out after {elapsed:.2f}s")
            raise TransportError(f"Request to {url} timed out") from e
        except aiohttp.ClientError as e:
            elapsed = time.time() - start
            self._logger.error(f"Request to {url} failed after {elapsed:.2f}s: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {url}: {e}") from e

        elapsed = time.time() - start
        self._logger.debug(f"POST {url} completed in {elapsed:.2f}s")
        return body
