"""Async connection handling for pyhabdroid."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging

import aiohttp

from .config import ServerConfig
from .const import (
    DEFAULT_APP_VERSION,
    REQUEST_FAILED_STATUS,
    REQUEST_TIMEOUT_STATUS,
    ROOT_ENDPOINT,
    build_user_agent,
)
from .exceptions import AuthError, ConnectionLostError, HttpError
from .parsing import ContentType

_LOGGER = logging.getLogger(__name__)

_AUTH_FAILURE_STATUSES = (401, 403)


@dataclass(frozen=True)
class HttpResult:
    """A successful HTTP response with its body already read."""

    status_code: int
    content_type: str | None
    text: str

    @property
    def representation(self) -> ContentType:
        """Return the body format announced by the server."""
        return ContentType.from_header(self.content_type)


class HttpClient:
    """Performs requests against the openHAB REST API using aiohttp."""

    def __init__(
        self,
        config: ServerConfig,
        session: aiohttp.ClientSession | None = None,
        app_version: str = DEFAULT_APP_VERSION,
    ) -> None:
        """Initialize the HTTP client."""
        self._config = config
        self._user_agent = build_user_agent(app_version)
        # Use provided session or create a new one
        self._session = session
        self._managed_session = session is None

    @property
    def base_url(self) -> str:
        """Return the server base URL."""
        return self._config.base_url

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            _LOGGER.debug("Creating new aiohttp ClientSession for HttpClient.")
            self._session = aiohttp.ClientSession()
            self._managed_session = True
        return self._session

    async def close_session(self) -> None:
        """Close the aiohttp session if it's managed by this instance."""
        if self._session and not self._session.closed and self._managed_session:
            await self._session.close()
            self._session = None
            _LOGGER.debug("Managed aiohttp session closed by HttpClient.")
        elif self._session and not self._managed_session:
            _LOGGER.debug("Session provided externally, not closing.")

    async def get(self, path: str, timeout: float | None = None) -> HttpResult:
        """Send a GET request."""
        return await self._request("GET", path, timeout=timeout)

    async def post(
        self,
        path: str,
        body: str,
        content_type: str,
        timeout: float | None = None,
    ) -> HttpResult:
        """Send a POST request with a text body."""
        return await self._request(
            "POST",
            path,
            data=body.encode("utf-8"),
            content_type=content_type,
            timeout=timeout,
        )

    async def _request(
        self,
        method: str,
        path: str,
        data: bytes | None = None,
        content_type: str | None = None,
        timeout: float | None = None,
    ) -> HttpResult:
        """Make a request and raise HttpError for anything but 2xx."""
        url = self._config.base_url + path.lstrip("/")
        headers = {"User-Agent": self._user_agent}
        if content_type:
            headers["Content-Type"] = content_type
        auth = None
        if self._config.has_credentials:
            auth = aiohttp.BasicAuth(self._config.username, self._config.password or "")
        client_timeout = aiohttp.ClientTimeout(total=timeout or self._config.timeout)

        session = await self._get_session()
        _LOGGER.debug("Making ASYNC %s request to %s", method, url)

        try:
            async with session.request(
                method,
                url,
                data=data,
                headers=headers,
                auth=auth,
                timeout=client_timeout,
                ssl=self._config.verify_ssl,
            ) as response:
                _LOGGER.debug("Response status code: %s", response.status)
                text = await response.text(errors="replace")
                if not 200 <= response.status < 300:  # noqa: PLR2004
                    _LOGGER.error(
                        "HTTP error response (%s) for %s %s: %s",
                        response.status,
                        method,
                        url,
                        text,
                    )
                    raise HttpError(response.status, text or response.reason or "")
                return HttpResult(
                    status_code=response.status,
                    content_type=response.headers.get("Content-Type"),
                    text=text,
                )
        except HttpError:
            raise
        except TimeoutError as timeout_err:
            _LOGGER.exception("Request timed out: %s %s", method, url)
            err_msg = "Request timed out"
            raise HttpError(REQUEST_TIMEOUT_STATUS, err_msg) from timeout_err
        except aiohttp.ClientConnectionError as conn_err:
            _LOGGER.exception("Connection error during %s %s", method, url)
            err_msg = f"Connection error: {conn_err}"
            raise ConnectionLostError(REQUEST_FAILED_STATUS, err_msg) from conn_err
        except aiohttp.ClientError as req_err:
            _LOGGER.exception("Request error during %s %s", method, url)
            err_msg = f"Request error: {req_err}"
            raise HttpError(REQUEST_FAILED_STATUS, err_msg) from req_err


class Connection:
    """A usable, authenticated connection to an openHAB server."""

    def __init__(self, config: ServerConfig, http_client: HttpClient) -> None:
        """Initialize the connection."""
        self.config = config
        self.http_client = http_client

    def __repr__(self) -> str:
        """Return a representation without credentials."""
        return f"Connection(base_url={self.config.base_url!r})"


class ConnectionFactory:
    """Resolves a usable connection, initializing it asynchronously.

    Initialization checks that the server answers on its REST root. Callers
    suspend in :meth:`wait_for_initialization` until the check completed,
    whatever its result. When the previous initialization produced no usable
    connection, the next wait starts a fresh one, so a later retry can pick
    up a server that came back.
    """

    def __init__(
        self,
        config: ServerConfig,
        session: aiohttp.ClientSession | None = None,
        probe: bool = True,
    ) -> None:
        """Initialize the factory."""
        self._config = config
        self._http_client = HttpClient(config, session=session)
        self._probe = probe
        self._connection: Connection | None = None
        self._init_task: asyncio.Task | None = None

    @property
    def usable_connection_or_none(self) -> Connection | None:
        """Return the usable connection, or None if there is none."""
        return self._connection

    def start(self) -> asyncio.Task:
        """Start initialization in the background if it is not running."""
        if self._init_task is None or (
            self._init_task.done() and self._connection is None
        ):
            _LOGGER.debug("Starting connection initialization")
            self._init_task = asyncio.create_task(self._initialize())
        return self._init_task

    def invalidate(self) -> None:
        """Drop the current connection; the next wait probes the server again."""
        if self._connection is not None:
            _LOGGER.info("Connection to %s was lost", self._config.base_url)
        self._connection = None

    async def wait_for_initialization(self) -> None:
        """Suspend until initialization completed or failed."""
        await asyncio.shield(self.start())

    async def _initialize(self) -> None:
        connection = Connection(self._config, self._http_client)
        if self._probe:
            try:
                await self._check_connection(connection)
            except (AuthError, HttpError):
                _LOGGER.warning(
                    "No usable connection to %s", self._config.base_url, exc_info=True
                )
                self._connection = None
                return
        self._connection = connection
        _LOGGER.info("Connection to %s is usable", self._config.base_url)

    async def _check_connection(self, connection: Connection) -> None:
        try:
            await connection.http_client.get(ROOT_ENDPOINT)
        except HttpError as err:
            if err.status_code in _AUTH_FAILURE_STATUSES:
                err_msg = f"Server rejected credentials (HTTP {err.status_code})"
                raise AuthError(err_msg) from err
            raise

    async def close(self) -> None:
        """Stop initialization and close the HTTP session."""
        if self._init_task is not None and not self._init_task.done():
            self._init_task.cancel()
        self._connection = None
        await self._http_client.close_session()
