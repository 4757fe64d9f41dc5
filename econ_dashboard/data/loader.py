"""Load indicator CSVs from disk or a static URL."""

import asyncio
import logging
from pathlib import Path

import httpx

from econ_dashboard.config import COLUMN_VARIANTS, SAMPLE_CSV_PATH, Settings
from econ_dashboard.data.csv_parser import parse_csv
from econ_dashboard.data.store import ObservationStore


logger = logging.getLogger(__name__)


class DataLoadError(Exception):
    """A dataset could not be read or parsed. The current store is kept."""


class DatasetLoader:
    """
    Holds the current ObservationStore and replaces it on each load.

    Every load takes a generation token when it starts. Starting a new load
    supersedes any load still in flight: when the older one completes, its
    result (or failure) is discarded and the store is left untouched. The
    same happens to anything completing after close().
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        self._transport = transport
        self._async_transport = async_transport
        self._client: httpx.Client | None = None
        self._store = ObservationStore()
        self._generation = 0
        self._closed = False

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.settings.http_timeout, transport=self._transport
            )
        return self._client

    @property
    def store(self) -> ObservationStore:
        """The most recently committed dataset."""
        return self._store

    def close(self) -> None:
        """Close HTTP client and ignore any load still in flight."""
        self._closed = True
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "DatasetLoader":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _begin(self) -> int:
        if self._closed:
            raise DataLoadError("Loader is closed")
        self._generation += 1
        return self._generation

    def _is_current(self, token: int) -> bool:
        return not self._closed and token == self._generation

    def _commit(
        self, token: int, text: str, source: str, date_column: str | None = None
    ) -> ObservationStore | None:
        if not self._is_current(token):
            logger.info(f"Discarding superseded load of {source}")
            return None

        try:
            result = parse_csv(
                text,
                date_column=date_column or self.settings.columns.date,
                quote_aware=self.settings.quote_aware,
            )
        except ValueError as e:
            logger.error(f"Could not parse {source}: {e}")
            raise DataLoadError(f"Could not parse {source}: {e}") from e

        self._store = ObservationStore.from_parse_result(result, source=source)
        if result.rejected_rows:
            logger.warning(f"{source}: {result.rejected_rows} rows rejected")
        logger.info(f"Loaded {len(self._store)} observations from {source}")
        return self._store

    def _fail(self, token: int, source: str, error: Exception) -> None:
        if not self._is_current(token):
            logger.info(f"Ignoring failure of superseded load of {source}: {error}")
            return
        logger.error(f"Error loading {source}: {error}")
        raise DataLoadError(f"Error loading {source}: {error}") from error

    @staticmethod
    def _read_file(path: Path) -> str:
        return path.read_text(encoding="utf-8-sig")

    def load_text(self, text: str, source: str = "<text>") -> ObservationStore:
        """Parse CSV text and make it the current dataset."""
        token = self._begin()
        return self._commit(token, text, source)

    def load_file(self, path: Path | str) -> ObservationStore | None:
        """Read a local CSV file."""
        path = Path(path)
        token = self._begin()
        try:
            text = self._read_file(path)
        except (OSError, UnicodeDecodeError) as e:
            self._fail(token, str(path), e)
            return None
        return self._commit(token, text, str(path))

    def load_url(self, url: str) -> ObservationStore | None:
        """Fetch a CSV over HTTP."""
        token = self._begin()
        logger.info(f"Fetching {url}...")
        try:
            response = self.client.get(url)
            response.raise_for_status()
            text = response.content.decode("utf-8-sig")
        except (httpx.HTTPError, UnicodeDecodeError) as e:
            self._fail(token, url, e)
            return None
        return self._commit(token, text, url)

    async def load_file_async(self, path: Path | str) -> ObservationStore | None:
        """
        Read a local CSV file off the event loop.

        Returns None when a newer load started (or the loader was closed)
        before this one finished.
        """
        path = Path(path)
        token = self._begin()
        try:
            text = await asyncio.to_thread(self._read_file, path)
        except (OSError, UnicodeDecodeError) as e:
            self._fail(token, str(path), e)
            return None
        return self._commit(token, text, str(path))

    async def load_url_async(self, url: str) -> ObservationStore | None:
        """
        Fetch a CSV over HTTP without blocking the event loop.

        Returns None when a newer load started (or the loader was closed)
        before this one finished.
        """
        token = self._begin()
        logger.info(f"Fetching {url}...")
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.http_timeout, transport=self._async_transport
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
            text = response.content.decode("utf-8-sig")
        except (httpx.HTTPError, UnicodeDecodeError) as e:
            self._fail(token, url, e)
            return None
        return self._commit(token, text, url)

    def load_sample(self) -> ObservationStore | None:
        """Load the bundled sample dataset (legacy column names)."""
        token = self._begin()
        try:
            text = self._read_file(SAMPLE_CSV_PATH)
        except (OSError, UnicodeDecodeError) as e:
            self._fail(token, str(SAMPLE_CSV_PATH), e)
            return None
        return self._commit(
            token, text, "sample", date_column=COLUMN_VARIANTS["legacy"].date
        )

    def load_default(self) -> ObservationStore | None:
        """Load the configured file, else the configured URL, else the sample."""
        if self.settings.csv_path is not None:
            return self.load_file(self.settings.csv_path)
        if self.settings.has_remote():
            return self.load_url(self.settings.csv_url)
        return self.load_sample()
