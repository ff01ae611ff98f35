"""HTTP download and archive extraction helpers."""

import contextlib
import shutil
import tempfile
import zipfile
from collections.abc import Iterator
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

import httpx

from cmdbox.exceptions import DownloadError, ExtractError
from cmdbox.utils.logging import get_logger
from cmdbox.utils.retry import with_retry
from cmdbox.utils.text import try_unescape

log = get_logger(__name__)

DEFAULT_TIMEOUT = 60.0


@contextlib.contextmanager
def _client_scope(
    client: httpx.Client | None, timeout: float
) -> Iterator[httpx.Client]:
    """Yield ``client`` as-is, or a short-lived client owned by this scope."""
    if client is not None:
        yield client
        return
    with httpx.Client(follow_redirects=True, timeout=timeout) as owned:
        yield owned


def filename_from_url(url: str) -> str:
    """Return the unescaped last path segment of ``url``."""
    name = try_unescape(PurePosixPath(urlsplit(url).path).name)
    if not name:
        raise DownloadError(f"Cannot derive a file name from {url}")
    return name


def fetch_text(
    url: str,
    *,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    retries: int = 3,
) -> str:
    """GET a small text resource.

    Raises:
        DownloadError: If the server answers with an error status.
    """

    @with_retry(max_attempts=retries)
    def _get(http: httpx.Client) -> httpx.Response:
        return http.get(url)

    with _client_scope(client, timeout) as http:
        log.debug("GET %s", url)
        response = _get(http)
        if response.is_error:
            raise DownloadError(
                f"GET {url} returned {response.status_code}: {response.text}"
            )
        return response.text


def _stream_to_file(http: httpx.Client, url: str, target: Path) -> None:
    with http.stream("GET", url) as response:
        if response.is_error:
            response.read()
            raise DownloadError(
                f"GET {url} returned {response.status_code}: {response.text}"
            )
        with open(target, "wb") as f:
            for chunk in response.iter_bytes():
                f.write(chunk)


def download(
    url: str,
    outdir: Path,
    *,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    retries: int = 3,
) -> Path:
    """Download ``url`` into ``outdir`` and return the final path.

    The body is written to a private temporary directory first and only
    moved into ``outdir`` once complete, so an interrupted download never
    leaves a truncated file behind. The temporary directory is removed
    whether or not the download succeeds.

    Args:
        url: Resource to fetch. Its unescaped basename becomes the file name.
        outdir: Destination directory (created if missing).
        client: Optional httpx client to reuse.
        timeout: Timeout for a client created by this call.
        retries: Attempts for transient network errors.

    Returns:
        Path of the downloaded file.

    Raises:
        DownloadError: On an error status; carries the response text.
    """
    name = filename_from_url(url)
    tmpdir = Path(tempfile.mkdtemp(prefix="cmdbox-"))
    try:
        partial = tmpdir / name
        fetch = with_retry(max_attempts=retries)(_stream_to_file)
        with _client_scope(client, timeout) as http:
            log.info("Downloading %s", url)
            fetch(http, url, partial)

        outdir.mkdir(parents=True, exist_ok=True)
        dest = outdir / name
        shutil.move(str(partial), str(dest))
        return dest
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


def unzip(file: Path, outdir: Path) -> list[Path]:
    """Extract the file entries of a zip archive into ``outdir``.

    Directory entries are skipped; parent directories are created as needed.
    Symlinks are not restored.

    Returns:
        Paths of the extracted files, in archive order.

    Raises:
        ExtractError: If the archive is unreadable or an entry would land
            outside ``outdir``.
    """
    root = outdir.resolve()
    extracted: list[Path] = []
    try:
        with zipfile.ZipFile(file) as archive:
            for entry in archive.infolist():
                if entry.is_dir():
                    continue
                target = (root / entry.filename).resolve()
                if not target.is_relative_to(root):
                    raise ExtractError(
                        f"Entry {entry.filename!r} escapes {outdir}"
                    )
                target.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(entry) as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst)
                extracted.append(target)
    except zipfile.BadZipFile as e:
        raise ExtractError(f"{file} is not a zip archive: {e}") from e
    return extracted
