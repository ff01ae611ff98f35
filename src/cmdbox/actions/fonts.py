"""Font download actions."""

import re
import sys

from rich.markup import escape

from cmdbox.actions.context import ActionContext
from cmdbox.dispatch import RegisterFunction
from cmdbox.exceptions import ActionError
from cmdbox.utils.download import download, fetch_text
from cmdbox.utils.logging import get_logger

log = get_logger(__name__)

RELEASES = {
    "iosevka": "be5invis/Iosevka",
    "sarasa": "be5invis/Sarasa-Gothic",
}
MARKER = "SuperTTC"


def release_hashfile(mirror: str, repo: str) -> str:
    """URL of the SHA-256 list for the latest release of ``repo`` on a mirror."""
    return f"{mirror.rstrip('/')}/github-release/{repo}/LatestRelease/SHA-256.txt"


def find_asset(hash_list: str, marker: str = MARKER) -> str | None:
    """Return the file name of the first ``<hash> <name>`` line containing marker."""
    for line in hash_list.splitlines():
        if marker in line:
            fields = line.split()
            if len(fields) < 2:
                raise ActionError(f"Malformed checksum line: {line!r}")
            return fields[1]
    return None


def install(register: RegisterFunction, ctx: ActionContext) -> None:
    def iosevka(_m: re.Match[str], *args: str) -> int:
        repo = RELEASES["sarasa"] if "--sarasa" in args else RELEASES["iosevka"]
        downloads = ctx.config.downloads
        hashfile = release_hashfile(downloads.mirror, repo)

        content = fetch_text(
            hashfile,
            client=ctx.http_client,
            timeout=downloads.timeout,
            retries=downloads.retries,
        )
        name = find_asset(content)
        if name is None:
            ctx.err_console.print(escape(content))
            return 1
        log.debug("Latest %s asset: %s", repo, name)

        dest = ctx.downloads_dir / name
        if dest.exists():
            ctx.console.print(f"{escape(str(dest))} already exists")
            return 0
        if not ctx.confirm(f"Download {name}?", ctx.console):
            return 0

        ctx.console.print(f"Downloading {escape(str(dest))}")
        src = hashfile.rsplit("/", 1)[0] + "/" + name
        download(
            src,
            ctx.downloads_dir,
            client=ctx.http_client,
            timeout=downloads.timeout,
            retries=downloads.retries,
        )
        ctx.console.print("Done.")
        if sys.platform == "darwin":
            ctx.console.print(
                "Hint: Copy the TTC file to ~/Library/Fonts to finish installation."
            )
        return 0

    register("iosevka", run=iosevka, description="Append --sarasa to download Sarasa")
