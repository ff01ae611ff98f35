"""Local system and filesystem actions."""

import json
import re
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from cmdbox.actions.context import ActionContext
from cmdbox.dispatch import RegisterFunction
from cmdbox.exceptions import ActionError
from cmdbox.utils.download import unzip
from cmdbox.utils.files import scan_broken_node_modules
from cmdbox.utils.logging import get_logger
from cmdbox.utils.table import print_table
from cmdbox.utils.text import clean_version

log = get_logger(__name__)

VSWHERE = r"C:\Program Files (x86)\Microsoft Visual Studio\Installer\vswhere.exe"
NPM_DIFF_URL = "https://hyrious.me/npm-diff/?a={name}@{current}&b={name}@{latest}"


@dataclass
class OutdatedPackage:
    """An npm dependency with a newer release."""

    name: str
    current: str
    latest: str

    @property
    def diff_url(self) -> str:
        return NPM_DIFF_URL.format(
            name=self.name,
            current=clean_version(self.current),
            latest=clean_version(self.latest),
        )


def npm_outdated(cwd: Path, *, check_global: bool = False) -> list[OutdatedPackage]:
    """Run ``npm outdated --json`` and collect packages behind their latest release.

    Args:
        cwd: Project directory to check.
        check_global: Check globally installed packages instead.

    Raises:
        ActionError: If npm is missing, fails, or prints something other than JSON.
    """
    npm = shutil.which("npm")
    if npm is None:
        raise ActionError("npm not found on PATH")

    cmd = [npm, "outdated", "--json"]
    if check_global:
        cmd.append("--global")
    try:
        proc = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
    except OSError as e:
        raise ActionError(f"npm outdated failed: {e}") from e
    # Exit status 1 only means something is outdated.
    if proc.returncode not in (0, 1):
        raise ActionError(f"npm outdated failed: {proc.stderr.strip()}")

    try:
        data = json.loads(proc.stdout or "{}")
    except json.JSONDecodeError as e:
        raise ActionError(f"Unexpected npm output: {e}") from e

    packages = []
    for name, info in sorted(data.items()):
        # Workspaces report one entry per dependent.
        if isinstance(info, list):
            info = info[0] if info else {}
        current = info.get("current")
        latest = info.get("latest")
        if current and latest and current != latest:
            packages.append(OutdatedPackage(name, current, latest))
    return packages


def find_vcvarsall(vswhere: str = VSWHERE) -> Path:
    """Locate vcvarsall.bat of the latest Visual Studio installation."""
    try:
        proc = subprocess.run(
            [vswhere, "-latest", "-property", "installationPath"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        raise ActionError(f"vswhere failed: {e}") from e
    base = proc.stdout.strip()
    if not base:
        raise ActionError("No Visual Studio installation found")
    return Path(base) / "vc" / "Auxiliary" / "Build" / "vcvarsall.bat"


def install(register: RegisterFunction, ctx: ActionContext) -> None:
    def hello(_m: re.Match[str], *args: str) -> None:
        ctx.console.print("world")

    def node_modules(_m: re.Match[str], *args: str) -> int:
        broken = scan_broken_node_modules(ctx.working_dir)
        if not broken:
            ctx.console.print("[dim]No broken modules[/dim]")
            return 0

        print_table(
            [{"Package": b.name, "Leftover": str(b.garbage)} for b in broken],
            console=ctx.console,
        )
        if "--clean" not in args:
            ctx.console.print(f"\n[dim]{len(broken)} found; pass --clean to remove[/dim]")
            return 0

        for b in broken:
            log.info("Removing %s", b.garbage)
            shutil.rmtree(b.garbage, ignore_errors=True)
        ctx.console.print(f"Removed {len(broken)} leftovers.")
        return 0

    def outdated(_m: re.Match[str], *args: str) -> int:
        packages = npm_outdated(ctx.working_dir, check_global="--global" in args)
        if not packages:
            ctx.console.print("[dim]All packages are up to date[/dim]")
            return 0

        print_table(
            [
                {"Package": p.name, "From": p.current, "To": p.latest, "Diff": p.diff_url}
                for p in packages
            ],
            title="npm (global)" if "--global" in args else None,
            console=ctx.console,
        )
        return 0

    def extract(_m: re.Match[str], archive: re.Match[str], *args: str) -> None:
        file = ctx.working_dir / archive.string
        outdir = ctx.working_dir / args[0] if args else file.parent
        if not file.is_file():
            raise ActionError(f"{file} does not exist")
        for path in unzip(file, outdir):
            ctx.console.print(f". {escape(str(path))}", highlight=False)

    register("hello", run=hello)
    register(
        re.compile(r"^(nm|node-modules)$"),
        run=node_modules,
        description="List interrupted installs in node_modules; --clean removes them",
    )
    register(
        "outdated",
        run=outdated,
        description="List npm packages with newer releases; --global for global installs",
    )
    register(
        "unzip",
        re.compile(r"\.zip$", re.IGNORECASE),
        run=extract,
        description="Extract a zip archive (optionally into a directory)",
    )

    if sys.platform == "win32":

        def vcvarsall(_m: re.Match[str], *args: str) -> None:
            ctx.console.print(str(find_vcvarsall()), highlight=False)

        register("vcvarsall", run=vcvarsall, description="Find vcvarsall.bat")
