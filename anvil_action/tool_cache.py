"""
Downloads anvil-zksync release archives and keeps them in a version-keyed cache.
"""

import logging
import os
import platform
import shutil
import stat
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Any

import requests

from anvil_action.actions import add_path
from anvil_action.config.constants import GITHUB_API_URL, RELEASE_REPO, TOOL_NAME
from anvil_action.errors import AssetNotFoundError, ReleaseLookupError

logger = logging.getLogger(__name__)

LATEST = "latest"
DOWNLOAD_CHUNK = 1 << 16


def default_cache_root() -> Path:
    root = os.environ.get("RUNNER_TOOL_CACHE")
    if root:
        return Path(root)
    return Path.home() / ".cache" / "anvil-action" / "tools"


class ToolCache:
    """
    Host-wide cache of extracted tool directories.

    Entries live at ``<root>/<tool>/<version>/<arch>``; a sibling
    ``<arch>.complete`` marker means the entry finished copying. Entries are
    never invalidated here.
    """

    def __init__(self, root: str | Path | None = None, arch: str | None = None):
        self.root = Path(root) if root is not None else default_cache_root()
        self.arch = arch or platform.machine().lower() or "unknown"

    def _entry_dir(self, tool: str, version: str) -> Path:
        return self.root / tool / version / self.arch

    def _marker(self, tool: str, version: str) -> Path:
        return self.root / tool / version / f"{self.arch}.complete"

    def find(self, tool: str, version: str) -> Path | None:
        entry = self._entry_dir(tool, version)
        if entry.is_dir() and self._marker(tool, version).exists():
            return entry
        return None

    def cache_dir(self, source: str | Path, tool: str, version: str) -> Path:
        """Copy ``source`` into the cache and mark the entry complete."""
        entry = self._entry_dir(tool, version)
        marker = self._marker(tool, version)
        marker.unlink(missing_ok=True)
        if entry.exists():
            shutil.rmtree(entry)
        entry.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source, entry)
        marker.touch()
        return entry


class ReleaseRegistry:
    """
    GitHub releases API for one repository.

    Usage:
        registry = ReleaseRegistry("matter-labs/anvil-zksync")
        release = registry.get_release("latest")
    """

    def __init__(
        self,
        repo: str = RELEASE_REPO,
        session: requests.Session | None = None,
        token: str | None = None,
        api_url: str = GITHUB_API_URL,
        timeout: float = 30,
    ):
        self.repo = repo
        self.session = session or requests.Session()
        self.token = token if token is not None else os.environ.get("GITHUB_TOKEN")
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def release_url(self, tag: str) -> str:
        if tag == LATEST:
            return f"{self.api_url}/repos/{self.repo}/releases/latest"
        return f"{self.api_url}/repos/{self.repo}/releases/tags/{tag}"

    def get_release(self, tag: str) -> dict[str, Any]:
        """
        Fetch release metadata for ``tag``.

        Raises:
            ReleaseLookupError: On a non-success status or a release without assets
            requests.RequestException: If the request itself fails
        """
        url = self.release_url(tag)
        logger.info(f"Fetching release information from {url}")

        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        resp = self.session.get(url, headers=headers, timeout=self.timeout)
        if not resp.ok:
            raise ReleaseLookupError(
                f"Failed to fetch release info for tag {tag}. HTTP Status: {resp.status_code}"
            )

        try:
            release = resp.json()
        except ValueError as e:
            raise ReleaseLookupError(f"Release info for tag {tag} is not valid JSON: {e}") from e

        if not isinstance(release, dict) or not release.get("assets"):
            raise ReleaseLookupError(f"No release assets found for tag {tag}.")
        return release


def select_asset(assets: list[dict[str, Any]], target: str, tag: str) -> dict[str, Any]:
    """
    First asset whose name contains ``target``.

    Raises:
        AssetNotFoundError: If no asset name contains ``target``
    """
    for asset in assets:
        if target in asset.get("name", ""):
            return asset
    raise AssetNotFoundError(target, tag, [a.get("name", "") for a in assets])


def download_file(url: str, dest_dir: Path, name: str, session: requests.Session) -> Path:
    """Stream ``url`` into ``dest_dir/name``."""
    dest = dest_dir / name
    with session.get(url, stream=True, timeout=60) as resp:
        resp.raise_for_status()
        with open(dest, "wb") as f:
            for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK):
                f.write(chunk)
    return dest


def extract_archive(archive: Path, dest: Path) -> Path:
    """Extract a tar (optionally compressed) or zip archive into ``dest``."""
    dest.mkdir(parents=True, exist_ok=True)
    if archive.name.endswith(".zip"):
        with zipfile.ZipFile(archive) as zf:
            zf.extractall(dest)
        return dest

    with tarfile.open(archive) as tf:
        tf.extractall(dest, filter="data")
    return dest


def make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


class ToolProvisioner:
    """
    Resolves the node binary for a release tag and platform target.

    A cache hit needs no network. On a miss the release asset is looked up,
    downloaded, extracted and cached. Errors propagate without retries, and
    whatever was cached stays cached.
    """

    def __init__(
        self,
        cache: ToolCache | None = None,
        registry: ReleaseRegistry | None = None,
        session: requests.Session | None = None,
        tool: str = TOOL_NAME,
        workdir: str | Path | None = None,
    ):
        self.session = session or requests.Session()
        self.cache = cache or ToolCache()
        self.registry = registry or ReleaseRegistry(session=self.session)
        self.tool = tool
        self.workdir = workdir or os.environ.get("RUNNER_TEMP") or None

    def binary_path(self, tool_dir: Path) -> Path:
        return Path(tool_dir) / self.tool

    def _fetch(self, version: str, target: str) -> Path:
        release = self.registry.get_release(version)
        asset = select_asset(release["assets"], target, version)
        logger.info(f"Found asset: {asset['name']}")

        url = asset["browser_download_url"]
        logger.info(f"Downloading {self.tool} from {url}")

        with tempfile.TemporaryDirectory(dir=self.workdir) as tmp:
            tmpdir = Path(tmp)
            archive = download_file(url, tmpdir, asset["name"], self.session)
            extracted = extract_archive(archive, tmpdir / "extracted")
            tool_dir = self.cache.cache_dir(extracted, self.tool, version)

        logger.info(f"{self.tool} cached at {tool_dir}")
        return tool_dir

    def provision(self, version: str, target: str) -> Path:
        """
        Return the directory holding the node binary, ready to execute and on PATH.

        Raises:
            ReleaseLookupError: If the release cannot be described
            AssetNotFoundError: If no asset matches ``target``
        """
        tool_dir = self.cache.find(self.tool, version)
        if tool_dir is None:
            tool_dir = self._fetch(version, target)
        else:
            logger.info(f"Found cached {self.tool} at {tool_dir}")

        add_path(tool_dir)
        binary = self.binary_path(tool_dir)
        make_executable(binary)
        logger.info(f"Set execute permissions for {binary}")
        return tool_dir
