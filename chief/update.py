"""Checking for and installing newer releases."""

from __future__ import annotations

import hashlib
import json
import os
import platform
import shutil
import sys
import tempfile
import urllib.error
import urllib.request
from contextlib import contextmanager, suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

RELEASES_URL_TEMPLATE = "https://api.github.com/repos/{repository}/releases/latest"
DEFAULT_REPOSITORY = "chief/chief"
CHECK_TIMEOUT = 10.0
DOWNLOAD_TIMEOUT = 300.0

_OS_NAMES = {"linux": "linux", "darwin": "darwin", "windows": "windows", "freebsd": "freebsd"}
_ARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "armv7l": "arm",
}


class UpdateError(Exception):
    """Raised when checking for or installing an update fails."""


class RateLimitedError(UpdateError):
    """Raised when the release API refuses the request because of rate limits."""

    def __init__(self, message: str = "GitHub API rate limit exceeded, try again later"):
        super().__init__(message)


@dataclass(frozen=True)
class Asset:
    """A downloadable file attached to a release."""

    name: str
    browser_download_url: str = ""

    @classmethod
    def from_json(cls, data: object) -> Asset:
        if not isinstance(data, dict):
            raise ValueError("asset is not an object")
        name = data.get("name") or ""
        url = data.get("browser_download_url") or ""
        if not isinstance(name, str) or not isinstance(url, str):
            raise ValueError("asset fields must be strings")
        return cls(name=name, browser_download_url=url)


@dataclass(frozen=True)
class Release:
    """A published release and its assets."""

    tag_name: str = ""
    assets: tuple[Asset, ...] = ()

    @classmethod
    def from_json(cls, data: object) -> Release:
        if not isinstance(data, dict):
            raise ValueError("release is not an object")
        tag = data.get("tag_name") or ""
        assets = data.get("assets") or []
        if not isinstance(tag, str):
            raise ValueError("tag_name must be a string")
        if not isinstance(assets, list):
            raise ValueError("assets must be a list")
        return cls(tag_name=tag, assets=tuple(Asset.from_json(item) for item in assets))


@dataclass(frozen=True)
class CheckResult:
    """Outcome of comparing the running version with the latest release."""

    current_version: str
    latest_version: str
    update_available: bool


@dataclass(frozen=True)
class Options:
    """Settings for the update checker; empty values fall back to defaults."""

    releases_url: str = ""
    repository: str = DEFAULT_REPOSITORY
    binary_path: str = ""
    goos: str = ""
    goarch: str = ""
    extra_headers: dict[str, str] = field(default_factory=dict)

    @property
    def resolved_releases_url(self) -> str:
        return self.releases_url or RELEASES_URL_TEMPLATE.format(repository=self.repository)

    @property
    def platform(self) -> tuple[str, str]:
        system = platform.system().lower()
        machine = platform.machine().lower()
        goos = self.goos or _OS_NAMES.get(system, system)
        goarch = self.goarch or _ARCH_NAMES.get(machine, machine)
        return goos, goarch


@contextmanager
def _open(url: str, timeout: float, action: str, headers: dict[str, str] | None = None) -> Iterator:
    request = urllib.request.Request(url, headers=headers or {})
    try:
        response = urllib.request.urlopen(request, timeout=timeout)
    except urllib.error.HTTPError as exc:
        response = exc
    except (urllib.error.URLError, OSError, ValueError) as exc:
        raise UpdateError(f"{action}: {exc}") from exc
    with response:
        yield response.getcode(), response


def _get_release(options: Options) -> Release | None:
    """Fetch the latest release, or ``None`` when rate limited."""
    with _open(
        options.resolved_releases_url, CHECK_TIMEOUT, "fetching latest release", options.extra_headers
    ) as (status, response):
        if status == 403:
            return None
        if status != 200:
            raise UpdateError(f"GitHub API returned status {status}")
        try:
            return Release.from_json(json.load(response))
        except (ValueError, OSError) as exc:
            raise UpdateError(f"parsing release response: {exc}") from exc


def normalize_version(version: str) -> str:
    """Strip a leading ``v`` from a version string."""
    return version.removeprefix("v")


def base_version(version: str) -> str:
    """Return the release a ``git describe`` version was built from.

    ``0.4.0-61-gd06835b`` and ``0.4.0-61-gd06835b-dirty`` both give ``0.4.0``.
    """
    version = normalize_version(version).removesuffix("-dirty")
    parts = version.split("-")
    if len(parts) >= 3 and parts[-1].startswith("g"):
        return "-".join(parts[:-2])
    return version


def compare_versions(current: str, latest: str) -> bool:
    """Whether ``latest`` differs from the release ``current`` was built from."""
    current = normalize_version(current)
    latest = normalize_version(latest)
    return base_version(current) != latest and current != "dev"


def check_for_update(current_version: str, options: Options | None = None) -> CheckResult:
    """Report whether a newer release than ``current_version`` exists."""
    options = options or Options()
    current = normalize_version(current_version)
    release = _get_release(options)
    if release is None:
        return CheckResult(current, current, False)
    latest = normalize_version(release.tag_name)
    return CheckResult(
        current_version=current,
        latest_version=latest,
        update_available=base_version(current) != latest and current != "dev",
    )


def find_assets(
    assets: Iterator[Asset] | list[Asset] | tuple[Asset, ...], goos: str, goarch: str
) -> tuple[Asset | None, Asset | None]:
    """Return the binary and checksum assets for a platform, either possibly ``None``."""
    binary_name = f"chief-{goos}-{goarch}"
    checksum_name = binary_name + ".sha256"
    binary = checksum = None
    for asset in assets:
        if asset.name == binary_name:
            binary = asset
        if asset.name == checksum_name:
            checksum = asset
    return binary, checksum


def check_write_permission(directory: str | os.PathLike) -> None:
    """Raise ``OSError`` unless a file can be created in ``directory``."""
    with tempfile.NamedTemporaryFile(dir=directory, prefix=".chief-update-check-"):
        pass


def download_to_temp(url: str, directory: str | os.PathLike) -> str:
    """Download ``url`` into a new temporary file in ``directory`` and return its path."""
    with _open(url, DOWNLOAD_TIMEOUT, f"downloading {url}") as (status, response):
        if status != 200:
            raise UpdateError(f"download returned status {status}")
        try:
            handle, path = tempfile.mkstemp(dir=directory, prefix=".chief-update-")
        except OSError as exc:
            raise UpdateError(f"creating temp file: {exc}") from exc
        try:
            with os.fdopen(handle, "wb") as out:
                shutil.copyfileobj(response, out)
        except OSError as exc:
            with suppress(OSError):
                os.remove(path)
            raise UpdateError(f"writing download: {exc}") from exc
    return path


def verify_checksum(file_path: str | os.PathLike, checksum_url: str) -> None:
    """Check a file's SHA-256 against the checksum published at ``checksum_url``."""
    with _open(checksum_url, CHECK_TIMEOUT, "downloading checksum") as (status, response):
        if status != 200:
            raise UpdateError(f"checksum download returned status {status}")
        try:
            body = response.read()
        except OSError as exc:
            raise UpdateError(f"reading checksum: {exc}") from exc

    fields = body.decode("utf-8", errors="replace").split()
    if not fields:
        raise UpdateError("checksum file is empty")
    expected = fields[0]

    digest = hashlib.sha256()
    try:
        with open(file_path, "rb") as source:
            for chunk in iter(lambda: source.read(65536), b""):
                digest.update(chunk)
    except OSError as exc:
        raise UpdateError(f"opening file for checksum: {exc}") from exc

    actual = digest.hexdigest()
    if actual != expected:
        raise UpdateError(f"expected {expected}, got {actual}")


def _current_binary(options: Options) -> Path:
    location = options.binary_path or sys.argv[0]
    if not location:
        raise UpdateError("finding current binary path: unknown")
    try:
        return Path(location).resolve(strict=True)
    except OSError as exc:
        raise UpdateError(f"resolving binary path: {exc}") from exc


def perform_update(current_version: str, options: Options | None = None) -> CheckResult:
    """Download the latest release and replace the running binary with it."""
    options = options or Options()
    release = _get_release(options)
    if release is None:
        raise RateLimitedError()

    latest = normalize_version(release.tag_name)
    current = normalize_version(current_version)
    if base_version(current) == latest:
        return CheckResult(current, latest, False)

    goos, goarch = options.platform
    binary, checksum = find_assets(release.assets, goos, goarch)
    if binary is None:
        raise UpdateError(f"no binary available for {goos}/{goarch}")

    binary_path = _current_binary(options)
    directory = binary_path.parent
    try:
        check_write_permission(directory)
    except OSError as exc:
        raise UpdateError("Permission denied. Run 'sudo chief update' to upgrade.") from exc

    try:
        temp_path = download_to_temp(binary.browser_download_url, directory)
    except UpdateError as exc:
        raise UpdateError(f"downloading update: {exc}") from exc

    try:
        if checksum is not None:
            try:
                verify_checksum(temp_path, checksum.browser_download_url)
            except UpdateError as exc:
                raise UpdateError(f"checksum verification failed: {exc}") from exc
        try:
            os.chmod(temp_path, 0o755)
        except OSError as exc:
            raise UpdateError(f"setting permissions on new binary: {exc}") from exc
        try:
            os.replace(temp_path, binary_path)
        except OSError as exc:
            raise UpdateError(f"replacing binary: {exc}") from exc
    finally:
        with suppress(FileNotFoundError):
            os.remove(temp_path)

    return CheckResult(current, latest, True)