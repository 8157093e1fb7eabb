"""Remote template addressing and archive download."""

from __future__ import annotations

import io
import logging
import os
import posixpath
import re
import shutil
import tarfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

import httpx

logger = logging.getLogger(__name__)

DEFAULT_REF = "main"
DEFAULT_FETCH_TIMEOUT = 60.0
AUTH_TOKEN_ENV = "CREATE_SWEET_AUTH_TOKEN"

ADDRESS_PATTERN = re.compile(
    r"^(?P<provider>[a-z]+):(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)"
    r"(?:/(?P<subpath>[^#]+?))?/?(?:#(?P<ref>.+))?$"
)


class TransportError(Exception):
    """Raised when a template cannot be downloaded or extracted."""


@dataclass(frozen=True)
class TemplateAddress:
    """A parsed provider:owner/repo/subpath#ref address."""

    provider: str
    owner: str
    repo: str
    subpath: str = ""
    ref: str = DEFAULT_REF

    @classmethod
    def parse(cls, address: str) -> TemplateAddress:
        """Parse an address string.

        Raises:
            TransportError: If the address is malformed.
        """
        match = ADDRESS_PATTERN.match(address.strip())
        if match is None:
            raise TransportError(f"Invalid template address: {address}")
        return cls(
            provider=match.group("provider"),
            owner=match.group("owner"),
            repo=match.group("repo"),
            subpath=(match.group("subpath") or "").strip("/"),
            ref=match.group("ref") or DEFAULT_REF,
        )

    def __str__(self) -> str:
        path = f"{self.owner}/{self.repo}"
        if self.subpath:
            path = f"{path}/{self.subpath}"
        return f"{self.provider}:{path}#{self.ref}"


def _github_tarball(address: TemplateAddress) -> str:
    return (
        f"https://codeload.github.com/{address.owner}/{address.repo}"
        f"/tar.gz/{address.ref}"
    )


def _gitlab_tarball(address: TemplateAddress) -> str:
    return (
        f"https://gitlab.com/{address.owner}/{address.repo}/-/archive/"
        f"{address.ref}/{address.repo}-{address.ref}.tar.gz"
    )


def _bitbucket_tarball(address: TemplateAddress) -> str:
    return (
        f"https://bitbucket.org/{address.owner}/{address.repo}/get/"
        f"{address.ref}.tar.gz"
    )


TARBALL_URLS = {
    "github": _github_tarball,
    "gitlab": _gitlab_tarball,
    "bitbucket": _bitbucket_tarball,
}


def tarball_url(address: TemplateAddress) -> str:
    """Return the archive URL for an address."""
    builder = TARBALL_URLS.get(address.provider)
    if builder is None:
        supported = ", ".join(sorted(TARBALL_URLS))
        raise TransportError(
            f"Unsupported provider: {address.provider} (supported: {supported})"
        )
    return builder(address)


def is_empty_dir(path: Path) -> bool:
    return path.is_dir() and not any(path.iterdir())


class TemplateTransport(ABC):
    """Materializes a remote template's file tree on local disk."""

    @abstractmethod
    def download(
        self, address: TemplateAddress, target_dir: Path, force: bool = False
    ) -> None:
        """Write the tree at `address` under `target_dir`.

        Raises:
            TransportError: On any network, lookup, or archive failure.
        """
        ...


class HttpArchiveTransport(TemplateTransport):
    """Downloads a provider tarball and extracts the addressed subpath."""

    def __init__(
        self,
        timeout: float | None = DEFAULT_FETCH_TIMEOUT,
        auth_token: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._timeout = timeout
        self._auth_token = auth_token or os.environ.get(AUTH_TOKEN_ENV)
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": "create-sweet"}
        if self._auth_token:
            headers["Authorization"] = f"Bearer {self._auth_token}"
        return headers

    def _get_archive(self, url: str) -> bytes:
        client = self._client or httpx.Client(
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
        )
        try:
            response = client.get(url, headers=self._headers())
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to download {url}: {e}") from e
        finally:
            if self._client is None:
                client.close()

        if response.status_code == 404:
            raise TransportError(f"Template archive not found: {url}")
        if response.status_code != 200:
            raise TransportError(
                f"Failed to download {url}: HTTP {response.status_code}"
            )
        return response.content

    def download(
        self, address: TemplateAddress, target_dir: Path, force: bool = False
    ) -> None:
        """Download the archive and extract the addressed subpath."""
        if target_dir.exists() and not is_empty_dir(target_dir) and not force:
            raise TransportError(
                f"Destination {target_dir} already exists and is not empty"
            )

        url = tarball_url(address)
        logger.debug("Downloading %s from %s", address, url)
        archive = self._get_archive(url)

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TransportError(f"Cannot create {target_dir}: {e}") from e
        written = extract_subpath(archive, address.subpath, target_dir)
        if written == 0:
            raise TransportError(
                f"Subpath '{address.subpath}' not found in {address.owner}/"
                f"{address.repo}#{address.ref}"
            )
        logger.debug("Extracted %d files into %s", written, target_dir)


def _member_path(name: str, prefix: PurePosixPath | None) -> PurePosixPath | None:
    """Map an archive member name to a path relative to the subpath.

    Returns None for members outside the subpath or for the subpath itself.
    """
    parts = PurePosixPath(name).parts[1:]
    if not parts:
        return None
    relative = PurePosixPath(*parts)
    if prefix is not None:
        try:
            relative = relative.relative_to(prefix)
        except ValueError:
            return None
    if relative == PurePosixPath("."):
        return None
    if relative.is_absolute() or ".." in relative.parts:
        raise TransportError(f"Unsafe path in archive: {name}")
    return relative


def _symlink_target(relative: PurePosixPath, linkname: str) -> str | None:
    """Return the link target if it resolves inside the extracted tree."""
    if PurePosixPath(linkname).is_absolute():
        return None
    resolved = posixpath.normpath(posixpath.join(str(relative.parent), linkname))
    if resolved == ".." or resolved.startswith("../"):
        return None
    return linkname


def extract_subpath(archive: bytes, subpath: str, target_dir: Path) -> int:
    """Extract archive members below `subpath` into `target_dir`.

    Provider archives wrap everything in a single top-level directory
    (e.g. "repo-main/"), which is stripped along with the subpath prefix.
    Symlinks and hard links are kept when they point inside the extracted
    tree; anything else is skipped with a warning.

    Returns:
        Number of files and links written.
    """
    prefix = PurePosixPath(subpath) if subpath else None
    written = 0
    root = target_dir.resolve()

    try:
        with tarfile.open(fileobj=io.BytesIO(archive), mode="r:gz") as tar:
            for member in tar:
                relative = _member_path(member.name, prefix)
                if relative is None:
                    continue

                dest = root.joinpath(*relative.parts)
                if member.isdir():
                    dest.mkdir(parents=True, exist_ok=True)
                elif member.isfile():
                    source = tar.extractfile(member)
                    if source is None:
                        continue
                    dest.parent.mkdir(parents=True, exist_ok=True)
                    with source, dest.open("wb") as out:
                        shutil.copyfileobj(source, out)
                    dest.chmod(member.mode & 0o777 | 0o600)
                    written += 1
                elif member.issym():
                    link = _symlink_target(relative, member.linkname)
                    if link is None:
                        logger.warning(
                            "Skipping symlink %s pointing outside the template: %s",
                            member.name,
                            member.linkname,
                        )
                        continue
                    dest.parent.mkdir(parents=True, exist_ok=True)
                    dest.symlink_to(link)
                    written += 1
                elif member.islnk():
                    try:
                        linked = _member_path(member.linkname, prefix)
                    except TransportError:
                        linked = None
                    source_path = root.joinpath(*linked.parts) if linked else None
                    if source_path is None or not source_path.is_file():
                        logger.warning(
                            "Skipping hard link %s to %s outside the template",
                            member.name,
                            member.linkname,
                        )
                        continue
                    dest.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(source_path, dest)
                    written += 1
                else:
                    logger.warning("Skipping special archive member %s", member.name)
    except (tarfile.TarError, EOFError, OSError) as e:
        raise TransportError(f"Corrupt or unreadable template archive: {e}") from e

    return written
