# isogit Repository
# Local clone lifecycle: clone, fetch and cleanup

import hashlib
import shutil
import tempfile
import time
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from isogit.exceptions import CloneError, GitCommandError
from isogit.git.models import GitEndpoint, LocalClone
from isogit.git.process import DEFAULT_TIMEOUT, GitCommandRunner
from isogit.git.readonly import ReadonlyRepository

if TYPE_CHECKING:
    from isogit.output.console import Console

CLONE_TIMEOUT = 600
TEMP_CLONE_DIR = "temp-clone"


def get_temp_root() -> Path:
    """Get the shared directory that holds auto-generated clones."""
    return Path(tempfile.gettempdir()) / TEMP_CLONE_DIR


def generate_local_path(url: str, temp_root: Optional[Path] = None) -> Path:
    """
    Generate a unique clone directory for a repository url.

    Args:
        url: Repository url.
        temp_root: Parent directory, created if absent. Defaults to get_temp_root().

    Returns:
        Path under temp_root named by a hash of the creation time and url.
    """
    base = Path(temp_root) if temp_root is not None else get_temp_root()
    base.mkdir(parents=True, exist_ok=True)
    digest = hashlib.sha1(f"{time.time_ns()}{url}".encode("utf-8")).hexdigest()
    return base / digest


class Repository:
    """
    Remote repository with a local clone.

    Without an explicit local path the clone goes to a generated directory
    that is removed by close(). An explicit path belongs to the caller and
    is kept. Use as a context manager, or through checkout(), so cleanup
    runs on every exit path.
    """

    def __init__(
        self,
        endpoint: GitEndpoint,
        ssh_proxy: Optional[Union[str, Path]] = None,
        *,
        local_path: Optional[Path] = None,
        runner: Optional[GitCommandRunner] = None,
        temp_root: Optional[Path] = None,
        clone_timeout: float = CLONE_TIMEOUT,
        fetch_timeout: float = DEFAULT_TIMEOUT,
        console: Optional["Console"] = None,
    ):
        """
        Initialize repository and clone or refresh it.

        Args:
            endpoint: Remote url, revision and credentials.
            ssh_proxy: SSH proxy script, ignored when runner is given.
            local_path: Caller-managed clone directory.
            runner: Pre-built command runner.
            temp_root: Parent of generated clone directories.
            clone_timeout: Seconds allowed for clone and checkout together.
            fetch_timeout: Seconds allowed for fetch.
            console: Optional console used to echo commands in verbose mode.

        Raises:
            ConfigurationError: If the proxy script or a credential path is unusable.
            CloneError: If the repository cannot be cloned.
            GitCommandError: If an existing clone cannot be fetched.
        """
        if runner is None:
            runner = GitCommandRunner(
                ssh_proxy,
                identity_file=endpoint.identity_file,
                known_hosts_file=endpoint.known_hosts_file,
                home=endpoint.home,
                console=console,
            )

        if local_path is None:
            self.clone = LocalClone(generate_local_path(endpoint.url, temp_root), owned=True)
        else:
            # An explicit path may be needed after we are done, never remove it
            self.clone = LocalClone(Path(local_path), owned=False)

        self.reader = ReadonlyRepository(endpoint, runner, self.clone.path)
        self.clone_timeout = clone_timeout
        self.fetch_timeout = fetch_timeout

        try:
            self.clone_temp_repo()
        except BaseException:
            self.close()
            raise

    def __enter__(self) -> "Repository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def endpoint(self) -> GitEndpoint:
        return self.reader.endpoint

    @property
    def runner(self) -> GitCommandRunner:
        return self.reader.runner

    @property
    def url(self) -> str:
        return self.reader.url

    @property
    def revision(self) -> str:
        return self.reader.revision

    @property
    def local_path(self) -> Path:
        return self.clone.path

    @property
    def cleanup(self) -> bool:
        return self.clone.owned

    def set_cleanup(self, value: bool) -> None:
        """Set whether close() removes the local clone."""
        self.clone.owned = value

    def clone_temp_repo(self) -> bool:
        """
        Download the repository from the remote.

        An existing directory is treated as an earlier clone and only
        fetched, so several instances can share one explicit path.

        Returns:
            True if successful.

        Raises:
            CloneError: If clone or checkout fails.
        """
        if self.clone.exists:
            self.fetch()
            return True

        path = str(self.local_path)
        deadline = time.monotonic() + self.clone_timeout

        result = self.runner.execute(["git", "clone", self.url, path, "-n"], timeout=self.clone_timeout)
        if not result.successful:
            raise CloneError.from_stderr(result.stderr)

        result = self.runner.execute(
            ["git", f"--git-dir={path}/.git", f"--work-tree={path}", "checkout", self.revision],
            timeout=max(deadline - time.monotonic(), 1),
        )
        if not result.successful:
            raise CloneError.from_stderr(result.stderr)

        return True

    def fetch(self) -> bool:
        """
        Fetch the latest tags and references from the remote.

        Returns:
            False if there is no local clone to fetch into, True otherwise.

        Raises:
            GitCommandError: If fetch fails.
        """
        if not self.clone.exists:
            return False

        result = self.runner.execute(["git", "fetch"], cwd=self.local_path, timeout=self.fetch_timeout)
        if not result.successful:
            raise GitCommandError.from_result(result)
        return True

    def close(self) -> None:
        """Remove the local clone if this instance owns it. Never raises."""
        if not self.clone.owned or not self.clone.exists:
            return
        try:
            shutil.rmtree(self.local_path)
        except OSError:
            pass

    def get_file_content(self, path: str, revision: Optional[str] = None) -> str:
        return self.reader.get_file_content(path, revision)

    def get_tags(self) -> list[str]:
        return self.reader.get_tags()

    def resolve_tag_reference(self, value: Optional[str]) -> Optional[str]:
        return self.reader.resolve_tag_reference(value)

    def resolve_git_reference(self, value: str) -> Optional[str]:
        return self.reader.resolve_git_reference(value)


@contextmanager
def checkout(
    endpoint: GitEndpoint,
    ssh_proxy: Optional[Union[str, Path]] = None,
    **kwargs,
) -> Generator[Repository, None, None]:
    """
    Acquire a cloned repository for the duration of a with block.

    Args:
        endpoint: Remote url, revision and credentials.
        ssh_proxy: SSH proxy script.
        **kwargs: Passed to Repository.

    Yields:
        Repository, closed on exit.
    """
    repo = Repository(endpoint, ssh_proxy, **kwargs)
    try:
        yield repo
    finally:
        repo.close()
