# isogit Readonly Repository
# File content, tag listing and reference resolution against a remote

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from isogit.exceptions import GitCommandError, GitFileNotFoundError
from isogit.git.models import GitEndpoint
from isogit.git.process import DEFAULT_TIMEOUT, GitCommandRunner
from isogit.git.refs import is_commit_sha, parse_remote_refs, strip_ref_prefix

if TYPE_CHECKING:
    from isogit.output.console import Console


class ReadonlyRepository:
    """
    Read-only view of a remote repository.

    Tag listing and reference resolution talk to the remote directly.
    File content and tag description need a local clone; without one they
    run in the current working directory.
    """

    def __init__(
        self,
        endpoint: GitEndpoint,
        runner: GitCommandRunner,
        local_path: Optional[Path] = None,
    ):
        self.endpoint = endpoint
        self.runner = runner
        self.local_path = Path(local_path) if local_path is not None else None

    @classmethod
    def from_endpoint(
        cls,
        endpoint: GitEndpoint,
        ssh_proxy: Optional[Union[str, Path]] = None,
        local_path: Optional[Path] = None,
        console: Optional["Console"] = None,
    ) -> "ReadonlyRepository":
        """
        Create a repository with a runner scoped to the endpoint's credentials.

        Raises:
            ConfigurationError: If the proxy script or a credential path is unusable.
        """
        runner = GitCommandRunner(
            ssh_proxy,
            identity_file=endpoint.identity_file,
            known_hosts_file=endpoint.known_hosts_file,
            home=endpoint.home,
            console=console,
        )
        return cls(endpoint, runner, local_path)

    @property
    def url(self) -> str:
        return self.endpoint.url

    @property
    def revision(self) -> str:
        return self.endpoint.revision

    @property
    def identity_file(self) -> Optional[Path]:
        return self.runner.identity_file

    def get_file_content(self, path: str, revision: Optional[str] = None) -> str:
        """
        Get a file from the given revision.

        Args:
            path: File path relative to the repository root.
            revision: Revision to read from. Defaults to the endpoint revision.

        Returns:
            Raw file content.

        Raises:
            GitFileNotFoundError: If the file does not exist at the revision.
            GitCommandError: For any other failure.
        """
        revision = revision if revision is not None else self.revision
        result = self.runner.execute(["git", "show", f"{revision}:{path}"], cwd=self.local_path)
        if result.successful:
            return result.stdout

        # git exits 128 for every failure here, only the message tells them apart
        if "does not exist" in result.stderr.lower():
            raise GitFileNotFoundError(result.stderr.strip(), stderr=result.stderr)

        raise GitCommandError.from_result(result)

    def get_tags(self) -> list[str]:
        """
        Get the tags of the remote repository.

        Returns:
            Tag names in the order the remote reports them.

        Raises:
            GitCommandError: If the tags cannot be listed.
        """
        result = self.runner.execute(["git", "ls-remote", "--refs", "--tags", self.url])
        if not result.successful:
            raise GitCommandError.from_result(result)

        return [strip_ref_prefix(name) for name in parse_remote_refs(result.stdout).values()]

    def resolve_tag_reference(self, value: Optional[str]) -> Optional[str]:
        """
        Attempt to resolve a commit to a tag reference.

        Not every commit is reachable from a tag, so a failed lookup is not
        an error.

        Args:
            value: Commit sha or other revision.

        Returns:
            Tag description, the original value if it cannot be described,
            or None for an empty value.
        """
        if not value:
            return None

        result = self.runner.execute(["git", "describe", "--tags", value], cwd=self.local_path)
        if not result.successful:
            return value

        return result.stdout.replace("\n", "").replace("\r", "")

    def resolve_git_reference(self, value: str) -> Optional[str]:
        """
        Attempt to resolve a git reference to a single commit sha.

        Args:
            value: Branch, tag or sha.

        Returns:
            Commit sha, or None if the reference does not resolve.

        Raises:
            GitCommandError: If the remote cannot be queried.
        """
        if is_commit_sha(value):
            return value

        result = self.runner.execute(["git", "ls-remote", self.url, value], timeout=DEFAULT_TIMEOUT)
        if not result.successful:
            raise GitCommandError.from_result(result)

        output = result.stdout.strip()
        if not output:
            return None

        parsed = parse_remote_refs(output)
        return next(iter(parsed), None)
