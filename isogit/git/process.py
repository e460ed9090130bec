# isogit Git Process
# Git command execution with a per-operation SSH identity

import os
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from isogit.exceptions import ConfigurationError, GitCommandError, GitTimeoutError, IdentityError

if TYPE_CHECKING:
    from isogit.output.console import Console

DEFAULT_TIMEOUT = 60


def get_default_proxy_path() -> Path:
    """Get the path of the SSH proxy script shipped with the package."""
    return Path(__file__).resolve().parent.parent / "bin" / "git.sh"


def resolve_ssh_proxy(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Resolve and validate the script git uses as its SSH transport.

    Args:
        path: Script path. Uses the packaged git.sh if not provided.

    Returns:
        Absolute path with symlinks dereferenced.

    Raises:
        ConfigurationError: If the script is missing or not executable.
    """
    script = Path(path).expanduser() if path is not None else get_default_proxy_path()

    if not script.is_file():
        raise ConfigurationError(f'Git proxy script not found in "{script}".')

    if not os.access(script, os.X_OK):
        raise ConfigurationError(f'Git proxy script at "{script}" is not executable.')

    return script.resolve()


def _check_readable_file(path: Path, error: type[ConfigurationError]) -> Path:
    if path.is_file() and os.access(path, os.R_OK):
        return path
    raise error(f"{path} does not exist or is not readable.")


def _check_readable_dir(path: Path) -> Path:
    if path.is_dir() and os.access(path, os.R_OK):
        return path
    raise ConfigurationError(f"{path} does not exist or is not readable.")


@dataclass
class GitProcessResult:
    """Captured output of a finished git command."""

    args: list[str]
    stdout: str
    stderr: str
    returncode: int

    @property
    def successful(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return shlex.join(self.args)


class GitCommandRunner:
    """
    Runs git commands with an isolated SSH identity.

    Credentials are handed to the SSH proxy script through environment
    variables layered over the inherited environment, so a repository can be
    cloned with a user's sandboxed key instead of the host's own key.
    """

    def __init__(
        self,
        ssh_proxy: Optional[Union[str, Path]] = None,
        *,
        identity_file: Optional[Path] = None,
        known_hosts_file: Optional[Path] = None,
        home: Optional[Path] = None,
        console: Optional["Console"] = None,
    ):
        """
        Initialize runner.

        Args:
            ssh_proxy: SSH proxy script. Uses the packaged git.sh if not provided.
            identity_file: Private key for SSH authentication.
            known_hosts_file: Known hosts file for host key verification.
            home: Home directory for the git process.
            console: Optional console used to echo commands in verbose mode.

        Raises:
            ConfigurationError: If the proxy, known hosts file or home is unusable.
            IdentityError: If the identity file is unusable.
        """
        self.ssh_proxy = resolve_ssh_proxy(ssh_proxy)
        self.identity_file = _check_readable_file(Path(identity_file), IdentityError) if identity_file else None
        self.known_hosts_file = (
            _check_readable_file(Path(known_hosts_file), ConfigurationError) if known_hosts_file else None
        )
        self.home = _check_readable_dir(Path(home)) if home else None
        self.console = console

    def env_overlay(self) -> dict[str, str]:
        """
        Get the variables layered over the inherited environment.

        Returns:
            Mapping containing only the values that are configured.
        """
        env = {
            "IDENT_KEY": self.identity_file,
            "KNOWN_HOSTS_FILE": self.known_hosts_file,
            "GIT_SSH": self.ssh_proxy,
            "HOME": self.home,
        }
        return {key: str(value) for key, value in env.items() if value}

    def execute(
        self,
        args: Union[str, Sequence[str]],
        cwd: Optional[Path] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> GitProcessResult:
        """
        Run a git command.

        Args:
            args: Argument list, or a command line to split.
            cwd: Working directory.
            timeout: Seconds before the command is aborted.

        Returns:
            GitProcessResult with the captured output, not interpreted.

        Raises:
            GitTimeoutError: If the command exceeds the timeout.
            GitCommandError: If git cannot be started.
        """
        cmd = shlex.split(args) if isinstance(args, str) else [str(a) for a in args]

        if self.console is not None:
            self.console.print_command(shlex.join(cmd))

        env = {**os.environ, **self.env_overlay()}
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env=env,
                check=False,
                capture_output=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise GitTimeoutError(
                f"Git command timed out after {timeout} seconds: {shlex.join(cmd)}",
                returncode=-1,
                stderr=_decode(e.stderr),
            ) from e
        except FileNotFoundError as e:
            if cwd is not None and not Path(cwd).is_dir():
                raise GitCommandError(f"Working directory does not exist: {cwd}") from e
            raise GitCommandError("git command not found. Is git installed?") from e

        return GitProcessResult(
            args=cmd,
            stdout=_decode(result.stdout, errors="surrogateescape"),
            stderr=_decode(result.stderr),
            returncode=result.returncode,
        )


def _decode(output: Union[str, bytes, None], errors: str = "replace") -> str:
    # surrogateescape keeps undecodable bytes so file content can be re-encoded unchanged
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors=errors)
    return output
