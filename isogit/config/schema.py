# isogit Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from isogit.git.models import DEFAULT_REVISION, GitEndpoint
from isogit.git.process import resolve_ssh_proxy


def _expand(v: Optional[str]) -> Optional[str]:
    if not v:
        return None
    return str(Path(v).expanduser())


class SshConfig(BaseModel):
    """Credentials handed to every git command."""

    proxy_script: Optional[str] = Field(default=None, description="SSH proxy script used as GIT_SSH (default: packaged git.sh)")
    identity_file: Optional[str] = Field(default=None, description="Private key (default: ~/.ssh/id_rsa if readable)")
    known_hosts_file: Optional[str] = Field(default=None, description="Known hosts file for host key verification")
    home: Optional[str] = Field(default=None, description="HOME directory for git commands")

    @field_validator("proxy_script", "identity_file", "known_hosts_file", "home")
    @classmethod
    def expand_paths(cls, v: Optional[str]) -> Optional[str]:
        """Expand ~ in paths."""
        return _expand(v)


class CloneConfig(BaseModel):
    """Local clone settings."""

    temp_root: Optional[str] = Field(default=None, description="Parent of generated clone directories")
    clone_timeout: int = Field(default=600, gt=0, description="Seconds allowed for clone and checkout")
    command_timeout: int = Field(default=60, gt=0, description="Seconds allowed for fetch and lookups")

    @field_validator("temp_root")
    @classmethod
    def expand_temp_root(cls, v: Optional[str]) -> Optional[str]:
        """Expand ~ in path."""
        return _expand(v)


class OutputConfig(BaseModel):
    """Console output settings."""

    verbose: bool = Field(default=False, description="Echo git commands")
    colored: bool = Field(default=True, description="Colored output")


class IsogitConfig(BaseModel):
    """Root configuration model."""

    ssh: SshConfig = Field(default_factory=SshConfig)
    clone: CloneConfig = Field(default_factory=CloneConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def resolve_proxy(self) -> Path:
        """
        Resolve the SSH proxy script once for injection into runners.

        Raises:
            ConfigurationError: If the script is missing or not executable.
        """
        return resolve_ssh_proxy(self.ssh.proxy_script)

    def build_endpoint(self, url: str, revision: Optional[str] = None) -> GitEndpoint:
        """Create an endpoint carrying the configured credentials."""
        return GitEndpoint(
            url=url,
            revision=revision or DEFAULT_REVISION,
            identity_file=Path(self.ssh.identity_file) if self.ssh.identity_file else None,
            known_hosts_file=Path(self.ssh.known_hosts_file) if self.ssh.known_hosts_file else None,
            home=Path(self.ssh.home) if self.ssh.home else None,
        )

    @property
    def temp_root(self) -> Optional[Path]:
        return Path(self.clone.temp_root) if self.clone.temp_root else None
