# isogit Git Models
# Endpoint and local clone descriptions shared by the repository types

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_REVISION = "master"


def default_identity_file() -> Optional[Path]:
    """
    Get the caller's default SSH key.

    Returns:
        Path to $HOME/.ssh/id_rsa if it is readable, None otherwise.
    """
    home = os.environ.get("HOME")
    if not home:
        return None
    candidate = Path(home) / ".ssh" / "id_rsa"
    if candidate.is_file() and os.access(candidate, os.R_OK):
        return candidate
    return None


@dataclass
class GitEndpoint:
    """
    Remote repository together with the credentials used to reach it.

    When no identity file is given, the caller's default SSH key is used
    if it can be read.
    """

    url: str
    revision: str = DEFAULT_REVISION
    identity_file: Optional[Path] = None
    known_hosts_file: Optional[Path] = None
    home: Optional[Path] = None
    use_default_identity: bool = field(default=True, repr=False)

    def __post_init__(self) -> None:
        if self.identity_file is not None:
            self.identity_file = Path(self.identity_file).expanduser()
        elif self.use_default_identity:
            self.identity_file = default_identity_file()
        if self.known_hosts_file is not None:
            self.known_hosts_file = Path(self.known_hosts_file).expanduser()
        if self.home is not None:
            self.home = Path(self.home).expanduser()


@dataclass
class LocalClone:
    """A working copy on local storage and whether this process owns it."""

    path: Path
    owned: bool = False

    @property
    def exists(self) -> bool:
        """Check if the clone directory is on disk."""
        return self.path.exists()
