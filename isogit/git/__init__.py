# isogit Git Module
# Credential-isolated git commands and repository management

from isogit.git.models import DEFAULT_REVISION, GitEndpoint, LocalClone, default_identity_file
from isogit.git.process import (
    GitCommandRunner,
    GitProcessResult,
    get_default_proxy_path,
    resolve_ssh_proxy,
)
from isogit.git.readonly import ReadonlyRepository
from isogit.git.refs import is_commit_sha, parse_remote_refs, strip_ref_prefix
from isogit.git.repository import Repository, checkout, generate_local_path, get_temp_root

__all__ = [
    # Models
    "DEFAULT_REVISION",
    "GitEndpoint",
    "LocalClone",
    "default_identity_file",
    # Process
    "GitCommandRunner",
    "GitProcessResult",
    "get_default_proxy_path",
    "resolve_ssh_proxy",
    # Refs
    "parse_remote_refs",
    "strip_ref_prefix",
    "is_commit_sha",
    # Repositories
    "ReadonlyRepository",
    "Repository",
    "checkout",
    "generate_local_path",
    "get_temp_root",
]
