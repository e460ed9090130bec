"""isogit - credential-isolated access to remote git repositories.

Fetch file contents, list tags, resolve references and manage local clones
with a per-operation SSH identity and known_hosts file.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "GitEndpoint",
    "GitCommandRunner",
    "ReadonlyRepository",
    "Repository",
    "checkout",
    "parse_remote_refs",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("GitEndpoint", "GitCommandRunner", "ReadonlyRepository", "Repository", "checkout", "parse_remote_refs"):
        from isogit import git

        return getattr(git, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
