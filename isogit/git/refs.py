# isogit Remote Refs
# Parsing of git ls-remote output

import re

TAGS_PREFIX = "refs/tags/"

_SHA_PATTERN = re.compile(r"[0-9a-f]{40}")


def parse_remote_refs(output: str) -> dict[str, str]:
    """
    Parse ls-remote output into a map of sha to reference name.

    Each line looks like "615d39c6c9bf64634425a9678d071cf1301c06ce<TAB>refs/heads/master".
    Lines with fewer than two columns are skipped.

    Args:
        output: Raw ls-remote output, one or more lines.

    Returns:
        Dict of sha to ref name, in the order the remote reported them.
    """
    refs: dict[str, str] = {}

    for line in output.splitlines():
        columns = line.rstrip().split()
        if len(columns) < 2:
            continue
        refs[columns[0]] = columns[1]

    return refs


def strip_ref_prefix(ref: str, prefix: str = TAGS_PREFIX) -> str:
    """Remove a leading ref namespace such as refs/tags/."""
    return ref[len(prefix):] if ref.startswith(prefix) else ref


def is_commit_sha(value: str) -> bool:
    """Check if value is a full 40 character lowercase sha."""
    return bool(_SHA_PATTERN.fullmatch(value))
