# Tests for isogit.git.refs
# Parsing of ls-remote output

from isogit.git.refs import is_commit_sha, parse_remote_refs, strip_ref_prefix

SHA_A = "615d39c6c9bf64634425a9678d071cf1301c06ce"
SHA_B = "0a1b2c3d4e5f60718293a4b5c6d7e8f901234567"


class TestParseRemoteRefs:
    """Tests for parse_remote_refs."""

    def test_two_lines(self):
        refs = parse_remote_refs("abc123\trefs/heads/master\ndef456\trefs/tags/v1.0\n")
        assert refs == {"abc123": "refs/heads/master", "def456": "refs/tags/v1.0"}
        assert list(refs) == ["abc123", "def456"]

    def test_single_column_line_dropped(self):
        refs = parse_remote_refs(f"{SHA_A}\trefs/heads/master\ngarbage\n{SHA_B}\trefs/tags/v2\n")
        assert refs == {SHA_A: "refs/heads/master", SHA_B: "refs/tags/v2"}

    def test_blank_lines_skipped(self):
        refs = parse_remote_refs(f"\n\n{SHA_A}\trefs/heads/main\n\n   \n")
        assert refs == {SHA_A: "refs/heads/main"}

    def test_empty_output(self):
        assert parse_remote_refs("") == {}

    def test_runs_of_whitespace(self):
        refs = parse_remote_refs(f"{SHA_A}    \t  refs/tags/v1.0   \r\n")
        assert refs == {SHA_A: "refs/tags/v1.0"}

    def test_duplicate_sha_last_write_wins(self):
        refs = parse_remote_refs(f"{SHA_A}\trefs/heads/main\n{SHA_A}\trefs/remotes/origin/main\n")
        assert refs == {SHA_A: "refs/remotes/origin/main"}

    def test_order_preserved(self):
        lines = [f"{i:040x}\trefs/tags/v{i}" for i in (5, 1, 3)]
        refs = parse_remote_refs("\n".join(lines))
        assert list(refs.values()) == ["refs/tags/v5", "refs/tags/v1", "refs/tags/v3"]

    def test_extra_columns_ignored(self):
        refs = parse_remote_refs(f"{SHA_A}\trefs/heads/main\textra\n")
        assert refs == {SHA_A: "refs/heads/main"}


class TestStripRefPrefix:
    """Tests for strip_ref_prefix."""

    def test_strips_tags_prefix(self):
        assert strip_ref_prefix("refs/tags/v2.1") == "v2.1"

    def test_keeps_other_refs(self):
        assert strip_ref_prefix("refs/heads/main") == "refs/heads/main"

    def test_custom_prefix(self):
        assert strip_ref_prefix("refs/heads/main", "refs/heads/") == "main"

    def test_nested_tag_name(self):
        assert strip_ref_prefix("refs/tags/release/1.0") == "release/1.0"


class TestIsCommitSha:
    """Tests for is_commit_sha."""

    def test_full_sha(self):
        assert is_commit_sha(SHA_A) is True

    def test_short_sha(self):
        assert is_commit_sha(SHA_A[:7]) is False

    def test_uppercase_rejected(self):
        assert is_commit_sha(SHA_A.upper()) is False

    def test_branch_name(self):
        assert is_commit_sha("master") is False

    def test_trailing_newline_rejected(self):
        assert is_commit_sha(SHA_A + "\n") is False
