"""Tests for pushbrief.git.context module."""

from pushbrief.git import CommandResult, build_context_bundle, format_file_changes, parse_status_output
from pushbrief.git.repository import COMMIT_LOG_FORMAT


LOG_ARGS = ("log", f"--pretty=format:{COMMIT_LOG_FORMAT}", "-n", "5")
STAGED_PATCH = "diff --git a/src/new.py b/src/new.py\n+x = 1"


class TestBuildContextBundle:
    """Tests for build_context_bundle function."""

    def _responses(self):
        responses = {
            ("rev-parse", "--abbrev-ref", "HEAD"): "main\n",
            ("status", "--porcelain"): " M src/app.py\nA  src/new.py\n?? notes.txt\n",
            LOG_ARGS: "abc|A|a@x.io|1700000000|Previous change\n",
            ("diff", "--cached"): STAGED_PATCH + "\n",
        }
        return responses

    def test_sections(self, make_repo):
        """Test every section is present in order."""
        repo, _ = make_repo(self._responses())

        bundle = build_context_bundle(repo)

        positions = [bundle.index(s) for s in ("[BRANCH]", "[FILE_CHANGES]", "[LAST_5_COMMITS]", "[DIFF]")]
        assert positions == sorted(positions)
        assert "main" in bundle
        assert "- Previous change" in bundle
        assert STAGED_PATCH in bundle

    def test_staged_only_lists_staged_files(self, make_repo):
        """Test unstaged and untracked files are left out."""
        repo, _ = make_repo(self._responses())

        bundle = build_context_bundle(repo, staged=True)

        assert "src/new.py" in bundle
        assert "notes.txt" not in bundle
        assert "src/app.py" not in bundle

    def test_no_commits_yet(self, make_repo):
        """Test a repository without commits still builds a bundle."""
        repo, _ = make_repo(
            {
                **self._responses(),
                LOG_ARGS: CommandResult("", False, "fatal: your current branch has no commits"),
            }
        )

        bundle = build_context_bundle(repo)

        assert "- (no commits yet)" in bundle

    def test_truncates_diff(self, make_repo):
        """Test the diff section respects max_chars."""
        repo, _ = make_repo(self._responses())

        bundle = build_context_bundle(repo, max_chars=10)

        assert STAGED_PATCH[:10] + "\n...[truncated]" in bundle
        assert STAGED_PATCH not in bundle

    def test_no_diff(self, make_repo):
        """Test an empty diff is marked."""
        repo, _ = make_repo(
            {
                **self._responses(),
                ("status", "--porcelain"): "",
            }
        )

        bundle = build_context_bundle(repo)

        assert "(no diff)" in bundle
        assert "(no files)" in bundle


class TestFormatFileChanges:
    """Tests for format_file_changes function."""

    def test_groups(self, sample_status):
        """Test each kind of change gets its own group."""
        summary = format_file_changes(parse_status_output(sample_status))

        assert "New files (did not exist before this commit):\n  + src/new.py\n  + notes.txt" in summary
        assert "Modified files (already existed, now changed):\n  ~ src/app.py" in summary
        assert "Deleted files:\n  - old.py" in summary
        assert "Renamed files:\n  > a.py -> b.py" in summary

    def test_other_changes(self):
        """Test unusual codes fall into the catch-all group."""
        summary = format_file_changes(parse_status_output("UU conflict.py\n"))

        assert "Other changes:\n  * conflict.py (Updated but unmerged in index, Updated but unmerged in working tree)" in summary

    def test_empty(self):
        """Test no entries."""
        assert format_file_changes([]) == "(no files)"
