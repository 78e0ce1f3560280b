"""Tests for parse_unified_diff."""

from pushbrief.git import FileDiff, parse_unified_diff


class TestParseUnifiedDiff:
    """Tests for parse_unified_diff function."""

    def test_splits_per_file(self, sample_diff):
        """Test one record per diff header, in order."""
        diffs = parse_unified_diff(sample_diff)

        assert [d.path for d in diffs] == ["src/app.py", "old.py"]

    def test_patch_includes_header_and_body(self, sample_diff):
        """Test each patch starts at its own header and stops before the next."""
        app, old = parse_unified_diff(sample_diff)

        assert app.patch.startswith("diff --git a/src/app.py b/src/app.py\n")
        assert app.patch.endswith("+    return 0")
        assert "old.py" not in app.patch
        assert old.patch.splitlines()[-1] == "-y = 2"

    def test_labels_everything_modified(self, sample_diff):
        """Test the combined diff cannot tell statuses apart."""
        diffs = parse_unified_diff(sample_diff)

        assert all(d.status_label == "Modified" for d in diffs)
        assert all(d.status_code == "" for d in diffs)

    def test_uses_destination_path(self):
        """Test renames are keyed by the b/ side."""
        diff = (
            "diff --git a/old_name.py b/new_name.py\n"
            "similarity index 90%\n"
            "rename from old_name.py\n"
            "rename to new_name.py\n"
        )

        assert [d.path for d in parse_unified_diff(diff)] == ["new_name.py"]

    def test_path_containing_b_slash(self):
        """Test a path with " b/" in it is split at the header midpoint."""
        diffs = parse_unified_diff("diff --git a/my b/file b/my b/file\n+1\n")

        assert [d.path for d in diffs] == ["my b/file"]

    def test_renamed_path_containing_b_slash(self):
        """Test a rename into a path with " b/" uses the rename to line."""
        diff = (
            "diff --git a/old.py b/new b/file.py\n"
            "similarity index 100%\n"
            "rename from old.py\n"
            "rename to new b/file.py\n"
        )

        assert [d.path for d in parse_unified_diff(diff)] == ["new b/file.py"]

    def test_asymmetric_header_uses_plus_line(self):
        """Test the +++ line names the file when the header sides differ."""
        diff = (
            "diff --git a/x b/y b/z\n"
            "--- a/x b/y\t\n"
            "+++ b/z\n"
            "@@ -1 +1 @@\n"
            "+++ b/not-a-path\n"
        )

        assert [d.path for d in parse_unified_diff(diff)] == ["z"]

    def test_ignores_preamble(self):
        """Test lines before the first header are dropped."""
        diff = "warning: something\ndiff --git a/x b/x\n+1\n"

        assert parse_unified_diff(diff) == [FileDiff(path="x", patch="diff --git a/x b/x\n+1")]

    def test_no_header(self):
        """Test output without any header yields nothing."""
        assert parse_unified_diff("") == []
        assert parse_unified_diff("just some text\n") == []

    def test_keeps_blank_lines_inside_patch(self):
        """Test blank context lines are part of the patch."""
        diff = "diff --git a/x b/x\n@@ -1,2 +1,2 @@\n\n-a\n+b\n"

        assert parse_unified_diff(diff)[0].patch == "diff --git a/x b/x\n@@ -1,2 +1,2 @@\n\n-a\n+b"
