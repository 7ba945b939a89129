"""Tests for diagnostics: cargo stderr parsing."""

from diagnostics import collect_problem_packages, parse_conflicts, parse_missing
from versioning.models import ProblemKind, ProblemPackage

CONFLICT_STDERR = """\
    Updating crates.io index
error: failed to select a version for `tokio`.
    ... required by package `demo v0.1.0 (/tmp/demo)`
versions that meet the requirements `^9.0` are: 9.0.1

error: failed to select a version for `hyper`.
"""

MISSING_STDERR = """\
error[E0463]: can't find crate for `serde_derive`
 --> src/main.rs:1:1
error: no matching package named `nonexistent` found
error: could not find `reqwest` in registry `crates-io` with version `=99.0.0`
"""


class TestParseConflicts:
    """Tests for version-selection conflict detection."""

    def test_extracts_all_conflicts_in_order(self):
        """Test every conflict is found in order of appearance."""
        assert parse_conflicts(CONFLICT_STDERR) == ["tokio", "hyper"]

    def test_repeated_name_reported_once(self):
        """Test repeated conflicts are reported once."""
        text = CONFLICT_STDERR + "\nerror: failed to select a version for `tokio`.\n"
        assert parse_conflicts(text) == ["tokio", "hyper"]

    def test_no_conflicts(self):
        """Test missing-crate text yields no conflicts."""
        assert parse_conflicts(MISSING_STDERR) == []


class TestParseMissing:
    """Tests for missing-crate detection across both phrasings."""

    def test_both_phrasings(self):
        """Test both missing-crate phrasings are recognised."""
        assert parse_missing(MISSING_STDERR) == ["serde_derive", "reqwest"]

    def test_order_follows_text_not_pattern(self):
        """Test names follow text order across patterns."""
        text = (
            "could not find `alpha` in registry `crates-io`\n"
            "can't find crate for `beta`\n"
        )
        assert parse_missing(text) == ["alpha", "beta"]

    def test_empty_backticks_ignored(self):
        """Test an empty capture is not a package name."""
        assert parse_missing("can't find crate for ``") == []


class TestCollectProblemPackages:
    """Tests for merging conflicts and missing crates."""

    def test_counts_add_up_without_overlap(self):
        """Test distinct conflicts and missing crates add up."""
        problems = collect_problem_packages(CONFLICT_STDERR + MISSING_STDERR)
        assert len(problems) == 2 + 2
        assert problems == [
            ProblemPackage("tokio", ProblemKind.CONFLICT),
            ProblemPackage("hyper", ProblemKind.CONFLICT),
            ProblemPackage("serde_derive", ProblemKind.MISSING),
            ProblemPackage("reqwest", ProblemKind.MISSING),
        ]

    def test_conflict_takes_precedence(self):
        """Test a name reported both ways is a conflict."""
        text = (
            "can't find crate for `tokio`\n"
            "failed to select a version for `tokio`\n"
        )
        assert collect_problem_packages(text) == [ProblemPackage("tokio", ProblemKind.CONFLICT)]

    def test_unparseable_text_yields_nothing(self):
        """Test unrelated compiler errors yield no packages."""
        text = "error[E0308]: mismatched types\n  expected `u32`, found `i64`\n"
        assert collect_problem_packages(text) == []

    def test_empty_text(self):
        """Test empty diagnostics yield no packages."""
        assert collect_problem_packages("") == []
