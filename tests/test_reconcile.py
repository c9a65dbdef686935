"""Tests for peer range normalization and version selection."""

import logging

import pytest

from manifest import Manifest
from reconcile import (
    PeerRequirement,
    caret_range,
    collect_missing,
    format_specifier,
    is_satisfied,
    is_valid_version_token,
    normalize,
    select_version,
)


class TestNormalize:
    """Tests for normalize()."""

    def test_strips_leading_gte(self):
        assert normalize(">=1.2.3") == "1.2.3"

    def test_strips_caret(self):
        assert normalize("^1.2.3") == "1.2.3"

    def test_removes_whitespace(self):
        assert normalize(" >= 1.2.3 ") == ">=1.2.3"
        assert normalize(">= 1.2.3") == "1.2.3"

    def test_keeps_disjunction(self):
        assert normalize("^16.8.0 || ^17.0.0") == "16.8.0||17.0.0"

    def test_only_leading_gte_removed(self):
        assert normalize("1.0.0||>=2.0.0") == "1.0.0||>=2.0.0"


class TestIsValidVersionToken:
    """Tests for is_valid_version_token()."""

    @pytest.mark.parametrize("token", ["1", "1.2", "1.2.3", "1.2.3-beta.1", "*", "1.*-rc", "2.*"])
    def test_accepts(self, token):
        assert is_valid_version_token(token)

    @pytest.mark.parametrize("token", ["", "abc", "workspace:*", "x", "1.2.3.4", "~1.2.3", "<2", "1.0.0 "])
    def test_rejects(self, token):
        assert not is_valid_version_token(token)


class TestSelectVersion:
    """Tests for select_version()."""

    def test_numeric_not_lexical(self):
        assert select_version("9.0.0 || 10.0.0") == "10.0.0"

    def test_highest_of_caret_alternatives(self):
        assert select_version("^16.8.0 || ^17.0.0 || ^18.0.0") == "18.0.0"

    def test_gte_alternative(self):
        assert select_version("^1.0.0 || >=2.0.0") == "2.0.0"

    def test_single_gte(self):
        assert select_version(">=1.0.0") == "1.0.0"

    def test_no_valid_tokens_is_latest(self):
        assert select_version("workspace:*") == "latest"
        assert select_version("") == "latest"
        assert select_version("~1.2.3") == "latest"

    def test_invalid_alternatives_are_dropped(self):
        assert select_version("workspace:* || 3.1.0") == "3.1.0"

    def test_missing_components_pad_with_zero(self):
        assert select_version("1.5 || 1.4.9") == "1.5"

    def test_wildcard_counts_as_zero(self):
        assert select_version("* || 0.0.1") == "0.0.1"

    def test_prerelease_digits_extend_comparison(self):
        assert select_version("1.2.3-beta.1 || 1.2.3") == "1.2.3-beta.1"

    def test_tie_keeps_later_alternative(self):
        assert select_version("1 || 1.0.0") == "1.0.0"
        assert select_version("1.0.0 || 1") == "1"

    def test_huge_components_compare_without_overflow(self):
        huge = "9" * 5000 + ".0.0"
        assert select_version("1.0.0 || " + huge) == huge
        assert select_version(huge + " || 1" + "0" * 5000) == "1" + "0" * 5000

    def test_leading_zeros_ignored(self):
        assert select_version("010.0.0 || 9.0.0") == "010.0.0"
        assert select_version("0010 || 10") == "10"


class TestSpecifiers:
    """Tests for caret_range() and format_specifier()."""

    def test_caret_prefix(self):
        assert caret_range("1.0.0") == "^1.0.0"
        assert format_specifier("left-pad", "1.0.0") == "left-pad@^1.0.0"

    def test_latest_left_bare(self):
        assert caret_range("latest") == "latest"
        assert format_specifier("@scope/pkg", "latest") == "@scope/pkg@latest"


class TestIsSatisfied:
    """Tests for is_satisfied()."""

    def test_runtime_dependency(self):
        manifest = Manifest({"dependencies": {"react": "^16.0.0"}})
        assert is_satisfied("react", manifest)

    def test_dev_dependency(self):
        manifest = Manifest({"devDependencies": {"react": "0.0.1"}})
        assert is_satisfied("react", manifest)

    def test_value_is_irrelevant(self):
        manifest = Manifest({"dependencies": {"react": ""}})
        assert is_satisfied("react", manifest)

    def test_absent(self):
        manifest = Manifest({"dependencies": {"react-dom": "^18.0.0"}, "peerDependencies": {"react": "*"}})
        assert not is_satisfied("react", manifest)

    def test_no_sections(self):
        assert not is_satisfied("react", Manifest({"name": "app"}))


class TestCollectMissing:
    """Tests for collect_missing()."""

    def test_skips_satisfied(self):
        manifest = Manifest({"dependencies": {"react": "^18.0.0"}})
        reqs = [
            PeerRequirement("react", "^17.0.0", "ui-kit"),
            PeerRequirement("left-pad", ">=1.0.0", "formatter"),
        ]
        assert collect_missing(reqs, manifest) == {"left-pad": "1.0.0"}

    def test_last_writer_wins(self, caplog):
        manifest = Manifest({})
        reqs = [
            PeerRequirement("react", "^17.0.0", "a-lib"),
            PeerRequirement("react", "^18.0.0", "b-lib"),
        ]
        with caplog.at_level(logging.WARNING, logger="reconcile"):
            assert collect_missing(reqs, manifest) == {"react": "18.0.0"}
        assert "b-lib" in caplog.text
        assert "a-lib" in caplog.text

    def test_last_writer_wins_even_when_lower(self):
        reqs = [
            PeerRequirement("react", "^18.0.0", "a-lib"),
            PeerRequirement("react", "^17.0.0", "b-lib"),
        ]
        assert collect_missing(reqs, Manifest({})) == {"react": "17.0.0"}

    def test_same_choice_does_not_warn(self, caplog):
        reqs = [
            PeerRequirement("react", "^18.0.0", "a-lib"),
            PeerRequirement("react", ">=18.0.0", "b-lib"),
        ]
        with caplog.at_level(logging.WARNING, logger="reconcile"):
            collect_missing(reqs, Manifest({}))
        assert caplog.records == []

    def test_ignore_list(self):
        reqs = [PeerRequirement("react-native", "*", "ui-kit")]
        assert collect_missing(reqs, Manifest({}), ignore=["react-native"]) == {}

    def test_preserves_first_seen_order(self):
        reqs = [
            PeerRequirement("b", "1", "x"),
            PeerRequirement("a", "1", "x"),
            PeerRequirement("b", "2", "y"),
        ]
        assert list(collect_missing(reqs, Manifest({}))) == ["b", "a"]
