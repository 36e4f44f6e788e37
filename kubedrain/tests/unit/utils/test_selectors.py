"""Tests for label and field selector helpers."""

from __future__ import annotations

import pytest

from kubedrain.errors import SelectorError
from kubedrain.utils.selectors import (
    Requirement,
    build_label_selector,
    match_fields,
    match_labels,
    node_non_terminated_pods_selector,
    parse_selector,
)


class TestBuildLabelSelector:
    """Tests for build_label_selector."""

    def test_match_labels_sorted(self) -> None:
        """Test matchLabels become sorted equality terms."""
        selector = {"matchLabels": {"tier": "web", "app": "shop"}}
        assert build_label_selector(selector) == "app=shop,tier=web"

    def test_missing_selector(self) -> None:
        """Test a missing selector yields None."""
        assert build_label_selector(None) is None

    def test_empty_selector(self) -> None:
        """Test an empty selector yields the match-everything string."""
        assert build_label_selector({}) == ""
        assert build_label_selector({"matchLabels": {}}) == ""

    def test_prefixed_key(self) -> None:
        """Test DNS-prefixed label keys are accepted."""
        selector = {"matchLabels": {"app.kubernetes.io/name": "api"}}
        assert build_label_selector(selector) == "app.kubernetes.io/name=api"

    def test_match_expressions_rejected(self) -> None:
        """Test set-based selectors raise SelectorError."""
        selector = {
            "matchExpressions": [{"key": "app", "operator": "In", "values": ["a", "b"]}]
        }
        with pytest.raises(SelectorError):
            build_label_selector(selector)

    @pytest.mark.parametrize(
        "labels",
        [{"bad key": "x"}, {"app": "has space"}, {"app": "a" * 64}, {"UPPER.Prefix/app": "x"}],
    )
    def test_invalid_labels(self, labels: dict[str, str]) -> None:
        """Test invalid keys and values raise SelectorError."""
        with pytest.raises(SelectorError):
            build_label_selector({"matchLabels": labels})

    def test_non_mapping(self) -> None:
        """Test a selector that is not an object is rejected."""
        with pytest.raises(SelectorError):
            build_label_selector(["app=web"])  # type: ignore[arg-type]


class TestParseSelector:
    """Tests for parse_selector."""

    def test_operators(self) -> None:
        """Test the three equality operators."""
        assert parse_selector("a=1,b==2,c!=3") == [
            Requirement("a", "=", "1"),
            Requirement("b", "=", "2"),
            Requirement("c", "!=", "3"),
        ]

    def test_empty(self) -> None:
        """Test empty selectors have no requirements."""
        assert parse_selector("") == []
        assert parse_selector(None) == []

    @pytest.mark.parametrize("text", ["app in (a,b)", "a=1,,b=2", "=x", "!app"])
    def test_unsupported(self, text: str) -> None:
        """Test set-based or malformed terms raise SelectorError."""
        with pytest.raises(SelectorError):
            parse_selector(text)


class TestMatching:
    """Tests for match_labels and match_fields."""

    def test_match_labels(self) -> None:
        """Test label matching with equality and inequality."""
        labels = {"app": "web", "tier": "front"}
        assert match_labels("app=web", labels)
        assert match_labels("app=web,tier!=back", labels)
        assert not match_labels("app=api", labels)
        assert not match_labels("missing=x", labels)
        assert match_labels("missing!=x", labels)

    def test_empty_selector_matches_everything(self) -> None:
        """Test the empty selector matches any labels."""
        assert match_labels("", {})
        assert match_labels("", None)

    def test_match_fields(self) -> None:
        """Test dotted field paths against a pod."""
        pod = {"spec": {"nodeName": "n1"}, "status": {"phase": "Running"}}
        assert match_fields(node_non_terminated_pods_selector("n1"), pod)
        assert not match_fields(node_non_terminated_pods_selector("n2"), pod)

    def test_match_fields_terminal_phase(self) -> None:
        """Test terminal pods are excluded by the node selector."""
        selector = node_non_terminated_pods_selector("n1")
        for phase in ("Succeeded", "Failed"):
            pod = {"spec": {"nodeName": "n1"}, "status": {"phase": phase}}
            assert not match_fields(selector, pod)

    def test_match_fields_missing_field(self) -> None:
        """Test missing fields compare as the empty string."""
        assert match_fields("spec.nodeName=", {"spec": {}})
        assert match_fields("status.phase!=Failed", {})


class TestNodeSelector:
    """Tests for node_non_terminated_pods_selector."""

    def test_selector_text(self) -> None:
        """Test the field selector sent to the API server."""
        assert node_non_terminated_pods_selector("n1") == (
            "spec.nodeName=n1,status.phase!=Succeeded,status.phase!=Failed"
        )
