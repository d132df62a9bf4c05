"""Unit tests for chat message composition."""

import pytest

from review_relay.relay.composer import FRAMINGS, compose_message, format_mentions

HANDLES = ["U1", "U2"]
REPOSITORY = "acme/api"
TITLE = "Add login"
URL = "https://example.test/pr/7"


def _compose(category=None) -> dict:
    return compose_message(
        HANDLES, repository=REPOSITORY, pr_title=TITLE, pr_url=URL, category=category
    )


class TestComposeMessage:
    """Tests for compose_message templates."""

    def test_legacy_request_produces_plain_text(self) -> None:
        assert _compose() == {
            "text": (
                "Hey <@U1> <@U2>! :wave: You've been asked to review a pull request in *acme/api*:\n"
                "<https://example.test/pr/7|Add login>\n"
                "Thanks for taking a look!"
            )
        }

    def test_feature_uses_default_framing(self) -> None:
        assert _compose("feature") == {
            "attachments": [
                {
                    "color": "#2eb886",
                    "title": "Feature review: Add login",
                    "text": (
                        "Hey <@U1> <@U2>! :wave: You've been asked to review a pull request in *acme/api*:\n"
                        "<https://example.test/pr/7|Add login>\n"
                        "Thanks for taking a look!"
                    ),
                }
            ]
        }

    def test_release_uses_cautionary_framing(self) -> None:
        assert _compose("release") == {
            "attachments": [
                {
                    "color": "#daa038",
                    "title": "Release review: Add login",
                    "text": (
                        "Heads up <@U1> <@U2>! :warning: A release is waiting on your review in *acme/api*:\n"
                        "<https://example.test/pr/7|Add login>\n"
                        "Please double-check everything before it ships."
                    ),
                }
            ]
        }

    def test_hotfix_uses_urgent_framing(self) -> None:
        assert _compose("hotfix") == {
            "attachments": [
                {
                    "color": "#a30200",
                    "title": "HOTFIX review: Add login",
                    "text": (
                        "Urgent <@U1> <@U2>! :rotating_light: A hotfix needs your review right away in *acme/api*:\n"
                        "<https://example.test/pr/7|Add login>\n"
                        "Please drop what you're doing and take a look."
                    ),
                }
            ]
        }

    @pytest.mark.parametrize("category", [None, "feature", "release", "hotfix"])
    def test_identical_inputs_give_identical_output(self, category) -> None:
        assert _compose(category) == _compose(category)

    def test_legacy_text_matches_feature_attachment_text(self) -> None:
        assert _compose()["text"] == _compose("feature")["attachments"][0]["text"]

    def test_braces_in_repository_are_not_formatted(self) -> None:
        payload = compose_message(["U1"], "acme/{api}", "{title}", URL)
        assert "*acme/{api}*" in payload["text"]
        assert f"<{URL}|{{title}}>" in payload["text"]

    def test_every_category_has_distinct_color(self) -> None:
        colors = {framing.color for framing in FRAMINGS.values()}
        assert len(colors) == len(FRAMINGS)


def test_format_mentions_keeps_order() -> None:
    assert format_mentions(["UB", "UA"]) == "<@UB> <@UA>"


def test_format_mentions_empty() -> None:
    assert format_mentions([]) == ""
