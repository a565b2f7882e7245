"""Unit tests for transcript assembly."""

import pytest

from chat2md.nodes import TextNode, element
from chat2md.profiles import CLAUDE_PROFILE
from chat2md.transcript import Turn, join_sections, render_transcript, render_turn


@pytest.mark.unit
class TestTurn:
    """Test the Turn value object."""

    def test_content_normalized_to_tuple(self):
        """Test string, node and sequence content all become node tuples."""
        assert Turn("user", "hi").content == (TextNode("hi"),)
        node = element("p", "x")
        assert Turn("user", node).content == (node,)
        assert Turn("user", [node, "y"]).content == (node, TextNode("y"))
        assert Turn("user", None).content == ()

    def test_single_strings_become_tuples(self):
        """Test a lone attachment name is not split into characters."""
        turn = Turn("user", attachments="notes.txt", thinking=["a", "b"])
        assert turn.attachments == ("notes.txt",)
        assert turn.thinking == ("a", "b")

    @pytest.mark.parametrize("role,expected", [("user", True), (" User ", True), ("assistant", False), (None, False)])
    def test_is_user(self, role, expected):
        """Test role classification."""
        assert Turn(role).is_user is expected


@pytest.mark.unit
class TestRenderTurn:
    """Test single-turn rendering."""

    def test_user_turn(self):
        """Test the user label and normalized body."""
        assert render_turn(Turn("user", element("p", "Hi"))) == "## You\n\nHi"

    def test_assistant_label_from_profile(self):
        """Test non-user turns use the profile's assistant label."""
        turn = Turn("assistant", element("p", "Hello"))
        assert render_turn(turn) == "## Assistant\n\nHello"
        assert render_turn(turn, "claude") == "## Claude\n\nHello"
        assert render_turn(turn, CLAUDE_PROFILE.create_updated(assistant_label="Bot")) == "## Bot\n\nHello"

    def test_segments_joined_with_blank_line(self):
        """Test multi-segment bodies are separated by blank lines and empty ones skipped."""
        turn = Turn(
            "assistant",
            [element("div", element("p", "one")), element("div", element("button", "Copy")), element("h3", "two")],
        )
        assert render_turn(turn) == "## Assistant\n\none\n\n### two"

    def test_fallback_to_plain_text(self):
        """Test a body with no convertible content falls back to its text."""
        turn = Turn("assistant", element("div", element("button", "Retry")))
        assert render_turn(turn) == "## Assistant\n\nRetry"

    def test_empty_body(self):
        """Test a turn without content renders only its heading."""
        assert render_turn(Turn("user")) == "## You\n\n"

    def test_preamble_order(self):
        """Test attachments, images and thinking precede the body."""
        turn = Turn(
            "assistant",
            element("p", "Answer"),
            thinking=["Considering options", "   "],
            attachments=["report.pdf\n12 KB"],
            images=["chart", ""],
        )
        assert render_turn(turn) == (
            "## Assistant\n\n"
            "> 📎 **report.pdf** (attachment)\n\n"
            "> 🖼️ **chart** (image attachment)\n"
            "> 🖼️ **image** (image attachment)\n\n"
            "> Thinking: Considering options\n\n"
            "Answer"
        )

    def test_long_attachment_name_truncated(self):
        """Test attachment names are cut to 80 characters."""
        result = render_turn(Turn("user", attachments=["x" * 200]))
        assert f"**{'x' * 80}**" in result
        assert "x" * 81 not in result

    def test_blank_attachment_name(self):
        """Test an attachment without a name gets a placeholder."""
        assert "> 📎 **Attachment** (attachment)" in render_turn(Turn("user", attachments=["  "]))


@pytest.mark.unit
class TestRenderTranscript:
    """Test whole-conversation rendering."""

    def test_sections_and_title(self):
        """Test title heading and rule separators between turns."""
        turns = [Turn("user", element("p", "Q")), Turn("assistant", element("p", "A"))]
        assert render_transcript(turns, title=" Chat ", profile="chatgpt") == (
            "# Chat\n\n---\n\n## You\n\nQ\n\n---\n\n## ChatGPT\n\nA"
        )

    def test_turns_without_role_skipped(self):
        """Test unclassified turns are left out."""
        turns = [Turn(None, "lost"), Turn("", "lost too"), Turn("user", "kept")]
        assert render_transcript(turns) == "## You\n\nkept"

    def test_no_title(self):
        """Test a blank title adds no heading."""
        assert render_transcript([Turn("user", "x")], title="  ") == "## You\n\nx"

    def test_empty_transcript(self):
        """Test an empty conversation."""
        assert render_transcript([]) == ""

    def test_join_sections(self):
        """Test the section separator."""
        assert join_sections(["a", "b", "c"]) == "a\n\n---\n\nb\n\n---\n\nc"
        assert join_sections([]) == ""
