"""Integration tests: HTML fragments through parsing, serialization and normalization."""

import pytest

from chat2md import (
    Turn,
    html_to_markdown,
    node_to_markdown,
    parse_html_fragment,
    render_transcript,
)
from chat2md.profiles import CLAUDE_PROFILE


@pytest.mark.integration
class TestSiteFragments:
    """Convert realistic page fragments with their site profiles."""

    def test_chatgpt_answer(self, chatgpt_fragment, chatgpt_expected):
        """Test a ChatGPT answer with code chrome, nested lists and a citation stub."""
        assert html_to_markdown(chatgpt_fragment, profile="chatgpt") == chatgpt_expected

    def test_claude_response(self, claude_fragment, claude_expected):
        """Test a Claude response with overlays, an artifact card and a table."""
        assert html_to_markdown(claude_fragment, profile="claude") == claude_expected

    def test_generic_profile_on_claude_markup(self, claude_fragment):
        """Test the generic profile keeps overlay labels and ignores artifact cards."""
        result = html_to_markdown(claude_fragment)
        assert "python\n\n```python" in result
        assert "📎" not in result
        assert "Project outlineDocument" in result
        assert "Copy" not in result

    def test_generic_profile_keeps_citations(self, chatgpt_fragment):
        """Test citation stubs survive without the chatgpt profile."""
        assert "+12 more" in html_to_markdown(chatgpt_fragment)

    def test_output_has_no_excess_blank_lines(self, chatgpt_fragment, claude_fragment):
        """Test normalization holds for every profile."""
        for fragment in (chatgpt_fragment, claude_fragment):
            for profile in ("generic", "chatgpt", "claude"):
                result = html_to_markdown(fragment, profile=profile)
                assert "\n\n\n" not in result
                assert result == result.strip()


@pytest.mark.integration
class TestHtmlToMarkdown:
    """Convert smaller HTML snippets."""

    def test_heading_and_list(self):
        """Test the documented example."""
        assert html_to_markdown("<h2>Notes</h2><ul><li>one</li><li>two</li></ul>") == "## Notes\n\n- one\n- two"

    def test_full_document_uses_body(self):
        """Test head content is ignored."""
        html = "<html><head><title>Ignored</title><style>p{color:red}</style></head><body><p>Kept</p></body></html>"
        assert html_to_markdown(html) == "Kept"

    def test_nested_blocks_collapse(self):
        """Test blank lines from nested blocks collapse to one."""
        html = "<div><div><p>a</p></div><div><p>b</p><hr><h1>c</h1></div></div>"
        assert html_to_markdown(html) == "a\n\nb\n\n---\n\n# c"

    def test_list_items_keep_formatting(self):
        """Test inline formatting inside list items and table cells."""
        html = (
            "<ul><li><strong>bold</strong> and <a href='u'>link</a></li></ul>"
            "<table><tr><th>k</th></tr><tr><td><code>v</code></td></tr></table>"
        )
        assert html_to_markdown(html) == "- **bold** and [link](u)\n\n| k |\n| --- |\n| `v` |"

    def test_code_block_language_and_entities(self):
        """Test fenced code keeps the raw text and language."""
        html = '<pre><code class="hljs language-html">&lt;p&gt;hi&lt;/p&gt;</code></pre>'
        assert html_to_markdown(html) == "```html\n<p>hi</p>\n```"

    def test_blockquote_line_breaks(self):
        """Test quoted multi-line content gets a prefix on every line."""
        html = "<blockquote><p>Line one<br>Line two</p></blockquote><p>After</p>"
        assert html_to_markdown(html) == "> Line one\n> Line two\n\nAfter"

    def test_empty_and_chrome_only(self):
        """Test inputs with nothing to convert."""
        assert html_to_markdown("") == ""
        assert html_to_markdown("<button>Copy</button><svg><path d='M0'/></svg>") == ""

    def test_node_to_markdown_accepts_profile_instance(self):
        """Test passing a customized profile object."""
        tree = parse_html_fragment("<div class='artifact-block-cell'><div class='leading-tight'>Plan</div></div>")
        assert node_to_markdown(tree, CLAUDE_PROFILE) == "> **📎 Plan**"
        assert node_to_markdown(tree, CLAUDE_PROFILE.create_updated(artifact_class=None)) == "Plan"


@pytest.mark.integration
class TestTranscript:
    """Assemble a transcript from parsed turns."""

    def test_conversation(self, claude_fragment):
        """Test a user question and assistant answer under one title."""
        turns = [
            Turn("user", parse_html_fragment("<p>Can you plan it?</p>"), attachments=["brief.md"]),
            Turn("assistant", parse_html_fragment(claude_fragment), thinking=["Outlining steps"]),
        ]
        result = render_transcript(turns, title="Planning", profile="claude")

        assert result.startswith("# Planning\n\n---\n\n## You\n\n> 📎 **brief.md** (attachment)\n\nCan you plan it?")
        assert "\n\n---\n\n## Claude\n\n> Thinking: Outlining steps\n\nHere is the **plan**:" in result
        assert result.endswith("Done.")
