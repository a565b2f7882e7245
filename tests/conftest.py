"""Pytest configuration and shared fixtures for the chat2md test suite."""

import pytest

CHATGPT_FRAGMENT = """<div class="markdown prose">
<h3>Setup</h3>
<p>Install the <code>requests</code> package:</p>
<pre><div class="contain-inline-size"><div class="flex items-center">bash</div><div class="sticky"><button>Copy code</button></div><div class="overflow-y-auto"><code class="whitespace-pre! language-bash">pip install requests</code></div></div></pre>
<ol><li><p>First step</p></li><li><p>Second step</p><ul><li>detail</li></ul></li></ol>
<p>See <a href="https://docs.python-requests.org">the docs</a><a href="https://x.example"><span>Python Requests documentation and more +12 more</span></a>.</p>
</div>
"""

CHATGPT_EXPECTED = (
    "### Setup\n\n"
    "Install the `requests` package:\n\n"
    "```bash\npip install requests\n```\n\n"
    "1. First step\n2. Second step\n  - detail\n\n"
    "See [the docs](https://docs.python-requests.org)."
)

CLAUDE_FRAGMENT = """<div class="standard-markdown">
<p>Here is the <strong>plan</strong>:</p>
<div class="relative group/copy"><div class="text-text-500 font-small">python</div><div class="sticky opacity-0"><button>Copy</button></div><pre class="code-block"><code class="language-python">print("hi")</code></pre></div>
<div class="artifact-block-cell"><div class="leading-tight">Project outline</div><div class="text-text-400">Document</div></div>
<p>Source: <span class="citation"><a href="https://example.com">Example</a></span></p>
<blockquote><p>Keep it simple.</p></blockquote>
<table><thead><tr><th>Step</th><th>Owner</th></tr></thead><tbody><tr><td>Draft</td><td><em>Ana</em></td></tr></tbody></table>
<hr>
<p>Done<span class="sr-only"> (edited)</span>.</p>
</div>
"""

CLAUDE_EXPECTED = (
    "Here is the **plan**:\n\n"
    '```python\nprint("hi")\n```\n\n'
    "> **📎 Project outline** (Document)\n\n"
    "Source: [Example](https://example.com)\n\n"
    "> Keep it simple.\n\n"
    "| Step | Owner |\n| --- | --- |\n| Draft | *Ana* |\n\n"
    "---\n\n"
    "Done."
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def chatgpt_fragment() -> str:
    """HTML of one ChatGPT answer body, chrome included."""
    return CHATGPT_FRAGMENT


@pytest.fixture
def claude_fragment() -> str:
    """HTML of one Claude response body, chrome and artifact card included."""
    return CLAUDE_FRAGMENT


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run in an empty directory with no discoverable configuration."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setattr("pathlib.Path.home", lambda: home)
    monkeypatch.chdir(work)
    monkeypatch.delenv("CHAT2MD_CONFIG", raising=False)
    monkeypatch.delenv("CHAT2MD_PROFILE", raising=False)
    return work


@pytest.fixture
def chatgpt_expected() -> str:
    """Markdown expected from ``chatgpt_fragment`` with the chatgpt profile."""
    return CHATGPT_EXPECTED


@pytest.fixture
def claude_expected() -> str:
    """Markdown expected from ``claude_fragment`` with the claude profile."""
    return CLAUDE_EXPECTED
