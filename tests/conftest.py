"""Shared test fixtures and configuration."""

import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from smartcommit.git.models import CommitRecord
from smartcommit.llm.base import BaseLLMProvider
from smartcommit.llm.exceptions import LLMError
from smartcommit.config import LLMProvider


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_repo_root(temp_dir):
    """Create a mock git repository root directory."""
    # Create .git directory to simulate a git repo
    git_dir = temp_dir / ".git"
    git_dir.mkdir()
    (git_dir / "hooks").mkdir()
    return temp_dir


@pytest.fixture(autouse=True)
def isolated_global_config(temp_dir, mocker, monkeypatch):
    """Point ~/.smartcommit at a temp dir and clear API key variables."""
    mocker.patch("smartcommit.global_config._CONFIG_DIR", temp_dir / ".smartcommit")
    for name in ("ANTHROPIC_API_KEY", "CLAUDE_API_KEY", "OPENAI_API_KEY", "GOOGLE_API_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_diff():
    """Sample staged diff touching two files under src/api and one under docs."""
    return """diff --git a/src/api/routes.py b/src/api/routes.py
index 1234567..abcdefg 100644
--- a/src/api/routes.py
+++ b/src/api/routes.py
@@ -1,5 +1,8 @@
 def main():
-    print("old")
+    print("new")
+
+def helper():
+    return True
diff --git a/src/api/models.py b/src/api/models.py
new file mode 100644
index 0000000..e69de29
--- /dev/null
+++ b/src/api/models.py
@@ -0,0 +1,2 @@
+class User:
+    pass
diff --git a/docs/usage.md b/docs/usage.md
deleted file mode 100644
index e69de29..0000000
--- a/docs/usage.md
+++ /dev/null
@@ -1 +0,0 @@
-Old usage notes
"""


def make_record(message, author="Alice", timestamp=None, sha="abc123"):
    """Build a CommitRecord with sensible defaults."""
    return CommitRecord(
        sha=sha,
        message=message,
        author_name=author,
        timestamp=timestamp or datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def record_factory():
    """Factory for CommitRecord instances."""
    return make_record


class FakeProvider(BaseLLMProvider):
    """In-memory backend returning a fixed text or raising LLMError."""

    provider = LLMProvider.ANTHROPIC
    display_name = "Fake"

    def __init__(self, model, text=None, error=None, provider=None):
        super().__init__(model=model, api_key="test-key")
        if provider is not None:
            self.provider = provider
        self.text = text
        self.error = error
        self.prompts = []

    def invoke(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def fake_provider():
    """Factory for FakeProvider backends."""

    def _make(model="fake-model", text="Add feature", error=None, provider=None):
        if isinstance(error, str):
            error = LLMError(error)
        return FakeProvider(model, text=text, error=error, provider=provider)

    return _make
