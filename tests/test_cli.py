"""Tests for the smartcommit CLI."""

import pytest
from typer.testing import CliRunner

from smartcommit import __version__, global_config
from smartcommit.cli import app
from smartcommit.config import LLMProvider
from smartcommit.git import DiffUnavailableError, GitError
from smartcommit.history import analyze_history, summarize_history
from smartcommit.llm import LLMError

runner = CliRunner()


@pytest.fixture
def git_env(mocker, temp_dir):
    """Patch repository detection so commands run against temp_dir."""
    mocker.patch("smartcommit.cli.main.is_git_repo", return_value=True)
    mocker.patch("smartcommit.cli.main.get_repo_root", return_value=temp_dir)
    return temp_dir


@pytest.fixture
def generation(mocker, git_env, sample_diff, fake_provider):
    """Patch the diff and provider; returns the backend that will be used."""
    backend = fake_provider(text="feat: add user model")
    mocker.patch("smartcommit.cli.main.get_diff", return_value=sample_diff)
    mocker.patch("smartcommit.cli.main.get_provider", return_value=backend)
    return backend


class TestVersion:
    """Tests for the --version flag."""

    def test_version(self):
        """Test that the version is printed."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"smartcommit {__version__}" in result.output


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_prints_message_and_tip(self, generation):
        """Test the default print-only flow."""
        result = runner.invoke(app, ["generate"])

        assert result.exit_code == 0
        assert "Using Fake model: fake-model" in result.output
        assert "Generated commit message:" in result.output
        assert "feat: add user model" in result.output
        assert "Tip: Use --apply" in result.output

    def test_apply_commits(self, mocker, generation):
        """Test that --apply commits with the generated message."""
        mock_commit = mocker.patch(
            "smartcommit.cli.main.commit_with_message",
            return_value="[main abc123] feat: add user model",
        )

        result = runner.invoke(app, ["generate", "--apply"])

        assert result.exit_code == 0
        mock_commit.assert_called_once_with("feat: add user model")
        assert "Committed successfully!" in result.output

    def test_dry_run_does_not_commit(self, mocker, generation):
        """Test that --apply --dry-run leaves the repository alone."""
        mock_commit = mocker.patch("smartcommit.cli.main.commit_with_message")

        result = runner.invoke(app, ["generate", "--apply", "--dry-run"])

        assert result.exit_code == 0
        mock_commit.assert_not_called()
        assert "Dry run mode" in result.output

    def test_large_diff_warns(self, generation):
        """Test the warning when the diff exceeds --max-diff-size."""
        result = runner.invoke(app, ["generate", "--max-diff-size", "10"])

        assert result.exit_code == 0
        assert "Warning: Diff is large" in result.output

    def test_scope_used_by_conventional_style(self, generation):
        """Test that an explicit scope reaches the conventional prefix."""
        result = runner.invoke(app, ["generate", "--style", "conventional", "--scope", "auth"])

        assert result.exit_code == 0
        assert "feat(auth): feat: add user model" in result.output

    def test_config_file_values_used(self, generation, git_env):
        """Test that the repository config file is read."""
        (git_env / ".smartcommit.yaml").write_text("lang: fr\n")

        runner.invoke(app, ["generate"])

        assert "Write the message in fr." in generation.prompts[0]

    def test_invalid_config_exits(self, generation, git_env):
        """Test that invalid settings are reported field by field."""
        (git_env / ".smartcommit.yaml").write_text("style: fancy\n")

        result = runner.invoke(app, ["generate"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert "- style:" in result.output

    def test_not_a_git_repo(self, mocker):
        """Test the error outside a repository."""
        mocker.patch("smartcommit.cli.main.is_git_repo", return_value=False)

        result = runner.invoke(app, ["generate"])

        assert result.exit_code == 1
        assert "Not in a git repository" in result.output

    def test_no_changes(self, mocker, git_env):
        """Test that an empty diff is a git error."""
        mocker.patch(
            "smartcommit.cli.main.get_diff",
            side_effect=DiffUnavailableError("No staged changes found."),
        )

        result = runner.invoke(app, ["generate"])

        assert result.exit_code == 1
        assert "Git error: No staged changes found." in result.output

    def test_llm_failure_exits(self, mocker, git_env, sample_diff, fake_provider):
        """Test that a backend failure is reported."""
        mocker.patch("smartcommit.cli.main.get_diff", return_value=sample_diff)
        mocker.patch(
            "smartcommit.cli.main.get_provider",
            return_value=fake_provider(error="rate limited"),
        )

        result = runner.invoke(app, ["generate"])

        assert result.exit_code == 1
        assert "LLM error" in result.output

    def test_ensemble_prints_candidates(self, mocker, generation, fake_provider):
        """Test that every ensemble candidate is listed."""
        other = fake_provider(model="other", text="fix: other", provider=LLMProvider.OPENAI)
        mocker.patch("smartcommit.cli.main.build_backends", return_value=[generation, other])

        result = runner.invoke(app, ["generate", "--ensemble"])

        assert result.exit_code == 0
        assert "Generated commit messages from multiple models:" in result.output
        assert "1. [anthropic:fake-model] feat: add user model" in result.output
        assert "2. [openai:other] fix: other" in result.output

    def test_interactive_cancel(self, mocker, generation):
        """Test that cancelling in interactive mode does not commit."""
        mock_commit = mocker.patch("smartcommit.cli.main.commit_with_message")

        result = runner.invoke(app, ["generate", "--interactive", "--apply"], input="c\n")

        assert result.exit_code == 0
        assert "Commit cancelled by user." in result.output
        mock_commit.assert_not_called()

    def test_interactive_regenerate_then_accept(self, generation):
        """Test that regenerate calls the backend again."""
        result = runner.invoke(app, ["generate", "--interactive"], input="r\na\n")

        assert result.exit_code == 0
        assert len(generation.prompts) == 2
        assert "Generated commit message:" in result.output


class TestHookMode:
    """Tests for generate --message-file."""

    def test_writes_message_file(self, generation, git_env):
        """Test that the message is written instead of printed."""
        message_file = git_env / "COMMIT_EDITMSG"

        result = runner.invoke(app, ["generate", "--message-file", str(message_file)])

        assert result.exit_code == 0
        assert message_file.read_text() == "feat: add user model\n"
        assert "Tip:" not in result.output

    def test_failure_writes_fallback(self, mocker, git_env, sample_diff, fake_provider):
        """Test that errors write the fallback message and exit cleanly."""
        (git_env / ".smartcommit.yaml").write_text(
            "hooks:\n  fallbackMessage: 'chore: wip'\n"
        )
        mocker.patch("smartcommit.cli.main.get_diff", return_value=sample_diff)
        mocker.patch(
            "smartcommit.cli.main.get_provider",
            return_value=fake_provider(error=LLMError("timeout")),
        )
        message_file = git_env / "COMMIT_EDITMSG"

        result = runner.invoke(app, ["generate", "--message-file", str(message_file)])

        assert result.exit_code == 0
        assert message_file.read_text() == "chore: wip\n"

    def test_auto_stage(self, mocker, generation, git_env):
        """Test that hooks.autoStage stages changes first."""
        (git_env / ".smartcommit.yaml").write_text("hooks:\n  autoStage: true\n")
        mock_stage = mocker.patch("smartcommit.cli.main.stage_all_changes")

        runner.invoke(app, ["generate", "--message-file", str(git_env / "MSG")])

        mock_stage.assert_called_once()


class TestAnalysisCommands:
    """Tests for analyze and history commands."""

    @pytest.fixture
    def records(self, record_factory):
        return [
            record_factory("feat(api): add endpoint", sha="a"),
            record_factory("fix(api): handle errors", author="Bob", sha="b"),
            record_factory("feat: add cli", sha="c"),
        ]

    def test_analyze(self, mocker, records):
        """Test the statistics report output."""
        mocker.patch("smartcommit.cli.analyze.is_git_repo", return_value=True)
        mock_collect = mocker.patch(
            "smartcommit.cli.analyze.collect_and_analyze",
            return_value=analyze_history(records),
        )

        result = runner.invoke(app, ["analyze", "--limit", "20"])

        assert result.exit_code == 0
        mock_collect.assert_called_once_with(20)
        assert "=== Commit Statistics Report ===" in result.output
        assert "Total commits analyzed: 3" in result.output
        assert "feat: 2 (66.7%)" in result.output
        assert "api: 2" in result.output
        assert "10:00: 3 commits" in result.output

    def test_history(self, mocker, records):
        """Test the convention summary output."""
        mocker.patch("smartcommit.cli.analyze.is_git_repo", return_value=True)
        mocker.patch(
            "smartcommit.cli.analyze.collect_and_summarize",
            return_value=summarize_history(records),
        )

        result = runner.invoke(app, ["history"])

        assert result.exit_code == 0
        assert "Commit history analysis:" in result.output
        assert "- Most common commit types: feat (2), fix (1)" in result.output

    def test_analyze_outside_repo(self, mocker):
        """Test the error outside a repository."""
        mocker.patch("smartcommit.cli.analyze.is_git_repo", return_value=False)

        result = runner.invoke(app, ["analyze"])

        assert result.exit_code == 1
        assert "Git error" in result.output

    def test_generate_analyze_flag(self, mocker, git_env, records):
        """Test that generate --analyze prints the report and stops."""
        mocker.patch(
            "smartcommit.cli.main.collect_and_analyze",
            return_value=analyze_history(records),
        )
        mock_diff = mocker.patch("smartcommit.cli.main.get_diff")

        result = runner.invoke(app, ["generate", "--analyze"])

        assert result.exit_code == 0
        assert "=== Commit Statistics Report ===" in result.output
        mock_diff.assert_not_called()


class TestBatchCommand:
    """Tests for the batch command."""

    @pytest.fixture
    def batch_env(self, mocker, temp_dir, fake_provider):
        mocker.patch("smartcommit.cli.batch.is_git_repo", return_value=True)
        mocker.patch("smartcommit.cli.batch.get_repo_root", return_value=temp_dir)
        backend = fake_provider(text="refactor: tidy parser")
        mocker.patch("smartcommit.cli.batch.get_provider", return_value=backend)
        return backend

    def test_processes_each_commit(self, mocker, batch_env, record_factory):
        """Test that originals and generated messages are printed."""
        mock_range = mocker.patch(
            "smartcommit.cli.batch.get_commits_in_range",
            return_value=[record_factory("wip", sha="abc1234"), record_factory("more wip", sha="def5678")],
        )
        mocker.patch("smartcommit.cli.batch.get_diff_for_commit", return_value="diff")

        result = runner.invoke(app, ["batch", "HEAD~2..HEAD"])

        assert result.exit_code == 0
        mock_range.assert_called_once_with("HEAD~2..HEAD")
        assert "Found 2 commits in range" in result.output
        assert "Processing commit: abc1234 - wip" in result.output
        assert "Original message: more wip" in result.output
        assert result.output.count("Generated message: refactor: tidy parser") == 2

    def test_failed_commit_skipped(self, mocker, batch_env, record_factory):
        """Test that one failing commit does not stop the batch."""
        mocker.patch(
            "smartcommit.cli.batch.get_commits_in_range",
            return_value=[record_factory("first", sha="a1"), record_factory("second", sha="b2")],
        )
        mocker.patch(
            "smartcommit.cli.batch.get_diff_for_commit",
            side_effect=[DiffUnavailableError("bad revision"), "diff"],
        )

        result = runner.invoke(app, ["batch"])

        assert result.exit_code == 0
        assert "Error processing commit a1: bad revision" in result.output
        assert "Original message: second" in result.output

    def test_uses_configured_template(self, mocker, batch_env, temp_dir, record_factory):
        """Test that batch prompts come from the configured template."""
        templates = temp_dir / "tpl"
        templates.mkdir()
        (templates / "review.txt").write_text("Review {{scope}} for {{model}}:\n{{diff}}")
        (temp_dir / ".smartcommit.yaml").write_text(
            f"template: review\ntemplatesDir: {templates}\nscope: api\n"
        )
        mocker.patch(
            "smartcommit.cli.batch.get_commits_in_range",
            return_value=[record_factory("wip", sha="a1")],
        )
        mocker.patch("smartcommit.cli.batch.get_diff_for_commit", return_value="+{{model}}")

        result = runner.invoke(app, ["batch"])

        assert result.exit_code == 0
        assert batch_env.prompts == ["Review api for fake-model:\n+{{model}}"]

    def test_empty_range(self, mocker, batch_env):
        """Test the message for an empty range."""
        mocker.patch("smartcommit.cli.batch.get_commits_in_range", return_value=[])

        result = runner.invoke(app, ["batch"])

        assert result.exit_code == 0
        assert "No commits found in the specified range." in result.output

    def test_generate_batch_prompts_for_range(self, mocker, git_env):
        """Test that generate --batch asks for a range."""
        mock_batch = mocker.patch("smartcommit.cli.main.run_batch", return_value=0)

        result = runner.invoke(app, ["generate", "--batch"], input="\n")

        assert result.exit_code == 0
        assert mock_batch.call_args[0][0] == "HEAD~3..HEAD"


class TestHookCommand:
    """Tests for hook install."""

    def test_install(self, mocker, mock_repo_root):
        """Test the success message."""
        hook_file = mock_repo_root / ".git" / "hooks" / "prepare-commit-msg"
        mock_install = mocker.patch("smartcommit.cli.hook.install_hook", return_value=hook_file)

        result = runner.invoke(app, ["hook", "install", "--force"])

        assert result.exit_code == 0
        assert mock_install.call_args[1]["force"] is True
        assert f"hook installed at {hook_file}" in result.output

    def test_install_error(self, mocker):
        """Test that installation errors exit with 1."""
        mocker.patch("smartcommit.cli.hook.install_hook", side_effect=GitError("already exists"))

        result = runner.invoke(app, ["hook", "install"])

        assert result.exit_code == 1
        assert "Error: already exists" in result.output


class TestTemplatesCommand:
    """Tests for templates init."""

    def test_init_writes_templates(self, temp_dir):
        """Test that bundled templates are written once."""
        target = temp_dir / "commit-templates"

        first = runner.invoke(app, ["templates", "init", "--dir", str(target)])
        second = runner.invoke(app, ["templates", "init", "--dir", str(target)])

        assert first.exit_code == 0
        assert "✓ Wrote" in first.output
        assert any(target.glob("*.txt"))
        assert "Templates already exist" in second.output


class TestConfigCommands:
    """Tests for config subcommands."""

    def test_show_unconfigured(self):
        """Test show with no global config."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "No configuration found" in result.output

    def test_set_provider_with_alias(self):
        """Test that model aliases are resolved when saving."""
        result = runner.invoke(app, ["config", "set-provider", "anthropic", "--model", "opus"])

        assert result.exit_code == 0
        assert global_config.get_active_provider() == LLMProvider.ANTHROPIC
        assert global_config.get_active_model() == "claude-3-opus-20240229"

    def test_set_provider_invalid(self):
        """Test that unknown providers are rejected."""
        result = runner.invoke(app, ["config", "set-provider", "cohere"])

        assert result.exit_code == 1
        assert "Invalid provider" in result.output

    def test_set_key_and_show(self):
        """Test that a saved key is shown masked."""
        runner.invoke(app, ["config", "set-provider", "openai"])
        result = runner.invoke(app, ["config", "set-key", "openai"], input="sk-1234567890abcdef\n")

        assert result.exit_code == 0
        assert global_config.get_credential("OPENAI_API_KEY") == "sk-1234567890abcdef"

        shown = runner.invoke(app, ["config", "show"])
        assert "sk-12345...cdef" in shown.output
        assert "sk-1234567890abcdef" not in shown.output

    def test_list_models(self):
        """Test that aliases are listed per provider."""
        result = runner.invoke(app, ["config", "list-models"])

        assert result.exit_code == 0
        assert "anthropic" in result.output
        assert "opus" in result.output
