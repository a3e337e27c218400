"""
End-to-end tests for the command-line interface.
"""

import json

import pytest
import yaml

from promo_curator.main import EXIT_ERROR, EXIT_ISSUES, EXIT_OK, main

pytestmark = pytest.mark.integration

CLEAN = [
    {"id": "gemini", "title": "Gemini API Free Tier", "url": "https://ai.google.dev/pricing"},
    {"id": "cohere", "title": "Cohere Trial API Key", "url": "https://cohere.com/pricing"},
]

DIRTY = CLEAN + [
    {"id": "gemini-dup", "title": "Google AI Studio", "url": "https://www.ai.google.dev/pricing/"},
]


class TestValidateCommand:
    """Test the validate command."""

    def test_clean_catalog_exits_zero(self, write_catalog, capsys):
        """Test the success path."""
        code = main(["--catalog", write_catalog(CLEAN), "validate"])

        assert code == EXIT_OK
        assert "Promo validation passed" in capsys.readouterr().out

    def test_issues_exit_one(self, write_catalog, capsys):
        """Test that duplicates produce a report on stderr."""
        code = main(["--catalog", write_catalog(DIRTY), "validate"])

        err = capsys.readouterr().err
        assert code == EXIT_ISSUES
        assert "Duplicate promo URLs detected" in err
        assert "ai.google.dev/pricing" in err

    def test_threshold_flag(self, write_catalog, capsys):
        """Test that --threshold lowers the similarity bar."""
        entries = [
            {"id": "one", "title": "AI Promo Offer", "url": "https://a.example.com/"},
            {"id": "two", "title": "AI Promo", "url": "https://b.example.com/"},
        ]
        path = write_catalog(entries)

        assert main(["--catalog", path, "validate"]) == EXIT_OK
        assert main(["--catalog", path, "validate", "--threshold", "0.8"]) == EXIT_ISSUES
        assert "(score 0.80)" in capsys.readouterr().err

    def test_invalid_url_raise_policy_exits_two(self, write_catalog, capsys):
        """Test that an invalid URL aborts under the default policy."""
        entries = CLEAN + [{"id": "broken", "title": "Broken", "url": "nope"}]

        code = main(["--catalog", write_catalog(entries), "validate"])

        assert code == EXIT_ERROR
        assert "broken" in capsys.readouterr().err

    def test_invalid_url_skip_policy_reports(self, write_catalog, capsys):
        """Test that --invalid-urls skip reports and exits one."""
        entries = CLEAN + [{"id": "broken", "title": "Broken", "url": "nope"}]

        code = main(
            ["--catalog", write_catalog(entries), "validate", "--invalid-urls", "skip"]
        )

        assert code == EXIT_ISSUES
        assert "Entries with invalid URLs were skipped" in capsys.readouterr().err

    def test_bad_threshold_is_configuration_error(self, write_catalog, capsys):
        """Test that config validation applies to CLI overrides."""
        code = main(["--catalog", write_catalog(CLEAN), "validate", "--threshold", "3"])

        assert code == EXIT_ERROR
        assert "Configuration error" in capsys.readouterr().err

    def test_missing_catalog_exits_two(self, temp_dir, capsys):
        """Test that catalog errors are reported."""
        code = main(["--catalog", str(temp_dir / "missing.yaml"), "validate"])

        assert code == EXIT_ERROR
        assert "Catalog file not found" in capsys.readouterr().err

    def test_config_file_supplies_settings(self, write_catalog, temp_dir, capsys):
        """Test that the catalog path can come from the config file."""
        config_path = temp_dir / "config.yaml"
        config_path.write_text(
            yaml.safe_dump({"catalog": {"path": write_catalog(DIRTY)}}),
            encoding="utf-8",
        )

        assert main(["--config", str(config_path), "validate"]) == EXIT_ISSUES

    def test_scalar_config_section_exits_two(self, temp_dir, capsys):
        """Test that a malformed config section is a configuration error."""
        config_path = temp_dir / "config.yaml"
        config_path.write_text("catalog: promos.yaml\n", encoding="utf-8")

        code = main(["--config", str(config_path), "validate"])

        assert code == EXIT_ERROR
        assert "'catalog' section must be a mapping" in capsys.readouterr().err

    def test_relative_catalog_path_from_other_directory(
        self, write_catalog, temp_dir, monkeypatch
    ):
        """Test that the catalog path is found relative to the config file."""
        write_catalog(DIRTY)
        config_path = temp_dir / "config.yaml"
        config_path.write_text(
            yaml.safe_dump({"catalog": {"path": "promos.yaml"}}), encoding="utf-8"
        )
        elsewhere = temp_dir / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)

        assert main(["--config", str(config_path), "validate"]) == EXIT_ISSUES

    def test_log_dir_writes_log_files(self, write_catalog, temp_dir):
        """Test that a configured log directory receives log files."""
        log_dir = temp_dir / "logs"
        config_path = temp_dir / "config.yaml"
        config_path.write_text(
            yaml.safe_dump({"logging": {"level": "INFO", "log_dir": str(log_dir)}}),
            encoding="utf-8",
        )

        main(["--config", str(config_path), "--catalog", write_catalog(CLEAN), "validate"])

        assert (log_dir / "promo_curator.log").exists()
        assert "Catalog validated" in (log_dir / "promo_curator.log").read_text(
            encoding="utf-8"
        )


class TestCheckCommand:
    """Test the check command."""

    def test_new_submission_exits_zero(self, write_catalog, capsys):
        """Test a submission with a new URL and title."""
        code = main(
            [
                "--catalog",
                write_catalog(CLEAN),
                "check",
                "--title",
                "Replicate Free Credits",
                "--url",
                "https://replicate.com/pricing",
            ]
        )

        assert code == EXIT_OK
        assert "No duplicates found" in capsys.readouterr().out

    def test_duplicate_submission_exits_one(self, write_catalog, capsys):
        """Test a submission that repeats an existing URL."""
        code = main(
            [
                "--catalog",
                write_catalog(CLEAN),
                "check",
                "--id",
                "proposed",
                "--title",
                "Cohere Free Calls",
                "--url",
                "https://www.cohere.com/pricing?ref=issue",
            ]
        )

        err = capsys.readouterr().err
        assert code == EXIT_ISSUES
        assert "Same URL:" in err
        assert "(cohere)" in err

    def test_invalid_submission_url_exits_two(self, write_catalog, capsys):
        """Test that a malformed proposed URL is an error."""
        code = main(
            ["--catalog", write_catalog(CLEAN), "check", "--title", "X", "--url", "x"]
        )

        assert code == EXIT_ERROR
        assert "Invalid URL" in capsys.readouterr().err


class TestExpiredCommand:
    """Test the expired command."""

    ENTRIES = CLEAN + [
        {
            "id": "old",
            "title": "Old Offer",
            "url": "https://old.example.com/",
            "expiry_date": "2026-01-31",
        }
    ]

    def test_text_mode_exits_one_when_expired(self, write_catalog, capsys):
        """Test the text listing."""
        code = main(
            ["--catalog", write_catalog(self.ENTRIES), "expired", "--today", "2026-02-18"]
        )

        assert code == EXIT_ISSUES
        assert "Old Offer (old) expired on 2026-01-31" in capsys.readouterr().out

    def test_text_mode_exits_zero_when_none(self, write_catalog, capsys):
        """Test the empty listing."""
        code = main(
            ["--catalog", write_catalog(self.ENTRIES), "expired", "--today", "2026-01-31"]
        )

        assert code == EXIT_OK
        assert "No expired promos" in capsys.readouterr().out

    def test_json_mode(self, write_catalog, capsys):
        """Test the automation payload."""
        code = main(
            [
                "--catalog",
                write_catalog(self.ENTRIES),
                "expired",
                "--today",
                "2026-02-18",
                "--json",
            ]
        )

        assert code == EXIT_OK
        payload = json.loads(capsys.readouterr().out)
        assert [item["id"] for item in payload] == ["old"]

    def test_bad_today_is_usage_error(self, write_catalog):
        """Test that --today must be an ISO date."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--catalog", write_catalog(CLEAN), "expired", "--today", "soon"])

        assert exc_info.value.code == 2


class TestBundledCatalogCli:
    """Test the CLI against the shipped catalog."""

    def test_bundled_catalog_passes(self, temp_dir, monkeypatch, capsys):
        """Test validate with no arguments beyond the command."""
        monkeypatch.chdir(temp_dir)

        assert main(["validate"]) == EXIT_OK
