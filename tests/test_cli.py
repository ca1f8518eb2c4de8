"""Tests for the command-line interface."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cvrender import cli, cli_execute
from cvrender.cli_gather import _parse_params, gather_user_requirements
from cvrender.transforms import TextTransformAdapter, openai_client


class TestGather:
    """Tests for CLI gather (phase 1)."""

    def test_render_stage(self):
        config = gather_user_requirements(["--data", "cv.json", "--render", "html", "--theme", "ivy-league"])
        assert config.data == Path("cv.json")
        assert config.render.format == "html"
        assert config.render.theme == "ivy-league"
        assert config.render.mode == "resume"
        assert config.render.output is None
        assert config.transform is None

    def test_transform_stage(self):
        config = gather_user_requirements([
            "--transform", "suggest-skills", "--param", "job-title=Data Engineer",
            "--param", "location=Lisbon, PT", "--provider", "openrouter",
        ])
        assert config.transform.operation == "suggest-skills"
        assert config.transform.params == {"job-title": "Data Engineer", "location": "Lisbon, PT"}
        assert config.transform.provider == "openrouter"

    def test_list_only(self):
        config = gather_user_requirements(["--list", "themes"])
        assert config.list_kind == "themes"

    @pytest.mark.parametrize("argv", [
        [],
        ["--render", "html"],
        ["--verify"],
        ["--data", "cv.json", "--render", "html", "--transform", "rewrite"],
        ["--data", "cv.json", "--verify", "--param", "a=b"],
    ])
    def test_invalid_combinations(self, argv):
        with pytest.raises(ValueError):
            gather_user_requirements(argv)

    def test_parse_params(self):
        assert _parse_params(["a=1", " b = x=y "]) == {"a": "1", "b": "x=y"}
        assert _parse_params(None) == {}
        with pytest.raises(ValueError):
            _parse_params(["novalue"])
        with pytest.raises(ValueError):
            _parse_params(["=x"])


class TestMainFunction:
    """Tests for the main CLI entry point."""

    @patch("cvrender.cli.execute_pipeline")
    @patch("cvrender.cli.prepare_execution_environment")
    @patch("cvrender.cli.gather_user_requirements")
    def test_main_exception_returns_one(self, mock_gather, mock_prepare, mock_execute):
        """main() returns 1 when a phase raises."""
        mock_config = MagicMock(log_file=None, debug=False, verbosity=0)
        mock_gather.return_value = mock_config
        mock_prepare.side_effect = RuntimeError("boom")

        assert cli.main([]) == 1
        mock_execute.assert_not_called()

    def test_gather_error_returns_one(self):
        assert cli.main(["--render", "html"]) == 1

    def test_list(self, capsys):
        assert cli.main(["--list", "themes"]) == 0
        out = capsys.readouterr().out
        assert "modern-slate" in out
        assert "timeline-pro" in out

    @pytest.mark.parametrize("kind,expected", [
        ("renderers", "docx"),
        ("layouts", "cover-letter"),
        ("transforms", "analyze-match"),
    ])
    def test_list_kinds(self, capsys, kind, expected):
        assert cli.main(["--list", kind]) == 0
        assert expected in capsys.readouterr().out


class TestVerifyCommand:
    """Tests for --verify."""

    def test_clean_document(self, sample_data_file, capsys):
        assert cli.main(["--data", str(sample_data_file), "--verify"]) == 0
        assert "resume.json: -" in capsys.readouterr().out

    def test_errors(self, tmp_path: Path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"experience": "oops"}), encoding="utf-8")
        assert cli.main(["--data", str(path), "--verify"]) == 1
        assert "experience must be an array" in capsys.readouterr().out

    def test_strict_warnings(self, tmp_path: Path):
        path = tmp_path / "warn.json"
        path.write_text(json.dumps({"skills": [{"id": "a", "name": "Go", "level": 9}]}), encoding="utf-8")
        assert cli.main(["--data", str(path), "--verify"]) == 0
        assert cli.main(["--data", str(path), "--verify", "--strict"]) == 2

    def test_missing_file(self, tmp_path: Path):
        assert cli.main(["--data", str(tmp_path / "none.json"), "--verify"]) == 1

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{nope", encoding="utf-8")
        assert cli.main(["--data", str(path), "--verify"]) == 1


class TestRenderCommand:
    """Tests for --render."""

    def test_render_html_to_output(self, sample_data_file, tmp_path: Path):
        out = tmp_path / "out" / "cv.html"
        rc = cli.main(["--data", str(sample_data_file), "--render", "html", "--output", str(out),
                       "--theme", "swiss-international"])
        assert rc == 0
        assert 'data-theme="swiss-international"' in out.read_text(encoding="utf-8")

    def test_default_output_path(self, sample_data_file):
        assert cli.main(["--data", str(sample_data_file), "--render", "docx"]) == 0
        assert sample_data_file.with_name("resume.docx").exists()

    def test_cover_default_output_path(self, sample_data_file):
        assert cli.main(["--data", str(sample_data_file), "--render", "text", "--mode", "cover"]) == 0
        text = sample_data_file.with_name("resume-cover-letter.txt").read_text(encoding="utf-8")
        assert "Jane Doe" in text

    def test_unknown_renderer(self, sample_data_file):
        assert cli.main(["--data", str(sample_data_file), "--render", "pdf"]) == 1

    def test_non_object_data(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert cli.main(["--data", str(path), "--render", "html"]) == 1


class TestTransformCommand:
    """Tests for --transform."""

    def test_unavailable_service(self, monkeypatch, capsys):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.setattr(openai_client, "OpenAI", MagicMock())
        rc = cli.main(["--transform", "rewrite", "--param", "text=hello"])
        assert rc == 1
        out = json.loads(capsys.readouterr().out)
        assert out["ok"] is False
        assert out["value"] == "hello"
        assert out["error"]["kind"] == "ServiceUnavailable"

    def test_success_with_document(self, monkeypatch, capsys, sample_data_file, fake_client):
        client = fake_client(reply='{"score": 80, "feedback": [], "missingKeywords": []}')
        monkeypatch.setattr(cli_execute, "TextTransformAdapter",
                            lambda config: TextTransformAdapter(client=client, config=config))
        rc = cli.main(["--data", str(sample_data_file), "--transform", "analyze-match",
                       "--param", "job-description=Kafka engineer"])
        assert rc == 0
        out = json.loads(capsys.readouterr().out)
        assert out == {"operation": "analyze-match", "ok": True,
                       "value": {"score": 80, "feedback": [], "missingKeywords": []}}
        assert "Ana Souza" in client.calls[0]["user"]

    def test_result_to_file(self, monkeypatch, tmp_path: Path, fake_client):
        client = fake_client(reply='{"skills": ["Go"]}')
        monkeypatch.setattr(cli_execute, "TextTransformAdapter",
                            lambda config: TextTransformAdapter(client=client, config=config))
        out = tmp_path / "res" / "skills.json"
        rc = cli.main(["--transform", "suggest-skills", "--param", "job-title=Dev", "--output", str(out)])
        assert rc == 0
        assert json.loads(out.read_text(encoding="utf-8"))["value"] == ["Go"]

    def test_unknown_transform(self):
        assert cli.main(["--transform", "poem"]) == 1

    def test_missing_param(self):
        assert cli.main(["--transform", "translate", "--param", "text=x"]) == 1
