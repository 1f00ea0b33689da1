import sys

import pytest

from siteforge import cli

BUSINESS_YAML = """\
name: Apex Roofing
industry: roofing
addresses:
  - city: Charlotte
    state: NC
services:
  - name: Roof Repair
serviceAreas:
  - city: Charlotte
    state: NC
    priority: high
"""


@pytest.fixture
def offline(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)


def _run(monkeypatch, tmp_path, *argv):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", ["siteforge", "--settings", str(tmp_path / "missing.yaml"), *argv])
    cli.main()


def test_routes_prints_table(monkeypatch, tmp_path, capsys):
    _run(monkeypatch, tmp_path, "routes")
    out = capsys.readouterr().out
    assert "research:industry" in out
    assert "expand:cities" in out


def test_load_business_reads_json_and_yaml(tmp_path):
    yaml_path = tmp_path / "b.yaml"
    yaml_path.write_text(BUSINESS_YAML, encoding="utf-8")
    json_path = tmp_path / "b.json"
    json_path.write_text('{"name": "Apex Roofing", "industry": "roofing"}', encoding="utf-8")

    assert cli.load_business(str(yaml_path)).services[0].slug == "roof-repair"
    assert cli.load_business(str(json_path)).name == "Apex Roofing"


def test_estimate_makes_no_calls(monkeypatch, tmp_path, capsys, offline):
    (tmp_path / "b.yaml").write_text(BUSINESS_YAML, encoding="utf-8")

    _run(monkeypatch, tmp_path, "estimate", "--business", str(tmp_path / "b.yaml"))

    out = capsys.readouterr().out
    assert "Apex Roofing: 6 task(s)" in out
    assert "Total:" in out


def test_dry_run_lists_planned_tasks(monkeypatch, tmp_path, capsys, offline):
    (tmp_path / "b.yaml").write_text(BUSINESS_YAML, encoding="utf-8")

    _run(monkeypatch, tmp_path, "build", "--business", str(tmp_path / "b.yaml"), "--dry-run")

    out = capsys.readouterr().out
    assert "- expand:cities -> groq" in out
    assert not (tmp_path / "apex-roofing").exists()


def test_offline_build_writes_templated_site(monkeypatch, tmp_path, capsys, offline):
    (tmp_path / "b.yaml").write_text(BUSINESS_YAML, encoding="utf-8")

    _run(monkeypatch, tmp_path, "build", "--business", str(tmp_path / "b.yaml"), "--output", str(tmp_path / "out"))

    out = capsys.readouterr().out
    assert "[research]" in out
    assert "[validate]" in out
    assert (tmp_path / "out" / "package.json").is_file()
    assert "LLM cost: $0.0000" in out


def test_build_rejects_invalid_business(monkeypatch, tmp_path, offline):
    (tmp_path / "b.yaml").write_text("name: Nobody\nindustry: spaceships\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, tmp_path, "build", "--business", str(tmp_path / "b.yaml"))

    assert exc.value.code == 2
