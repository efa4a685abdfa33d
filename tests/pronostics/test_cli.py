import json

from pronostics.cli import main


def test_cli_run_once_with_seed(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "out" / "pronostics.json"
    code = main(["--seed", "5", "--output", str(output)])
    assert code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert len(data["sure_combined"]) == 8
    assert len(data["risky_combined"]) == 5


def test_cli_default_output(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert (tmp_path / "static" / "pronostics.json").exists()


def test_cli_failure_exit_code(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    assert main(["--output", str(blocker / "p.json")]) == 1


def test_cli_invalid_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PORT", "not-a-number")
    assert main([]) == 2
