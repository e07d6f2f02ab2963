import json

import pytest

from bsf import cli
from bsf.attestation import AttestationError, Statement, Subject

PROVENANCE = {
    "_type": "https://in-toto.io/Statement/v1",
    "predicateType": "https://slsa.dev/provenance/v1",
    "subject": [{"name": "0.1.0", "digest": {"sha256": ""}}],
    "predicate": {"builder": "nix"},
}
SPDX = {
    "_type": "https://in-toto.io/Statement/v1",
    "predicateType": "https://spdx.github.io/spdx-spec/v2.3/",
    "subject": [{"name": "0.2.0", "digest": {"sha256": ""}}],
    "predicate": {"doc": "sbom"},
}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("BSF_DEBUG_DIR", raising=False)
    monkeypatch.delenv("BSF_DEBUG_MODE", raising=False)
    monkeypatch.delenv("BSF_DEBUG", raising=False)
    monkeypatch.setattr(cli, "DEBUG_DIR", "")


@pytest.fixture
def att_file(tmp_path):
    path = tmp_path / "att.intoto.jsonl"
    path.write_text(json.dumps(PROVENANCE) + "\n" + json.dumps(SPDX) + "\n")
    return path


def test_get_debug_path_from_env(monkeypatch, tmp_path):
    assert cli.get_debug_path() == ""
    monkeypatch.setenv("BSF_DEBUG_DIR", str(tmp_path))
    assert cli.get_debug_path() == str(tmp_path)


def test_validate_file_json_and_intoto(att_file):
    assert cli.validate_file(att_file, "JSON") is None
    grouped = cli.validate_file(att_file, "inToto")
    assert set(grouped) == {"provenance", "spdx"}
    assert grouped["provenance"][0].subject[0].name == "0.1.0"


def test_validate_file_invalid_json(tmp_path):
    path = tmp_path / "bad.jsonl"
    path.write_text("{not json}\n")
    with pytest.raises(ValueError):
        cli.validate_file(path, "JSON")


def test_validate_file_invalid_intoto(tmp_path):
    path = tmp_path / "bad.jsonl"
    path.write_text(json.dumps({**PROVENANCE, "subject": []}) + "\n")
    with pytest.raises(AttestationError):
        cli.validate_file(path, "inToto")


def test_validate_file_missing(tmp_path):
    with pytest.raises(OSError):
        cli.validate_file(tmp_path / "missing.jsonl", "JSON")


def test_conv_pred_sub_to_rows():
    statement = Statement(
        type="https://in-toto.io/Statement/v1",
        predicate_type="https://slsa.dev/provenance/v1",
        subject=[Subject(name="a"), Subject(name="b")],
    )
    rows = cli.conv_pred_sub_to_rows({"provenance": [statement]})
    assert rows == [("https://slsa.dev/provenance/v1", "a, b")]


def test_render_table_is_rectangular(att_file):
    table = cli.render_pred_subj_table(cli.validate_file(att_file, "inToto"))
    lines = table.split("\n")
    assert len({len(line) for line in lines}) == 1
    assert "PREDICATE" in lines[1]
    assert any("https://slsa.dev/provenance/v1" in line and "0.1.0" in line for line in lines)


def test_att_without_subcommand_fails():
    assert cli.main(["att"]) == 1


def test_att_ls(att_file, capsys):
    assert cli.main(["att", "ls", str(att_file)]) == 0
    out = capsys.readouterr().out
    assert "JSONL is valid" in out
    assert "https://spdx.github.io/spdx-spec/v2.3/" in out


def test_att_cat_prints_statement(att_file, capsys):
    assert cli.main(["att", "cat", str(att_file), "-t", "provenance"]) == 0
    assert json.loads(capsys.readouterr().out) == PROVENANCE


def test_att_cat_prints_predicate(att_file, capsys):
    assert cli.main(["att", "cat", str(att_file), "-t", "spdx", "-p"]) == 0
    assert json.loads(capsys.readouterr().out) == SPDX["predicate"]


def test_att_cat_writes_output(att_file, tmp_path):
    out = tmp_path / "out.json"
    code = cli.main(["att", "cat", str(att_file), "-t", "provenance", "-s", "0.1.0", "-o", str(out)])
    assert code == 0
    assert json.loads(out.read_text()) == PROVENANCE


def test_att_cat_invalid_predicate_type(att_file):
    assert cli.main(["att", "cat", str(att_file), "-t", "bogus"]) == 1


def test_att_cat_no_relevant_statements(att_file):
    assert cli.main(["att", "cat", str(att_file), "-t", "provenance", "-s", "9.9.9"]) == 1


def test_att_cat_missing_predicate_type(att_file):
    assert cli.main(["att", "cat", str(att_file)]) == 1


def test_direnv_creates_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert cli.main(["direnv", "-e", "KEY1=value1"]) == 0
    assert (tmp_path / ".envrc").read_text() == "use flake bsf/.\nexport KEY1=value1"
    assert (tmp_path / ".gitignore").read_text() == ".envrc"


def test_direnv_rejects_bad_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert cli.main(["direnv", "-e", "KEY1"]) == 1


def test_debug_dir_changes_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "project"
    target.mkdir()
    monkeypatch.setenv("BSF_DEBUG_DIR", str(target))
    assert cli.main(["direnv"]) == 0
    assert (target / ".envrc").exists()
    assert not (tmp_path / ".envrc").exists()


def test_missing_debug_dir_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BSF_DEBUG_DIR", str(tmp_path / "absent"))
    assert cli.main(["direnv"]) == 1


def test_configure_only_in_debug_mode(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert cli.main(["configure"]) == 1
    monkeypatch.setenv("BSF_DEBUG_MODE", "true")
    assert cli.main(["configure"]) == 0
    saved = json.loads((tmp_path / ".bsf.json").read_text())
    assert saved == {"buildsafe_api": "api.buildsafe.dev:443", "buildsafe_api_tls": True}


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage: bsf" in capsys.readouterr().out