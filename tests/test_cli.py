import json

import pytest

from fast_rules import Validator
from fast_rules.cli.main import main


@pytest.fixture
def write_json(tmp_path):
    def write(name, payload):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return write


@pytest.fixture(autouse=True)
def quiet_logging(restore_root_logging, monkeypatch, tmp_path):
    monkeypatch.delenv("LOG_FILE_NAME", raising=False)
    monkeypatch.delenv("ENV", raising=False)
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "log"))


def test_validate_command_reports_errors(write_json, capsys):
    input_path = write_json("input.json", {"name": "", "age": 15})
    rules_path = write_json("rules.json", {"name": "required", "age": "min:18"})

    exit_code = main(["validate", input_path, rules_path])

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert output == {
        "passed": False,
        "errors": {
            "name": ["The name field is required."],
            "age": ["The age must be at least 18."],
        },
    }


def test_validate_command_passes(write_json, capsys, sample_data):
    input_path = write_json("input.json", sample_data)
    rules_path = write_json("rules.json", {"name": "required|string", "email": "required|email"})

    assert main(["validate", input_path, rules_path]) == 0
    assert json.loads(capsys.readouterr().out) == {"passed": True, "errors": {}}


def test_validate_command_options(write_json, capsys):
    input_path = write_json("input.json", {"first_name": "", "code": "a!"})
    rules_path = write_json("rules.json", {"first_name": "required", "code": "min:5|alpha_num"})
    messages_path = write_json("messages.json", {"alpha_num.code": "Letters and digits only."})
    attributes_path = write_json("attributes.json", {"first_name": "nombre"})

    exit_code = main([
        "validate", input_path, rules_path,
        "--messages", messages_path,
        "--attributes", attributes_path,
        "--lang", "es",
    ])

    errors = json.loads(capsys.readouterr().out)["errors"]
    assert exit_code == 1
    assert errors["first_name"] == ["El campo nombre es obligatorio."]
    assert errors["code"][1] == "Letters and digits only."


def test_validate_command_stop_on_error(write_json, capsys):
    input_path = write_json("input.json", {"code": "a!"})
    rules_path = write_json("rules.json", {"code": "min:5|alpha_num"})

    main(["validate", input_path, rules_path, "--stop-on-error"])

    assert len(json.loads(capsys.readouterr().out)["errors"]["code"]) == 1


def test_validate_command_runs_async_rules(write_json, capsys):
    async def not_reserved(value, parameter, attribute, done):
        return value != "admin"

    Validator.register_async("not_reserved", not_reserved)
    input_path = write_json("input.json", {"username": "admin"})
    rules_path = write_json("rules.json", {"username": "required|not_reserved"})

    assert main(["validate", input_path, rules_path]) == 1
    assert json.loads(capsys.readouterr().out)["errors"] == {"username": ["The username attribute has errors."]}


def test_version_command(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out.startswith("fast-rules v")


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "fast-rules" in capsys.readouterr().out
