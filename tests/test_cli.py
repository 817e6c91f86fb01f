import importlib
import json

import pytest
from click.testing import CliRunner

from product_describer.cli.cli import cli
from product_describer.core.utils import config as config_module
from product_describer.core.utils.records import DESCRIPTION_COLUMN

cli_module = importlib.import_module("product_describer.cli.cli")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def products(tmp_path, write_csv, product_row):
    return write_csv(tmp_path / "products.csv", [product_row("p0"), product_row("p1")])


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    monkeypatch.setattr(
        config_module, "get_user_config_path",
        lambda: tmp_path / "user-config" / "config.yaml",
    )


def test_run_writes_output_and_summary(tmp_path, runner, products, fake_client, monkeypatch, read_csv):
    client = fake_client()
    monkeypatch.setattr(cli_module, "_create_client", lambda api: client)
    output = tmp_path / "described.csv"
    summary_file = tmp_path / "summary.json"

    result = runner.invoke(cli, [
        "run", str(products), str(output), "--no-progress",
        "--model", "gpt-4o-mini", "-n", "1", "--summary-file", str(summary_file),
    ])

    assert result.exit_code == 0, result.output
    rows, _ = read_csv(output)
    assert [row[DESCRIPTION_COLUMN] for row in rows] == ["A lovely product."] * 2
    summary = json.loads(summary_file.read_text())
    assert summary["records"]["generated"] == 2
    assert summary["model"] == "gpt-4o-mini"


def test_run_without_credentials_exits_with_error(tmp_path, runner, products, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    result = runner.invoke(cli, ["run", str(products), str(tmp_path / "out.csv")])

    assert result.exit_code == 1
    assert not (tmp_path / "out.csv").exists()


def test_run_with_unknown_model_exits_with_error(tmp_path, runner, products, fake_client, monkeypatch):
    monkeypatch.setattr(cli_module, "_create_client", lambda api: fake_client())

    result = runner.invoke(cli, [
        "run", str(products), str(tmp_path / "out.csv"), "--no-progress", "--model", "not-a-model",
    ])

    assert result.exit_code == 1


def test_rejects_non_positive_concurrency(tmp_path, runner, products):
    result = runner.invoke(cli, ["run", str(products), str(tmp_path / "out.csv"), "-n", "0"])

    assert result.exit_code == 2


def test_summary_file_must_be_json_before_any_generation(tmp_path, runner, products, fake_client, monkeypatch):
    client = fake_client()
    monkeypatch.setattr(cli_module, "_create_client", lambda api: client)
    output = tmp_path / "out.csv"

    result = runner.invoke(cli, [
        "run", str(products), str(output), "--no-progress", "--summary-file", str(tmp_path / "summary.txt"),
    ])

    assert result.exit_code == 2
    assert client.calls == []
    assert not output.exists()


def test_status_runs_without_api_key(tmp_path, runner, products, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    result = runner.invoke(cli, ["status", str(products), str(tmp_path / "out.csv")])

    assert result.exit_code == 0


def test_init_config_refuses_to_overwrite(tmp_path, runner):
    path = tmp_path / "config.yaml"

    assert runner.invoke(cli, ["init-config", str(path)]).exit_code == 0
    assert path.exists()
    assert runner.invoke(cli, ["init-config", str(path)]).exit_code == 1
    assert runner.invoke(cli, ["init-config", str(path), "--force"]).exit_code == 0
