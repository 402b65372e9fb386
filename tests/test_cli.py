import json

import pytest
from click.testing import CliRunner

from kcheck.cli import MAX_EXIT_STATUS, exit_status, main


def test_check_passes(kernel_config_file, requirements_toml):
    runner = CliRunner()
    result = runner.invoke(
        main, ["check", "-k", str(kernel_config_file), "-c", str(requirements_toml)]
    )
    assert result.exit_code == 0, result.output
    assert "ALL CHECKS PASSED" in result.output
    assert "CONFIG_USB_ACM" in result.output


def test_check_exit_code_counts_failures(tmp_path, kernel_config_file):
    requirements = tmp_path / "req.json"
    requirements.write_text(
        json.dumps({"kernel": [{"name": "CONFIG_FOO", "state": "Off"}]}),
        encoding="utf-8",
    )
    runner = CliRunner()
    result = runner.invoke(
        main, ["check", "-k", str(kernel_config_file), "-c", str(requirements)]
    )
    assert result.exit_code == 1
    assert "1 CHECKS FAILED" in result.output


def test_check_exit_code_is_capped(tmp_path, kernel_config_file):
    requirements = tmp_path / "req.json"
    options = [{"name": f"CONFIG_MISSING_{i}", "state": "On"} for i in range(256)]
    requirements.write_text(json.dumps({"kernel": options}), encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        main, ["check", "--json", "-k", str(kernel_config_file), "-c", str(requirements)]
    )
    assert result.exit_code == MAX_EXIT_STATUS
    assert len(json.loads(result.output)["checks"]) == 256


@pytest.mark.parametrize(
    ("failed", "status"), [(0, 0), (1, 1), (255, 255), (256, 255), (512, 255)]
)
def test_exit_status(failed, status):
    assert exit_status(failed) == status


def test_check_json_output(kernel_config_file, requirements_toml):
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["check", "--json", "-k", str(kernel_config_file), "-c", str(requirements_toml)],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["kernel"] == f"file: {kernel_config_file}"
    assert [c["status"] for c in data["checks"]] == ["pass"] * 4
    assert data["checks"][2] == {
        "name": "CONFIG_BAZ",
        "desired": "Off",
        "observed": "NotSet",
        "status": "pass",
    }


def test_check_reads_kernel_config_from_stdin(kernel_config_text, requirements_toml):
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["check", "--json", "-k", "-", "-c", str(requirements_toml)],
        input=kernel_config_text,
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["kernel"] == "stdin"


def test_check_kconfig_from_environment(kernel_config_file, requirements_toml):
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["check", "--json", "-c", str(requirements_toml)],
        env={"KCHECK_KCONFIG": str(kernel_config_file)},
    )
    assert result.exit_code == 0, result.output


def test_check_reports_errors(tmp_path, requirements_toml):
    kernel = tmp_path / "config"
    kernel.write_text("CONFIG_FOO=y\nCONFIG_FOO=y\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(main, ["check", "-k", str(kernel), "-c", str(requirements_toml)])
    assert result.exit_code == 1
    assert "Duplicate config found: CONFIG_FOO" in result.output


def test_check_missing_requirement_file(kernel_config_file, tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        main, ["check", "-k", str(kernel_config_file), "-c", str(tmp_path / "nope.toml")]
    )
    assert result.exit_code == 1
    assert "File does not exist" in result.output


def test_check_without_system_kernel_config(requirements_toml):
    runner = CliRunner()
    result = runner.invoke(
        main, ["check", "-c", str(requirements_toml)], env={"KCHECK_KCONFIG": None}
    )
    assert result.exit_code == 1
    assert "Kernel config not found" in result.output


def test_option_command(kernel_config_file):
    runner = CliRunner()
    result = runner.invoke(main, ["option", "CONFIG_BAR", "-k", str(kernel_config_file)])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "CONFIG_BAR: Module"


def test_option_command_not_found(kernel_config_file):
    runner = CliRunner()
    result = runner.invoke(main, ["option", "CONFIG_NOPE", "-k", str(kernel_config_file)])
    assert result.exit_code == 0
    assert "CONFIG_NOPE: NotFound" in result.output
