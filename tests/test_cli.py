"""End-to-end tests for the twig command line."""

import pytest
from click.testing import CliRunner

from twig.cli.config import ShellConfig
from twig.cli.main import main


@pytest.fixture
def runner():
    return CliRunner()


def test_scenario_session(runner):
    """Run the full c1/root scenario through stdin."""
    commands = "\n".join(
        [
            "new commit 'c1' master",
            "new branch old master~1",
            "delete branch master",
            "delete branch old",
        ]
    )
    result = runner.invoke(main, ["root"], input=commands + "\n")

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "master -> 'root'",
        "master -> 'c1'",
        "old -> 'root'",
        "master deleted",
        "'c1' deleted",
        "old deleted",
        "'root' deleted",
    ]


def test_failures_do_not_stop_the_session(runner):
    result = runner.invoke(main, ["root"], input="new branch\nexamine\n")

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[:3] == ["master -> 'root'", "Error", "master:"]


def test_payload_is_printed_verbatim(runner):
    """Payloads that look like rich markup or emoji codes are not rendered."""
    result = runner.invoke(main, ["[bold]root[/bold]"], input="new commit ':smile: [red]x' master\n")

    assert result.output.splitlines() == [
        "master -> '[bold]root[/bold]'",
        "master -> ':smile: [red]x'",
    ]


def test_verbose_errors_flag(runner):
    result = runner.invoke(main, ["root", "--verbose-errors"], input="delete branch nope\n")

    assert result.output.splitlines()[-1] == "Error: Branch ``nope'' doesn't exist"


def test_root_data_from_environment(runner):
    result = runner.invoke(main, [], input="", env={"TWIG_ROOT_DATA": "from env"})

    assert result.exit_code == 0
    assert result.output.splitlines() == ["master -> 'from env'"]


def test_missing_root_data_is_fatal(runner):
    result = runner.invoke(main, [], input="examine\n", env={"TWIG_ROOT_DATA": None})

    assert result.exit_code == 2
    assert "ROOT_DATA" in result.output


def test_interactive_prompt(runner):
    """Forcing interactive mode prints a blank line and the prompt before each read."""
    result = runner.invoke(
        main, ["root", "--interactive", "--prompt", "twig> "], input="examine\n"
    )

    assert result.exit_code == 0
    assert "twig> " in result.output
    assert result.output.count("twig> ") == 2


def test_config_rejects_unknown_log_level():
    with pytest.raises(ValueError):
        ShellConfig(root_data="x", log_level="LOUD")


def test_config_normalises_log_level():
    assert ShellConfig(root_data="x", log_level="debug").log_level == "DEBUG"


def test_tab_in_payload_is_printed_verbatim(runner):
    """Tabs inside a payload survive in both the feedback and deletion lines."""
    commands = "new branch t master\nnew commit 'a\tb' t\ndelete branch t\n"
    result = runner.invoke(main, ["root"], input=commands)

    assert result.exit_code == 0
    assert result.output.splitlines()[2:] == [
        "t -> 'a\tb'",
        "t deleted",
        "'a\tb' deleted",
    ]


def test_prompt_is_not_rendered_as_markup(runner):
    result = runner.invoke(main, ["root", "--interactive", "--prompt", "[x]> "], input="examine\n")

    assert result.exit_code == 0
    assert result.output.count("[x]> ") == 2
