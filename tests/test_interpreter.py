"""Tests for the interpreter loop."""

import pytest

from twig.core.interpreter import FAILURE_MESSAGE, Interpreter


@pytest.fixture
def output():
    return []


@pytest.fixture
def interpreter(output):
    return Interpreter("root", output.append)


def test_startup_seeds_master(interpreter, output):
    """The root branch is reported before any command runs."""
    assert output == ["master -> 'root'"]
    assert interpreter.store.head("master").data == "root"


def test_handle_success(interpreter, output):
    assert interpreter.handle("new commit 'c1' master\n")
    assert output[-1] == "master -> 'c1'"


def test_handle_trims_whitespace(interpreter, output):
    assert interpreter.handle("  \t examine  \r\n")
    assert output[-1].startswith("master:")


def test_parse_failure_leaves_table_untouched(interpreter, output):
    """A malformed line reports one failure and changes nothing."""
    before = dict(interpreter.store.branches)

    assert not interpreter.handle("new branch")

    assert output[-1] == FAILURE_MESSAGE
    assert dict(interpreter.store.branches) == before
    assert interpreter.store.head("master").owners == 1


@pytest.mark.parametrize(
    "line",
    ["delete branch ghost", "new commit 'x' ghost", "new branch a ghost", "new branch a master~1"],
)
def test_store_errors_are_reported(interpreter, output, line):
    assert not interpreter.handle(line)
    assert output[1:] == [FAILURE_MESSAGE]


def test_verbose_errors_explain_failures(output):
    interpreter = Interpreter("root", output.append, verbose_errors=True)

    interpreter.handle("delete branch ghost")
    interpreter.handle("new branch a master~2")
    interpreter.handle("gibberish")

    assert output[1:] == [
        "Error: Branch ``ghost'' doesn't exist",
        "Error: Branch ``master'' does not go back 2 commits",
        "Error: Could not parse command",
    ]


def test_run_counts_failures_and_continues(interpreter, output):
    failures = interpreter.run(
        [
            "new branch X master",
            "bogus",
            "new commit 'a' X",
            "delete branch nope",
            "delete branch X",
        ]
    )

    assert failures == 2
    assert output == [
        "master -> 'root'",
        "X -> 'root'",
        "Error",
        "X -> 'a'",
        "Error",
        "X deleted",
        "'a' deleted",
    ]


def test_run_empty_input(interpreter):
    assert interpreter.run([]) == 0
