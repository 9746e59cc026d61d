import io
import os

import pytest

from reborners.builtins import (
    ShellExit,
    cd,
    echo,
    env_command,
    exit_command,
    export,
    is_builtin,
    pwd,
    run_builtin,
    unset,
)
from reborners.environment import Environment, ShellState


def _streams():
    return io.StringIO(), io.StringIO()


@pytest.mark.parametrize(
    "name, expected",
    [("echo", True), ("cd", True), ("exit", True), ("env", True), ("pwd", True),
     ("export", True), ("unset", True), ("ls", False), (None, False), ("", False)],
)
def test_is_builtin(name, expected):
    assert is_builtin(name) is expected


@pytest.mark.parametrize(
    "args, expected",
    [
        (["echo", "hello", "world"], "hello world\n"),
        (["echo", "-n", "hi"], "hi"),
        (["echo", "-nnnn", "-n", "a", "b"], "a b"),
        (["echo", "-nx", "a"], "-nx a\n"),
        (["echo"], "\n"),
        (["echo", "a", "-n"], "a -n\n"),
    ],
)
def test_echo(args, expected):
    out = io.StringIO()
    assert echo(args, out) == 0
    assert out.getvalue() == expected


def test_cd_changes_directory_and_updates_pwd(tmp_path, monkeypatch):
    target = tmp_path / "sub"
    target.mkdir()
    monkeypatch.chdir(tmp_path)
    before = os.getcwd()
    state = ShellState()
    out, err = _streams()
    assert cd(["cd", str(target)], state, out, err) == 0
    assert os.path.samefile(os.getcwd(), target)
    assert state.env.get("PWD") == os.getcwd()
    assert state.env.get("OLDPWD") == before
    assert err.getvalue() == ""


def test_cd_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    state = ShellState(env=Environment.from_strings([f"HOME={home}"]))
    out, err = _streams()
    assert cd(["cd"], state, out, err) == 0
    assert os.path.samefile(os.getcwd(), home)


def test_cd_home_not_set(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out, err = _streams()
    assert cd(["cd"], ShellState(), out, err) == 1
    assert err.getvalue() == "minishell: cd: HOME not set\n"


def test_cd_dash_without_oldpwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out, err = _streams()
    assert cd(["cd", "-"], ShellState(), out, err) == 1
    assert err.getvalue() == "minishell: cd: OLDPWD not set\n"


def test_cd_dash_prints_target(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    other = tmp_path / "other"
    other.mkdir()
    state = ShellState(env=Environment.from_strings([f"OLDPWD={other}"]))
    out, err = _streams()
    assert cd(["cd", "-"], state, out, err) == 0
    assert out.getvalue() == f"{other}\n"
    assert os.path.samefile(os.getcwd(), other)


def test_cd_missing_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    missing = str(tmp_path / "nope")
    state = ShellState()
    out, err = _streams()
    assert cd(["cd", missing], state, out, err) == 1
    assert err.getvalue().startswith(f"minishell: cd: {missing}: ")
    assert "PWD" not in state.env


def test_pwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out, err = _streams()
    assert pwd(out, err) == 0
    assert out.getvalue() == os.getcwd() + "\n"


def test_export_sets_variables():
    state = ShellState()
    out, err = _streams()
    assert export(["export", "K=v", "EMPTY=", "BARE"], state, out, err) == 0
    assert state.env.get("K") == "v"
    assert state.env.get("EMPTY") == ""
    assert "BARE" in state.env and state.env.get("BARE") is None


def test_export_bare_keeps_existing_value():
    state = ShellState(env=Environment.from_strings(["K=v"]))
    out, err = _streams()
    export(["export", "K"], state, out, err)
    assert state.env.get("K") == "v"


def test_export_invalid_identifier():
    state = ShellState()
    out, err = _streams()
    assert export(["export", "1abc=x"], state, out, err) == 0
    assert err.getvalue() == "minishell: export: `1abc=x': not a valid identifier\n"
    assert len(state.env) == 0


def test_export_without_args_lists():
    state = ShellState(env=Environment.from_strings(["Y=1", "X"]))
    out, err = _streams()
    export(["export"], state, out, err)
    assert out.getvalue() == state.env.format_export()


def test_unset_removes_and_reports_invalid():
    state = ShellState(env=Environment.from_strings(["A=1", "B=2"]))
    err = io.StringIO()
    assert unset(["unset", "A", "A-B"], state, err) == 0
    assert list(state.env) == ["B"]
    assert err.getvalue() == "minishell: unset: `A-B': not a valid identifier\n"


def test_env_command():
    state = ShellState(env=Environment.from_strings(["Y=1", "X"]))
    out = io.StringIO()
    assert env_command(state, out) == 0
    assert out.getvalue() == "Y=1\n"


def test_exit_non_numeric():
    out, err = _streams()
    with pytest.raises(ShellExit) as info:
        exit_command(["exit", "abc"], ShellState(), out, err)
    assert info.value.status == 255
    assert out.getvalue() == "exit\n"
    assert err.getvalue() == "minishell: exit: abc: numeric argument required\n"


def test_exit_with_status():
    out, err = _streams()
    with pytest.raises(ShellExit) as info:
        exit_command(["exit", "42"], ShellState(), out, err)
    assert info.value.status == 42


def test_exit_without_args_uses_zero():
    state = ShellState(exit_status=5)
    out, err = _streams()
    with pytest.raises(ShellExit) as info:
        exit_command(["exit"], state, out, err)
    assert info.value.status == 0


def test_exit_too_many_arguments():
    state = ShellState()
    out, err = _streams()
    exit_command(["exit", "1", "2"], state, out, err)
    assert state.exit_status == 1
    assert err.getvalue() == "minishell: exit: too many arguments\n"


def test_run_builtin_statuses(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state = ShellState()
    out, err = _streams()
    assert run_builtin(["pwd"], state, out, err) == 0
    assert run_builtin(["export", "1x"], state, out, err) == 0
    assert run_builtin(["exit", "1", "2"], state, out, err) == 1
    assert run_builtin(["nonsense"], state, out, err) == 1


def test_run_builtin_echo_output():
    out, err = _streams()
    assert run_builtin(["echo", "hi"], ShellState(), out, err) == 0
    assert out.getvalue() == "hi\n"