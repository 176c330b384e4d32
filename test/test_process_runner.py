"""
Tests for running external commands
"""
import asyncio
import shlex
import sys

import pytest

from tokenagent.services import StderrPolicy, SubprocessRunner


def python_command(code):
    return f"{shlex.quote(sys.executable)} -c {shlex.quote(code)}"


def run(runner, command, env=None):
    return asyncio.run(runner.run(command, env=env))


def test_captures_stdout_on_success():
    result = run(SubprocessRunner(), python_command("print('Token deployed to: 0x' + 'a' * 40)"))
    assert not result.failed
    assert result.returncode == 0
    assert 'Token deployed to: 0x' in result.stdout
    assert result.stderr == ''


def test_nonzero_exit_is_failure():
    result = run(SubprocessRunner(), python_command("import sys; sys.exit(3)"))
    assert result.failed
    assert result.returncode == 3
    assert result.error_detail == 'command exited with status 3'


def test_stderr_fails_under_strict_policy():
    code = "import sys; sys.stderr.write('warning: something\\n')"
    result = run(SubprocessRunner(policy=StderrPolicy.STRICT), python_command(code))
    assert result.failed
    assert result.returncode == 0
    assert result.error_detail == 'warning: something'


def test_stderr_tolerated_under_exit_code_policy():
    code = "import sys; sys.stderr.write('warning: something\\n')"
    result = run(SubprocessRunner(policy=StderrPolicy.EXIT_CODE), python_command(code))
    assert not result.failed


def test_env_is_passed_to_child():
    code = "import os; print(os.environ['TOKEN_SYMBOL'])"
    result = run(SubprocessRunner(), python_command(code), env={'TOKEN_SYMBOL': 'ACM'})
    assert result.stdout.strip() == 'ACM'


def test_missing_executable_is_failure():
    result = run(SubprocessRunner(), 'definitely-not-a-real-command-xyz --version')
    assert result.failed
    assert result.stderr


def test_timeout_kills_process():
    runner = SubprocessRunner(timeout=0.5)
    result = run(runner, python_command("import time; time.sleep(30)"))
    assert result.failed
    assert 'timed out' in result.stderr


def test_shell_operators_are_plain_arguments():
    command = python_command("import sys; print(sys.argv[1:])") + " && echo done"
    result = run(SubprocessRunner(), command)
    assert not result.failed
    assert result.stdout.strip() == "['&&', 'echo', 'done']"


def test_policy_parse():
    assert StderrPolicy.parse('STRICT') is StderrPolicy.STRICT
    assert StderrPolicy.parse('exit_code') is StderrPolicy.EXIT_CODE
    with pytest.raises(ValueError):
        StderrPolicy.parse('lenient')
