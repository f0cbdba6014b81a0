"""
Tests for the shell integration printed by 'wtp hook'.

The generated functions are exercised in real shells against a stand-in
'wtp' executable that records its arguments.
"""

import os
import shutil
import subprocess
import textwrap

import pytest
from typer.testing import CliRunner

from wtp.cli import app
from wtp.cli.hook import Shell, render_hook

runner = CliRunner()

STAND_IN = textwrap.dedent(
    """\
    #!/bin/sh
    echo "$WTP_SHELL_INTEGRATION $*" >> "$WTP_CALL_LOG"
    if [ "$1" = cd ]; then
        [ "$WTP_SHELL_INTEGRATION" = 1 ] || exit 3
        echo "$WTP_TARGET"
    fi
    """
)


@pytest.fixture
def stand_in_env(tmp_path):
    """Environment with a fake 'wtp' first on PATH."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    executable = bin_dir / "wtp"
    executable.write_text(STAND_IN)
    executable.chmod(0o755)

    target = tmp_path / "worktrees" / "feat"
    target.mkdir(parents=True)

    env = dict(os.environ)
    env["PATH"] = f"{bin_dir}{os.pathsep}{env.get('PATH', '')}"
    env["WTP_CALL_LOG"] = str(tmp_path / "calls.log")
    env["WTP_TARGET"] = str(target)
    env.pop("WTP_SHELL_INTEGRATION", None)
    return env


def run_in_shell(shell: str, script: str, env: dict[str, str]) -> subprocess.CompletedProcess:
    return subprocess.run(
        [shell, "-c", script], env=env, capture_output=True, text=True, timeout=30
    )


class TestHookOutput:
    """Test the generated scripts."""

    @pytest.mark.parametrize("shell", ["bash", "zsh"])
    def test_posix_function(self, shell):
        result = runner.invoke(app, ["hook", shell])

        assert result.exit_code == 0
        assert f"# wtp shell integration ({shell})" in result.output
        assert "wtp() {" in result.output
        assert 'WTP_SHELL_INTEGRATION=1 command wtp cd "$2"' in result.output

    def test_fish_function(self):
        result = runner.invoke(app, ["hook", "fish"])

        assert result.exit_code == 0
        assert "function wtp" in result.output
        assert "env WTP_SHELL_INTEGRATION=1 wtp cd $argv[2]" in result.output

    def test_unknown_shell(self):
        result = runner.invoke(app, ["hook", "tcsh"])

        assert result.exit_code == 2


@pytest.mark.skipif(shutil.which("bash") is None, reason="bash not installed")
class TestBashIntegration:
    """Run the bash function against the stand-in executable."""

    def test_cd_changes_directory(self, stand_in_env):
        script = f'{render_hook(Shell.BASH)}\nwtp cd feat && pwd -P'

        result = run_in_shell("bash", script, stand_in_env)

        assert result.returncode == 0, result.stderr
        assert result.stdout.strip() == os.path.realpath(stand_in_env["WTP_TARGET"])

    def test_add_changes_into_new_worktree(self, stand_in_env):
        script = f'{render_hook(Shell.BASH)}\nwtp add -b feat --exec "npm test" && pwd -P'

        result = run_in_shell("bash", script, stand_in_env)

        assert result.returncode == 0, result.stderr
        assert result.stdout.strip() == os.path.realpath(stand_in_env["WTP_TARGET"])
        with open(stand_in_env["WTP_CALL_LOG"]) as f:
            calls = f.read().splitlines()
        assert calls == ["1 add -b feat --exec npm test", "1 cd feat"]

    def test_other_commands_pass_through(self, stand_in_env):
        script = f"{render_hook(Shell.BASH)}\nwtp list -v"

        result = run_in_shell("bash", script, stand_in_env)

        assert result.returncode == 0, result.stderr
        with open(stand_in_env["WTP_CALL_LOG"]) as f:
            assert f.read() == " list -v\n"


@pytest.mark.skipif(shutil.which("zsh") is None, reason="zsh not installed")
def test_zsh_cd_changes_directory(stand_in_env):
    script = f"{render_hook(Shell.ZSH)}\nwtp cd feat && pwd -P"

    result = run_in_shell("zsh", script, stand_in_env)

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == os.path.realpath(stand_in_env["WTP_TARGET"])


@pytest.mark.skipif(shutil.which("fish") is None, reason="fish not installed")
def test_fish_cd_changes_directory(stand_in_env):
    script = f"{render_hook(Shell.FISH)}\nwtp cd feat; and pwd -P"

    result = run_in_shell("fish", script, stand_in_env)

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == os.path.realpath(stand_in_env["WTP_TARGET"])
