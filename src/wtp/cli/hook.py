"""
wtp CLI - Hook command.

Prints a shell function named ``wtp`` that wraps the real executable:

- ``wtp cd <name>`` changes the shell's directory to the worktree
- ``wtp add ...`` changes into the new worktree after a successful add

Its cd and add calls set WTP_SHELL_INTEGRATION=1. The command hook
runner strips that marker again, so commands started by hooks never see it.
"""

import sys
from enum import Enum

import typer

from wtp.core.hooks.command_hook import SHELL_INTEGRATION_ENV


class Shell(str, Enum):
    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"


# bash and zsh share one function body; both support `local`
POSIX_HOOK = """\
# wtp shell integration ({shell})
wtp() {{
    if [ "$1" = "cd" ]; then
        if [ -z "$2" ]; then
            command wtp cd
            return
        fi
        local target_dir
        target_dir=$({marker}=1 command wtp cd "$2" 2>/dev/null)
        if [ $? -eq 0 ] && [ -n "$target_dir" ]; then
            cd "$target_dir"
        else
            {marker}=1 command wtp cd "$2"
        fi
    elif [ "$1" = "add" ]; then
        {marker}=1 command wtp "$@"
        local exit_code=$?
        [ $exit_code -eq 0 ] || return $exit_code
        shift
        local name="" prev="" arg
        for arg in "$@"; do
            case "$prev" in
                -b|--branch) name="$arg" ;;
                --exec) ;;
                *)
                    case "$arg" in
                        -*) ;;
                        *) [ -n "$name" ] || name="$arg" ;;
                    esac
                    ;;
            esac
            prev="$arg"
        done
        if [ -n "$name" ]; then
            local target_dir
            target_dir=$({marker}=1 command wtp cd "$name" 2>/dev/null)
            if [ $? -eq 0 ] && [ -d "$target_dir" ]; then
                cd "$target_dir"
            fi
        fi
        return 0
    else
        command wtp "$@"
    fi
}}
"""

FISH_HOOK = """\
# wtp shell integration (fish)
function wtp
    if test "$argv[1]" = cd
        if test -z "$argv[2]"
            command wtp cd
            return
        end
        set -l target_dir (env {marker}=1 wtp cd $argv[2] 2>/dev/null)
        if test $status -eq 0 -a -n "$target_dir"
            cd $target_dir
        else
            env {marker}=1 wtp cd $argv[2]
        end
    else if test "$argv[1]" = add
        env {marker}=1 wtp $argv
        set -l exit_code $status
        test $exit_code -eq 0; or return $exit_code
        set -l name ""
        set -l prev ""
        for arg in $argv[2..-1]
            switch "$prev"
                case -b --branch
                    set name $arg
                case --exec
                case '*'
                    if not string match -q -- '-*' $arg; and test -z "$name"
                        set name $arg
                    end
            end
            set prev $arg
        end
        if test -n "$name"
            set -l target_dir (env {marker}=1 wtp cd $name 2>/dev/null)
            if test $status -eq 0 -a -d "$target_dir"
                cd $target_dir
            end
        end
    else
        command wtp $argv
    end
end
"""


def render_hook(shell: Shell) -> str:
    """Return the integration script for a shell."""
    if shell == Shell.FISH:
        return FISH_HOOK.format(marker=SHELL_INTEGRATION_ENV)
    return POSIX_HOOK.format(shell=shell.value, marker=SHELL_INTEGRATION_ENV)


def hook(
    shell: Shell = typer.Argument(..., help="Shell to generate the function for"),
) -> None:
    """
    Print shell integration for 'wtp cd' and 'wtp add'.

    Add one of these to your shell config:
        Bash (~/.bashrc):  eval "$(wtp hook bash)"
        Zsh (~/.zshrc):    eval "$(wtp hook zsh)"
        Fish:              wtp hook fish | source
    """
    sys.stdout.write(render_hook(shell))
