"""Built-in correction rules."""

from __future__ import annotations

import os
import re

from theshit.command import Command, to_lower
from theshit.fuzzy import FuzzySuggester
from theshit.rules.base import Rule, join_tokens, replace_token, strip_prefix

COMMAND_NOT_FOUND = "command not found"
NO_SUCH_FILE = "No such file or directory"

# Typo tables keyed on the misspelled token
COMMAND_TYPOS = {
    "puthon": "python",
    "pytohn": "python",
    "pyton": "python",
    "gti": "git",
    "vom": "vim",
    "claer": "clear",
    "cd..": "cd ..",
    "sl": "ls",
    "grpe": "grep",
}

DOCKER_TYPOS = {
    "tags": "images",
    "tag": "image",
}

NPM_TYPOS = {
    "urgrade": "upgrade",
    "isntall": "install",
    "instal": "install",
    "intsall": "install",
}

PIP_TYPOS = {
    "instatl": "install",
    "instal": "install",
    "isntall": "install",
    "unisntall": "uninstall",
}

# Glued tool+subcommand prefixes and their split form
MISSING_SPACE_PREFIXES = {
    "npminstall": "npm install",
    "gitcommit": "git commit",
    "aptinstall": "apt install",
}

SINGLE_DASH_GIT_FLAGS = (" -amend", " -continue", " -abort")

_UPSTREAM_RE = re.compile(r"git push --set-upstream origin ([\w./-]+)")
_SIMILAR_GIT_RE = re.compile(r"The most similar command is\s+([a-z]+)")


# -- privileges ---------------------------------------------------------------

def _sudo_match(cmd: Command) -> bool:
    lower = to_lower(cmd.output)
    return (
        "permission denied" in lower
        or "Permission denied" in cmd.output
        or "EACCES" in cmd.output
        or "unless you are root" in cmd.output
    )


def _sudo_fix(cmd: Command) -> list[str]:
    return [f"sudo {cmd.script}"]


def _unsudo_match(cmd: Command) -> bool:
    return cmd.script.startswith("sudo ") and (
        "must not be run as root" in cmd.output
        or "don't run this as root" in cmd.output
    )


def _unsudo_fix(cmd: Command) -> list[str]:
    return [cmd.script[5:]]


def _chmod_x_match(cmd: Command) -> bool:
    return (
        "Permission denied" in cmd.output
        and len(cmd.tokens) >= 1
        and cmd.tokens[0].startswith("./")
    )


def _chmod_x_fix(cmd: Command) -> list[str]:
    return [f"chmod +x {cmd.tokens[0]} && {cmd.script}"]


# -- unknown commands ---------------------------------------------------------

def _fuzzy_command_rule(suggester: FuzzySuggester) -> Rule:
    def match(cmd: Command) -> bool:
        if COMMAND_NOT_FOUND not in cmd.output or not cmd.tokens:
            return False
        return suggester.has_match(cmd.tokens[0])

    return Rule(name="fuzzy_command", match=match, get_new_command=suggester.suggest)


def _no_command_match(cmd: Command) -> bool:
    return COMMAND_NOT_FOUND in cmd.output or "No command" in cmd.output


def _no_command_fix(cmd: Command) -> list[str]:
    return replace_token(cmd, 0, COMMAND_TYPOS)


def _has_exists_script_match(cmd: Command) -> bool:
    return (
        COMMAND_NOT_FOUND in cmd.output
        and bool(cmd.tokens)
        and os.path.exists(cmd.tokens[0])
    )


def _has_exists_script_fix(cmd: Command) -> list[str]:
    return [f"./{cmd.script}"]


def _wrong_hyphen_match(cmd: Command) -> bool:
    return COMMAND_NOT_FOUND in cmd.output and bool(cmd.tokens) and "-" in cmd.tokens[0]


def _wrong_hyphen_fix(cmd: Command) -> list[str]:
    return [cmd.script.replace("-", " ", 1)]


def _missing_space_match(cmd: Command) -> bool:
    return COMMAND_NOT_FOUND in cmd.output and cmd.script.startswith(("npm", "git", "apt"))


def _missing_space_fix(cmd: Command) -> list[str]:
    for glued, split in MISSING_SPACE_PREFIXES.items():
        if cmd.script.startswith(glued):
            return [split + cmd.script[len(glued):]]
    return [cmd.script]


def _sl_ls_match(cmd: Command) -> bool:
    return cmd.script == "sl" or cmd.script.startswith("sl ")


def _sl_ls_fix(cmd: Command) -> list[str]:
    return ["ls" + cmd.script[2:]]


def _dry_match(cmd: Command) -> bool:
    if len(cmd.tokens) < 2:
        return False
    return cmd.tokens[0] == cmd.tokens[1]


def _dry_fix(cmd: Command) -> list[str]:
    return [join_tokens(cmd.tokens[:1] + cmd.tokens[2:])]


def _remove_prompt_match(cmd: Command) -> bool:
    return cmd.script.startswith("$ ")


def _remove_prompt_fix(cmd: Command) -> list[str]:
    return [cmd.script[2:]]


# -- filesystem ---------------------------------------------------------------

def _cd_mkdir_match(cmd: Command) -> bool:
    return (
        cmd.script.startswith("cd ")
        and len(cmd.tokens) >= 2
        and (NO_SUCH_FILE in cmd.output or "cannot access" in cmd.output)
    )


def _cd_mkdir_fix(cmd: Command) -> list[str]:
    directory = cmd.tokens[1]
    return [f"mkdir -p {directory} && cd {directory}"]


def _cd_parent_match(cmd: Command) -> bool:
    return cmd.script == "cd.."


def _cd_parent_fix(cmd: Command) -> list[str]:
    return ["cd .."]


def _cd_cs_match(cmd: Command) -> bool:
    return cmd.script.startswith("cs ")


def _cd_cs_fix(cmd: Command) -> list[str]:
    return ["cd " + strip_prefix(cmd.script, "cs ")]


def _cat_dir_match(cmd: Command) -> bool:
    return cmd.script.startswith("cat ") and (
        "Is a directory" in cmd.output or "is a directory" in cmd.output
    )


def _cat_dir_fix(cmd: Command) -> list[str]:
    return ["ls " + strip_prefix(cmd.script, "cat ")]


def _cp_omitting_directory_match(cmd: Command) -> bool:
    return cmd.script.startswith("cp ") and "omitting directory" in cmd.output


def _cp_omitting_directory_fix(cmd: Command) -> list[str]:
    return ["cp -r " + strip_prefix(cmd.script, "cp ")]


def _grep_recursive_match(cmd: Command) -> bool:
    return cmd.script.startswith("grep ") and "Is a directory" in cmd.output


def _grep_recursive_fix(cmd: Command) -> list[str]:
    return ["grep -r " + strip_prefix(cmd.script, "grep ")]


def _ls_all_match(cmd: Command) -> bool:
    return cmd.script == "ls" and not cmd.output


def _ls_all_fix(cmd: Command) -> list[str]:
    return ["ls -A"]


def _ls_lah_match(cmd: Command) -> bool:
    return cmd.script == "ls" and bool(cmd.output)


def _ls_lah_fix(cmd: Command) -> list[str]:
    return ["ls -lah"]


def _mkdir_p_match(cmd: Command) -> bool:
    return cmd.script.startswith("mkdir ") and NO_SUCH_FILE in cmd.output


def _mkdir_p_fix(cmd: Command) -> list[str]:
    return ["mkdir -p " + strip_prefix(cmd.script, "mkdir ")]


def _rm_dir_match(cmd: Command) -> bool:
    return cmd.script.startswith("rm ") and (
        "is a directory" in cmd.output or "Is a directory" in cmd.output
    )


def _rm_dir_fix(cmd: Command) -> list[str]:
    return ["rm -rf " + strip_prefix(cmd.script, "rm ")]


def _touch_match(cmd: Command) -> bool:
    return cmd.script.startswith("touch ") and NO_SUCH_FILE in cmd.output


def _touch_fix(cmd: Command) -> list[str]:
    path = strip_prefix(cmd.script, "touch ")
    directory, sep, _ = path.rpartition("/")
    if not sep:
        return [cmd.script]
    return [f"mkdir -p {directory} && touch {path}"]


def _ln_s_order_match(cmd: Command) -> bool:
    return (
        cmd.script.startswith("ln -s")
        and NO_SUCH_FILE in cmd.output
        and len(cmd.tokens) >= 4
    )


def _ln_s_order_fix(cmd: Command) -> list[str]:
    return [f"ln -s {cmd.tokens[3]} {cmd.tokens[2]}"]


# -- languages and toolchains -------------------------------------------------

def _python_command_match(cmd: Command) -> bool:
    return (
        "Permission denied" in cmd.output
        and bool(cmd.tokens)
        and cmd.tokens[0].endswith(".py")
    )


def _python_command_fix(cmd: Command) -> list[str]:
    return [f"python {cmd.script}"]


def _python_execute_match(cmd: Command) -> bool:
    return (
        cmd.script.startswith("python ")
        and "No such file" in cmd.output
        and not cmd.script.endswith(".py")
    )


def _python_execute_fix(cmd: Command) -> list[str]:
    return [cmd.script + ".py"]


def _java_match(cmd: Command) -> bool:
    return cmd.script.startswith("java ") and cmd.tokens[-1].endswith(".java")


def _java_fix(cmd: Command) -> list[str]:
    return [cmd.script[: -len(".java")]]


def _javac_match(cmd: Command) -> bool:
    return (
        cmd.script.startswith("javac ")
        and "No such file" in cmd.output
        and not cmd.script.endswith(".java")
    )


def _javac_fix(cmd: Command) -> list[str]:
    return [cmd.script + ".java"]


def _go_run_match(cmd: Command) -> bool:
    return cmd.script.startswith("go run ") and not cmd.script.endswith(".go")


def _go_run_fix(cmd: Command) -> list[str]:
    return [cmd.script + ".go"]


def _cargo_match(cmd: Command) -> bool:
    return cmd.script == "cargo"


def _cargo_fix(cmd: Command) -> list[str]:
    return ["cargo build"]


def _cpp11_match(cmd: Command) -> bool:
    return (
        cmd.script.startswith(("g++ ", "clang++ "))
        and "-std=" not in cmd.script
        and ("C++11" in cmd.output or "c++11" in cmd.output)
    )


def _cpp11_fix(cmd: Command) -> list[str]:
    return [cmd.script + " -std=c++11"]


def _docker_not_command_match(cmd: Command) -> bool:
    return cmd.script.startswith("docker ") and "is not a docker command" in cmd.output


def _docker_not_command_fix(cmd: Command) -> list[str]:
    return replace_token(cmd, 1, DOCKER_TYPOS)


def _npm_wrong_command_match(cmd: Command) -> bool:
    return cmd.script.startswith("npm ") and "Unknown command" in cmd.output


def _npm_wrong_command_fix(cmd: Command) -> list[str]:
    return replace_token(cmd, 1, NPM_TYPOS)


def _pip_unknown_command_match(cmd: Command) -> bool:
    return cmd.script.startswith("pip ") and "unknown command" in cmd.output


def _pip_unknown_command_fix(cmd: Command) -> list[str]:
    return replace_token(cmd, 1, PIP_TYPOS)


# -- git ----------------------------------------------------------------------

def _git_push_match(cmd: Command) -> bool:
    return cmd.script.startswith("git push") and "has no upstream branch" in cmd.output


def _git_push_fix(cmd: Command) -> list[str]:
    found = _UPSTREAM_RE.search(cmd.output)
    branch = found.group(1) if found else "master"
    return [f"git push --set-upstream origin {branch}"]


def _git_not_command_match(cmd: Command) -> bool:
    return cmd.script.startswith("git") and "is not a git command" in cmd.output


def _git_not_command_fix(cmd: Command) -> list[str]:
    found = _SIMILAR_GIT_RE.search(cmd.output)
    if not found:
        return [cmd.script]
    return [join_tokens(["git", found.group(1), *cmd.tokens[2:]])]


def _git_add_match(cmd: Command) -> bool:
    return cmd.script.startswith("git add") and "did not match any file" in cmd.output


def _git_add_fix(cmd: Command) -> list[str]:
    return ["git add -A"]


def _git_add_force_match(cmd: Command) -> bool:
    return cmd.script.startswith("git add") and (
        ".gitignore" in cmd.output or "ignored" in cmd.output
    )


def _git_add_force_fix(cmd: Command) -> list[str]:
    return [cmd.script + " --force"]


def _git_branch_delete_match(cmd: Command) -> bool:
    return "git branch -d" in cmd.script and "not fully merged" in cmd.output


def _git_branch_delete_fix(cmd: Command) -> list[str]:
    return [cmd.script.replace("-d", "-D", 1)]


def _git_commit_add_match(cmd: Command) -> bool:
    return cmd.script.startswith("git commit") and "no changes added to commit" in cmd.output


def _git_commit_add_fix(cmd: Command) -> list[str]:
    rest = strip_prefix(cmd.script, "git commit")
    return [f"git commit -a{rest}", f"git commit -p{rest}"]


def _git_commit_amend_match(cmd: Command) -> bool:
    return cmd.script.startswith("git commit") and "--amend" not in cmd.script


def _git_commit_amend_fix(cmd: Command) -> list[str]:
    return [cmd.script + " --amend"]


def _git_pull_match(cmd: Command) -> bool:
    return cmd.script.startswith("git pull") and "no tracking information" in cmd.output


def _git_pull_fix(cmd: Command) -> list[str]:
    return ["git branch --set-upstream-to=origin/master master && git pull"]


def _git_two_dashes_match(cmd: Command) -> bool:
    return cmd.script.startswith("git ") and any(
        flag in cmd.script for flag in SINGLE_DASH_GIT_FLAGS
    )


def _git_two_dashes_fix(cmd: Command) -> list[str]:
    for flag in SINGLE_DASH_GIT_FLAGS:
        if flag in cmd.script:
            return [cmd.script.replace(flag, " -" + flag[1:], 1)]
    return [cmd.script]


def _git_clone_twice_match(cmd: Command) -> bool:
    return cmd.script.startswith("git clone git clone")


def _git_clone_twice_fix(cmd: Command) -> list[str]:
    return [strip_prefix(cmd.script, "git clone ")]


def _git_main_master_match(cmd: Command) -> bool:
    return ("master" in cmd.script and "did you mean 'main'" in cmd.output) or (
        "main" in cmd.script and "did you mean 'master'" in cmd.output
    )


def _git_main_master_fix(cmd: Command) -> list[str]:
    if "master" in cmd.script:
        return [cmd.script.replace("master", "main", 1)]
    return [cmd.script.replace("main", "master", 1)]


def _git_not_repository_match(cmd: Command) -> bool:
    return cmd.script.startswith("git") and "fatal: not a git repository" in cmd.output


def _git_not_repository_fix(cmd: Command) -> list[str]:
    return ["git init"]


def build_builtin_rules(suggester: FuzzySuggester) -> list[Rule]:
    """Build the built-in rules in registration order.

    Every built-in rule uses the default priority, so this order is also the
    order in which they are tried.
    """
    return [
        Rule("sudo", _sudo_match, _sudo_fix),
        _fuzzy_command_rule(suggester),
        Rule("git_push", _git_push_match, _git_push_fix),
        Rule("no_command", _no_command_match, _no_command_fix),
        Rule("git_not_command", _git_not_command_match, _git_not_command_fix),
        Rule("cd_mkdir", _cd_mkdir_match, _cd_mkdir_fix),
        Rule("cd_parent", _cd_parent_match, _cd_parent_fix),
        Rule("cd_cs", _cd_cs_match, _cd_cs_fix),
        Rule("cat_dir", _cat_dir_match, _cat_dir_fix),
        Rule("chmod_x", _chmod_x_match, _chmod_x_fix),
        Rule("cp_omitting_directory", _cp_omitting_directory_match, _cp_omitting_directory_fix),
        Rule("dry", _dry_match, _dry_fix),
        Rule("git_add", _git_add_match, _git_add_fix),
        Rule("git_add_force", _git_add_force_match, _git_add_force_fix),
        Rule("git_branch_delete", _git_branch_delete_match, _git_branch_delete_fix),
        Rule("git_commit_add", _git_commit_add_match, _git_commit_add_fix),
        Rule("git_commit_amend", _git_commit_amend_match, _git_commit_amend_fix),
        Rule("git_pull", _git_pull_match, _git_pull_fix),
        Rule("git_two_dashes", _git_two_dashes_match, _git_two_dashes_fix),
        Rule("grep_recursive", _grep_recursive_match, _grep_recursive_fix),
        Rule("has_exists_script", _has_exists_script_match, _has_exists_script_fix),
        Rule("ls_all", _ls_all_match, _ls_all_fix),
        Rule("ls_lah", _ls_lah_match, _ls_lah_fix),
        Rule("mkdir_p", _mkdir_p_match, _mkdir_p_fix),
        Rule("rm_dir", _rm_dir_match, _rm_dir_fix),
        Rule("sl_ls", _sl_ls_match, _sl_ls_fix),
        Rule("python_command", _python_command_match, _python_command_fix),
        Rule("python_execute", _python_execute_match, _python_execute_fix),
        Rule("java", _java_match, _java_fix),
        Rule("javac", _javac_match, _javac_fix),
        Rule("go_run", _go_run_match, _go_run_fix),
        Rule("cargo", _cargo_match, _cargo_fix),
        Rule("docker_not_command", _docker_not_command_match, _docker_not_command_fix),
        Rule("npm_wrong_command", _npm_wrong_command_match, _npm_wrong_command_fix),
        Rule("pip_unknown_command", _pip_unknown_command_match, _pip_unknown_command_fix),
        Rule("git_clone_git_clone", _git_clone_twice_match, _git_clone_twice_fix),
        Rule("wrong_hyphen_before_subcommand", _wrong_hyphen_match, _wrong_hyphen_fix),
        Rule("missing_space_before_subcommand", _missing_space_match, _missing_space_fix),
        Rule("remove_shell_prompt_literal", _remove_prompt_match, _remove_prompt_fix),
        Rule("touch", _touch_match, _touch_fix),
        Rule("unsudo", _unsudo_match, _unsudo_fix),
        Rule("ln_s_order", _ln_s_order_match, _ln_s_order_fix),
        Rule("cpp11", _cpp11_match, _cpp11_fix),
        Rule("git_main_master", _git_main_master_match, _git_main_master_fix),
        Rule("git_not_repository", _git_not_repository_match, _git_not_repository_fix),
    ]
