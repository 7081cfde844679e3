# Rona Shell Completion
# Completion scripts for bash, zsh, fish, powershell and elvish

from collections.abc import Mapping

import click
from click.shell_completion import get_completion_class

SHELLS = ("bash", "zsh", "fish", "powershell", "elvish")


def _complete_var(prog_name: str) -> str:
    return f"_{prog_name.replace('-', '_').upper()}_COMPLETE"


def _command_entries(group: click.Group, aliases: Mapping[str, str]) -> list[tuple[str, str]]:
    """List (word, description) for every subcommand and alias."""
    ctx = click.Context(group)
    entries: list[tuple[str, str]] = []

    for name in group.list_commands(ctx):
        command = group.get_command(ctx, name)
        if command is None or command.hidden:
            continue
        entries.append((name, command.get_short_help_str(limit=60)))

    for alias, target in aliases.items():
        entries.append((alias, f"alias for {target}"))

    return entries


def _quote_single(value: str) -> str:
    return value.replace("'", "''")


def powershell_source(group: click.Group, prog_name: str, aliases: Mapping[str, str]) -> str:
    """Static PowerShell completer for the subcommand position."""
    results = "\n".join(
        "        [System.Management.Automation.CompletionResult]::new("
        f"'{_quote_single(word)}', '{_quote_single(word)}', "
        "[System.Management.Automation.CompletionResultType]::ParameterValue, "
        f"'{_quote_single(help_text or word)}')"
        for word, help_text in _command_entries(group, aliases)
    )
    return f"""using namespace System.Management.Automation

Register-ArgumentCompleter -Native -CommandName '{prog_name}' -ScriptBlock {{
    param($wordToComplete, $commandAst, $cursorPosition)

    $elements = $commandAst.CommandElements
    if ($elements.Count -gt 2 -or ($elements.Count -eq 2 -and $wordToComplete -eq '')) {{
        return
    }}

    $completions = @(
{results}
    )

    $completions | Where-Object {{ $_.CompletionText -like "$wordToComplete*" }}
}}
"""


def elvish_source(group: click.Group, prog_name: str, aliases: Mapping[str, str]) -> str:
    """Static Elvish arg-completer for the subcommand position."""
    candidates = "\n".join(
        f"        edit:complex-candidate '{_quote_single(word)}' &display='{_quote_single(word)} ({_quote_single(help_text or word)})'"
        for word, help_text in _command_entries(group, aliases)
    )
    return f"""set edit:completion:arg-completer[{prog_name}] = {{|@words|
    if (== (count $words) 2) {{
{candidates}
    }}
}}
"""


def generate_completion(
    shell: str,
    group: click.Group,
    prog_name: str = "rona",
    aliases: Mapping[str, str] | None = None,
) -> str:
    """
    Build the completion script for a shell.

    bash, zsh and fish delegate to click's completion support, which calls
    back into the program at completion time. powershell and elvish get
    static scripts covering subcommands and their aliases.

    Args:
        shell: One of SHELLS.
        group: Root click group.
        prog_name: Executable name.
        aliases: Short-flag aliases of subcommands.

    Returns:
        Script source.

    Raises:
        ValueError: For an unsupported shell.
    """
    aliases = aliases or {}

    if shell == "powershell":
        return powershell_source(group, prog_name, aliases)
    if shell == "elvish":
        return elvish_source(group, prog_name, aliases)

    completion_class = get_completion_class(shell)
    if completion_class is None:
        raise ValueError(f"Unsupported shell: {shell}. Supported shells: {', '.join(SHELLS)}")

    completion = completion_class(group, {}, prog_name, _complete_var(prog_name))
    return completion.source()
