"""Click-based CLI for rona - Git workflow helper."""

from __future__ import annotations

import sys
from typing import Optional

import click
from rich.console import Console
from rich.prompt import Prompt

from rona import __version__
from rona.completion import SHELLS, generate_completion
from rona.config import DEFAULT_EDITOR, create_config_file, get_config_path, load_config, set_editor
from rona.editor import open_in_editor
from rona.errors import RonaError
from rona.git.files import COMMIT_MESSAGE_FILE, create_needed_files
from rona.git.message import (
    COMMIT_TYPES,
    filter_commit_args,
    generate_commit_message,
    read_commit_message,
)
from rona.git.operations import commit, is_gpg_signing_available, push, require_repo_root
from rona.git.staging import Stager
from rona.git.status import read_status, stageable_entries
from rona.logger import RonaLogger

console = Console()

# Short flags accepted in place of a subcommand name
ALIASES = {
    "-a": "add-with-exclude",
    "-c": "commit",
    "-g": "generate",
    "-i": "init",
    "-l": "list-status",
    "-p": "push",
    "-s": "set-editor",
}

GLOBAL_FLAGS = {"-v", "--verbose"}

PASS_THROUGH = {"ignore_unknown_options": True, "allow_interspersed_args": False}


class AliasedGroup(click.Group):
    """Group that resolves short flags such as ``-a`` to subcommands."""

    def __init__(self, *args, aliases: Optional[dict[str, str]] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.aliases = dict(aliases or {})

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        return super().parse_args(ctx, self.expand_alias(args))

    def expand_alias(self, args: list[str]) -> list[str]:
        """Replace the first non-global argument when it is an alias."""
        args = list(args)
        for i, arg in enumerate(args):
            if arg in GLOBAL_FLAGS:
                continue
            if arg in self.aliases:
                args[i] = self.aliases[arg]
            break
        return args


def _fail(logger: RonaLogger, error: RonaError) -> None:
    logger.report_error(error)
    sys.exit(1)


@click.group(cls=AliasedGroup, aliases=ALIASES)
@click.version_option(version=__version__, prog_name="rona")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """rona - Git workflow helper.

    Stage with exclusions, template commit messages, commit and push.

    \b
    Aliases:
      -a  add-with-exclude    -c  commit      -g  generate
      -i  init                -l  list-status -p  push
      -s  set-editor
    """
    ctx.obj = RonaLogger(console, verbose=verbose)


@cli.command("add-with-exclude")
@click.argument("patterns", nargs=-1)
@click.option("--dry-run", is_flag=True, help="Show what would be staged without staging")
@click.pass_obj
def add_with_exclude(logger: RonaLogger, patterns: tuple[str, ...], dry_run: bool) -> None:
    """Stage all changes except files matching PATTERNS.

    \b
    Patterns are globs matched against repository-relative paths:
      *.rs        any .rs file, at any depth
      target/     everything below target/
      docs/**/*.md  markdown files anywhere below docs/

    \b
    Examples:
      rona -a '*.lock' target/
      rona add-with-exclude --dry-run '*.tmp'
    """
    logger.debug("Adding files...")

    try:
        result = Stager().add_with_exclude(list(patterns), dry_run=dry_run)
    except RonaError as e:
        _fail(logger, e)
        return

    if dry_run or logger.verbose:
        logger.show_partition(result)
    logger.staging_summary(result)


@cli.command("commit", context_settings=PASS_THROUGH)
@click.option("--push", "-p", "push_after", is_flag=True, help="Push after committing")
@click.option("--unsigned", "-u", is_flag=True, help="Create an unsigned commit without warning")
@click.option("--dry-run", is_flag=True, help="Show the commit without creating it")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def commit_cmd(
    logger: RonaLogger,
    push_after: bool,
    unsigned: bool,
    dry_run: bool,
    args: tuple[str, ...],
) -> None:
    """Commit with the content of commit_message.md.

    Remaining ARGS are passed to git commit, and to git push with --push.

    \b
    Examples:
      rona -c
      rona -c --push
      rona commit --amend --no-edit
    """
    logger.debug("Committing files...")

    try:
        repo_root = require_repo_root()
        message = read_commit_message(repo_root)
        git_args = filter_commit_args(args)
        sign = not unsigned and is_gpg_signing_available(repo_root)

        if not unsigned and not sign:
            logger.warning("GPG signing not available or not configured. Creating unsigned commit.")
            logger.info("To suppress this warning, use the --unsigned (-u) flag.")

        if dry_run:
            logger.info("Would commit with message:")
            logger.plain("---")
            logger.plain(message.strip())
            logger.plain("---")
            if sign:
                logger.info("Would sign commit with -S flag")
            if git_args:
                logger.info(f"With additional args: {' '.join(git_args)}")
            if push_after:
                logger.info("Would push to remote repository")
            return

        output = commit(message, git_args, repo_root, sign=sign)
        if output:
            logger.plain(output)
        logger.success("Commit successful!")

        if push_after:
            logger.debug("Pushing...")
            output = push(git_args, repo_root)
            if output:
                logger.plain(output)
            logger.success("Push successful!")
    except RonaError as e:
        _fail(logger, e)


@cli.command("push", context_settings=PASS_THROUGH)
@click.option("--dry-run", is_flag=True, help="Show the push without running it")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def push_cmd(logger: RonaLogger, dry_run: bool, args: tuple[str, ...]) -> None:
    """Push to the remote repository.

    ARGS are passed to git push.

    \b
    Examples:
      rona -p
      rona -p --force-with-lease
      rona push -u origin main
    """
    if dry_run:
        logger.info("Would push to remote repository")
        if args:
            logger.info(f"With args: {' '.join(args)}")
        return

    logger.debug("Pushing...")

    try:
        output = push(list(args))
    except RonaError as e:
        _fail(logger, e)
        return

    if output:
        logger.plain(output)
    logger.success("Push successful!")


@cli.command()
@click.option(
    "--interactive",
    "-i",
    is_flag=True,
    help="Type the commit message in the terminal instead of opening the editor",
)
@click.option("--no-commit-number", "-n", is_flag=True, help="Leave the [n] commit counter out of the header")
@click.option(
    "--type",
    "-t",
    "commit_type",
    type=click.Choice(COMMIT_TYPES),
    help="Commit type (prompted when omitted)",
)
@click.pass_obj
def generate(
    logger: RonaLogger,
    interactive: bool,
    no_commit_number: bool,
    commit_type: Optional[str],
) -> None:
    """Generate commit_message.md from the staged changes.

    Creates commit_message.md and .commitignore if needed, asks for the
    commit type and opens the message in the configured editor.
    Files matching .commitignore or .gitignore entries are left out.
    """
    try:
        repo_root = require_repo_root()
        config = None if interactive else load_config()

        for created in create_needed_files(repo_root):
            logger.debug(f"Created {created}")

        if commit_type is None:
            commit_type = Prompt.ask(
                "Commit type", choices=list(COMMIT_TYPES), default=COMMIT_TYPES[0], console=console
            )

        summary = None
        if interactive:
            summary = Prompt.ask("Commit message", console=console).strip()
            if not summary:
                raise RonaError("Commit message must not be empty")

        generated = generate_commit_message(
            repo_root,
            commit_type,
            no_commit_number=no_commit_number,
            summary=summary,
        )
    except RonaError as e:
        _fail(logger, e)
        return

    for line in generated.invalid_ignore_lines:
        logger.warning(f"Skipping invalid ignore pattern: {line}")

    if interactive:
        logger.success(f"{COMMIT_MESSAGE_FILE} created: {generated.header} {summary}")
        return

    logger.debug(f"{COMMIT_MESSAGE_FILE} created")

    try:
        open_in_editor(config, generated.path)
    except RonaError as e:
        _fail(logger, e)


@cli.command("init")
@click.argument("editor", default=DEFAULT_EDITOR)
@click.pass_obj
def init(logger: RonaLogger, editor: str) -> None:
    """Create the configuration file with EDITOR (default: nano)."""
    try:
        path = create_config_file(editor)
    except RonaError as e:
        _fail(logger, e)
        return

    logger.success(f"Configuration file created: {path}")


@cli.command("set-editor")
@click.argument("editor")
@click.pass_obj
def set_editor_cmd(logger: RonaLogger, editor: str) -> None:
    """Change the editor used by generate.

    \b
    Examples:
      rona set-editor vim
      rona -s "code --wait"
    """
    try:
        config = set_editor(editor)
    except RonaError as e:
        _fail(logger, e)
        return

    logger.success(f"Editor set to '{config.editor}'")
    logger.debug(f"Config: {get_config_path()}")


@cli.command("list-status")
@click.pass_obj
def list_status(logger: RonaLogger) -> None:
    """List the files reported by git status."""
    try:
        entries = stageable_entries(read_status(require_repo_root()))
    except RonaError as e:
        _fail(logger, e)
        return

    for entry in entries:
        logger.plain(entry.path)


@cli.command()
@click.argument("shell", type=click.Choice(SHELLS))
@click.pass_context
def completion(ctx: click.Context, shell: str) -> None:
    """Print the completion script for SHELL.

    \b
    Examples:
      rona completion bash > ~/.local/share/bash-completion/completions/rona
      rona completion fish > ~/.config/fish/completions/rona.fish
    """
    root = ctx.find_root().command
    click.echo(generate_completion(shell, root, "rona", ALIASES), nl=False)
