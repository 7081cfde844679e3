# Tests for rona.completion
# Completion script generation

import pytest

from rona.cli import ALIASES, cli
from rona.completion import SHELLS, generate_completion


class TestGenerateCompletion:
    """Tests for generate_completion."""

    @pytest.mark.parametrize("shell", ["zsh", "fish"])
    def test_click_shells(self, shell):
        source = generate_completion(shell, cli, "rona", ALIASES)
        assert "_RONA_COMPLETE" in source
        assert f"{shell}_complete" in source

    def test_powershell_lists_commands_and_aliases(self):
        source = generate_completion("powershell", cli, "rona", ALIASES)
        assert "Register-ArgumentCompleter -Native -CommandName 'rona'" in source
        assert "'add-with-exclude'" in source
        assert "'list-status'" in source
        assert "'-a'" in source
        assert "alias for add-with-exclude" in source

    def test_elvish_lists_commands_and_aliases(self):
        source = generate_completion("elvish", cli, "rona", ALIASES)
        assert source.startswith("set edit:completion:arg-completer[rona]")
        assert "edit:complex-candidate 'generate'" in source
        assert "edit:complex-candidate '-g'" in source

    def test_without_aliases(self):
        source = generate_completion("elvish", cli)
        assert "'-a'" not in source
        assert "'commit'" in source

    def test_unsupported_shell(self):
        with pytest.raises(ValueError, match="Unsupported shell"):
            generate_completion("tcsh", cli)

    def test_supported_shells(self):
        assert SHELLS == ("bash", "zsh", "fish", "powershell", "elvish")
