"""Runner descriptors.

Maps a block language to the command that executes it, the file extension
its script is written with, and an optional wrap strategy for interpreters
that cannot simply be handed a script path.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from ..config.schema import RunnerSpec
from .process import split_command

DEFAULT_EXTENSION = ".txt"

LANGUAGE_EXTENSIONS = {
    "sh": ".sh",
    "bash": ".sh",
    "js": ".js",
    "ts": ".ts",
    "lua": ".lua",
    "python": ".py",
    "py": ".py",
}


def extension_for_lang(lang: str) -> str:
    """File extension for a language's script file (``.txt`` if unknown)."""
    return LANGUAGE_EXTENSIONS.get(lang, DEFAULT_EXTENSION)


class WrapStrategy:
    """Custom script and argv construction for a runner.

    The default behaviour is the generic one: the raw code is written as-is
    and the script path is appended to the split command.
    """

    def build_script(self, code: str) -> str:
        return code

    def build_command(self, command: str, script_path: str) -> list[str]:
        return [*split_command(command), script_path]


NVIM_LUA_PRELUDE = "\n".join([
    "local root = os.getenv('DOCTEST_ROOT')",
    "if root and vim then",
    "  vim.g.headless_mode = true",
    "  vim.opt.runtimepath:append(root)",
    "  vim.cmd('cd ' .. vim.fn.fnameescape(root))",
    "end",
    "",
    "local tmp = os.getenv('DOCTEST_TMP')",
    "if tmp and vim then",
    "  vim.fn.mkdir(tmp, 'p')",
    "  vim.env.XDG_DATA_HOME = tmp .. '/data'",
    "  vim.fn.mkdir(vim.env.XDG_DATA_HOME, 'p')",
    "end",
    "",
])

NVIM_LUA_POSTLUDE = "if vim and vim.cmd then vim.cmd('qa') end"


class NvimLuaWrap(WrapStrategy):
    """Run Lua inside headless Neovim with an isolated data directory."""

    def build_script(self, code: str) -> str:
        return "\n".join([NVIM_LUA_PRELUDE, code, NVIM_LUA_POSTLUDE])

    def build_command(self, command: str, script_path: str) -> list[str]:
        return ["nvim", "--headless", "-u", "NONE", "-l", script_path]


# (runner command, language) -> wrap strategy
WRAP_STRATEGIES: dict[tuple[str, str], WrapStrategy] = {
    ("nvim", "lua"): NvimLuaWrap(),
}


@dataclass(frozen=True)
class Runner:
    """A resolved runner for one language."""
    lang: str
    command: str
    extension: str = DEFAULT_EXTENSION
    wrap: Optional[WrapStrategy] = None

    @property
    def is_wrapped(self) -> bool:
        return self.wrap is not None

    def build_script(self, code: str) -> str:
        """Script file content for a block's code."""
        if self.wrap:
            return self.wrap.build_script(code)
        return code

    def build_command(self, script_path: str) -> list[str]:
        """argv that runs the script file."""
        if self.wrap:
            return self.wrap.build_command(self.command, script_path)
        return [*split_command(self.command), script_path]


def resolve_runner(lang: str, runners: Mapping[str, RunnerSpec]) -> Optional[Runner]:
    """Look up the runner configured for a language.

    Args:
        lang: Block language tag.
        runners: Configured language -> command string or {command, extension}.

    Returns:
        Runner, or None if the language has no (non-empty) command.
    """
    spec = runners.get(lang)
    if not spec:
        return None

    if isinstance(spec, str):
        command, extension = spec, extension_for_lang(lang)
    else:
        command = spec.get("command", "")
        extension = spec.get("extension") or extension_for_lang(lang)

    if not command.strip():
        return None

    return Runner(
        lang=lang,
        command=command,
        extension=extension,
        wrap=WRAP_STRATEGIES.get((command.strip(), lang)),
    )
