from __future__ import annotations

"""Command-line entrypoint (standalone environment).

Run locally:
    python main.py --modules cargo --modules weblog --exit-after-time 2h10min
    python main.py --list-modules
"""

import logging
import sys
import time
from collections.abc import Sequence

from core.config import AppConfig, Settings
from core.exit_policy import RuntimeState
from core.resolver import CliResolver
from core.runtime import ModuleRunner, configure_logging, run_modules
from modules import ALL_MODULES, ModuleRegistry

_FLAGS = (
    "-h --help -V --version -l --list-modules -m --modules -s --speed-factor "
    "-i --instant-print-lines --exit-after-time --exit-after-modules "
    "--print-completions --print-manpage"
)


def completion_script(shell: str, registry: ModuleRegistry, prog: str = "genact") -> str:
    """Return a word-list completion script for bash, zsh or fish."""
    modules = " ".join(registry.names())
    if shell == "fish":
        lines = [
            f"complete -c {prog} -s m -l modules -x -a '{modules}' -d 'Run only these modules'",
            f"complete -c {prog} -s s -l speed-factor -x -d 'Global speed factor'",
            f"complete -c {prog} -s i -l instant-print-lines -x -d 'Instantly print this many lines'",
            f"complete -c {prog} -l exit-after-time -x -d 'Exit after running for this long'",
            f"complete -c {prog} -l exit-after-modules -x -d 'Exit after running this many modules'",
            f"complete -c {prog} -l print-completions -x -a 'bash fish zsh' -d 'Generate completion file for a shell'",
            f"complete -c {prog} -l print-manpage -d 'Generate man page'",
            f"complete -c {prog} -s l -l list-modules -d 'List available modules'",
            f"complete -c {prog} -s V -l version -d 'Print version'",
        ]
        return "\n".join(lines) + "\n"

    function = f"_{prog.replace('-', '_')}"
    script = f"""{function}() {{
    local cur="${{COMP_WORDS[COMP_CWORD]}}"
    local prev="${{COMP_WORDS[COMP_CWORD-1]}}"
    case "$prev" in
        -m|--modules)
            COMPREPLY=($(compgen -W "{modules}" -- "$cur"))
            return 0
            ;;
        --print-completions)
            COMPREPLY=($(compgen -W "bash fish zsh" -- "$cur"))
            return 0
            ;;
    esac
    COMPREPLY=($(compgen -W "{_FLAGS}" -- "$cur"))
}}
complete -F {function} {prog}
"""
    if shell == "zsh":
        return "autoload -U +X bashcompinit && bashcompinit\n" + script
    return script


def signature_runner(config: AppConfig, registry: ModuleRegistry) -> ModuleRunner:
    """Build a runner that announces each module by its command line.

    Module bodies are provided by the host program; this one only prints
    the signature and waits one speed-adjusted second.
    """

    def _run(name: str) -> None:
        module = registry.get(name)
        signature = module.signature if module is not None else name
        print(f"$ {signature}", flush=True)
        time.sleep(1.0 / config.speed_factor)

    return _run


def main(argv: Sequence[str] | None = None, registry: ModuleRegistry = ALL_MODULES) -> int:
    state = RuntimeState()
    resolver = CliResolver(registry)
    # Exits with status 2 on invalid arguments.
    config = resolver.resolve(argv)

    if config.list_modules_and_exit:
        for name in registry.names():
            print(name)
        return 0

    if config.print_completions is not None:
        sys.stdout.write(completion_script(config.print_completions, registry, prog=resolver.parser.prog))
        return 0

    if config.print_manpage:
        sys.stdout.write(resolver.parser.format_help())
        return 0

    configure_logging(Settings.from_env())
    try:
        run_modules(config, state, signature_runner(config, registry))
    except KeyboardInterrupt:
        logging.getLogger("genact.main").info("Interrupted after %s module runs", state.modules_ran())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
