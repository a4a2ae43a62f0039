#!/usr/bin/env python3
# nodeconsole/boot/boot.py
from __future__ import annotations
"""
Startup sequence for the node console.

Order matters:
- Configuration and logging come first.
- Module discovery is the only step that talks to the backend; if it
  fails the console cannot start.
- Bindings are installed before the history and line editor, so
  completion only ever sees modules that are actually bound.
"""

from typing import Any, Callable, Optional

from nodeconsole.bindings import (
    BindingProvider,
    ManifestProvider,
    discover_modules,
    load_bindings,
)
from nodeconsole.bridge import RPCBridge, RPCClient
from nodeconsole.db import ConsoleConfig, HistoryManager, load_config
from nodeconsole.frontend import ConsoleFrontend
from nodeconsole.interface import (
    BasePrompter,
    CompletionEngine,
    Console,
    ScriptRuntime,
    Session,
    StatementAccumulator,
    make_prompter,
)
from nodeconsole.ui import (
    colorize,
    enable_windows_vt,
    init_logger,
    print_line,
)


class StartupError(RuntimeError):
    """The console could not be brought up (backend unreachable at discovery)."""


def _step(label: str, fn: Callable[[], Any], *, echo: bool = True) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
        )
        raise
    if echo:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def _discover(client: RPCClient) -> dict[str, str]:
    try:
        return discover_modules(client)
    except (ConnectionError, OSError) as exc:
        raise StartupError(f"backend unreachable: {exc}") from exc


def boot_console(
    client: RPCClient,
    *,
    config: Optional[ConsoleConfig] = None,
    provider: Optional[BindingProvider] = None,
    prompter: Optional[BasePrompter] = None,
    interactive: bool = True,
    echo: bool = True,
) -> Console:
    """
    Wire a Console to `client`.

    Raises StartupError when discovery fails and BindingError when a module
    cannot be bound; in both cases nothing is left half-installed.
    """
    _step("Enable ANSI sequences", enable_windows_vt, echo=echo)

    # ---------- config + logging ----------
    if config is None:
        config = _step("Load configuration", load_config, echo=echo)
    _step(
        "Initialize logger",
        lambda: init_logger(
            "nodeconsole",
            level=config.log_level or "WARNING",
            logfile=config.log_file_path,
        ),
        echo=echo,
    )

    # ---------- backend ----------
    bridge = RPCBridge(client)
    modules = _step("Discover backend modules", lambda: _discover(client), echo=echo)

    runtime = ScriptRuntime()
    provider = provider or ManifestProvider(config.manifest_path)
    catalog = _step(
        f"Bind {len(modules)} module(s)",
        lambda: load_bindings(modules, provider, bridge, runtime.namespace),
        echo=echo,
    )

    # ---------- session ----------
    history = HistoryManager(config.history_path, config.secret_pattern)
    _step(f"Load history ({config.history_path})", history.load, echo=echo)

    completion = CompletionEngine(catalog)
    if prompter is None:
        prompter = make_prompter(
            interactive=interactive,
            completion=completion if config.enable_completion else None,
            history=history.entries,
        )

    frontend = ConsoleFrontend(
        prompter,
        confirm_enabled=config.confirm_transactions,
        bridge=bridge,
    )
    bridge.attach_frontend(frontend)

    session = Session(
        accumulator=StatementAccumulator(config.prompt),
        history=history,
        catalog=catalog,
        completion=completion,
    )
    console = Console(
        session,
        runtime,
        prompter,
        bridge=bridge,
        poll_interval=config.poll_interval,
        log_batch_history=config.log_batch_history,
    )
    _step("Boot complete", lambda: None, echo=echo)
    return console


def run_console(client: RPCClient, *, config: Optional[ConsoleConfig] = None, **kwargs: Any) -> None:
    """Boot, greet (unless SHOW_BANNER is off) and run the interactive loop."""
    config = config or load_config()
    console = boot_console(client, config=config, **kwargs)
    if config.show_banner:
        console.welcome()
    console.interactive()
