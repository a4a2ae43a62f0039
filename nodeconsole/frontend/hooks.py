#!/usr/bin/env python3
# nodeconsole/frontend/hooks.py
from __future__ import annotations

"""
Operator hooks the backend calls back into.

- confirm_transaction: show what is about to be signed and ask y/n.
- unlock_account: ask for a passphrase (no echo) and forward it once.

Nothing typed here is stored; a failed prompt counts as "no".
"""

import json
import logging
from typing import Any, Callable, Mapping, Optional

from nodeconsole.bridge import RPCError
from nodeconsole.interface.cli import BasePrompter
from nodeconsole.ui.utils import colorize, print_line

logger = logging.getLogger(__name__)

CONFIRM_QUESTION = "Confirm Transaction [y/n] "
PASSPHRASE_PROMPT = "Passphrase: "

UnlockFn = Callable[[str, str], Any]


def _format_address(address: Any) -> str:
    if isinstance(address, (bytes, bytearray)):
        return "0x" + bytes(address).hex()
    return str(address)


def _describe(description: Any) -> str:
    if isinstance(description, Mapping):
        return json.dumps(dict(description), indent=2, default=str)
    return str(description)


class ConsoleFrontend:
    """Confirmation and passphrase prompts on the operator's terminal."""

    def __init__(
        self,
        prompter: BasePrompter,
        *,
        confirm_enabled: bool = True,
        unlock: Optional[UnlockFn] = None,
        bridge: Any = None,
    ) -> None:
        self.prompter = prompter
        self.confirm_enabled = confirm_enabled
        self.bridge = bridge
        self._unlock = unlock

    def _default_unlock(self, address: str, passphrase: str) -> Any:
        if self.bridge is None:
            raise RuntimeError("no bridge to forward the unlock request to")
        return self.bridge.call("personal_unlockAccount", [address, passphrase])

    def confirm_transaction(self, description: Any) -> bool:
        if not self.confirm_enabled:
            return True
        print_line(_describe(description))
        try:
            answer = self.prompter.prompt(CONFIRM_QUESTION)
        except (Exception, KeyboardInterrupt) as exc:
            logger.debug("confirmation prompt failed: %r", exc)
            return False
        return answer.strip().startswith("y")

    def unlock_account(self, address: Any) -> bool:
        address = _format_address(address)
        print_line(f"Please unlock account {address}.")
        try:
            passphrase = self.prompter.password_prompt(PASSPHRASE_PROMPT)
        except (Exception, KeyboardInterrupt) as exc:
            logger.debug("passphrase prompt failed: %r", exc)
            return False

        unlock = self._unlock or self._default_unlock
        try:
            result = unlock(address, passphrase)
        except RPCError as exc:
            print_line(colorize(f"Unable to unlock account: {exc.message}", "red"))
            return False
        except Exception as exc:
            logger.warning("unlock of %s failed: %s", address, exc)
            return False
        finally:
            del passphrase

        if result is False:
            return False
        print_line("Account is now unlocked for this session.")
        return True
