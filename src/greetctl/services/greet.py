"""GreetCommand — ask for a name, greet, wait for Enter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from greetctl.events.models import NameEntered
from greetctl.services.base import BaseCommand
from greetctl.services.result import Failure, Success

if TYPE_CHECKING:
    from greetctl.concurrency import CancelToken
    from greetctl.services.result import Result

logger = logging.getLogger(__name__)


class GreetCommand(BaseCommand):
    """Prompt for a name, publish it, print the greeting and block on Enter.

    End-of-input on the name prompt substitutes the configured placeholder;
    end-of-input on the final prompt completes the command like Enter does.
    """

    op = "greet"

    async def execute(self, cancel: CancelToken) -> Result[None]:
        cfg = self._settings.greet
        try:
            await self._console.write_text(cfg.name_prompt, cancel)
            name = await self._console.read_line(cancel)
            if name is None:
                logger.debug("End of input at name prompt; using placeholder")
                name = cfg.placeholder

            await self._publish(NameEntered(name=name), cancel)

            await self._console.write_line(cfg.greeting.format(name=name), cancel)
            await self._console.write_line(cfg.exit_prompt, cancel)
            await self._console.read_line(cancel)
        except Exception as exc:
            logger.debug("greet failed: %s", exc, exc_info=True)
            return Failure.from_exception(self.op, exc)
        return Success(op=self.op, value=None)
