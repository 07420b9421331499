"""
Harbour service - the policy behind ``harbomux harbour``.

Decides, from the execution context and the managed server's state, whether
to do nothing, hop out of an unrelated tmux session, attach, or bootstrap a
new managed session.

Usage:
    >>> from harbomux.core.runtime import Runtime
    >>> service = Runtime.create().harbour_service()
    >>> result = service.harbour()
    >>> result.outcome
    <HarbourOutcome.LAUNCHED: 'launched'>
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from harbomux.core.bootstrap import Bootstrapper
from harbomux.core.context import ContextClassifier, ExecutionContext
from harbomux.core.tmux import ManagedServer, TmuxServer

logger = logging.getLogger(__name__)


class HarbourOutcome(str, Enum):
    """Which branch of the harbour policy ran."""

    ALREADY_ACTIVE = "already-active"
    DETACHED = "detached"
    ATTACHED = "attached"
    LAUNCHED = "launched"


@dataclass(frozen=True)
class HarbourResult:
    """
    Outcome of one harbour evaluation.

    Attributes:
        outcome: Branch taken
        exit_status: Exit status of the tmux client for DETACHED/ATTACHED
        detail: tmux stderr when a tmux command failed
    """

    outcome: HarbourOutcome
    exit_status: int = 0
    detail: str = ""


class HarbourService:
    """
    Orchestrates the harbour policy.

    Evaluated in order:
        NESTED                      -> already active, no-op
        PLAIN_MULTIPLEXER           -> detach, client re-runs ``harbour``
        BARE, server running        -> attach
        BARE, server not running    -> bootstrap handshake, no attach
    """

    def __init__(
        self,
        classifier: ContextClassifier,
        managed_server: ManagedServer,
        default_server: TmuxServer,
        bootstrapper: Bootstrapper,
        program: Sequence[str],
    ) -> None:
        self._classifier = classifier
        self._managed = managed_server
        self._default = default_server
        self._bootstrapper = bootstrapper
        self._program = tuple(program)

    def harbour(self) -> HarbourResult:
        """
        Run the harbour policy.

        Raises:
            LaunchFailure: If the managed session cannot be created
            SubprocessIOError: If tmux cannot be started at all
        """
        context = self._classifier.classify()
        logger.debug("Execution context: %s", context.value)

        if context is ExecutionContext.NESTED:
            return HarbourResult(HarbourOutcome.ALREADY_ACTIVE)

        if context is ExecutionContext.PLAIN_MULTIPLEXER:
            # The detached client runs this in the outer shell, which is BARE
            rerun = shlex.join([*self._program, "harbour"])
            result = self._default.detach_client(rerun)
            return HarbourResult(
                HarbourOutcome.DETACHED,
                exit_status=result.returncode,
                detail=result.stderr.strip(),
            )

        if self._managed.is_running():
            status = self._managed.attach()
            return HarbourResult(HarbourOutcome.ATTACHED, exit_status=status)

        self._bootstrapper.launch()
        return HarbourResult(HarbourOutcome.LAUNCHED)
