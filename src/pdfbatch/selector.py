"""Action selection logic for pdfbatch.

A job runs exactly one of the six processing actions. The selector counts
the enabled actions and returns a result the caller inspects; nothing is
raised for a zero or multiple selection.
"""

from dataclasses import dataclass, field

from pdfbatch.config import ActionConfig, ProcessingAction


@dataclass
class ActionSelection:
    """Result of action selection.

    Attributes:
        action: The single enabled action, or None when selection failed
        enabled: Every enabled action, in declaration order
        error: Human-readable reason when selection failed
    """

    action: ProcessingAction | None = None
    enabled: list[ProcessingAction] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.action is not None


def select_action(config: ActionConfig) -> ActionSelection:
    """Pick the single enabled action of a job.

    Args:
        config: Parsed action config

    Returns:
        ActionSelection with the action set when exactly one flag is true,
        otherwise with ``error`` describing the problem
    """
    enabled = list(config.enabled_actions)

    if not enabled:
        return ActionSelection(
            enabled=enabled,
            error=(
                "All Processing actions are false. "
                "Ensure variables are correct or check previous errors."
            ),
        )

    if len(enabled) > 1:
        names = " & ".join(action.value for action in enabled)
        return ActionSelection(
            enabled=enabled,
            error=(
                f"You can only call a single action. Your config file has "
                f"{len(enabled)} actions set to true : {names}"
            ),
        )

    return ActionSelection(action=enabled[0], enabled=enabled)
