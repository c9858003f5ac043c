"""Action registry for dispatching a job to its executor."""

from typing import TYPE_CHECKING, Callable

from pdfbatch.config import ProcessingAction
from pdfbatch.exceptions import ConfigError

if TYPE_CHECKING:
    from pdfbatch.actions.base import BaseAction


class ActionRegistry:
    """Registry of executor classes keyed by ProcessingAction.

    Usage:
        @register_action(ProcessingAction.SPLIT)
        class SplitAction(BaseAction):
            ...

        executor_class = ActionRegistry.get(ProcessingAction.SPLIT)
    """

    _actions: dict[ProcessingAction, type["BaseAction"]] = {}

    @classmethod
    def register(cls, action: ProcessingAction, executor_class: type["BaseAction"]) -> None:
        executor_class.action = action
        cls._actions[action] = executor_class

    @classmethod
    def get(cls, action: ProcessingAction) -> type["BaseAction"]:
        """Get the executor class for an action.

        Raises:
            ConfigError: If no executor is registered for the action
        """
        if action not in cls._actions:
            available = ", ".join(a.value for a in cls.all_actions())
            raise ConfigError(
                f"No executor for action '{action.value}'. Available: {available}",
                context={"action": action.value},
            )
        return cls._actions[action]

    @classmethod
    def all_actions(cls) -> list[ProcessingAction]:
        """Registered actions in declaration order."""
        return [action for action in ProcessingAction if action in cls._actions]

    @classmethod
    def is_registered(cls, action: ProcessingAction) -> bool:
        return action in cls._actions


def register_action(action: ProcessingAction) -> Callable[[type["BaseAction"]], type["BaseAction"]]:
    """Class decorator registering an executor for ``action``."""

    def decorator(executor_class: type["BaseAction"]) -> type["BaseAction"]:
        ActionRegistry.register(action, executor_class)
        return executor_class

    return decorator


def get_action(action: ProcessingAction) -> type["BaseAction"]:
    return ActionRegistry.get(action)


def list_actions() -> list[ProcessingAction]:
    return ActionRegistry.all_actions()
