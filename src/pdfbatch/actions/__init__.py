"""Action executors for pdfbatch.

Each executor registers itself for one ProcessingAction.

Usage:
    from pdfbatch.actions import get_action

    executor = get_action(ProcessingAction.SPLIT)(job)
    executor.run()
"""

# Import all executor modules to trigger registration
from pdfbatch.actions import (
    concatenate,
    copies,
    scale_rotate,
    smart_save,
    split,
    text_convert,
)

from pdfbatch.actions.base import BaseAction, PerFileAction
from pdfbatch.actions.registry import (
    ActionRegistry,
    get_action,
    list_actions,
    register_action,
)

__all__ = [
    "BaseAction",
    "PerFileAction",
    "ActionRegistry",
    "get_action",
    "list_actions",
    "register_action",
]
