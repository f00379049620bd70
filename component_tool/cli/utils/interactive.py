"""Interactive utilities for CLI commands"""

from rich.prompt import Confirm

from ...api.exceptions import UserCancelledError
from ...utils.output import console


def confirm(message: str, assume_yes: bool = False, default: bool = False) -> bool:
    """Ask a yes/no question

    Args:
        message: Question to ask
        assume_yes: Answer yes without asking
        default: Answer used on empty input

    Returns:
        True if confirmed
    """
    if assume_yes:
        console.print(f"{message} [dim](yes)[/dim]")
        return True
    return Confirm.ask(message, default=default, console=console)


def confirm_or_cancel(message: str, assume_yes: bool = False) -> None:
    """Ask a yes/no question, raising on no

    Raises:
        UserCancelledError: If not confirmed
    """
    if not confirm(message, assume_yes):
        raise UserCancelledError()
