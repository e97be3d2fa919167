"""
Wizard Navigation

Handles next/back/jump/submit navigation prompts for the wizard.
"""

from enum import Enum
from typing import Optional, Tuple

from rich.console import Console
from rich.prompt import Prompt

from .state import StepStatus


class NavigationAction(str, Enum):
    """Possible navigation actions."""
    NEXT = "next"
    BACK = "back"
    JUMP = "jump"
    SUBMIT = "submit"
    QUIT = "quit"


class Navigator:
    """
    Reads navigation choices from the user and renders progress.

    The navigator never moves the wizard itself; the runner hands the
    chosen action to the controller, which decides whether it is allowed.
    """

    def __init__(self, console: Console):
        """
        Initialize navigator.

        Args:
            console: Rich console for output
        """
        self.console = console

    def show_navigation_prompt(
        self,
        step_number: int,
        total_steps: int,
        can_submit: bool = False,
    ) -> Tuple[NavigationAction, Optional[int]]:
        """
        Show navigation prompt and get user choice.

        Args:
            step_number: Current step index
            total_steps: Total number of steps
            can_submit: Whether this is the review step

        Returns:
            The chosen action, and the target index for a jump
        """
        options = ["[Enter] Create Tenant" if can_submit else "[Enter] Next"]

        if step_number > 0:
            options.append("[B] Back")

        options.append(f"[1-{total_steps}] Go to step")
        options.append("[Q] Quit")

        self.console.print()
        self.console.print("  ".join(options), style="dim", markup=False)

        while True:
            choice = Prompt.ask("", default="", console=self.console).strip().lower()

            if choice in ("", "n", "c"):
                return (NavigationAction.SUBMIT if can_submit else NavigationAction.NEXT), None
            elif choice == "b" and step_number > 0:
                return NavigationAction.BACK, None
            elif choice == "q":
                return NavigationAction.QUIT, None
            elif choice.isdigit() and 1 <= int(choice) <= total_steps:
                return NavigationAction.JUMP, int(choice) - 1
            else:
                self.console.print("[yellow]Invalid choice. Please try again.[/yellow]")

    def confirm_quit(self) -> bool:
        """
        Confirm the user wants to quit.

        Returns:
            True if user confirms quit
        """
        self.console.print()
        self.console.print("[yellow]Nothing is saved; the wizard will start over next time.[/yellow]")

        choice = Prompt.ask(
            "Are you sure you want to quit?",
            choices=["y", "n"],
            default="n",
            console=self.console,
        ).lower()

        return choice == "y"

    def show_progress(self, percentage: int) -> None:
        """
        Show the completion bar.

        Args:
            percentage: Share of steps that currently validate, 0-100
        """
        bar_length = 30
        completed_length = int(percentage * bar_length / 100)
        remaining_length = bar_length - completed_length

        bar = (
            "[green]" + "=" * completed_length + "[/green]"
            + "[dim]" + "-" * remaining_length + "[/dim]"
        )

        self.console.print(f"Setup Progress: \\[{bar}] {percentage}%")

    def get_step_summary(self, controller) -> str:
        """
        Get a one-line-per-step status list.

        Args:
            controller: The wizard controller

        Returns:
            Formatted summary string
        """
        lines = []
        for index, (step, status) in enumerate(zip(controller.steps, controller.step_statuses())):
            if status == StepStatus.CURRENT:
                icon = "[cyan]→[/cyan]"
            elif status == StepStatus.COMPLETE:
                icon = "[green]✓[/green]"
            else:
                icon = "[dim]○[/dim]"

            lines.append(f"  {icon} {index + 1}. {step.icon} {step.name}")

        return "\n".join(lines)
