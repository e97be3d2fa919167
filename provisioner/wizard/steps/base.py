"""
Base Wizard Step

Abstract base class for all wizard steps.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from ..state import StepId, StepResult, WizardForm

if TYPE_CHECKING:
    from ..controller import WizardController


class WizardStep(ABC):
    """
    Abstract base class for wizard steps.

    Each step owns a pure validator over its slice of the form and an
    interactive execute() that collects that slice through the
    controller.
    """

    # Step metadata
    step_id: StepId
    name: str = "Unnamed Step"
    icon: str = ""
    description: str = ""
    fields: tuple = ()

    @abstractmethod
    def validate(self, form: WizardForm, slug_available: Optional[bool] = None) -> Dict[str, str]:
        """
        Validate this step's fields.

        Args:
            form: The wizard form
            slug_available: Latest slug availability result, if any

        Returns:
            Map of field name to error message (empty if valid)
        """
        pass

    @abstractmethod
    def execute(self, controller: "WizardController", console: Console) -> StepResult:
        """
        Prompt for this step's fields and write them to the controller.

        Args:
            controller: The wizard controller
            console: Rich console for output

        Returns:
            StepResult with the collected values
        """
        pass

    def owns(self, field_name: str) -> bool:
        """Whether an error map key belongs to this step."""
        return field_name in self.fields

    def show_errors(self, errors: Dict[str, str], console: Console) -> None:
        """Print field errors under the step."""
        for field_name, error in errors.items():
            console.print(f"  [red]• {field_name}: {error}[/red]")

    # Utility methods for common prompts

    def prompt_text(
        self,
        console: Console,
        prompt: str,
        default: str = "",
        required: bool = True,
        validator: Optional[Callable[[str], Optional[str]]] = None,
        password: bool = False,
    ) -> str:
        """
        Prompt for text input.

        Args:
            console: Rich console
            prompt: Prompt text
            default: Default value
            required: Whether input is required
            validator: Optional function returning an error message
            password: Hide the typed value

        Returns:
            User input string
        """
        while True:
            value = Prompt.ask(prompt, default=default or "", password=password, console=console)
            value = value.strip()

            if required and not value:
                console.print("[red]This field is required.[/red]")
                continue

            if validator and value:
                error = validator(value)
                if error:
                    console.print(f"[red]{error}[/red]")
                    continue

            return value

    def show_table(
        self,
        console: Console,
        title: str,
        columns: List[str],
        rows: List[List[str]],
    ) -> None:
        """
        Display a table.

        Args:
            console: Rich console
            title: Table title
            columns: Column headers
            rows: Table rows
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")

        for col in columns:
            table.add_column(col)

        for row in rows:
            table.add_row(*row)

        console.print(table)

    def success(self, data: Dict[str, Any] = None, message: str = "") -> StepResult:
        """Create a successful step result."""
        return StepResult(success=True, data=data or {}, message=message)

