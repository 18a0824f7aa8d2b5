"""
Prompt providers for the interactive workflow.
Single responsibility: ask the user for a choice, a value or a confirmation.
"""

from typing import Any, Callable, Iterable, List, Optional, Protocol, Sequence, Tuple

from ..core.key_selector import ValidationError


# (label shown to the user, value returned to the caller)
Choice = Tuple[str, Any]


class PromptCancelled(Exception):
    """Raised when the user aborts a prompt (Ctrl+C or end of input)."""
    pass


class PromptProvider(Protocol):
    """Capabilities the workflow needs from whoever answers its questions."""

    def select(self, message: str, choices: Sequence[Choice],
               default: Any = None) -> Any:
        ...

    def text(self, message: str,
             validate: Optional[Callable[[str], Any]] = None,
             default: str = "") -> str:
        ...

    def confirm(self, message: str, default: bool = True) -> bool:
        ...


def normalize_choices(choices: Sequence[Any]) -> List[Choice]:
    """Accept plain values or (label, value) pairs."""
    normalized = []
    for choice in choices:
        if isinstance(choice, tuple) and len(choice) == 2:
            normalized.append(choice)
        else:
            normalized.append((str(choice), choice))
    return normalized


class ConsolePrompts:
    """
    Prompts answered on the terminal through ``input()``.
    """

    def __init__(self, input_func: Callable[[str], str] = None,
                 output_func: Callable[..., None] = None):
        """
        Initialize console prompts.

        Args:
            input_func: Replacement for ``input`` (default: builtin)
            output_func: Replacement for ``print`` (default: builtin)
        """
        self._input = input_func or input
        self._print = output_func or print

    def _ask(self, prompt: str) -> str:
        try:
            return self._input(prompt).strip()
        except (KeyboardInterrupt, EOFError):
            self._print("\nCancelled")
            raise PromptCancelled()

    def select(self, message: str, choices: Sequence[Any],
               default: Any = None) -> Any:
        """
        Let the user pick one entry from a numbered list.

        Args:
            message: Question to display
            choices: Values or (label, value) pairs
            default: Value returned when the user just presses Enter

        Returns:
            Value of the selected choice
        """
        options = normalize_choices(choices)
        if not options:
            raise ValueError("select() needs at least one choice")

        default_number = None
        for i, (_, value) in enumerate(options, 1):
            if default is not None and value == default:
                default_number = i
                break

        self._print(f"\n{message}")
        for i, (label, _) in enumerate(options, 1):
            marker = " (default)" if i == default_number else ""
            self._print(f"  {i:2d}. {label}{marker}")

        while True:
            hint = f" [{default_number}]" if default_number else ""
            choice = self._ask(f"Select option (1-{len(options)}){hint}: ")

            if not choice and default_number:
                return options[default_number - 1][1]

            try:
                choice_num = int(choice)
            except ValueError:
                self._print("Please enter a valid number")
                continue

            if 1 <= choice_num <= len(options):
                return options[choice_num - 1][1]
            self._print(f"Please enter a number between 1 and {len(options)}")

    def text(self, message: str,
             validate: Optional[Callable[[str], Any]] = None,
             default: str = "") -> str:
        """
        Ask for free text, re-asking until the validator accepts it.

        Args:
            message: Question to display
            validate: Callable raising ValidationError for bad input
            default: Value used when the user just presses Enter

        Returns:
            Accepted input
        """
        while True:
            suffix = f" [{default}]" if default else ""
            answer = self._ask(f"{message}{suffix}: ") or default

            if validate is None:
                return answer

            try:
                validate(answer)
            except ValidationError as e:
                self._print(f"  ✗ {e}")
                continue
            return answer

    def confirm(self, message: str, default: bool = True) -> bool:
        """
        Ask a yes/no question.

        Args:
            message: Question to display
            default: Answer used when the user just presses Enter

        Returns:
            True for yes
        """
        hint = "Y/n" if default else "y/N"
        while True:
            answer = self._ask(f"{message} ({hint}): ").lower()
            if not answer:
                return default
            if answer in ['y', 'yes']:
                return True
            if answer in ['n', 'no']:
                return False
            self._print("Please answer 'y' or 'n'")


class ScriptedPrompts:
    """
    Prompts answered from a prepared list, for non-interactive runs.

    Answers are consumed in order. ``select`` accepts either the value to
    return or its 1-based position given as a string such as ``"#2"``;
    ``text`` answers go through the validator exactly as typed input would,
    and a rejected answer consumes the next one, like a re-prompt.
    """

    def __init__(self, answers: Iterable[Any]):
        self._answers = list(answers)
        self.asked: List[str] = []
        self.rejections: List[str] = []

    @property
    def remaining(self) -> int:
        return len(self._answers)

    def _next(self, message: str) -> Any:
        self.asked.append(message)
        if not self._answers:
            raise PromptCancelled(f"No scripted answer left for: {message}")
        return self._answers.pop(0)

    def select(self, message: str, choices: Sequence[Any],
               default: Any = None) -> Any:
        options = normalize_choices(choices)
        answer = self._next(message)

        if answer is None and default is not None:
            return default

        if isinstance(answer, str) and answer.startswith("#"):
            return options[int(answer[1:]) - 1][1]

        for _, value in options:
            if value == answer:
                return value
        raise ValueError(f"Scripted answer {answer!r} is not a choice for: {message}")

    def text(self, message: str,
             validate: Optional[Callable[[str], Any]] = None,
             default: str = "") -> str:
        while True:
            answer = self._next(message)
            answer = default if answer is None else str(answer)
            if validate is None:
                return answer
            try:
                validate(answer)
            except ValidationError as e:
                self.rejections.append(str(e))
                continue
            return answer

    def confirm(self, message: str, default: bool = True) -> bool:
        answer = self._next(message)
        if answer is None:
            return default
        return bool(answer)
