"""
Message composer: input text plus a single in-flight flag.
"""
from typing import Callable, Optional, TypeVar

T = TypeVar("T")


class Composer:
    """
    Collects user input and hands it to a submit callable.

    is_submitting drives both the disabled state and the optional spinner.
    Text is cleared only after a confirmed success, so a failed send can be
    retried without retyping.
    """

    def __init__(self, on_submit: Callable[[str], T]) -> None:
        self._on_submit = on_submit
        self.text = ""
        self.is_submitting = False

    @property
    def can_submit(self) -> bool:
        return bool(self.text.strip()) and not self.is_submitting

    @property
    def is_disabled(self) -> bool:
        return self.is_submitting

    @property
    def show_spinner(self) -> bool:
        return self.is_submitting

    def set_text(self, text: str) -> None:
        self.text = text

    def submit(self) -> Optional[T]:
        """Send the current text. Blank text or a pending submission makes this a no-op returning None."""
        if not self.can_submit:
            return None
        self.is_submitting = True
        try:
            result = self._on_submit(self.text)
            self.text = ""
            return result
        finally:
            self.is_submitting = False

    def handle_key(self, key: str, shift: bool = False) -> Optional[T]:
        """Enter submits, Shift+Enter inserts a newline."""
        if key != "Enter":
            return None
        if shift:
            self.text += "\n"
            return None
        return self.submit()
