from prompt_toolkit.filters import completion_is_selected, has_completions
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent

from devconsole.console.dispatcher import CommandConsole


def get_key_bindings(console: CommandConsole, toggle_key: str) -> KeyBindings:
    """Return the custom KeyBindings: console toggle and completion handling.

    Args:
        console: Console whose open state the toggle key flips
        toggle_key: prompt_toolkit key name, e.g. "c-t" or "f1"

    Raises:
        ValueError: if ``toggle_key`` is not a valid key name
    """
    kb = KeyBindings()

    @kb.add(toggle_key, eager=True)
    def toggle(event: KeyPressEvent) -> None:
        """Show or hide the console."""
        console.toggle()
        event.app.invalidate()

    @kb.add("enter", filter=completion_is_selected)
    def accept_selected(event: KeyPressEvent) -> None:
        """Apply the completion the user tabbed or arrowed to, then submit."""
        buffer = event.current_buffer
        buffer.apply_completion(buffer.complete_state.current_completion)  # type: ignore
        buffer.cancel_completion()
        buffer.validate_and_handle()

    @kb.add("tab", filter=has_completions)
    def accept_or_cycle(event: KeyPressEvent) -> None:
        buffer = event.current_buffer
        state = buffer.complete_state

        # A single completion is applied directly, several are cycled
        if len(state.completions) == 1:  # type: ignore
            state.complete_index = 0  # type: ignore
            buffer.apply_completion(state.current_completion)  # type: ignore
            buffer.cancel_completion()
        else:
            buffer.complete_next()

    return kb
