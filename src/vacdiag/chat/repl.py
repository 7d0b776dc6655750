"""prompt_toolkit REPL for the vacdiag chat interface."""

from __future__ import annotations

from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from vacdiag.chat.renderer import ChatRenderer
from vacdiag.core.assistant import DiagnosticAssistant
from vacdiag.core.prompts import GUIDED_OPTIONS

SLASH_COMMANDS = {
    "/help": "Show this help",
    "/options": "List guided symptom options",
    "/context": "Toggle display of retrieved knowledge",
    "/clear": "Forget the conversation so far",
    "/exit": "Leave the chat",
}


def resolve_input(text: str, options: list[str] = GUIDED_OPTIONS) -> str:
    """Map an option number to its text; anything else passes through."""
    stripped = text.strip()
    if stripped.isdigit():
        idx = int(stripped) - 1
        if 0 <= idx < len(options):
            return options[idx]
    return stripped


class ChatSession:
    """In-memory conversation state for one REPL run."""

    def __init__(self, assistant: DiagnosticAssistant, renderer: ChatRenderer):
        self.assistant = assistant
        self.renderer = renderer
        self.history: list[dict[str, Any]] = []
        self.show_context = False

    def handle_command(self, command: str) -> bool:
        """Run a slash command. Returns False when the session should end."""
        name = command.split()[0].lower()
        if name in ("/exit", "/quit"):
            return False
        if name == "/help":
            for cmd, desc in SLASH_COMMANDS.items():
                self.renderer.render_info(f"{cmd:<10} {desc}")
        elif name == "/options":
            self.renderer.render_options(GUIDED_OPTIONS)
        elif name == "/context":
            self.show_context = not self.show_context
            self.renderer.render_info(f"Knowledge display {'on' if self.show_context else 'off'}")
        elif name == "/clear":
            self.history.clear()
            self.renderer.render_info("Conversation cleared.")
        else:
            self.renderer.render_error(f"Unknown command: {name}")
        return True

    def send(self, message: str) -> str:
        """Send one user message and record both turns."""
        result = self.assistant.ask(message, self.history)
        if self.show_context:
            self.renderer.render_context(result.context)
        self.renderer.render_assistant_message(result.reply)
        self.history.append({"role": "user", "content": message})
        self.history.append({"role": "assistant", "content": result.reply})
        return result.reply


def run_repl(assistant: DiagnosticAssistant, renderer: ChatRenderer | None = None) -> None:
    """Run the interactive chat loop until /exit or EOF."""
    renderer = renderer or ChatRenderer()
    session = ChatSession(assistant, renderer)

    renderer.render_welcome(assistant.settings.model)
    renderer.render_options(GUIDED_OPTIONS)
    if not assistant.settings.api_key:
        renderer.render_error("GROQ_API_KEY is not set; replies will use the fallback message.")

    prompt = PromptSession(
        history=InMemoryHistory(),
        completer=WordCompleter(list(SLASH_COMMANDS), sentence=True),
    )

    while True:
        try:
            text = prompt.prompt("> ")
        except KeyboardInterrupt:
            continue
        except EOFError:
            break

        if not text.strip():
            continue
        if text.strip().startswith("/"):
            if not session.handle_command(text.strip()):
                break
            continue

        session.send(resolve_input(text))
