"""
Terminal Session

Command interpreter and scrollback for one visitor. Input is either a menu
number, a slash command (or its bare synonym), or a free-text question for
the assistant. Every view change clears the scrollback and redraws the
screen; "back" replays the previous view from the history stack.
"""

import logging
import re
from typing import Dict, List, Optional

from .content_service import ContentServiceError
from .fallback import fallback_body, fallback_items
from .models import ContentItem, Effect, LineKind, TerminalLine
from .navigation import MAIN_VIEW, Menu, NavigationState, View
from .sorting import sort_items
from . import config

logger = logging.getLogger(__name__)

FRAME_WIDTH = 70
AI_SEPARATOR = "─" * 40
MAX_SPOKEN_CHARS = 1000

_NUMBER_RE = re.compile(r"^[0-9]+$")

OFFLINE_MESSAGE = "AI assistant temporarily offline. Please try again."
GOODBYE_MESSAGE = "Thank you for visiting. Goodbye!"

BANNER_ART = """
██╗      ██████╗ ███████╗███████╗███╗   ██╗███████╗██████╗
██║     ██╔═══██╗██╔════╝██╔════╝████╗  ██║██╔════╝██╔══██╗
██║     ██║   ██║███████╗███████╗██╔██╗ ██║█████╗  ██████╔╝
██║     ██║   ██║╚════██║╚════██║██║╚██╗██║██╔══╝  ██╔══██╗
███████╗╚██████╔╝███████║███████║██║ ╚████║███████╗██║  ██║
╚══════╝ ╚═════╝ ╚══════╝╚══════╝╚═╝  ╚═══╝╚══════╝╚═╝  ╚═╝"""

TAGLINE = "SOFTWARE ENGINEER | SYSTEM ARCHITECT | TECH INNOVATOR"

# Main menu number -> (directory, description)
MAIN_MENU = {
    "1": ("Experience", "Professional work history"),
    "2": ("Skills", "Technical expertise & proficiencies"),
    "3": ("Projects", "Notable work & contributions"),
    "4": ("Education", "Academic background & certifications"),
    "5": ("Journal", "Thoughts on tech and career"),
    "6": ("About", "Personal introduction"),
}

SECTION_TITLES = {
    Menu.EXPERIENCE: ("Experience", "PROFESSIONAL EXPERIENCE"),
    Menu.SKILLS: ("Skills", "TECHNICAL SKILLS"),
    Menu.PROJECTS: ("Projects", "NOTABLE PROJECTS"),
    Menu.EDUCATION: ("Education", "EDUCATION & CERTIFICATIONS"),
    Menu.ABOUT: ("About", "ABOUT"),
}

HELP_COMMANDS = [
    ("/menu", "Return to main menu"),
    ("/help", "Display available commands"),
    ("/back", "Go back to the previous screen"),
    ("/contact", "View contact information"),
    ("/download", "Download resume as PDF"),
    ("/github", "Visit GitHub profile"),
    ("/linkedin", "Visit LinkedIn profile"),
    ("/voice", "Toggle audio output for Alex responses"),
    ("/clear", "Clear terminal screen"),
]

# Metadata fields shown above a file body, in order
DETAIL_FIELDS = [
    ("company", "Company"),
    ("institution", "Institution"),
    ("period", "Period"),
    ("timeline", "Timeline"),
    ("status", "Status"),
    ("location", "Location"),
]


def create_border(title: Optional[str] = None, char: str = "━", width: int = FRAME_WIDTH) -> str:
    """Horizontal rule, optionally with a centred title."""
    if not title:
        return char * width

    label = f" {title} "
    remaining = max(width - len(label), 0)
    left = remaining // 2
    return char * left + label + char * (remaining - left)


def listing_label(index: int, item: ContentItem) -> str:
    """'1. DevOps Engineer - Tech Innovations Inc. (March 2023 - Present)'"""
    subtitle = item.metadata.get("company") or item.metadata.get("institution")
    label = f"{item.title} - {subtitle}" if subtitle else item.title
    period = item.metadata.get("period")
    if period:
        label += f" ({period})"
    return f"{index}. {label}"


class TerminalSession:
    """
    One visitor's terminal: scrollback, navigation history and flags.

    The content service, assistant and speech service are injected; any
    objects with the same async methods will do.
    """

    def __init__(self, content, assistant, speech=None):
        self.content = content
        self.assistant = assistant
        self.speech = speech

        self.lines: List[TerminalLine] = []
        self.nav = NavigationState()
        self.directory_files: List[ContentItem] = []
        self.effects: List[Effect] = []

        self.ready = False
        self.is_processing = False
        self.audio_enabled = False
        self.needs_input_divider = False
        self.closed = False

        self._commands = {}
        for names, handler in (
            (("/menu", "menu", "m"), self.show_main_menu),
            (("/help", "help", "h"), self._cmd_help),
            (("x", "/back", "back"), self.go_back),
            (("/clear", "clear"), self._cmd_clear),
            (("exit",), self._cmd_exit),
            (("/voice", "voice"), self._cmd_voice),
            (("/github",), self._cmd_github),
            (("/linkedin",), self._cmd_linkedin),
            (("/download",), self._cmd_download),
            (("/contact", "contact"), self._cmd_contact),
            (("/about", "about"), self._section_command(Menu.ABOUT)),
            (("/experience", "experience"), self._section_command(Menu.EXPERIENCE)),
            (("/skills", "skills"), self._section_command(Menu.SKILLS)),
            (("/projects", "projects"), self._section_command(Menu.PROJECTS)),
            (("/education", "education"), self._section_command(Menu.EDUCATION)),
        ):
            for name in names:
                self._commands[name] = handler

    # ------------------------------------------------------------------
    # Scrollback
    # ------------------------------------------------------------------

    def add_line(
        self,
        text: str = "",
        kind: LineKind = LineKind.NORMAL,
        is_markdown: bool = False,
        clickable_command: Optional[str] = None,
    ):
        self.lines.append(TerminalLine(
            text=text,
            kind=kind,
            is_markdown=is_markdown,
            clickable_command=clickable_command,
        ))

    def add_markdown(self, text: str):
        self.add_line(text, LineKind.MARKDOWN, is_markdown=True)

    def clear(self):
        self.lines = []

    def drain_effects(self) -> List[Effect]:
        """Hand queued side effects to the transport."""
        effects, self.effects = self.effects, []
        return effects

    @property
    def current_menu(self) -> Menu:
        return self.nav.current.menu

    @property
    def displaying_content(self) -> bool:
        return self.nav.current.displaying_content

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    async def boot(self):
        """Print the boot sequence and show the main menu."""
        self.add_line("INITIALIZING TERMINAL INTERFACE...", LineKind.PROCESSING)
        self.add_line('AI ASSISTANT "ALEX" LOADED AND READY', LineKind.PROCESSING)
        await self.show_main_menu()
        self.ready = True

    async def submit(self, text: str) -> bool:
        """
        Handle one line of input.

        Returns:
            False when the input was ignored (blank, not booted yet, or
            another command still processing)
        """
        command = (text or "").strip()
        if not command or not self.ready or self.is_processing:
            return False

        self.is_processing = True
        try:
            if self.needs_input_divider:
                self.add_line(create_border("", "─"), LineKind.SEPARATOR)
                self.needs_input_divider = False
            self.add_line(f"> {command}", LineKind.USER_INPUT)
            await self.process_command(command)
        finally:
            self.is_processing = False
        return True

    async def process_command(self, command: str):
        cmd = command.lower().strip()
        view = self.nav.current

        if view.menu is Menu.MAIN and cmd in MAIN_MENU:
            directory = MAIN_MENU[cmd][0]
            if directory == "About":
                await self.navigate(View(Menu.ABOUT))
            else:
                await self.navigate(View(Menu.DIRECTORY, directory))
            return

        if view.is_listing and _NUMBER_RE.match(cmd):
            index = int(cmd) - 1
            if 0 <= index < len(self.directory_files):
                item = self.directory_files[index]
                await self.navigate(View(Menu.DIRECTORY, view.directory, item.name))
            # Out of range: nothing beyond the echo
            return

        handler = self._commands.get(cmd)
        if handler is not None:
            await handler()
            return

        await self.ask_assistant(command)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def navigate(self, view: View, record: bool = True):
        """Show a view; record it in the history unless replaying."""
        if record:
            self.nav.push(view)
        await self._render(view)

    async def show_main_menu(self):
        self.nav.reset()
        await self._render(MAIN_VIEW)

    async def go_back(self):
        if not self.nav.pop():
            return
        await self.navigate(self.nav.current, record=False)

    async def _render(self, view: View):
        if view.menu is Menu.MAIN:
            await self._render_main()
        elif view.menu is Menu.HELP:
            self._render_help()
        elif view.menu is Menu.CONTACT:
            self._render_contact()
        elif view.menu is Menu.DIRECTORY and view.filename:
            await self._render_file(view.directory, view.filename)
        elif view.menu is Menu.DIRECTORY:
            await self._render_listing(view.directory)
        else:
            self._render_section(view.menu)

    def _show_banner(self):
        self.add_line()
        self.add_line(create_border("", "═"), LineKind.SEPARATOR)
        self.add_line()
        self.add_line(BANNER_ART, LineKind.ASCII_ART)
        self.add_line()
        self.add_line(TAGLINE, LineKind.TAGLINE)
        self.add_line()
        self.add_line(create_border("", "═"), LineKind.SEPARATOR)
        self.add_line()

    def _show_footer(self, hint: str):
        self.add_line()
        self.add_line(create_border(), LineKind.SEPARATOR)
        self.add_line()
        self.add_line(hint, LineKind.PROCESSING)
        self.add_line()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    async def _render_main(self):
        self.clear()
        self.needs_input_divider = True
        self._show_banner()
        self.add_line(create_border("MAIN MENU"))
        self.add_line()
        for number, (directory, description) in MAIN_MENU.items():
            self.add_line(f"{number}. {directory} - {description}", clickable_command=number)
        self.add_line()
        self.add_line(create_border())
        self.add_line()
        self.add_line('Type a number above, "help" for commands, or ask Alex a question.', LineKind.PROCESSING)
        self.add_line()

    def _render_help(self):
        self.clear()
        self.needs_input_divider = False
        self._show_banner()
        self.add_line(create_border("AVAILABLE COMMANDS"))
        self.add_line()
        for name, description in HELP_COMMANDS:
            self.add_line(f"{name:<9} - {description}", clickable_command=name)
        self.add_line()
        self.add_line(create_border("AI ASSISTANT"))
        self.add_line()
        self.add_line("Ask Alex anything about:", LineKind.PROCESSING)
        self.add_line("• Career advice and tech industry insights")
        self.add_line("• Programming and system architecture")
        self.add_line("• Joshua's experience and background")
        self.add_line("• Project ideas and learning paths")
        self.add_line()
        self.add_line("Just type your question naturally!", LineKind.PROCESSING)
        self._show_footer("Type commands, menu numbers, or ask Alex a question.")

    def _render_contact(self):
        self.clear()
        self.needs_input_divider = False
        self._show_banner()
        self.add_line(create_border("CONTACT INFORMATION"))
        self.add_line()
        self.add_line(f"Email:    {config.CONTACT_EMAIL}")
        self.add_line(f"LinkedIn: {config.LINKEDIN_URL}", clickable_command="/linkedin")
        self.add_line(f"GitHub:   {config.GITHUB_PROFILE_URL}", clickable_command="/github")
        self.add_line(f"Location: {config.CONTACT_LOCATION}")
        self.add_line()
        self.add_line("Feel free to reach out for opportunities or collaborations!", LineKind.PROCESSING)
        self._show_footer("Type /back to go back or /menu to return to main menu.")

    async def _render_listing(self, directory: str):
        self.clear()
        self.needs_input_divider = False
        self._show_banner()
        self.add_line(create_border(directory.upper()))
        self.add_line()

        try:
            files = await self.content.list_files(directory)
        except ContentServiceError as e:
            logger.error(f"Error fetching directory files: {e}")
            self.add_line("Error loading content.", LineKind.ERROR)
            files = []
        self.directory_files = list(files)

        if not files:
            self.add_line("No content available.", LineKind.PROCESSING)
        for index, item in enumerate(files, 1):
            self.add_line(listing_label(index, item), clickable_command=str(index))

        self._show_footer("Type a number to view content or /menu to return.")

    async def _render_file(self, directory: str, filename: str):
        self.clear()
        self.needs_input_divider = False

        try:
            file_data = await self.content.get_file(directory, filename)
        except ContentServiceError as e:
            logger.error(f"Error fetching file content: {e}")
            self.add_line("Content not available.", LineKind.ERROR)
            return

        self._show_banner()
        self.add_line(create_border(file_data.title.upper()))
        self.add_line()

        shown = False
        for key, label in DETAIL_FIELDS:
            value = file_data.metadata.get(key)
            if value:
                self.add_markdown(f"**{label}:** {value}")
                shown = True
        if shown:
            self.add_line()

        self.add_markdown(file_data.content)
        self._show_footer("Type /back to return to the listing or /menu for the main menu.")

    def _render_section(self, menu: Menu):
        directory, heading = SECTION_TITLES[menu]
        self.clear()
        self.needs_input_divider = False
        self._show_banner()
        self.add_line(create_border(heading), LineKind.MENU_HEADER)
        self.add_line()

        items = sort_items(fallback_items(directory), directory)
        for item in items:
            if len(items) > 1:
                self.add_markdown(f"## {item.title}")
                subtitle = item.metadata.get("company") or item.metadata.get("institution")
                period = item.metadata.get("period") or item.metadata.get("timeline")
                details = " | ".join(part for part in (
                    f"**{subtitle}**" if subtitle else None,
                    period,
                ) if part)
                if details:
                    self.add_markdown(details)
            self.add_markdown(fallback_body(directory, item.name) or "")
            self.add_line()

        self._show_footer("Type /menu to return to main menu.")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _section_command(self, menu: Menu):
        async def handler():
            await self.navigate(View(menu))
        return handler

    async def _cmd_help(self):
        await self.navigate(View(Menu.HELP))

    async def _cmd_contact(self):
        await self.navigate(View(Menu.CONTACT))

    async def _cmd_clear(self):
        self.clear()
        self.needs_input_divider = False

    async def _cmd_exit(self):
        self.add_line(GOODBYE_MESSAGE, LineKind.PROCESSING)
        self.effects.append(Effect(kind="close"))
        self.closed = True

    async def _cmd_voice(self):
        self.audio_enabled = not self.audio_enabled
        if self.audio_enabled:
            self.add_line("Audio output enabled. Alex will now speak responses aloud.", LineKind.PROCESSING)
        else:
            self.add_line("Audio output disabled.", LineKind.PROCESSING)

    async def _cmd_github(self):
        self.effects.append(Effect(kind="open_url", value=config.GITHUB_PROFILE_URL))
        self.add_line("Opening GitHub profile...", LineKind.PROCESSING)

    async def _cmd_linkedin(self):
        self.effects.append(Effect(kind="open_url", value=config.LINKEDIN_URL))
        self.add_line("Opening LinkedIn profile...", LineKind.PROCESSING)

    async def _cmd_download(self):
        self.add_line("Resume download feature coming soon...", LineKind.PROCESSING)

    # ------------------------------------------------------------------
    # Assistant
    # ------------------------------------------------------------------

    async def ask_assistant(self, question: str):
        """Forward a question and print the reply. Navigation is untouched."""
        try:
            reply = await self.assistant.ask(question)
        except Exception as e:
            logger.error(f"AI call failed: {e}")
            reply = OFFLINE_MESSAGE

        self.add_line(AI_SEPARATOR, LineKind.SEPARATOR)
        if self.audio_enabled and len(reply) < MAX_SPOKEN_CHARS:
            await self._speak(reply)
        for line in reply.split("\n"):
            self.add_line(f"    {line}", LineKind.AI_RESPONSE)
        self.add_line(AI_SEPARATOR, LineKind.SEPARATOR)
        self.add_line()

    async def _speak(self, text: str):
        if self.speech is None:
            return
        try:
            audio_url = await self.speech.synthesize(text)
        except RuntimeError as e:
            logger.error(f"Speech generation failed: {e}")
            return
        self.effects.append(Effect(kind="audio", value=audio_url))


def screen_payload(session: TerminalSession) -> Dict:
    """JSON-ready snapshot of the scrollback."""
    return {
        "type": "screen",
        "menu": session.current_menu.value,
        "lines": [line.model_dump(mode="json") for line in session.lines],
    }
