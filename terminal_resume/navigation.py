"""
Navigation state for a terminal session.

The current view is always the top of the history stack, and the bottom of
the stack is always the main menu.
"""

from enum import Enum
from typing import List, NamedTuple, Optional


class Menu(str, Enum):
    MAIN = "main"
    HELP = "help"
    DIRECTORY = "directory"
    CONTACT = "contact"
    EXPERIENCE = "experience"
    SKILLS = "skills"
    PROJECTS = "projects"
    EDUCATION = "education"
    ABOUT = "about"


SECTION_MENUS = (Menu.EXPERIENCE, Menu.SKILLS, Menu.PROJECTS, Menu.EDUCATION, Menu.ABOUT)


class View(NamedTuple):
    """What the terminal is showing: a menu, a listing or a single file."""
    menu: Menu
    directory: Optional[str] = None
    filename: Optional[str] = None

    @property
    def is_listing(self) -> bool:
        return self.menu is Menu.DIRECTORY and self.filename is None

    @property
    def displaying_content(self) -> bool:
        return self.filename is not None or self.menu in SECTION_MENUS


MAIN_VIEW = View(Menu.MAIN)


class NavigationState:
    """History stack of views."""

    def __init__(self):
        self.history: List[View] = [MAIN_VIEW]

    @property
    def current(self) -> View:
        return self.history[-1]

    @property
    def current_directory(self) -> Optional[str]:
        return self.current.directory

    def push(self, view: View):
        self.history.append(view)

    def reset(self):
        """Back to a history holding only the main menu."""
        self.history = [MAIN_VIEW]

    def pop(self) -> bool:
        """Drop the current view. False (and no change) when already at the bottom."""
        if len(self.history) <= 1:
            return False
        self.history.pop()
        return True
