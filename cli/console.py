"""Interactive terminal menu driving the raffle ledger."""

from __future__ import annotations

import os
import subprocess
from typing import Callable, Optional

from core import get_logger
from core.constants import ConsoleDefaults
from services.raffle import Raffle
from utils.performance import PerformanceMonitor

from .error_handler import report_errors
from .messages import (
    CHOICE_PROMPT,
    INVALID_CHOICE,
    PURCHASE_PROMPT,
    format_draw_opened,
    format_draw_result,
    format_menu,
    format_purchase,
)

logger = get_logger(__name__)


def clear_terminal() -> None:
    """Clear the terminal with the platform's own command."""
    command = ["cmd", "/c", "cls"] if os.name == "nt" else ["clear"]
    try:
        subprocess.run(command, check=False)
    except OSError as e:
        logger.debug(f"Could not clear terminal: {e}")


class RaffleConsole:
    """Menu loop: reads choices, calls the ledger, prints the outcome."""

    def __init__(
        self,
        raffle: Raffle,
        reader: Callable[[str], str] = input,
        writer: Callable[[str], None] = print,
        clear_screen: bool = True,
        monitor: Optional[PerformanceMonitor] = None,
        metrics_textfile: Optional[str] = None,
    ) -> None:
        self.raffle = raffle
        self.reader = reader
        self.writer = writer
        self.clear_screen = clear_screen
        self.monitor = monitor
        self.metrics_textfile = metrics_textfile
        self.actions = {
            "1": self.start_new_draw,
            "2": self.buy_tickets,
            "3": self.run_raffle,
        }

    def write(self, text: str = "") -> None:
        self.writer(text)

    def clear(self) -> None:
        if self.clear_screen:
            clear_terminal()

    def pause(self) -> None:
        self.reader(ConsoleDefaults.PAUSE_PROMPT)

    def show_menu(self) -> None:
        self.clear()
        for line in format_menu(self.raffle.status()):
            self.write(line)

    def handle_choice(self, choice: str) -> bool:
        """Run one menu choice.

        Returns:
            False when the user asked to exit, True otherwise
        """
        choice = choice.strip()
        if choice == "4":
            return False

        action = self.actions.get(choice)
        if action is None:
            self.write(INVALID_CHOICE)
            return True

        self.clear()
        action()
        self.pause()
        return True

    def run(self) -> None:
        """Loop until exit, end of input or interrupt."""
        try:
            while True:
                self.show_menu()
                if not self.handle_choice(self.reader(CHOICE_PROMPT)):
                    break
        except (EOFError, KeyboardInterrupt):
            self.write()
        logger.info("Console closed")

    @report_errors
    def start_new_draw(self) -> None:
        pot_size = self.raffle.open_draw()
        self.write(format_draw_opened(pot_size))

    @report_errors
    def buy_tickets(self) -> None:
        # Reject before prompting when no draw is open
        self.raffle.ensure_open("purchase")
        raw_input = self.reader(PURCHASE_PROMPT)
        result = self.raffle.register_purchase(raw_input)
        for line in format_purchase(result):
            self.write(line)

    @report_errors
    def run_raffle(self) -> None:
        if self.raffle.open:
            self.write("Running Raffle..")
        result = self.raffle.settle_draw()
        for line in format_draw_result(result):
            self.write(line)
        if self.monitor:
            self.monitor.write_textfile(self.metrics_textfile)
