"""
Interactive demo for slotgrid.
Spin a session from the keyboard and watch charms reshape the grid.
"""

import logging
import random
import sys
from dataclasses import replace

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_grid, render_match_summary
from effects import CHARM_EFFECTS
from slotgrid import SlotSession, SpinResult


class InteractiveDemo:
    """Interactive slot session driven by single key presses."""

    def __init__(self, session: SlotSession) -> None:
        self.session = session
        self.console = Console()
        self.last_result: SpinResult | None = None
        self.status_message = "Ready"

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        mods = self.session.modifiers()
        status = Text()
        status.append("Grid: ", style="bold")
        status.append(f"{mods.grid_size}   ")
        status.append("Luck: ", style="bold")
        status.append(f"{self.session.base.luck:g} (+charms {mods.luck - self.session.base.luck:g})   ")
        status.append("Coins: ", style="bold")
        status.append(f"{self.session.coins:.2f}\n")
        status.append("Charms: ", style="bold")
        status.append(f"{', '.join(self.session.charms) or 'none'}\n\n")

        if self.last_result is not None:
            result = self.last_result
            status.append(Text.from_ansi(render_grid(result.grid, result.matches)))
            status.append("\n\n")
            status.append(Text.from_ansi(render_match_summary(result.matches) or "No wins"))
            status.append("\n\n")
            status.append("Payout: ", style="bold")
            status.append(f"{result.payout:.2f}")
            if result.special is not None:
                status.append(f"  [{result.special.value}]", style="bold red")
            status.append("\n\n")

        status.append("Keys:\n", style="bold cyan")
        status.append("  SPACE - Spin\n")
        status.append("  + / - - Change base luck\n")
        status.append("  1-8   - Toggle a charm\n")
        status.append("  Q     - Quit\n\n")
        for i, charm_id in enumerate(CHARM_EFFECTS, start=1):
            marker = "*" if charm_id in self.session.charms else " "
            status.append(f"  {i}{marker} {charm_id}\n", style="dim")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Slotgrid Interactive Demo", border_style="green", width=80)

    def toggle_charm(self, index: int) -> None:
        charms = list(CHARM_EFFECTS)
        if not 0 <= index < len(charms):
            self.status_message = f"No charm #{index + 1}"
            return
        charm_id = charms[index]
        if self.session.unequip(charm_id):
            self.status_message = f"Unequipped {charm_id}"
        elif self.session.equip(charm_id):
            self.status_message = f"Equipped {charm_id}"
        else:
            self.status_message = f"Cannot equip {charm_id}: all {self.session.max_charms} slots used"

    def change_luck(self, delta: float) -> None:
        base = self.session.base
        self.session.base = replace(base, luck=max(0.0, base.luck + delta))
        self.status_message = f"Base luck is now {self.session.base.luck:g}"

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    key = readchar.readkey()

                    if key.lower() == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key == " ":
                        self.last_result = self.session.spin()
                        self.status_message = f"Spun: {len(self.last_result.matches)} winning patterns"
                    elif key == "+":
                        self.change_luck(1)
                    elif key == "-":
                        self.change_luck(-1)
                    elif key.isdigit():
                        self.toggle_charm(int(key) - 1)
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


if __name__ == "__main__":
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else None
    if len(sys.argv) > 2 and sys.argv[2] == "sublime":
        # Running from IDE - spin once and print
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
        session = SlotSession(rng=random.Random(seed))
        result = session.spin()
        print(render_grid(result.grid, result.matches))
        print(render_match_summary(result.matches))
    else:
        InteractiveDemo(SlotSession(rng=random.Random(seed))).run()
